"""Tests for the synchronous skill dispatcher."""

import logging
from unittest.mock import MagicMock, patch

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from dummy_skills.skills.base import SkillDescriptor, SkillRegistry, StatusCode, default_registry
from dummy_skills.skills.dispatcher import SkillDispatcher, portable_sleep
from tests.strategies import descriptor_list_strategy


class TestExecute:
    """Tests for SkillDispatcher.execute."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Action1SecondSuccess", StatusCode.SUCCESS),
            ("Action1SecondFailure", StatusCode.FAILURE),
            ("ConditionTrue", StatusCode.SUCCESS),
            ("ConditionFalse", StatusCode.FAILURE),
        ],
    )
    def test_registered_skill_returns_outcome(self, dispatcher, name, expected):
        assert dispatcher.execute(name) is expected

    @pytest.mark.unit
    def test_unknown_skill_returns_error(self, dispatcher, caplog):
        with caplog.at_level(logging.INFO):
            status = dispatcher.execute("NoSuchSkill")

        assert status is StatusCode.ERROR
        assert "Executing the skill: NoSuchSkill" in caplog.text
        assert "Node NoSuchSkill not known" in caplog.text

    @pytest.mark.unit
    def test_empty_name_returns_error(self, dispatcher):
        assert dispatcher.execute("") is StatusCode.ERROR

    @pytest.mark.unit
    @pytest.mark.parametrize("name", ["conditiontrue", "CONDITIONTRUE", "conditionTrue"])
    def test_case_variants_return_error(self, dispatcher, name):
        assert dispatcher.execute(name) is StatusCode.ERROR

    @pytest.mark.unit
    def test_trace_line_for_known_skill(self, dispatcher, caplog):
        with caplog.at_level(logging.INFO):
            dispatcher.execute("ConditionTrue")

        assert "Executing the skill: ConditionTrue" in caplog.text
        assert "not known" not in caplog.text

    @pytest.mark.unit
    def test_repeated_execution_is_stable(self, dispatcher):
        results = {dispatcher.execute("ConditionTrue") for _ in range(20)}
        assert results == {StatusCode.SUCCESS}

    @pytest.mark.unit
    def test_non_string_name_raises_type_error(self, dispatcher):
        with pytest.raises(TypeError):
            dispatcher.execute(None)

    @pytest.mark.unit
    def test_configured_error_outcome(self, custom_registry):
        dispatcher = SkillDispatcher(custom_registry)
        assert dispatcher.execute("Break") is StatusCode.ERROR


class TestSimulatedDelay:
    """Tests for the simulated execution delay."""

    @pytest.mark.unit
    def test_delay_disabled_by_default(self, registry):
        sleep = MagicMock()
        dispatcher = SkillDispatcher(registry, sleep=sleep)

        dispatcher.execute("Action1SecondSuccess")

        sleep.assert_not_called()

    @pytest.mark.unit
    def test_delay_uses_descriptor_duration(self, registry):
        sleep = MagicMock()
        dispatcher = SkillDispatcher(registry, simulate_delay=True, sleep=sleep)

        assert dispatcher.execute("Action1SecondFailure") is StatusCode.FAILURE
        sleep.assert_called_once_with(1000)

    @pytest.mark.unit
    def test_zero_duration_skips_sleep(self, registry):
        sleep = MagicMock()
        dispatcher = SkillDispatcher(registry, simulate_delay=True, sleep=sleep)

        dispatcher.execute("ConditionTrue")

        sleep.assert_not_called()

    @pytest.mark.unit
    def test_unknown_skill_never_sleeps(self, registry):
        sleep = MagicMock()
        dispatcher = SkillDispatcher(registry, simulate_delay=True, sleep=sleep)

        assert dispatcher.execute("NoSuchSkill") is StatusCode.ERROR
        sleep.assert_not_called()

    @pytest.mark.unit
    def test_sleep_failure_surfaces_as_error(self, registry, caplog):
        sleep = MagicMock(side_effect=OSError("interrupted"))
        dispatcher = SkillDispatcher(registry, simulate_delay=True, sleep=sleep)

        with caplog.at_level(logging.ERROR):
            status = dispatcher.execute("Action1SecondSuccess")

        assert status is StatusCode.ERROR
        assert "interrupted" in caplog.text

    @pytest.mark.unit
    def test_portable_sleep_converts_to_seconds(self):
        with patch("dummy_skills.skills.dispatcher.time.sleep") as mock_sleep:
            portable_sleep(250)
        mock_sleep.assert_called_once_with(0.25)

    @pytest.mark.unit
    def test_portable_sleep_rejects_negative(self):
        with pytest.raises(ValueError):
            portable_sleep(-5)


class TestDispatchProperties:
    """Property-based tests for dispatch."""

    @pytest.mark.pbt
    @given(descriptors=descriptor_list_strategy())
    @settings(max_examples=50)
    def test_registered_names_are_deterministic_pbt(self, descriptors):
        """Property: a registered skill always reports its configured outcome."""
        dispatcher = SkillDispatcher(SkillRegistry(descriptors))
        for descriptor in descriptors:
            assert dispatcher.execute(descriptor.name) is descriptor.outcome
            assert dispatcher.execute(descriptor.name) is descriptor.outcome

    @pytest.mark.pbt
    @given(name=st.text(max_size=40))
    @settings(max_examples=100)
    def test_execute_is_total_pbt(self, name):
        """Property: any string yields a StatusCode; unregistered ones yield ERROR."""
        registry = default_registry()
        status = SkillDispatcher(registry).execute(name)

        assert isinstance(status, StatusCode)
        if name in registry:
            assert status is registry.lookup(name).outcome
        else:
            assert status is StatusCode.ERROR

    @pytest.mark.pbt
    @given(names=st.lists(st.text(max_size=10), max_size=5, unique=True))
    @settings(max_examples=30)
    def test_unregistered_names_error_pbt(self, names):
        """Property: names outside the registry always yield ERROR."""
        registry = SkillRegistry([SkillDescriptor("__only__", StatusCode.SUCCESS)])
        dispatcher = SkillDispatcher(registry)
        for name in names:
            if name != "__only__":
                assert dispatcher.execute(name) is StatusCode.ERROR
