"""Pytest fixtures for dummy skills tests."""

import pytest
from pathlib import Path

from dummy_skills.config import DispatchConfig
from dummy_skills.skills.base import (
    SkillDescriptor,
    SkillRegistry,
    StatusCode,
    default_registry,
)
from dummy_skills.skills.dispatcher import SkillDispatcher
from dummy_skills.skills.ticking import TickingDispatcher


class FakeClock:
    """Manually advanced monotonic clock, in seconds.

    Tracks whole milliseconds so elapsed times compare exactly.
    """

    def __init__(self, start_ms: int = 100_000):
        self.now_ms = start_ms

    def __call__(self) -> float:
        return self.now_ms / 1000

    def advance_ms(self, milliseconds: int) -> None:
        self.now_ms += milliseconds


@pytest.fixture
def clean_env(monkeypatch, tmp_path: Path):
    """Keep tests independent of the caller's environment and CWD."""
    for var in ("DUMMY_SKILLS_CONFIG", "DUMMY_SKILLS_SIMULATE_DELAY", "DUMMY_SKILLS_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def registry() -> SkillRegistry:
    """Registry holding the built-in skills."""
    return default_registry()


@pytest.fixture
def dispatcher(registry: SkillRegistry) -> SkillDispatcher:
    """Dispatcher with delays disabled."""
    return SkillDispatcher(registry)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def ticking(registry: SkillRegistry, clock: FakeClock) -> TickingDispatcher:
    """Ticking dispatcher driven by a fake clock."""
    return TickingDispatcher(registry, clock=clock)


@pytest.fixture
def custom_registry() -> SkillRegistry:
    """Registry with a skill for every terminal outcome."""
    return SkillRegistry([
        SkillDescriptor("Succeed", StatusCode.SUCCESS, 50),
        SkillDescriptor("Fail", StatusCode.FAILURE, 50),
        SkillDescriptor("Break", StatusCode.ERROR, 0),
    ])


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Config file with two custom skills and delays enabled."""
    path = tmp_path / "custom.yml"
    path.write_text(
        "simulate_delay: true\n"
        "log_level: debug\n"
        "tick_interval_ms: 5\n"
        "skills:\n"
        "  - name: OpenGripper\n"
        "    outcome: success\n"
        "    duration_ms: 20\n"
        "    description: Opens the gripper\n"
        "  - name: IsBatteryLow\n"
        "    outcome: FAILURE\n"
    )
    return path


@pytest.fixture
def config() -> DispatchConfig:
    """Default configuration."""
    return DispatchConfig()


# Pytest markers
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "pbt: mark test as property-based test")
    config.addinivalue_line("markers", "integration: mark test as integration test")
