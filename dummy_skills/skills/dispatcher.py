"""Synchronous skill dispatcher.

Resolves a skill name against a SkillRegistry and runs the simulated
work to completion before returning. Every outcome, including an
unknown name, is reported as a StatusCode; nothing is raised across
the dispatch boundary.
"""

import logging
import time
from collections.abc import Callable

from dummy_skills.skills.base import SkillRegistry, StatusCode

logger = logging.getLogger(__name__)


def portable_sleep(milliseconds: int) -> None:
    """Block the calling thread for the given number of milliseconds.

    Raises:
        ValueError: If milliseconds is negative
    """
    if milliseconds < 0:
        raise ValueError(f"Cannot sleep for a negative duration: {milliseconds}ms")
    time.sleep(milliseconds / 1000)


class SkillDispatcher:
    """Dispatch skills by name and return their status.

    Usage:
        dispatcher = SkillDispatcher(default_registry())
        status = dispatcher.execute("ConditionTrue")  # StatusCode.SUCCESS
    """

    def __init__(
        self,
        registry: SkillRegistry,
        simulate_delay: bool = False,
        sleep: Callable[[int], None] = portable_sleep,
    ):
        """Initialize the dispatcher.

        Args:
            registry: Registry to resolve skill names against
            simulate_delay: Sleep for each skill's duration when True
            sleep: Primitive used to wait, takes milliseconds
        """
        self.registry = registry
        self.simulate_delay = simulate_delay
        self._sleep = sleep

    def execute(self, name: str) -> StatusCode:
        """Execute a skill by name.

        Args:
            name: Skill name (exact, case-sensitive)

        Returns:
            The skill's configured outcome, or ERROR if the name is not
            registered or the wait primitive failed
        """
        if not isinstance(name, str):
            raise TypeError(f"Skill name must be a string, got {type(name).__name__}")

        logger.info(f"Executing the skill: {name}")

        descriptor = self.registry.lookup(name)
        if descriptor is None:
            logger.warning(f"Node {name} not known")
            return StatusCode.ERROR

        if self.simulate_delay and descriptor.duration_ms > 0:
            try:
                self._sleep(descriptor.duration_ms)
            except Exception as e:
                logger.error(f"Skill {name} wait of {descriptor.duration_ms}ms failed: {e}")
                return StatusCode.ERROR

        return descriptor.outcome
