"""Tick/halt skill dispatcher.

A richer alternative to SkillDispatcher: instead of running a skill to
completion in one call, the caller ticks it repeatedly. Each tick
reports RUNNING until the skill's simulated duration has elapsed, then
the terminal outcome. A running skill can be halted early.

State machine per skill instance:

    PENDING -> RUNNING -> {SUCCESS, FAILURE, ERROR}
                  |
                  +-> HALTED   (via halt())

A halted instance ticks as FAILURE; use state() to tell it apart from
a natural failure.
"""

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from dummy_skills.skills.base import SkillDescriptor, SkillRegistry, StatusCode

logger = logging.getLogger(__name__)


class SkillState(str, Enum):
    """Lifecycle state of a ticked skill instance."""

    PENDING = "pending"
    RUNNING = "running"
    SUCCESS = "success"
    FAILURE = "failure"
    ERROR = "error"
    HALTED = "halted"

    @property
    def is_terminal(self) -> bool:
        return self not in (SkillState.PENDING, SkillState.RUNNING)


_STATE_FOR_STATUS = {
    StatusCode.SUCCESS: SkillState.SUCCESS,
    StatusCode.FAILURE: SkillState.FAILURE,
    StatusCode.ERROR: SkillState.ERROR,
}

_STATUS_FOR_STATE = {
    SkillState.RUNNING: StatusCode.RUNNING,
    SkillState.SUCCESS: StatusCode.SUCCESS,
    SkillState.FAILURE: StatusCode.FAILURE,
    SkillState.ERROR: StatusCode.ERROR,
    SkillState.HALTED: StatusCode.FAILURE,
}


@dataclass
class SkillInstance:
    """Progress of one ticked skill.

    Only touched while holding ``lock``.
    """

    descriptor: SkillDescriptor
    state: SkillState = SkillState.PENDING
    started_at: float | None = None
    ticks: int = 0
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


class TickingDispatcher:
    """Dispatch skills one tick at a time, with early halting.

    Usage:
        dispatcher = TickingDispatcher(default_registry())
        while (status := dispatcher.tick("Action1SecondSuccess")) is StatusCode.RUNNING:
            time.sleep(0.1)
    """

    def __init__(
        self,
        registry: SkillRegistry,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the dispatcher.

        Args:
            registry: Registry to resolve skill names against
            clock: Monotonic clock returning seconds
        """
        self.registry = registry
        self._clock = clock
        self._instances: dict[str, SkillInstance] = {}
        self._lock = threading.Lock()

    def _get_or_create(self, descriptor: SkillDescriptor) -> SkillInstance:
        with self._lock:
            instance = self._instances.get(descriptor.name)
            if instance is None:
                instance = SkillInstance(descriptor=descriptor)
                self._instances[descriptor.name] = instance
            return instance

    def tick(self, name: str) -> StatusCode:
        """Advance a skill by one step.

        Args:
            name: Skill name (exact, case-sensitive)

        Returns:
            RUNNING while the skill's duration has not elapsed, then its
            terminal outcome on this and every later tick. ERROR if the
            name is not registered.
        """
        if not isinstance(name, str):
            raise TypeError(f"Skill name must be a string, got {type(name).__name__}")

        descriptor = self.registry.lookup(name)
        if descriptor is None:
            logger.warning(f"Node {name} not known")
            return StatusCode.ERROR

        instance = self._get_or_create(descriptor)
        with instance.lock:
            if instance.state.is_terminal:
                return _STATUS_FOR_STATE[instance.state]

            logger.debug(f"Ticking the skill: {name}")
            now = self._clock()
            if instance.state is SkillState.PENDING:
                logger.info(f"Executing the skill: {name}")
                instance.state = SkillState.RUNNING
                instance.started_at = now
            instance.ticks += 1

            elapsed_ms = (now - instance.started_at) * 1000
            if elapsed_ms >= descriptor.duration_ms:
                instance.state = _STATE_FOR_STATUS[descriptor.outcome]
                logger.info(
                    f"Skill {name} finished with {descriptor.outcome.name} "
                    f"after {instance.ticks} ticks"
                )

            return _STATUS_FOR_STATE[instance.state]

    def halt(self, name: str) -> None:
        """Request early termination of a running skill.

        Halting an unknown, never-ticked or already finished skill is a
        no-op.
        """
        with self._lock:
            instance = self._instances.get(name)
        if instance is None:
            return

        with instance.lock:
            if instance.state is not SkillState.RUNNING:
                return
            logger.info(f"Halting the skill: {name}")
            instance.state = SkillState.HALTED

    def state(self, name: str) -> SkillState | None:
        """Get the state of a skill instance.

        Returns:
            SkillState if the skill has been ticked since the last reset
        """
        with self._lock:
            instance = self._instances.get(name)
        if instance is None:
            return None
        with instance.lock:
            return instance.state

    def reset(self, name: str) -> None:
        """Discard a skill instance so the next tick starts a fresh run."""
        with self._lock:
            self._instances.pop(name, None)

    def running(self) -> list[str]:
        """List names of skills currently running."""
        with self._lock:
            instances = list(self._instances.items())
        result = []
        for name, instance in instances:
            with instance.lock:
                if instance.state is SkillState.RUNNING:
                    result.append(name)
        return result
