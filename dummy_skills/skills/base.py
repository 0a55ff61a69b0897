"""Base skill types for the dummy skills dispatcher.

This module provides the status model and the read-only registry that
the dispatchers consult. Skills here are stand-ins: each one is a name
bound to a predetermined outcome and a simulated duration.

Skill Lifecycle:
    1. Registration: descriptors are handed to SkillRegistry once
    2. Lookup: the dispatcher resolves a name to its descriptor
    3. Execution: the simulated work runs (optionally sleeping)
    4. Result: a StatusCode is returned to the caller
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType
from typing import Any

logger = logging.getLogger(__name__)


class StatusCode(IntEnum):
    """Status returned by a skill dispatch."""

    RUNNING = 0
    SUCCESS = 1
    FAILURE = 2
    ERROR = 3  # Skill not known, or the execution primitive failed

    @property
    def is_terminal(self) -> bool:
        """True for every status except RUNNING."""
        return self is not StatusCode.RUNNING


class SkillError(Exception):
    """Exception raised by skill setup."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.details = details or {}


class SkillConfigError(SkillError):
    """Raised when skill descriptors or their configuration are invalid."""


@dataclass(frozen=True)
class SkillDescriptor:
    """Definition of a simulated skill.

    Attributes:
        name: Exact, case-sensitive skill name
        outcome: Terminal status the skill reports
        duration_ms: Simulated execution time in milliseconds
        description: Human-readable description
    """

    name: str
    outcome: StatusCode
    duration_ms: int = 0
    description: str = ""

    def __post_init__(self):
        if not isinstance(self.name, str):
            raise SkillConfigError(
                f"Skill name must be a string, got {type(self.name).__name__}",
                details={"name": self.name},
            )
        # Accept raw ints from config files
        try:
            outcome = StatusCode(self.outcome)
        except ValueError as e:
            raise SkillConfigError(
                f"Invalid outcome for skill {self.name}: {self.outcome!r}",
                details={"name": self.name, "outcome": self.outcome},
            ) from e
        if not outcome.is_terminal:
            raise SkillConfigError(
                f"Skill {self.name} cannot have outcome {outcome.name}",
                details={"name": self.name, "outcome": outcome.name},
            )
        if isinstance(self.duration_ms, bool) or not isinstance(self.duration_ms, int):
            raise SkillConfigError(
                f"duration_ms for skill {self.name} must be an integer",
                details={"name": self.name, "duration_ms": self.duration_ms},
            )
        if self.duration_ms < 0:
            raise SkillConfigError(
                f"duration_ms for skill {self.name} must be >= 0, got {self.duration_ms}",
                details={"name": self.name, "duration_ms": self.duration_ms},
            )
        object.__setattr__(self, "outcome", outcome)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "outcome": self.outcome.name,
            "duration_ms": self.duration_ms,
            "description": self.description,
        }


class SkillRegistry:
    """Read-only registry of skill descriptors.

    Descriptors are registered once at construction. There is no way to
    add or remove a skill afterwards, so the registry can be shared
    between threads without locking.

    Usage:
        registry = SkillRegistry([
            SkillDescriptor("ConditionTrue", StatusCode.SUCCESS),
        ])
        descriptor = registry.lookup("ConditionTrue")
    """

    def __init__(self, descriptors: Iterable[SkillDescriptor] = ()):
        """Initialize the registry.

        Args:
            descriptors: Skill descriptors to register

        Raises:
            SkillConfigError: If two descriptors share a name
        """
        skills: dict[str, SkillDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.name in skills:
                raise SkillConfigError(
                    f"Duplicate skill name: {descriptor.name}",
                    details={"name": descriptor.name},
                )
            skills[descriptor.name] = descriptor
        self._skills = MappingProxyType(skills)
        logger.debug(f"Registered {len(skills)} skills: {list(skills)}")

    def lookup(self, name: str) -> SkillDescriptor | None:
        """Get a skill descriptor by exact name.

        Args:
            name: Skill name

        Returns:
            SkillDescriptor if found
        """
        return self._skills.get(name)

    def list_skills(self) -> list[str]:
        """List registered skill names.

        Returns:
            List of skill names in registration order
        """
        return list(self._skills.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._skills

    def __len__(self) -> int:
        return len(self._skills)

    def __iter__(self) -> Iterator[SkillDescriptor]:
        return iter(self._skills.values())

    def get_info(self) -> dict[str, Any]:
        """Get information about all registered skills.

        Returns:
            Dict with skill information
        """
        return {
            "skills": [descriptor.to_dict() for descriptor in self._skills.values()],
            "total_skills": len(self._skills),
        }


DEFAULT_SKILLS: tuple[SkillDescriptor, ...] = (
    SkillDescriptor(
        "Action1SecondSuccess",
        StatusCode.SUCCESS,
        1000,
        "Action that succeeds after one second",
    ),
    SkillDescriptor(
        "Action1SecondFailure",
        StatusCode.FAILURE,
        1000,
        "Action that fails after one second",
    ),
    SkillDescriptor("ConditionTrue", StatusCode.SUCCESS, 0, "Condition that holds"),
    SkillDescriptor("ConditionFalse", StatusCode.FAILURE, 0, "Condition that does not hold"),
)


def default_registry() -> SkillRegistry:
    """Create a registry holding the built-in skills."""
    return SkillRegistry(DEFAULT_SKILLS)
