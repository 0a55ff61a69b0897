"""Skill dispatch framework.

Skills are named stand-ins for real units of work. Each one reports a
predetermined StatusCode after a simulated duration, which lets a host
orchestrator exercise its handling of every completion status.

Dispatchers:
    - SkillDispatcher: run a skill to completion in one call
    - TickingDispatcher: tick a skill until it finishes, or halt it

Usage:
    from dummy_skills.skills import SkillDispatcher, default_registry

    dispatcher = SkillDispatcher(default_registry())
    status = dispatcher.execute("ConditionFalse")  # StatusCode.FAILURE
"""

from dummy_skills.skills.base import (
    DEFAULT_SKILLS,
    SkillConfigError,
    SkillDescriptor,
    SkillError,
    SkillRegistry,
    StatusCode,
    default_registry,
)
from dummy_skills.skills.dispatcher import (
    SkillDispatcher,
    portable_sleep,
)
from dummy_skills.skills.ticking import (
    SkillInstance,
    SkillState,
    TickingDispatcher,
)

__all__ = [
    # Base types
    "DEFAULT_SKILLS",
    "SkillConfigError",
    "SkillDescriptor",
    "SkillError",
    "SkillRegistry",
    "StatusCode",
    "default_registry",
    # Dispatchers
    "SkillDispatcher",
    "portable_sleep",
    "SkillInstance",
    "SkillState",
    "TickingDispatcher",
]
