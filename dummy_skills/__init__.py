"""
Dummy Skills - stand-in skill implementations for orchestrator testing.

This package provides:
- A read-only registry mapping skill names to simulated outcomes
- A synchronous dispatcher returning RUNNING/SUCCESS/FAILURE/ERROR codes
- A tick/halt dispatcher for long-running skills with early termination
- YAML configuration with environment overrides
- A command-line interface for invoking skills by hand
"""

__version__ = "0.1.0"

from dummy_skills.config import DispatchConfig
from dummy_skills.skills import (
    SkillDescriptor,
    SkillDispatcher,
    SkillRegistry,
    SkillState,
    StatusCode,
    TickingDispatcher,
    default_registry,
)

__all__ = [
    "DispatchConfig",
    "SkillDescriptor",
    "SkillDispatcher",
    "SkillRegistry",
    "SkillState",
    "StatusCode",
    "TickingDispatcher",
    "default_registry",
    "__version__",
]
