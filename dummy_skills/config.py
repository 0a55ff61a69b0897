"""
Dummy skills configuration management.

Loads configuration from:
1. Environment variables (DUMMY_SKILLS_* prefix)
2. Config files (dummy-skills.yml, dummy-skills.yaml)
3. Defaults
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from dummy_skills.skills.base import (
    DEFAULT_SKILLS,
    SkillConfigError,
    SkillDescriptor,
    SkillRegistry,
    StatusCode,
)

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = ("dummy-skills.yml", "dummy-skills.yaml")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class SkillSpec(BaseModel):
    """A skill entry as written in a config file."""

    name: str
    outcome: StatusCode
    duration_ms: int = Field(default=0, ge=0)
    description: str = ""

    @field_validator("outcome", mode="before")
    @classmethod
    def parse_outcome(cls, value: Any) -> Any:
        """Accept status names (any case) as well as codes."""
        if isinstance(value, str):
            try:
                return StatusCode[value.strip().upper()]
            except KeyError:
                raise ValueError(f"unknown status {value!r}") from None
        return value

    @field_validator("outcome")
    @classmethod
    def outcome_is_terminal(cls, value: StatusCode) -> StatusCode:
        if not value.is_terminal:
            raise ValueError("outcome must be SUCCESS, FAILURE or ERROR")
        return value

    def to_descriptor(self) -> SkillDescriptor:
        return SkillDescriptor(
            name=self.name,
            outcome=self.outcome,
            duration_ms=self.duration_ms,
            description=self.description,
        )


def _default_skills() -> list[dict[str, Any]]:
    return [descriptor.to_dict() for descriptor in DEFAULT_SKILLS]


TRUE_STRINGS = ("1", "true", "yes", "on")
FALSE_STRINGS = ("0", "false", "no", "off")


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in TRUE_STRINGS


def _coerce_bool(value: Any) -> Any:
    """Turn quoted booleans from YAML into bools; leave anything else for validate()."""
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_STRINGS:
            return True
        if text in FALSE_STRINGS:
            return False
    return value


@dataclass
class DispatchConfig:
    """Main dispatcher configuration."""

    simulate_delay: bool = False
    log_level: str = "INFO"
    tick_interval_ms: int = 100
    skills: list[dict[str, Any]] = field(default_factory=_default_skills)

    # Path the config was loaded from, if any
    source: str | None = field(default=None, repr=False)

    @classmethod
    def load(cls, config_path: str | None = None) -> "DispatchConfig":
        """Load configuration from file and environment."""
        config = cls()

        # Check DUMMY_SKILLS_CONFIG environment variable first
        if not config_path:
            config_path = os.environ.get("DUMMY_SKILLS_CONFIG")

        if config_path and not Path(config_path).exists():
            raise SkillConfigError(
                f"Config file not found: {config_path}",
                details={"path": config_path},
            )

        paths_to_try = [config_path]

        # Also search up from CWD
        cwd = Path.cwd()
        for parent in [cwd] + list(cwd.parents)[:5]:
            for filename in CONFIG_FILENAMES:
                paths_to_try.append(str(parent / filename))

        for path in paths_to_try:
            if path and Path(path).exists():
                config = cls._load_from_file(path)
                break

        # Override with environment variables
        config._load_from_env()

        return config

    @classmethod
    def _load_from_file(cls, path: str) -> "DispatchConfig":
        """Load configuration from YAML file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise SkillConfigError(f"Invalid YAML in {path}: {e}", details={"path": path}) from e

        if not isinstance(data, dict):
            raise SkillConfigError(
                f"Config file {path} must contain a mapping",
                details={"path": path},
            )

        config = cls(source=path)

        if "simulate_delay" in data:
            config.simulate_delay = _coerce_bool(data["simulate_delay"])
        if "log_level" in data:
            config.log_level = str(data["log_level"]).upper()
        if "tick_interval_ms" in data:
            config.tick_interval_ms = data["tick_interval_ms"]
        if "skills" in data:
            skills = data["skills"]
            if not isinstance(skills, list):
                raise SkillConfigError(
                    f"'skills' in {path} must be a list",
                    details={"path": path},
                )
            config.skills = skills

        logger.debug(f"Loaded config from {path}")
        return config

    def _load_from_env(self) -> None:
        """Override configuration from environment variables."""
        if os.environ.get("DUMMY_SKILLS_SIMULATE_DELAY"):
            self.simulate_delay = _parse_bool(os.environ["DUMMY_SKILLS_SIMULATE_DELAY"])

        if os.environ.get("DUMMY_SKILLS_LOG_LEVEL"):
            self.log_level = os.environ["DUMMY_SKILLS_LOG_LEVEL"].upper()

    def skill_specs(self) -> list[SkillSpec]:
        """Validate the configured skill entries.

        Raises:
            SkillConfigError: If an entry is malformed
        """
        specs = []
        for index, entry in enumerate(self.skills):
            try:
                specs.append(SkillSpec.model_validate(entry))
            except ValidationError as e:
                raise SkillConfigError(
                    f"Invalid skill entry #{index}: {e}",
                    details={"index": index, "entry": entry, "errors": e.errors()},
                ) from e
        return specs

    def build_registry(self) -> SkillRegistry:
        """Build the skill registry described by this configuration.

        Raises:
            SkillConfigError: If an entry is malformed or names repeat
        """
        return SkillRegistry(spec.to_descriptor() for spec in self.skill_specs())

    def validate(self) -> list[str]:
        """
        Validate configuration and return list of errors.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []

        if not isinstance(self.simulate_delay, bool):
            errors.append(f"simulate_delay must be true or false: {self.simulate_delay!r}")

        if self.log_level not in LOG_LEVELS:
            errors.append(f"log_level must be one of {', '.join(LOG_LEVELS)}: {self.log_level}")

        if (
            isinstance(self.tick_interval_ms, bool)
            or not isinstance(self.tick_interval_ms, int)
            or self.tick_interval_ms <= 0
        ):
            errors.append(f"tick_interval_ms must be a positive integer: {self.tick_interval_ms}")

        try:
            self.build_registry()
        except SkillConfigError as e:
            errors.append(str(e))

        return errors

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "simulate_delay": self.simulate_delay,
            "log_level": self.log_level,
            "tick_interval_ms": self.tick_interval_ms,
            "skills": self.skills,
        }

    def save(self, path: str = "dummy-skills.yml") -> None:
        """Save configuration to file."""
        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
