"""Accessibility guard configuration.

Loads and validates a11y-guard.config.json configuration files.
"""

import fnmatch
import json
import os
from collections.abc import Sequence
from datetime import date
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError
from .guard_logging import LogCategory, get_category_logger
from .models import RuleGroup, RuleId, Severity

logger = get_category_logger(LogCategory.CONFIG)

CONFIG_FILENAME = "a11y-guard.config.json"
CONFIG_ENV_VAR = "A11Y_GUARD_CONFIG"

DEFAULT_MIN_LABEL_LENGTH = 2


class EvaluationOptions(BaseModel):
    """Tunable inputs of a single evaluation."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    # A label must be strictly longer than this to count as meaningful
    min_label_length: int = Field(
        default=DEFAULT_MIN_LABEL_LENGTH,
        ge=0,
        alias="minLabelLength",
        description="Labels must be longer than this many characters",
    )


class SeverityThresholds(BaseModel):
    """Severity assigned to violations, per rule category."""

    model_config = ConfigDict(populate_by_name=True)

    size: Severity = Severity.FAIL
    label: Severity = Severity.FAIL
    trait: Severity = Severity.FAIL
    duplication: Severity = Severity.FAIL

    @field_validator("size", "label", "trait", "duplication", mode="before")
    @classmethod
    def normalize_severity(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    def for_category(self, category: str) -> Severity:
        """Get severity for a rule category, FAIL if unknown."""
        return getattr(self, category, Severity.FAIL)


class IgnoreRule(BaseModel):
    """A rule to ignore with rationale."""

    rule: RuleId
    reason: str
    elements: list[str] = Field(
        default_factory=list,
        description="fnmatch patterns on element descriptions; empty matches all",
    )
    expiry: date | None = None

    @field_validator("rule", mode="before")
    @classmethod
    def parse_rule(cls, v: Any) -> RuleId:
        return RuleId.parse(v)

    @field_validator("reason")
    @classmethod
    def validate_reason(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Ignore rules need a reason")
        return v.strip()

    def is_active(self, today: date | None = None) -> bool:
        """Check whether the ignore has not yet expired."""
        if self.expiry is None:
            return True
        return (today or date.today()) <= self.expiry

    def matches(self, descriptions: Sequence[str]) -> bool:
        """Check whether any of the element descriptions is covered."""
        if not self.elements:
            return True
        return any(
            fnmatch.fnmatch(description, pattern)
            for description in descriptions
            for pattern in self.elements
        )


def resolve_rule_ids(values: Sequence["str | RuleId | RuleGroup"]) -> list[RuleId]:
    """Expand rule ids and group names into rule ids in catalogue order.

    Raises:
        ValueError: If a value is neither a rule id nor a group name.
    """
    selected: set[RuleId] = set()
    for value in values:
        if isinstance(value, RuleGroup):
            selected |= value.rule_ids
            continue
        if isinstance(value, str) and value in {group.value for group in RuleGroup}:
            selected |= RuleGroup(value).rule_ids
            continue
        selected.add(RuleId.parse(value))
    return [rule_id for rule_id in RuleId if rule_id in selected]


class A11yGuardConfig(BaseModel):
    """Complete accessibility guard configuration."""

    model_config = ConfigDict(populate_by_name=True)

    rules: list[RuleId] = Field(default_factory=lambda: list(RuleId))
    options: EvaluationOptions = Field(default_factory=EvaluationOptions)
    severity_thresholds: SeverityThresholds = Field(
        default_factory=SeverityThresholds, alias="severityThresholds"
    )
    ignore_rules: list[IgnoreRule] = Field(
        default_factory=list, alias="ignoreRules"
    )

    @field_validator("rules", mode="before")
    @classmethod
    def expand_rules(cls, v: Any) -> list[RuleId]:
        if isinstance(v, str):
            v = [v]
        return resolve_rule_ids(v)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "A11yGuardConfig":
        """Create from dictionary.

        Raises:
            ConfigError: If the data fails validation.
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(
                "Invalid accessibility guard configuration",
                reason=str(e),
            ) from e

    def is_rule_ignored(
        self,
        rule_id: RuleId,
        descriptions: Sequence[str] = (),
    ) -> bool:
        """Check if a rule is ignored for the given elements.

        Args:
            rule_id: The rule to check.
            descriptions: Descriptions of the elements the violation names.

        Returns:
            True if an active ignore rule covers the violation.
        """
        for ignore in self.ignore_rules:
            if ignore.rule is not rule_id:
                continue
            if not ignore.is_active():
                continue
            if ignore.matches(descriptions):
                return True
        return False


class A11yConfigLoader:
    """Loader for accessibility guard configuration."""

    def __init__(self, project_path: Path | None = None):
        """Initialize the config loader.

        Args:
            project_path: Path to the project root. Defaults to current directory.
        """
        self.project_path = Path(project_path) if project_path else Path.cwd()

    def load(self, config_path: Path | None = None) -> A11yGuardConfig:
        """Load accessibility guard configuration.

        Precedence (highest to lowest):
        1. Explicit config_path
        2. Environment variable A11Y_GUARD_CONFIG
        3. a11y-guard.config.json in project root
        4. Default configuration

        Raises:
            ConfigError: If an explicit config_path does not exist, or a
                file is found but is not a valid configuration.
        """
        if config_path is not None:
            config_path = Path(config_path)
            if not config_path.exists():
                raise ConfigError(
                    "Configuration file not found", path=str(config_path)
                )
            return self._load_from_file(config_path)

        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            env_config_path = Path(env_path)
            if env_config_path.exists():
                return self._load_from_file(env_config_path)
            logger.warning(f"{CONFIG_ENV_VAR} points to missing file: {env_path}")

        project_config = self.project_path / CONFIG_FILENAME
        if project_config.exists():
            return self._load_from_file(project_config)

        logger.debug("No accessibility guard config found, using defaults")
        return A11yGuardConfig()

    def _load_from_file(self, config_path: Path) -> A11yGuardConfig:
        """Load configuration from a file.

        Raises:
            ConfigError: If the file is not valid JSON or fails validation.
        """
        logger.debug(f"Loading accessibility guard config from {config_path}")
        try:
            data = json.loads(config_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(
                "Could not read configuration file",
                path=str(config_path),
                reason=str(e),
            ) from e
        if not isinstance(data, dict):
            raise ConfigError(
                "Configuration root must be a JSON object", path=str(config_path)
            )
        try:
            return A11yGuardConfig.from_dict(data)
        except ConfigError as e:
            e.details = {**(e.details or {}), "path": str(config_path)}
            raise

    def save(self, config: A11yGuardConfig, config_path: Path | None = None) -> Path:
        """Save configuration to a file.

        Args:
            config: Configuration to save.
            config_path: Optional path. Defaults to project root.

        Returns:
            Path where config was saved.
        """
        if config_path is None:
            config_path = self.project_path / CONFIG_FILENAME

        content = json.dumps(config.to_dict(), indent=2)
        config_path.write_text(content, encoding="utf-8")
        logger.info(f"Saved accessibility guard config to {config_path}")
        return config_path


def load_config(
    project_path: Path | None = None,
    config_path: Path | None = None,
) -> A11yGuardConfig:
    """Convenience function to load accessibility guard configuration."""
    loader = A11yConfigLoader(project_path)
    return loader.load(config_path)
