"""
Configuration for the stacking-context linter.

Per-rule options are pydantic models (defaults substituted, unknown keys
ignored). The rule table is held in plain dataclasses loaded from a
JSON file shaped like a stylelint config:

    {"rules": {"isolate-on-stack/z-index-range": [true, {"maxZIndex": 50}]}}
"""

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigurationError
from .linter_logging import LogCategory, get_category_logger
from .messages import RULE_NAMESPACE, rule_name
from .models import Severity

logger = get_category_logger(LogCategory.CONFIG)

PATTERN_FIELDS = ("ignore_selectors", "ignore_elements", "ignore_classes", "require_classes")

RECOMMENDED_RULES = (
    "no-redundant-declaration",
    "ineffective-on-background-blend",
    "prefer-over-side-effects",
    "z-index-range",
    "performance-high-descendant-count",
)


def normalize_rule_id(name: str) -> str:
    """Add the rule namespace when it is omitted."""
    name = name.strip()
    if name.startswith(f"{RULE_NAMESPACE}/"):
        return name
    if name.startswith(f"stylelint-plugin-{RULE_NAMESPACE}/"):
        return rule_name(name.split("/", 1)[1])
    return rule_name(name)


class RuleOptions(BaseModel):
    """Options recognized by the rules.

    Each rule reads only the keys it uses.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    severity: Severity | None = Field(default=None)
    max_z_index: int = Field(default=100, alias="maxZIndex")
    max_descendant_count: int = Field(default=50, ge=0, alias="maxDescendantCount")
    ignore_when_stacking_context_exists: bool = Field(
        default=False, alias="ignoreWhenStackingContextExists"
    )
    ignore_selectors: list[str] = Field(default_factory=list, alias="ignoreSelectors")
    ignore_elements: list[str] = Field(default_factory=list, alias="ignoreElements")
    ignore_classes: list[str] = Field(default_factory=list, alias="ignoreClasses")
    require_classes: list[str] = Field(default_factory=list, alias="requireClasses")

    @field_validator("severity", mode="before")
    @classmethod
    def validate_severity(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.lower()
        return v

    @field_validator(*PATTERN_FIELDS, mode="before")
    @classmethod
    def validate_patterns(cls, v: Any) -> list[str]:
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        if not isinstance(v, list):
            raise ValueError("Patterns must be a list")
        for pattern in v:
            if not isinstance(pattern, str):
                raise ValueError("All patterns must be strings")
        return v

    def invalid_patterns(self) -> list[str]:
        """Describe each pattern that fails to compile, once per pattern."""
        problems = []
        seen = set()
        for field_name in PATTERN_FIELDS:
            for pattern in getattr(self, field_name):
                if pattern in seen:
                    continue
                seen.add(pattern)
                try:
                    re.compile(pattern)
                except re.error as e:
                    problems.append(f"invalid regular expression '{pattern}': {e}")
        return problems

    def is_selector_ignored(self, selector: str) -> bool:
        return any(re.search(pattern, selector) for pattern in self.ignore_selectors)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary using the camelCase option names."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


def _anchored(pattern: str, token: str) -> bool:
    return re.fullmatch(pattern, token) is not None


def match_any(patterns: list[str], tokens: list[str]) -> str | None:
    """Return the first token fully matched by any pattern."""
    for token in tokens:
        for pattern in patterns:
            if _anchored(pattern, token):
                return token
    return None


@dataclass
class RuleSetting:
    """Enable flag and raw options for a single rule."""

    enabled: bool = True
    options: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_value(cls, value: Any, rule_id: str = "") -> "RuleSetting":
        """Create a RuleSetting from a config value.

        Accepts `true`/`false`/`null`, `[enabled, options]` or
        `{"enabled": ..., "options": {...}}`.
        """
        if value is None or isinstance(value, bool):
            return cls(enabled=bool(value))
        if isinstance(value, list) and value:
            options = value[1] if len(value) > 1 else {}
            if not isinstance(options, dict):
                raise ConfigurationError(
                    f"Options for rule '{rule_id}' must be an object",
                )
            return cls(enabled=bool(value[0]), options=dict(options))
        if isinstance(value, dict):
            options = value.get("options", {})
            if not isinstance(options, dict):
                raise ConfigurationError(
                    f"Options for rule '{rule_id}' must be an object",
                )
            return cls(enabled=bool(value.get("enabled", True)), options=dict(options))
        raise ConfigurationError(
            f"Invalid setting for rule '{rule_id}': {value!r}",
            suggestion="Use true, false, [true, {options}] or {\"enabled\": true, \"options\": {}}",
        )

    def parse_options(self, rule_id: str = "") -> RuleOptions:
        """Validate options, raising ConfigurationError when invalid."""
        try:
            return RuleOptions.model_validate(self.options)
        except ValidationError as e:
            problems = [
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in e.errors()
            ]
            raise ConfigurationError(
                f"Invalid options for rule '{rule_id}'", problems=problems
            ) from e

    def to_value(self) -> Any:
        """Convert back to the config file representation."""
        if self.options:
            return [self.enabled, self.options]
        return self.enabled


@dataclass
class LintConfig:
    """Rule table for a lint run."""

    rules: dict[str, RuleSetting] = field(default_factory=dict)
    source: str | None = None  # Path the config was loaded from

    def is_rule_enabled(self, rule_id: str) -> bool:
        """Absent rules are disabled."""
        setting = self.rules.get(normalize_rule_id(rule_id))
        return setting is not None and setting.enabled

    def get_rule_setting(self, rule_id: str) -> RuleSetting:
        return self.rules.get(normalize_rule_id(rule_id), RuleSetting(enabled=False))

    def get_rule_options(self, rule_id: str) -> RuleOptions:
        return self.get_rule_setting(rule_id).parse_options(normalize_rule_id(rule_id))

    def enable(self, rule_id: str, **options: Any) -> "LintConfig":
        """Enable a rule in place; returns self for chaining."""
        self.rules[normalize_rule_id(rule_id)] = RuleSetting(enabled=True, options=options)
        return self

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: str | None = None) -> "LintConfig":
        """Create LintConfig from dictionary."""
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration must be a JSON object", config_file=source)
        rules_data = data.get("rules", {})
        if not isinstance(rules_data, dict):
            raise ConfigurationError("'rules' must be an object", config_file=source)

        config = cls(source=source)
        for name, value in rules_data.items():
            rule_id = normalize_rule_id(name)
            config.rules[rule_id] = RuleSetting.from_value(value, rule_id)
        return config

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"rules": {k: v.to_value() for k, v in self.rules.items()}}

    @classmethod
    def recommended(cls) -> "LintConfig":
        """The five stacking-context rules with default options."""
        return cls(rules={rule_name(name): RuleSetting() for name in RECOMMENDED_RULES})


class ConfigLoader:
    """Loads the linter configuration from .isolate-on-stack.json."""

    CONFIG_FILENAME = ".isolate-on-stack.json"

    def __init__(self, project_path: Path | None = None):
        """Initialize the config loader.

        Args:
            project_path: Directory searched for the config file (defaults to CWD)
        """
        self.project_path = Path(project_path) if project_path else Path.cwd()

    def find(self) -> Path | None:
        """Find the nearest config file in the project path or its parents."""
        directory = self.project_path.resolve()
        for candidate_dir in (directory, *directory.parents):
            candidate = candidate_dir / self.CONFIG_FILENAME
            if candidate.is_file():
                return candidate
        return None

    def load(self, config_path: Path | None = None) -> LintConfig:
        """Load configuration.

        Args:
            config_path: Explicit config file. When omitted the nearest
                config file is used, or the recommended config if none exists.

        Returns:
            LintConfig

        Raises:
            ConfigurationError: If the file is missing, unreadable or invalid.
        """
        if config_path is None:
            config_path = self.find()
            if config_path is None:
                logger.debug("No config file found; using recommended rules")
                return LintConfig.recommended()
        elif not Path(config_path).is_file():
            raise ConfigurationError(
                f"Config file not found: {config_path}",
                config_file=str(config_path),
                suggestion="Check the --config path",
            )

        logger.debug(f"Loading config from {config_path}")
        return self._load_file(Path(config_path))

    def _load_file(self, path: Path) -> LintConfig:
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in config file: {e}", config_file=str(path)
            ) from e
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read config file: {e}", config_file=str(path)
            ) from e
        return LintConfig.from_dict(data, source=str(path))

    def save(self, config: LintConfig) -> Path:
        """Save configuration to the project directory."""
        config_path = self.project_path / self.CONFIG_FILENAME
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(config.to_dict(), f, indent=2)
        return config_path
