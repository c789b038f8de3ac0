"""Configuration management for simplify_lint."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, FrozenSet, Optional, Set

import toml

from simplify_lint.core.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".simplify_lint.toml"


@dataclass(frozen=True)
class AllWarnings:
    """Every warning category is enabled."""


@dataclass(frozen=True)
class ExcludeWarnings:
    """Every warning category is enabled except the listed ones."""
    categories: FrozenSet[str] = frozenset()

    def __post_init__(self):
        object.__setattr__(self, "categories", frozenset(self.categories))


@dataclass(frozen=True)
class IncludeWarnings:
    """Only the listed warning categories are enabled."""
    categories: FrozenSet[str] = frozenset()

    def __post_init__(self):
        object.__setattr__(self, "categories", frozenset(self.categories))


def parse_warnings(value: Any) -> Any:
    """
    Turn a `warnings` setting into a warning configuration.

    Accepted values are `true` or "all", a table with an `exclude` list, or
    a table (or bare list) with an `include` list. Anything else is returned
    unchanged, which the warning gate treats as disabled.
    """
    if value is True or value == "all":
        return AllWarnings()
    if value is False:
        return IncludeWarnings()
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return IncludeWarnings(value)
    if isinstance(value, dict) and len(value) == 1:
        if isinstance(value.get("exclude"), list):
            return ExcludeWarnings(value["exclude"])
        if isinstance(value.get("include"), list):
            return IncludeWarnings(value["include"])
    logger.warning("Unrecognised warnings setting %r", value)
    return value


@dataclass
class Config:
    """
    Configuration for simplify_lint.

    Attributes:
        warnings: Which warning categories are enabled (all, exclusion or
            inclusion shape); read by the warning gate on every call
        disabled_rules: Set of matcher names to skip
        emacs: Emacs executable used for capability probing
        probe_timeout: Seconds a single probe may take
        output_format: Output format (text, json)
    """
    warnings: Any = field(default_factory=AllWarnings)
    disabled_rules: Set[str] = field(default_factory=set)
    emacs: str = "emacs"
    probe_timeout: float = 10
    output_format: str = "text"

    @classmethod
    def from_file(cls, config_path: Optional[Path] = None) -> "Config":
        """
        Load configuration from a TOML file.

        If config_path is None, searches for .simplify_lint.toml in current
        directory and parent directories.
        """
        if config_path is None:
            config_path = cls._find_config_file()

        if config_path is None or not config_path.exists():
            return cls()

        try:
            with open(config_path, "r") as f:
                data = toml.load(f)
        except (OSError, toml.TomlDecodeError) as e:
            raise ConfigError(f"Cannot read {config_path}: {e}") from e

        logger.debug("Loaded configuration from %s", config_path)
        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "Config":
        """Create Config from dictionary."""
        config = cls()

        if "warnings" in data:
            config.warnings = parse_warnings(data["warnings"])

        # Rules are specified as rule-name = "off"
        if "rules" in data:
            for rule_name, setting in data["rules"].items():
                if str(setting).lower() in ["off", "false", "disabled"]:
                    config.disabled_rules.add(rule_name)

        if "host" in data:
            host = data["host"]
            if "emacs" in host:
                config.emacs = host["emacs"]
            if "timeout" in host:
                config.probe_timeout = host["timeout"]

        if "output" in data:
            output = data["output"]
            if "format" in output:
                config.output_format = output["format"]

        return config

    @staticmethod
    def _find_config_file() -> Optional[Path]:
        """Search for .simplify_lint.toml in current and parent directories."""
        current = Path.cwd()

        while True:
            config_path = current / CONFIG_FILENAME
            if config_path.exists():
                return config_path

            # Check if we've reached the root
            parent = current.parent
            if parent == current:
                break
            current = parent

        return None

    def warning_configuration(self) -> Any:
        """Current warning configuration; the accessor the warning gate reads."""
        return self.warnings

    def is_rule_enabled(self, rule_name: str) -> bool:
        """Check if a matcher is enabled."""
        return rule_name not in self.disabled_rules
