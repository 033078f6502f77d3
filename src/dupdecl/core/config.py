"""
Configuration management for dupdecl.

This module provides configuration models and utilities for loading
and validating configuration from YAML files, environment variables,
and programmatic overrides (for example CLI flags).
"""

import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel, to_snake

from dupdecl.core.models import DeclarationKind
from dupdecl.utils.exceptions import ConfigurationError
from dupdecl.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_FILE = "dupdecl.yml"

DEFAULT_INCLUDE_PATTERNS = ["**/*.py"]
DEFAULT_EXCLUDE_PATTERNS = [
    "**/test_*.py",
    "**/*_test.py",
    "**/conftest.py",
    "**/*.pyi",
    "**/__pycache__/**",
    "**/.venv/**",
    "**/venv/**",
    "**/build/**",
    "**/dist/**",
    "**/.git/**",
]


class RulesConfig(BaseModel):
    """Rules deciding which identity groups count as duplicates."""

    allow_same_file_overloads: bool = Field(
        default=True,
        description="Treat same-named functions in one file as overloads of one declaration",
    )
    allow_cross_module_duplicates: bool = Field(
        default=False,
        description="Report groups even when all occurrences live in a single file",
    )
    max_duplicates_per_name: int = Field(
        default=2,
        description="Maximum locations reported per group (0 or less disables the cap)",
    )

    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class DetectorConfig(BaseModel):
    """Main configuration for a detection run."""

    include_internal: bool = Field(
        default=False, description="Also consider declarations that are not exported"
    )
    include_patterns: List[str] = Field(
        default_factory=lambda: list(DEFAULT_INCLUDE_PATTERNS),
        description="Glob patterns a file must match to be scanned",
    )
    exclude_patterns: List[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDE_PATTERNS),
        description="Glob patterns that remove files from the scan",
    )
    ignore_types: List[DeclarationKind] = Field(
        default_factory=list, description="Declaration kinds to drop before grouping"
    )
    ignore_names: List[str] = Field(
        default_factory=list, description="Declaration names to drop before grouping"
    )
    rules: RulesConfig = Field(default_factory=RulesConfig, description="Detection rules")

    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    @field_validator("include_patterns", "exclude_patterns")
    @classmethod
    def validate_patterns(cls, v: List[str]) -> List[str]:
        """Drop blank patterns and normalize separators."""
        return [p.strip().replace("\\", "/") for p in v if p and p.strip()]


def load_config_file(config_path: Union[str, Path]) -> DetectorConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated DetectorConfig instance

    Raises:
        ConfigurationError: If the file is missing, unparsable or invalid

    Example:
        >>> config = load_config_file(Path("dupdecl.yml"))
        >>> print(config.rules.max_duplicates_per_name)
        2
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigurationError("Configuration file not found", config_path=config_path)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Could not read configuration: {e}", config_path=config_path) from e

    if not isinstance(raw_config, dict):
        raise ConfigurationError(
            "Configuration must be a mapping at the top level", config_path=config_path
        )

    bad_keys = _non_string_keys(raw_config)
    if bad_keys:
        raise ConfigurationError(
            f"Configuration keys must be strings, got {bad_keys[0]!r}", config_path=config_path
        )

    try:
        return DetectorConfig(**_expand_env_vars(raw_config))
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}", config_path=config_path) from e


def load_config(config_path: Optional[Union[str, Path]] = None) -> DetectorConfig:
    """Load configuration, falling back to defaults on any problem.

    Args:
        config_path: Path to config file. If None, looks for dupdecl.yml in
            the working directory and uses defaults when it is absent.

    Returns:
        Loaded configuration, or the default configuration
    """
    if config_path is None:
        config_path = Path(DEFAULT_CONFIG_FILE)
        if not config_path.exists():
            logger.info("No %s found, using default configuration", DEFAULT_CONFIG_FILE)
            return DetectorConfig()

    try:
        config = load_config_file(config_path)
    except ConfigurationError as e:
        logger.warning("%s; using default configuration", e)
        return DetectorConfig()

    logger.info("Loaded configuration from %s", config_path)
    return config


def load_config_from_dict(config_dict: Dict[str, Any]) -> DetectorConfig:
    """Load configuration from a dictionary.

    Args:
        config_dict: Configuration dictionary (snake_case or camelCase keys)

    Returns:
        Validated DetectorConfig instance
    """
    return DetectorConfig(**_expand_env_vars(config_dict))


def merge_configs(base: DetectorConfig, override: Dict[str, Any]) -> DetectorConfig:
    """Merge override values into a configuration.

    Nested mappings (such as ``rules``) are merged key by key, so a partial
    override never leaves a field unset.

    Args:
        base: Base configuration
        override: Dictionary with override values

    Returns:
        New DetectorConfig with merged values

    Example:
        >>> merged = merge_configs(DetectorConfig(), {"rules": {"maxDuplicatesPerName": 5}})
        >>> merged.rules.allow_same_file_overloads
        True
    """
    merged = _deep_merge(base.model_dump(), _normalize_keys(override))
    return DetectorConfig(**merged)


def create_default_config(output_path: Optional[Path] = None) -> DetectorConfig:
    """Create a default configuration and optionally save it."""
    config = DetectorConfig()

    if output_path:
        save_config(config, output_path)

    return config


def save_config(config: DetectorConfig, output_path: Union[str, Path]) -> None:
    """Save configuration to a YAML file with camelCase keys.

    Args:
        config: Configuration to save
        output_path: Destination path
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    config_dict = config.model_dump(mode="json", by_alias=True)

    with open(output_path, "w", encoding="utf-8") as f:
        yaml.dump(
            config_dict,
            f,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )


def _expand_env_vars(config: Any) -> Any:
    """Recursively expand environment variables in config.

    Supports ${VAR_NAME} and ${VAR_NAME:-default} syntax. Unknown variables
    without a default are left as written.
    """
    if isinstance(config, dict):
        return {k: _expand_env_vars(v) for k, v in config.items()}
    elif isinstance(config, list):
        return [_expand_env_vars(item) for item in config]
    elif isinstance(config, str):

        def replace_env_var(match: Any) -> str:
            var_expr = match.group(1)

            if ":-" in var_expr:
                var_name, default = var_expr.split(":-", 1)
                return str(os.getenv(var_name.strip(), default.strip()))

            value = os.getenv(var_expr.strip())
            if value is None:
                return str(match.group(0))
            return str(value)

        return re.sub(r"\$\{([^}]+)\}", replace_env_var, config)
    else:
        return config


def _non_string_keys(data: Any) -> List[Any]:
    """Collect mapping keys that are not strings, including nested ones."""
    if isinstance(data, dict):
        keys = [key for key in data if not isinstance(key, str)]
        for value in data.values():
            keys.extend(_non_string_keys(value))
        return keys
    if isinstance(data, list):
        return [key for item in data for key in _non_string_keys(item)]
    return []


def _normalize_keys(data: Any) -> Any:
    """Convert camelCase mapping keys to snake_case, recursively."""
    if isinstance(data, dict):
        return {to_snake(k): _normalize_keys(v) for k, v in data.items()}
    return data


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result
