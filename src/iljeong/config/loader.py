"""YAML configuration loader with inheritance support.

Supports:
- Loading YAML config files
- Config inheritance via 'extends' key
- Deep merging of nested config
- Environment override of the interpreter timezone (ILJEONG_TIMEZONE)
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from ..suggestions.generator import MAX_SUGGESTIONS
from . import (
    AnalysisConfig,
    AnimationConfig,
    IljeongConfig,
    InterpreterConfig,
    LoggingConfig,
    SuggestionsConfig,
)
from .profiles import DEFAULT_CONFIG_DIR, Profile, get_profile_path

logger = logging.getLogger(__name__)

TIMEZONE_ENV = "ILJEONG_TIMEZONE"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries.

    Values from override take precedence. Nested dicts are merged recursively.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml_with_inheritance(path: Path) -> dict[str, Any]:
    """Load YAML file with inheritance support.

    If the file contains an 'extends' key, the base config is loaded first
    and merged with the current config.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    if "extends" in config:
        base_name = config.pop("extends")
        base_path = path.parent / base_name
        base_config = load_yaml_with_inheritance(base_path)
        config = deep_merge(base_config, config)

    return config


def dict_to_config(data: dict[str, Any]) -> IljeongConfig:
    """Convert raw dict to typed IljeongConfig dataclass.

    Raises:
        TypeError: If a section carries an unknown key.
        ValueError: If the working window is not a valid range of hours.
    """
    iljeong_data = data.get("iljeong", {}) or {}

    # YAML gives None for empty sections
    def safe_get(key: str) -> dict[str, Any]:
        value = iljeong_data.get(key, {})
        return value if value is not None else {}

    config = IljeongConfig(
        interpreter=InterpreterConfig(**safe_get("interpreter")),
        analysis=AnalysisConfig(**safe_get("analysis")),
        animation=AnimationConfig(**safe_get("animation")),
        suggestions=SuggestionsConfig(**safe_get("suggestions")),
        logging=LoggingConfig(**safe_get("logging")),
    )
    _validate(config)
    return config


def _validate(config: IljeongConfig) -> None:
    analysis = config.analysis
    if not 0 <= analysis.work_start_hour < analysis.work_end_hour <= 24:
        raise ValueError(
            f"Invalid working window: {analysis.work_start_hour}-{analysis.work_end_hour}"
        )
    if not 0 <= config.suggestions.max_suggestions <= MAX_SUGGESTIONS:
        raise ValueError(
            f"max_suggestions must be between 0 and {MAX_SUGGESTIONS}: "
            f"{config.suggestions.max_suggestions}"
        )


def apply_env_overrides(config: IljeongConfig) -> IljeongConfig:
    """Apply environment variable overrides in place.

    Args:
        config: Loaded configuration

    Returns:
        The same config, for chaining
    """
    timezone = os.environ.get(TIMEZONE_ENV, "").strip()
    if timezone:
        logger.debug(f"Timezone overridden by {TIMEZONE_ENV}: {timezone}")
        config.interpreter.timezone = timezone
    return config


class YAMLConfigLoader:
    """YAML configuration loader implementation."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize loader with optional config directory.

        Args:
            config_dir: Directory containing config files.
                        Defaults to 'config' relative to project root.
        """
        self._config_dir = config_dir if config_dir is not None else DEFAULT_CONFIG_DIR

    def load(self, path: Path) -> IljeongConfig:
        """Load configuration from file path.

        Args:
            path: Path to YAML config file

        Returns:
            Parsed IljeongConfig
        """
        raw_config = load_yaml_with_inheritance(path)
        return apply_env_overrides(dict_to_config(raw_config))

    def load_profile(self, profile: str | Profile | None = None) -> IljeongConfig:
        """Load configuration by profile name.

        Args:
            profile: Profile name (e.g., 'dev', 'prod'), or None to detect
                it from ILJEONG_PROFILE

        Returns:
            Parsed IljeongConfig for the profile

        Raises:
            ValueError: If the name is not a known profile.
        """
        if isinstance(profile, str):
            profile = Profile(profile)
        return self.load(get_profile_path(profile, self._config_dir))


def load_config(path: str | Path | None = None, profile: str | None = None) -> IljeongConfig:
    """Load iljeong configuration.

    Args:
        path: Direct path to config file (takes precedence)
        profile: Profile name ('dev', 'prod', 'test') if path not given;
            detected from the environment when both are omitted

    Returns:
        Parsed IljeongConfig

    Examples:
        >>> config = load_config(profile="dev")
        >>> config = load_config(path="/path/to/config.yaml")
    """
    loader = YAMLConfigLoader()

    if path is not None:
        return loader.load(Path(path))
    return loader.load_profile(profile)


__all__ = [
    "TIMEZONE_ENV",
    "YAMLConfigLoader",
    "apply_env_overrides",
    "deep_merge",
    "dict_to_config",
    "load_config",
    "load_yaml_with_inheritance",
]
