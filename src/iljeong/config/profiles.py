"""Configuration profile management.

Provides utilities for detecting and managing configuration profiles
based on environment.
"""

import os
from enum import Enum
from pathlib import Path

PROFILE_ENV = "ILJEONG_PROFILE"

# config/ in the project root
DEFAULT_CONFIG_DIR = Path(__file__).parent.parent.parent.parent / "config"


class Profile(Enum):
    """Available configuration profiles."""

    DEV = "dev"
    PROD = "prod"
    TEST = "test"


def detect_profile() -> Profile:
    """Detect appropriate configuration profile.

    Reads the ILJEONG_PROFILE environment variable and falls back to dev
    when it is unset or unrecognized.

    Returns:
        Profile enum value
    """
    env_profile = os.environ.get(PROFILE_ENV, "").lower()
    profile_map = {
        "prod": Profile.PROD,
        "dev": Profile.DEV,
        "test": Profile.TEST,
    }
    return profile_map.get(env_profile, Profile.DEV)


def get_profile_path(profile: Profile | None = None, config_dir: Path | None = None) -> Path:
    """Get path to profile configuration file.

    Args:
        profile: Profile to use, or None to auto-detect
        config_dir: Configuration directory, or None for default

    Returns:
        Path to profile YAML file
    """
    if profile is None:
        profile = detect_profile()

    if config_dir is None:
        config_dir = DEFAULT_CONFIG_DIR

    return config_dir / f"{profile.value}.yaml"


__all__ = [
    "DEFAULT_CONFIG_DIR",
    "PROFILE_ENV",
    "Profile",
    "detect_profile",
    "get_profile_path",
]
