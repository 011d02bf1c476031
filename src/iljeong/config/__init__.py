"""Configuration module for iljeong.

This module provides configuration loading and profile management.
"""

from dataclasses import dataclass
from dataclasses import field


@dataclass
class InterpreterConfig:
    """Command interpreter configuration."""

    timezone: str = "Asia/Seoul"
    default_view: str = "day"


@dataclass
class AnalysisConfig:
    """Schedule analysis configuration.

    The working window bounds free-time searches, in local hours.
    """

    work_start_hour: int = 9
    work_end_hour: int = 18


@dataclass
class AnimationConfig:
    """Animation hint durations in milliseconds."""

    navigate_ms: int = 500
    view_ms: int = 300
    create_ms: int = 400


@dataclass
class SuggestionsConfig:
    """Quick-action suggestion configuration."""

    max_suggestions: int = 4


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"


@dataclass
class IljeongConfig:
    """Main iljeong configuration."""

    interpreter: InterpreterConfig = field(default_factory=InterpreterConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    animation: AnimationConfig = field(default_factory=AnimationConfig)
    suggestions: SuggestionsConfig = field(default_factory=SuggestionsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Public API
__all__ = [
    "AnalysisConfig",
    "AnimationConfig",
    "IljeongConfig",
    "InterpreterConfig",
    "LoggingConfig",
    "SuggestionsConfig",
]
