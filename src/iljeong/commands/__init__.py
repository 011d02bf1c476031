"""Commands module for iljeong.

Provides date/time expression resolution, command models and execution.
"""

from iljeong.commands.executor import CommandExecutor, ExecutorSettings
from iljeong.commands.models import (
    AnalysisPeriod,
    AnalysisSummary,
    Animation,
    AnimationType,
    Command,
    CommandResult,
    CommandType,
    FreeSlot,
    Navigation,
    TimeUnit,
)
from iljeong.commands.temporal import (
    DEFAULT_TIMEZONE,
    ResolvedDateTime,
    current_date,
    is_valid_timezone,
    resolve,
    resolve_bare_hour,
    tomorrow_date,
)

__all__ = [
    # Executor
    "CommandExecutor",
    "ExecutorSettings",
    # Models
    "AnalysisPeriod",
    "AnalysisSummary",
    "Animation",
    "AnimationType",
    "Command",
    "CommandResult",
    "CommandType",
    "FreeSlot",
    "Navigation",
    "TimeUnit",
    # Temporal
    "DEFAULT_TIMEZONE",
    "ResolvedDateTime",
    "current_date",
    "is_valid_timezone",
    "resolve",
    "resolve_bare_hour",
    "tomorrow_date",
]
