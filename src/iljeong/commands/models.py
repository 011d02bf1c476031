"""Command and result models.

Defines the structured Command produced by the builder, its typed payloads,
and the CommandResult returned by the executor.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any

from ..calendar.models import CalendarEvent, ViewType


class CommandType(Enum):
    """Types of commands the executor can run."""

    NAVIGATE = "navigate"
    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"
    VIEW = "view"
    SEARCH = "search"
    ANALYZE = "analyze"


class TimeUnit(Enum):
    """Units for edit magnitudes."""

    MINUTES = "minutes"
    HOURS = "hours"


class AnalysisPeriod(Enum):
    """Windows an analysis command can cover."""

    TODAY = "today"
    WEEK = "week"
    MONTH = "month"


class AnimationType(Enum):
    """Transition hints for the rendering layer."""

    ZOOM = "zoom"
    SLIDE = "slide"
    FADE = "fade"


@dataclass(frozen=True)
class NavigateParams:
    """Target of a navigate command; None when the date was invalid."""

    date: date | None


@dataclass(frozen=True)
class ViewParams:
    view: ViewType


@dataclass(frozen=True)
class CreateParams:
    title: str
    start: datetime
    end: datetime


@dataclass(frozen=True)
class EditParams:
    """Edit target and change.

    Exactly one of event_id (selection) or event_title identifies the target.
    """

    event_id: str | None = None
    event_title: str | None = None
    amount: int | None = None
    unit: TimeUnit = TimeUnit.MINUTES
    new_title: str | None = None

    @property
    def delta(self) -> timedelta | None:
        """The magnitude as a timedelta, or None if no amount was given."""
        if self.amount is None:
            return None
        minutes = self.amount * 60 if self.unit == TimeUnit.HOURS else self.amount
        return timedelta(minutes=minutes)


@dataclass(frozen=True)
class DeleteParams:
    event_id: str | None = None
    title: str | None = None
    date: date | None = None


@dataclass(frozen=True)
class SearchParams:
    query: str


@dataclass(frozen=True)
class AnalyzeParams:
    period: AnalysisPeriod


CommandParams = (
    NavigateParams
    | ViewParams
    | CreateParams
    | EditParams
    | DeleteParams
    | SearchParams
    | AnalyzeParams
)


@dataclass(frozen=True)
class Command:
    """A structured command ready for execution.

    Attributes:
        type: Command category.
        action: Finer-grained verb within the category.
        params: Typed payload for the (type, action) pair.
        confidence: Static match-specificity score in [0, 1].
        pattern: Source of the pattern the command came from.
    """

    type: CommandType
    action: str
    params: CommandParams
    confidence: float
    pattern: str = ""


@dataclass(frozen=True)
class Navigation:
    """Where the UI should move after a command."""

    view: ViewType | None = None
    date: date | None = None


@dataclass(frozen=True)
class Animation:
    type: AnimationType
    duration_ms: int


@dataclass(frozen=True)
class FreeSlot:
    """A gap between busy intervals inside the working window."""

    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        return self.end - self.start


@dataclass(frozen=True)
class AnalysisSummary:
    """Aggregate numbers for an analysis period.

    Attributes:
        period: The analyzed window.
        event_count: Events starting in the window.
        total_hours: Scheduled hours across timed events only.
        events: The events in the window.
        busiest_date: Date with the most events (busy analysis only).
        busiest_count: Number of events on busiest_date.
    """

    period: AnalysisPeriod
    event_count: int
    total_hours: float
    events: tuple[CalendarEvent, ...] = ()
    busiest_date: date | None = None
    busiest_count: int = 0


@dataclass(frozen=True)
class CommandResult:
    """Outcome of executing a command.

    Attributes:
        success: Whether the command took effect.
        message: User-facing confirmation or rejection text.
        data: Command-specific payload (event, event tuple, free slots, summary).
        updated_events: New full collection, only when the event set changed.
        navigation: View/date directive for the UI.
        animation: Transition hint for the UI.
    """

    success: bool
    message: str
    data: Any = None
    updated_events: tuple[CalendarEvent, ...] | None = None
    navigation: Navigation | None = None
    animation: Animation | None = None


__all__ = [
    "AnalysisPeriod",
    "AnalysisSummary",
    "AnalyzeParams",
    "Animation",
    "AnimationType",
    "Command",
    "CommandParams",
    "CommandResult",
    "CommandType",
    "CreateParams",
    "DeleteParams",
    "EditParams",
    "FreeSlot",
    "NavigateParams",
    "Navigation",
    "SearchParams",
    "TimeUnit",
    "ViewParams",
]
