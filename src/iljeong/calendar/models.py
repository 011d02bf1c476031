"""Calendar data models.

Defines the event records and the per-call context the interpreter reads.
All models are frozen: the interpreter returns modified copies and never
touches the caller's objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, tzinfo
from enum import Enum
from typing import Any


class ViewType(Enum):
    """Calendar presentation modes."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    LINE = "line"
    WEEK_LINE = "week-line"
    FLOW = "flow"


@dataclass(frozen=True)
class EventTime:
    """Start or end of an event: an instant or an all-day date.

    Attributes:
        date_time: Timezone-aware instant for timed events.
        date: Calendar date for all-day events.
    """

    date_time: datetime | None = None
    date: date | None = None

    @property
    def is_timed(self) -> bool:
        """Whether this boundary is an instant rather than an all-day date."""
        return self.date_time is not None

    def as_datetime(self, tz: tzinfo) -> datetime | None:
        """Return the boundary as an aware datetime in the given zone.

        All-day dates map to local midnight.
        """
        if self.date_time is not None:
            return self.date_time.astimezone(tz)
        if self.date is not None:
            return datetime.combine(self.date, time.min, tzinfo=tz)
        return None

    def local_date(self, tz: tzinfo) -> date | None:
        """Return the calendar date of this boundary in the given zone."""
        if self.date_time is not None:
            return self.date_time.astimezone(tz).date()
        return self.date

    def to_dict(self) -> dict[str, str]:
        """Convert to the Google Calendar style {dateTime|date} shape."""
        if self.date_time is not None:
            return {"dateTime": self.date_time.isoformat()}
        if self.date is not None:
            return {"date": self.date.isoformat()}
        return {}

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> EventTime | None:
        """Parse a {dateTime|date} dict, returning None when empty."""
        if not data:
            return None
        if data.get("dateTime"):
            return cls(date_time=datetime.fromisoformat(data["dateTime"]))
        if data.get("date"):
            return cls(date=date.fromisoformat(data["date"]))
        return None


@dataclass(frozen=True)
class Attendee:
    """A meeting participant."""

    email: str
    display_name: str | None = None
    response_status: str = "needsAction"


@dataclass(frozen=True)
class CalendarEvent:
    """One scheduled item owned by the caller's event store.

    Attributes:
        id: Opaque stable identifier.
        summary: Title text.
        start: Start boundary, None for malformed records.
        end: End boundary.
        location: Optional location text.
        description: Optional free-form notes.
        attendees: Ordered participants.
        status: Event status (confirmed, tentative, cancelled).
        recurrence: Recurrence rule strings (RRULE lines).
        created: When the event was created.
        updated: When the event was last modified.
    """

    id: str
    summary: str = ""
    start: EventTime | None = None
    end: EventTime | None = None
    location: str | None = None
    description: str | None = None
    attendees: tuple[Attendee, ...] = ()
    status: str = "confirmed"
    recurrence: tuple[str, ...] = ()
    created: datetime | None = None
    updated: datetime | None = None

    def __post_init__(self) -> None:
        if (
            self.start is not None
            and self.end is not None
            and self.start.date_time is not None
            and self.end.date_time is not None
            and self.end.date_time < self.start.date_time
        ):
            raise ValueError(f"Event {self.id!r} ends before it starts")

    @property
    def is_timed(self) -> bool:
        """Whether both boundaries are instants."""
        return (
            self.start is not None
            and self.end is not None
            and self.start.is_timed
            and self.end.is_timed
        )

    @property
    def duration(self) -> timedelta | None:
        """Scheduled length of a timed event, None for all-day or malformed ones."""
        if self.start is None or self.end is None:
            return None
        if self.start.date_time is None or self.end.date_time is None:
            return None
        return self.end.date_time - self.start.date_time

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON shape used by the event store."""
        data: dict[str, Any] = {
            "id": self.id,
            "summary": self.summary,
            "status": self.status,
        }
        if self.start is not None:
            data["start"] = self.start.to_dict()
        if self.end is not None:
            data["end"] = self.end.to_dict()
        if self.location:
            data["location"] = self.location
        if self.description:
            data["description"] = self.description
        if self.attendees:
            data["attendees"] = [
                {
                    "email": a.email,
                    "displayName": a.display_name,
                    "responseStatus": a.response_status,
                }
                for a in self.attendees
            ]
        if self.recurrence:
            data["recurrence"] = list(self.recurrence)
        if self.created:
            data["created"] = self.created.isoformat()
        if self.updated:
            data["updated"] = self.updated.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CalendarEvent:
        """Create an event from its JSON shape."""
        return cls(
            id=str(data["id"]),
            summary=data.get("summary") or "",
            start=EventTime.from_dict(data.get("start")),
            end=EventTime.from_dict(data.get("end")),
            location=data.get("location"),
            description=data.get("description"),
            attendees=tuple(
                Attendee(
                    email=a.get("email", ""),
                    display_name=a.get("displayName"),
                    response_status=a.get("responseStatus", "needsAction"),
                )
                for a in data.get("attendees") or []
            ),
            status=data.get("status", "confirmed"),
            recurrence=tuple(data.get("recurrence") or ()),
            created=datetime.fromisoformat(data["created"]) if data.get("created") else None,
            updated=datetime.fromisoformat(data["updated"]) if data.get("updated") else None,
        )


@dataclass(frozen=True)
class ChatContext:
    """Ambient state passed into every interpretation call.

    Built fresh by the caller for each command and never mutated.
    """

    current_view: ViewType = ViewType.DAY
    selected_event: CalendarEvent | None = None
    selected_date: date | None = None
    events: tuple[CalendarEvent, ...] = field(default_factory=tuple)


__all__ = [
    "Attendee",
    "CalendarEvent",
    "ChatContext",
    "EventTime",
    "ViewType",
]
