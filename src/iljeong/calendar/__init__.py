"""Calendar module for iljeong.

Provides the event records and the context passed to the interpreter.
"""

from iljeong.calendar.models import (
    Attendee,
    CalendarEvent,
    ChatContext,
    EventTime,
    ViewType,
)

__all__ = [
    "Attendee",
    "CalendarEvent",
    "ChatContext",
    "EventTime",
    "ViewType",
]
