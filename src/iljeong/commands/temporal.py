"""Korean/English date and time expression resolution.

Turns fragments like "내일 저녁 7시" or "tomorrow 2:30pm" into an absolute
(date, time) pair relative to a reference instant and a timezone. The
resolver never raises; unrecognized input falls back to the reference date
at 09:00.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "Asia/Seoul"
DEFAULT_HOUR = 9
DEFAULT_MINUTE = 0

# Tried in order, first match wins
TIME_PATTERNS = [
    re.compile(r"(\d{1,2})\s*시\s*(\d{1,2})\s*분"),  # "2시 30분"
    re.compile(r"(\d{1,2})\s*시"),  # "2시"
    re.compile(r"(\d{1,2}):(\d{1,2})"),  # "14:30"
    re.compile(r"(\d{1,2})시\s*반"),  # "2시반"
]

# Standalone Latin markers only, so "team" or "spam" do not read as AM/PM
_PM_MARKER = re.compile(r"(?<![A-Za-z])(?:pm|PM)(?![A-Za-z])")
_AM_MARKER = re.compile(r"(?<![A-Za-z])(?:am|AM)(?![A-Za-z])")

_NEXT_WEEK = re.compile(r"다음\s*주|next\s+week", re.IGNORECASE)


@dataclass(frozen=True)
class ResolvedDateTime:
    """A resolved local calendar date and wall-clock time.

    Attributes:
        date: Local date as YYYY-MM-DD.
        time: Zero-padded 24-hour time as HH:MM.
    """

    date: str
    time: str

    @property
    def hour(self) -> int:
        return int(self.time[:2])

    @property
    def minute(self) -> int:
        return int(self.time[3:])

    def to_datetime(self, timezone: str = DEFAULT_TIMEZONE) -> datetime:
        """Combine the pair into an aware datetime in the given timezone."""
        return datetime.combine(
            date.fromisoformat(self.date),
            time(self.hour, self.minute),
            tzinfo=get_zone(timezone),
        )


def get_zone(timezone: str) -> ZoneInfo:
    """Look up a timezone, falling back to the default zone.

    Args:
        timezone: IANA timezone name (e.g., 'Asia/Seoul').

    Returns:
        ZoneInfo for the name, or for DEFAULT_TIMEZONE if unknown.
    """
    try:
        return ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown timezone {timezone!r}, using {DEFAULT_TIMEZONE}")
        return ZoneInfo(DEFAULT_TIMEZONE)


def is_valid_timezone(timezone: str) -> bool:
    """Check whether a timezone name is known to the tz database."""
    try:
        ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True


def localize(now: datetime, timezone: str) -> datetime:
    """Express a reference instant in the given timezone.

    Naive datetimes are taken to already be wall-clock time in that zone.
    """
    zone = get_zone(timezone)
    if now.tzinfo is None:
        return now.replace(tzinfo=zone)
    return now.astimezone(zone)


def _resolve_date(text: str, today: date) -> date:
    """Apply relative-day keywords to the reference date."""
    lowered = text.lower()
    if "내일" in text or "tomorrow" in lowered:
        return today + timedelta(days=1)
    if "모레" in text:
        return today + timedelta(days=2)
    if _NEXT_WEEK.search(text):
        return today + timedelta(days=7)
    return today


def _match_time(text: str) -> tuple[int, int] | None:
    """Extract an explicit hour and minute, or None if no pattern applies."""
    for pattern in TIME_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue

        hour = int(match.group(1))
        if match.lastindex and match.lastindex >= 2:
            minute = int(match.group(2))
        else:
            minute = 30 if "반" in text else 0

        if hour > 23 or minute > 59:
            continue
        return hour, minute
    return None


def _disambiguate(text: str, hour: int, minute: int, matched: bool) -> tuple[int, int]:
    """Apply time-of-day keywords to an extracted hour.

    Keyword checks are mutually exclusive and evaluated in a fixed order.
    """
    if "저녁" in text:
        if hour <= 12:
            hour = hour % 12 + 12
    elif "아침" in text:
        if hour == 12:
            hour = 0
    elif "점심" in text:
        if not matched:
            hour, minute = 12, 0
    elif "오후" in text or _PM_MARKER.search(text):
        if hour < 12:
            hour += 12
    elif "오전" in text or _AM_MARKER.search(text):
        if hour == 12:
            hour = 0
    elif "새벽" not in text:
        # Business-hours bias: a bare 1-7 means afternoon or evening
        if 1 <= hour <= 7:
            hour += 12
    return hour, minute


def resolve(
    text: str,
    reference_now: datetime,
    timezone: str = DEFAULT_TIMEZONE,
) -> ResolvedDateTime:
    """Resolve a natural-language date/time fragment.

    Args:
        text: Fragment such as "내일 저녁 7시", "모레 3시", "2시 30분".
        reference_now: The current instant.
        timezone: IANA timezone the result is expressed in.

    Returns:
        ResolvedDateTime with a YYYY-MM-DD date and HH:MM time.

    Examples:
        >>> now = datetime(2025, 1, 1, 10, 0, tzinfo=ZoneInfo("Asia/Seoul"))
        >>> resolve("내일 저녁 7시", now)
        ResolvedDateTime(date='2025-01-02', time='19:00')
        >>> resolve("9시", now).time
        '09:00'
    """
    local_now = localize(reference_now, timezone)
    target = _resolve_date(text, local_now.date())

    explicit = _match_time(text)
    if explicit is None:
        hour, minute = DEFAULT_HOUR, DEFAULT_MINUTE
    else:
        hour, minute = explicit

    hour, minute = _disambiguate(text, hour, minute, explicit is not None)

    return ResolvedDateTime(
        date=target.isoformat(),
        time=f"{hour:02d}:{minute:02d}",
    )


def resolve_bare_hour(hour: int) -> int:
    """Resolve an hour given with no surrounding keywords.

    Equivalent to resolving "{hour}시" on its own: only the business-hours
    bias applies (3 -> 15, 9 -> 9).
    """
    resolved, _ = _disambiguate("", hour, 0, True)
    return resolved


def current_date(timezone: str = DEFAULT_TIMEZONE, now: datetime | None = None) -> str:
    """Return today's date in a timezone as YYYY-MM-DD."""
    if now is None:
        now = datetime.now(get_zone(timezone))
    return localize(now, timezone).date().isoformat()


def tomorrow_date(timezone: str = DEFAULT_TIMEZONE, now: datetime | None = None) -> str:
    """Return tomorrow's date in a timezone as YYYY-MM-DD."""
    if now is None:
        now = datetime.now(get_zone(timezone))
    return (localize(now, timezone).date() + timedelta(days=1)).isoformat()


__all__ = [
    "DEFAULT_TIMEZONE",
    "ResolvedDateTime",
    "current_date",
    "get_zone",
    "is_valid_timezone",
    "localize",
    "resolve",
    "resolve_bare_hour",
    "tomorrow_date",
]
