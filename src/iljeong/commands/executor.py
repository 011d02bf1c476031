"""Command execution against an in-memory event collection.

The executor is pure with respect to its inputs: it never mutates the
caller's events and returns a new tuple whenever the event set changes.
Unaffected events keep their identity in the new tuple.
"""

import logging
import uuid
from collections import Counter
from dataclasses import dataclass, field, replace
from datetime import date, datetime, time, timedelta
from typing import TypeVar

from ..calendar.models import CalendarEvent, ChatContext, EventTime, ViewType
from .models import (
    AnalysisPeriod,
    AnalysisSummary,
    AnalyzeParams,
    Animation,
    AnimationType,
    Command,
    CommandResult,
    CommandType,
    CreateParams,
    DeleteParams,
    EditParams,
    FreeSlot,
    NavigateParams,
    Navigation,
    SearchParams,
    ViewParams,
)
from .temporal import DEFAULT_TIMEZONE, get_zone, localize

logger = logging.getLogger(__name__)

P = TypeVar("P")

VIEW_NAMES: dict[ViewType, str] = {
    ViewType.DAY: "일간뷰",
    ViewType.WEEK: "주간뷰",
    ViewType.MONTH: "월간뷰",
    ViewType.LINE: "원라인 일간뷰",
    ViewType.WEEK_LINE: "원라인 주간뷰",
    ViewType.FLOW: "타임플로우뷰",
}

PERIOD_LABELS: dict[AnalysisPeriod, str] = {
    AnalysisPeriod.TODAY: "오늘",
    AnalysisPeriod.WEEK: "이번 주",
    AnalysisPeriod.MONTH: "이번 달",
}

MSG_UNKNOWN_COMMAND = "알 수 없는 명령입니다."
MSG_BAD_DATE = "이동할 날짜를 이해할 수 없습니다."
MSG_EDIT_NOT_FOUND = "수정할 일정을 찾을 수 없습니다."
MSG_EDIT_UNCLEAR = "변경할 내용을 이해할 수 없습니다."
MSG_DELETE_NOT_FOUND = "삭제할 일정을 찾을 수 없습니다."


@dataclass
class ExecutorSettings:
    """Tunables for the executor, filled from configuration."""

    timezone: str = DEFAULT_TIMEZONE
    work_start_hour: int = 9
    work_end_hour: int = 18
    animation_ms: dict[AnimationType, int] = field(
        default_factory=lambda: {
            AnimationType.SLIDE: 500,
            AnimationType.FADE: 300,
            AnimationType.ZOOM: 400,
        }
    )


def _expect(command: Command, params_type: type[P]) -> P:
    """Return the command payload, checking it matches the command type."""
    if not isinstance(command.params, params_type):
        raise TypeError(
            f"{command.type.value} command carries {type(command.params).__name__}, "
            f"expected {params_type.__name__}"
        )
    return command.params


class CommandExecutor:
    """Runs commands against a ChatContext.

    One handler per command type. Failures are reported through
    CommandResult.success, never raised.
    """

    def __init__(self, settings: ExecutorSettings | None = None) -> None:
        """Initialize the executor.

        Args:
            settings: Timezone, working window and animation durations.
        """
        self._settings = settings or ExecutorSettings()
        self._zone = get_zone(self._settings.timezone)

    def execute(self, command: Command, context: ChatContext, now: datetime) -> CommandResult:
        """Execute a command.

        Args:
            command: The command to run.
            context: Current view, selection and events.
            now: Reference time; analysis windows are anchored to its date.
                A naive value is read as wall-clock time in the configured
                timezone.

        Returns:
            The CommandResult.
        """
        now = localize(now, self._settings.timezone)
        handlers = {
            CommandType.NAVIGATE: self._execute_navigate,
            CommandType.VIEW: self._execute_view,
            CommandType.CREATE: self._execute_create,
            CommandType.EDIT: self._execute_edit,
            CommandType.DELETE: self._execute_delete,
            CommandType.SEARCH: self._execute_search,
            CommandType.ANALYZE: self._execute_analyze,
        }
        handler = handlers.get(command.type)
        if handler is None:
            return CommandResult(success=False, message=MSG_UNKNOWN_COMMAND)
        return handler(command, context, now)

    def _animation(self, kind: AnimationType) -> Animation:
        return Animation(type=kind, duration_ms=self._settings.animation_ms[kind])

    # Navigation and views

    def _execute_navigate(
        self, command: Command, context: ChatContext, now: datetime
    ) -> CommandResult:
        params = _expect(command, NavigateParams)
        if params.date is None:
            return CommandResult(success=False, message=MSG_BAD_DATE)

        target = params.date
        return CommandResult(
            success=True,
            message=f"{target.month:02d}월 {target.day:02d}일로 이동합니다.",
            navigation=Navigation(date=target),
            animation=self._animation(AnimationType.SLIDE),
        )

    def _execute_view(self, command: Command, context: ChatContext, now: datetime) -> CommandResult:
        params = _expect(command, ViewParams)
        return CommandResult(
            success=True,
            message=f"{VIEW_NAMES[params.view]}로 전환합니다.",
            navigation=Navigation(view=params.view),
            animation=self._animation(AnimationType.FADE),
        )

    # Event set changes

    def _execute_create(
        self, command: Command, context: ChatContext, now: datetime
    ) -> CommandResult:
        params = _expect(command, CreateParams)

        event = CalendarEvent(
            id=f"created-{uuid.uuid4().hex[:12]}",
            summary=params.title,
            start=EventTime(date_time=params.start),
            end=EventTime(date_time=params.end),
            status="confirmed",
            created=now,
            updated=now,
        )
        logger.info(f"Created event {event.id}: {params.title}")

        return CommandResult(
            success=True,
            message=f'"{params.title}" 일정이 {params.start.astimezone(self._zone):%H:%M}에 추가되었습니다.',
            data=event,
            updated_events=(*context.events, event),
            animation=self._animation(AnimationType.ZOOM),
        )

    def _execute_edit(self, command: Command, context: ChatContext, now: datetime) -> CommandResult:
        params = _expect(command, EditParams)

        target = self._find_event(context.events, params.event_id, params.event_title)
        if target is None:
            logger.info(f"Edit target not found: id={params.event_id} title={params.event_title}")
            return CommandResult(success=False, message=MSG_EDIT_NOT_FOUND)

        if command.action == "rename":
            if not params.new_title:
                return CommandResult(success=False, message=MSG_EDIT_UNCLEAR)
            edited = replace(target, summary=params.new_title, updated=now)
        else:
            try:
                rescheduled = self._reschedule(target, command.action, params, now)
            except OverflowError:
                logger.info(f"Edit magnitude out of range: {params.amount} {params.unit.value}")
                rescheduled = None
            if rescheduled is None:
                return CommandResult(success=False, message=MSG_EDIT_UNCLEAR)
            edited = rescheduled

        updated_events = tuple(edited if e.id == target.id else e for e in context.events)
        return CommandResult(
            success=True,
            message=f'"{target.summary}" 일정이 수정되었습니다.',
            data=edited,
            updated_events=updated_events,
        )

    def _reschedule(
        self, target: CalendarEvent, action: str, params: EditParams, now: datetime
    ) -> CalendarEvent | None:
        """Apply a time change; None when the action or magnitude is unusable."""
        delta = params.delta
        if delta is None:
            return None

        if action == "extend":
            return replace(target, end=self._shift(target.end, delta), updated=now)
        if action == "postpone":
            return replace(
                target,
                start=self._shift(target.start, delta),
                end=self._shift(target.end, delta),
                updated=now,
            )
        if action == "prepone":
            return replace(
                target,
                start=self._shift(target.start, -delta),
                end=self._shift(target.end, -delta),
                updated=now,
            )
        return None

    def _execute_delete(
        self, command: Command, context: ChatContext, now: datetime
    ) -> CommandResult:
        params = _expect(command, DeleteParams)
        events = context.events

        if params.event_id is not None:
            remaining = tuple(e for e in events if e.id != params.event_id)
        elif params.date is not None:
            remaining = tuple(e for e in events if self._start_date(e) != params.date)
        elif params.title:
            needle = params.title.lower()
            remaining = tuple(e for e in events if needle not in e.summary.lower())
        else:
            remaining = events

        deleted = len(events) - len(remaining)
        if deleted == 0:
            logger.info(f"Nothing to delete for {command.action}")
            return CommandResult(success=False, message=MSG_DELETE_NOT_FOUND)

        return CommandResult(
            success=True,
            message=f"{deleted}개의 일정이 삭제되었습니다.",
            data=deleted,
            updated_events=remaining,
        )

    # Read-only queries

    def _execute_search(
        self, command: Command, context: ChatContext, now: datetime
    ) -> CommandResult:
        params = _expect(command, SearchParams)
        needle = params.query.lower()

        def matches(event: CalendarEvent) -> bool:
            fields = (event.summary, event.description, event.location)
            return any(f and needle in f.lower() for f in fields)

        results = tuple(e for e in context.events if e.start is not None and matches(e))
        return CommandResult(
            success=True,
            message=f'"{params.query}" 검색 결과: {len(results)}개의 일정을 찾았습니다.',
            data=results,
        )

    def _execute_analyze(
        self, command: Command, context: ChatContext, now: datetime
    ) -> CommandResult:
        params = _expect(command, AnalyzeParams)
        relevant = self._events_in_period(context.events, params.period, now.date())

        if command.action == "free_time":
            slots = self.free_slots(relevant, now.date())
            return CommandResult(
                success=True,
                message=f"{len(slots)}개의 빈 시간대를 찾았습니다.",
                data=slots,
            )

        # All-day events count as events but add no hours
        total_hours = (
            sum(d.total_seconds() for e in relevant if (d := e.duration) is not None) / 3600
        )
        label = PERIOD_LABELS[params.period]
        message = f"{label}: {len(relevant)}개 일정, 총 {total_hours:.1f}시간"

        busiest_date: date | None = None
        busiest_count = 0
        if command.action == "busy_analysis":
            counts = Counter(d for e in relevant if (d := self._start_date(e)) is not None)
            if counts:
                # Earliest date wins a tie
                busiest_date, busiest_count = max(
                    counts.items(), key=lambda item: (item[1], -item[0].toordinal())
                )
                message += (
                    f", 가장 바쁜 날: {busiest_date.month:02d}월 {busiest_date.day:02d}일"
                    f" ({busiest_count}개)"
                )

        return CommandResult(
            success=True,
            message=message,
            data=AnalysisSummary(
                period=params.period,
                event_count=len(relevant),
                total_hours=total_hours,
                events=relevant,
                busiest_date=busiest_date,
                busiest_count=busiest_count,
            ),
        )

    def free_slots(self, events: tuple[CalendarEvent, ...], day: date) -> list[FreeSlot]:
        """Compute free gaps inside the working window of one day.

        Busy intervals are clipped to the window; all-day and malformed
        events do not block time.

        Args:
            events: Candidate busy events.
            day: The day whose working window is examined.

        Returns:
            Free slots in chronological order.
        """
        window_start = datetime.combine(day, time(self._settings.work_start_hour), tzinfo=self._zone)
        window_end = datetime.combine(day, time(self._settings.work_end_hour), tzinfo=self._zone)

        busy = []
        for event in events:
            if event.duration is None:
                continue
            start = max(event.start.as_datetime(self._zone), window_start)  # type: ignore[union-attr, type-var]
            end = min(event.end.as_datetime(self._zone), window_end)  # type: ignore[union-attr, type-var]
            if start < end:
                busy.append((start, end))
        busy.sort()

        slots = []
        cursor = window_start
        for start, end in busy:
            if start > cursor:
                slots.append(FreeSlot(start=cursor, end=start))
            cursor = max(cursor, end)

        if cursor < window_end:
            slots.append(FreeSlot(start=cursor, end=window_end))
        return slots

    # Helpers

    def _start_date(self, event: CalendarEvent) -> date | None:
        return event.start.local_date(self._zone) if event.start is not None else None

    def _events_in_period(
        self, events: tuple[CalendarEvent, ...], period: AnalysisPeriod, today: date
    ) -> tuple[CalendarEvent, ...]:
        """Select events whose start falls in the period; skips malformed ones."""
        if period == AnalysisPeriod.WEEK:
            # Weeks run Sunday to Saturday
            week_start = today - timedelta(days=(today.weekday() + 1) % 7)
            week_end = week_start + timedelta(days=7)

            def in_period(d: date) -> bool:
                return week_start <= d < week_end

        elif period == AnalysisPeriod.MONTH:

            def in_period(d: date) -> bool:
                return (d.year, d.month) == (today.year, today.month)

        else:

            def in_period(d: date) -> bool:
                return d == today

        selected = []
        for event in events:
            start = self._start_date(event)
            if start is not None and in_period(start):
                selected.append(event)
        return tuple(selected)

    @staticmethod
    def _find_event(
        events: tuple[CalendarEvent, ...], event_id: str | None, title: str | None
    ) -> CalendarEvent | None:
        """Find an edit target by id, else by case-insensitive title substring."""
        if event_id is not None:
            return next((e for e in events if e.id == event_id), None)
        if title:
            needle = title.lower()
            return next((e for e in events if needle in e.summary.lower()), None)
        return None

    def _shift(self, boundary: EventTime | None, delta: timedelta) -> EventTime | None:
        """Move an event boundary, keeping all-day dates for whole-day shifts."""
        if boundary is None:
            return None
        if boundary.date_time is not None:
            return EventTime(date_time=boundary.date_time + delta)
        if delta % timedelta(days=1) == timedelta(0):
            return EventTime(date=boundary.date + delta)  # type: ignore[operator]
        return EventTime(date_time=boundary.as_datetime(self._zone) + delta)  # type: ignore[operator]


__all__ = ["CommandExecutor", "ExecutorSettings"]
