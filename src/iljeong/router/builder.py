"""Command construction from classified intents.

Each intent category has one builder that turns the regex match plus the
ambient context into a structured Command. Confidence values are fixed per
pattern outcome and never computed from the input.
"""

import logging
import re
from datetime import date, datetime, time, timedelta

from ..calendar.models import ChatContext, ViewType
from ..commands.models import (
    AnalysisPeriod,
    AnalyzeParams,
    Command,
    CommandType,
    CreateParams,
    DeleteParams,
    EditParams,
    NavigateParams,
    SearchParams,
    TimeUnit,
    ViewParams,
)
from ..commands.temporal import resolve_bare_hour
from .intent import IntentCategory, IntentMatch

logger = logging.getLogger(__name__)

_QUOTED = re.compile(r'"[^"]*"')


class CommandBuilder:
    """Builds Commands from intent matches.

    Builders are pure: the same match, context and reference time always
    produce the same Command.
    """

    def build(self, intent: IntentMatch, context: ChatContext, now: datetime) -> Command:
        """Build a command for a classified intent.

        Args:
            intent: The classifier result.
            context: Current view, selection and events.
            now: Timezone-aware reference time.

        Returns:
            The Command for the intent's category.
        """
        builders = {
            IntentCategory.NAVIGATE: self._build_navigate,
            IntentCategory.VIEW: self._build_view,
            IntentCategory.CREATE: self._build_create,
            IntentCategory.EDIT: self._build_edit,
            IntentCategory.DELETE: self._build_delete,
            IntentCategory.SEARCH: self._build_search,
            IntentCategory.ANALYZE: self._build_analyze,
        }
        command = builders[intent.category](intent, context, now)
        logger.debug(
            f"Built {command.type.value}/{command.action} (confidence {command.confidence})"
        )
        return command

    def _build_navigate(self, intent: IntentMatch, context: ChatContext, now: datetime) -> Command:
        text = intent.text.lower()
        fields = intent.fields
        today = now.date()

        def navigate(action: str, target: date | None, confidence: float) -> Command:
            return Command(
                type=CommandType.NAVIGATE,
                action=action,
                params=NavigateParams(date=target),
                confidence=confidence,
                pattern=intent.pattern,
            )

        if "오늘" in text or "today" in text:
            return navigate("go_to_today", today, 1.0)
        if "내일" in text or "tomorrow" in text:
            return navigate("go_to_tomorrow", today + timedelta(days=1), 1.0)
        if "다음" in text or "next" in text:
            return navigate("next_week", today + timedelta(days=7), 0.9)
        if "이전" in text or "prev" in text:
            return navigate("prev_week", today - timedelta(days=7), 0.9)

        if "month" in fields:
            month = int(fields["month"])
            day = int(fields.get("day", 1))
            try:
                target = date(today.year, month, day)
            except (ValueError, OverflowError):
                logger.info(f"Invalid navigation date: month={month} day={day}")
                return navigate("unknown", None, 0.3)
            if "day" in fields:
                return navigate("go_to_date", target, 0.95)
            return navigate("go_to_month", target, 0.9)

        return navigate("unknown", None, 0.3)

    def _build_view(self, intent: IntentMatch, context: ChatContext, now: datetime) -> Command:
        text = intent.text.lower()

        view = ViewType.DAY
        if "주간" in text or "week" in text:
            view = ViewType.WEEK_LINE if ("라인" in text or "line" in text) else ViewType.WEEK
        elif "월간" in text or "month" in text:
            view = ViewType.MONTH
        elif "라인" in text or "line" in text:
            view = ViewType.LINE
        elif "플로우" in text or "flow" in text:
            view = ViewType.FLOW

        return Command(
            type=CommandType.VIEW,
            action="change_view",
            params=ViewParams(view=view),
            confidence=0.95,
            pattern=intent.pattern,
        )

    def _build_create(self, intent: IntentMatch, context: ChatContext, now: datetime) -> Command:
        fields = intent.fields
        title = fields["title"].strip()

        day = now.date()
        if fields.get("when", "").lower() in ("내일", "tomorrow"):
            day += timedelta(days=1)

        # Only the bare-hour rule applies here, not sentence keywords
        hour = resolve_bare_hour(int(fields["hour"])) if "hour" in fields else None
        if hour is not None and hour <= 23:
            start = datetime.combine(day, time(hour), tzinfo=now.tzinfo)
        else:
            start = datetime.combine(
                day, now.time().replace(second=0, microsecond=0), tzinfo=now.tzinfo
            )

        return Command(
            type=CommandType.CREATE,
            action="create_event",
            params=CreateParams(title=title, start=start, end=start + timedelta(hours=1)),
            confidence=0.9,
            pattern=intent.pattern,
        )

    def _build_edit(self, intent: IntentMatch, context: ChatContext, now: datetime) -> Command:
        fields = intent.fields
        # Keywords inside quoted titles must not pick the action
        bare = _QUOTED.sub(" ", intent.text).lower()

        action = "extend"
        if any(kw in bare for kw in ("뒤로", "미루기", "연기", "postpone")):
            action = "postpone"
        elif any(kw in bare for kw in ("앞으로", "당기기", "prepone")):
            action = "prepone"
        elif any(kw in bare for kw in ("변경", "수정", "바꾸기", "rename")):
            action = "rename"

        unit_text = fields.get("unit", "").lower()
        unit = TimeUnit.HOURS if unit_text.startswith(("시간", "h")) else TimeUnit.MINUTES
        amount = int(fields["amount"]) if "amount" in fields else None

        selected = context.selected_event
        if ("선택" in bare or "selected" in bare) and selected is not None:
            return Command(
                type=CommandType.EDIT,
                action=action,
                params=EditParams(event_id=selected.id, amount=amount, unit=unit),
                confidence=0.95,
                pattern=intent.pattern,
            )

        return Command(
            type=CommandType.EDIT,
            action=action,
            params=EditParams(
                event_title=fields.get("title"),
                amount=amount,
                unit=unit,
                new_title=fields.get("new_title"),
            ),
            confidence=0.85,
            pattern=intent.pattern,
        )

    def _build_delete(self, intent: IntentMatch, context: ChatContext, now: datetime) -> Command:
        title = intent.fields.get("title")
        bare = _QUOTED.sub(" ", intent.text).lower()

        selected = context.selected_event
        if ("선택" in bare or "selected" in bare) and selected is not None:
            return Command(
                type=CommandType.DELETE,
                action="delete_selected",
                params=DeleteParams(event_id=selected.id),
                confidence=0.95,
                pattern=intent.pattern,
            )

        if title is None and ("오늘" in bare or "today" in bare):
            return Command(
                type=CommandType.DELETE,
                action="delete_all_today",
                params=DeleteParams(date=now.date()),
                confidence=0.9,
                pattern=intent.pattern,
            )

        return Command(
            type=CommandType.DELETE,
            action="delete_by_title",
            params=DeleteParams(title=title),
            confidence=0.85,
            pattern=intent.pattern,
        )

    def _build_search(self, intent: IntentMatch, context: ChatContext, now: datetime) -> Command:
        return Command(
            type=CommandType.SEARCH,
            action="search_events",
            params=SearchParams(query=intent.fields["query"].strip()),
            confidence=0.9,
            pattern=intent.pattern,
        )

    def _build_analyze(self, intent: IntentMatch, context: ChatContext, now: datetime) -> Command:
        text = intent.text
        lowered = text.lower()

        period = AnalysisPeriod.TODAY
        if "달" in text or "month" in lowered:
            period = AnalysisPeriod.MONTH
        elif "주" in text or "week" in lowered:
            period = AnalysisPeriod.WEEK
        elif "가장" in text:
            # "가장 바쁜 날" only makes sense across several days
            period = AnalysisPeriod.WEEK

        action = "summary"
        if any(kw in lowered for kw in ("빈", "비어있는", "free")):
            action = "free_time"
        elif "바쁜" in text or "busy" in lowered:
            action = "busy_analysis"

        return Command(
            type=CommandType.ANALYZE,
            action=action,
            params=AnalyzeParams(period=period),
            confidence=0.85,
            pattern=intent.pattern,
        )


__all__ = ["CommandBuilder"]
