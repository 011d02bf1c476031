"""Quick-action suggestions for the command bar.

Derives a short, ordered list of likely next commands from the time of day
and the current context. Pure: identical input gives identical output.
"""

import logging
from datetime import datetime

from ..calendar.models import ChatContext, ViewType

logger = logging.getLogger(__name__)

# (upper bound hour exclusive, suggestions); the last bucket is open ended
TIME_BUCKETS: list[tuple[int, tuple[str, str]]] = [
    (9, ("오늘 일정 보여줘", "첫 회의 시간 확인")),
    (12, ("점심 시간 비어있나?", "오후 일정 확인")),
    (18, ("남은 일정 확인", "내일 일정 미리보기")),
    (24, ("내일 준비할 것", "이번 주 요약")),
]

VIEW_SUGGESTIONS: dict[ViewType, tuple[str, ...]] = {
    ViewType.DAY: ("주간뷰로 전환", "다음 빈 시간 찾기"),
    ViewType.LINE: ("주간뷰로 전환", "다음 빈 시간 찾기"),
    ViewType.WEEK: ("오늘로 이동", "가장 바쁜 날은?"),
    ViewType.WEEK_LINE: ("오늘로 이동", "가장 바쁜 날은?"),
}

GENERIC_SUGGESTION = "새 일정 추가"
MAX_SUGGESTIONS = 4


class SuggestionGenerator:
    """Generates context-aware command suggestions."""

    def __init__(self, max_suggestions: int = MAX_SUGGESTIONS) -> None:
        """Initialize the generator.

        Args:
            max_suggestions: Length cap applied after concatenation, never
                more than MAX_SUGGESTIONS.
        """
        self._max = max(0, min(max_suggestions, MAX_SUGGESTIONS))

    def suggest(self, context: ChatContext, now: datetime) -> list[str]:
        """Build suggestions for the current moment.

        Order is time bucket, selection, view, generic; the list is then
        truncated, so later groups drop out first.

        Args:
            context: Current view and selection.
            now: Reference time in the user's timezone.

        Returns:
            At most max_suggestions command strings.
        """
        suggestions: list[str] = []
        suggestions.extend(self._time_suggestions(now.hour))

        if context.selected_event is not None:
            title = context.selected_event.summary
            suggestions.append(f'"{title}" 30분 연장')
            suggestions.append(f'"{title}" 1시간 뒤로')

        suggestions.extend(VIEW_SUGGESTIONS.get(context.current_view, ()))
        suggestions.append(GENERIC_SUGGESTION)

        logger.debug(f"Generated {len(suggestions)} suggestions, keeping {self._max}")
        return suggestions[: self._max]

    @staticmethod
    def _time_suggestions(hour: int) -> tuple[str, ...]:
        for upper, bucket in TIME_BUCKETS:
            if hour < upper:
                return bucket
        return TIME_BUCKETS[-1][1]


__all__ = ["GENERIC_SUGGESTION", "MAX_SUGGESTIONS", "SuggestionGenerator"]
