"""Intent classification for calendar commands.

Matches user text against ordered pattern groups, one group per intent
category, and reports the first hit along with its named match fields.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class IntentCategory(Enum):
    """Coarse categories of calendar commands."""

    NAVIGATE = "navigate"
    VIEW = "view"
    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"
    SEARCH = "search"
    ANALYZE = "analyze"


# Precedence between groups. Some inputs fit more than one group; the
# earlier group always wins.
GROUP_ORDER: tuple[IntentCategory, ...] = (
    IntentCategory.NAVIGATE,
    IntentCategory.VIEW,
    IntentCategory.CREATE,
    IntentCategory.EDIT,
    IntentCategory.DELETE,
    IntentCategory.SEARCH,
    IntentCategory.ANALYZE,
)


@dataclass(frozen=True)
class IntentMatch:
    """A classified command.

    Attributes:
        category: The matched intent category.
        match: The regex match object.
        pattern: Source of the pattern that matched.
        text: The stripped input text.
    """

    category: IntentCategory
    match: re.Match[str]
    pattern: str
    text: str

    @property
    def fields(self) -> dict[str, str]:
        """Named groups that took part in the match."""
        return {k: v for k, v in self.match.groupdict().items() if v is not None}


class IntentClassifier:
    """Rule-based intent classifier for calendar commands.

    Uses anchored pattern matching over Korean and English phrasings.
    Patterns inside a group are tried top to bottom, groups in GROUP_ORDER.
    """

    NAVIGATE_PATTERNS = [
        # "오늘" not followed by a delete/analyze verb ("오늘 요약" is analysis)
        r"^(?:오늘|today)(?!.*(?:삭제|제거|지우기|요약|정리|분석|delete|remove|summary))",
        r"^(?:내일|tomorrow)",
        r"^(?:다음|next)\s*(?:주|week)",
        r"^(?:이전|prev|previous)\s*(?:주|week)",
        r"^(?P<month>\d{1,2})월\s*(?P<day>\d{1,2})일",
        r"^(?P<month>\d{1,2})월로",
        r"^go\s+to\s+(?P<month>\d{1,2})/(?P<day>\d{1,2})",
    ]

    VIEW_PATTERNS = [
        r"^(?:일간|day|일간뷰|day view)",
        r"^(?:주간|week|주간뷰|week view)",
        r"^(?:월간|month|월간뷰|month view)",
        r"^(?:라인|line|라인뷰|line view)",
        r"^(?:플로우|flow|플로우뷰|flow view)",
    ]

    CREATE_PATTERNS = [
        r'^"(?P<title>[^"]+)"\s*(?P<when>오늘|내일|today|tomorrow)?(?:\s*(?P<hour>\d+)시)?(?:에)?\s*(?:추가|생성|만들기)',
        r'^(?P<hour>\d+)시에\s*"(?P<title>[^"]+)"\s*(?:추가|생성)',
        r'^새\s*일정\s*"(?P<title>[^"]+)"',
        r'^add\s+"(?P<title>[^"]+)"(?:\s+(?P<when>today|tomorrow))?(?:\s+at\s+(?P<hour>\d{1,2}))?',
        # Unquoted title requires an explicit hour
        r"^(?P<title>[^\"\d][^\"]*?)\s+(?:(?P<when>오늘|내일)\s*)?(?P<hour>\d{1,2})시(?:에)?\s*(?:추가|생성|만들기)$",
    ]

    EDIT_PATTERNS = [
        r'^"(?P<title>[^"]+)"\s*(?P<amount>\d+)(?P<unit>분)\s*(?:연장|늘리기)',
        r'^"(?P<title>[^"]+)"\s*(?P<amount>\d+)(?P<unit>시간)\s*(?:연장|늘리기)',
        r'^"(?P<title>[^"]+)"\s*(?P<amount>\d+)(?P<unit>분|시간)?\s*(?:뒤로|미루기|연기)',
        r'^"(?P<title>[^"]+)"\s*(?P<amount>\d+)(?P<unit>분|시간)?\s*(?:앞으로|당기기)',
        r'^"(?P<title>[^"]+)"\s*(?:를|을)?\s*"(?P<new_title>[^"]+)"(?:로|으로)?\s*(?:변경|수정|바꾸기)',
        r"^선택된?\s*일정\s*(?P<amount>\d+)(?P<unit>분|시간)?\s*(?:연장|늘리기|뒤로|미루기|연기|앞으로|당기기)",
        r'^(?:extend|postpone|prepone)\s+"(?P<title>[^"]+)"\s+by\s+(?P<amount>\d+)\s*(?P<unit>minutes?|mins?|hours?|hrs?)',
        r'^rename\s+"(?P<title>[^"]+)"\s+to\s+"(?P<new_title>[^"]+)"',
        r"^(?:extend|postpone|prepone)\s+(?:the\s+)?selected(?:\s+event)?\s+by\s+(?P<amount>\d+)\s*(?P<unit>minutes?|mins?|hours?|hrs?)",
    ]

    DELETE_PATTERNS = [
        r'^"(?P<title>[^"]+)"\s*(?:삭제|제거|지우기)',
        r"^선택된?\s*일정\s*(?:삭제|제거)",
        r"^오늘\s*일정\s*(?:모두|전부)?\s*(?:삭제|제거)",
        r"^(?:delete|remove)\s+(?:the\s+)?selected(?:\s+event)?",
        r"^(?:delete|remove|clear)\s+all\s+(?:events\s+)?today",
        r'^(?:delete|remove)\s+"(?P<title>[^"]+)"',
    ]

    SEARCH_PATTERNS = [
        r'^"(?P<query>[^"]+)"\s*(?:검색|찾기|찾아)',
        r'^(?P<query>[^"]+?)\s*관련\s*일정',
        r'^다음\s*(?P<query>[^"]+)',
        r'^(?:search|find)\s+(?:for\s+)?"?(?P<query>[^"]+)"?',
    ]

    ANALYZE_PATTERNS = [
        r"^오늘\s*(?:요약|정리|분석)",
        r"^이번\s*주\s*(?:요약|정리|분석)",
        r"^이번\s*달\s*(?:요약|정리|분석)",
        r"^(?:빈|비어있는|free)\s*시간",
        r"^얼마나\s*(?:바쁜|일정|일)",
        r"^가장\s*바쁜",
        r"^free\s*time",
        r"^(?:today|this\s+week|this\s+month)(?:'s)?\s+summary",
        r"^how\s+busy",
    ]

    def __init__(self) -> None:
        """Initialize the classifier."""
        # Pre-compile patterns for efficiency
        tables = {
            IntentCategory.NAVIGATE: self.NAVIGATE_PATTERNS,
            IntentCategory.VIEW: self.VIEW_PATTERNS,
            IntentCategory.CREATE: self.CREATE_PATTERNS,
            IntentCategory.EDIT: self.EDIT_PATTERNS,
            IntentCategory.DELETE: self.DELETE_PATTERNS,
            IntentCategory.SEARCH: self.SEARCH_PATTERNS,
            IntentCategory.ANALYZE: self.ANALYZE_PATTERNS,
        }
        self._groups: dict[IntentCategory, list[re.Pattern[str]]] = {
            category: [re.compile(p, re.IGNORECASE) for p in patterns]
            for category, patterns in tables.items()
        }

    def patterns_for(self, category: IntentCategory) -> list[re.Pattern[str]]:
        """Return the compiled patterns of one group, in match order."""
        return list(self._groups[category])

    def classify(self, text: str) -> IntentMatch | None:
        """Classify the given text into an intent.

        Args:
            text: The user's command text.

        Returns:
            The first IntentMatch in group order, or None when nothing matches.
        """
        text = text.strip()
        if not text:
            return None

        for category in GROUP_ORDER:
            if intent := self._try_group(category, text):
                logger.debug(f"Classified {text!r} as {category.value} via {intent.pattern!r}")
                return intent

        logger.debug(f"No intent matched {text!r}")
        return None

    def _try_group(self, category: IntentCategory, text: str) -> IntentMatch | None:
        """Try the patterns of one group in order."""
        for pattern in self._groups[category]:
            match = pattern.search(text)
            if match:
                return IntentMatch(
                    category=category,
                    match=match,
                    pattern=pattern.pattern,
                    text=text,
                )
        return None


__all__ = [
    "GROUP_ORDER",
    "IntentCategory",
    "IntentClassifier",
    "IntentMatch",
]
