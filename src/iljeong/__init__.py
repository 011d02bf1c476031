"""iljeong - Natural-language calendar command interpreter.

iljeong turns short Korean/English commands into calendar operations:
- Navigation and view changes ("내일", "주간뷰")
- Event creation and edits ('"팀 회의" 오늘 3시 추가', '"회의" 30분 연장')
- Deletion, search and schedule analysis ("오늘 요약", "빈 시간")

The caller owns the event collection; every call returns a result that
carries the new collection when it changed.

Usage:
    python -m iljeong --profile dev
    python -m iljeong '"팀 회의" 내일 3시 추가'
"""

__version__ = "0.1.0"

from .calendar.models import CalendarEvent, ChatContext, EventTime, ViewType
from .commands.models import Command, CommandResult
from .config import IljeongConfig
from .config.loader import load_config
from .router.interpreter import CommandInterpreter

__all__ = [
    "CalendarEvent",
    "ChatContext",
    "Command",
    "CommandInterpreter",
    "CommandResult",
    "EventTime",
    "IljeongConfig",
    "ViewType",
    "__version__",
    "load_config",
]
