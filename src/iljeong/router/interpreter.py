"""Command interpreter pipeline.

Ties the classifier, builder, executor and suggestion generator together
behind a single entry point that turns free text into a CommandResult.
"""

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from ..calendar.models import ChatContext
from ..commands.executor import CommandExecutor, ExecutorSettings
from ..commands.models import AnimationType, Command, CommandResult
from ..commands.temporal import localize
from ..config import IljeongConfig
from ..suggestions.generator import SuggestionGenerator
from .builder import CommandBuilder
from .intent import IntentClassifier

logger = logging.getLogger(__name__)

MSG_UNRECOGNIZED = "명령을 이해할 수 없습니다. 다시 시도해주세요."


def _utc_now() -> datetime:
    return datetime.now(UTC)


class CommandInterpreter:
    """Interprets natural-language calendar commands.

    Stateless between calls: every call receives the current context and
    returns a result; the caller owns the event collection and decides
    whether to adopt result.updated_events.

    Example:
        >>> interpreter = CommandInterpreter()
        >>> result = interpreter.process_command('"팀 회의" 오늘 3시 추가', ChatContext())
        >>> result.success
        True
    """

    def __init__(
        self,
        config: IljeongConfig | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the interpreter.

        Args:
            config: Loaded configuration; defaults are used when omitted.
            clock: Source of the reference time when a call passes none.
        """
        self._config = config or IljeongConfig()
        self._clock = clock or _utc_now
        self._timezone = self._config.interpreter.timezone

        animation = self._config.animation
        settings = ExecutorSettings(
            timezone=self._timezone,
            work_start_hour=self._config.analysis.work_start_hour,
            work_end_hour=self._config.analysis.work_end_hour,
            animation_ms={
                AnimationType.SLIDE: animation.navigate_ms,
                AnimationType.FADE: animation.view_ms,
                AnimationType.ZOOM: animation.create_ms,
            },
        )

        self._classifier = IntentClassifier()
        self._builder = CommandBuilder()
        self._executor = CommandExecutor(settings)
        self._suggestions = SuggestionGenerator(self._config.suggestions.max_suggestions)

    @property
    def timezone(self) -> str:
        """Timezone all relative expressions are resolved in."""
        return self._timezone

    def _reference_time(self, now: datetime | None) -> datetime:
        return localize(now if now is not None else self._clock(), self._timezone)

    def parse_command(
        self, text: str, context: ChatContext, now: datetime | None = None
    ) -> Command | None:
        """Classify text and build a command without executing it.

        Args:
            text: Raw user input.
            context: Current view, selection and events.
            now: Reference time; the clock is used when omitted.

        Returns:
            The Command, or None if no pattern matched.
        """
        intent = self._classifier.classify(text)
        if intent is None:
            return None
        return self._builder.build(intent, context, self._reference_time(now))

    def process_command(
        self, text: str, context: ChatContext, now: datetime | None = None
    ) -> CommandResult:
        """Interpret and execute a command.

        Args:
            text: Raw user input.
            context: Current view, selection and events.
            now: Reference time; the clock is used when omitted.

        Returns:
            The CommandResult. Unrecognized input yields success=False.
        """
        reference = self._reference_time(now)
        command = self.parse_command(text, context, reference)
        if command is None:
            logger.info(f"Unrecognized command: {text!r}")
            return CommandResult(success=False, message=MSG_UNRECOGNIZED)

        result = self._executor.execute(command, context, reference)
        if not result.success:
            logger.info(f"{command.type.value}/{command.action} failed: {result.message}")
        else:
            logger.debug(f"{command.type.value}/{command.action}: {result.message}")
        return result

    async def aprocess_command(
        self, text: str, context: ChatContext, now: datetime | None = None
    ) -> CommandResult:
        """Coroutine form of process_command for async callers."""
        return self.process_command(text, context, now)

    def suggest(self, context: ChatContext, now: datetime | None = None) -> list[str]:
        """Suggest next commands for the current context."""
        return self._suggestions.suggest(context, self._reference_time(now))


__all__ = ["MSG_UNRECOGNIZED", "CommandInterpreter"]
