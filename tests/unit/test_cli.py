"""Unit tests for the command-line shell."""

import os
from datetime import date, datetime
from unittest import mock
from zoneinfo import ZoneInfo

import pytest

from iljeong.__main__ import apply_result, handle_meta, main, parse_args
from iljeong.calendar.models import CalendarEvent, ChatContext, EventTime, ViewType
from iljeong.commands.models import CommandResult, Navigation
from iljeong.config.profiles import PROFILE_ENV
from iljeong.router.interpreter import CommandInterpreter

SEOUL = ZoneInfo("Asia/Seoul")


def make_event(event_id: str, summary: str, hour: int = 10) -> CalendarEvent:
    return CalendarEvent(
        id=event_id,
        summary=summary,
        start=EventTime(date_time=datetime(2025, 1, 1, hour, 0, tzinfo=SEOUL)),
        end=EventTime(date_time=datetime(2025, 1, 1, hour + 1, 0, tzinfo=SEOUL)),
    )


class TestParseArgs:
    """Tests for argument parsing."""

    def test_defaults(self) -> None:
        """Test that no arguments start the shell."""
        args = parse_args([])
        assert args.command is None
        assert args.profile is None
        assert not args.dry_run

    def test_single_command(self) -> None:
        """Test a one-shot command with options."""
        args = parse_args(["--profile", "test", "--timezone", "Asia/Tokyo", "내일"])
        assert args.command == "내일"
        assert args.profile == "test"
        assert args.timezone == "Asia/Tokyo"

    def test_unknown_profile_rejected(self) -> None:
        """Test that argparse refuses unknown profiles."""
        with pytest.raises(SystemExit):
            parse_args(["--profile", "staging"])


class TestApplyResult:
    """Tests for folding results into the shell context."""

    def test_failure_keeps_context(self) -> None:
        """Test that failed commands change nothing."""
        context = ChatContext(events=(make_event("e1", "회의"),))
        result = CommandResult(success=False, message="no", updated_events=())
        assert apply_result(context, result) is context

    def test_selection_follows_edit(self) -> None:
        """Test that the selection tracks the edited copy."""
        original = make_event("e1", "회의")
        edited = make_event("e1", "주간 회의")
        context = ChatContext(events=(original,), selected_event=original)

        result = CommandResult(success=True, message="ok", updated_events=(edited,))
        updated = apply_result(context, result)
        assert updated.selected_event is edited
        assert updated.events == (edited,)

    def test_selection_dropped_on_delete(self) -> None:
        """Test that deleting the selected event clears the selection."""
        event = make_event("e1", "회의")
        context = ChatContext(events=(event,), selected_event=event)

        result = CommandResult(success=True, message="ok", updated_events=())
        assert apply_result(context, result).selected_event is None

    def test_navigation(self) -> None:
        """Test view and date navigation."""
        context = ChatContext()
        view = CommandResult(success=True, message="ok", navigation=Navigation(view=ViewType.MONTH))
        moved = CommandResult(
            success=True, message="ok", navigation=Navigation(date=date(2025, 3, 1))
        )

        context = apply_result(apply_result(context, view), moved)
        assert context.current_view == ViewType.MONTH
        assert context.selected_date == date(2025, 3, 1)


class TestHandleMeta:
    """Tests for ':' shell commands."""

    @pytest.fixture
    def context(self) -> ChatContext:
        """Two events, nothing selected."""
        return ChatContext(events=(make_event("e1", "회의"), make_event("e2", "점심", 12)))

    def test_select_and_clear(self, context: ChatContext) -> None:
        """Test selecting by number and clearing."""
        interpreter = CommandInterpreter()
        selected = handle_meta(":select 2", context, interpreter)
        assert selected.selected_event is not None
        assert selected.selected_event.id == "e2"
        assert handle_meta(":clear", selected, interpreter).selected_event is None

    @pytest.mark.parametrize("line", [":select 9", ":select 0", ":select x", ":select"])
    def test_bad_selection(self, context: ChatContext, line: str, capsys) -> None:
        """Test that bad numbers leave the context alone."""
        assert handle_meta(line, context, CommandInterpreter()) is context
        assert "Unknown event number" in capsys.readouterr().out

    def test_events_listing(self, context: ChatContext, capsys) -> None:
        """Test the event listing marks the selection."""
        context = ChatContext(events=context.events, selected_event=context.events[0])
        handle_meta(":events", context, CommandInterpreter())
        out = capsys.readouterr().out
        assert "* 1. 2025-01-01 10:00  회의  (e1)" in out
        assert "  2. 2025-01-01 12:00  점심  (e2)" in out


class TestMain:
    """Tests for the main entry point."""

    def test_dry_run(self) -> None:
        """Test loading the test profile and exiting."""
        assert main(["--dry-run", "--profile", "test"]) == 0

    def test_missing_config(self, capsys) -> None:
        """Test a missing config file."""
        assert main(["--dry-run", "--config", "/nonexistent/iljeong.yaml"]) == 1
        assert "Config file not found" in capsys.readouterr().err

    def test_invalid_timezone(self, capsys) -> None:
        """Test that an unknown timezone is refused."""
        assert main(["--dry-run", "--profile", "test", "--timezone", "Mars/Olympus"]) == 1
        assert "Unknown timezone" in capsys.readouterr().err

    def test_one_shot_success(self, capsys) -> None:
        """Test a single recognized command."""
        assert main(["--profile", "test", "주간뷰"]) == 0
        assert "[OK] 주간뷰로 전환합니다." in capsys.readouterr().out

    def test_one_shot_failure(self, capsys) -> None:
        """Test a single unrecognized command."""
        assert main(["--profile", "test", "hello"]) == 2
        assert "[!!]" in capsys.readouterr().out

    def test_profile_from_environment(self) -> None:
        """Test that ILJEONG_PROFILE selects the profile without --profile."""
        with mock.patch.dict(os.environ, {PROFILE_ENV: "prod"}):
            assert main(["--dry-run"]) == 0

    def test_config_path_wins_over_profile(self, tmp_path, capsys) -> None:
        """Test that --config is used even when --profile is given."""
        path = tmp_path / "custom.yaml"
        path.write_text("iljeong:\n  suggestions:\n    max_suggestions: 9\n", encoding="utf-8")
        assert main(["--dry-run", "--config", str(path), "--profile", "test"]) == 1
        assert "max_suggestions" in capsys.readouterr().err
