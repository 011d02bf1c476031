"""iljeong entry point.

Usage:
    python -m iljeong [OPTIONS] [COMMAND]

Options:
    --config PATH    Path to YAML config file
    --profile NAME   Profile name (dev, prod, test)
    --timezone NAME  IANA timezone overriding the config
    --help           Show this help message
    --version        Show version
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

from . import __version__
from .calendar.models import ChatContext, ViewType
from .commands.models import CommandResult
from .commands.temporal import get_zone, is_valid_timezone
from .config.loader import load_config
from .config.profiles import detect_profile
from .router.interpreter import CommandInterpreter

EXIT_WORDS = {"quit", "exit", "종료"}


def _load_env() -> None:
    """Load .env from the project root, falling back to the working directory."""
    env_file = Path(__file__).parent.parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)
    else:
        load_dotenv()


def setup_logging(level: str) -> None:
    """Configure logging based on config."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="iljeong",
        description="iljeong - Natural-language calendar command interpreter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m iljeong                          # Interactive shell, auto-detected profile
  python -m iljeong --profile prod           # Run with production profile
  python -m iljeong --config my.yaml         # Run with custom config file
  python -m iljeong '"팀 회의" 내일 3시 추가'  # Run a single command and exit

Environment:
  ILJEONG_PROFILE    Set profile (dev, prod, test)
  ILJEONG_TIMEZONE   Override the interpreter timezone
""",
    )

    parser.add_argument(
        "command",
        nargs="?",
        help="Single command to run instead of the interactive shell",
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML config file",
        metavar="PATH",
    )

    parser.add_argument(
        "--profile",
        choices=["dev", "prod", "test"],
        help="Configuration profile to use",
    )

    parser.add_argument(
        "--timezone",
        metavar="NAME",
        help="IANA timezone, e.g. Asia/Seoul",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"iljeong v{__version__}",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Load config and exit (for testing)",
    )

    return parser.parse_args(argv)


def apply_result(context: ChatContext, result: CommandResult) -> ChatContext:
    """Fold a command result into the shell's context.

    Args:
        context: Context the command ran against
        result: Outcome of the command

    Returns:
        The context for the next command
    """
    if not result.success:
        return context

    if result.updated_events is not None:
        selected = context.selected_event
        if selected is not None:
            # Follow edits of the selected event, drop it if deleted
            selected = next((e for e in result.updated_events if e.id == selected.id), None)
        context = replace(context, events=result.updated_events, selected_event=selected)

    if result.navigation is not None:
        if result.navigation.view is not None:
            context = replace(context, current_view=result.navigation.view)
        if result.navigation.date is not None:
            context = replace(context, selected_date=result.navigation.date)

    return context


def print_result(result: CommandResult) -> None:
    """Print a command result for the shell."""
    marker = "OK" if result.success else "!!"
    print(f"[{marker}] {result.message}")


def print_events(context: ChatContext, interpreter: CommandInterpreter) -> None:
    """Print the in-memory event collection with selection markers."""
    if not context.events:
        print("  (일정 없음)")
        return
    zone = get_zone(interpreter.timezone)
    for index, event in enumerate(context.events, start=1):
        marker = "*" if context.selected_event and event.id == context.selected_event.id else " "
        start = event.start.as_datetime(zone) if event.start else None
        when = f"{start:%Y-%m-%d %H:%M}" if start else "-"
        print(f" {marker}{index:2d}. {when}  {event.summary}  ({event.id})")


def handle_meta(line: str, context: ChatContext, interpreter: CommandInterpreter) -> ChatContext:
    """Handle shell commands that start with ':'.

    Args:
        line: Input line including the leading ':'
        context: Current shell context
        interpreter: Interpreter used for suggestions

    Returns:
        The possibly updated context
    """
    name, _, arg = line[1:].strip().partition(" ")
    if name == "events":
        print_events(context, interpreter)
    elif name == "select":
        try:
            index = int(arg) - 1
            if index < 0:
                raise IndexError(index)
            event = context.events[index]
        except (ValueError, IndexError):
            print(f"Unknown event number: {arg!r}")
            return context
        print(f"Selected: {event.summary}")
        return replace(context, selected_event=event)
    elif name == "clear":
        return replace(context, selected_event=None)
    elif name in ("suggest", "?"):
        for suggestion in interpreter.suggest(context):
            print(f"  - {suggestion}")
    else:
        print("Commands: :events, :select N, :clear, :suggest, quit")
    return context


def run_shell(interpreter: CommandInterpreter, context: ChatContext) -> int:
    """Run the interactive shell until EOF or an exit word.

    Args:
        interpreter: Configured interpreter
        context: Initial context

    Returns:
        Exit code
    """
    print("\n" + "=" * 50)
    print("  iljeong")
    print("=" * 50)
    print(f"  Version: {__version__}")
    print(f"  Timezone: {interpreter.timezone}")
    print("  Type ':help' for shell commands, 'quit' to exit.")
    print("=" * 50 + "\n")

    for suggestion in interpreter.suggest(context):
        print(f"  - {suggestion}")

    while True:
        try:
            line = input("일정> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not line:
            continue
        if line.lower() in EXIT_WORDS:
            break
        if line.startswith(":"):
            context = handle_meta(line, context, interpreter)
            continue

        result = interpreter.process_command(line, context)
        print_result(result)
        context = apply_result(context, result)

    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for iljeong.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    _load_env()
    args = parse_args(argv)

    try:
        # --config wins over --profile; with neither, ILJEONG_PROFILE decides
        config = load_config(path=args.config, profile=args.profile)
    except FileNotFoundError as e:
        print(f"Error: Config file not found: {e}", file=sys.stderr)
        return 1
    except (TypeError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    if args.timezone:
        if not is_valid_timezone(args.timezone):
            print(f"Error: Unknown timezone: {args.timezone}", file=sys.stderr)
            return 1
        config.interpreter.timezone = args.timezone

    setup_logging(config.logging.level)
    logger = logging.getLogger("iljeong")

    logger.info(f"iljeong v{__version__}")
    logger.info(f"Profile: {args.profile or detect_profile().value}")
    logger.info(f"Log level: {config.logging.level}")

    if args.dry_run:
        logger.info("Dry run mode - exiting after config load")
        logger.info(f"Timezone: {config.interpreter.timezone}")
        logger.info(
            f"Working window: {config.analysis.work_start_hour}-{config.analysis.work_end_hour}"
        )
        return 0

    interpreter = CommandInterpreter(config)
    try:
        view = ViewType(config.interpreter.default_view)
    except ValueError:
        logger.warning(f"Unknown default view {config.interpreter.default_view!r}, using day")
        view = ViewType.DAY
    context = ChatContext(current_view=view)

    if args.command:
        result = interpreter.process_command(args.command, context)
        print_result(result)
        return 0 if result.success else 2

    return run_shell(interpreter, context)


if __name__ == "__main__":
    sys.exit(main())
