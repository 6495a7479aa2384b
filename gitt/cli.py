"""Command-line front door for gitt.

Parses CLI options and opens the repository history. Interactive runs get a
navigation engine; plain listings read the position cache directly.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .engine import NavigationEngine, PositionCache
from .errors import ConstructionError, TraversalError
from .history import GitHistorySource, build_filter_set
from .render.theme import available_theme_names, normalize_theme_name, resolve_theme
from .runtime import print_history, run_session, stdin_is_interactive
from .runtime.config import PagerSettings, load_settings, save_theme_name
from .session_log import LOG_DATE_FORMAT, LOG_FORMAT, SessionLogBuffer, configure_logging

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gitt",
        description="Browse git history with a commit list and a scrollable diff pane.",
    )
    parser.add_argument("revision", nargs="?", default=None, help="Start point (defaults to HEAD).")
    parser.add_argument(
        "-C",
        "--working-directory",
        type=Path,
        default=None,
        help="Run as if started in PATH (defaults to the current directory).",
    )
    parser.add_argument(
        "-p",
        "--path",
        action="append",
        default=[],
        metavar="PREFIX",
        help="Only show commits touching paths under PREFIX (repeatable).",
    )
    parser.add_argument(
        "-t",
        "--text",
        action="append",
        default=[],
        metavar="TEXT",
        help="Only show commits whose message or author contains TEXT (repeatable).",
    )
    parser.add_argument(
        "-i",
        "--id",
        action="append",
        default=[],
        metavar="HASH",
        help="Only show commits with these ids or id prefixes (repeatable).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details.")
    parser.add_argument("--style", default=None, help="Pygments style name for diff code.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--nopager", action="store_true", help="Print matching commits and exit.")
    parser.add_argument(
        "--max-count",
        type=_positive_int,
        default=None,
        help="Print at most N commits with --nopager.",
    )
    return parser


def _merge_settings(args: argparse.Namespace, settings: PagerSettings) -> PagerSettings:
    return PagerSettings(
        theme=args.theme if args.theme is not None else settings.theme,
        style=args.style if args.style is not None else settings.style,
        tick_ms=settings.tick_ms,
        list_pane_percent=settings.list_pane_percent,
    )


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and browse the selected history.

    Construction failures exit with their message; a history read failure
    during the session restores the terminal and exits with status 1.
    """
    args = build_parser().parse_args(argv)
    interactive = not args.nopager and stdin_is_interactive()

    log_buffer: SessionLogBuffer | None = None
    if interactive:
        log_buffer = SessionLogBuffer()
        configure_logging(args.verbose, buffer=log_buffer)
    else:
        package_logger = configure_logging(args.verbose)
        if args.verbose:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
            package_logger.addHandler(handler)

    settings = _merge_settings(args, load_settings())
    if args.theme is not None and args.theme.strip().lower() in available_theme_names():
        save_theme_name(normalize_theme_name(args.theme))
    no_color = args.no_color or (not interactive and not sys.stdout.isatty())
    theme = resolve_theme(settings.theme, no_color=no_color)

    working_directory = args.working_directory if args.working_directory is not None else Path.cwd()
    filters = build_filter_set(args.path, args.text, args.id)
    try:
        source = GitHistorySource.discover(working_directory)
        if not interactive:
            cache = PositionCache.open(source, args.revision, filters)
        else:
            engine = NavigationEngine(source, args.revision, filters)
    except (ConstructionError, TraversalError) as exc:
        raise SystemExit(f"gitt: {exc}") from None

    if not interactive:
        try:
            print_history(cache, sys.stdout, theme, args.max_count)
        except TraversalError as exc:
            raise SystemExit(f"gitt: {exc}") from None
        finally:
            cache.close()
        return

    try:
        run_session(engine, settings, theme, log_buffer=log_buffer)
    except TraversalError as exc:
        sys.stderr.write(f"gitt: {exc}\n")
        raise SystemExit(1) from None


if __name__ == "__main__":
    main()
