"""Runtime composition layer for gitt.

Wires the engine, terminal, input producer, renderer, and session log, then
runs the loop. Non-interactive runs print the filtered history instead.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TextIO

from ..engine import NavigationEngine, PositionCache
from ..history.diff import sanitize_terminal_text
from ..history.types import Record
from ..render.frame import RenderContext, render_frame
from ..render.layout import PagerLayout
from ..render.theme import UITheme
from ..session_log import SessionLogBuffer
from .config import PagerSettings
from .events import EventChannel, InputProducer
from .input import KeyReader
from .keys import default_key_registry
from .loop import RuntimeLoopCallbacks, run_main_loop
from .terminal import TerminalController

logger = logging.getLogger(__name__)

PRODUCER_JOIN_SECONDS = 1.0


def format_history_line(record: Record, theme: UITheme) -> str:
    """One ``--nopager`` output line: short id, date, author, summary."""
    when = record.timestamp.strftime("%Y-%m-%d") if record.timestamp is not None else "?"
    summary = sanitize_terminal_text(record.summary)
    author = sanitize_terminal_text(record.author)
    if not theme.reset:
        return f"{record.short_id} {when} {author}: {summary}"
    return (
        f"{theme.list_author}{record.short_id}{theme.reset} "
        f"{theme.list_time}{when}{theme.reset} "
        f"{theme.list_author}{author}{theme.reset}: "
        f"{theme.list_summary}{summary}{theme.reset}"
    )


def print_history(cache: PositionCache, out: TextIO, theme: UITheme, max_count: int | None = None) -> int:
    """Write matching records in source order; returns how many were written.

    Reads the cache directly so no commit detail is ever loaded.
    """
    written = 0
    position = 0
    while max_count is None or written < max_count:
        record = cache.get(position)
        if record is None:
            break
        out.write(format_history_line(record, theme) + "\n")
        written += 1
        position += 1
    return written


def run_session(
    engine: NavigationEngine,
    settings: PagerSettings,
    theme: UITheme,
    *,
    log_buffer: SessionLogBuffer | None = None,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
) -> None:
    """Run the interactive browser until the engine terminates.

    ``TraversalError`` raised during the session propagates after the
    terminal has been restored.
    """
    stdin_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
    stdout_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
    terminal = TerminalController(stdin_fd, stdout_fd)
    channel = EventChannel()
    producer = InputProducer(KeyReader(stdin_fd), channel, settings.tick_seconds)
    registry = default_key_registry()

    def build_frame(layout: PagerLayout) -> str:
        return render_frame(
            RenderContext(
                engine=engine,
                layout=layout,
                theme=theme,
                style=settings.style,
                log_lines=log_buffer.lines() if log_buffer is not None else (),
                timings=engine.timings,
            )
        )

    callbacks = RuntimeLoopCallbacks(
        render_frame=build_frame,
        list_pane_percent=settings.list_pane_percent,
    )
    logger.debug("starting session with tick %dms", settings.tick_ms)
    try:
        with terminal.raw_mode():
            producer.start()
            run_main_loop(engine, terminal, channel, registry, callbacks)
    finally:
        producer.stop()
        channel.close()
        producer.join(PRODUCER_JOIN_SECONDS)
        engine.close()


def stdin_is_interactive() -> bool:
    try:
        return os.isatty(sys.stdin.fileno())
    except (OSError, ValueError):
        return False


__all__ = [
    "format_history_line",
    "print_history",
    "run_session",
    "stdin_is_interactive",
]
