"""Main interactive loop: measure, render, receive, apply.

The loop is the single writer of engine state. Each step re-measures the
terminal, applies any size change to both windows, redraws when something
changed, then applies exactly one event from the channel.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Callable
from dataclasses import dataclass

from ..engine import Mode, NavigationEngine
from ..render.layout import PagerLayout, compute_layout
from .events import Event, EventChannel, FailureEvent, InputEvent, TickEvent
from .keys import KeyComboRegistry
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def _default_terminal_size() -> os.terminal_size:
    return shutil.get_terminal_size((80, 24))


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected operations used by ``run_main_loop``."""

    render_frame: Callable[[PagerLayout], str]
    terminal_size: Callable[[], os.terminal_size] = _default_terminal_size
    list_pane_percent: float | None = None


def apply_event(engine: NavigationEngine, event: Event | None, registry: KeyComboRegistry) -> bool:
    """Apply one event to ``engine`` and report whether a redraw is needed.

    ``None`` means the producer disconnected. ``TraversalError`` raised by
    the engine propagates after the engine has entered Terminated.
    """
    if event is None:
        logger.info("event channel disconnected")
        engine.terminate()
        return True
    if isinstance(event, FailureEvent):
        logger.warning("input failure: %s", event.reason)
        engine.terminate()
        return True
    if isinstance(event, TickEvent):
        # Only the log pane shows data that changes without input.
        return engine.mode is Mode.LOG
    if isinstance(event, InputEvent):
        command = registry.lookup(event.key)
        if command is None:
            logger.debug("unbound key %r", event.key)
            return False
        engine.apply(command)
        return True
    return False


def run_main_loop(
    engine: NavigationEngine,
    terminal: TerminalController,
    channel: EventChannel,
    registry: KeyComboRegistry,
    callbacks: RuntimeLoopCallbacks,
) -> None:
    """Run until the engine reaches Terminated.

    The caller owns raw-mode setup; this function only draws and dispatches.
    """
    dirty = True
    last_size: tuple[int, int] | None = None
    layout: PagerLayout | None = None
    while not engine.terminated:
        term = callbacks.terminal_size()
        size = (term.columns, term.lines)
        if size != last_size:
            last_size = size
            layout = compute_layout(term.columns, term.lines, callbacks.list_pane_percent)
            logger.debug(
                "terminal %dx%d: list %d rows, detail %d rows",
                term.columns,
                term.lines,
                layout.list_rows,
                layout.detail_rows,
            )
            engine.resize(layout.list_rows, layout.detail_rows)
            dirty = True

        if dirty and layout is not None:
            terminal.write(callbacks.render_frame(layout))
            dirty = False

        event = channel.recv()
        if apply_event(engine, event, registry):
            dirty = True


__all__ = ["RuntimeLoopCallbacks", "apply_event", "run_main_loop"]
