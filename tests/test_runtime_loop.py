"""Tests for event application and the main loop wiring."""

from __future__ import annotations

import os
import unittest

from gitt.engine import Mode, NavigationEngine
from gitt.errors import TraversalError
from gitt.history import InMemoryHistorySource, make_records
from gitt.runtime.events import EventChannel, FailureEvent, InputEvent, TickEvent
from gitt.runtime.keys import default_key_registry
from gitt.runtime.loop import RuntimeLoopCallbacks, apply_event, run_main_loop


class _FakeTerminal:
    def __init__(self) -> None:
        self.frames: list[str] = []

    def write(self, frame: str) -> None:
        self.frames.append(frame)


def _engine(count: int = 10, **kwargs) -> NavigationEngine:
    return NavigationEngine(InMemoryHistorySource(make_records(count), **kwargs), list_rows=3, detail_rows=4)


class ApplyEventTests(unittest.TestCase):
    def setUp(self) -> None:
        self.registry = default_key_registry()

    def test_bound_key_applies_command(self) -> None:
        engine = _engine()

        dirty = apply_event(engine, InputEvent("j"), self.registry)

        self.assertTrue(dirty)
        self.assertEqual(engine.revisions.selected_position(), 1)

    def test_unbound_key_is_ignored(self) -> None:
        engine = _engine()

        self.assertFalse(apply_event(engine, InputEvent("z"), self.registry))
        self.assertEqual(engine.revisions.selected_position(), 0)

    def test_tick_only_redraws_log_mode(self) -> None:
        engine = _engine()

        self.assertFalse(apply_event(engine, TickEvent(), self.registry))
        apply_event(engine, InputEvent("L"), self.registry)
        self.assertTrue(apply_event(engine, TickEvent(), self.registry))

    def test_failure_and_disconnect_terminate(self) -> None:
        for event in (FailureEvent("input closed"), None):
            with self.subTest(event=event):
                engine = _engine()
                apply_event(engine, event, self.registry)
                self.assertEqual(engine.mode, Mode.TERMINATED)
                self.assertIsNone(engine.error)

    def test_input_then_tick_applies_in_order(self) -> None:
        engine = _engine()
        channel = EventChannel()
        channel.send(InputEvent("L"))
        channel.send(TickEvent())

        first = apply_event(engine, channel.recv(timeout=0.1), self.registry)
        second = apply_event(engine, channel.recv(timeout=0.1), self.registry)

        # The tick only redraws because the toggle before it was applied first.
        self.assertTrue(first)
        self.assertTrue(second)

    def test_traversal_error_propagates(self) -> None:
        engine = _engine(fail_after=5)

        with self.assertRaises(TraversalError):
            apply_event(engine, InputEvent("G"), self.registry)
        self.assertTrue(engine.terminated)


class RunMainLoopTests(unittest.TestCase):
    def test_loop_resizes_renders_and_stops_on_quit(self) -> None:
        engine = _engine()
        terminal = _FakeTerminal()
        channel = EventChannel()
        for key in ("j", "j", "q"):
            channel.send(InputEvent(key))
        layouts = []

        def render(layout) -> str:
            layouts.append(layout)
            return f"frame {engine.revisions.selected_position()}"

        callbacks = RuntimeLoopCallbacks(
            render_frame=render,
            terminal_size=lambda: os.terminal_size((100, 23)),
            list_pane_percent=50,
        )
        run_main_loop(engine, terminal, channel, default_key_registry(), callbacks)

        self.assertTrue(engine.terminated)
        self.assertEqual(terminal.frames, ["frame 0", "frame 1", "frame 2"])
        self.assertEqual(layouts[0].list_rows, 10)
        self.assertEqual(engine.revisions.window_length, 10)
        self.assertEqual(engine.detail.window_length, 10)

    def test_size_change_is_applied_between_events(self) -> None:
        engine = _engine(30)
        terminal = _FakeTerminal()
        channel = EventChannel()
        channel.send(TickEvent())
        channel.send(InputEvent("q"))
        sizes = iter([(80, 13), (80, 33), (80, 33)])

        callbacks = RuntimeLoopCallbacks(
            render_frame=lambda layout: str(layout.list_rows),
            terminal_size=lambda: os.terminal_size(next(sizes)),
            list_pane_percent=50,
        )
        run_main_loop(engine, terminal, channel, default_key_registry(), callbacks)

        self.assertEqual(terminal.frames, ["5", "15"])

    def test_loop_ends_when_channel_disconnects(self) -> None:
        engine = _engine()
        channel = EventChannel()
        channel.close()

        run_main_loop(
            engine,
            _FakeTerminal(),
            channel,
            default_key_registry(),
            RuntimeLoopCallbacks(render_frame=lambda layout: "", terminal_size=lambda: os.terminal_size((80, 24))),
        )

        self.assertTrue(engine.terminated)


if __name__ == "__main__":
    unittest.main()
