"""Tests for runtime composition: list printing and session wiring."""

from __future__ import annotations

import io
import os
import unittest
from datetime import datetime, timezone
from unittest import mock

from gitt.engine import NavigationEngine, PositionCache
from gitt.history import FilterSet, InMemoryHistorySource, Record, make_records
from gitt.runtime import app
from gitt.runtime.config import PagerSettings
from gitt.runtime.events import InputEvent
from gitt.render.theme import DEFAULT_THEME, PLAIN_THEME


class PrintHistoryTests(unittest.TestCase):
    def test_prints_every_record_in_order(self) -> None:
        records = make_records(4)
        cache = PositionCache.open(InMemoryHistorySource(records), None, FilterSet())
        out = io.StringIO()

        written = app.print_history(cache, out, PLAIN_THEME)

        self.assertEqual(written, 4)
        self.assertEqual(
            [line.split(" ", 1)[0] for line in out.getvalue().splitlines()],
            [record.short_id for record in records],
        )

    def test_max_count_stops_early(self) -> None:
        source = InMemoryHistorySource(make_records(100))
        cache = PositionCache.open(source, None, FilterSet())

        written = app.print_history(cache, io.StringIO(), PLAIN_THEME, max_count=3)

        self.assertEqual(written, 3)
        self.assertLess(source.pulled, 10)
        self.assertEqual(source.detail_requests, 0)

    def test_history_line_formats(self) -> None:
        record = Record(
            id="0123456789abcdef0123456789abcdef01234567",
            author="Ada",
            timestamp=datetime(2024, 5, 6, tzinfo=timezone.utc),
            summary="Tidy \x07 up",
        )

        self.assertEqual(app.format_history_line(record, PLAIN_THEME), "0123456789 2024-05-06 Ada: Tidy \\x07 up")
        self.assertIn("\033[", app.format_history_line(record, DEFAULT_THEME))


class RunSessionTests(unittest.TestCase):
    def test_session_runs_loop_in_raw_mode_and_cleans_up(self) -> None:
        engine = NavigationEngine(InMemoryHistorySource(make_records(3)))
        terminal = mock.MagicMock()
        frames: list[str] = []
        terminal.write.side_effect = frames.append

        def fake_start(producer) -> None:
            producer.channel.send(InputEvent("j"))
            producer.channel.send(InputEvent("q"))

        with mock.patch("gitt.runtime.app.TerminalController", return_value=terminal), mock.patch(
            "gitt.runtime.app.InputProducer.start", autospec=True, side_effect=fake_start
        ), mock.patch("gitt.runtime.loop.shutil.get_terminal_size", return_value=os.terminal_size((80, 20))):
            app.run_session(engine, PagerSettings(), PLAIN_THEME, stdin_fd=0, stdout_fd=1)

        terminal.raw_mode.assert_called_once()
        self.assertTrue(engine.terminated)
        self.assertEqual(len(frames), 2)
        self.assertIn("#2", frames[-1])


if __name__ == "__main__":
    unittest.main()
