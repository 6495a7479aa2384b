"""Tests for the scrollable commit-list window.

Covers resize clamping, first/last, single-step movement, and paging.
"""

from __future__ import annotations

import unittest

from gitt.engine import PositionCache, RevisionWindow
from gitt.history import ByText, FilterSet, InMemoryHistorySource, make_records


def _window(count: int, length: int) -> RevisionWindow:
    filters = FilterSet()
    if count == 0:
        # An empty stream comes from a filter nothing matches.
        count, filters = 3, FilterSet([ByText("nothing matches this")])
    cache = PositionCache(InMemoryHistorySource(make_records(count)), None, filters)
    window = RevisionWindow(cache)
    window.resize(length)
    return window


class RevisionWindowResizeTests(unittest.TestCase):
    def test_resize_limits_window_to_available_records(self) -> None:
        for count in (0, 1, 3, 10):
            for length in (0, 1, 3, 5, 20):
                with self.subTest(count=count, length=length):
                    window = _window(count, length)
                    self.assertEqual(window.window_length, min(length, count))
                    if window.window_length == 0:
                        self.assertEqual(window.local_selection, 0)
                    else:
                        self.assertLess(window.local_selection, window.window_length)

    def test_shrinking_clamps_selection_without_moving_top(self) -> None:
        window = _window(20, 10)
        window.global_index = 4
        window.local_selection = 8

        window.resize(3)

        self.assertEqual(window.global_index, 4)
        self.assertEqual(window.window_length, 3)
        self.assertEqual(window.local_selection, 2)

    def test_resize_near_end_counts_from_window_top(self) -> None:
        window = _window(10, 3)
        window.last()

        window.resize(8)

        self.assertEqual(window.global_index, 7)
        self.assertEqual(window.window_length, 3)

    def test_resize_only_counts_what_it_needs(self) -> None:
        source = InMemoryHistorySource(make_records(1000))
        window = RevisionWindow(PositionCache(source, None, FilterSet()))

        window.resize(12)

        self.assertEqual(source.pulled, 12)


class RevisionWindowMovementTests(unittest.TestCase):
    def test_first_covers_leading_records(self) -> None:
        window = _window(5, 3)
        window.last()
        window.first()

        self.assertEqual(window.global_index, 0)
        self.assertEqual(window.local_selection, 0)
        self.assertEqual([record.summary for record in window.visible_records()], ["change 0", "change 1", "change 2"])

    def test_last_selects_final_record(self) -> None:
        window = _window(5, 3)

        window.last()

        self.assertEqual(window.global_index, 2)
        self.assertEqual(window.local_selection, 2)
        self.assertEqual(window.selected_position(), 4)
        self.assertEqual(window.selected_record().summary, "change 4")

    def test_increments_from_first_reach_last(self) -> None:
        for count, length in ((5, 3), (1, 1), (8, 8), (12, 5)):
            with self.subTest(count=count, length=length):
                stepped = _window(count, length)
                stepped.first()
                for _ in range(count - 1):
                    stepped.increment()
                jumped = _window(count, length)
                jumped.last()
                self.assertEqual(
                    (stepped.global_index, stepped.local_selection),
                    (jumped.global_index, jumped.local_selection),
                )

    def test_decrements_from_last_reach_first(self) -> None:
        window = _window(12, 5)
        window.last()
        for _ in range(11):
            window.decrement()

        self.assertEqual((window.global_index, window.local_selection), (0, 0))

    def test_increment_at_end_is_noop(self) -> None:
        window = _window(5, 3)
        window.last()

        window.increment()

        self.assertEqual((window.global_index, window.local_selection), (2, 2))

    def test_decrement_at_start_is_noop(self) -> None:
        window = _window(5, 3)

        window.decrement()

        self.assertEqual((window.global_index, window.local_selection), (0, 0))

    def test_movement_on_empty_window_is_noop(self) -> None:
        window = _window(0, 5)
        for move in (window.first, window.last, window.increment, window.decrement, window.page_forward):
            move()

        self.assertEqual((window.global_index, window.window_length, window.local_selection), (0, 0, 0))
        self.assertIsNone(window.selected_record())

    def test_page_forward_and_back_move_one_window(self) -> None:
        window = _window(20, 4)

        window.page_forward()
        self.assertEqual(window.selected_position(), 4)
        window.page_forward()
        self.assertEqual(window.selected_position(), 8)
        window.page_back()
        self.assertEqual(window.selected_position(), 4)

    def test_reset_returns_to_empty_window(self) -> None:
        window = _window(20, 4)
        window.page_forward()

        window.reset()

        self.assertEqual((window.global_index, window.window_length, window.local_selection), (0, 0, 0))


if __name__ == "__main__":
    unittest.main()
