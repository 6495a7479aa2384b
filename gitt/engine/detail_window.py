"""Vertical scroll state over one record's detail lines."""

from __future__ import annotations

from collections.abc import Sequence

from ..history.types import DetailLine


class DetailWindow:
    """Line offset and viewport length over a fixed list of detail lines.

    ``line_index + window_length <= total_lines`` holds whenever the content
    is at least one viewport long; shorter content keeps ``line_index`` at 0.
    """

    def __init__(self, lines: Sequence[DetailLine] = (), window_length: int | None = None) -> None:
        self.lines: tuple[DetailLine, ...] = tuple(lines)
        self.total_lines = len(self.lines)
        self.line_index = 0
        self.window_length = 1 if window_length is None else max(0, window_length)

    def _max_index(self) -> int:
        return max(0, self.total_lines - self.window_length)

    def resize(self, new_length: int) -> None:
        self.window_length = max(0, new_length)
        if self.line_index + self.window_length > self.total_lines:
            self.line_index = self._max_index()

    def first(self) -> None:
        self.line_index = 0

    def last(self) -> None:
        self.line_index = self._max_index()

    def increment(self) -> None:
        self.line_index = min(self.line_index + 1, self._max_index())

    def decrement(self) -> None:
        self.line_index = max(0, min(self.line_index - 1, self._max_index()))

    def page_forward(self) -> None:
        for _ in range(self.window_length):
            self.increment()

    def page_back(self) -> None:
        for _ in range(self.window_length):
            self.decrement()

    def visible_lines(self) -> list[DetailLine]:
        return list(self.lines[self.line_index : self.line_index + self.window_length])


__all__ = ["DetailWindow"]
