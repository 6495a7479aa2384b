"""Scrollable, selectable window over the filtered record stream."""

from __future__ import annotations

from ..history.types import Record
from .position_cache import PositionCache


class RevisionWindow:
    """Scroll offset, visible length, and in-window selection for the list pane.

    ``window_length`` never exceeds the records that actually exist from
    ``global_index`` onward, and ``local_selection`` always points inside the
    window. With an empty window every movement is a no-op.
    """

    def __init__(self, cache: PositionCache) -> None:
        self.cache = cache
        self.global_index = 0
        self.window_length = 0
        self.local_selection = 0

    def reset(self) -> None:
        self.global_index = 0
        self.window_length = 0
        self.local_selection = 0

    def resize(self, new_length: int) -> None:
        """Fit the window to ``new_length`` rows without moving its top."""
        new_length = max(0, new_length)
        available = self.cache.count_available_from(self.global_index, new_length)
        self.window_length = min(new_length, available)
        self.local_selection = min(self.local_selection, max(0, self.window_length - 1))

    def first(self) -> None:
        self.global_index = 0
        self.local_selection = 0

    def last(self) -> None:
        if self.window_length == 0:
            return
        total = self.cache.total()
        self.global_index = max(0, total - self.window_length)
        self.local_selection = max(0, self.window_length - 1)

    def increment(self) -> None:
        if self.window_length == 0:
            return
        if self.local_selection + 1 < self.window_length:
            self.local_selection += 1
        elif self.cache.count_available_from(self.global_index + self.window_length, 1) > 0:
            # Scroll; the selection stays pinned to the bottom row.
            self.global_index += 1

    def decrement(self) -> None:
        if self.window_length == 0:
            return
        if self.local_selection > 0:
            self.local_selection -= 1
        else:
            self.global_index = max(0, self.global_index - 1)

    def page_forward(self) -> None:
        for _ in range(self.window_length):
            self.increment()

    def page_back(self) -> None:
        for _ in range(self.window_length):
            self.decrement()

    def selected_position(self) -> int:
        return self.global_index + self.local_selection

    def selected_record(self) -> Record | None:
        if self.window_length == 0:
            return None
        return self.cache.get(self.selected_position())

    def visible_records(self) -> list[Record]:
        return self.cache.slice(self.global_index, self.window_length)


__all__ = ["RevisionWindow"]
