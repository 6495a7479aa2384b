"""Proportional scrollbar geometry for the detail pane."""

from __future__ import annotations

import math


def scrollbar_geometry(
    viewport_height: int,
    line_index: int,
    window_length: int,
    total_lines: int,
) -> tuple[int, int]:
    """Return ``(offset, size)`` of the scrollbar thumb in rows.

    ``offset + size <= viewport_height`` holds for every input, including
    windows larger than the content and out-of-range line indexes.
    """
    if viewport_height <= 0 or total_lines <= 0:
        return 0, 0
    scaling = viewport_height / total_lines
    visible = max(0, min(window_length, total_lines))
    size = math.floor(scaling * visible + 0.5)
    offset = math.floor(scaling * max(0, line_index))
    offset = min(offset, viewport_height)
    size = max(0, min(size, viewport_height - offset))
    return offset, size


__all__ = ["scrollbar_geometry"]
