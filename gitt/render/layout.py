"""Screen geometry: pane heights and commit-list column widths."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_LIST_PANE_PERCENT = 35
MIN_SUMMARY_COLUMNS = 50
TIME_COLUMNS = (10, 15)
AUTHOR_COLUMNS = (20, 40)
MIN_AUTHOR_COLUMNS = 8


@dataclass(frozen=True)
class PagerLayout:
    """Row budget of one frame.

    Frame order, top to bottom: list title, list rows, detail title, detail
    rows, status line. The log pane uses the list title row plus everything
    down to the status line.
    """

    columns: int
    lines: int
    list_rows: int
    detail_rows: int

    @property
    def body_rows(self) -> int:
        return max(0, self.lines - 1)

    @property
    def log_rows(self) -> int:
        return max(0, self.body_rows - 1)


def clamp_list_pane_percent(percent: float | int | None) -> float:
    if not isinstance(percent, (int, float)) or isinstance(percent, bool):
        return float(DEFAULT_LIST_PANE_PERCENT)
    return max(10.0, min(90.0, float(percent)))


def compute_layout(columns: int, lines: int, list_pane_percent: float | None = None) -> PagerLayout:
    """Split ``lines`` terminal rows between the list and detail panes."""
    columns = max(1, columns)
    lines = max(1, lines)
    percent = clamp_list_pane_percent(list_pane_percent)
    # Two title rows and one status line frame the panes.
    pane_rows = max(0, lines - 3)
    if pane_rows == 0:
        return PagerLayout(columns=columns, lines=lines, list_rows=0, detail_rows=0)
    list_rows = max(1, int(pane_rows * percent / 100.0))
    list_rows = min(list_rows, pane_rows)
    detail_rows = pane_rows - list_rows
    if detail_rows == 0 and pane_rows > 1:
        list_rows -= 1
        detail_rows = 1
    return PagerLayout(columns=columns, lines=lines, list_rows=list_rows, detail_rows=detail_rows)


def commit_list_column_widths(width: int) -> tuple[int, int, int]:
    """Return ``(time, summary, author)`` widths summing to ``width`` minus separators.

    Time and author prefer 9% and 18% of the width within fixed ranges; the
    summary takes the rest and is protected down to ``MIN_SUMMARY_COLUMNS`` by
    shrinking the author column, then hiding the time column.
    """
    width = max(0, width)
    time_w = max(TIME_COLUMNS[0], min(TIME_COLUMNS[1], round(width * 0.09)))
    author_w = max(AUTHOR_COLUMNS[0], min(AUTHOR_COLUMNS[1], round(width * 0.18)))
    separators = 2
    summary_w = width - time_w - author_w - separators

    if summary_w < MIN_SUMMARY_COLUMNS:
        give = min(author_w - MIN_AUTHOR_COLUMNS, MIN_SUMMARY_COLUMNS - summary_w)
        if give > 0:
            author_w -= give
            summary_w += give
    if summary_w < MIN_SUMMARY_COLUMNS:
        summary_w += time_w + 1
        time_w = 0
        separators = 1
    if summary_w < MIN_SUMMARY_COLUMNS:
        summary_w += author_w + 1
        author_w = 0
        separators = 0
    summary_w = max(0, width - time_w - author_w - separators)
    return time_w, summary_w, author_w


__all__ = [
    "DEFAULT_LIST_PANE_PERCENT",
    "PagerLayout",
    "clamp_list_pane_percent",
    "commit_list_column_widths",
    "compute_layout",
]
