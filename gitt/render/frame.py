"""Frame composition for the list, detail, and log panes.

Rendering is read-only over the navigation engine: it asks for the visible
records, the visible detail lines, and the scrollbar geometry, and turns them
into one ANSI string written to the terminal in a single call.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from ..engine.navigation import Mode, NavigationEngine
from ..history.diff import sanitize_terminal_text
from ..history.types import DetailLine, LineRole, Record
from ..instrument import Timings
from .ansi import fit_ansi_line
from .layout import PagerLayout, commit_list_column_widths
from .syntax import apply_line_background, colorize_code_line
from .theme import UITheme

LIST_TIME_FORMAT = "%Y-%m-%d"
STATUS_HINTS = {
    Mode.LIST: "j/k move  TAB detail  L log  q quit",
    Mode.DETAIL: "j/k scroll  TAB list  L log  q quit",
    Mode.LOG: "L back  q quit",
    Mode.TERMINATED: "",
}


@dataclass(frozen=True)
class RenderContext:
    """Everything needed to draw one frame."""

    engine: NavigationEngine
    layout: PagerLayout
    theme: UITheme
    style: str = "monokai"
    log_lines: Sequence[str] = ()
    timings: Timings = field(default_factory=Timings)


def _styled(text: str, width: int, color: str, theme: UITheme) -> str:
    if not color:
        return fit_ansi_line(text, width)
    return f"{color}{fit_ansi_line(text, width)}{theme.reset}"


def _title_row(label: str, active: bool, width: int, theme: UITheme) -> str:
    color = theme.title_active if active else theme.title_inactive
    text = f" {label} "
    fill = "─" * max(0, width - len(text) - 1)
    return _styled(f"─{text}{fill}", width, color, theme)


def _record_cells(record: Record, width: int) -> tuple[str, str, str, tuple[int, int, int]]:
    widths = commit_list_column_widths(width)
    when = record.timestamp.strftime(LIST_TIME_FORMAT) if record.timestamp is not None else ""
    summary = sanitize_terminal_text(record.summary).replace("\t", " ")
    author = sanitize_terminal_text(record.author)
    return when, summary, author, widths


def render_record_row(record: Record, width: int, selected: bool, theme: UITheme) -> str:
    """One commit-list row: time, summary, author."""
    when, summary, author, (time_w, summary_w, author_w) = _record_cells(record, width)
    cells: list[tuple[str, int, str]] = []
    if time_w:
        cells.append((when, time_w, theme.list_time))
    cells.append((summary, summary_w, theme.list_summary))
    if author_w:
        cells.append((author, author_w, theme.list_author))

    if selected:
        plain = " ".join(fit_ansi_line(text, cell_width) for text, cell_width, _ in cells)
        if not theme.reverse:
            plain = ">" + plain[1:]
        return f"{theme.reverse}{fit_ansi_line(plain, width)}{theme.reset}"
    row = " ".join(_styled(text, cell_width, color, theme) for text, cell_width, color in cells)
    return fit_ansi_line(row, width)


def render_list_pane(ctx: RenderContext) -> list[str]:
    engine, layout, theme = ctx.engine, ctx.layout, ctx.theme
    width = layout.columns
    rows = [_title_row("Commits", engine.mode is Mode.LIST, width, theme)]
    records = engine.visible_records()
    selection = engine.local_selection
    for row_index in range(layout.list_rows):
        if row_index < len(records):
            rows.append(render_record_row(records[row_index], width, row_index == selection, theme))
        else:
            rows.append(" " * width)
    return rows


def file_path_at(lines: Sequence[DetailLine], index: int) -> str | None:
    """Path of the file whose patch contains ``lines[index]``, if any."""
    for position in range(min(index, len(lines) - 1), -1, -1):
        line = lines[position]
        if line.role is not LineRole.FILE_HEADER:
            continue
        text = line.text
        if text.startswith("+++ "):
            target = text[4:]
            if target == "/dev/null":
                continue
            return target[2:] if target.startswith("b/") else target
        if text.startswith("diff --git "):
            _, _, tail = text.rpartition(" b/")
            return tail or None
    return None


def _role_color(role: LineRole, theme: UITheme) -> str:
    return {
        LineRole.HEADER: theme.detail_header,
        LineRole.FILE_HEADER: theme.detail_file_header,
        LineRole.HUNK_HEADER: theme.detail_hunk_header,
        LineRole.ADDED: theme.detail_added,
        LineRole.REMOVED: theme.detail_removed,
        LineRole.BINARY_NOTE: theme.detail_binary_note,
    }.get(role, "")


def render_detail_line(line: DetailLine, filename: str | None, width: int, ctx: RenderContext) -> str:
    theme = ctx.theme
    text = line.text.replace("\t", "    ")
    colorize = bool(theme.reset) and line.role in (LineRole.ADDED, LineRole.REMOVED, LineRole.CONTEXT)
    if colorize and text:
        marker, code = text[0], text[1:]
        highlighted = colorize_code_line(code, filename, ctx.style)
        if highlighted is not None:
            bg = ""
            if line.role is LineRole.ADDED:
                bg = theme.added_bg_sgr
            elif line.role is LineRole.REMOVED:
                bg = theme.removed_bg_sgr
            body = apply_line_background(f"{marker}{highlighted}", bg)
            return f"{fit_ansi_line(body, width)}{theme.reset}"
    return _styled(text, width, _role_color(line.role, theme), theme)


def render_detail_pane(ctx: RenderContext) -> list[str]:
    engine, layout, theme = ctx.engine, ctx.layout, ctx.theme
    width = layout.columns
    content_width = max(0, width - 1)
    record = engine.selected_record()
    label = f"Detail {record.short_id}" if record is not None else "Detail"
    rows = [_title_row(label, engine.mode is Mode.DETAIL, width, theme)]

    detail = engine.detail
    visible = detail.visible_lines()
    offset, size = engine.detail_scrollbar(layout.detail_rows)
    filename = file_path_at(detail.lines, detail.line_index) if visible else None
    for row_index in range(layout.detail_rows):
        if row_index < len(visible):
            line = visible[row_index]
            if line.role is LineRole.FILE_HEADER:
                filename = file_path_at(detail.lines, detail.line_index + row_index)
            body = render_detail_line(line, filename, content_width, ctx)
        else:
            body = " " * content_width
        if width > 0:
            in_thumb = offset <= row_index < offset + size
            if theme.scrollbar_thumb:
                bar = f"{theme.scrollbar_thumb if in_thumb else theme.scrollbar_track} {theme.reset}"
            else:
                bar = "┃" if in_thumb else "│"
            body += bar
        rows.append(body)
    return rows


def render_log_pane(ctx: RenderContext) -> list[str]:
    layout, theme = ctx.layout, ctx.theme
    width = layout.columns
    rows = [_title_row("Log", True, width, theme)]
    timing_lines = ctx.timings.lines()
    budget = layout.log_rows
    body: list[str] = [_styled(line, width, theme.log_timing, theme) for line in timing_lines[:budget]]
    remaining = budget - len(body)
    if remaining > 0:
        tail = list(ctx.log_lines)[-remaining:] if ctx.log_lines else []
        body.extend(fit_ansi_line(sanitize_terminal_text(line), width) for line in tail)
    while len(body) < budget:
        body.append(" " * width)
    rows.extend(body)
    return rows


def render_status_line(ctx: RenderContext) -> str:
    engine = ctx.engine
    record = engine.selected_record()
    parts = [engine.mode.value]
    if record is not None:
        parts.append(record.short_id)
    if engine.revisions is not None:
        parts.append(f"#{engine.revisions.selected_position() + 1}")
    if engine.mode is Mode.DETAIL and engine.detail.total_lines:
        last_line = min(engine.detail.total_lines, engine.detail.line_index + engine.detail.window_length)
        parts.append(f"lines {engine.detail.line_index + 1}-{last_line}/{engine.detail.total_lines}")
    hints = STATUS_HINTS.get(engine.mode, "")
    text = "  ".join(parts)
    if hints:
        text = f"{text}  |  {hints}"
    return _styled(text, ctx.layout.columns, ctx.theme.divider, ctx.theme)


def render_frame(ctx: RenderContext) -> str:
    """Compose a full-screen frame for the engine's current mode."""
    if ctx.engine.mode is Mode.LOG:
        rows = render_log_pane(ctx)
    else:
        rows = render_list_pane(ctx) + render_detail_pane(ctx)
    rows = rows[: ctx.layout.body_rows]
    rows.append(render_status_line(ctx))
    return "\033[H\033[J" + "\r\n".join(rows)


__all__ = [
    "RenderContext",
    "file_path_at",
    "render_detail_line",
    "render_detail_pane",
    "render_frame",
    "render_list_pane",
    "render_log_pane",
    "render_record_row",
    "render_status_line",
]
