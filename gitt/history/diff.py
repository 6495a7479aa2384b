"""Turn raw ``git show`` output into role-tagged detail lines.

Decoding happens line by line so one malformed line degrades to a
placeholder instead of losing the whole record.
"""

from __future__ import annotations

import logging
import re

from ..errors import DetailRenderError
from .types import DetailLine, LineRole

logger = logging.getLogger(__name__)

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_BINARY_PREFIXES = ("Binary files ", "GIT binary patch")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def decode_detail_line(raw: bytes, line_number: int) -> str:
    """Decode one raw line as UTF-8 display text or raise ``DetailRenderError``."""
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DetailRenderError(line_number, f"not valid UTF-8 at byte {exc.start}") from exc
    return sanitize_terminal_text(text.rstrip("\r"))


def placeholder_line(error: DetailRenderError) -> DetailLine:
    return DetailLine(LineRole.BINARY_NOTE, f"[line {error.line_number} not shown: {error.reason}]")


class _DetailClassifier:
    """Tracks header/file/hunk state while walking a patch top to bottom."""

    def __init__(self) -> None:
        self.seen_diff = False
        self.in_hunk = False

    def role_for(self, text: str) -> LineRole:
        if text.startswith(("diff --git ", "diff --cc ", "diff --combined ")):
            self.seen_diff = True
            self.in_hunk = False
            return LineRole.FILE_HEADER
        if not self.seen_diff:
            return LineRole.HEADER
        if text.startswith("@@"):
            self.in_hunk = True
            return LineRole.HUNK_HEADER
        if text.startswith(_BINARY_PREFIXES):
            return LineRole.BINARY_NOTE
        if not self.in_hunk:
            # mode changes, renames, and any extended header git adds later
            return LineRole.FILE_HEADER
        if text.startswith("+"):
            return LineRole.ADDED
        if text.startswith("-"):
            return LineRole.REMOVED
        return LineRole.CONTEXT


def classify_lines(lines: list[str]) -> list[DetailLine]:
    """Tag already-decoded lines with their presentation role."""
    classifier = _DetailClassifier()
    return [DetailLine(classifier.role_for(text), text) for text in lines]


def parse_detail(raw_output: bytes) -> list[DetailLine]:
    """Split raw patch bytes into detail lines, substituting undecodable ones."""
    classifier = _DetailClassifier()
    out: list[DetailLine] = []
    raw_lines = raw_output.split(b"\n")
    if raw_lines and raw_lines[-1] == b"":
        raw_lines.pop()
    for index, raw in enumerate(raw_lines, start=1):
        try:
            text = decode_detail_line(raw, index)
        except DetailRenderError as exc:
            logger.warning("detail %s", exc)
            out.append(placeholder_line(exc))
            continue
        out.append(DetailLine(classifier.role_for(text), text))
    return out


__all__ = [
    "sanitize_terminal_text",
    "decode_detail_line",
    "placeholder_line",
    "classify_lines",
    "parse_detail",
]
