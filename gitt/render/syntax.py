"""Syntax coloring for code lines inside diffs.

Pygments is imported on first use. Lexers and formatters are cached per file
name and style; a line that cannot be highlighted is left uncolored.
"""

from __future__ import annotations

import re
from functools import lru_cache

FALLBACK_STYLE = "monokai"

_SGR_RE = re.compile(r"\x1b\[([0-9;]*)m")
_FAINT = "2"
_DARK_FOREGROUNDS = frozenset({"30", "90"})
# 8-bit grays from 232 up to 248 vanish on the red and green diff backgrounds.
_DARK_GRAYS = range(232, 249)
_READABLE_GRAY = ("38", "5", "246")


@lru_cache(maxsize=16)
def _formatter(style: str):
    from pygments.formatters import Terminal256Formatter
    from pygments.styles import get_style_by_name
    from pygments.util import ClassNotFound

    try:
        get_style_by_name(style)
    except ClassNotFound:
        style = FALLBACK_STYLE
    return Terminal256Formatter(style=style)


@lru_cache(maxsize=256)
def _lexer(filename: str):
    from pygments.lexers import get_lexer_for_filename
    from pygments.util import ClassNotFound

    try:
        return get_lexer_for_filename(filename, stripnl=False, ensurenl=False)
    except ClassNotFound:
        return None


def colorize_code_line(code: str, filename: str | None, style: str = FALLBACK_STYLE) -> str | None:
    """Highlight one line of code for ``filename``; ``None`` when not possible."""
    if not code or not filename:
        return None
    lexer = _lexer(filename)
    if lexer is None:
        return None
    from pygments import highlight

    try:
        rendered = highlight(code, lexer, _formatter(style)).rstrip("\n")
    except Exception:
        return None
    return rendered if "\x1b[" in rendered else None


def _is_dark_gray(token: str) -> bool:
    return token.isdigit() and int(token) in _DARK_GRAYS


def _readable_on_diff_background(params: str) -> str:
    """Drop faint text and lift near-black foregrounds to a mid gray."""
    tokens = [token for token in params.split(";") if token]
    kept: list[str] = []
    index = 0
    while index < len(tokens):
        token = tokens[index]
        extended = tokens[index + 1 : index + 3]
        if token == _FAINT:
            pass
        elif token in _DARK_FOREGROUNDS:
            kept.extend(_READABLE_GRAY)
        elif token == "38" and len(extended) == 2 and extended[0] == "5" and _is_dark_gray(extended[1]):
            kept.extend(_READABLE_GRAY)
            index += 2
        else:
            kept.append(token)
        index += 1
    return ";".join(kept)


def apply_line_background(code_line: str, bg_sgr: str) -> str:
    """Keep ``bg_sgr`` active across every SGR reset inside ``code_line``.

    The background is left open so the caller's padding is shaded too; the
    caller emits the final reset.
    """
    if not bg_sgr:
        return code_line

    def _with_background(match: re.Match[str]) -> str:
        params = _readable_on_diff_background(match.group(1))
        return f"\033[{params};{bg_sgr}m" if params else f"\033[{bg_sgr}m"

    return f"\033[{bg_sgr}m" + _SGR_RE.sub(_with_background, code_line)


__all__ = ["FALLBACK_STYLE", "apply_line_background", "colorize_code_line"]
