"""UI theme definitions and selection helpers.

Themes are UI-only ANSI palettes (list/detail/chrome). Syntax highlighting
style for diff code remains a separate Pygments setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    divider: str
    reverse: str
    reset: str
    title_active: str
    title_inactive: str
    list_time: str
    list_summary: str
    list_author: str
    detail_header: str
    detail_file_header: str
    detail_hunk_header: str
    detail_added: str
    detail_removed: str
    detail_binary_note: str
    scrollbar_thumb: str
    scrollbar_track: str
    log_timing: str
    # Background SGR parameters laid under syntax-colored added/removed lines.
    added_bg_sgr: str
    removed_bg_sgr: str


DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2m",
    reverse="\033[7m",
    reset="\033[0m",
    title_active="\033[1;38;5;81m",
    title_inactive="\033[2;38;5;250m",
    list_time="\033[38;5;109m",
    list_summary="\033[38;5;252m",
    list_author="\033[38;5;229m",
    detail_header="\033[38;5;229m",
    detail_file_header="\033[1;38;5;252m",
    detail_hunk_header="\033[38;5;44m",
    detail_added="\033[38;5;42m",
    detail_removed="\033[38;5;203m",
    detail_binary_note="\033[2;38;5;214m",
    scrollbar_thumb="\033[48;5;250m",
    scrollbar_track="\033[48;5;236m",
    log_timing="\033[1;38;5;214m",
    added_bg_sgr="48;2;36;74;52",
    removed_bg_sgr="48;2;92;43;49",
)

OCEAN_THEME = UITheme(
    name="ocean",
    divider="\033[2;38;5;31m",
    reverse="\033[7m",
    reset="\033[0m",
    title_active="\033[1;38;5;45m",
    title_inactive="\033[2;38;5;110m",
    list_time="\033[38;5;73m",
    list_summary="\033[38;5;153m",
    list_author="\033[38;5;117m",
    detail_header="\033[38;5;117m",
    detail_file_header="\033[1;38;5;153m",
    detail_hunk_header="\033[38;5;39m",
    detail_added="\033[38;5;84m",
    detail_removed="\033[38;5;210m",
    detail_binary_note="\033[2;38;5;215m",
    scrollbar_thumb="\033[48;5;39m",
    scrollbar_track="\033[48;5;24m",
    log_timing="\033[1;38;5;215m",
    added_bg_sgr="48;2;24;66;70",
    removed_bg_sgr="48;2;84;40;60",
)

PLAIN_THEME = UITheme(
    name="plain",
    divider="",
    reverse="",
    reset="",
    title_active="",
    title_inactive="",
    list_time="",
    list_summary="",
    list_author="",
    detail_header="",
    detail_file_header="",
    detail_hunk_header="",
    detail_added="",
    detail_removed="",
    detail_binary_note="",
    scrollbar_thumb="",
    scrollbar_track="",
    log_timing="",
    added_bg_sgr="",
    removed_bg_sgr="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
