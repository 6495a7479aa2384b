"""Frame rendering: layout, themes, ANSI shaping, and syntax coloring."""

from .frame import RenderContext, render_frame
from .layout import PagerLayout, commit_list_column_widths, compute_layout
from .theme import UITheme, available_theme_names, resolve_theme

__all__ = [
    "PagerLayout",
    "RenderContext",
    "UITheme",
    "available_theme_names",
    "commit_list_column_widths",
    "compute_layout",
    "render_frame",
    "resolve_theme",
]
