"""Windowed navigation over lazily produced history."""

from .detail_window import DetailWindow
from .navigation import NAVIGATION_METHODS, Command, Mode, NavigationEngine
from .position_cache import PositionCache
from .revision_window import RevisionWindow
from .scrollbar import scrollbar_geometry

__all__ = [
    "Command",
    "DetailWindow",
    "Mode",
    "NAVIGATION_METHODS",
    "NavigationEngine",
    "PositionCache",
    "RevisionWindow",
    "scrollbar_geometry",
]
