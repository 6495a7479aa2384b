"""Exception types shared by history sources, the engine, and the CLI.

Construction failures happen before any session exists; traversal failures
end the running session; detail render failures are recovered line by line.
"""

from __future__ import annotations


class GittError(Exception):
    """Base class for all gitt failures."""


class ConstructionError(GittError):
    """Start point or filters cannot produce a browsable history."""


class TraversalError(GittError):
    """Backing history source failed while walking records or building detail."""


class DetailRenderError(GittError):
    """One line of detail content could not be turned into display text."""

    def __init__(self, line_number: int, reason: str) -> None:
        super().__init__(f"line {line_number}: {reason}")
        self.line_number = line_number
        self.reason = reason


__all__ = [
    "GittError",
    "ConstructionError",
    "TraversalError",
    "DetailRenderError",
]
