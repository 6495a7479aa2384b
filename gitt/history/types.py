"""Record and detail-line types plus the history-source contract."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .filters import FilterSet


@dataclass(frozen=True)
class Record:
    """One commit as seen by the navigation engine."""

    id: str
    parents: tuple[str, ...] = ()
    author: str = ""
    email: str = ""
    timestamp: datetime | None = None
    summary: str = ""
    message: str = ""
    # None means the source could not load the changed paths for this record.
    paths: tuple[str, ...] | None = ()

    @property
    def short_id(self) -> str:
        return self.id[:10]


class LineRole(str, Enum):
    """Presentation role of one detail line."""

    HEADER = "header"
    CONTEXT = "context"
    ADDED = "added"
    REMOVED = "removed"
    FILE_HEADER = "file-header"
    HUNK_HEADER = "hunk-header"
    BINARY_NOTE = "binary-note"


@dataclass(frozen=True)
class DetailLine:
    role: LineRole
    text: str


class HistorySource(Protocol):
    """Supplier of lazily produced records and per-record detail."""

    def resolve(self, start_point: str | None) -> str:
        """Return the resolved id for ``start_point`` or raise ConstructionError."""
        ...

    def traverse(self, start_point: str | None, filters: FilterSet) -> Iterator[Record]:
        """Yield matching records in source order, raising TraversalError on failure."""
        ...

    def detail_for(self, record: Record) -> list[DetailLine]:
        """Return detail lines for ``record``, raising TraversalError on failure."""
        ...


__all__ = ["Record", "LineRole", "DetailLine", "HistorySource"]
