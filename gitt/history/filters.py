"""Record filters and the filtered-walk helper used by history sources.

A ``FilterSet`` admits a record when any member filter matches it; an empty
set admits everything. Filters never guess: when a record lacks the data a
filter needs, evaluation raises ``TraversalError``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from ..errors import TraversalError
from .types import Record


class RecordFilter:
    """Predicate deciding stream membership for one record."""

    def matches(self, record: Record) -> bool:
        raise NotImplementedError


def _normalize_prefix(path: str) -> str:
    normalized = path.strip().replace("\\", "/")
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized.strip("/")


@dataclass(frozen=True)
class ByPathPrefix(RecordFilter):
    """Match records touching ``path`` or anything below it."""

    path: str

    def matches(self, record: Record) -> bool:
        if record.paths is None:
            raise TraversalError(f"no changed-path data for {record.short_id}")
        prefix = _normalize_prefix(self.path)
        if not prefix:
            return True
        for changed in record.paths:
            if changed == prefix or changed.startswith(prefix + "/"):
                return True
        return False


@dataclass(frozen=True)
class ByIdSet(RecordFilter):
    """Match records whose id equals, or starts with, one of ``ids``."""

    ids: frozenset[str]

    def matches(self, record: Record) -> bool:
        record_id = record.id.lower()
        if record_id in self.ids:
            return True
        return any(record_id.startswith(candidate) for candidate in self.ids)


@dataclass(frozen=True)
class ByText(RecordFilter):
    """Case-insensitive substring match over message and author."""

    text: str

    def matches(self, record: Record) -> bool:
        needle = self.text.casefold()
        if not needle:
            return True
        haystacks = (record.message or record.summary, record.author, record.email)
        return any(needle in value.casefold() for value in haystacks if value)


class FilterSet:
    """Ordered, de-duplicated collection of record filters."""

    def __init__(self, filters: Iterable[RecordFilter] = ()) -> None:
        ordered: list[RecordFilter] = []
        for record_filter in filters:
            if record_filter not in ordered:
                ordered.append(record_filter)
        self._filters = tuple(ordered)

    @property
    def filters(self) -> tuple[RecordFilter, ...]:
        return self._filters

    def __len__(self) -> int:
        return len(self._filters)

    def __iter__(self) -> Iterator[RecordFilter]:
        return iter(self._filters)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FilterSet):
            return NotImplemented
        return self._filters == other._filters

    def __hash__(self) -> int:
        return hash(self._filters)

    def __repr__(self) -> str:
        return f"FilterSet({list(self._filters)!r})"

    @property
    def needs_paths(self) -> bool:
        return any(isinstance(record_filter, ByPathPrefix) for record_filter in self._filters)

    def matches(self, record: Record) -> bool:
        if not self._filters:
            return True
        return any(record_filter.matches(record) for record_filter in self._filters)


def build_filter_set(
    paths: Iterable[str] = (),
    texts: Iterable[str] = (),
    ids: Iterable[str] = (),
) -> FilterSet:
    """Build a filter set from command-line style value lists."""
    filters: list[RecordFilter] = [ByPathPrefix(path) for path in paths if path.strip()]
    filters.extend(ByText(text) for text in texts if text)
    id_values = frozenset(value.strip().lower() for value in ids if value.strip())
    if id_values:
        filters.append(ByIdSet(id_values))
    return FilterSet(filters)


def filter_records(records: Iterable[Record], filters: FilterSet) -> Iterator[Record]:
    """Yield records admitted by ``filters``, skipping mismatches iteratively."""
    for record in records:
        if filters.matches(record):
            yield record


__all__ = [
    "RecordFilter",
    "ByPathPrefix",
    "ByIdSet",
    "ByText",
    "FilterSet",
    "build_filter_set",
    "filter_records",
]
