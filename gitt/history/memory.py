"""In-memory history source for tests and embedding."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence

from ..errors import ConstructionError, TraversalError
from .diff import classify_lines
from .filters import FilterSet, filter_records
from .types import DetailLine, Record


class InMemoryHistorySource:
    """Serve a fixed, ordered record list with optional per-record detail.

    ``traverse`` yields lazily, so callers only pay for the records they pull.
    ``detail`` values may be ready-made ``DetailLine`` lists, plain strings, or
    callables returning either.
    """

    def __init__(
        self,
        records: Sequence[Record],
        detail: Mapping[str, object] | None = None,
        *,
        fail_after: int | None = None,
    ) -> None:
        self.records = list(records)
        self.detail = dict(detail or {})
        self.fail_after = fail_after
        self.pulled = 0
        self.detail_requests = 0

    def resolve(self, start_point: str | None) -> str:
        if not self.records:
            raise ConstructionError("repository has no commits")
        if start_point is None or start_point == "HEAD":
            return self.records[0].id
        for record in self.records:
            if record.id == start_point or record.id.startswith(start_point):
                return record.id
        raise ConstructionError(f"invalid revision specifier: {start_point}")

    def _start_index(self, resolved: str) -> int:
        for index, record in enumerate(self.records):
            if record.id == resolved:
                return index
        raise TraversalError(f"unknown start point {resolved}")

    def _walk(self, start: int) -> Iterator[Record]:
        for record in self.records[start:]:
            if self.fail_after is not None and self.pulled >= self.fail_after:
                raise TraversalError("history data unreadable")
            self.pulled += 1
            yield record

    def traverse(self, start_point: str | None, filters: FilterSet) -> Iterator[Record]:
        start = self._start_index(self.resolve(start_point))
        return filter_records(self._walk(start), filters)

    def detail_for(self, record: Record) -> list[DetailLine]:
        self.detail_requests += 1
        value = self.detail.get(record.id)
        if callable(value):
            value = value()
        if value is None:
            return classify_lines([f"commit {record.id}", "", f"    {record.summary}"])
        if isinstance(value, str):
            return classify_lines(value.split("\n"))
        return list(_as_detail_lines(value))


def _as_detail_lines(value: Iterable[object]) -> Iterator[DetailLine]:
    for item in value:
        if not isinstance(item, DetailLine):
            raise TraversalError(f"malformed detail entry {item!r}")
        yield item


def make_records(
    count: int,
    *,
    paths: Callable[[int], tuple[str, ...] | None] | None = None,
    summary: Callable[[int], str] | None = None,
) -> list[Record]:
    """Build ``count`` synthetic records, newest first."""
    records: list[Record] = []
    for index in range(count):
        text = summary(index) if summary is not None else f"change {index}"
        records.append(
            Record(
                id=f"{index:040x}",
                author="Tests",
                email="tests@example.com",
                summary=text,
                message=text,
                paths=paths(index) if paths is not None else (f"file{index}.txt",),
            )
        )
    return records


__all__ = ["InMemoryHistorySource", "make_records"]
