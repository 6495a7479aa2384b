"""Position-indexed memo over a lazily filtered record stream.

The cache belongs to exactly one (start point, filter set) pair. Queries past
the cached prefix resume the same traversal instead of restarting it, so the
cost of a lookup is proportional to how far it reaches beyond what is known.
"""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Iterator

from ..errors import ConstructionError, GittError, TraversalError
from ..history.filters import FilterSet
from ..history.types import HistorySource, Record
from ..instrument import Timing

logger = logging.getLogger(__name__)


class PositionCache:
    """Append-only ``position -> record`` table backed by one traversal."""

    def __init__(
        self,
        source: HistorySource,
        start_point: str | None,
        filters: FilterSet,
        *,
        timing: Timing | None = None,
    ) -> None:
        self.source = source
        self.start_point = start_point
        self.filters = filters
        self.timing = timing
        self._records: list[Record] = []
        self._stream: Iterator[Record] | None = None
        self._exhausted = False
        self._failure: TraversalError | None = None

    @classmethod
    def open(
        cls,
        source: HistorySource,
        start_point: str | None,
        filters: FilterSet,
        *,
        timing: Timing | None = None,
    ) -> PositionCache:
        """Resolve ``start_point`` and build a cache holding at least one match.

        Raises ``ConstructionError`` for a bad start point or an empty result.
        """
        cache = cls(source, source.resolve(start_point), filters, timing=timing)
        if cache.get(0) is None:
            cache.close()
            raise ConstructionError("no commits match the given filters")
        return cache

    @property
    def key(self) -> tuple[str | None, FilterSet]:
        return self.start_point, self.filters

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def __len__(self) -> int:
        return len(self._records)

    def _open_stream(self) -> Iterator[Record]:
        if self._stream is None:
            try:
                self._stream = iter(self.source.traverse(self.start_point, self.filters))
            except TraversalError:
                raise
            except GittError as exc:
                raise TraversalError(str(exc)) from exc
        return self._stream

    def _extend_to(self, length: int) -> None:
        """Pull matches until ``length`` records are cached or the stream ends."""
        if len(self._records) >= length or self._exhausted:
            return
        if self._failure is not None:
            raise self._failure
        started = time.perf_counter()
        stream = self._open_stream()
        try:
            while len(self._records) < length:
                try:
                    record = next(stream)
                except StopIteration:
                    self._exhausted = True
                    logger.debug("traversal exhausted after %d records", len(self._records))
                    break
                self._records.append(record)
        except TraversalError as exc:
            self._failure = exc
            logger.error("traversal failed at position %d: %s", len(self._records), exc)
            raise
        finally:
            if self.timing is not None:
                self.timing.record_max(started, len(self._records))

    def get(self, position: int) -> Record | None:
        """Return the record at ``position``, or ``None`` past the end of the stream."""
        if position < 0:
            return None
        self._extend_to(position + 1)
        if position < len(self._records):
            return self._records[position]
        return None

    def count_available_from(self, position: int, limit: int) -> int:
        """Count records at ``position`` onward, stopping once ``limit`` are known."""
        if limit <= 0 or position < 0:
            return 0
        self._extend_to(position + limit)
        return max(0, min(len(self._records), position + limit) - position)

    def total(self) -> int:
        """Exhaust the traversal once and return the full record count."""
        self._extend_to(sys.maxsize)
        return len(self._records)

    def slice(self, position: int, length: int) -> list[Record]:
        """Records in ``[position, position + length)`` that exist."""
        if length <= 0 or position < 0:
            return []
        self._extend_to(position + length)
        return self._records[position : position + length]

    def close(self) -> None:
        """Release the underlying traversal (for git: the ``git log`` process)."""
        stream = self._stream
        self._stream = None
        close = getattr(stream, "close", None)
        if close is not None:
            close()

    def reset(self, start_point: str | None, filters: FilterSet) -> None:
        """Rebind to a new (start point, filters) pair, dropping everything cached."""
        self.close()
        self.start_point = start_point
        self.filters = filters
        self._records = []
        self._exhausted = False
        self._failure = None


__all__ = ["PositionCache"]
