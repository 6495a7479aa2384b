"""Navigation engine: revision list, detail pane, and mode routing.

The engine is the only owner of browsing state. Every mutation goes through
``apply``/``resize``/``terminate`` and is made by one caller at a time (the
main loop). Commands are routed through a flat table with one handler per
mode; a command a mode does not own is ignored.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from enum import Enum

from ..errors import DetailRenderError, GittError, TraversalError
from ..history.diff import placeholder_line
from ..history.filters import FilterSet
from ..history.types import DetailLine, HistorySource, Record
from ..instrument import Timings
from .detail_window import DetailWindow
from .position_cache import PositionCache
from .revision_window import RevisionWindow
from .scrollbar import scrollbar_geometry

logger = logging.getLogger(__name__)


class Mode(Enum):
    LIST = "list"
    DETAIL = "detail"
    LOG = "log"
    TERMINATED = "terminated"


class Command(Enum):
    FIRST = "first"
    LAST = "last"
    INCREMENT = "increment"
    DECREMENT = "decrement"
    PAGE_FORWARD = "page_forward"
    PAGE_BACK = "page_back"
    TOGGLE_DETAIL = "toggle_detail"
    TOGGLE_LOG = "toggle_log"
    QUIT = "quit"


# Both window types expose the same movement method names.
NAVIGATION_METHODS: dict[Command, str] = {
    Command.FIRST: "first",
    Command.LAST: "last",
    Command.INCREMENT: "increment",
    Command.DECREMENT: "decrement",
    Command.PAGE_FORWARD: "page_forward",
    Command.PAGE_BACK: "page_back",
}


class NavigationEngine:
    """Browsing state for one (start point, filter set) session.

    Construction fails with ``ConstructionError`` when the start point is
    invalid or no record matches the filters, so a live engine always has at
    least one record to show.
    """

    def __init__(
        self,
        source: HistorySource,
        start_point: str | None = None,
        filters: FilterSet | None = None,
        *,
        list_rows: int | None = None,
        detail_rows: int | None = None,
        timings: Timings | None = None,
    ) -> None:
        self.source = source
        self.timings = timings if timings is not None else Timings()
        self.mode = Mode.LIST
        self.error: GittError | None = None
        self.list_rows = list_rows if list_rows is not None else 1
        self.detail_rows = detail_rows
        self.start_point: str | None = None
        self.filters = FilterSet()
        self.cache: PositionCache | None = None
        self.revisions: RevisionWindow | None = None
        self.detail = DetailWindow(window_length=detail_rows)
        self._detail_record_id: str | None = None
        self._handlers: dict[Mode, Callable[[Command], None]] = {
            Mode.LIST: self._route_list,
            Mode.DETAIL: self._route_detail,
            Mode.LOG: self._route_log,
            Mode.TERMINATED: self._route_terminated,
        }
        self.attach(start_point, filters if filters is not None else FilterSet())

    # -- lifecycle -----------------------------------------------------------

    def attach(self, start_point: str | None, filters: FilterSet) -> None:
        """Bind to a new start point and filter set, resetting all browsing state.

        The previous binding stays in place when the new one is rejected.
        """
        cache = PositionCache.open(self.source, start_point, filters, timing=self.timings.get("traversal"))

        if self.cache is not None:
            self.cache.close()
        self.start_point = start_point
        self.filters = filters
        self.cache = cache
        self.revisions = RevisionWindow(cache)
        self._detail_record_id = None
        logger.info(
            "attached to %s (%s) with %d filter(s)",
            start_point or "HEAD",
            (cache.start_point or "")[:10],
            len(filters),
        )
        self.revisions.resize(self.list_rows)
        self._sync_detail()

    def close(self) -> None:
        if self.cache is not None:
            self.cache.close()

    def terminate(self, error: GittError | None = None) -> None:
        """Enter Terminated from any mode, remembering ``error`` when given."""
        if error is not None and self.error is None:
            self.error = error
        if self.mode is not Mode.TERMINATED:
            logger.info("session terminated from %s mode", self.mode.value)
        self.mode = Mode.TERMINATED

    @property
    def terminated(self) -> bool:
        return self.mode is Mode.TERMINATED

    # -- updates -------------------------------------------------------------

    def _guarded(self, action: Callable[[], None]) -> None:
        try:
            action()
        except TraversalError as exc:
            self.terminate(exc)
            raise

    def apply(self, command: Command) -> None:
        """Route one command according to the current mode."""
        if command is Command.QUIT:
            self.terminate()
            return
        handler = self._handlers[self.mode]
        self._guarded(lambda: handler(command))

    def resize(self, list_rows: int, detail_rows: int) -> None:
        """Apply new viewport heights to both windows."""
        self.list_rows = max(0, list_rows)
        self.detail_rows = max(0, detail_rows)

        def _resize() -> None:
            assert self.revisions is not None
            self.revisions.resize(self.list_rows)
            self.detail.resize(self.detail_rows)
            self._sync_detail()

        self._guarded(_resize)

    def _route_list(self, command: Command) -> None:
        if command is Command.TOGGLE_DETAIL:
            self.mode = Mode.DETAIL
            return
        if command is Command.TOGGLE_LOG:
            self.mode = Mode.LOG
            return
        method = NAVIGATION_METHODS.get(command)
        if method is None:
            return
        assert self.revisions is not None
        getattr(self.revisions, method)()
        # A window shortened at the end of history regrows once it moves back.
        self.revisions.resize(self.list_rows)
        self._sync_detail()

    def _route_detail(self, command: Command) -> None:
        if command is Command.TOGGLE_DETAIL:
            self.mode = Mode.LIST
            return
        if command is Command.TOGGLE_LOG:
            self.mode = Mode.LOG
            return
        method = NAVIGATION_METHODS.get(command)
        if method is None:
            return
        getattr(self.detail, method)()

    def _route_log(self, command: Command) -> None:
        if command is Command.TOGGLE_LOG:
            self.mode = Mode.LIST

    def _route_terminated(self, command: Command) -> None:
        del command

    def _load_detail(self, record: Record) -> list[DetailLine]:
        started = time.perf_counter()
        try:
            return self.source.detail_for(record)
        except DetailRenderError as exc:
            logger.warning("detail for %s: %s", record.short_id, exc)
            return [placeholder_line(exc)]
        except TraversalError:
            raise
        except GittError as exc:
            raise TraversalError(str(exc)) from exc
        finally:
            assert self.revisions is not None
            self.timings.get("detail").record_max(started, self.revisions.selected_position())

    def _sync_detail(self) -> None:
        """Regenerate detail content when the selected record changed."""
        assert self.revisions is not None
        record = self.revisions.selected_record()
        record_id = record.id if record is not None else None
        if record_id == self._detail_record_id:
            return
        lines = self._load_detail(record) if record is not None else []
        self.detail = DetailWindow(lines, self.detail_rows)
        self._detail_record_id = record_id

    # -- renderer-facing views -----------------------------------------------

    def visible_records(self) -> list[Record]:
        assert self.revisions is not None
        return self.revisions.visible_records()

    @property
    def local_selection(self) -> int:
        assert self.revisions is not None
        return self.revisions.local_selection

    def selected_record(self) -> Record | None:
        assert self.revisions is not None
        return self.revisions.selected_record()

    def detail_scrollbar(self, viewport_height: int) -> tuple[int, int]:
        return scrollbar_geometry(
            viewport_height,
            self.detail.line_index,
            self.detail.window_length,
            self.detail.total_lines,
        )


__all__ = ["Command", "Mode", "NAVIGATION_METHODS", "NavigationEngine"]
