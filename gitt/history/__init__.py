"""History sources, records, and record filters."""

from .filters import ByIdSet, ByPathPrefix, ByText, FilterSet, RecordFilter, build_filter_set, filter_records
from .git import GitHistorySource
from .memory import InMemoryHistorySource, make_records
from .types import DetailLine, HistorySource, LineRole, Record

__all__ = [
    "ByIdSet",
    "ByPathPrefix",
    "ByText",
    "DetailLine",
    "FilterSet",
    "GitHistorySource",
    "HistorySource",
    "InMemoryHistorySource",
    "LineRole",
    "Record",
    "RecordFilter",
    "build_filter_set",
    "filter_records",
    "make_records",
]
