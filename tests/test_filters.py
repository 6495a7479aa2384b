"""Tests for record filters and filter-set composition."""

from __future__ import annotations

import unittest

from gitt.errors import TraversalError
from gitt.history import (
    ByIdSet,
    ByPathPrefix,
    ByText,
    FilterSet,
    Record,
    build_filter_set,
    filter_records,
)


def _record(**overrides) -> Record:
    fields = {
        "id": "3f2a9c0d1e4b5a6978c0d1e2f3a4b5c6d7e8f901",
        "author": "Ada Lovelace",
        "email": "ada@example.com",
        "summary": "Fix parser overflow",
        "message": "Fix parser overflow\n\nGuard the length check.",
        "paths": ("src/parser/lexer.rs", "README.md"),
    }
    fields.update(overrides)
    return Record(**fields)


class ByPathPrefixTests(unittest.TestCase):
    def test_matches_whole_path_components(self) -> None:
        record = _record()

        self.assertTrue(ByPathPrefix("src").matches(record))
        self.assertTrue(ByPathPrefix("src/parser").matches(record))
        self.assertTrue(ByPathPrefix("README.md").matches(record))
        self.assertFalse(ByPathPrefix("sr").matches(record))
        self.assertFalse(ByPathPrefix("docs").matches(record))

    def test_prefix_is_normalized(self) -> None:
        record = _record()

        self.assertTrue(ByPathPrefix("./src/parser/").matches(record))
        self.assertTrue(ByPathPrefix("").matches(record))

    def test_missing_path_data_is_a_traversal_error(self) -> None:
        with self.assertRaises(TraversalError):
            ByPathPrefix("src").matches(_record(paths=None))

    def test_record_without_changes_does_not_match(self) -> None:
        self.assertFalse(ByPathPrefix("src").matches(_record(paths=())))


class ByTextAndIdTests(unittest.TestCase):
    def test_text_is_case_insensitive_over_message_and_author(self) -> None:
        record = _record()

        self.assertTrue(ByText("LENGTH CHECK").matches(record))
        self.assertTrue(ByText("lovelace").matches(record))
        self.assertTrue(ByText("ada@example").matches(record))
        self.assertFalse(ByText("babbage").matches(record))

    def test_id_set_matches_full_ids_and_prefixes(self) -> None:
        record = _record()

        self.assertTrue(ByIdSet(frozenset({record.id})).matches(record))
        self.assertTrue(ByIdSet(frozenset({"3f2a9c"})).matches(record))
        self.assertFalse(ByIdSet(frozenset({"3f2b"})).matches(record))


class FilterSetTests(unittest.TestCase):
    def test_empty_set_matches_everything(self) -> None:
        self.assertTrue(FilterSet().matches(_record(paths=None)))

    def test_any_member_admits_record(self) -> None:
        filters = FilterSet([ByText("babbage"), ByPathPrefix("README.md")])

        self.assertTrue(filters.matches(_record()))
        self.assertFalse(filters.matches(_record(paths=("docs/a.md",))))

    def test_duplicates_are_dropped_and_order_kept(self) -> None:
        filters = FilterSet([ByText("a"), ByPathPrefix("src"), ByText("a")])

        self.assertEqual(filters.filters, (ByText("a"), ByPathPrefix("src")))
        self.assertEqual(filters, FilterSet([ByText("a"), ByPathPrefix("src")]))
        self.assertEqual(hash(filters), hash(FilterSet([ByText("a"), ByPathPrefix("src")])))
        self.assertTrue(filters.needs_paths)
        self.assertFalse(FilterSet([ByText("a")]).needs_paths)

    def test_build_filter_set_collects_ids_into_one_filter(self) -> None:
        filters = build_filter_set(paths=["src", " "], texts=["fix"], ids=["ABC123", "def"])

        self.assertEqual(
            filters.filters,
            (ByPathPrefix("src"), ByText("fix"), ByIdSet(frozenset({"abc123", "def"}))),
        )

    def test_filter_records_is_lazy(self) -> None:
        pulled: list[int] = []

        def stream():
            for index in range(1000):
                pulled.append(index)
                yield _record(id=f"{index:040x}", summary=f"item {index}", message=f"item {index}")

        matches = filter_records(stream(), FilterSet([ByText("item 1")]))

        self.assertEqual(next(matches).summary, "item 1")
        self.assertEqual(pulled, [0, 1])

    def test_filter_failure_propagates_from_walk(self) -> None:
        records = [_record(), _record(paths=None)]

        with self.assertRaises(TraversalError):
            list(filter_records(records, FilterSet([ByPathPrefix("docs")])))


if __name__ == "__main__":
    unittest.main()
