"""Tests for the event model, extraction and breaking-change classification."""

from __future__ import annotations

import dataclasses

import pytest

from schemaguard.analysis.classifier import classify, is_breaking, message
from schemaguard.analysis.events import (
    ColumnDropped,
    EventKind,
    NotNullAdded,
    TableCreated,
    TableDropped,
    event_column,
)
from schemaguard.analysis.extract import extract_events
from schemaguard.changelog.models import ChangeKind, RawChange


def _raw(kind: ChangeKind, table: str, column: str | None = None, tag: str = "x") -> RawChange:
    return RawChange(kind=kind, tag=tag, table_name=table, column_name=column, file_path="db.xml")


class TestEvents:
    def test_kinds(self):
        assert TableCreated("t", "f.xml").kind is EventKind.TABLE_CREATED
        assert TableDropped("t", "f.xml").kind is EventKind.TABLE_DROPPED
        assert ColumnDropped("t", "c", "f.xml").kind is EventKind.COLUMN_DROPPED
        assert NotNullAdded("t", "c", "f.xml").kind is EventKind.NOT_NULL_ADDED

    def test_immutable(self):
        event = TableDropped("orders", "db.xml")
        with pytest.raises(dataclasses.FrozenInstanceError):
            event.table = "other"

    def test_empty_file_rejected(self):
        with pytest.raises(ValueError):
            TableCreated("t", "")
        with pytest.raises(ValueError):
            NotNullAdded("t", "c", "")

    def test_column_only_on_column_events(self):
        assert event_column(TableDropped("t", "f.xml")) is None
        assert event_column(ColumnDropped("t", "c", "f.xml")) == "c"
        assert not hasattr(TableCreated("t", "f.xml"), "column")


class TestExtraction:
    def test_maps_each_kind(self):
        events = extract_events([
            _raw(ChangeKind.CREATE_TABLE, "a"),
            _raw(ChangeKind.DROP_TABLE, "b"),
            _raw(ChangeKind.DROP_COLUMN, "c", "x"),
            _raw(ChangeKind.ADD_NOT_NULL_CONSTRAINT, "d", "y"),
        ])
        assert events == [
            TableCreated("a", "db.xml"),
            TableDropped("b", "db.xml"),
            ColumnDropped("c", "x", "db.xml"),
            NotNullAdded("d", "y", "db.xml"),
        ]

    def test_drops_unknown_kinds_and_keeps_order(self):
        events = extract_events([
            _raw(ChangeKind.OTHER, "a", tag="addColumn"),
            _raw(ChangeKind.DROP_TABLE, "b"),
            _raw(ChangeKind.OTHER, "c", tag="sql"),
            _raw(ChangeKind.CREATE_TABLE, "d"),
        ])
        assert [e.table for e in events] == ["b", "d"]

    def test_empty(self):
        assert extract_events([]) == []


class TestIsBreaking:
    def test_table_created_never_breaking(self):
        created = TableCreated("person", "db.xml")
        assert is_breaking(created, []) is False
        assert is_breaking(created, [TableDropped("person", "db.xml"), created]) is False

    def test_drops_always_breaking(self):
        dropped_table = TableDropped("person", "db.xml")
        dropped_column = ColumnDropped("person", "email", "db.xml")
        context = [TableCreated("person", "db.xml"), dropped_table, dropped_column]
        for event in (dropped_table, dropped_column):
            assert is_breaking(event, []) is True
            assert is_breaking(event, context) is True

    def test_not_null_on_created_table(self):
        event = NotNullAdded("person", "username", "a.xml")
        assert is_breaking(event, [event, TableCreated("person", "b.xml")]) is False

    def test_not_null_on_existing_table(self):
        event = NotNullAdded("existing", "new_column", "a.xml")
        assert is_breaking(event, [event, TableCreated("person", "a.xml")]) is True

    def test_not_null_order_independent(self):
        event = NotNullAdded("person", "username", "a.xml")
        created = TableCreated("person", "a.xml")
        assert is_breaking(event, [event, created]) is False
        assert is_breaking(event, [created, event]) is False

    def test_not_null_table_match_is_case_sensitive(self):
        event = NotNullAdded("Person", "username", "a.xml")
        assert is_breaking(event, [TableCreated("person", "a.xml")]) is True

    def test_not_null_ignores_other_kinds_for_same_table(self):
        event = NotNullAdded("person", "username", "a.xml")
        context = [TableDropped("person", "a.xml"), ColumnDropped("person", "x", "a.xml")]
        assert is_breaking(event, context) is True


class TestMessages:
    def test_drop_table_message(self):
        text = message(TableDropped("orders", "db.xml"))
        assert text.startswith("Dropping the table orders may cause")
        assert "rollback" in text

    def test_drop_column_message(self):
        text = message(ColumnDropped("existing", "delete_column", "db.xml"))
        assert "Dropping the column existing.delete_column" in text

    def test_not_null_message(self):
        text = message(NotNullAdded("existing", "new_column", "db.xml"))
        assert "column new_column for table existing" in text

    def test_created_message(self):
        assert message(TableCreated("t", "db.xml")) == "Not a breaking change"


class TestClassify:
    def test_classify_uses_full_set(self):
        events = [
            NotNullAdded("person", "username", "a.xml"),
            TableCreated("person", "b.xml"),
            NotNullAdded("existing", "c", "a.xml"),
        ]
        results = classify(events)
        assert [r.breaking for r in results] == [False, False, True]
        assert [r.event for r in results] == events
        assert results[2].message == message(events[2])
