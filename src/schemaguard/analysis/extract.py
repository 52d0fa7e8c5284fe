"""Map parsed changelog changes onto the event model."""

from __future__ import annotations

from collections.abc import Iterable

from schemaguard.analysis.events import (
    ChangeEvent,
    ColumnDropped,
    NotNullAdded,
    TableCreated,
    TableDropped,
)
from schemaguard.changelog.models import ChangeKind, Changelog, RawChange


def to_event(change: RawChange) -> ChangeEvent | None:
    """Convert one raw change, or return None for kinds that are never classified."""
    if change.kind is ChangeKind.CREATE_TABLE:
        return TableCreated(change.table_name, change.file_path)
    if change.kind is ChangeKind.DROP_TABLE:
        return TableDropped(change.table_name, change.file_path)
    if change.kind is ChangeKind.DROP_COLUMN:
        return ColumnDropped(change.table_name, change.column_name or "", change.file_path)
    if change.kind is ChangeKind.ADD_NOT_NULL_CONSTRAINT:
        return NotNullAdded(change.table_name, change.column_name or "", change.file_path)
    return None


def extract_events(changes: Iterable[RawChange]) -> list[ChangeEvent]:
    """Extract events in input order, silently dropping unrecognised kinds."""
    events = []
    for change in changes:
        event = to_event(change)
        if event is not None:
            events.append(event)
    return events


def extract_from_changelogs(changelogs: Iterable[Changelog]) -> list[ChangeEvent]:
    """Extract events across every change-set of every changelog, in order."""
    return extract_events(change for changelog in changelogs for change in changelog.changes)
