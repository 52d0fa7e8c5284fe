"""Canonical events for classifiable structural changes.

``ChangeEvent`` is a closed union of four immutable variants, one per change
kind. Only the column-scoped variants carry a column.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union


class EventKind(str, Enum):
    TABLE_CREATED = "create_table"
    TABLE_DROPPED = "drop_table"
    COLUMN_DROPPED = "drop_column"
    NOT_NULL_ADDED = "add_not_null_constraint"


@dataclass(frozen=True)
class _TableEvent:
    table: str
    file: str

    kind: ClassVar[EventKind]

    def __post_init__(self) -> None:
        if not self.file:
            raise ValueError(f"{type(self).__name__} requires a file path")


@dataclass(frozen=True)
class TableCreated(_TableEvent):
    kind: ClassVar[EventKind] = EventKind.TABLE_CREATED


@dataclass(frozen=True)
class TableDropped(_TableEvent):
    kind: ClassVar[EventKind] = EventKind.TABLE_DROPPED


@dataclass(frozen=True)
class ColumnDropped:
    table: str
    column: str
    file: str

    kind: ClassVar[EventKind] = EventKind.COLUMN_DROPPED

    def __post_init__(self) -> None:
        if not self.file:
            raise ValueError("ColumnDropped requires a file path")


@dataclass(frozen=True)
class NotNullAdded:
    table: str
    column: str
    file: str

    kind: ClassVar[EventKind] = EventKind.NOT_NULL_ADDED

    def __post_init__(self) -> None:
        if not self.file:
            raise ValueError("NotNullAdded requires a file path")


ChangeEvent = Union[TableCreated, TableDropped, ColumnDropped, NotNullAdded]

COLUMN_EVENTS = (ColumnDropped, NotNullAdded)


def event_column(event: ChangeEvent) -> str | None:
    """Column of a column-scoped event, None for table-scoped ones."""
    if isinstance(event, COLUMN_EVENTS):
        return event.column
    return None
