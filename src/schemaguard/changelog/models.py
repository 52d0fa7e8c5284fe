"""Data models for parsed changelogs, change-sets and raw changes."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class ChangeKind(str, Enum):
    """Structural change kinds recognised by the parser."""

    CREATE_TABLE = "create_table"
    DROP_TABLE = "drop_table"
    DROP_COLUMN = "drop_column"
    ADD_NOT_NULL_CONSTRAINT = "add_not_null_constraint"
    OTHER = "other"


# Changelog element name -> change kind
TAG_KIND_MAP: dict[str, ChangeKind] = {
    "createTable": ChangeKind.CREATE_TABLE,
    "dropTable": ChangeKind.DROP_TABLE,
    "dropColumn": ChangeKind.DROP_COLUMN,
    "addNotNullConstraint": ChangeKind.ADD_NOT_NULL_CONSTRAINT,
}


class RawChange(BaseModel):
    """A single structural change as written in a change-set."""

    kind: ChangeKind
    tag: str  # element name, e.g. "addColumn"
    table_name: str = ""
    column_name: str | None = None
    schema_name: str | None = None
    change_set_id: str = ""
    file_path: str  # file of the enclosing change-set


class ChangeSet(BaseModel):
    """A named, authored group of changes applied as a unit."""

    id: str
    author: str = ""
    file_path: str
    changes: list[RawChange] = Field(default_factory=list)


class Changelog(BaseModel):
    """All change-sets reachable from one changelog file, includes resolved."""

    file_path: str
    change_sets: list[ChangeSet] = Field(default_factory=list)
    included_files: list[str] = Field(default_factory=list)

    @property
    def changes(self) -> list[RawChange]:
        return [change for cs in self.change_sets for change in cs.changes]
