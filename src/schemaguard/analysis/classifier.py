"""Breaking-change classification.

An event is breaking when already-deployed service instances, still running
against the old schema, are likely to fail while the rollout is in progress:

  - TableCreated:   never breaking
  - TableDropped:   always breaking
  - ColumnDropped:  always breaking
  - NotNullAdded:   breaking unless the same event set also creates the table,
                    in which case no pre-existing rows can violate it

The not-null rule only checks that a matching TableCreated exists somewhere in
the event set. Relative order of the two change-sets is not considered.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from schemaguard.analysis.events import (
    ChangeEvent,
    ColumnDropped,
    NotNullAdded,
    TableCreated,
    TableDropped,
)

_DROP_MESSAGE = (
    "Dropping the {what} {name} may cause running instances of the service to fail "
    "during the deployment. It will also make a rollback of this change non-trivial."
)

_NOT_NULL_MESSAGE = (
    "Adding a not-null constraint on column {column} for table {table} which already "
    "exists could break existing instances of the service while deploying and makes "
    "rolling back non-trivial."
)


@dataclass(frozen=True)
class Classification:
    """An event together with its verdict and explanation."""

    event: ChangeEvent
    breaking: bool
    message: str


def is_breaking(event: ChangeEvent, all_events: Sequence[ChangeEvent]) -> bool:
    """Decide whether `event` is breaking given every event of the invocation."""
    if isinstance(event, TableCreated):
        return False
    if isinstance(event, NotNullAdded):
        return not any(
            isinstance(other, TableCreated) and other.table == event.table
            for other in all_events
        )
    return True


def message(event: ChangeEvent) -> str:
    """Human-readable description of the rollout risk of `event`."""
    if isinstance(event, TableDropped):
        return _DROP_MESSAGE.format(what="table", name=event.table)
    if isinstance(event, ColumnDropped):
        return _DROP_MESSAGE.format(what="column", name=f"{event.table}.{event.column}")
    if isinstance(event, NotNullAdded):
        return _NOT_NULL_MESSAGE.format(column=event.column, table=event.table)
    return "Not a breaking change"


def classify(events: Sequence[ChangeEvent]) -> list[Classification]:
    """Classify every event against the complete, already materialized set."""
    all_events = tuple(events)
    return [
        Classification(event=event, breaking=is_breaking(event, all_events), message=message(event))
        for event in all_events
    ]
