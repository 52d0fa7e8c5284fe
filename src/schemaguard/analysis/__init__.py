"""Change extraction, breaking-change classification and source locating."""

from schemaguard.analysis.classifier import Classification, classify, is_breaking, message
from schemaguard.analysis.events import (
    ChangeEvent,
    ColumnDropped,
    EventKind,
    NotNullAdded,
    TableCreated,
    TableDropped,
)
from schemaguard.analysis.extract import extract_events, extract_from_changelogs
from schemaguard.analysis.locator import SourceLocator, locate

__all__ = [
    "ChangeEvent",
    "Classification",
    "ColumnDropped",
    "EventKind",
    "NotNullAdded",
    "SourceLocator",
    "TableCreated",
    "TableDropped",
    "classify",
    "extract_events",
    "extract_from_changelogs",
    "is_breaking",
    "locate",
    "message",
]
