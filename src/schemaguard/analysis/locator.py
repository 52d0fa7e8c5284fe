"""Recover the source line of an event inside its changelog file.

The parsed changelog does not keep source positions, so the line is found
again from the raw text:

  1. Read the file and split it into lines (terminators removed).
  2. Join the lines with no separator and scan the result with the opening-tag
     pattern for the event's kind.
  3. Take the first match whose attributes name the event's table (and column,
     for column-scoped events).
  4. Map the match's start offset back to a line through the cumulative line
     lengths.

Joining without a separator keeps offsets aligned with the cumulative length
table. It also lets a tag whose attributes wrap onto following lines match as
one run of text.

When no tag matches, the locator returns line 1. That is a locator miss, not an
error. An unreadable file raises ``OSError``.
"""

from __future__ import annotations

import re
from bisect import bisect_right
from itertools import accumulate
from pathlib import Path

from schemaguard.analysis.events import (
    ChangeEvent,
    EventKind,
    event_column,
)
from schemaguard.logging_config import get_logger

logger = get_logger("locator")

TAG_PATTERNS: dict[EventKind, re.Pattern[str]] = {
    EventKind.TABLE_CREATED: re.compile(r"<createTable\s+([^>]+)>"),
    EventKind.TABLE_DROPPED: re.compile(r"<dropTable\s+([^>]+)>"),
    EventKind.COLUMN_DROPPED: re.compile(r"<dropColumn\s+([^>]+)>"),
    EventKind.NOT_NULL_ADDED: re.compile(r"<addNotNullConstraint\s+([^>]+)>"),
}


def read_lines(file_path: str | Path) -> list[str]:
    """Read a file as lines without terminators (\\n, \\r\\n and \\r all count).

    Undecodable bytes become U+FFFD, one character each, so changelogs in
    other encodings still locate without shifting offsets.
    """
    text = Path(file_path).read_text(encoding="utf-8", errors="replace")
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _attribute_pattern(name: str, value: str) -> re.Pattern[str]:
    return re.compile(rf'(?<![\w-]){name}="{re.escape(value)}"')


def matches_attributes(event: ChangeEvent, attributes: str) -> bool:
    """Check whether a tag's attribute text names the event's table/column."""
    if not _attribute_pattern("tableName", event.table).search(attributes):
        return False
    column = event_column(event)
    if column is not None:
        return bool(_attribute_pattern("columnName", column).search(attributes))
    return True


def line_ends(lines: list[str]) -> list[int]:
    """Cumulative end offset of each line in the separator-free concatenation."""
    return list(accumulate(len(line) for line in lines))


def line_for_offset(ends: list[int], offset: int) -> int | None:
    """1-based line whose [start, end) range in `ends` holds `offset`."""
    # First line ending after the offset; empty lines end where they start
    index = bisect_right(ends, offset)
    if index >= len(ends):
        return None
    return index + 1


def find_line(event: ChangeEvent, lines: list[str], ends: list[int] | None = None) -> int:
    """Locate `event` in already-read `lines`; 1 when nothing matches."""
    text = "".join(lines)
    for match in TAG_PATTERNS[event.kind].finditer(text):
        if matches_attributes(event, match.group(1)):
            if ends is None:
                ends = line_ends(lines)
            line = line_for_offset(ends, match.start())
            if line is not None:
                return line
    logger.debug("No <%s> tag for %s in %s, reporting line 1", event.kind.value, event.table, event.file)
    return 1


def locate(event: ChangeEvent) -> int:
    """Best-effort 1-based line of `event` in its own file."""
    return find_line(event, read_lines(event.file))


class SourceLocator:
    """Locator that reads each file, and builds its line table, once per instance."""

    def __init__(self) -> None:
        self._files: dict[str, tuple[list[str], list[int]]] = {}

    def locate(self, event: ChangeEvent) -> int:
        cached = self._files.get(event.file)
        if cached is None:
            lines = read_lines(event.file)
            cached = (lines, line_ends(lines))
            self._files[event.file] = cached
        lines, ends = cached
        return find_line(event, lines, ends)
