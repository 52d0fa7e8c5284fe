"""Changelog parsing for schemaguard."""

from schemaguard.changelog.core import collect_changelogs, parse_changelogs
from schemaguard.changelog.models import ChangeKind, Changelog, ChangeSet, RawChange
from schemaguard.changelog.parser import ChangelogParser, parse_changelog

__all__ = [
    "ChangeKind",
    "ChangeSet",
    "Changelog",
    "ChangelogParser",
    "RawChange",
    "collect_changelogs",
    "parse_changelog",
    "parse_changelogs",
]
