"""Changelog discovery and batch parsing."""

from __future__ import annotations

import fnmatch
import os
from pathlib import Path

from schemaguard.changelog.models import Changelog
from schemaguard.changelog.parser import ChangelogParser
from schemaguard.config import ProjectConfig


def collect_changelogs(paths: list[str], config: ProjectConfig | None = None) -> list[str]:
    """Expand the given paths into an ordered list of changelog files.

    Files are kept as given and in the given order. Directories are walked and
    contribute their changelog files sorted by path, skipping excluded entries.
    """
    if config is None:
        config = ProjectConfig()

    files: list[str] = []
    for path in paths:
        if Path(path).is_dir():
            files.extend(_collect_from_directory(path, config))
        else:
            files.append(path)
    return files


def parse_changelogs(
    files: list[str],
    config: ProjectConfig | None = None,
    progress_callback: callable | None = None,
) -> list[Changelog]:
    """Parse each changelog in order. The first parse failure propagates."""
    if config is None:
        config = ProjectConfig()

    parser = ChangelogParser(database=config.database)
    results = []
    total = len(files)
    for i, file_path in enumerate(files):
        if progress_callback:
            progress_callback(file_path, i + 1, total)
        results.append(parser.parse(file_path))
    return results


def _collect_from_directory(root: str, config: ProjectConfig) -> list[str]:
    suffixes = {s.lower() for s in config.changelog_suffixes}
    files = []
    for dirpath, dirnames, filenames in os.walk(root):
        rel_dir = os.path.relpath(dirpath, root)

        dirnames[:] = [
            d
            for d in dirnames
            if not _should_exclude(os.path.join(rel_dir, d) if rel_dir != "." else d,
                                   config.exclude_patterns)
        ]

        for filename in filenames:
            rel_path = os.path.join(rel_dir, filename) if rel_dir != "." else filename
            if _should_exclude(rel_path, config.exclude_patterns):
                continue
            if Path(filename).suffix.lower() not in suffixes:
                continue
            files.append(os.path.join(dirpath, filename))

    return sorted(files)


def _should_exclude(path: str, patterns: list[str]) -> bool:
    """Check if a path matches any exclusion pattern."""
    path_parts = Path(path).parts
    for pattern in patterns:
        if fnmatch.fnmatch(path, pattern):
            return True
        for part in path_parts:
            if fnmatch.fnmatch(part, pattern):
                return True
    return False
