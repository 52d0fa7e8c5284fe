"""Shared test fixtures for schemaguard."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples"

CHANGELOG_HEADER = """\
<?xml version="1.0" encoding="UTF-8"?>
<databaseChangeLog xmlns="http://www.liquibase.org/xml/ns/dbchangelog">
"""

CHANGELOG_FOOTER = "</databaseChangeLog>\n"


def write_changelog(path: Path, body: str) -> Path:
    """Write `body` wrapped in a changelog root. The header takes two lines."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(CHANGELOG_HEADER + body + CHANGELOG_FOOTER)
    return path


@pytest.fixture
def changelog_dir(tmp_path: Path) -> Path:
    """Directory holding copies of the example changelogs."""
    for name in ("example-changeset.xml", "example2-changeset.xml"):
        shutil.copy(EXAMPLES_DIR / name, tmp_path / name)
    return tmp_path


@pytest.fixture
def sample_changelog(changelog_dir: Path) -> Path:
    """Changelog that creates `person` and alters the never-created `existing`.

    Relevant lines:
      8   createTable person
      23  addNotNullConstraint person.username
      27  addNotNullConstraint existing.new_column
      28  addNotNullConstraint existing.existing_column (attributes wrap to 30)
      34  dropColumn existing.delete_column
    """
    return changelog_dir / "example-changeset.xml"


@pytest.fixture
def second_changelog(changelog_dir: Path) -> Path:
    """Changelog that creates `orders` (line 8) and drops `legacy_orders` (line 15)."""
    return changelog_dir / "example2-changeset.xml"
