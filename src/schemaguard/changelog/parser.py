"""XML changelog parser.

Reads Liquibase-style ``databaseChangeLog`` documents into ordered change-sets.
Only the structure needed for breaking-change analysis is modelled: change-set
identity, the element name of each change, and its table/column attributes.
Element names are matched without their XML namespace so both namespaced and
bare changelogs parse the same way.

Supported beyond plain change-sets:
  - ``<include file=...>`` and ``<includeAll path=...>``, followed recursively
  - ``<property name=... value=... [dbms=...]>`` with ``${name}`` substitution
  - ``<dropColumn>`` with nested ``<column name=...>`` children
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from pathlib import Path

from schemaguard.changelog.models import (
    TAG_KIND_MAP,
    ChangeKind,
    ChangeSet,
    Changelog,
    RawChange,
)
from schemaguard.exceptions import ChangelogParseError
from schemaguard.logging_config import get_logger

logger = get_logger("changelog")

ROOT_TAG = "databaseChangeLog"

# Children of a changeSet that are not changes themselves
NON_CHANGE_TAGS = frozenset(
    {"comment", "preConditions", "rollback", "validCheckSum", "modifySql"}
)

_PROPERTY_RE = re.compile(r"\$\{([^}]+)\}")


def _local_name(tag: str) -> str:
    """Strip the '{namespace}' prefix ElementTree puts on qualified tags."""
    return tag.rsplit("}", 1)[-1] if "}" in tag else tag


class ChangelogParser:
    """Parses one changelog file together with everything it includes.

    Usage:
        parser = ChangelogParser(database="postgresql")
        changelog = parser.parse("db/changelog.xml")
    """

    def __init__(self, database: str = "postgresql") -> None:
        self.database = database.lower()
        self._properties: dict[str, str] = {}
        self._stack: list[Path] = []

    def parse(self, file_path: str) -> Changelog:
        self._properties = {}
        self._stack = []
        changelog = Changelog(file_path=file_path)
        self._parse_file(file_path, changelog)
        return changelog

    def _parse_file(self, file_path: str, changelog: Changelog) -> None:
        resolved = Path(file_path).resolve()
        if resolved in self._stack:
            chain = " -> ".join(str(p) for p in [*self._stack, resolved])
            raise ChangelogParseError(file_path, f"include cycle: {chain}")

        root = self._read_root(file_path)
        logger.debug("Parsing changelog %s", file_path)

        self._stack.append(resolved)
        try:
            for element in root:
                if not isinstance(element.tag, str):
                    continue  # comments and processing instructions
                tag = _local_name(element.tag)
                if tag == "property":
                    self._define_property(element)
                elif tag == "changeSet":
                    changelog.change_sets.append(self._parse_change_set(element, file_path))
                elif tag == "include":
                    self._include(element, file_path, changelog)
                elif tag == "includeAll":
                    self._include_all(element, file_path, changelog)
        finally:
            self._stack.pop()

    def _read_root(self, file_path: str) -> ET.Element:
        try:
            tree = ET.parse(file_path)
        except FileNotFoundError:
            raise ChangelogParseError(file_path, "file not found") from None
        except ET.ParseError as e:
            raise ChangelogParseError(file_path, f"malformed XML ({e})") from e
        except OSError as e:
            raise ChangelogParseError(file_path, str(e)) from e

        root = tree.getroot()
        if _local_name(root.tag) != ROOT_TAG:
            raise ChangelogParseError(
                file_path,
                f"expected <{ROOT_TAG}> root element, found <{_local_name(root.tag)}>",
            )
        return root

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    def _define_property(self, element: ET.Element) -> None:
        name = element.get("name")
        value = element.get("value")
        if not name or value is None:
            return
        dbms = element.get("dbms")
        if dbms and self.database not in {d.strip().lower() for d in dbms.split(",")}:
            return
        # First definition wins, later ones are ignored
        self._properties.setdefault(name, value)

    def _expand(self, value: str | None) -> str | None:
        if value is None:
            return None
        return _PROPERTY_RE.sub(
            lambda m: self._properties.get(m.group(1), m.group(0)), value
        )

    # ------------------------------------------------------------------
    # Includes
    # ------------------------------------------------------------------

    def _resolve_reference(self, element: ET.Element, attr: str, current_file: str) -> str | None:
        target = self._expand(element.get(attr))
        if not target:
            return None
        if element.get("relativeToChangelogFile", "false").lower() == "true":
            return str(Path(current_file).parent / target)
        return target

    def _include(self, element: ET.Element, current_file: str, changelog: Changelog) -> None:
        target = self._resolve_reference(element, "file", current_file)
        if target is None:
            raise ChangelogParseError(current_file, "<include> without a 'file' attribute")
        changelog.included_files.append(target)
        self._parse_file(target, changelog)

    def _include_all(self, element: ET.Element, current_file: str, changelog: Changelog) -> None:
        target = self._resolve_reference(element, "path", current_file)
        if target is None:
            raise ChangelogParseError(current_file, "<includeAll> without a 'path' attribute")
        directory = Path(target)
        if not directory.is_dir():
            raise ChangelogParseError(current_file, f"includeAll path is not a directory: {target}")
        for child in sorted(directory.iterdir()):
            if child.is_file() and child.suffix.lower() == ".xml":
                child_path = str(child)
                changelog.included_files.append(child_path)
                self._parse_file(child_path, changelog)

    # ------------------------------------------------------------------
    # Change-sets
    # ------------------------------------------------------------------

    def _parse_change_set(self, element: ET.Element, file_path: str) -> ChangeSet:
        cs_id = self._expand(element.get("id")) or ""
        change_set = ChangeSet(
            id=cs_id,
            author=self._expand(element.get("author")) or "",
            file_path=file_path,
        )
        for child in element:
            if not isinstance(child.tag, str):
                continue
            tag = _local_name(child.tag)
            if tag in NON_CHANGE_TAGS:
                continue
            change_set.changes.extend(self._parse_change(child, tag, cs_id, file_path))

        logger.debug(
            "change-set %s (%s): %d change(s)", cs_id, file_path, len(change_set.changes)
        )
        return change_set

    def _parse_change(
        self, element: ET.Element, tag: str, cs_id: str, file_path: str
    ) -> list[RawChange]:
        kind = TAG_KIND_MAP.get(tag, ChangeKind.OTHER)
        table = self._expand(element.get("tableName")) or ""
        schema = self._expand(element.get("schemaName"))

        if kind is not ChangeKind.OTHER and not table:
            raise ChangelogParseError(
                file_path, f"<{tag}> in change-set '{cs_id}' is missing 'tableName'"
            )

        columns: list[str | None] = [self._expand(element.get("columnName"))]
        if kind is ChangeKind.DROP_COLUMN and columns[0] is None:
            columns = [
                self._expand(col.get("name"))
                for col in element
                if isinstance(col.tag, str) and _local_name(col.tag) == "column"
            ]
        if kind in (ChangeKind.DROP_COLUMN, ChangeKind.ADD_NOT_NULL_CONSTRAINT) and (
            not columns or not all(columns)
        ):
            raise ChangelogParseError(
                file_path, f"<{tag}> in change-set '{cs_id}' is missing 'columnName'"
            )

        return [
            RawChange(
                kind=kind,
                tag=tag,
                table_name=table,
                column_name=column,
                schema_name=schema,
                change_set_id=cs_id,
                file_path=file_path,
            )
            for column in columns
        ]


def parse_changelog(file_path: str, database: str = "postgresql") -> Changelog:
    """Parse a single changelog file, following its includes."""
    return ChangelogParser(database=database).parse(file_path)
