"""Doxygen search-data files.

A search directory holds ``searchdata.js`` (section names, labels and the
initial characters present in each section) and one ``<section>_<n>.js`` per
section and initial character, ``n`` being the character's hex position in
the section's character list. Each of those files assigns ``searchData``::

    ['fix',['fix',['../page.html#anchor',1,'NumCpp::Methods::fix(dtype inValue)'],[...]]]

Text fields are HTML-escaped on disk and unescaped in memory.
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..errors import IndexIntegrityError, IndexLoadError
from ..model import IndexEntry, IndexTarget
from ..naming import split_url
from ..table import SymbolIndexTable
from ..text import read_text
from .jsdata import format_array_assignment, format_object_assignment, parse_assignments

logger = logging.getLogger(__name__)

SEARCH_DATA_VARIABLE = "searchData"
SECTION_INDEX_FILE = "searchdata.js"
# Second field of every target; the search widget opens such links in the parent frame.
TARGET_FLAG = 1

SECTION_LABELS: dict[str, str] = {
    "all": "All",
    "namespaces": "Namespaces",
    "classes": "Classes",
    "files": "Files",
    "functions": "Functions",
    "variables": "Variables",
    "typedefs": "Typedefs",
    "enums": "Enumerations",
    "enumvalues": "Enumerator",
    "related": "Friends",
    "defines": "Macros",
    "pages": "Pages",
}


@dataclass(frozen=True)
class SectionIndex:
    """Contents of ``searchdata.js``: per-section name, label and initial characters."""

    names: dict[int, str] = field(default_factory=dict)
    labels: dict[int, str] = field(default_factory=dict)
    contents: dict[int, str] = field(default_factory=dict)

    def section_id(self, section: str) -> int | None:
        for section_id, name in self.names.items():
            if name == section:
                return section_id
        return None

    def characters(self, section: str) -> str:
        section_id = self.section_id(section)
        if section_id is None:
            raise IndexLoadError(f"search index has no section named {section!r}")
        return self.contents.get(section_id, "")


def section_file_name(section: str, position: int) -> str:
    return f"{section}_{position:x}.js"


def _unescape(value: object, what: str, row: int) -> str:
    if not isinstance(value, str):
        raise IndexLoadError(f"record {row}: {what} must be a string, got {type(value).__name__}")
    return html.unescape(value)


def _escape(value: str) -> str:
    return html.escape(value, quote=False)


def _target_from_row(raw: object, row: int) -> IndexTarget:
    if not isinstance(raw, list) or len(raw) != 3:
        raise IndexLoadError(f"record {row}: each target must be a [url, flag, label] triple")
    url, flag, label = raw
    if isinstance(flag, bool) or not isinstance(flag, (int, float)):
        raise IndexLoadError(f"record {row}: target flag must be a number")
    document_path, anchor_id = split_url(_unescape(url, "url", row))
    return IndexTarget(
        document_path=document_path,
        anchor_id=anchor_id,
        qualified_label=_unescape(label, "label", row),
    )


def rows_to_table(rows: object) -> SymbolIndexTable:
    """Build a table from decoded ``searchData`` rows; any bad row fails the load."""
    if not isinstance(rows, list):
        raise IndexLoadError(f"{SEARCH_DATA_VARIABLE} must be an array")
    entries = _rows_to_entries(rows, row_offset=0)
    try:
        return SymbolIndexTable(entries)
    except IndexIntegrityError as exc:
        raise IndexLoadError(str(exc)) from exc


def _rows_to_entries(rows: list[object], row_offset: int) -> list[IndexEntry]:
    entries: list[IndexEntry] = []
    try:
        for idx, record in enumerate(rows):
            row = row_offset + idx
            if not isinstance(record, list) or len(record) != 2:
                raise IndexLoadError(f"record {row}: expected a [key, [displayName, targets...]] pair")
            key, body = record
            if not isinstance(body, list) or not body:
                raise IndexLoadError(f"record {row}: expected a [displayName, targets...] array")
            entries.append(
                IndexEntry(
                    key=_unescape(key, "key", row),
                    display_name=_unescape(body[0], "display name", row),
                    targets=tuple(_target_from_row(raw, row) for raw in body[1:]),
                )
            )
    except IndexIntegrityError as exc:
        raise IndexLoadError(str(exc)) from exc
    return entries


def _search_data_rows(text: str) -> list[object]:
    assignments = parse_assignments(text)
    rows = assignments.get(SEARCH_DATA_VARIABLE)
    if rows is None:
        raise IndexLoadError(f"no {SEARCH_DATA_VARIABLE} assignment found")
    if not isinstance(rows, list):
        raise IndexLoadError(f"{SEARCH_DATA_VARIABLE} must be an array")
    return rows


def table_to_rows(table: SymbolIndexTable) -> list[list[object]]:
    return [
        [
            _escape(entry.key),
            [_escape(entry.display_name)]
            + [[_escape(target.url), TARGET_FLAG, _escape(target.qualified_label)] for target in entry.targets],
        ]
        for entry in table
    ]


def loads_search_data(text: str) -> SymbolIndexTable:
    return rows_to_table(_search_data_rows(text))


def dumps_search_data(table: SymbolIndexTable) -> str:
    return format_array_assignment(SEARCH_DATA_VARIABLE, table_to_rows(table))


def read_search_data(path: Path) -> SymbolIndexTable:
    try:
        text = read_text(path)
    except OSError as exc:
        raise IndexLoadError(f"cannot read {path}: {exc}") from exc
    table = loads_search_data(text)
    logger.debug("loaded %d entries from %s", len(table), path)
    return table


def write_search_data(path: Path, table: SymbolIndexTable) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dumps_search_data(table), encoding="utf-8")
    logger.debug("wrote %d entries to %s", len(table), path)


def _int_keyed_strings(value: object, name: str) -> dict[int, str]:
    if not isinstance(value, dict):
        raise IndexLoadError(f"{name} must be an object")
    out: dict[int, str] = {}
    for key, item in value.items():
        if isinstance(key, bool) or not isinstance(key, int) or not isinstance(item, str):
            raise IndexLoadError(f"{name} must map section numbers to strings")
        out[key] = item
    return out


def loads_section_index(text: str) -> SectionIndex:
    assignments = parse_assignments(text)
    return SectionIndex(
        names=_int_keyed_strings(assignments.get("indexSectionNames", {}), "indexSectionNames"),
        labels=_int_keyed_strings(assignments.get("indexSectionLabels", {}), "indexSectionLabels"),
        contents=_int_keyed_strings(assignments.get("indexSectionsWithContent", {}), "indexSectionsWithContent"),
    )


def dumps_section_index(index: SectionIndex) -> str:
    return "\n".join(
        [
            format_object_assignment("indexSectionsWithContent", index.contents),
            format_object_assignment("indexSectionNames", index.names),
            format_object_assignment("indexSectionLabels", index.labels),
        ]
    )


def split_by_initial(table: SymbolIndexTable) -> list[tuple[str, SymbolIndexTable]]:
    """Partition a table by the first character of each key, characters in sorted order."""
    groups: dict[str, list[IndexEntry]] = {}
    for entry in table:
        groups.setdefault(entry.key[0], []).append(entry)
    return [(ch, SymbolIndexTable(groups[ch])) for ch in sorted(groups)]


def write_search_directory(directory: Path, sections: dict[str, SymbolIndexTable]) -> list[Path]:
    """Write per-character ``searchData`` files plus ``searchdata.js`` for each section."""
    directory.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    names: dict[int, str] = {}
    labels: dict[int, str] = {}
    contents: dict[int, str] = {}
    for section_id, (section, table) in enumerate(sections.items()):
        groups = split_by_initial(table)
        names[section_id] = section
        labels[section_id] = SECTION_LABELS.get(section, section.title())
        contents[section_id] = "".join(ch for ch, _ in groups)
        for position, (_ch, group) in enumerate(groups):
            path = directory / section_file_name(section, position)
            write_search_data(path, group)
            written.append(path)

    index_path = directory / SECTION_INDEX_FILE
    index_path.write_text(dumps_section_index(SectionIndex(names, labels, contents)), encoding="utf-8")
    written.append(index_path)
    logger.info("wrote %d search files to %s", len(written), directory)
    return written


def read_section_index(directory: Path) -> SectionIndex:
    path = directory / SECTION_INDEX_FILE
    try:
        text = read_text(path)
    except OSError as exc:
        raise IndexLoadError(f"cannot read {path}: {exc}") from exc
    return loads_section_index(text)


def _section_files(directory: Path, section: str) -> list[Path]:
    if (directory / SECTION_INDEX_FILE).is_file():
        characters = read_section_index(directory).characters(section)
        return [directory / section_file_name(section, position) for position in range(len(characters))]

    prefix = f"{section}_"
    numbered: list[tuple[int, Path]] = []
    for path in directory.glob(f"{prefix}*.js"):
        suffix = path.stem[len(prefix) :]
        try:
            numbered.append((int(suffix, 16), path))
        except ValueError:
            continue
    return [path for _position, path in sorted(numbered)]


def load_search_directory(directory: Path, section: str = "functions") -> SymbolIndexTable:
    """Merge one section's per-character files, in character order, into one table."""
    paths = _section_files(directory, section)
    if not paths and not (directory / SECTION_INDEX_FILE).is_file():
        raise IndexLoadError(f"no {section!r} search files in {directory}")

    entries: list[IndexEntry] = []
    for path in paths:
        try:
            text = read_text(path)
        except OSError as exc:
            raise IndexLoadError(f"cannot read {path}: {exc}") from exc
        entries.extend(_rows_to_entries(_search_data_rows(text), row_offset=len(entries)))

    try:
        table = SymbolIndexTable(entries)
    except IndexIntegrityError as exc:
        raise IndexLoadError(str(exc)) from exc
    logger.debug("loaded %d %s entries from %d files in %s", len(table), section, len(paths), directory)
    return table
