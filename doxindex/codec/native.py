"""Native record format: ``[key, [displayName, [[path, anchor, label], ...]]]`` rows in JSON."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from ..errors import IndexIntegrityError, IndexLoadError
from ..model import IndexEntry, IndexTarget
from ..table import SymbolIndexTable
from ..text import read_text

logger = logging.getLogger(__name__)


def table_to_records(table: SymbolIndexTable) -> list[list[object]]:
    return [
        [
            entry.key,
            [
                entry.display_name,
                [[target.document_path, target.anchor_id, target.qualified_label] for target in entry.targets],
            ],
        ]
        for entry in table
    ]


def _require_str(value: object, what: str, row: int) -> str:
    if not isinstance(value, str):
        raise IndexLoadError(f"record {row}: {what} must be a string, got {type(value).__name__}")
    return value


def _target_from_record(raw: object, row: int) -> IndexTarget:
    if not isinstance(raw, (list, tuple)) or len(raw) != 3:
        raise IndexLoadError(f"record {row}: each target must be a [path, anchor, label] triple")
    path, anchor, label = raw
    return IndexTarget(
        document_path=_require_str(path, "document path", row),
        anchor_id=_require_str(anchor, "anchor id", row),
        qualified_label=_require_str(label, "qualified label", row),
    )


def records_to_table(records: object) -> SymbolIndexTable:
    """Validate decoded records and build a table, failing the whole load on any bad row."""
    if not isinstance(records, (list, tuple)):
        raise IndexLoadError("index data must be a list of records")

    entries: list[IndexEntry] = []
    try:
        for row, record in enumerate(records):
            if not isinstance(record, (list, tuple)) or len(record) != 2:
                raise IndexLoadError(f"record {row}: expected a [key, [displayName, targets]] pair")
            key, body = record
            if not isinstance(body, (list, tuple)) or len(body) != 2:
                raise IndexLoadError(f"record {row}: expected a [displayName, targets] pair")
            display_name, raw_targets = body
            if not isinstance(raw_targets, (list, tuple)):
                raise IndexLoadError(f"record {row}: targets must be a list")
            entries.append(
                IndexEntry(
                    key=_require_str(key, "key", row),
                    display_name=_require_str(display_name, "display name", row),
                    targets=tuple(_target_from_record(raw, row) for raw in raw_targets),
                )
            )
        return SymbolIndexTable(entries)
    except IndexIntegrityError as exc:
        raise IndexLoadError(str(exc)) from exc


def dumps_native(table: SymbolIndexTable) -> str:
    """Serialize with one record per line so diffs between builds stay readable."""
    rows = [json.dumps(record, ensure_ascii=False) for record in table_to_records(table)]
    if not rows:
        return "[]\n"
    return "[\n" + ",\n".join(rows) + "\n]\n"


def loads_native(text: str) -> SymbolIndexTable:
    try:
        records = json.loads(text)
    except json.JSONDecodeError as exc:
        raise IndexLoadError(f"invalid JSON: {exc}") from exc
    except RecursionError as exc:
        raise IndexLoadError("index nesting too deep") from exc
    return records_to_table(records)


def read_native(path: Path) -> SymbolIndexTable:
    try:
        text = read_text(path)
    except OSError as exc:
        raise IndexLoadError(f"cannot read {path}: {exc}") from exc
    table = loads_native(text)
    logger.debug("loaded %d entries from %s", len(table), path)
    return table


def write_native(path: Path, table: SymbolIndexTable) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dumps_native(table), encoding="utf-8")
    logger.debug("wrote %d entries to %s", len(table), path)
