"""Immutable symbol search table and its substring query."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence

from .errors import IndexIntegrityError
from .model import IndexEntry

logger = logging.getLogger(__name__)


def query_entries(entries: Sequence[IndexEntry], query: str) -> list[IndexEntry]:
    """Return entries whose key or display name contains ``query``.

    Matching is a case-insensitive substring test. Results keep the input
    order; there is no ranking. The empty query matches every entry.
    """
    if not query:
        return list(entries)
    query_folded = query.casefold()
    return [entry for entry in entries if entry.matches(query_folded)]


class SymbolIndexTable:
    """Ordered, read-only collection of ``IndexEntry`` rows with unique keys."""

    __slots__ = ("_entries", "_by_key")

    def __init__(self, entries: Iterable[IndexEntry] = ()) -> None:
        ordered = tuple(entries)
        by_key: dict[str, IndexEntry] = {}
        for entry in ordered:
            if not isinstance(entry, IndexEntry):
                raise IndexIntegrityError(f"table rows must be IndexEntry values, got {type(entry).__name__}")
            if entry.key in by_key:
                raise IndexIntegrityError(f"duplicate index key: {entry.key!r}")
            by_key[entry.key] = entry
        self._entries = ordered
        self._by_key = by_key

    @property
    def entries(self) -> tuple[IndexEntry, ...]:
        return self._entries

    def keys(self) -> list[str]:
        return [entry.key for entry in self._entries]

    def get(self, key: str) -> IndexEntry | None:
        return self._by_key.get(key)

    def query(self, query: str) -> list[IndexEntry]:
        """Case-insensitive substring search over keys and display names."""
        matches = query_entries(self._entries, query)
        logger.debug("query %r matched %d of %d entries", query, len(matches), len(self._entries))
        return matches

    def target_count(self) -> int:
        return sum(len(entry.targets) for entry in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[IndexEntry]:
        return iter(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SymbolIndexTable):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        return f"SymbolIndexTable({len(self._entries)} entries)"
