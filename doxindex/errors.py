"""Error hierarchy for index loading, validation and declaration scanning."""

from __future__ import annotations

__all__ = [
    "DeclarationScanError",
    "DoxIndexError",
    "IndexIntegrityError",
    "IndexLoadError",
]


class DoxIndexError(RuntimeError):
    """Base exception for all doxindex failures."""


class IndexIntegrityError(DoxIndexError):
    """Raised when entries violate table invariants (empty targets, duplicate keys)."""


class IndexLoadError(DoxIndexError):
    """Raised when an index file cannot be read or decoded into a table.

    Loading never returns a partial table: any malformed record fails the
    whole load with this single condition.
    """


class DeclarationScanError(DoxIndexError):
    """Raised when a source file cannot be read or parsed for declarations."""
