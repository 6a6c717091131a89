"""Public package surface for doxindex.

Exports the index table types and ``main`` for programmatic CLI invocation.
Codecs, scanning and table building live in submodules.
"""

from __future__ import annotations

from .errors import DeclarationScanError, DoxIndexError, IndexIntegrityError, IndexLoadError
from .model import IndexEntry, IndexTarget
from .table import SymbolIndexTable, query_entries


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "DeclarationScanError",
    "DoxIndexError",
    "IndexEntry",
    "IndexIntegrityError",
    "IndexLoadError",
    "IndexTarget",
    "SymbolIndexTable",
    "main",
    "query_entries",
]
