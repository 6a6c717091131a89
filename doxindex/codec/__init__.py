"""Index file codecs and format dispatch.

Native ``.json`` record files, Doxygen ``.js`` search-data files and whole
Doxygen search directories all load into a ``SymbolIndexTable``.
"""

from __future__ import annotations

from pathlib import Path

from ..table import SymbolIndexTable
from .doxygen import (
    SectionIndex,
    dumps_search_data,
    load_search_directory,
    loads_search_data,
    read_search_data,
    write_search_data,
    write_search_directory,
)
from .native import dumps_native, loads_native, read_native, write_native

DOXYGEN_SUFFIX = ".js"


def load_index(path: Path, section: str = "functions") -> SymbolIndexTable:
    """Load a table from a native file, a Doxygen data file, or a search directory."""
    if path.is_dir():
        return load_search_directory(path, section)
    if path.suffix.lower() == DOXYGEN_SUFFIX:
        return read_search_data(path)
    return read_native(path)


def save_index(path: Path, table: SymbolIndexTable) -> None:
    """Write ``table`` in the format implied by the suffix of ``path``."""
    if path.suffix.lower() == DOXYGEN_SUFFIX:
        write_search_data(path, table)
    else:
        write_native(path, table)


__all__ = [
    "SectionIndex",
    "dumps_native",
    "dumps_search_data",
    "load_index",
    "load_search_directory",
    "loads_native",
    "loads_search_data",
    "read_native",
    "read_search_data",
    "save_index",
    "write_native",
    "write_search_data",
    "write_search_directory",
]
