"""Turn scanned declarations into per-section search tables.

Entries are grouped by search key and sorted by key. Targets keep declaration
order; a declaration seen twice (prototype plus out-of-line definition whose
parameters differ at most in default values) yields one target. Renamed
parameters are not recognized and produce a second target.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .declarations_config import COMPOUND_KINDS
from .declarations_types import SymbolDeclaration
from .model import IndexEntry, IndexTarget
from .naming import compound_page, file_page, member_anchor, search_id
from .table import SymbolIndexTable

logger = logging.getLogger(__name__)

DEFAULT_PAGE_PREFIX = "../"

SECTION_KINDS: dict[str, frozenset[str]] = {
    "all": frozenset({"namespace", "class", "struct", "function"}),
    "namespaces": frozenset({"namespace"}),
    "classes": frozenset({"class", "struct"}),
    "functions": frozenset({"function"}),
}


def page_for_declaration(declaration: SymbolDeclaration, page_prefix: str = DEFAULT_PAGE_PREFIX) -> str:
    """Documentation page that describes ``declaration``.

    Compounds own a page; members live on their enclosing compound's page;
    file-level functions live on the page of their source file.
    """
    if declaration.kind in COMPOUND_KINDS:
        return compound_page(declaration.kind, declaration.qualified_name, page_prefix)
    if declaration.scope and declaration.scope_kind is not None:
        return compound_page(declaration.scope_kind, declaration.scope_name, page_prefix)
    return file_page(declaration.path.name, page_prefix)


def anchor_for_declaration(declaration: SymbolDeclaration) -> str:
    """Compounds are linked at page top; members get a signature-derived anchor."""
    if declaration.kind in COMPOUND_KINDS:
        return ""
    return member_anchor(declaration.kind, declaration.qualified_name, declaration.arguments)


def _label(declaration: SymbolDeclaration, overloaded: bool) -> str:
    if overloaded:
        return declaration.signature
    return declaration.scope_name or declaration.name


def build_table(
    declarations: Iterable[SymbolDeclaration],
    page_prefix: str = DEFAULT_PAGE_PREFIX,
) -> SymbolIndexTable:
    """Group declarations into one entry per search key.

    A single target is labelled with its enclosing scope; targets of an
    overloaded key are labelled with their full qualified signature.
    """
    groups: dict[str, tuple[str, list[tuple[str, str, SymbolDeclaration]]]] = {}
    for declaration in declarations:
        key = search_id(declaration.name)
        _display_name, targets = groups.setdefault(key, (declaration.name, []))
        page = page_for_declaration(declaration, page_prefix)
        anchor = anchor_for_declaration(declaration)
        if any(page == seen_page and anchor == seen_anchor for seen_page, seen_anchor, _ in targets):
            continue
        targets.append((page, anchor, declaration))

    entries: list[IndexEntry] = []
    for key in sorted(groups):
        display_name, targets = groups[key]
        overloaded = len(targets) > 1
        entries.append(
            IndexEntry(
                key=key,
                display_name=display_name,
                targets=tuple(
                    IndexTarget(document_path=page, anchor_id=anchor, qualified_label=_label(declaration, overloaded))
                    for page, anchor, declaration in targets
                ),
            )
        )
    return SymbolIndexTable(entries)


def build_sections(
    declarations: Iterable[SymbolDeclaration],
    page_prefix: str = DEFAULT_PAGE_PREFIX,
    sections: Iterable[str] = tuple(SECTION_KINDS),
) -> dict[str, SymbolIndexTable]:
    """Build one table per requested section, keeping ``sections`` order."""
    collected = list(declarations)
    tables: dict[str, SymbolIndexTable] = {}
    for section in sections:
        kinds = SECTION_KINDS.get(section)
        if kinds is None:
            raise ValueError(f"unknown search section: {section!r}")
        tables[section] = build_table(
            (declaration for declaration in collected if declaration.kind in kinds),
            page_prefix=page_prefix,
        )
        logger.debug("section %s: %d entries", section, len(tables[section]))
    return tables
