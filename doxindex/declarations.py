"""Declaration extraction from C and C++ sources.

Parses files with Tree-sitter and walks namespaces, classes and structs,
recording every namespace, compound and function declaration together with
its enclosing scope. Function bodies are not entered.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator
from dataclasses import replace
from functools import lru_cache
from pathlib import Path

from .declarations_config import (
    CLASS_KIND_BY_NODE_TYPE,
    COMPOUND_KINDS,
    CONTAINER_NODE_TYPES,
    DECLARATION_NODE_TYPES,
    DEFAULT_ACCESS_BY_KIND,
    FUNCTION_DEFINITION_NODE_TYPES,
    FUNCTION_NAME_NODE_TYPES,
    LANGUAGE_BY_SUFFIX,
    MISSING_PARSER_ERROR,
    NAMESPACE_NODE_TYPES,
    QUALIFIED_NAME_NODE_TYPES,
    UNKNOWN_QUALIFIER_KIND,
    WRAPPER_DECLARATOR_TYPES,
)
from .declarations_types import SymbolDeclaration
from .errors import DeclarationScanError
from .naming import strip_template_arguments
from .text import normalize_whitespace, read_text

logger = logging.getLogger(__name__)


def _language_for_path(path: Path) -> str | None:
    """Map file suffix to configured Tree-sitter language key."""
    return LANGUAGE_BY_SUFFIX.get(path.suffix.lower())


@lru_cache(maxsize=8)
def _load_parser(language_name: str):
    """Load a Tree-sitter parser using supported provider packages.

    Tries ``tree_sitter_languages`` first, then ``tree_sitter_language_pack``.
    Returns ``(parser, error_message)``.
    """
    errors: list[str] = []

    try:
        from tree_sitter_languages import get_parser

        return get_parser(language_name), None
    except ModuleNotFoundError:
        pass
    except Exception as exc:
        errors.append(f"Failed to load Tree-sitter parser for {language_name}: {exc}")

    try:
        from tree_sitter_language_pack import get_parser

        return get_parser(language_name), None
    except ModuleNotFoundError:
        pass
    except Exception as exc:
        errors.append(f"Failed to load Tree-sitter parser for {language_name}: {exc}")

    if errors:
        return None, errors[0]

    return None, MISSING_PARSER_ERROR


def _node_text(source_bytes: bytes, node) -> str:
    """Decode source slice covered by a Tree-sitter node."""
    return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _split_qualified(text: str) -> list[str]:
    parts = [strip_template_arguments(part) for part in normalize_whitespace(text).split("::")]
    return [part for part in parts if part]


def _unwrap_declarator(node):
    """Follow pointer/reference wrappers down to the innermost declarator."""
    while node is not None and node.type in WRAPPER_DECLARATOR_TYPES:
        inner = node.child_by_field_name("declarator")
        if inner is None:
            named = list(node.named_children)
            inner = named[-1] if named else None
        node = inner
    return node


class _DeclarationWalker:
    def __init__(self, source_bytes: bytes, path: Path, include_private: bool) -> None:
        self.source_bytes = source_bytes
        self.path = path
        self.include_private = include_private
        self.declarations: list[SymbolDeclaration] = []
        self.compound_kinds: dict[tuple[str, ...], str] = {}

    def _record(self, node, kind: str, name: str, scope: tuple[str, ...], scope_kind: str | None, arguments=None):
        line = int(node.start_point[0]) + 1
        if kind in COMPOUND_KINDS:
            self.compound_kinds[scope + (name,)] = kind
        self.declarations.append(
            SymbolDeclaration(
                kind=kind,
                name=name,
                scope=scope,
                scope_kind=scope_kind,
                arguments=arguments,
                path=self.path,
                line=line,
            )
        )

    def walk(self, node, scope: tuple[str, ...] = (), scope_kind: str | None = None) -> None:
        node_type = node.type
        if node_type in CONTAINER_NODE_TYPES:
            for child in node.named_children:
                self.walk(child, scope, scope_kind)
        elif node_type in NAMESPACE_NODE_TYPES:
            self._visit_namespace(node, scope, scope_kind)
        elif node_type in CLASS_KIND_BY_NODE_TYPE:
            self._visit_class(node, scope, scope_kind)
        elif node_type in FUNCTION_DEFINITION_NODE_TYPES:
            self._visit_function(node, scope, scope_kind)
        elif node_type in DECLARATION_NODE_TYPES:
            type_node = node.child_by_field_name("type")
            if type_node is not None and type_node.type in CLASS_KIND_BY_NODE_TYPE:
                self._visit_class(type_node, scope, scope_kind)
            self._visit_function(node, scope, scope_kind)

    def _visit_namespace(self, node, scope: tuple[str, ...], scope_kind: str | None) -> None:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            # Anonymous namespaces have internal linkage and are not documented.
            return
        for part in _split_qualified(_node_text(self.source_bytes, name_node)):
            self._record(node, "namespace", part, scope, scope_kind)
            scope = scope + (part,)
            scope_kind = "namespace"

        body = node.child_by_field_name("body")
        if body is not None:
            self.walk(body, scope, scope_kind)

    def _visit_class(self, node, scope: tuple[str, ...], scope_kind: str | None) -> None:
        body = node.child_by_field_name("body")
        name_node = node.child_by_field_name("name")
        if body is None or name_node is None:
            return
        parts = _split_qualified(_node_text(self.source_bytes, name_node))
        if not parts:
            return
        kind = CLASS_KIND_BY_NODE_TYPE[node.type]
        scope = scope + tuple(parts[:-1])
        self._record(node, kind, parts[-1], scope, scope_kind)

        inner_scope = scope + (parts[-1],)
        access = DEFAULT_ACCESS_BY_KIND[kind]
        for child in body.named_children:
            if child.type == "access_specifier":
                access = _node_text(self.source_bytes, child).strip().rstrip(":").strip()
                continue
            if access == "private" and not self.include_private:
                continue
            self.walk(child, inner_scope, kind)

    def _visit_function(self, node, scope: tuple[str, ...], scope_kind: str | None) -> None:
        declarator = _unwrap_declarator(node.child_by_field_name("declarator"))
        if declarator is None or declarator.type != "function_declarator":
            return
        name_node = declarator.child_by_field_name("declarator")
        if name_node is None or name_node.type not in FUNCTION_NAME_NODE_TYPES:
            return

        name_text = normalize_whitespace(_node_text(self.source_bytes, name_node))
        if name_node.type in QUALIFIED_NAME_NODE_TYPES:
            parts = _split_qualified(name_text)
            if not parts:
                return
            name = parts[-1]
            if len(parts) > 1:
                # Out-of-line definition; the qualifier names the enclosing namespace or class.
                scope = scope + tuple(parts[:-1])
                scope_kind = self.compound_kinds.get(scope, UNKNOWN_QUALIFIER_KIND)
        else:
            name = name_text

        parameters = declarator.child_by_field_name("parameters")
        arguments = "()"
        if parameters is not None:
            arguments = normalize_whitespace(_node_text(self.source_bytes, parameters))
        self._record(node, "function", name, scope, scope_kind, arguments)


def collect_declarations(path: Path, include_private: bool = False) -> list[SymbolDeclaration]:
    """Collect namespace, class, struct and function declarations from one file.

    Raises ``DeclarationScanError`` when no grammar is configured for the file,
    no parser package is installed, or the file cannot be read or parsed.
    """
    target = path.resolve()
    if not target.is_file():
        raise DeclarationScanError(f"{path} is not a file")

    language_name = _language_for_path(target)
    if language_name is None:
        suffix = target.suffix or "<no extension>"
        raise DeclarationScanError(f"No Tree-sitter grammar configured for {suffix}.")

    parser, parser_error = _load_parser(language_name)
    if parser is None:
        raise DeclarationScanError(parser_error or MISSING_PARSER_ERROR)

    try:
        source = read_text(target)
    except OSError as exc:
        raise DeclarationScanError(f"Failed to read {path}: {exc}") from exc
    source_bytes = source.encode("utf-8", errors="replace")

    try:
        tree = parser.parse(source_bytes)
    except Exception as exc:
        raise DeclarationScanError(f"Tree-sitter parse failed for {path}: {exc}") from exc

    walker = _DeclarationWalker(source_bytes, target, include_private)
    walker.walk(tree.root_node)
    logger.debug("collected %d declarations from %s", len(walker.declarations), target)
    return walker.declarations


def iter_source_files(paths: Iterable[Path]) -> Iterator[Path]:
    """Yield explicit files as given and scannable files under directories.

    Directories are walked in sorted order; hidden entries are skipped.
    """
    for path in paths:
        if not path.is_dir():
            yield path
            continue
        for dirpath, dirnames, filenames in os.walk(path):
            dirnames[:] = sorted(name for name in dirnames if not name.startswith("."))
            base = Path(dirpath)
            for filename in sorted(filenames):
                if filename.startswith("."):
                    continue
                candidate = base / filename
                if _language_for_path(candidate) is not None:
                    yield candidate


def resolve_scope_kinds(declarations: list[SymbolDeclaration]) -> list[SymbolDeclaration]:
    """Re-derive ``scope_kind`` from compounds recorded anywhere in ``declarations``.

    An out-of-line definition in one file may qualify a namespace or class
    declared in another; its kind is only known once every file is scanned.
    """
    kinds = {decl.scope + (decl.name,): decl.kind for decl in declarations if decl.kind in COMPOUND_KINDS}
    resolved: list[SymbolDeclaration] = []
    for decl in declarations:
        kind = kinds.get(decl.scope) if decl.scope else None
        resolved.append(replace(decl, scope_kind=kind) if kind is not None and kind != decl.scope_kind else decl)
    return resolved


def scan_paths(paths: Iterable[Path], include_private: bool = False) -> list[SymbolDeclaration]:
    """Collect declarations from files and directories, file by file in source order."""
    declarations: list[SymbolDeclaration] = []
    file_count = 0
    for source_path in iter_source_files(paths):
        declarations.extend(collect_declarations(source_path, include_private=include_private))
        file_count += 1
    logger.info("scanned %d files, %d declarations", file_count, len(declarations))
    return resolve_scope_kinds(declarations)
