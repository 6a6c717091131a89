"""Shared declaration datatypes."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class SymbolDeclaration:
    """A documented symbol found in a source file.

    ``scope`` lists enclosing namespace/class names outermost first and
    ``scope_kind`` names the innermost one's kind (``None`` at file level).
    ``arguments`` is the normalized parameter list for functions.
    """

    kind: str
    name: str
    scope: tuple[str, ...]
    scope_kind: str | None
    arguments: str | None
    path: Path
    line: int

    @property
    def scope_name(self) -> str:
        return "::".join(self.scope)

    @property
    def qualified_name(self) -> str:
        return "::".join(self.scope + (self.name,))

    @property
    def signature(self) -> str:
        return self.qualified_name + (self.arguments or "")
