"""Index entry datatypes."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import IndexIntegrityError
from .naming import join_url


@dataclass(frozen=True)
class IndexTarget:
    """One navigable documentation location for a symbol."""

    document_path: str
    anchor_id: str
    qualified_label: str

    def __post_init__(self) -> None:
        # ``url`` is split at the first ``#``, so the page part must not contain one.
        if "#" in self.document_path:
            raise IndexIntegrityError(f"document path must not contain '#': {self.document_path!r}")

    @property
    def url(self) -> str:
        """Page reference with the anchor fragment appended when present."""
        return join_url(self.document_path, self.anchor_id)


@dataclass(frozen=True)
class IndexEntry:
    """Search-table row mapping a symbol key to its documentation targets.

    ``targets`` is normalized to a tuple. Overloads of one symbol share a
    single entry with several targets.
    """

    key: str
    display_name: str
    targets: tuple[IndexTarget, ...]

    def __post_init__(self) -> None:
        targets = tuple(self.targets)
        object.__setattr__(self, "targets", targets)
        if not self.key:
            raise IndexIntegrityError("index entry key must not be empty")
        if self.key != self.key.lower():
            raise IndexIntegrityError(f"index entry key must be lowercase: {self.key!r}")
        if not targets:
            raise IndexIntegrityError(f"index entry {self.key!r} has no targets")
        for target in targets:
            if not isinstance(target, IndexTarget):
                raise IndexIntegrityError(f"index entry {self.key!r} has a non-target value: {target!r}")

    def matches(self, query_folded: str) -> bool:
        """Return whether an already casefolded query occurs in key or display name."""
        return query_folded in self.key.casefold() or query_folded in self.display_name.casefold()
