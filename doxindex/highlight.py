"""Terminal rendering of search results.

Qualified labels are C++ signatures, so they are colored with the Pygments
C++ lexer. Everything printed passes through ``sanitize_terminal_text``.
"""

from __future__ import annotations

from collections.abc import Sequence

from pygments import highlight as pygments_highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import CppLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .config import DEFAULT_STYLE
from .model import IndexEntry
from .text import sanitize_terminal_text

_LEXER = CppLexer(stripnl=False, ensurenl=False)
_FORMATTERS: dict[str, Terminal256Formatter] = {}
_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()


def _normalize_style(style: str) -> str:
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_STYLE

    try:
        get_style_by_name(style)
    except ClassNotFound:
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    _VALID_STYLES.add(style)
    return style


def _formatter_for_style(style: str) -> Terminal256Formatter:
    formatter = _FORMATTERS.get(style)
    if formatter is not None:
        return formatter
    formatter = Terminal256Formatter(style=style)
    _FORMATTERS[style] = formatter
    return formatter


def highlight_label(label: str, style: str = DEFAULT_STYLE, no_color: bool = False) -> str:
    """Color a qualified label as C++; plain sanitized text when ``no_color``."""
    clean = sanitize_terminal_text(label)
    if no_color or not clean:
        return clean
    formatter = _formatter_for_style(_normalize_style(style))
    return pygments_highlight(clean, _LEXER, formatter).rstrip("\n")


def format_results(
    entries: Sequence[IndexEntry],
    style: str = DEFAULT_STYLE,
    no_color: bool = False,
    max_results: int | None = None,
) -> str:
    """Render one line per target: display name, label and ``page#anchor``.

    When ``max_results`` cuts the list, a trailing line reports how many
    entries were left out.
    """
    shown = entries if max_results is None else entries[: max(1, max_results)]
    lines: list[str] = []
    for entry in shown:
        name = sanitize_terminal_text(entry.display_name)
        for target in entry.targets:
            label = highlight_label(target.qualified_label, style, no_color)
            lines.append(f"{name}  {label}  {sanitize_terminal_text(target.url)}")
    hidden = len(entries) - len(shown)
    if hidden > 0:
        lines.append(f"... {hidden} more entries")
    return "\n".join(lines) + ("\n" if lines else "")
