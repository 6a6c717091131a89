"""Persistent JSON config helpers.

Stores the highlight style, page prefix, default search section and result
cap used by the command line. Malformed or missing config falls back to
defaults.
"""

from __future__ import annotations

import json
from pathlib import Path

from .builder import DEFAULT_PAGE_PREFIX

CONFIG_PATH = Path.home() / ".config" / "doxindex.json"

DEFAULT_STYLE = "monokai"
DEFAULT_SECTION = "functions"
DEFAULT_MAX_RESULTS = 200


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are ignored; config is a convenience, never required.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def _load_string(key: str, default: str) -> str:
    value = load_config().get(key)
    return value if isinstance(value, str) and value else default


def _save_value(key: str, value: object) -> None:
    config = load_config()
    config[key] = value
    save_config(config)


def load_style() -> str:
    """Return the Pygments style name for highlighted output."""
    return _load_string("style", DEFAULT_STYLE)


def save_style(style: str) -> None:
    _save_value("style", style)


def load_page_prefix() -> str:
    """Return the prefix prepended to generated page references.

    An explicit empty string is honored so pages can be written relative to
    the search directory itself.
    """
    value = load_config().get("page_prefix")
    return value if isinstance(value, str) else DEFAULT_PAGE_PREFIX


def save_page_prefix(prefix: str) -> None:
    _save_value("page_prefix", prefix)


def load_default_section() -> str:
    return _load_string("default_section", DEFAULT_SECTION)


def save_default_section(section: str) -> None:
    _save_value("default_section", section)


def load_max_results() -> int:
    """Return the display cap for search results.

    Booleans and non-positive integers are rejected in favor of the default.
    """
    value = load_config().get("max_results")
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return DEFAULT_MAX_RESULTS
    return value


def save_max_results(max_results: int) -> None:
    _save_value("max_results", max(1, int(max_results)))
