"""Search keys, page names and anchors in the form Doxygen emits them.

Search keys keep lowercase ASCII letters and digits and encode every other
byte as ``_`` plus two hex digits. Page names escape punctuation with short
``_N`` codes and uppercase letters as ``_`` plus the lowercase letter.
"""

from __future__ import annotations

import hashlib
import re

_PAGE_ESCAPES: dict[str, str] = {
    ":": "_1",
    "/": "_2",
    "<": "_3",
    ">": "_4",
    "*": "_5",
    "&": "_6",
    "|": "_7",
    ".": "_8",
    "!": "_9",
    ",": "_00",
    " ": "_01",
    "{": "_02",
    "}": "_03",
    "?": "_04",
    "^": "_05",
    "%": "_06",
    "(": "_07",
    ")": "_08",
    "+": "_09",
    "=": "_0a",
    "$": "_0b",
    "\\": "_0c",
    "@": "_0d",
    "]": "_0e",
    "[": "_0f",
    "#": "_0g",
    "_": "__",
}
_TEMPLATE_ARGS_RE = re.compile(r"<[^<>]*>")


def search_id(name: str) -> str:
    """Build the lowercase search key for a symbol name (``floor_divide`` -> ``floor_5fdivide``)."""
    out: list[str] = []
    for byte in name.encode("utf-8"):
        ch = chr(byte)
        if byte < 128 and ch.isalnum():
            out.append(ch.lower())
        else:
            out.append(f"_{byte:02x}")
    return "".join(out)


def escape_page_name(name: str) -> str:
    """Escape a qualified name for use as a documentation page file name."""
    out: list[str] = []
    for ch in name:
        escaped = _PAGE_ESCAPES.get(ch)
        if escaped is not None:
            out.append(escaped)
        elif "A" <= ch <= "Z":
            out.append("_" + ch.lower())
        elif ord(ch) < 128:
            out.append(ch)
        else:
            out.extend(f"_{byte:02x}" for byte in ch.encode("utf-8"))
    return "".join(out)


def strip_template_arguments(name: str) -> str:
    """Drop ``<...>`` argument lists, including nested ones, from a name."""
    previous = None
    while previous != name:
        previous = name
        name = _TEMPLATE_ARGS_RE.sub("", name)
    return name.strip()


def compound_page(kind: str, qualified_name: str, prefix: str = "") -> str:
    """Page for a namespace, class or struct (``class_num_cpp_1_1_methods.html``)."""
    return f"{prefix}{kind}{escape_page_name(qualified_name)}.html"


def file_page(file_name: str, prefix: str = "") -> str:
    """Page for a source file (``ImageProcessing.hpp`` -> ``_image_processing_8hpp.html``)."""
    return f"{prefix}{escape_page_name(file_name)}.html"


def strip_default_arguments(arguments: str) -> str:
    """Drop ``= value`` defaults from a parameter list (``(int a = 1)`` -> ``(int a)``)."""
    out: list[str] = []
    depth = 0
    skipping = False
    for ch in arguments:
        if ch in "([{<":
            depth += 1
        elif ch in ")]}>":
            depth -= 1
        if skipping:
            if (depth == 1 and ch == ",") or depth == 0:
                skipping = False
            else:
                continue
        elif ch == "=" and depth == 1:
            skipping = True
            while out and out[-1] == " ":
                out.pop()
            continue
        out.append(ch)
    return "".join(out)


def member_anchor(kind: str, qualified_name: str, arguments: str | None) -> str:
    """Stable anchor id for a member: ``a`` followed by an MD5 hex digest.

    Default values are left out so a prototype and its definition share an
    anchor. Differently named parameters still yield different anchors.
    """
    signature = f"{kind}:{qualified_name}{strip_default_arguments(arguments or '')}"
    return "a" + hashlib.md5(signature.encode("utf-8")).hexdigest()


def split_url(url: str) -> tuple[str, str]:
    """Split ``page#anchor`` into ``(page, anchor)``; the anchor may be empty."""
    page, _sep, anchor = url.partition("#")
    return page, anchor


def join_url(page: str, anchor: str) -> str:
    return f"{page}#{anchor}" if anchor else page
