"""JavaScript data-file reader and writer.

Search-index files are JavaScript assignments of array/object literals
(``var searchData=[...];``). Tokens come from the Pygments JavaScript lexer;
a small recursive-descent parser turns the literal into Python lists, dicts,
strings and numbers. Nothing is evaluated.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from pygments.lexers import JavascriptLexer
from pygments.token import Comment, Error, Keyword, Name, Number, Operator, Punctuation, String, Text

from ..errors import IndexLoadError

_STRUCTURAL = frozenset("[]{},;:=-")
# Search-index rows nest four levels deep; anything far beyond that is not index data.
_MAX_NESTING = 64
_DOUBLE_QUOTE = '"'
_DECLARATION_KEYWORDS = frozenset({"var", "let", "const"})
_ESCAPE_RE = re.compile(r"\\(u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|.)", re.DOTALL)
_SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}


@dataclass(frozen=True)
class JsToken:
    kind: str  # "punct", "name", "string", "number", "keyword"
    value: str
    offset: int


def _decode_escape(match: re.Match[str]) -> str:
    seq = match.group(1)
    if seq[0] in "ux" and len(seq) > 1:
        return chr(int(seq[1:], 16))
    return _SIMPLE_ESCAPES.get(seq, seq)


def decode_string_literal(literal: str) -> str:
    """Decode a quoted JavaScript string literal token."""
    if len(literal) < 2 or literal[0] not in "'\"" or literal[-1] != literal[0]:
        raise IndexLoadError(f"malformed string literal: {literal[:40]!r}")
    decoded = _ESCAPE_RE.sub(_decode_escape, literal[1:-1])
    if any("\ud800" <= ch <= "\udfff" for ch in decoded):
        # ``\uXXXX`` escapes of astral characters arrive as UTF-16 surrogate halves.
        try:
            decoded = decoded.encode("utf-16", "surrogatepass").decode("utf-16")
        except UnicodeDecodeError as exc:
            raise IndexLoadError(f"unpaired surrogate in string literal: {literal[:40]!r}") from exc
    return decoded


def quote_string(value: str, quote: str = "'") -> str:
    """Quote ``value`` as a JavaScript string literal."""
    escaped = value.replace("\\", "\\\\").replace(quote, "\\" + quote)
    escaped = escaped.replace("\n", "\\n").replace("\r", "\\r")
    return f"{quote}{escaped}{quote}"


def tokenize(text: str) -> list[JsToken]:
    """Lex ``text`` and keep only the tokens a data literal can contain."""
    tokens: list[JsToken] = []
    for offset, ttype, value in JavascriptLexer(stripnl=False).get_tokens_unprocessed(text):
        if ttype in Text or ttype in Comment or not value.strip():
            continue
        if ttype in Error:
            raise IndexLoadError(f"unexpected character {value!r} at offset {offset}")
        if ttype in String:
            tokens.append(JsToken("string", value, offset))
        elif ttype in Number:
            tokens.append(JsToken("number", value, offset))
        elif ttype in Keyword:
            tokens.append(JsToken("keyword", value, offset))
        elif ttype in Name:
            tokens.append(JsToken("name", value, offset))
        elif ttype in Punctuation or ttype in Operator:
            # Lexers may fuse adjacent punctuation (``]]],``) into one token.
            for idx, ch in enumerate(value):
                if ch.isspace():
                    continue
                if ch not in _STRUCTURAL:
                    raise IndexLoadError(f"unexpected operator {ch!r} at offset {offset + idx}")
                tokens.append(JsToken("punct", ch, offset + idx))
        else:
            raise IndexLoadError(f"unexpected token {value!r} at offset {offset}")
    return tokens


class _Parser:
    def __init__(self, tokens: list[JsToken]) -> None:
        self._tokens = tokens
        self._pos = 0
        self._depth = 0

    def _peek(self) -> JsToken | None:
        if self._pos >= len(self._tokens):
            return None
        return self._tokens[self._pos]

    def _next(self) -> JsToken:
        token = self._peek()
        if token is None:
            raise IndexLoadError("unexpected end of data")
        self._pos += 1
        return token

    def _at_punct(self, value: str) -> bool:
        token = self._peek()
        return token is not None and token.kind == "punct" and token.value == value

    def _expect_punct(self, value: str) -> None:
        token = self._next()
        if token.kind != "punct" or token.value != value:
            raise IndexLoadError(f"expected {value!r} at offset {token.offset}, found {token.value!r}")

    def parse_assignments(self) -> dict[str, object]:
        assignments: dict[str, object] = {}
        while self._peek() is not None:
            token = self._next()
            if token.kind == "keyword" and token.value in _DECLARATION_KEYWORDS:
                token = self._next()
            if token.kind != "name":
                raise IndexLoadError(f"expected a variable name at offset {token.offset}, found {token.value!r}")
            self._expect_punct("=")
            assignments[token.value] = self.parse_value()
            while self._at_punct(";"):
                self._pos += 1
        return assignments

    def parse_value(self) -> object:
        token = self._next()
        if token.kind == "punct":
            if token.value in "[{":
                return self._parse_nested(token)
            if token.value == "-":
                number = self._next()
                if number.kind != "number":
                    raise IndexLoadError(f"expected a number at offset {number.offset}")
                return -self._number(number)
        if token.kind == "string":
            return decode_string_literal(token.value)
        if token.kind == "number":
            return self._number(token)
        if token.kind == "keyword" and token.value in {"true", "false", "null"}:
            return {"true": True, "false": False, "null": None}[token.value]
        raise IndexLoadError(f"unexpected {token.value!r} at offset {token.offset}")

    def _parse_nested(self, opener: JsToken) -> object:
        if self._depth >= _MAX_NESTING:
            raise IndexLoadError(f"index nesting too deep at offset {opener.offset}")
        self._depth += 1
        try:
            return self._parse_array() if opener.value == "[" else self._parse_object()
        finally:
            self._depth -= 1

    def _parse_array(self) -> list[object]:
        items: list[object] = []
        while not self._at_punct("]"):
            items.append(self.parse_value())
            if self._at_punct(","):
                self._pos += 1
                continue
            if not self._at_punct("]"):
                token = self._next()
                raise IndexLoadError(f"expected ',' or ']' at offset {token.offset}, found {token.value!r}")
        self._expect_punct("]")
        return items

    def _parse_object(self) -> dict[object, object]:
        items: dict[object, object] = {}
        while not self._at_punct("}"):
            key_token = self._next()
            if key_token.kind == "string":
                key: object = decode_string_literal(key_token.value)
            elif key_token.kind == "number":
                key = self._number(key_token)
            elif key_token.kind in {"name", "keyword"}:
                key = key_token.value
            else:
                raise IndexLoadError(f"expected an object key at offset {key_token.offset}")
            self._expect_punct(":")
            items[key] = self.parse_value()
            if self._at_punct(","):
                self._pos += 1
                continue
            if not self._at_punct("}"):
                token = self._next()
                raise IndexLoadError(f"expected ',' or '}}' at offset {token.offset}, found {token.value!r}")
        self._expect_punct("}")
        return items

    @staticmethod
    def _number(token: JsToken) -> int | float:
        text = token.value
        try:
            if text.lower().startswith("0x"):
                return int(text, 16)
            if any(ch in text for ch in ".eE"):
                return float(text)
            return int(text)
        except ValueError as exc:
            raise IndexLoadError(f"malformed number {text!r} at offset {token.offset}") from exc


def parse_assignments(text: str) -> dict[str, object]:
    """Parse ``var name = <literal>;`` statements into a name -> value mapping."""
    return _Parser(tokenize(text)).parse_assignments()


def parse_literal(text: str) -> object:
    """Parse a single JavaScript data literal."""
    parser = _Parser(tokenize(text))
    value = parser.parse_value()
    if parser._peek() is not None:
        raise IndexLoadError("trailing data after literal")
    return value


def format_literal(value: object, quote: str = "'") -> str:
    """Render a Python value as a compact JavaScript literal."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, str):
        return quote_string(value, quote)
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(format_literal(item, quote) for item in value) + "]"
    if isinstance(value, dict):
        parts = [f"{format_literal(key, quote)}:{format_literal(item, quote)}" for key, item in value.items()]
        return "{" + ",".join(parts) + "}"
    raise TypeError(f"cannot render {type(value).__name__} as a JavaScript literal")


def format_array_assignment(name: str, rows: list[object]) -> str:
    """Render ``var name=`` with one array row per line."""
    lines = [f"var {name}=", "["]
    if rows:
        lines.append(",\n".join(f"  {format_literal(row)}" for row in rows))
    lines.append("];")
    return "\n".join(lines) + "\n"


def format_object_assignment(name: str, items: dict[int, str]) -> str:
    """Render ``var name =`` with one ``key: "value"`` pair per line."""
    rendered = [f"  {key}: {quote_string(value, quote=_DOUBLE_QUOTE)}" for key, value in items.items()]
    body = ",\n".join(rendered)
    return f"var {name} =\n{{\n{body}\n}};\n"
