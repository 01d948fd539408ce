"""tiletempo/reader.py — Lenient reader for loosely-JSON level text.

Hand-edited level files carry trailing commas, stray commentary and the odd
truncated token. The reader walks the text with a cursor and recovers from
anything it does not recognise instead of failing, producing a best-effort
tree of dicts, lists, strings, ints, floats, bools and None.

Recovery rules:

* A character that cannot start a value is skipped and the value is retried.
* Inside an object, a key position that does not start with ``"`` discards
  text up to the next ``}`` or ``,`` and closes the object.
* Unterminated strings, objects and arrays end quietly at end of input.
* A number that does not parse yields None.
* Containers are tracked on an explicit stack, so deeply nested input is
  read like any other.
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)

_DIGITS = frozenset("0123456789")
_NUMBER_CHARS = frozenset("0123456789.eE+-")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

_SIMPLE_ESCAPES: dict[str, str] = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}


# ---------------------------------------------------------------------------
# Cursor
# ---------------------------------------------------------------------------


class Cursor:
    """Read position over a string. ``peek``/``advance`` return "" at the end."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def has_more(self) -> bool:
        return self.pos < len(self.text)

    def peek(self) -> str:
        if self.pos >= len(self.text):
            return ""
        return self.text[self.pos]

    def advance(self) -> str:
        if self.pos >= len(self.text):
            return ""
        ch = self.text[self.pos]
        self.pos += 1
        return ch

    def take(self, count: int) -> str:
        """Consume up to *count* characters and return them."""
        chunk = self.text[self.pos:self.pos + count]
        self.pos += len(chunk)
        return chunk

    def consume(self, expected: str) -> bool:
        """Skip whitespace, then step over *expected* if it is next."""
        self.skip_whitespace()
        if self.peek() == expected:
            self.pos += 1
            return True
        return False

    def skip_whitespace(self) -> None:
        while self.has_more() and self.text[self.pos].isspace():
            self.pos += 1

    def skip_until(self, stops: str) -> None:
        while self.has_more() and self.text[self.pos] not in stops:
            self.pos += 1


# ---------------------------------------------------------------------------
# Value parsers
# ---------------------------------------------------------------------------

_OPENED = object()
"""Returned by :func:`_begin_value` when it opened a container."""


class _OpenContainer:
    """A dict or list still being filled; ``key`` awaits its value in a dict."""

    __slots__ = ("value", "key")

    def __init__(self, value: dict[str, Any] | list[Any]) -> None:
        self.value = value
        self.key = ""

    @property
    def closer(self) -> str:
        return "}" if isinstance(self.value, dict) else "]"

    def put(self, item: Any) -> None:
        if isinstance(self.value, dict):
            self.value[self.key] = item
        else:
            self.value.append(item)


def _begin_value(cur: Cursor, stack: list[_OpenContainer]) -> Any:
    """Read a scalar, or push a new container onto *stack* and return _OPENED."""
    while True:
        cur.skip_whitespace()
        c = cur.peek()
        if c == "":
            return None
        if c == "{":
            cur.advance()
            stack.append(_OpenContainer({}))
            return _OPENED
        if c == "[":
            cur.advance()
            stack.append(_OpenContainer([]))
            return _OPENED
        if c == '"':
            return _parse_string(cur)
        if c == "t" or c == "f":
            return _parse_boolean(cur)
        if c == "n":
            return _parse_null(cur)
        if c in _DIGITS or c == "-" or c == ".":
            return _parse_number(cur)
        logger.debug("Skipping stray character %r at offset %d", c, cur.pos)
        cur.advance()


def _next_item(cur: Cursor, frame: _OpenContainer) -> bool:
    """Move to the start of the next item. False once *frame* is closed."""
    cur.skip_whitespace()
    if cur.peek() == frame.closer:
        cur.advance()
        return False

    if isinstance(frame.value, list):
        return cur.has_more()

    if cur.peek() != '"':
        # Trailing commentary or a truncated key: drop it, close the object
        if cur.has_more():
            logger.debug("Discarding unquoted object content at offset %d", cur.pos)
        cur.skip_until("},")
        if cur.peek() == "}":
            cur.advance()
        return False

    frame.key = _parse_string(cur)
    cur.consume(":")
    return True


def _after_item(cur: Cursor, frame: _OpenContainer) -> bool:
    """Step over the separator after an item. False once *frame* is closed."""
    cur.skip_whitespace()
    if cur.peek() == frame.closer:
        cur.advance()
        return False
    if cur.peek() == ",":
        cur.advance()
    return True


def _parse_value(cur: Cursor) -> Any:
    # Open containers live on an explicit stack, so nesting depth costs
    # memory rather than interpreter frames.
    stack: list[_OpenContainer] = []
    value = _begin_value(cur, stack)

    while stack:
        frame = stack[-1]
        if value is _OPENED:
            more = _next_item(cur, frame)
        else:
            frame.put(value)
            more = _after_item(cur, frame) and _next_item(cur, frame)

        if more:
            value = _begin_value(cur, stack)
        else:
            value = stack.pop().value

    return value


def _parse_string(cur: Cursor) -> str:
    cur.consume('"')
    chars: list[str] = []

    while cur.has_more() and cur.peek() != '"' and cur.peek() != "\0":
        c = cur.advance()
        if c != "\\":
            chars.append(c)
            continue
        if not cur.has_more():
            break
        escaped = cur.advance()
        if escaped in _SIMPLE_ESCAPES:
            chars.append(_SIMPLE_ESCAPES[escaped])
        elif escaped == "u":
            chars.append(_decode_unicode_escape(cur.take(4)))
        else:
            chars.append(escaped)

    if cur.peek() == '"':
        cur.consume('"')
    return "".join(chars)


def _decode_unicode_escape(digits: str) -> str:
    if len(digits) != 4 or not all(d in _HEX_DIGITS for d in digits):
        return "?"
    return chr(int(digits, 16))


def _parse_number(cur: Cursor) -> int | float | None:
    start = cur.pos
    if cur.peek() == "-":
        cur.advance()
    while cur.has_more() and cur.peek() in _NUMBER_CHARS:
        cur.advance()

    token = cur.text[start:cur.pos]
    try:
        if "." in token or "e" in token or "E" in token:
            return float(token)
        return int(token)
    except ValueError:
        logger.debug("Unparsable number %r at offset %d", token, start)
        return None


def _parse_boolean(cur: Cursor) -> bool:
    if cur.peek() == "t":
        for ch in "true":
            cur.consume(ch)
        return True
    for ch in "false":
        cur.consume(ch)
    return False


def _parse_null(cur: Cursor) -> None:
    for ch in "null":
        cur.consume(ch)
    return None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def read_document(text: str) -> Any:
    """Read *text* into a tree of plain Python values.

    Never raises for malformed input. Returns None for empty text.
    """
    return _parse_value(Cursor(text))
