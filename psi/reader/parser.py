"""
  Psi Reader

- Single pass, recursive descent over a character Cursor.
- One call to `parse` reads one expression and returns a Value tree:

    - ( ... )        -> List
    - 12, -3.5, .25  -> Number
    - #t / #f        -> Boolean
    - anything else  -> Symbol (up to whitespace or a parenthesis)

- Malformed input produces an Error value of kind SyntaxError instead of
  raising; end of input produces None ("nothing here").
- The cursor is advanced destructively and is left wherever a failure was
  detected, so it should be discarded after an error.
"""

from __future__ import annotations

import logging
import re
from typing import Iterator

from psi.config import DEFAULT_MAX_SYMBOL_LENGTH, DEFAULT_MAX_LIST_CAPACITY
from psi.errors import PsiAppendError, SYNTAX_ERROR
from psi.types.value import (
    Value,
    Error,
    number,
    boolean,
    symbol,
    empty_list,
    error,
    append,
    release,
)

logger = logging.getLogger(__name__)

# Matches C isspace in the "C" locale
WHITESPACE = frozenset(" \t\n\v\f\r")
DIGITS = frozenset("0123456789")
DELIMITERS = WHITESPACE | {"(", ")"}

# Longest decimal literal: optional sign, digits with optional fraction (or a
# bare fraction), optional exponent.
NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?", re.ASCII)


class Cursor:
    """Mutable read position over one line of input."""

    __slots__ = ("text", "pos")

    def __init__(self, text: str, pos: int = 0):
        self.text = text
        self.pos = pos

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self, offset: int = 0) -> str:
        i = self.pos + offset
        return self.text[i] if i < len(self.text) else ""

    def advance(self, n: int = 1) -> None:
        self.pos = min(self.pos + n, len(self.text))

    def startswith(self, prefix: str) -> bool:
        return self.text.startswith(prefix, self.pos)

    def skip_whitespace(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos] in WHITESPACE:
            self.pos += 1

    def remaining(self) -> str:
        return self.text[self.pos:]

    def __repr__(self):
        return f"Cursor(pos={self.pos}, remaining={self.remaining()!r})"


def _is_digit(ch: str) -> bool:
    return ch != "" and ch in DIGITS


def parse(
    cursor: Cursor,
    *,
    max_symbol_length: int = DEFAULT_MAX_SYMBOL_LENGTH,
    max_list_capacity: int = DEFAULT_MAX_LIST_CAPACITY,
) -> Value | None:
    """Read one expression from `cursor`."""
    cursor.skip_whitespace()
    if cursor.at_end():
        return None

    ch = cursor.peek()
    if ch == "(":
        return _parse_list(cursor, max_symbol_length, max_list_capacity)
    if _is_digit(ch) or (ch == "-" and _is_digit(cursor.peek(1))) or ch == ".":
        return _parse_number(cursor)
    if cursor.startswith("#t"):
        cursor.advance(2)
        return boolean(True)
    if cursor.startswith("#f"):
        cursor.advance(2)
        return boolean(False)
    return _parse_symbol(cursor, max_symbol_length)


def _parse_list(cursor: Cursor, max_symbol_length: int, max_list_capacity: int) -> Value:
    cursor.advance()  # consume (
    items = empty_list()
    while True:
        cursor.skip_whitespace()
        if cursor.at_end():
            release(items)
            return error(SYNTAX_ERROR, "Unexpected EOF, expected ')'")
        if cursor.peek() == ")":
            cursor.advance()
            return items
        item = parse(
            cursor,
            max_symbol_length=max_symbol_length,
            max_list_capacity=max_list_capacity,
        )
        if isinstance(item, Error):
            release(items)
            return item
        try:
            append(items, item, max_list_capacity)
        except PsiAppendError as exc:
            logger.debug("List append refused at %d: %s", cursor.pos, exc)
            release(item)
            release(items)
            return error(exc.kind, exc.message)


def _parse_number(cursor: Cursor) -> Value:
    m = NUMBER_RE.match(cursor.text, cursor.pos)
    if not m:
        return error(SYNTAX_ERROR, "Invalid number format")
    cursor.pos = m.end()
    return number(float(m.group()))


def _parse_symbol(cursor: Cursor, max_symbol_length: int) -> Value:
    start = cursor.pos
    while not cursor.at_end() and cursor.peek() not in DELIMITERS:
        if cursor.pos - start >= max_symbol_length:
            return error(SYNTAX_ERROR, "Symbol too long")
        cursor.advance()
    if cursor.pos == start:
        return error(SYNTAX_ERROR, "Empty symbol or unparsable token")
    return symbol(cursor.text[start:cursor.pos])


def parse_all(cursor: Cursor, **options) -> Iterator[Value]:
    """Yield expressions until the input is exhausted or an error is read."""
    while (expr := parse(cursor, **options)) is not None:
        yield expr
        if isinstance(expr, Error):
            break


def read(source: str, **options) -> Value | None:
    """Parse the first expression in `source`."""
    return parse(Cursor(source), **options)
