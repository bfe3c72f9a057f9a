"""
arrayproto.reader - Reader and printer for array literals

This module reads JavaScript-style array literals, elisions included, into
SparseArray values, and prints SparseArray values back in the same form.

    [10, 2, , 4]     length 4, hole at index 2
    [1, 2, ,]        length 3, hole at index 2 (one trailing comma is ignored)
    [,]              length 1, a single hole
    [<hole>, "a"]    the <hole> token is an explicit hole

Elements are Python literals (read with ast.literal_eval), nested array
literals, or <hole>.

Components:
- Token: A token with its source location
- tokenize(): Converts source text to tokens
- Reader: Converts tokens to SparseArray values
- read_array(): Read one array literal
- read_literal(): Read an array literal or a single Python literal
- format_array(): Print an array as a literal
"""

import ast
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from arrayproto.runtime.sparse import SparseArray
from arrayproto.runtime.types import HOLE

HOLE_TOKEN = "<hole>"

# Marks an element slot that has not been filled yet
_EMPTY = object()

# =============================================================================
# Tokenizer
# =============================================================================


@dataclass
class Token:
    """A token with its source location."""

    value: Any  # "[", "]", "," or ("ATOM", text)
    line: int  # 1-based line number
    col: int  # 0-based column offset

    def __repr__(self):
        return f"Token({self.value!r}, {self.line}:{self.col})"


def tokenize(src: str) -> list[Token]:
    """
    Tokenize an array literal into a list of Tokens with source locations.

    Anything between delimiters is an atom. Brackets only delimit at the top
    level of an atom, so tuples and dicts may contain commas.
    """
    tokens = []
    i = 0
    n = len(src)
    line = 1
    line_start = 0

    while i < n:
        c = src[i]
        if c == "\n":
            i += 1
            line += 1
            line_start = i
            continue
        if c in " \t\r":
            i += 1
            continue

        tok_line = line
        tok_col = i - line_start

        if c in "[],":
            tokens.append(Token(c, tok_line, tok_col))
            i += 1
            continue

        start = i
        depth = 0
        while i < n:
            c = src[i]
            if c in "\"'":
                i = _skip_string(src, i, line)
                continue
            if c in "({":
                depth += 1
            elif c in ")}":
                depth -= 1
                if depth < 0:
                    raise SyntaxError(
                        f"unbalanced {c!r} at line {line}, column {i - line_start}"
                    )
            elif c == "\n":
                line += 1
                line_start = i + 1
            elif depth == 0 and c in "[],":
                break
            i += 1
        if depth > 0:
            raise SyntaxError(
                f"unterminated element starting at line {tok_line}, column {tok_col}"
            )
        tokens.append(Token(("ATOM", src[start:i].strip()), tok_line, tok_col))

    return tokens


def _skip_string(src: str, i: int, line: int) -> int:
    """Return the index just past the string literal starting at i."""
    quote = src[i]
    j = i + 1
    n = len(src)
    while j < n:
        c = src[j]
        if c == "\\":
            j += 2
            continue
        if c == quote:
            return j + 1
        j += 1
    raise SyntaxError(f"unterminated string starting at line {line}")


# =============================================================================
# Reader
# =============================================================================


class Reader:
    """Reads array literals from a token stream."""

    def __init__(self, tokens: list[Token]):
        self.tokens = tokens
        self.i = 0

    def eof(self) -> bool:
        return self.i >= len(self.tokens)

    def peek(self) -> Optional[Token]:
        return self.tokens[self.i] if self.i < len(self.tokens) else None

    def next(self) -> Optional[Token]:
        tok = self.peek()
        self.i += 1
        return tok

    def read_array(self) -> SparseArray:
        """Read one array literal, starting at its opening bracket."""
        open_tok = self.next()
        if open_tok is None:
            raise SyntaxError("Unexpected end of input")
        if open_tok.value != "[":
            raise SyntaxError(
                f"expected '[' at line {open_tok.line}, column {open_tok.col}"
            )

        result = SparseArray()
        current: Any = _EMPTY
        while True:
            tok = self.peek()
            if tok is None:
                raise SyntaxError(
                    f"unterminated array starting at line {open_tok.line}, "
                    f"column {open_tok.col}"
                )
            if tok.value == "]":
                self.next()
                if current is not _EMPTY:
                    result.append(current)
                return result
            if tok.value == ",":
                self.next()
                result.append(HOLE if current is _EMPTY else current)
                current = _EMPTY
                continue
            if current is not _EMPTY:
                raise SyntaxError(
                    f"expected ',' between elements at line {tok.line}, column {tok.col}"
                )
            if tok.value == "[":
                current = self.read_array()
            else:
                self.next()
                current = parse_atom(tok)


def parse_atom(tok: Token) -> Any:
    """Convert an atom token to its value."""
    text = tok.value[1]
    if text == HOLE_TOKEN:
        return HOLE
    try:
        return ast.literal_eval(text)
    except (ValueError, SyntaxError) as e:
        raise SyntaxError(
            f"invalid element {text!r} at line {tok.line}, column {tok.col}"
        ) from e


def read_array(src: str) -> SparseArray:
    """Read a single array literal from src."""
    rdr = Reader(tokenize(src))
    result = rdr.read_array()
    tok = rdr.peek()
    if tok is not None:
        raise SyntaxError(
            f"unexpected input after array literal at line {tok.line}, column {tok.col}"
        )
    return result


def read_literal(src: str) -> Any:
    """Read either an array literal or a single Python literal from src."""
    if src.lstrip().startswith("["):
        return read_array(src)
    tokens = tokenize(src)
    if len(tokens) != 1 or not isinstance(tokens[0].value, tuple):
        raise SyntaxError(f"expected a single literal, got {src!r}")
    return parse_atom(tokens[0])


# =============================================================================
# Printer
# =============================================================================


def format_value(value: Any) -> str:
    if isinstance(value, SparseArray):
        return format_array(value)
    return repr(value)


def format_array(arr: Iterable[Any]) -> str:
    """
    Print arr as an array literal that read_array reads back to an equal array.

    Holes print as empty elisions. A trailing hole needs an extra comma,
    since a single trailing comma is otherwise ignored.
    """
    items = list(arr)
    text = ", ".join("" if value is HOLE else format_value(value) for value in items)
    if items and items[-1] is HOLE:
        text += ","
    return f"[{text}]"


__all__ = [
    "HOLE_TOKEN",
    "Token",
    "tokenize",
    "Reader",
    "parse_atom",
    "read_array",
    "read_literal",
    "format_value",
    "format_array",
]
