"""Character-level helpers shared by the reader and the linter."""

from __future__ import annotations

import string

# Punctuation that has its own meaning to the reader and never appears in an atom.
DELIMITERS = frozenset("()\"';")

_PUNCTUATION = frozenset(string.punctuation) - DELIMITERS

DIGITS = frozenset(string.digits)


def is_symbol_char(ch: str) -> bool:
    """True if `ch` may appear in an atom: alphanumerics plus most punctuation."""
    return ch.isalnum() or ch in _PUNCTUATION


def skip_whitespace(source: str, pos: int) -> int:
    n = len(source)
    while pos < n and source[pos].isspace():
        pos += 1
    return pos


def skip_comment(source: str, pos: int) -> int:
    """Skip a `;` comment starting at `pos`; stops on the newline, not past it."""
    end = source.find("\n", pos)
    return len(source) if end == -1 else end


def skip_blank(source: str, pos: int) -> int:
    """Skip any run of whitespace and line comments."""
    pos = skip_whitespace(source, pos)
    while pos < len(source) and source[pos] == ";":
        pos = skip_whitespace(source, skip_comment(source, pos))
    return pos
