"""
  Wisp Reader: a combined lexer and recursive-descent parser.

- Works directly on the source string with a movable cursor, no token pass
- Emits Value trees:

    - ; comment      -> skipped
    - 'expr          -> Value.quote(expr)
    - (a b c)        -> Value.list([...])
    - 42, -7         -> Value.i64
    - 2.5, -0.5      -> Value.f64
    - "text"         -> Value.string, with \\\\ \\" \\n \\t decoded
    - @              -> Value.nil() (directive marker, position recorded)
    - anything else made of symbol characters -> Value.atom
"""

from __future__ import annotations

from typing import Callable, Optional

from wisp.errors import MalformedProgram, TypeMismatch
from wisp.reader.scan import DIGITS, is_symbol_char, skip_blank, skip_whitespace
from wisp.types.value import Tag, Value

# Deepest list or quote nesting the reader accepts. Values nested this far
# still compare, copy and render within the default recursion limit.
MAX_DEPTH = 200

ESCAPES: dict[str, str] = {
    "\\": "\\",
    '"': '"',
    "n": "\n",
    "t": "\t",
}


class Cursor:
    """A mutable position into a source string."""

    __slots__ = ("pos",)

    def __init__(self, pos: int = 0):
        self.pos = pos

    def __repr__(self):
        return f"Cursor({self.pos})"


def decode_escapes(raw: str) -> str:
    """Resolve the four escape pairs left to right; unknown pairs pass through."""
    out: list[str] = []
    i = 0
    n = len(raw)
    while i < n:
        ch = raw[i]
        if ch == "\\" and i + 1 < n and raw[i + 1] in ESCAPES:
            out.append(ESCAPES[raw[i + 1]])
            i += 2
        else:
            out.append(ch)
            i += 1
    return "".join(out)


class Reader:
    """Reads Values one at a time from `source`, advancing `cursor`."""

    def __init__(
        self,
        source: str,
        cursor: Optional[Cursor] = None,
        is_symbol: Callable[[str], bool] = is_symbol_char,
        max_depth: int = MAX_DEPTH,
    ):
        self.source = source
        self.cursor = cursor if cursor is not None else Cursor()
        self.is_symbol = is_symbol
        self.max_depth = max_depth
        self.depth = 0
        # Offsets of every `@` directive marker read so far
        self.directives: list[int] = []

    @property
    def pos(self) -> int:
        return self.cursor.pos

    def at_end(self) -> bool:
        """True once only whitespace and comments remain."""
        return skip_blank(self.source, self.cursor.pos) >= len(self.source)

    def error(self, message: str, pos: int) -> MalformedProgram:
        return MalformedProgram(message, pos, self.source)

    def read_one(self) -> Value:
        """Read the next expression. Returns Nil once the input is exhausted.

        On failure the cursor is left where it was and nothing is recorded.
        """
        start = self.cursor.pos
        marks = len(self.directives)
        try:
            return self._read()
        except MalformedProgram:
            self._rollback(start, marks)
            raise
        except RecursionError:
            self._rollback(start, marks)
            raise self.error("nesting too deep", start) from None

    def _rollback(self, start: int, marks: int) -> None:
        self.cursor.pos = start
        del self.directives[marks:]

    def read_all(self) -> list[Value]:
        """Read every top-level expression left in the source."""
        exprs: list[Value] = []
        while not self.at_end():
            last = self.cursor.pos
            exprs.append(self.read_one())
            if self.cursor.pos == last:
                break
        return exprs

    # --- Grammar ---
    def _read(self) -> Value:
        source = self.source
        pos = skip_blank(source, self.cursor.pos)
        self.cursor.pos = pos
        if pos >= len(source):
            return Value.nil()

        ch = source[pos]
        if ch == "'":
            return self._read_quote(pos)
        if ch == "(":
            return self._read_list(pos)
        if ch in DIGITS or (ch == "-" and source[pos + 1:pos + 2] in DIGITS):
            return self._read_number(pos)
        if ch == '"':
            return self._read_string(pos)
        if ch == "@":
            self.directives.append(pos)
            self._advance_to(pos + 1)
            return Value.nil()
        if self.is_symbol(ch):
            return self._read_atom(pos)
        raise self.error(f"unexpected character {ch!r}", pos)

    def _advance_to(self, pos: int) -> None:
        self.cursor.pos = skip_whitespace(self.source, pos)

    def _enter(self, pos: int) -> None:
        if self.depth >= self.max_depth:
            raise self.error("nesting too deep", pos)
        self.depth += 1

    # Children below are built fresh, so the containers adopt them uncopied.
    def _read_quote(self, pos: int) -> Value:
        self.cursor.pos = pos + 1
        if self.at_end():
            raise self.error("quote with nothing to quote", pos)
        self._enter(pos)
        try:
            return Value(Tag.QUOTE, self._read())
        finally:
            self.depth -= 1

    def _read_list(self, pos: int) -> Value:
        source = self.source
        items: list[Value] = []
        self.cursor.pos = pos + 1
        self._enter(pos)
        try:
            while True:
                self.cursor.pos = skip_blank(source, self.cursor.pos)
                if self.cursor.pos >= len(source):
                    raise self.error("unterminated list", pos)
                if source[self.cursor.pos] == ")":
                    break
                items.append(self._read())
        finally:
            self.depth -= 1
        self._advance_to(self.cursor.pos + 1)
        return Value(Tag.LIST, items)

    def _read_number(self, pos: int) -> Value:
        source = self.source
        n = len(source)
        end = pos + 1 if source[pos] == "-" else pos
        while end < n and source[end] in DIGITS:
            end += 1
        is_float = end < n and source[end] == "."
        if is_float:
            end += 1
            while end < n and source[end] in DIGITS:
                end += 1

        text = source[pos:end]
        self._advance_to(end)
        if is_float:
            return Value.f64(float(text))
        try:
            return Value.i64(int(text))
        except TypeMismatch:
            raise self.error(f"integer literal {text} out of range", pos) from None

    def _read_string(self, pos: int) -> Value:
        source = self.source
        n = len(source)
        end = pos + 1
        while True:
            if end >= n:
                raise self.error("unterminated string", pos)
            ch = source[end]
            if ch == '"':
                break
            if ch == "\\":
                end += 1
            end += 1

        raw = source[pos + 1:end]
        self._advance_to(end + 1)
        return Value.string(decode_escapes(raw))

    def _read_atom(self, pos: int) -> Value:
        source = self.source
        end = pos
        while end < len(source) and self.is_symbol(source[end]):
            end += 1
        self._advance_to(end)
        return Value.atom(source[pos:end])


def read_one(source: str, cursor: Optional[Cursor] = None) -> Value:
    """Read one expression from `source` at `cursor`, advancing it."""
    return Reader(source, cursor).read_one()


def read_all(source: str) -> list[Value]:
    """Read the ordered list of top-level expressions in `source`."""
    return Reader(source).read_all()
