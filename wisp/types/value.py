"""The Value type: every piece of Wisp syntax and every runtime datum.

A Value is a tagged union over a closed set of variants (see `Tag`). Lists and
quotes own their children outright: the typed constructors and `copy`
deep-copy the subtree, so two containers never share a child. The reader hands
freshly built children straight to the raw constructor instead.

Two textual forms are provided:
    - display: human readable, strings print bare
    - debug:   machine readable, strings print quoted and escaped so the reader
               can consume them again
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Callable, Iterable, Iterator, Optional

import numpy as np

from wisp.errors import EmptyList, TypeMismatch

I64_MIN = -(2 ** 63)
I64_MAX = 2 ** 63 - 1

BuiltinFn = Callable[[list["Value"]], "Value"]

# Inverse of the reader's escape decoding.
_DEBUG_ESCAPES = str.maketrans({"\\": "\\\\", '"': '\\"', "\n": "\\n", "\t": "\\t"})


class Tag(Enum):
    NIL = "nil"
    I64 = "i64"
    F64 = "f64"
    STRING = "string"
    ATOM = "atom"
    LIST = "list"
    QUOTE = "quote"
    BUILTIN = "builtin"


NUMERIC_TAGS = frozenset((Tag.I64, Tag.F64))


def _check_i64(n: int) -> int:
    if not I64_MIN <= n <= I64_MAX:
        raise TypeMismatch(f"{n} does not fit in i64")
    return n


def _wrapping_add(a: int, b: int) -> int:
    with np.errstate(over="ignore"):
        return int(np.int64(a) + np.int64(b))


def format_f64(x: float) -> str:
    """Positional rendering that always keeps a fractional digit (2.0, not 2)."""
    if math.isnan(x):
        return "nan"
    if math.isinf(x):
        return "inf" if x > 0 else "-inf"
    return np.format_float_positional(x, trim="0")


def _check_payload(tag: Tag, data, name) -> None:
    """Reject payloads that do not match `tag`'s variant."""
    if tag is Tag.NIL:
        ok = data is None
    elif tag is Tag.I64:
        ok = isinstance(data, int) and not isinstance(data, bool) and I64_MIN <= data <= I64_MAX
    elif tag is Tag.F64:
        ok = isinstance(data, float)
    elif tag is Tag.STRING:
        ok = isinstance(data, str)
    elif tag is Tag.ATOM:
        ok = isinstance(data, str) and data != ""
    elif tag is Tag.LIST:
        ok = isinstance(data, list) and all(isinstance(item, Value) for item in data)
    elif tag is Tag.QUOTE:
        ok = isinstance(data, Value)
    elif tag is Tag.BUILTIN:
        ok = callable(data) and isinstance(name, str)
    else:
        raise TypeMismatch(f"unknown value tag {tag!r}")
    if not ok:
        raise TypeMismatch(f"invalid {tag.value} payload {data!r}")
    if name is not None and tag is not Tag.BUILTIN:
        raise TypeMismatch(f"{tag.value} values carry no name")


class Value:
    """A single Wisp datum. Build instances with the typed constructors.

    The raw `Value(tag, data, name)` form checks the payload shape but takes
    ownership of a list or quoted child as given, without copying it.
    """

    __slots__ = ("tag", "_data", "_name")

    def __init__(self, tag: Tag, data=None, name: Optional[str] = None):
        if not isinstance(tag, Tag):
            raise TypeMismatch(f"unknown value tag {tag!r}")
        _check_payload(tag, data, name)
        self.tag: Tag = tag
        self._data = data
        self._name = name

    # --- Constructors ---
    @classmethod
    def nil(cls) -> Value:
        return cls(Tag.NIL)

    @classmethod
    def i64(cls, n: int) -> Value:
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
            raise TypeMismatch(f"cannot build i64 from {type(n).__name__}")
        return cls(Tag.I64, _check_i64(int(n)))

    @classmethod
    def f64(cls, x: float) -> Value:
        if isinstance(x, bool) or not isinstance(x, (int, float, np.floating, np.integer)):
            raise TypeMismatch(f"cannot build f64 from {type(x).__name__}")
        return cls(Tag.F64, float(x))

    @classmethod
    def string(cls, s: str) -> Value:
        if not isinstance(s, str):
            raise TypeMismatch(f"cannot build string from {type(s).__name__}")
        return cls(Tag.STRING, s)

    @classmethod
    def atom(cls, s: str) -> Value:
        if not isinstance(s, str) or not s:
            raise TypeMismatch(f"cannot build atom from {s!r}")
        return cls(Tag.ATOM, s)

    @classmethod
    def list(cls, items: Iterable[Value] = ()) -> Value:
        result = cls(Tag.LIST, [])
        for item in items:
            result.push(item)
        return result

    @classmethod
    def quote(cls, quoted: Value) -> Value:
        if not isinstance(quoted, Value):
            raise TypeMismatch(f"cannot quote {type(quoted).__name__}")
        return cls(Tag.QUOTE, quoted.copy())

    @classmethod
    def builtin(cls, name: str, fn: BuiltinFn) -> Value:
        if not callable(fn):
            raise TypeMismatch(f"builtin {name!r} is not callable")
        return cls(Tag.BUILTIN, fn, name)

    # --- Predicates and accessors ---
    def is_nil(self) -> bool:
        return self.tag is Tag.NIL

    def is_numeric(self) -> bool:
        return self.tag in NUMERIC_TAGS

    def is_builtin(self) -> bool:
        return self.tag is Tag.BUILTIN

    def _expect(self, *tags: Tag) -> None:
        if self.tag not in tags:
            wanted = " or ".join(t.value for t in tags)
            raise TypeMismatch(f"expected {wanted}, got {self.tag.value}")

    def as_int(self) -> int:
        self._expect(Tag.I64)
        return self._data

    def as_float(self) -> float:
        self._expect(Tag.F64)
        return self._data

    def as_str(self) -> str:
        self._expect(Tag.STRING, Tag.ATOM)
        return self._data

    def as_list(self) -> list[Value]:
        self._expect(Tag.LIST)
        return list(self._data)

    @property
    def quoted(self) -> Value:
        self._expect(Tag.QUOTE)
        return self._data

    @property
    def name(self) -> str:
        self._expect(Tag.BUILTIN)
        return self._name

    @property
    def function(self) -> BuiltinFn:
        self._expect(Tag.BUILTIN)
        return self._data

    def __len__(self) -> int:
        self._expect(Tag.LIST)
        return len(self._data)

    def __iter__(self) -> Iterator[Value]:
        self._expect(Tag.LIST)
        return iter(self._data)

    def __bool__(self) -> bool:
        return self.tag is not Tag.NIL

    # --- List mutation ---
    def push(self, value: Value) -> None:
        """Append a copy of `value` to this list."""
        self._expect(Tag.LIST)
        if not isinstance(value, Value):
            raise TypeMismatch(f"cannot push {type(value).__name__} onto a list")
        self._data.append(value.copy())

    def pop(self) -> Value:
        """Remove and return the last element of this list."""
        self._expect(Tag.LIST)
        if not self._data:
            raise EmptyList("pop from empty list")
        return self._data.pop()

    # --- Copying ---
    def copy(self) -> Value:
        if self.tag is Tag.LIST:
            return Value(Tag.LIST, [child.copy() for child in self._data])
        if self.tag is Tag.QUOTE:
            return Value(Tag.QUOTE, self._data.copy())
        # Remaining payloads are immutable
        return Value(self.tag, self._data, self._name)

    def __copy__(self) -> Value:
        return self.copy()

    def __deepcopy__(self, memo) -> Value:
        return self.copy()

    # --- Casting ---
    def to_i64(self) -> Value:
        if self.tag is Tag.I64:
            return self.copy()
        if self.tag is Tag.F64:
            if not math.isfinite(self._data):
                raise TypeMismatch(f"cannot cast {format_f64(self._data)} to i64")
            return Value.i64(int(self._data))
        raise TypeMismatch(f"not numeric: cannot cast {self.tag.value} to i64")

    def to_f64(self) -> Value:
        if self.tag is Tag.F64:
            return self.copy()
        if self.tag is Tag.I64:
            return Value(Tag.F64, float(self._data))
        raise TypeMismatch(f"not numeric: cannot cast {self.tag.value} to f64")

    # --- Comparison ---
    def __eq__(self, other) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        if self.tag is Tag.F64 and other.tag is Tag.I64:
            return self._data == float(other._data)
        if self.tag is Tag.I64 and other.tag is Tag.F64:
            return float(self._data) == other._data
        if self.tag is not other.tag:
            return False

        if self.tag is Tag.NIL:
            return True
        if self.tag in (Tag.I64, Tag.F64, Tag.STRING, Tag.ATOM):
            return self._data == other._data
        if self.tag is Tag.LIST:
            return len(self._data) == len(other._data) and all(
                a == b for a, b in zip(self._data, other._data)
            )
        if self.tag is Tag.QUOTE:
            return self._data == other._data
        if self.tag is Tag.BUILTIN:
            return self._data is other._data
        raise TypeMismatch(f"cannot compare {self.tag.value}")

    def __ne__(self, other) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    # Lists are mutable, so values cannot be dict keys.
    __hash__ = None

    def __lt__(self, other) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        # Only the right operand is checked first; non-numeric means "not less".
        if other.tag not in NUMERIC_TAGS:
            return False
        if self.tag is Tag.F64:
            return self._data < float(other._data)
        if self.tag is Tag.I64:
            if other.tag is Tag.F64:
                return float(self._data) < other._data
            return self._data < other._data
        return False

    def __le__(self, other) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self == other or self < other

    def __ge__(self, other) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return not self < other

    # --- Arithmetic ---
    def __add__(self, other) -> Value:
        if not isinstance(other, Value):
            return NotImplemented
        if other.tag is Tag.NIL:
            return other.copy()

        if self.tag is Tag.I64 and other.tag is Tag.I64:
            return Value(Tag.I64, _wrapping_add(self._data, other._data))
        if self.tag in NUMERIC_TAGS and other.tag in NUMERIC_TAGS:
            return Value(Tag.F64, float(self._data) + float(other._data))
        if self.tag is Tag.STRING and other.tag is Tag.STRING:
            return Value(Tag.STRING, self._data + other._data)
        if self.tag is Tag.LIST and other.tag is Tag.LIST:
            result = self.copy()
            for item in other._data:
                result.push(item)
            return result
        if self.tag is Tag.NIL:
            return self.copy()
        raise TypeMismatch(f"cannot add {self.tag.value} and {other.tag.value}")

    # --- Introspection ---
    def used_atoms(self) -> list[str]:
        """Atom names referenced anywhere in this tree, depth first."""
        if self.tag is Tag.ATOM:
            return [self._data]
        if self.tag is Tag.QUOTE:
            return self._data.used_atoms()
        if self.tag is Tag.LIST:
            result: list[str] = []
            for child in self._data:
                result.extend(child.used_atoms())
            return result
        return []

    # --- Serialization ---
    def display(self) -> str:
        if self.tag is Tag.STRING:
            return self._data
        return self._render(debug=False)

    def debug(self) -> str:
        return self._render(debug=True)

    def _render(self, debug: bool) -> str:
        if self.tag is Tag.NIL:
            return "nil"
        if self.tag is Tag.I64:
            return str(self._data)
        if self.tag is Tag.F64:
            return format_f64(self._data)
        if self.tag is Tag.STRING:
            if not debug:
                return self._data
            return '"' + self._data.translate(_DEBUG_ESCAPES) + '"'
        if self.tag is Tag.ATOM:
            return self._data
        if self.tag is Tag.LIST:
            # Children always render in debug form, even under display.
            return "(" + " ".join(child.debug() for child in self._data) + ")"
        if self.tag is Tag.QUOTE:
            return "'" + self._data.debug()
        if self.tag is Tag.BUILTIN:
            return f"<{self._name} at {hex(id(self._data))}>"
        raise TypeMismatch(f"cannot render {self.tag.value}")

    def __str__(self) -> str:
        return self.display()

    def __repr__(self) -> str:
        return self.debug()


Nil = Value.nil()
