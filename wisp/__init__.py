# Wisp's data model.
# Every piece of syntax and every runtime datum is a `Value` (see wisp.types.value).
# The reader turns source text into Value trees; drivers (REPL, file runner,
# linter) hand those trees to an evaluator that consumes and produces Values.

__version__ = "0.1.0"

from wisp.errors import MalformedProgram, TypeMismatch, WispError
from wisp.reader.parser import Cursor, Reader, read_all, read_one
from wisp.types.value import Nil, Tag, Value

__all__ = [
    "Cursor",
    "MalformedProgram",
    "Nil",
    "Reader",
    "Tag",
    "TypeMismatch",
    "Value",
    "WispError",
    "read_all",
    "read_one",
]
