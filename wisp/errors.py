from __future__ import annotations

from typing import Optional


class WispError(Exception):
    """ Base class for all Wisp errors"""
    pass


class MalformedProgram(WispError):
    """ Raised when the reader cannot make sense of the source text"""

    def __init__(self, message: str, position: Optional[int] = None, source: Optional[str] = None):
        self.message = message
        self.position = position
        self.line: Optional[int] = None
        self.column: Optional[int] = None
        if position is not None and source is not None:
            self.line, self.column = line_and_column(source, position)
            message = f"{message} (line {self.line}, column {self.column})"
        elif position is not None:
            message = f"{message} (at offset {position})"
        super().__init__(f"MalformedProgram: {message}")


class TypeMismatch(WispError):
    """ Raised when an operation is applied to an unsupported value variant"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"TypeMismatch: {message}")


class EmptyList(WispError, IndexError):
    """ Raised when popping from an empty list"""


class WispInvalidSymbol(WispError):
    """ Raised when a non-atom is used as a binding name"""


class WispUnboundSymbol(WispError):
    """ Raised when a symbol is looked up before it is bound"""


def line_and_column(source: str, position: int) -> tuple[int, int]:
    """Translate a character offset into a 1-based (line, column) pair."""
    position = max(0, min(position, len(source)))
    line = source.count("\n", 0, position) + 1
    column = position - (source.rfind("\n", 0, position) + 1) + 1
    return line, column
