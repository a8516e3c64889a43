from wisp.reader.parser import Cursor, Reader, read_all, read_one
from wisp.reader.scan import is_symbol_char

__all__ = ["Cursor", "Reader", "read_all", "read_one", "is_symbol_char"]
