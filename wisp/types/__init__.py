from wisp.types.value import Nil, Tag, Value

__all__ = ["Nil", "Tag", "Value"]
