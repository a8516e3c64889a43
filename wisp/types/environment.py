"""Binding table for Wisp.

The Environment stores bindings of atom names to Values and supports nested
scopes via an `outer` link. It is passed explicitly to whatever evaluates the
forms produced by the reader; there is no global driver state.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterator, Optional, Union

from wisp.errors import WispInvalidSymbol, WispUnboundSymbol
from wisp.types.value import Tag, Value

Name = Union[str, Value]


def _key(name: Name) -> str:
    if isinstance(name, Value) and name.tag is Tag.ATOM:
        return name.as_str()
    if isinstance(name, str) and name:
        return name
    raise WispInvalidSymbol(f"Cannot bind {name!r} as a symbol")


class Environment:
    """Hierarchical mapping from names to Values."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[str, Value] = {}
        self.outer: Environment | None = outer

    def define(self, name: Name, value: Value) -> None:
        """Bind `name` to a copy of `value` in this frame.

        Raises WispInvalidSymbol if `name` is neither a non-empty str nor an atom.
        """
        self.vars[_key(name)] = value.copy()

    def find(self, name: Name) -> Optional[Environment]:
        """Find the nearest environment in the chain that binds `name`."""
        key = _key(name)
        env: Optional[Environment] = self
        while env is not None:
            if key in env.vars:
                return env
            env = env.outer
        return None

    def set(self, name: Name, value: Value) -> None:
        """Update an existing binding for `name` in the environment chain.

        Raises WispUnboundSymbol if the name is not bound anywhere.
        """
        env = self.find(name)
        if env is None:
            raise WispUnboundSymbol(f"Cannot set unbound symbol {_key(name)}")
        env.vars[_key(name)] = value.copy()

    def lookup(self, name: Name) -> Value:
        """Return a copy of the value bound to `name`."""
        env = self.find(name)
        if env is None:
            raise WispUnboundSymbol(f"Cannot lookup unbound symbol {_key(name)}")
        return env.vars[_key(name)].copy()

    def __contains__(self, name: Name) -> bool:
        return self.find(name) is not None

    def names(self) -> Iterator[str]:
        """Every visible name, innermost frame first, without duplicates."""
        seen: set[str] = set()
        env: Optional[Environment] = self
        while env is not None:
            for key in env.vars:
                if key not in seen:
                    seen.add(key)
                    yield key
            env = env.outer

    def _write_vars(self, buffer: StringIO) -> None:
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v.debug()}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            chain = []
            env = self
            while env is not None:
                frame = StringIO()
                env._write_vars(frame)
                chain.append(frame.getvalue())
                env = env.outer
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
