"""Runtime environment for minipy.

An Environment holds the local bindings of one activation: a function call or
the top-level program. There is no outer link; names not bound here are
unbound. Assignment replaces the previous binding, so a lookup always returns
the most recently assigned value.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterator, Mapping, Optional

from minipy import Value
from minipy.types.errors import MiniPyNameError


class Environment:
    """Mutable mapping from variable names to runtime values."""

    __slots__ = ("vars",)

    def __init__(self, bindings: Optional[Mapping[str, Value]] = None):
        self.vars: dict[str, Value] = dict(bindings) if bindings else {}

    def define(self, name: str, value: Value) -> None:
        """Bind `name` to `value`, replacing any previous binding."""
        self.vars[name] = value

    def lookup(self, name: str) -> Value:
        """Return the value bound to `name`.

        Raises MiniPyNameError if the name is unbound.
        """
        try:
            return self.vars[name]
        except KeyError:
            raise MiniPyNameError(f"name '{name}' is not defined") from None

    def copy(self) -> Environment:
        """Shallow copy: bindings are duplicated, values (lists) stay shared."""
        return Environment(self.vars)

    def update(self, mapping: Mapping[str, Value]) -> None:
        """Bulk-define a mapping of name -> value."""
        for k, v in mapping.items():
            self.define(k, v)

    def __contains__(self, name: object) -> bool:
        return name in self.vars

    def __iter__(self) -> Iterator[str]:
        return iter(self.vars)

    def __len__(self) -> int:
        return len(self.vars)

    def _write_vars(self, buffer: StringIO) -> None:
        """Write the variables into the buffer in a compact form."""
        buffer.write("{")
        first = True
        for k, v in self.vars.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{k}: {v!r}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write_vars(buffer)
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Environment ")
            self._write_vars(buffer)
            buffer.write(">")
            return buffer.getvalue()
