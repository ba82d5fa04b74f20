"""Function-table entries for minipy."""

from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from minipy.syntax import Stmt


class Function:
    """A global function: name, ordered parameter names and body statement."""

    __slots__ = ("name", "params", "body")

    def __init__(self, name: str, params: tuple[str, ...], body: Stmt):
        self.name: str = name
        self.params: tuple[str, ...] = tuple(params)
        self.body: Stmt = body

    @property
    def arity(self) -> int:
        return len(self.params)

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("def ")
            buffer.write(self.name)
            buffer.write("(")
            buffer.write(", ".join(self.params))
            buffer.write(")")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"<Function {self}>"
