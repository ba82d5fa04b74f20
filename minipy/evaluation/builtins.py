"""Builtin functions of minipy.

Builtins are resolved by name before the function table is consulted, receive
their already-evaluated arguments, and cannot be redefined.
"""

from __future__ import annotations

from typing import Callable

from minipy import Value
from minipy.types.errors import MiniPyArityError, MiniPyTypeError, MiniPyValueError
from minipy.types.value import FixedList, is_int, type_name


def builtin_len(args: list[Value]) -> int:
    (lst,) = args
    if not isinstance(lst, FixedList):
        raise MiniPyTypeError(f"len() argument must be a list, not '{type_name(lst)}'")
    return len(lst)


def builtin_range(args: list[Value]) -> FixedList:
    (n,) = args
    if not is_int(n):
        raise MiniPyTypeError(f"range() argument must be an int, not '{type_name(n)}'")
    if n < 0:
        raise MiniPyValueError(f"range() argument must be non-negative, got {n}")
    return FixedList(range(n))


BUILTINS: dict[str, tuple[int, Callable[[list[Value]], Value]]] = {
    "len": (1, builtin_len),
    "range": (1, builtin_range),
}


def check_arity(name: str, expected: int, given: int) -> None:
    if given != expected:
        plural = "" if expected == 1 else "s"
        verb = "was" if given == 1 else "were"
        raise MiniPyArityError(
            f"{name}() takes {expected} argument{plural} but {given} {verb} given"
        )
