"""Runtime value model for minipy.

Values are plain Python objects:

    - None   -> None
    - Bool   -> bool
    - Int    -> int (never a bool, see `tag_of`)
    - String -> str
    - List   -> FixedList

FixedList is the only mutable value. It is shared by reference between every
holder (variables, parameters, other lists), so writing an element is visible
to all of them.
"""

from __future__ import annotations

from enum import IntEnum
from io import StringIO
from typing import Iterable, Iterator

from minipy import Value
from minipy.types.errors import MiniPyIndexError, MiniPyTypeError


class ValueTag(IntEnum):
    """Tag of a runtime value. The integer order is the cross-tag ordering."""

    NONE = 0
    BOOL = 1
    INT = 2
    STRING = 3
    LIST = 4


_TYPE_NAMES = {
    ValueTag.NONE: "NoneType",
    ValueTag.BOOL: "bool",
    ValueTag.INT: "int",
    ValueTag.STRING: "str",
    ValueTag.LIST: "list",
}


class FixedList:
    """A list whose length is set at construction; elements may be overwritten."""

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[Value] = ()):
        self._items: list[Value] = list(items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self._items)

    def _check_index(self, index: int) -> None:
        if type(index) is not int:
            raise MiniPyTypeError(f"list indices must be int, not {type_name(index)}")
        if not 0 <= index < len(self._items):
            raise MiniPyIndexError(
                f"list index {index} out of range for length {len(self._items)}"
            )

    def get(self, index: int) -> Value:
        self._check_index(index)
        return self._items[index]

    def set(self, index: int, value: Value) -> None:
        self._check_index(index)
        self._items[index] = value

    __getitem__ = get
    __setitem__ = set

    def snapshot(self) -> tuple[Value, ...]:
        """Current elements as an immutable tuple (used for loop iteration)."""
        return tuple(self._items)

    def concat(self, other: FixedList) -> FixedList:
        return FixedList(self._items + other._items)

    def __add__(self, other: object) -> FixedList:
        if not isinstance(other, FixedList):
            return NotImplemented
        return self.concat(other)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, FixedList) and values_equal(self, other)

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"FixedList({self._items!r})"

    def __str__(self) -> str:
        return render(self)


def tag_of(value: Value) -> ValueTag:
    # bool is a subclass of int, so exact type checks are required
    if value is None:
        return ValueTag.NONE
    kind = type(value)
    if kind is bool:
        return ValueTag.BOOL
    if kind is int:
        return ValueTag.INT
    if kind is str:
        return ValueTag.STRING
    if kind is FixedList:
        return ValueTag.LIST
    raise MiniPyTypeError(f"not a minipy value: {value!r}")


def type_name(value: Value) -> str:
    """Python-style type name of a value, for error messages."""
    try:
        return _TYPE_NAMES[tag_of(value)]
    except MiniPyTypeError:
        return type(value).__name__


def is_int(value: Value) -> bool:
    return type(value) is int


def is_bool(value: Value) -> bool:
    return type(value) is bool


def is_true(value: Value) -> bool:
    """Truthiness: None, False, 0, "" and the empty list are false."""
    tag = tag_of(value)
    if tag is ValueTag.NONE:
        return False
    if tag is ValueTag.LIST:
        return len(value) > 0
    return bool(value)


def values_equal(a: Value, b: Value) -> bool:
    """Structural, tag-aware equality (True is not 1)."""
    if a is b:
        return True
    tag = tag_of(a)
    if tag is not tag_of(b):
        return False
    if tag is ValueTag.LIST:
        return len(a) == len(b) and all(values_equal(x, y) for x, y in zip(a, b))
    return a == b


def compare_values(a: Value, b: Value) -> int:
    """Three-way comparison returning -1, 0 or 1.

    Same-tag operands use their natural order; lists compare element by
    element, a proper prefix sorting first. Mismatched tags order by ValueTag.
    """
    tag_a, tag_b = tag_of(a), tag_of(b)
    if tag_a is not tag_b:
        return -1 if tag_a < tag_b else 1
    if tag_a is ValueTag.NONE:
        return 0
    if tag_a is ValueTag.LIST:
        for x, y in zip(a, b):
            c = compare_values(x, y)
            if c:
                return c
        return (len(a) > len(b)) - (len(a) < len(b))
    return (a > b) - (a < b)


def _write_value(value: Value, buffer: StringIO) -> None:
    tag = tag_of(value)
    if tag is ValueTag.LIST:
        buffer.write("[")
        first = True
        for item in value:
            if not first:
                buffer.write(", ")
            _write_value(item, buffer)
            first = False
        buffer.write("]")
    elif tag is ValueTag.STRING:
        buffer.write(value)
    else:
        # None, True/False and decimal ints already print the way the language does
        buffer.write(str(value))


def render(value: Value) -> str:
    """Display form used by `print`."""
    with StringIO() as buffer:
        _write_value(value, buffer)
        return buffer.getvalue()
