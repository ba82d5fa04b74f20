from __future__ import annotations
from typing import Callable

from minipy import Value
from minipy.syntax import BinaryOp
from minipy.types.errors import MiniPyDivisionError, MiniPyTypeError
from minipy.types.value import FixedList, compare_values, is_int, type_name, values_equal


def _unsupported(symbol: str, left: Value, right: Value) -> MiniPyTypeError:
    return MiniPyTypeError(
        f"unsupported operand type(s) for {symbol}: '{type_name(left)}' and '{type_name(right)}'"
    )


def _require_ints(symbol: str, left: Value, right: Value) -> None:
    if not (is_int(left) and is_int(right)):
        raise _unsupported(symbol, left, right)


# -------------------------------
# Arithmetic
# -------------------------------
def add(left: Value, right: Value) -> Value:
    if is_int(left) and is_int(right):
        return left + right
    if type(left) is str and type(right) is str:
        return left + right
    if isinstance(left, FixedList) and isinstance(right, FixedList):
        return left.concat(right)
    raise _unsupported("+", left, right)


def sub(left: Value, right: Value) -> Value:
    _require_ints("-", left, right)
    return left - right


def mul(left: Value, right: Value) -> Value:
    _require_ints("*", left, right)
    return left * right


def truncating_divmod(a: int, b: int) -> tuple[int, int]:
    """Quotient rounded toward zero; the remainder takes the dividend's sign."""
    q = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        q = -q
    return q, a - b * q


def div(left: Value, right: Value) -> Value:
    _require_ints("division", left, right)
    if right == 0:
        raise MiniPyDivisionError("integer division by zero")
    return truncating_divmod(left, right)[0]


def mod(left: Value, right: Value) -> Value:
    _require_ints("%", left, right)
    if right == 0:
        raise MiniPyDivisionError("integer modulo by zero")
    return truncating_divmod(left, right)[1]


# -------------------------------
# Comparison
# -------------------------------
def eq(left: Value, right: Value) -> bool:
    return values_equal(left, right)


def ne(left: Value, right: Value) -> bool:
    return not values_equal(left, right)


def lt(left: Value, right: Value) -> bool:
    return compare_values(left, right) < 0


def le(left: Value, right: Value) -> bool:
    return compare_values(left, right) <= 0


def gt(left: Value, right: Value) -> bool:
    return compare_values(left, right) > 0


def ge(left: Value, right: Value) -> bool:
    return compare_values(left, right) >= 0


# Strict binary operators: both operands are evaluated, left first.
# `and`/`or` are not here; the evaluator handles their evaluation order.
BINARY_OPERATORS: dict[BinaryOp, Callable[[Value, Value], Value]] = {
    BinaryOp.ADD: add,
    BinaryOp.SUB: sub,
    BinaryOp.MUL: mul,
    BinaryOp.DIV: div,
    BinaryOp.MOD: mod,
    BinaryOp.EQ: eq,
    BinaryOp.NE: ne,
    BinaryOp.LT: lt,
    BinaryOp.LE: le,
    BinaryOp.GT: gt,
    BinaryOp.GE: ge,
}
