"""Expression evaluator for minipy.

Reduces an expression node to a value in a given environment. Operands are
evaluated left to right. The only way an expression runs statements is a
function call, which hands the callee body to the statement executor.
"""

from __future__ import annotations

from minipy import Value
from minipy.runtime_context import RuntimeContext
from minipy.syntax import (
    BinaryOp,
    BinOp,
    Call,
    Constant,
    Expr,
    Identifier,
    Index,
    ListLiteral,
    Pipe,
    UnaryOp,
    UnOp,
)
from minipy.types.environment import Environment
from minipy.types.errors import MiniPyTypeError
from minipy.types.value import FixedList, is_bool, is_int, type_name
from minipy.evaluation import executor
from minipy.evaluation.apply import call
from minipy.evaluation.operators import BINARY_OPERATORS


def pipe_arguments(source: Expr) -> tuple[Expr, ...]:
    """Argument expressions of `source | f`.

    A list literal on the left is spread into one argument per element; any
    other expression, including one that evaluates to a list, is passed whole.
    """
    if isinstance(source, ListLiteral):
        return source.elements
    return (source,)


def _require_bool(op: str, value: Value) -> bool:
    if not is_bool(value):
        raise MiniPyTypeError(f"operand of '{op}' must be bool, not '{type_name(value)}'")
    return value


def evaluate_logical(expr: BinOp, env: Environment, context: RuntimeContext) -> bool:
    if expr.op is BinaryOp.OR and context.semantics.eager_or:
        # both operands run before either is checked
        left = evaluate(expr.left, env, context)
        right = evaluate(expr.right, env, context)
        left = _require_bool("or", left)
        right = _require_bool("or", right)
        return left or right

    left = _require_bool(expr.op.value, evaluate(expr.left, env, context))
    if expr.op is BinaryOp.AND:
        if not left:
            return False
        return _require_bool("and", evaluate(expr.right, env, context))
    # or
    if left:
        return True
    return _require_bool("or", evaluate(expr.right, env, context))


def evaluate(expr: Expr, env: Environment, context: RuntimeContext) -> Value:
    """Evaluate `expr` in `env` and return its value."""
    match expr:
        case Constant(value=value):
            return value

        case Identifier(name=name):
            return env.lookup(name)

        case BinOp(op=BinaryOp.AND | BinaryOp.OR):
            return evaluate_logical(expr, env, context)

        case BinOp(op=op, left=left, right=right):
            lhs = evaluate(left, env, context)
            rhs = evaluate(right, env, context)
            return BINARY_OPERATORS[op](lhs, rhs)

        case UnOp(op=UnaryOp.NEG, operand=operand):
            value = evaluate(operand, env, context)
            if not is_int(value):
                raise MiniPyTypeError(f"bad operand type for unary -: '{type_name(value)}'")
            return -value

        case UnOp(op=UnaryOp.NOT, operand=operand):
            return not _require_bool("not", evaluate(operand, env, context))

        case Call(name=name, args=args):
            return call(name, args, env, context, evaluate, executor.execute)

        case Pipe(source=source, function=name):
            return call(name, pipe_arguments(source), env, context, evaluate, executor.execute)

        case ListLiteral(elements=elements):
            return FixedList([evaluate(e, env, context) for e in elements])

        case Index(target=target, index=index):
            lst = evaluate(target, env, context)
            if not isinstance(lst, FixedList):
                raise MiniPyTypeError(f"'{type_name(lst)}' object is not subscriptable")
            return lst.get(evaluate(index, env, context))

    raise MiniPyTypeError(f"cannot evaluate {expr!r}")
