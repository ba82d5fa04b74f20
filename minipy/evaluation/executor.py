"""Statement executor for minipy.

Statements run for effect: binding names, writing list elements, printing,
or leaving the current call through ReturnSignal. Blocks do not open a scope;
every statement of an activation shares one Environment.
"""

from __future__ import annotations

from typing import Iterator

from minipy import Value
from minipy.runtime_context import RuntimeContext
from minipy.syntax import Assign, Block, ExprStmt, For, If, Print, Return, SetItem, Stmt
from minipy.types.environment import Environment
from minipy.types.errors import MiniPyTypeError
from minipy.types.return_signal import ReturnSignal
from minipy.types.value import FixedList, is_int, is_true, render, type_name
from minipy.evaluation import evaluator


def iterate(lst: FixedList, context: RuntimeContext) -> Iterator[Value]:
    """Elements visited by a `for` loop over `lst`.

    By default the elements are snapshotted when the loop starts. With live
    iteration each element is read when reached, so writes to later elements
    made by the loop body are seen.
    """
    if not context.semantics.live_iteration:
        yield from lst.snapshot()
        return
    for i in range(len(lst)):
        yield lst.get(i)


def execute(stmt: Stmt, env: Environment, context: RuntimeContext) -> None:
    """Execute `stmt` in `env`."""
    evaluate = evaluator.evaluate

    match stmt:
        case ExprStmt(expr=expr):
            evaluate(expr, env, context)

        case Print(expr=expr):
            context.emit(render(evaluate(expr, env, context)))

        case Block(stmts=stmts):
            for s in stmts:
                execute(s, env, context)

        case If(cond=cond, then=then, orelse=orelse):
            if is_true(evaluate(cond, env, context)):
                execute(then, env, context)
            else:
                execute(orelse, env, context)

        case Assign(name=name, value=value):
            env.define(name, evaluate(value, env, context))

        case Return(value=value):
            raise ReturnSignal(evaluate(value, env, context))

        case For(var=var, iterable=iterable, body=body):
            lst = evaluate(iterable, env, context)
            if not isinstance(lst, FixedList):
                raise MiniPyTypeError(f"'{type_name(lst)}' object is not iterable")
            for item in iterate(lst, context):
                env.define(var, item)
                execute(body, env, context)

        case SetItem(target=target, index=index, value=value):
            lst = evaluate(target, env, context)
            if not isinstance(lst, FixedList):
                raise MiniPyTypeError(
                    f"'{type_name(lst)}' object does not support item assignment"
                )
            i = evaluate(index, env, context)
            if not is_int(i):
                raise MiniPyTypeError(f"list indices must be int, not {type_name(i)}")
            lst.set(i, evaluate(value, env, context))

        case _:
            raise MiniPyTypeError(f"cannot execute {stmt!r}")
