"""Function-call protocol for minipy.

Centralizes how a call becomes an activation:
- arity is checked against the definition before any argument is evaluated;
- arguments are evaluated left to right in the caller's environment;
- the callee environment is built according to the linkage policy;
- the body runs until it finishes (result None) or raises ReturnSignal,
  which is caught here and nowhere else.
"""

from __future__ import annotations

from minipy import EvaluatorFn, ExecutorFn, Value
from minipy.runtime_context import RuntimeContext
from minipy.syntax import Expr
from minipy.types.environment import Environment
from minipy.types.function import Function
from minipy.types.return_signal import ReturnSignal
from minipy.evaluation.builtins import BUILTINS, check_arity


def activation_env(fn: Function, args: list[Value], caller_env: Environment,
                   context: RuntimeContext) -> Environment:
    """Environment for one call of `fn`.

    With 'isolated' linkage it holds the parameters only. With 'caller'
    linkage it starts as a copy of the caller's bindings, so the body can also
    read any variable the caller had bound; parameters are bound on top.
    """
    if context.semantics.linkage == "caller":
        env = caller_env.copy()
    else:
        env = Environment()
    for name, value in zip(fn.params, args):
        env.define(name, value)
    return env


def apply_function(fn: Function, args: list[Value], caller_env: Environment,
                   context: RuntimeContext, execute_fn: ExecutorFn) -> Value:
    """Run the body of `fn` with already-evaluated `args`."""
    check_arity(fn.name, fn.arity, len(args))
    env = activation_env(fn, args, caller_env, context)
    try:
        execute_fn(fn.body, env, context)
    except ReturnSignal as signal:
        return signal.value
    return None


def call(name: str, arg_exprs: tuple[Expr, ...], env: Environment, context: RuntimeContext,
         evaluate_fn: EvaluatorFn, execute_fn: ExecutorFn) -> Value:
    """Evaluate a call of `name`: a builtin if there is one, else a defined function.

    Raises MiniPyNameError for an unknown name and MiniPyArityError when the
    argument count does not match.
    """
    builtin = BUILTINS.get(name)
    if builtin is not None:
        arity, impl = builtin
        check_arity(name, arity, len(arg_exprs))
        return impl([evaluate_fn(e, env, context) for e in arg_exprs])

    fn = context.functions.lookup(name)
    check_arity(fn.name, fn.arity, len(arg_exprs))
    args = [evaluate_fn(e, env, context) for e in arg_exprs]
    return apply_function(fn, args, env, context, execute_fn)
