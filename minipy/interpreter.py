from __future__ import annotations
import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, TextIO

from minipy import Value
from minipy.config import Semantics, get_recursion_limit, get_semantics
from minipy.function_table import FunctionTable
from minipy.reader.parser import parse, parse_expression
from minipy.runtime_context import RuntimeContext
from minipy.syntax import Program
from minipy.types.environment import Environment
from minipy.types.errors import MiniPyError, MiniPyRecursionError, MiniPyRuntimeError
from minipy.types.function import Function
from minipy.types.return_signal import ReturnSignal
from minipy.evaluation.evaluator import evaluate
from minipy.evaluation.executor import execute

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


@contextmanager
def recursion_limit(limit: int) -> Iterator[None]:
    """Raise the host recursion limit to at least `limit` while the block runs."""
    previous = sys.getrecursionlimit()
    if limit > previous:
        sys.setrecursionlimit(limit)
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)


def register_functions(program: Program, functions: FunctionTable) -> None:
    """Fill the function table from the program's definitions and freeze it."""
    for d in program.functions:
        functions.register(Function(d.name, d.params, d.body))
    functions.freeze()


def run_program(program: Program, context: RuntimeContext, env: Environment | None = None) -> Environment:
    """Register every function, then execute the top-level statement.

    Returns the top-level environment. Any MiniPyError aborts the run; output
    printed before the failure has already been written and flushed.
    """
    register_functions(program, context.functions)
    if env is None:
        env = Environment()
    logger.debug("running program: %d function(s), %s", len(context.functions), context.semantics)
    try:
        execute(program.body, env, context)
    except ReturnSignal:
        raise MiniPyRuntimeError("'return' outside function") from None
    except RecursionError:
        raise MiniPyRecursionError("maximum recursion depth exceeded") from None
    return env


class Interpreter:
    """
    Runs minipy programs.

    Keeps the top-level environment and function table of the last run so that
    `eval` can evaluate further expressions against them.
    """

    def __init__(
        self,
        semantics: Semantics | None = None,
        out: TextIO | None = None,
        *,
        recursion_limit: int | None = None,
    ):
        self.semantics: Semantics = semantics if semantics is not None else get_semantics()
        self._out = out
        self.recursion_limit: int = recursion_limit if recursion_limit is not None else get_recursion_limit()
        self.context: RuntimeContext = self._new_context()
        self.env: Environment = Environment()

    @property
    def out(self) -> TextIO:
        # Resolved late so that a replaced sys.stdout is honoured
        return self._out if self._out is not None else sys.stdout

    def _new_context(self) -> RuntimeContext:
        return RuntimeContext(FunctionTable(), self.semantics, self.out)

    def execute(self, program: Program) -> Environment:
        """Run a parsed program in a fresh context; returns the top-level environment."""
        self.context = self._new_context()
        self.env = Environment()
        try:
            with recursion_limit(self.recursion_limit):
                return run_program(program, self.context, self.env)
        except MiniPyError as ex:
            logger.debug("run failed with %s: %s", type(ex).__name__, ex)
            raise

    def run(self, source: str) -> Environment:
        """Parse and run program text."""
        return self.execute(parse(source))

    def run_file(self, path: str | Path) -> Environment:
        """Parse and run the program stored in `path`."""
        return self.run(Path(path).read_text(encoding="utf-8"))

    def eval(self, code: str) -> Value:
        """Evaluate one expression against the last run's bindings and functions."""
        expr = parse_expression(code)
        self.context.out = self.out
        try:
            with recursion_limit(self.recursion_limit):
                return evaluate(expr, self.env, self.context)
        except RecursionError:
            raise MiniPyRecursionError("maximum recursion depth exceeded") from None
