# Core type aliases for minipy's data model.
# Runtime values are plain Python objects (None, bool, int, str) plus
# FixedList for the language's fixed-length lists. No wrapper type is used for
# scalars; the tag of a value is recovered from its Python type.
#
# Naming guidance:
# - Value:       use in evaluator/runtime code to denote evaluated values.
# - EvaluatorFn: expression evaluator passed into call/statement helpers.
# - ExecutorFn:  statement executor passed into the call protocol.

from typing import Any, Callable

# Runtime value alias
Value = Any

# Evaluator function types, threaded through apply/builtins to avoid import cycles
EvaluatorFn = Callable[..., Value]
ExecutorFn = Callable[..., None]
