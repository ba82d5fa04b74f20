# Non-local exit for `return`.
#
#   def f(x):
#       for e in x:
#           if e == 0:
#               return e   # raises ReturnSignal(0) ...
#   f([1, 0, 2])           # ... caught where f was called; the call is 0
#
# ReturnSignal is not a MiniPyError: a return is never a failure and must not
# be caught by error handling.

from minipy import Value


class ReturnSignal(Exception):
    """Carries the returned value from a `return` statement to its call site."""

    def __init__(self, value: Value):
        super().__init__(f"ReturnSignal(value={value!r})")
        self.value: Value = value
