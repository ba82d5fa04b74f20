from __future__ import annotations

import logging
from typing import Dict, Iterator, Optional

from minipy.types.errors import MiniPyError, MiniPyNameError
from minipy.types.function import Function

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

# Names resolved by the evaluator before the table is consulted
RESERVED_NAMES = frozenset({"len", "range"})


class FunctionTable:
    """Global registry of function definitions.

    Filled once before the program runs, then frozen: lookups are the only
    operation allowed afterwards.
    """

    def __init__(self):
        self._functions: Dict[str, Function] = {}
        self._frozen: bool = False

    def register(self, fn: Function) -> Function:
        if self._frozen:
            raise MiniPyError(f"cannot define '{fn.name}': function table is frozen")
        if fn.name in RESERVED_NAMES:
            raise MiniPyNameError(f"cannot redefine builtin '{fn.name}'")
        if fn.name in self._functions:
            raise MiniPyNameError(f"function '{fn.name}' is already defined")
        self._functions[fn.name] = fn
        logger.debug("registered %s", fn)
        return fn

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, name: str) -> Optional[Function]:
        return self._functions.get(name)

    def lookup(self, name: str) -> Function:
        fn = self._functions.get(name)
        if fn is None:
            raise MiniPyNameError(f"function '{name}' is not defined")
        return fn

    def __contains__(self, name: object) -> bool:
        return name in self._functions

    def __iter__(self) -> Iterator[Function]:
        return iter(self._functions.values())

    def __len__(self) -> int:
        return len(self._functions)
