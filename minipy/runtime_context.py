from __future__ import annotations
import sys
from dataclasses import dataclass, field
from typing import TextIO

from minipy.config import Semantics
from minipy.function_table import FunctionTable


# Everything an evaluation step needs besides the current environment.
# One context per program run; the function table inside is frozen before the
# first statement executes.
@dataclass
class RuntimeContext:
    functions: FunctionTable = field(default_factory=FunctionTable)
    semantics: Semantics = field(default_factory=Semantics)
    out: TextIO = field(default_factory=lambda: sys.stdout)

    def emit(self, line: str) -> None:
        """Write one output line and flush it."""
        self.out.write(line)
        self.out.write("\n")
        self.out.flush()
