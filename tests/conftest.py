import io
import textwrap

import pytest

from minipy.config import Semantics
from minipy.interpreter import Interpreter

# Programs whose behaviour does not depend on the semantics switches run twice:
# 1) with the default semantics ["default"]
# 2) with the compatibility semantics ["reference"]
# Tests for linkage, `or` evaluation and loop iteration build their own
# Interpreter with an explicit Semantics instead of using these fixtures.


@pytest.fixture(params=["default", "reference"])
def semantics(request):
    if request.param == "reference":
        return Semantics.reference()
    return Semantics.default()


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def interp(semantics, out):
    return Interpreter(semantics, out)


@pytest.fixture
def run(interp, out):
    """Run program text (dedented) and return every line printed so far."""

    def _run(source: str) -> list[str]:
        interp.run(textwrap.dedent(source))
        return out.getvalue().splitlines()

    return _run
