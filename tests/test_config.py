import sys

import pytest

from minipy.config import Semantics, get_recursion_limit, get_semantics
from minipy.interpreter import Interpreter, recursion_limit

ENV_VARS = (
    "MINIPY_SEMANTICS",
    "MINIPY_LINKAGE",
    "MINIPY_EAGER_OR",
    "MINIPY_LIVE_ITERATION",
    "MINIPY_RECURSION_LIMIT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


def test_defaults():
    assert get_semantics() == Semantics.default() == Semantics()
    assert get_semantics().linkage == "isolated"
    assert not get_semantics().eager_or
    assert not get_semantics().live_iteration
    assert get_recursion_limit() == 10_000


def test_reference_preset(monkeypatch):
    monkeypatch.setenv("MINIPY_SEMANTICS", "reference")
    assert get_semantics() == Semantics(linkage="caller", eager_or=True, live_iteration=True)


def test_switches_refine_the_preset(monkeypatch):
    monkeypatch.setenv("MINIPY_SEMANTICS", "Reference")
    monkeypatch.setenv("MINIPY_EAGER_OR", "off")
    monkeypatch.setenv("MINIPY_LINKAGE", "isolated")
    assert get_semantics() == Semantics(linkage="isolated", eager_or=False, live_iteration=True)


@pytest.mark.parametrize("raw,expected", [("1", True), ("yes", True), ("TRUE", True), ("0", False), ("no", False), ("", False)])
def test_boolean_flags(monkeypatch, raw, expected):
    monkeypatch.setenv("MINIPY_LIVE_ITERATION", raw)
    assert get_semantics().live_iteration is expected


@pytest.mark.parametrize(
    "var,raw",
    [
        ("MINIPY_SEMANTICS", "strict"),
        ("MINIPY_LINKAGE", "global"),
        ("MINIPY_EAGER_OR", "maybe"),
        ("MINIPY_RECURSION_LIMIT", "lots"),
    ],
)
def test_invalid_values_are_rejected(monkeypatch, var, raw):
    monkeypatch.setenv(var, raw)
    with pytest.raises(ValueError, match=var):
        get_semantics()
        get_recursion_limit()


def test_interpreter_reads_environment(monkeypatch):
    monkeypatch.setenv("MINIPY_LINKAGE", "caller")
    monkeypatch.setenv("MINIPY_RECURSION_LIMIT", "2500")
    interp = Interpreter()
    assert interp.semantics.linkage == "caller"
    assert interp.recursion_limit == 2500


def test_explicit_arguments_win_over_environment(monkeypatch):
    monkeypatch.setenv("MINIPY_SEMANTICS", "reference")
    interp = Interpreter(Semantics.default(), recursion_limit=50_000)
    assert interp.semantics == Semantics.default()
    assert interp.recursion_limit == 50_000


def test_semantics_is_immutable():
    with pytest.raises(AttributeError):
        Semantics().linkage = "caller"


def test_recursion_limit_is_restored():
    before = sys.getrecursionlimit()
    with recursion_limit(before + 1000):
        assert sys.getrecursionlimit() == before + 1000
    assert sys.getrecursionlimit() == before
    with recursion_limit(10):
        assert sys.getrecursionlimit() == before
