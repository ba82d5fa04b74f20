import pytest

from minipy.evaluation.evaluator import evaluate, pipe_arguments
from minipy.runtime_context import RuntimeContext
from minipy.syntax import BinaryOp, BinOp, Constant, Identifier, Index, ListLiteral, UnaryOp, UnOp
from minipy.types import errors
from minipy.types.environment import Environment
from minipy.types.value import FixedList


# -----------------------------------------------------
# Fixtures
# -----------------------------------------------------

@pytest.fixture
def env():
    return Environment({"x": 42, "s": "ab", "l": FixedList([1, 2, 3])})


@pytest.fixture
def context():
    return RuntimeContext()


# -----------------------------------------------------
# Direct evaluation of syntax nodes
# -----------------------------------------------------

def test_self_evaluating_constants(env, context):
    assert evaluate(Constant(1), env, context) == 1
    assert evaluate(Constant("hello"), env, context) == "hello"
    assert evaluate(Constant(None), env, context) is None
    assert evaluate(Constant(True), env, context) is True


def test_identifier_lookup(env, context):
    assert evaluate(Identifier("x"), env, context) == 42
    with pytest.raises(errors.MiniPyNameError):
        evaluate(Identifier("z"), env, context)


def test_list_literal_builds_a_fresh_list(env, context):
    expr = ListLiteral((Constant(1), Identifier("x")))
    first = evaluate(expr, env, context)
    second = evaluate(expr, env, context)
    assert first == FixedList([1, 42])
    assert first is not second


def test_index(env, context):
    assert evaluate(Index(Identifier("l"), Constant(2)), env, context) == 3


def test_unary_operators(env, context):
    assert evaluate(UnOp(UnaryOp.NEG, Identifier("x")), env, context) == -42
    assert evaluate(UnOp(UnaryOp.NOT, Constant(False)), env, context) is True


def test_binary_operator_evaluates_left_then_right(env, context):
    # the left operand fails first
    expr = BinOp(BinaryOp.ADD, Identifier("missing_left"), Identifier("missing_right"))
    with pytest.raises(errors.MiniPyNameError, match="missing_left"):
        evaluate(expr, env, context)


def test_pipe_arguments_spread_only_list_literals():
    lit = ListLiteral((Constant(1), Constant(2)))
    assert pipe_arguments(lit) == (Constant(1), Constant(2))
    assert pipe_arguments(Identifier("l")) == (Identifier("l"),)


# -----------------------------------------------------
# Expressions read from source
# -----------------------------------------------------

@pytest.mark.parametrize(
    "source,expected",
    [
        ("1 + 2 * 3", 7),
        ("10 - 4 - 3", 3),
        ("7 // 2", 3),
        ("7 / 2", 3),
        ("-7 // 2", -3),
        ("7 // -2", -3),
        ("-7 // -2", 3),
        ("7 % 3", 1),
        ("-7 % 3", -1),
        ("7 % -3", 1),
        ("-(3)", -3),
        ('"ab" + "cd"', "abcd"),
        ("[1] + [2, 3]", FixedList([1, 2, 3])),
        ("[] + []", FixedList()),
        ("1 == 1", True),
        ("1 == True", False),
        ("None == None", True),
        ("[1, [2]] == [1, [2]]", True),
        ("[1, 2] != [1, 3]", True),
        ('"a" == 1', False),
        ("1 < 2", True),
        ("2 <= 2", True),
        ("3 > 4", False),
        ('"b" >= "a"', True),
        ("[1, 2] < [1, 3]", True),
        ("[1, 2] < [1, 2, 0]", True),
        ("not True", False),
        ("True and False", False),
        ("True and True", True),
        ("False or True", True),
        ("False or False", False),
        ("len([1, 2, 3])", 3),
        ("len([])", 0),
        ("range(4)", FixedList([0, 1, 2, 3])),
        ("range(0)", FixedList()),
        ("[10, 20, 30][1]", 20),
        ("[[1, 2], [3]][0][1]", 2),
    ],
)
def test_eval_expression(interp, source, expected):
    result = interp.eval(source)
    assert type(result) is type(expected)
    assert result == expected


@pytest.mark.parametrize(
    "source,error",
    [
        ('1 + "a"', errors.MiniPyTypeError),
        ('"a" - "b"', errors.MiniPyTypeError),
        ("[1] * 2", errors.MiniPyTypeError),
        ("True + 1", errors.MiniPyTypeError),
        ("[1] + 1", errors.MiniPyTypeError),
        ("-True", errors.MiniPyTypeError),
        ("-\"a\"", errors.MiniPyTypeError),
        ("not 1", errors.MiniPyTypeError),
        ("1 and True", errors.MiniPyTypeError),
        ("True and 1", errors.MiniPyTypeError),
        ("1 or True", errors.MiniPyTypeError),
        ("False or 0", errors.MiniPyTypeError),
        ("1 // 0", errors.MiniPyDivisionError),
        ("1 % 0", errors.MiniPyDivisionError),
        ("0 // 0", errors.MiniPyDivisionError),
        ('"a" // 0', errors.MiniPyTypeError),
        ("undefinedVar", errors.MiniPyNameError),
        ("nope(1)", errors.MiniPyNameError),
        ("len(1)", errors.MiniPyTypeError),
        ('len("abc")', errors.MiniPyTypeError),
        ("len([1], [2])", errors.MiniPyArityError),
        ("range()", errors.MiniPyArityError),
        ('range("3")', errors.MiniPyTypeError),
        ("range(True)", errors.MiniPyTypeError),
        ("range(-1)", errors.MiniPyValueError),
        ("[1, 2][5]", errors.MiniPyIndexError),
        ("[1, 2][-1]", errors.MiniPyIndexError),
        ("[1, 2][True]", errors.MiniPyTypeError),
        ('[1, 2]["0"]', errors.MiniPyTypeError),
        ("5[0]", errors.MiniPyTypeError),
        ('"abc"[0]', errors.MiniPyTypeError),
    ],
)
def test_eval_expression_errors(interp, source, error):
    with pytest.raises(error):
        interp.eval(source)


def test_runtime_errors_share_a_base_class():
    for kind in (
        errors.MiniPyNameError,
        errors.MiniPyTypeError,
        errors.MiniPyArityError,
        errors.MiniPyIndexError,
        errors.MiniPyDivisionError,
        errors.MiniPyValueError,
        errors.MiniPyRecursionError,
    ):
        assert issubclass(kind, errors.MiniPyRuntimeError)
        assert issubclass(kind, errors.MiniPyError)
    assert not issubclass(errors.MiniPySyntaxError, errors.MiniPyRuntimeError)


def test_and_short_circuits(run):
    lines = run(
        """
        def loud():
            print("evaluated")
            return True
        print(False and loud())
        print(True and loud())
        """
    )
    assert lines == ["False", "evaluated", "True"]


def test_eval_sees_last_run(interp):
    interp.run("x = [1, 2]\ndef inc(n): return n + 1\n")
    assert interp.eval("x + [3]") == FixedList([1, 2, 3])
    assert interp.eval("inc(x[1])") == 3


@pytest.mark.parametrize("source", ['7 / "x"', '7 // "x"'])
def test_division_type_error_names_the_operation(interp, source):
    with pytest.raises(errors.MiniPyTypeError, match="for division: 'int' and 'str'"):
        interp.eval(source)
