"""Abstract syntax of minipy programs.

The reader produces these nodes and the evaluator consumes them. Nodes are
immutable; a program is a collection of global function definitions plus one
top-level statement.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from minipy import Value


class BinaryOp(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "//"
    MOD = "%"
    EQ = "=="
    NE = "!="
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    AND = "and"
    OR = "or"


class UnaryOp(Enum):
    NEG = "-"
    NOT = "not"


# --- Expressions ---

@dataclass(frozen=True)
class Constant:
    value: Value


@dataclass(frozen=True)
class Identifier:
    name: str


@dataclass(frozen=True)
class BinOp:
    op: BinaryOp
    left: Expr
    right: Expr


@dataclass(frozen=True)
class UnOp:
    op: UnaryOp
    operand: Expr


@dataclass(frozen=True)
class Call:
    name: str
    args: tuple[Expr, ...] = ()


@dataclass(frozen=True)
class ListLiteral:
    elements: tuple[Expr, ...] = ()


@dataclass(frozen=True)
class Index:
    target: Expr
    index: Expr


@dataclass(frozen=True)
class Pipe:
    """`source | function`; see evaluator.pipe_arguments for the rewrite."""

    source: Expr
    function: str


Expr = Union[Constant, Identifier, BinOp, UnOp, Call, ListLiteral, Index, Pipe]


# --- Statements ---

@dataclass(frozen=True)
class ExprStmt:
    expr: Expr


@dataclass(frozen=True)
class Print:
    expr: Expr


@dataclass(frozen=True)
class Block:
    stmts: tuple[Stmt, ...] = ()


@dataclass(frozen=True)
class If:
    cond: Expr
    then: Stmt
    orelse: Stmt = Block()


@dataclass(frozen=True)
class Assign:
    name: str
    value: Expr


@dataclass(frozen=True)
class Return:
    value: Expr = Constant(None)


@dataclass(frozen=True)
class For:
    var: str
    iterable: Expr
    body: Stmt


@dataclass(frozen=True)
class SetItem:
    target: Expr
    index: Expr
    value: Expr


Stmt = Union[ExprStmt, Print, Block, If, Assign, Return, For, SetItem]


# --- Definitions ---

@dataclass(frozen=True)
class FunctionDef:
    name: str
    params: tuple[str, ...]
    body: Stmt


@dataclass(frozen=True)
class Program:
    functions: tuple[FunctionDef, ...]
    body: Stmt
