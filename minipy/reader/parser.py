"""
  minipy parser

Recursive descent over the token stream produced by `lex`, building
`minipy.syntax` nodes. Function definitions may appear anywhere at top level;
they are collected into Program.functions and every other top-level statement
goes, in order, into Program.body.

Expression precedence, loosest first:

    e | f                pipe (f must be a function name)
    or
    and
    not
    == != < <= > >=      a single, non-chained comparison
    + -
    * // / %             '/' is integer division, same as '//'
    - (unary)
    e[i]  f(args)        indexing, calls
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator, Optional

from minipy.types.errors import MiniPySyntaxError
from minipy.reader.lexer import Token, lex
from minipy.syntax import (
    Assign,
    BinaryOp,
    BinOp,
    Block,
    Call,
    Constant,
    Expr,
    ExprStmt,
    For,
    FunctionDef,
    Identifier,
    If,
    Index,
    ListLiteral,
    Pipe,
    Print,
    Program,
    Return,
    SetItem,
    Stmt,
    UnaryOp,
    UnOp,
)


SYMBOL_OPS: dict[str, BinaryOp] = {
    "+": BinaryOp.ADD,
    "-": BinaryOp.SUB,
    "*": BinaryOp.MUL,
    "//": BinaryOp.DIV,
    "/": BinaryOp.DIV,
    "%": BinaryOp.MOD,
    "==": BinaryOp.EQ,
    "!=": BinaryOp.NE,
    "<": BinaryOp.LT,
    "<=": BinaryOp.LE,
    ">": BinaryOp.GT,
    ">=": BinaryOp.GE,
}

COMPARISON_SYMBOLS = frozenset({"==", "!=", "<", "<=", ">", ">="})
ADDITIVE_SYMBOLS = frozenset({"+", "-"})
MULTIPLICATIVE_SYMBOLS = frozenset({"*", "//", "/", "%"})

LITERAL_KEYWORDS = {"True": True, "False": False, "None": None}

ESCAPES = {"n": "\n", "t": "\t", "\\": "\\", '"': '"', "'": "'", "0": "\0"}
ESCAPE_RE = re.compile(r"\\(.)")


def describe(tok: Token) -> str:
    if tok.kind == "eof":
        return "end of input"
    if tok.kind in ("newline", "indent", "dedent"):
        return tok.kind
    return repr(tok.value)


def decode_string(tok: Token) -> str:
    """Strip the quotes and resolve escape sequences of a string token."""

    def replace(m: re.Match) -> str:
        ch = m.group(1)
        if ch not in ESCAPES:
            raise MiniPySyntaxError(f"invalid escape sequence '\\{ch}'", tok.line, tok.column)
        return ESCAPES[ch]

    return ESCAPE_RE.sub(replace, tok.value[1:-1])


class Parser:
    def __init__(self, tokens: Iterable[Token]):
        self.tokens: Iterator[Token] = iter(tokens)
        self.buffer: list[Token] = []
        self.last: Token = Token("eof", None, 1, 1)
        self._in_function = False

    # --- token stream ---

    def peek(self) -> Token:
        if not self.buffer:
            tok = next(self.tokens, None)
            if tok is None:
                tok = Token("eof", None, self.last.line, self.last.column)
            self.buffer.append(tok)
        return self.buffer[0]

    def advance(self) -> Token:
        tok = self.peek()
        if tok.kind != "eof":
            self.buffer.pop(0)
        self.last = tok
        return tok

    def check(self, kind: str, value: Optional[str] = None) -> bool:
        tok = self.peek()
        return tok.kind == kind and (value is None or tok.value == value)

    def accept(self, kind: str, value: Optional[str] = None) -> Optional[Token]:
        if self.check(kind, value):
            return self.advance()
        return None

    def expect(self, kind: str, value: Optional[str] = None, what: Optional[str] = None) -> Token:
        if self.check(kind, value):
            return self.advance()
        if what is None:
            what = repr(value) if value is not None else kind
        tok = self.peek()
        raise self.error(f"expected {what}, got {describe(tok)}", tok)

    @staticmethod
    def error(message: str, tok: Token) -> MiniPySyntaxError:
        return MiniPySyntaxError(message, tok.line, tok.column)

    def _accept_op(self, symbols: frozenset[str]) -> Optional[BinaryOp]:
        tok = self.peek()
        if tok.kind == "op" and tok.value in symbols:
            self.advance()
            return SYMBOL_OPS[tok.value]
        return None

    # --- program structure ---

    def parse_program(self) -> Program:
        functions: list[FunctionDef] = []
        stmts: list[Stmt] = []
        while True:
            tok = self.peek()
            if tok.kind == "eof":
                break
            if tok.kind == "newline":
                self.advance()
                continue
            if tok.kind == "indent":
                raise self.error("unexpected indent", tok)
            if tok.kind == "keyword" and tok.value == "def":
                functions.append(self.parse_def())
            else:
                stmts.append(self.parse_statement())
        return Program(tuple(functions), Block(tuple(stmts)))

    def parse_def(self) -> FunctionDef:
        self.expect("keyword", "def")
        name = self.expect("name", what="a function name").value
        self.expect("op", "(")
        params: list[str] = []
        while not self.check("op", ")"):
            tok = self.expect("name", what="a parameter name")
            if tok.value in params:
                raise self.error(f"duplicate parameter '{tok.value}' in function '{name}'", tok)
            params.append(tok.value)
            if not self.accept("op", ","):
                break
        self.expect("op", ")")
        self.expect("op", ":")
        self._in_function = True
        try:
            body = self.parse_suite()
        finally:
            self._in_function = False
        return FunctionDef(name, tuple(params), body)

    def parse_suite(self) -> Stmt:
        """Body after ':': an indented block, or one simple statement on the same line."""
        if self.accept("newline"):
            self.expect("indent", what="an indented block")
            stmts: list[Stmt] = []
            while not self.accept("dedent"):
                if self.check("eof"):
                    break
                stmts.append(self.parse_statement())
            return Block(tuple(stmts))
        return self.parse_simple_statement()

    # --- statements ---

    def parse_statement(self) -> Stmt:
        tok = self.peek()
        if tok.kind == "keyword":
            if tok.value == "if":
                return self.parse_if()
            if tok.value == "for":
                return self.parse_for()
            if tok.value == "def":
                raise self.error("function definitions are only allowed at top level", tok)
            if tok.value in ("elif", "else"):
                raise self.error(f"'{tok.value}' without a matching 'if'", tok)
        if tok.kind == "indent":
            raise self.error("unexpected indent", tok)
        return self.parse_simple_statement()

    def parse_if(self) -> If:
        self.advance()  # 'if' or 'elif'
        cond = self.parse_expression()
        self.expect("op", ":")
        then = self.parse_suite()
        if self.check("keyword", "elif"):
            return If(cond, then, self.parse_if())
        if self.accept("keyword", "else"):
            self.expect("op", ":")
            return If(cond, then, self.parse_suite())
        return If(cond, then)

    def parse_for(self) -> For:
        self.expect("keyword", "for")
        var = self.expect("name", what="a loop variable").value
        self.expect("keyword", "in")
        iterable = self.parse_expression()
        self.expect("op", ":")
        return For(var, iterable, self.parse_suite())

    def parse_simple_statement(self) -> Stmt:
        tok = self.peek()
        stmt: Stmt
        if self.accept("keyword", "return"):
            if not self._in_function:
                raise self.error("'return' outside function", tok)
            if self.check("newline") or self.check("eof"):
                stmt = Return()
            else:
                stmt = Return(self.parse_expression())
        elif self.accept("keyword", "print"):
            self.expect("op", "(")
            expr = self.parse_expression()
            self.expect("op", ")")
            stmt = Print(expr)
        else:
            expr = self.parse_expression()
            if self.accept("op", "="):
                stmt = self._assignment(expr, self.parse_expression(), tok)
            else:
                stmt = ExprStmt(expr)
        if not self.check("eof"):
            self.expect("newline", what="end of line")
        return stmt

    def _assignment(self, target: Expr, value: Expr, tok: Token) -> Stmt:
        if isinstance(target, Identifier):
            return Assign(target.name, value)
        if isinstance(target, Index):
            return SetItem(target.target, target.index, value)
        raise self.error("cannot assign to expression", tok)

    # --- expressions ---

    def parse_expression(self) -> Expr:
        expr = self.parse_or()
        while self.accept("op", "|"):
            name = self.expect("name", what="a function name after '|'").value
            expr = Pipe(expr, name)
        return expr

    def parse_or(self) -> Expr:
        expr = self.parse_and()
        while self.accept("keyword", "or"):
            expr = BinOp(BinaryOp.OR, expr, self.parse_and())
        return expr

    def parse_and(self) -> Expr:
        expr = self.parse_not()
        while self.accept("keyword", "and"):
            expr = BinOp(BinaryOp.AND, expr, self.parse_not())
        return expr

    def parse_not(self) -> Expr:
        if self.accept("keyword", "not"):
            return UnOp(UnaryOp.NOT, self.parse_not())
        return self.parse_comparison()

    def parse_comparison(self) -> Expr:
        left = self.parse_arith()
        op = self._accept_op(COMPARISON_SYMBOLS)
        if op is None:
            return left
        right = self.parse_arith()
        tok = self.peek()
        if tok.kind == "op" and tok.value in COMPARISON_SYMBOLS:
            raise self.error("chained comparisons are not supported", tok)
        return BinOp(op, left, right)

    def parse_arith(self) -> Expr:
        expr = self.parse_term()
        while (op := self._accept_op(ADDITIVE_SYMBOLS)) is not None:
            expr = BinOp(op, expr, self.parse_term())
        return expr

    def parse_term(self) -> Expr:
        expr = self.parse_unary()
        while (op := self._accept_op(MULTIPLICATIVE_SYMBOLS)) is not None:
            expr = BinOp(op, expr, self.parse_unary())
        return expr

    def parse_unary(self) -> Expr:
        if self.accept("op", "-"):
            return UnOp(UnaryOp.NEG, self.parse_unary())
        return self.parse_postfix()

    def parse_postfix(self) -> Expr:
        expr = self.parse_atom()
        while self.accept("op", "["):
            index = self.parse_expression()
            self.expect("op", "]")
            expr = Index(expr, index)
        return expr

    def parse_atom(self) -> Expr:
        tok = self.advance()
        if tok.kind == "int":
            return Constant(int(tok.value))
        if tok.kind == "string":
            return Constant(decode_string(tok))
        if tok.kind == "keyword" and tok.value in LITERAL_KEYWORDS:
            return Constant(LITERAL_KEYWORDS[tok.value])
        if tok.kind == "name":
            if self.accept("op", "("):
                return Call(tok.value, self.parse_items(")"))
            return Identifier(tok.value)
        if tok.kind == "op" and tok.value == "(":
            expr = self.parse_expression()
            self.expect("op", ")")
            return expr
        if tok.kind == "op" and tok.value == "[":
            return ListLiteral(self.parse_items("]"))
        raise self.error(f"unexpected {describe(tok)}", tok)

    def parse_items(self, closer: str) -> tuple[Expr, ...]:
        """Comma-separated expressions up to `closer`; a trailing comma is allowed."""
        items: list[Expr] = []
        while not self.accept("op", closer):
            items.append(self.parse_expression())
            if not self.accept("op", ","):
                self.expect("op", closer)
                break
        return tuple(items)


def parse(source: str) -> Program:
    """Read a whole program."""
    return Parser(lex(source)).parse_program()


def parse_expression(source: str) -> Expr:
    """Read a single expression (used by Interpreter.eval)."""
    parser = Parser(lex(source))
    expr = parser.parse_expression()
    parser.accept("newline")
    parser.expect("eof", what="end of input")
    return expr
