"""
  minipy lexer

- Streaming: `lex` is a generator of Token tuples
- Layout is tokenized the way Python does it:

    - a logical line ends with a "newline" token
    - a deeper indentation opens an "indent" token
    - returning to an enclosing level emits one "dedent" per closed level
    - blank and comment-only lines produce nothing
    - newlines inside (...) or [...] are ignored

- Token values are the raw source text; the parser converts int/string
  literals.
"""

from __future__ import annotations

import re
from typing import Iterator, NamedTuple, Optional

from minipy.types.errors import MiniPySyntaxError


class Token(NamedTuple):
    kind: str
    value: Optional[str]
    line: int
    column: int


KEYWORDS = frozenset(
    {
        "def", "return", "if", "elif", "else", "for", "in",
        "and", "or", "not", "True", "False", "None", "print",
    }
)

TOKEN_RE = re.compile(
    r"(?P<comment>\#[^\n]*)"
    r"|(?P<int>\d+)"
    r'|(?P<string>"(?:\\.|[^\\"\n])*"|\'(?:\\.|[^\\\'\n])*\')'
    r"|(?P<name>[A-Za-z_][A-Za-z0-9_]*)"
    r"|(?P<op>//|==|!=|<=|>=|[-+*/%<>=()\[\],:|])"
    r"|(?P<bad_string>[\"'])"
)

OPENERS = frozenset("([")
CLOSERS = frozenset(")]")
TAB_SIZE = 8


def lex(source: str) -> Iterator[Token]:
    """Token generator: yields Token(kind, value, line, column)."""
    source = source.replace("\r\n", "\n").replace("\r", "\n")
    n = len(source)
    pos = 0
    line = 1
    line_start = 0
    depth = 0
    indents = [0]
    at_line_start = True

    def error(message: str, at: int) -> MiniPySyntaxError:
        return MiniPySyntaxError(message, line, at - line_start + 1)

    while pos < n:
        # ----------------------
        # Indentation at the start of a logical line
        # ----------------------
        if at_line_start:
            width = 0
            while pos < n and source[pos] in " \t":
                width = width + 1 if source[pos] == " " else (width // TAB_SIZE + 1) * TAB_SIZE
                pos += 1
            if pos >= n:
                break
            if source[pos] == "#":
                while pos < n and source[pos] != "\n":
                    pos += 1
            if pos < n and source[pos] == "\n":
                # blank or comment-only line
                pos += 1
                line += 1
                line_start = pos
                continue
            if pos >= n:
                break
            column = pos - line_start + 1
            if width > indents[-1]:
                indents.append(width)
                yield Token("indent", None, line, column)
            else:
                while width < indents[-1]:
                    indents.pop()
                    yield Token("dedent", None, line, column)
                if width != indents[-1]:
                    raise error("unindent does not match any outer indentation level", pos)
            at_line_start = False

        current_char = source[pos]

        if current_char in " \t":
            pos += 1
            continue

        if current_char == "\n":
            if depth == 0:
                yield Token("newline", None, line, pos - line_start + 1)
                at_line_start = True
            pos += 1
            line += 1
            line_start = pos
            continue

        # ----------------------
        # Regex-based tokens
        # ----------------------
        m = TOKEN_RE.match(source, pos)
        if not m:
            raise error(f"unexpected character {current_char!r}", pos)
        kind = m.lastgroup
        value = m.group(kind)
        column = pos - line_start + 1
        if kind == "bad_string":
            raise error("unterminated string literal", pos)
        pos = m.end()
        if kind == "comment":
            continue
        if kind == "name" and value in KEYWORDS:
            kind = "keyword"
        elif kind == "op":
            if value in OPENERS:
                depth += 1
            elif value in CLOSERS and depth > 0:
                depth -= 1
        yield Token(kind, value, line, column)

    if not at_line_start:
        yield Token("newline", None, line, pos - line_start + 1)
    while len(indents) > 1:
        indents.pop()
        yield Token("dedent", None, line, 1)
    yield Token("eof", None, line, pos - line_start + 1)
