"""Lexer for letlang.

Tokenization is delegated to lark's basic lexer. The grammar below is used
only for its terminal definitions: `LETLANG_LEXER.lex()` yields tokens one
at a time without running a parser, and the `Lexer` class wraps that stream,
converting lark tokens into `Token` objects and lark lexing failures into
`LexError`.

Keywords take precedence over identifiers: lark notices that the string
terminals `let` and `const` are matched by the IDENTIFIER pattern and
re-tags an identifier whose full text is a keyword, so `let` is a keyword
while `letter` remains an identifier.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, List, Tuple
import math

from lark import Lark
from lark.exceptions import UnexpectedCharacters

from .errors import LexError


LETLANG_TOKENS = r"""
    start: _token*
    _token: LPAREN | RPAREN | PLUS | MINUS | STAR | SLASH | EQUALS | SEMICOLON
          | NUMBER | IDENTIFIER | LET | CONST

    LPAREN: "("
    RPAREN: ")"
    PLUS: "+"
    MINUS: "-"
    STAR: "*"
    SLASH: "/"
    EQUALS: "="
    SEMICOLON: ";"

    LET: "let"
    CONST: "const"

    NUMBER: /(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?/
    IDENTIFIER: /[A-Za-z_][A-Za-z0-9_]*/

    WHITESPACE: /[ \t\n\f]+/
    %ignore WHITESPACE
"""


LETLANG_LEXER = Lark(
    LETLANG_TOKENS,
    parser='lalr',
    lexer='basic',
)


# Operator token type -> operator symbol stored in BinaryExpr nodes
OPERATORS = {
    'PLUS': '+',
    'MINUS': '-',
    'STAR': '*',
    'SLASH': '/',
}

KEYWORDS = {'LET', 'CONST'}


@dataclass
class Token:
    type: str
    text: str
    value: Any
    start: int
    end: int
    line: int = 1
    column: int = 1

    @property
    def span(self) -> Tuple[int, int]:
        return (self.start, self.end)

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.text!r}, {self.start}..{self.end})"


class Lexer:
    """Single-pass iterator of tokens over a source string.

    Tokens are produced on demand. Once the input is exhausted, or once a
    character matches no token rule, iteration stops for good; create a new
    `Lexer` to scan the text again.
    """
    def __init__(self, source: str):
        self.source = source
        self._stream: Iterator = LETLANG_LEXER.lex(source)
        self._finished = False

    def __iter__(self) -> 'Lexer':
        return self

    def __next__(self) -> Token:
        if self._finished:
            raise StopIteration
        try:
            raw = next(self._stream)
        except StopIteration:
            self._finished = True
            raise
        except UnexpectedCharacters as e:
            self._finished = True
            # Everything before the failure is ASCII, so `pos` is also a byte
            # offset; the offending character itself may span several bytes.
            pos = e.pos_in_stream
            char = self.source[pos]
            raise LexError(
                f"unexpected character {char!r} at {e.line}:{e.column}",
                (pos, pos + len(char.encode('utf-8'))),
            ) from None
        return self._convert(raw)

    def _convert(self, raw) -> Token:
        kind = raw.type
        text = str(raw)
        value: Any = None
        if kind == 'NUMBER':
            value = float(text)
            if not math.isfinite(value):
                self._finished = True
                raise LexError(
                    f"numeric literal {text} is out of range at {raw.line}:{raw.column}",
                    (raw.start_pos, raw.end_pos),
                )
        elif kind == 'IDENTIFIER':
            value = text
        return Token(kind, text, value, raw.start_pos, raw.end_pos, raw.line, raw.column)


def tokenize(source: str) -> List[Token]:
    """Scan the whole source eagerly and return its tokens as a list."""
    return list(Lexer(source))
