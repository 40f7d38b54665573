"""Recursive-descent parser for letlang.

Grammar, from the lowest to the highest precedence::

    program        := statement*
    statement      := var_decl | assignment ';'?
    var_decl       := ('let' | 'const') IDENTIFIER (';' | '=' assignment ';')
    assignment     := additive ('=' assignment)?
    additive       := multiplicative (('+' | '-') multiplicative)*
    multiplicative := primary (('*' | '/') primary)*
    primary        := NUMBER | IDENTIFIER

Tokens are pulled from the lexer one at a time through a `TokenCursor`
holding a single token of lookahead. Parsing stops at the first error; the
raised `ParseError` carries the span of the token the parser was looking at
(or an empty span at the end of the input).
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from .ast import AssignmentExpr, BinaryExpr, Identifier, Node, Null, Number, Program, VarDeclaration
from .errors import (
    ConstDeclarationMissingValueError, ConstLetMissingIdentifierError, InvalidSyntaxError,
    InvalidTokenError, LexError, LexerError, MissingEqualsSignError, MissingSemicolonError,
    PrimaryExpressionError,
)
from .lexer import KEYWORDS, OPERATORS, Lexer, Token


class TokenCursor:
    """One-token lookahead over a lazily lexed token stream.

    A lexer failure is not raised straight away: it is kept and reported as
    a `LexerError` when the parser asks for the token that could not be
    scanned.
    """
    def __init__(self, lexer: Lexer):
        self.lexer = lexer
        self.current: Optional[Token] = None
        self.error: Optional[LexError] = None
        self._pull()

    def _pull(self):
        try:
            self.current = next(self.lexer, None)
        except LexError as e:
            self.current = None
            self.error = e

    def peek(self) -> Optional[Token]:
        if self.error is not None:
            raise LexerError(f"lexer error: {self.error.message}", self.error.span) from self.error
        return self.current

    def advance(self) -> Token:
        token = self.peek()
        if token is None:
            raise InvalidSyntaxError('unexpected end of input', self.span)
        self._pull()
        return token

    def match(self, *types: str) -> bool:
        token = self.peek()
        return token is not None and token.type in types

    @property
    def span(self) -> Tuple[int, int]:
        if self.error is not None:
            return self.error.span
        if self.current is not None:
            return self.current.span
        end = len(self.lexer.source)
        return (end, end)


class Parser:
    def __init__(self, source: str):
        self.source = source
        self.cursor = TokenCursor(Lexer(source))
        self._consumed = False

    def produce_ast(self) -> Program:
        """Parse the whole source into a `Program`.

        A parser can produce its AST only once; the token stream is
        consumed in the process.
        """
        if self._consumed:
            raise RuntimeError('parser has already produced its AST')
        self._consumed = True
        statements: List[Node] = []
        while self.cursor.peek() is not None:
            statements.append(self.parse_statement())
        return Program(statements)

    def parse_statement(self) -> Node:
        if self.cursor.match('LET', 'CONST'):
            return self.parse_var_declaration()
        expr = self.parse_expression()
        # expression statements may be terminated by a semicolon
        if self.cursor.match('SEMICOLON'):
            self.cursor.advance()
        return expr

    def parse_var_declaration(self) -> VarDeclaration:
        keyword = self.cursor.advance()
        is_const = keyword.type == 'CONST'
        if not self.cursor.match('IDENTIFIER'):
            raise ConstLetMissingIdentifierError(
                f"expected identifier name following '{keyword.text}'", self.cursor.span)
        name = self.cursor.advance().value
        if self.cursor.match('SEMICOLON'):
            if is_const:
                raise ConstDeclarationMissingValueError(
                    f"must assign value to const declaration '{name}'", self.cursor.span)
            self.cursor.advance()
            return VarDeclaration(name, False, Null())
        if not self.cursor.match('EQUALS'):
            raise MissingEqualsSignError(
                f"expected '=' after identifier name '{name}'", self.cursor.span)
        self.cursor.advance()
        initializer = self.parse_expression()
        if not self.cursor.match('SEMICOLON'):
            raise MissingSemicolonError(
                f"expected ';' after declaration of '{name}'", self.cursor.span)
        self.cursor.advance()
        return VarDeclaration(name, is_const, initializer)

    def parse_expression(self) -> Node:
        return self.parse_assignment()

    # assignment: additive ('=' assignment)?
    def parse_assignment(self) -> Node:
        left = self.parse_additive()
        if self.cursor.match('EQUALS'):
            self.cursor.advance()
            value = self.parse_assignment()
            return AssignmentExpr(left, value)
        return left

    def parse_additive(self) -> Node:
        node = self.parse_multiplicative()
        while self.cursor.match('PLUS', 'MINUS'):
            op_token = self.cursor.advance()
            right = self.parse_multiplicative()
            node = BinaryExpr(node, right, OPERATORS[op_token.type])
        return node

    def parse_multiplicative(self) -> Node:
        node = self.parse_primary()
        while self.cursor.match('STAR', 'SLASH'):
            op_token = self.cursor.advance()
            right = self.parse_primary()
            node = BinaryExpr(node, right, OPERATORS[op_token.type])
        return node

    def parse_primary(self) -> Node:
        # Only advance once the token is known to match, so a failure
        # reports the span of the offending token.
        token = self.cursor.peek()
        if token is None:
            raise InvalidSyntaxError(
                'unexpected end of input (context: primary expression)', self.cursor.span)
        if token.type == 'NUMBER':
            self.cursor.advance()
            return Number(token.value)
        if token.type == 'IDENTIFIER':
            self.cursor.advance()
            return Identifier(token.value)
        if token.type in KEYWORDS:
            raise InvalidTokenError(
                f"keyword '{token.text}' cannot be used in an expression", token.span)
        raise PrimaryExpressionError(
            f"unexpected token {token.text!r} (context: primary expression)", token.span, token)


def parse(source: str) -> Program:
    """Parse letlang source code into a `Program` AST."""
    return Parser(source).produce_ast()
