"""Error types raised by the letlang lexer, parser and interpreter.

Every error carries a human readable `message` and, where one is known, a
`span`: a `(start, end)` pair of byte offsets into the source text.
"""

from __future__ import annotations

from typing import Any, Optional, Tuple

Span = Tuple[int, int]


class LetError(Exception):
    """Base class for every error raised by letlang."""
    def __init__(self, message: str, span: Optional[Span] = None):
        super().__init__(message)
        self.message = message
        self.span = span

    def __str__(self) -> str:
        if self.span is None:
            return self.message
        return f"{self.message} at {self.span[0]}..{self.span[1]}"


class LexError(LetError):
    """Raised by the lexer for input that matches no token rule."""


###############################################################################
# Parse errors
###############################################################################

class ParseError(LetError):
    """Base class for syntax errors reported by the parser."""


class UnexpectedTokenError(ParseError):
    def __init__(self, message: str, span: Optional[Span] = None, token: Any = None):
        super().__init__(message, span)
        self.token = token


class PrimaryExpressionError(UnexpectedTokenError):
    """A token that cannot start an operand (number or identifier)."""


class LexerError(ParseError):
    """The token stream failed underneath the parser."""


class InvalidSyntaxError(ParseError):
    """Input ended where an operand was required."""


class InvalidTokenError(ParseError):
    """A declaration keyword used in operand position."""


class MissingIdentifierError(ParseError):
    pass


class ConstLetMissingIdentifierError(MissingIdentifierError):
    """`let` or `const` not followed by a name."""


class MissingEqualsSignError(ParseError):
    pass


class MissingSemicolonError(ParseError):
    pass


class ConstDeclarationMissingValueError(ParseError):
    pass


###############################################################################
# Evaluation errors
###############################################################################

class EvalError(LetError):
    """Base class for fatal errors raised while evaluating a program."""
    def __init__(self, message: str, name: Optional[str] = None):
        super().__init__(message)
        self.name = name


class RedeclarationError(EvalError):
    pass


class ConstantAssignmentError(EvalError):
    pass


class UndefinedVariableError(EvalError):
    pass


class InvalidAssignmentTargetError(EvalError):
    pass


class OperandTypeError(EvalError):
    """Arithmetic applied to an operand that is neither a number nor null."""
