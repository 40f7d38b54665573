# letlang package
# This package provides a lexer, parser and interpreter for letlang, a small
# arithmetic language with let/const declarations and assignment.
from .environment import Environment
from .errors import EvalError, LetError, LexError, ParseError
from .interpreter import Interpreter, run_program
from .parser import Parser, parse

__all__ = [
    'parse',
    'run_program',
    'Parser',
    'Interpreter',
    'Environment',
    'LetError',
    'LexError',
    'ParseError',
    'EvalError',
]
