"""Tree-walking interpreter for letlang.

The interpreter evaluates a parsed `Program` against an `Environment`,
statement by statement, and returns the value of the last statement.
Declarations and assignments mutate the environment in place, so the same
environment can be threaded through several programs (the interactive
command line does exactly that).

Arithmetic follows IEEE-754 double semantics: dividing by zero yields an
infinity or NaN rather than an error. A null operand makes the whole
binary expression null. Reading a name that is bound nowhere in the scope
chain also yields null instead of failing.
"""

from __future__ import annotations

import math
import sys
from typing import Optional, TextIO

from .ast import AssignmentExpr, BinaryExpr, Identifier, Node, Null, Number, Program, VarDeclaration
from .environment import Environment
from .errors import InvalidAssignmentTargetError, OperandTypeError
from .parser import parse
from .values import NullVal, NumberVal, RuntimeValue, make_null, make_number, to_string, type_name


class Interpreter:
    """Evaluates one program; debug output goes to `debug_file` or stderr."""
    def __init__(self, program: Program, debug_level: int = 0, debug_file: Optional[str] = None):
        self.program = program
        self.debug_level = debug_level
        self.debug_fp: Optional[TextIO] = None
        if debug_level > 0 and debug_file is not None:
            self.debug_fp = open(debug_file, 'w', encoding='utf-8')

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg, file=sys.stderr)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def eval_program(self, env: Environment) -> RuntimeValue:
        result: RuntimeValue = make_null()
        for index, stmt in enumerate(self.program.body):
            result = self.eval(stmt, env)
            if self.debug_level >= 1:
                self.debug(f"statement {index}: {to_string(result)}")
        return result

    def eval(self, node: Node, env: Environment) -> RuntimeValue:
        if isinstance(node, Number):
            return make_number(node.value)
        if isinstance(node, Null):
            return make_null()
        if isinstance(node, Identifier):
            value = env.lookup(node.name)
            if value is None:
                # unbound names read as null
                return make_null()
            return value
        if isinstance(node, BinaryExpr):
            return self.eval_binary_chain(node, env)
        if isinstance(node, VarDeclaration):
            if isinstance(node.initializer, Null):
                value = make_null()
            else:
                value = self.eval(node.initializer, env)
            env.declare(node.name, value, node.is_const)
            if self.debug_level >= 2:
                keyword = 'const' if node.is_const else 'let'
                self.debug(f"declare {keyword} {node.name}: {type_name(value)} = {to_string(value)}")
            return value
        if isinstance(node, AssignmentExpr):
            if not isinstance(node.target, Identifier):
                raise InvalidAssignmentTargetError(
                    f'invalid assignment target {type(node.target).__name__}')
            value = self.eval(node.value, env)
            env.assign(node.target.name, value)
            if self.debug_level >= 2:
                self.debug(f"assign {node.target.name} = {to_string(value)}")
            return value
        raise NotImplementedError(f"eval: unexpected node type {type(node).__name__}")

    def eval_binary_chain(self, node: BinaryExpr, env: Environment) -> RuntimeValue:
        """Evaluate a left-nested run of binary operators without recursing per operator.

        The parser folds `a + b + c` into `(a + b) + c`, so long sums nest
        along the left operand. Walk down that spine, evaluate the innermost
        left operand, then fold each right operand in source order.
        """
        spine = []
        while isinstance(node, BinaryExpr):
            spine.append(node)
            node = node.left
        result = self.eval(node, env)
        for binary in reversed(spine):
            left = result
            right = self.eval(binary.right, env)
            result = self.apply_binary_op(binary.operator, left, right)
            if self.debug_level >= 3:
                self.debug(f"{to_string(left)} {binary.operator} {to_string(right)} -> {to_string(result)}")
        return result

    def apply_binary_op(self, op: str, a: RuntimeValue, b: RuntimeValue) -> RuntimeValue:
        if isinstance(a, NullVal) or isinstance(b, NullVal):
            return make_null()
        if not (isinstance(a, NumberVal) and isinstance(b, NumberVal)):
            raise OperandTypeError(f'unsupported {op} for {type_name(a)} and {type_name(b)}')
        x, y = a.value, b.value
        if op == '+':
            return make_number(x + y)
        if op == '-':
            return make_number(x - y)
        if op == '*':
            return make_number(x * y)
        if op == '/':
            return make_number(divide(x, y))
        raise OperandTypeError(f'unknown operator {op}')


def divide(x: float, y: float) -> float:
    """Floating-point division where a zero divisor gives inf or nan."""
    if y == 0.0:
        if x == 0.0 or math.isnan(x):
            return math.nan
        return math.copysign(math.inf, x) * math.copysign(1.0, y)
    return x / y


def run_program(source: str, env: Optional[Environment] = None, debug_level: int = 0) -> RuntimeValue:
    """Convenience function to parse and evaluate letlang source in one go."""
    program = parse(source)
    if env is None:
        env = Environment()
    interpreter = Interpreter(program, debug_level=debug_level)
    try:
        return interpreter.eval_program(env)
    finally:
        interpreter.close()
