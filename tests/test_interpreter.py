import math

import pytest

from letlang.ast import AssignmentExpr, BinaryExpr, Identifier, Number, Program, VarDeclaration
from letlang.environment import Environment
from letlang.errors import (
    ConstantAssignmentError, InvalidAssignmentTargetError, OperandTypeError, RedeclarationError,
    UndefinedVariableError,
)
from letlang.interpreter import Interpreter, run_program
from letlang.parser import parse
from letlang.values import BooleanVal, NullVal, NumberVal


def evaluate(source, env=None):
    if env is None:
        env = Environment()
    return Interpreter(parse(source)).eval_program(env)


def test_empty_program_yields_null():
    assert evaluate('') == NullVal()


def test_number_literal():
    assert evaluate('42') == NumberVal(42.0)


def test_precedence_evaluates_to_eleven_and_a_half():
    assert evaluate('2 + 3 * 4 - 5 / 2') == NumberVal(11.5)


def test_declaration_defines_and_returns_value():
    env = Environment()
    assert evaluate('let myVar = 42;', env) == NumberVal(42.0)
    assert env.lookup('myVar') == NumberVal(42.0)
    assert not env.is_const('myVar')


def test_declaration_without_value_binds_null():
    env = Environment()
    assert evaluate('let later;', env) == NullVal()
    assert env.lookup('later') == NullVal()


def test_last_statement_value_is_returned():
    source = 'const MY_CONST = 20; let x = 10; let y = 20; let z = x + y; z + MY_CONST; x = z; x'
    assert evaluate(source) == NumberVal(30.0)


def test_redeclaration_in_same_scope_is_fatal():
    with pytest.raises(RedeclarationError):
        evaluate('let x = 1; let x = 2;')


def test_redeclaration_in_child_scope_shadows():
    root = Environment()
    evaluate('let x = 1;', root)
    child = root.child()
    assert evaluate('let x = 2; x', child) == NumberVal(2.0)
    assert evaluate('x', root) == NumberVal(1.0)


def test_assignment_updates_binding_seen_by_descendants():
    root = Environment()
    evaluate('let counter = 1;', root)
    child = root.child()
    assert evaluate('counter = counter + 1', child) == NumberVal(2.0)
    assert evaluate('counter', root) == NumberVal(2.0)
    assert evaluate('counter', child.child()) == NumberVal(2.0)


def test_assignment_to_undeclared_name_is_fatal():
    with pytest.raises(UndefinedVariableError):
        evaluate('ghost = 1')


def test_assignment_to_constant_is_fatal():
    with pytest.raises(ConstantAssignmentError):
        evaluate('const limit = 10; limit = 11')


def test_assignment_to_boolean_literal_is_fatal():
    with pytest.raises(ConstantAssignmentError):
        evaluate('true = 1')


def test_assignment_target_must_be_identifier():
    with pytest.raises(InvalidAssignmentTargetError):
        evaluate('let x = 1; x + 1 = 3')


def test_chained_assignment():
    env = Environment()
    assert evaluate('let a; let b; a = b = 7', env) == NumberVal(7.0)
    assert env.lookup('a') == env.lookup('b') == NumberVal(7.0)


def test_assignment_does_not_check_types():
    env = Environment()
    assert evaluate('let flag = 1; flag = true', env) == BooleanVal(True)


def test_null_propagates_through_arithmetic():
    assert evaluate('let n; n + 1') == NullVal()
    assert evaluate('let n; 1 * n') == NullVal()
    assert evaluate('let n; n / 0') == NullVal()


def test_null_wins_over_boolean_operand():
    assert evaluate('let n; true + n') == NullVal()


def test_unbound_identifier_reads_as_null():
    # Current behaviour: an unknown name is not an error, it evaluates to null.
    assert evaluate('undefinedName') == NullVal()
    assert evaluate('undefinedName + 1') == NullVal()


def test_division_by_zero_follows_floating_point():
    assert evaluate('20 / 0') == NumberVal(math.inf)
    assert evaluate('0 - 20 / 0') == NumberVal(-math.inf)
    assert math.isnan(evaluate('0 / 0').value)


def test_arithmetic_on_boolean_is_fatal():
    with pytest.raises(OperandTypeError):
        evaluate('true + 1')
    with pytest.raises(OperandTypeError):
        evaluate('2 * false')


def test_re_evaluating_an_ast_is_deterministic():
    program = parse('let a = 2; let b = a * 3; b - a / 4')
    first = Interpreter(program).eval_program(Environment())
    second = Interpreter(program).eval_program(Environment())
    assert first == second == NumberVal(5.5)


def test_eval_dispatches_on_hand_built_nodes():
    program = Program([
        VarDeclaration('total', False, Number(2.0)),
        AssignmentExpr(Identifier('total'), BinaryExpr(Identifier('total'), Number(8.0), '*')),
    ])
    env = Environment()
    assert Interpreter(program).eval_program(env) == NumberVal(16.0)


def test_run_program_creates_a_root_environment():
    assert run_program('true') == BooleanVal(True)


def test_debug_output_goes_to_stderr(capsys):
    Interpreter(parse('let x = 1 + 2; x'), debug_level=3).eval_program(Environment())
    err = capsys.readouterr().err
    assert '1 + 2 -> 3' in err
    assert 'declare let x: Number = 3' in err
    assert 'statement 1: 3' in err


def test_debug_output_to_file(tmp_path):
    debug_file = tmp_path / 'debug.txt'
    interpreter = Interpreter(parse('let x = 1; x = 2'), debug_level=2, debug_file=str(debug_file))
    interpreter.eval_program(Environment())
    interpreter.close()
    lines = debug_file.read_text(encoding='utf-8').splitlines()
    assert 'assign x = 2' in lines


def test_long_operator_chain_does_not_exhaust_the_stack():
    assert run_program('+'.join(['1'] * 3000)) == NumberVal(3000.0)
    assert run_program('*'.join(['1'] * 3000)) == NumberVal(1.0)
    assert run_program('10000' + ' - 1' * 3000) == NumberVal(7000.0)


def test_long_chain_keeps_left_to_right_order():
    assert run_program('1 ' + '/ 2 ' * 3 + '* 8 - 1') == NumberVal(0.0)
