"""CLI entry point for the letlang interpreter.

Usage:
    python -m letlang [-v|-vv|-vvv] <program_file>
    python -m letlang [-v...] -e '<source>'
    python -m letlang --emit-ast <program_file>
    python -m letlang [-v...] --ast <ast_json_file>
    python -m letlang [-v...]

Options:
  -v            Increase debug verbosity (can be repeated)
  --debug-file  Write debug output to this file instead of stderr
  -e            Evaluate the given source text
  --emit-ast    Parse the given program and write its AST as JSON
  --ast         Evaluate a previously emitted AST JSON file

Without a program the interpreter reads one line at a time, evaluates it in
a single environment kept for the whole session and prints the result.
The loop ends at end of input or on a line reading `exit`.
"""

import argparse
import json
import sys
from pathlib import Path

from .ast import Program
from .ast_json import ast_from_obj, ast_to_obj
from .environment import Environment
from .errors import EvalError, ParseError
from .interpreter import Interpreter
from .parser import parse
from .values import to_string


def evaluate(program: Program, env: Environment, args) -> bool:
    """Evaluate a program and print its value; report errors on stderr."""
    interpreter = Interpreter(program, debug_level=args.v, debug_file=args.debug_file)
    try:
        result = interpreter.eval_program(env)
    except EvalError as e:
        print(f"Runtime error: {e}", file=sys.stderr)
        return False
    finally:
        interpreter.close()
    print(to_string(result))
    return True


def parse_source(source: str):
    try:
        return parse(source)
    except ParseError as e:
        print(f"Parse error: {e}", file=sys.stderr)
        return None


def read_file(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def repl(args) -> None:
    env = Environment()
    while True:
        try:
            line = input('> ')
        except EOFError:
            break
        if line.strip() == 'exit':
            break
        if not line.strip():
            continue
        program = parse_source(line)
        if program is not None:
            evaluate(program, env, args)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="letlang expression interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--debug-file', metavar='PATH', help='write debug output to PATH instead of stderr')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('-e', dest='source', metavar='SOURCE', help='evaluate the given source text')
    group.add_argument('--emit-ast', metavar='PROGRAM_FILE', help='emit AST JSON for the given program')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='evaluate AST from a JSON file')
    parser.add_argument('program', nargs='?', help='program file to evaluate')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        program = parse_source(read_file(program_file))
        if program is None:
            sys.exit(1)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(ast_to_obj(program), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Evaluate from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        if not ast_path.exists():
            print(f"Error: file {ast_path} not found", file=sys.stderr)
            sys.exit(1)
        with open(ast_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        try:
            program = ast_from_obj(data)
        except (TypeError, ValueError, KeyError) as e:
            print(f"Error: invalid AST file {ast_path}: {e}", file=sys.stderr)
            sys.exit(1)
        if not isinstance(program, Program):
            print(f"Error: invalid AST file {ast_path}: top-level node is not a Program", file=sys.stderr)
            sys.exit(1)
        if not evaluate(program, Environment(), args):
            sys.exit(1)
        return

    if args.source is not None:
        source = args.source
    elif args.program:
        source = read_file(Path(args.program))
    else:
        repl(args)
        return

    program = parse_source(source)
    if program is None or not evaluate(program, Environment(), args):
        sys.exit(1)


if __name__ == '__main__':
    main()
