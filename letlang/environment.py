from typing import Dict, Optional, Set

from letlang.errors import ConstantAssignmentError, RedeclarationError, UndefinedVariableError
from letlang.values import RuntimeValue, make_bool


class Environment:
    """A scope frame mapping names to values, linked to its enclosing scope.

    Frames only reference their parent, so any number of child scopes can
    share one parent. The root frame (no parent) starts out with the
    constants `true` and `false`.
    """
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, RuntimeValue] = {}
        self.consts: Set[str] = set()
        if parent is None:
            self.setup_scope()

    def setup_scope(self):
        self.declare('true', make_bool(True), is_const=True)
        self.declare('false', make_bool(False), is_const=True)

    def child(self) -> 'Environment':
        return Environment(parent=self)

    def declare(self, name: str, value: RuntimeValue, is_const: bool = False) -> RuntimeValue:
        if name in self.values:
            raise RedeclarationError(f'variable {name} already declared in this scope', name)
        self.values[name] = value
        if is_const:
            self.consts.add(name)
        return value

    def assign(self, name: str, value: RuntimeValue) -> RuntimeValue:
        # Assign in the nearest frame that owns the name
        env = self.resolve(name)
        if env is None:
            raise UndefinedVariableError(f'cannot assign to undefined variable {name}', name)
        if name in env.consts:
            raise ConstantAssignmentError(f'cannot reassign constant {name}', name)
        env.values[name] = value
        return value

    def lookup(self, name: str) -> Optional[RuntimeValue]:
        if name in self.values:
            return self.values[name]
        if self.parent is not None:
            return self.parent.lookup(name)
        return None

    def resolve(self, name: str) -> Optional['Environment']:
        if name in self.values:
            return self
        if self.parent is not None:
            return self.parent.resolve(name)
        return None

    def is_const(self, name: str) -> bool:
        env = self.resolve(name)
        return env is not None and name in env.consts
