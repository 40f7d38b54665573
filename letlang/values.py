"""Runtime values for letlang.

The interpreter works with a closed set of three value kinds: null, numbers
(64-bit floats) and booleans. Values are immutable; assigning to a variable
replaces the binding in the environment, never the value object itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import math


class ValueType(Enum):
    NULL = 'Null'
    NUMBER = 'Number'
    BOOLEAN = 'Boolean'

    def __str__(self) -> str:
        return self.value


class RuntimeValue:
    """Common interface of every runtime value."""

    def get_type(self) -> ValueType:
        raise NotImplementedError

    def clone(self) -> 'RuntimeValue':
        raise NotImplementedError


@dataclass(frozen=True)
class NullVal(RuntimeValue):
    """The absence of a value."""

    def get_type(self) -> ValueType:
        return ValueType.NULL

    def clone(self) -> 'NullVal':
        return NullVal()

    def __repr__(self) -> str:
        return 'NullVal'


@dataclass(frozen=True)
class NumberVal(RuntimeValue):
    value: float

    def get_type(self) -> ValueType:
        return ValueType.NUMBER

    def clone(self) -> 'NumberVal':
        return NumberVal(self.value)

    def __repr__(self) -> str:
        return f"NumberVal({self.value!r})"


@dataclass(frozen=True)
class BooleanVal(RuntimeValue):
    value: bool

    def get_type(self) -> ValueType:
        return ValueType.BOOLEAN

    def clone(self) -> 'BooleanVal':
        return BooleanVal(self.value)

    def __repr__(self) -> str:
        return f"BooleanVal({self.value!r})"


def make_null() -> NullVal:
    return NullVal()


def make_number(value: float) -> NumberVal:
    return NumberVal(float(value))


def make_bool(value: bool) -> BooleanVal:
    return BooleanVal(bool(value))


def type_name(value: RuntimeValue) -> str:
    """Return the letlang type name of a runtime value."""
    return str(value.get_type())


def to_string(value: RuntimeValue) -> str:
    """Render a runtime value the way the command line prints results.

    Integral numbers print without a fractional part (`42` rather than
    `42.0`); infinities and NaN print as `inf`, `-inf` and `nan`.
    """
    if isinstance(value, NullVal):
        return 'null'
    if isinstance(value, BooleanVal):
        return 'true' if value.value else 'false'
    if isinstance(value, NumberVal):
        number = value.value
        if math.isfinite(number) and number.is_integer():
            return str(int(number))
        return repr(number)
    return str(value)
