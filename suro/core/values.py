"""Runtime values of the suro language.

The set of value kinds is closed: Integer, String, Boolean, Null, NativeFunction and Function. The evaluator dispatches
on these classes directly, so a new kind means a new class here and a new case there.
"""

from dataclasses import dataclass
from typing import Callable, Tuple

from suro.core.tree import Statement
from suro.lang.error import MathError, TypeMismatchError

INT_MIN, INT_MAX = -2 ** 31, 2 ** 31 - 1


class Value:
    """Superclass of all runtime values."""
    kind = "Value"

    def __str__(self):
        return repr(self)


@dataclass(frozen=True)
class Integer(Value):
    """Signed 32-bit integer. Construction outside the range raises MathError."""
    value: int
    kind = "Integer"

    def __post_init__(self):
        if not INT_MIN <= self.value <= INT_MAX:
            raise MathError("integer overflow: {} does not fit in 32 bits", str(self.value), diagnosis=False)

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class String(Value):
    value: str
    kind = "String"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Boolean(Value):
    value: bool
    kind = "Boolean"

    def __str__(self):
        return "true" if self.value else "false"


class NullType(Value):
    """The only instance is NULL."""
    kind = "Null"

    def __repr__(self):
        return "Null"

    def __eq__(self, other):
        return isinstance(other, NullType)

    def __hash__(self):
        return hash(NullType)


NULL = NullType()


@dataclass(frozen=True)
class NativeFunction(Value):
    """Host-provided procedure: takes a list of Values and returns a Value."""
    name: str
    procedure: Callable
    kind = "NativeFunction"

    def __call__(self, args):
        return self.procedure(args)

    def __repr__(self):
        return f"NativeFunction({self.name!r})"


@dataclass(frozen=True)
class Function(Value):
    """User-declared function. Carries no captured environment."""
    params: Tuple[str, ...]
    body: Statement
    kind = "Function"

    def __repr__(self):
        return f"Function(params={self.params!r})"


def to_bool(value):
    """Boolean coercion: Boolean as-is, Integer iff non-zero, String iff non-empty. Any other kind raises."""
    if isinstance(value, Boolean):
        return value.value
    if isinstance(value, Integer):
        return value.value != 0
    if isinstance(value, String):
        return value.value != ""
    raise TypeMismatchError("cannot convert value of kind {} to Boolean", value.kind, diagnosis=False)
