"""Native functions available to every suro program. NATIVES is built once and is read-only: to add natives, build a
new mapping, e.g. `Interpreter({**NATIVES, "name": NativeFunction("name", procedure)})`.
"""

from types import MappingProxyType

from suro.core.values import NULL, Boolean, Integer, NativeFunction, String, to_bool
from suro.lang.error import TypeMismatchError

PRINTABLE = (Integer, String, Boolean)


def s_print(args):
    """Prints each argument on its own line, in order. Only Integers, Strings and Booleans are printable."""
    for arg in args:
        if not isinstance(arg, PRINTABLE):
            raise TypeMismatchError("invalid argument of kind {} for print", arg.kind, diagnosis=False)
    for arg in args:
        print(arg)
    return NULL


def s_to_bool(args):
    """Returns the boolean coercion of its single argument."""
    if len(args) != 1:
        raise TypeMismatchError("to_bool expects exactly 1 argument, got {}", str(len(args)), diagnosis=False)
    return Boolean(to_bool(args[0]))


def get_natives(*extra):
    """Returns a read-only name: NativeFunction mapping of the default natives plus any extra (name, procedure)."""
    natives = {name: NativeFunction(name, procedure) for name, procedure in [("print", s_print),
                                                                            ("to_bool", s_to_bool), *extra]}
    return MappingProxyType(natives)


NATIVES = get_natives()
