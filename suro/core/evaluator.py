"""Tree-walking evaluator for the suro language.

Blocks push exactly one frame on entry and pop it on every way out (normal end, `return`, or error). A `return`
statement unwinds to the innermost enclosing block, function call or program root, which yields its value.

Calls accept both native functions and user-declared functions. A user function gets a fresh frame on top of the
caller's scope holding its parameters; functions capture no environment, so any other name in the body is resolved
against the scope that is live at the call.
"""

from suro.core.natives import NATIVES
from suro.core.scope import Scope
from suro.core.tree import (
    Assign, Block, BooleanFactor, Call, ExpressionStatement, FunctionDeclaration, IdentFactor, If, IntegerFactor,
    Return, StatementFactor, StringFactor,
)
from suro.core.values import NULL, Boolean, Function, Integer, NativeFunction, String, to_bool
from suro.lang.error import (
    GenericException, MathError, NotCallableError, ReassignmentError, TypeMismatchError, UnresolvedIdentifierError,
)


class ReturnSignal(Exception):
    """Carries the value of a `return` statement up to the construct that ends it."""

    def __init__(self, value):
        super().__init__()
        self.value = value


class Interpreter:
    """Evaluates Programs against a single scope chain, whose root frame holds natives."""

    def __init__(self, natives=NATIVES):
        self.natives = natives
        self.scope = Scope.new_root(natives)

    def evaluate(self, program):
        """Evaluates program and returns its final Value. A `return` at the top level ends the program."""
        try:
            return self.exec_statement(program.body)
        except ReturnSignal as signal:
            return signal.value

    # ---------- statements ----------

    def exec_statement(self, statement):
        if isinstance(statement, Block):
            return self.exec_block(statement)

        elif isinstance(statement, Assign):
            value = self.eval_expr(statement.expr)
            if not statement.reassign:
                self.scope.define(statement.name, value)
            elif not self.scope.reassign(statement.name, value):
                raise ReassignmentError("cannot change {}: it was never set", statement.name, diagnosis=False)
            return NULL

        elif isinstance(statement, Return):
            raise ReturnSignal(self.exec_statement(statement.inner))

        elif isinstance(statement, ExpressionStatement):
            return self.eval_expr(statement.expr)

        elif isinstance(statement, FunctionDeclaration):
            return Function(statement.params, statement.body)

        elif isinstance(statement, Call):
            return self.exec_call(statement)

        elif isinstance(statement, If):
            for branch in statement.branches:
                if branch.condition is None or to_bool(self.exec_statement(branch.condition)):
                    return self.exec_statement(branch.consequent)
            return NULL

        raise GenericException("unknown statement {}", type(statement).__name__, internal=True)

    def exec_block(self, block):
        self.scope.push()
        try:
            for statement in block.statements:
                self.exec_statement(statement)
        except ReturnSignal as signal:
            return signal.value
        finally:
            self.scope.pop()
        return NULL

    def exec_call(self, call):
        func = self.exec_statement(call.callee)

        if isinstance(func, NativeFunction):
            return func([self.exec_statement(arg) for arg in call.args])

        elif isinstance(func, Function):
            if len(call.args) != len(func.params):
                msg = "function expects {} argument(s), got {}"
                raise TypeMismatchError(msg, (str(len(func.params)), str(len(call.args))), diagnosis=False)

            args = [self.exec_statement(arg) for arg in call.args]

            self.scope.push()
            try:
                for name, value in zip(func.params, args):
                    self.scope.define(name, value)
                return self.exec_statement(func.body)
            except ReturnSignal as signal:
                return signal.value
            finally:
                self.scope.pop()

        raise NotCallableError("cannot call value of kind {}", func.kind, diagnosis=False)

    # ---------- expressions ----------

    def eval_expr(self, expr):
        """Left fold over expr's terms."""
        value = self.eval_term(expr.terms[0])
        for op, term in zip(expr.ops, expr.terms[1:]):
            value = binary(op, value, self.eval_term(term))
        return value

    def eval_term(self, term):
        """Left fold over term's factors."""
        value = self.eval_factor(term.factors[0])
        for op, factor in zip(term.ops, term.factors[1:]):
            value = binary(op, value, self.eval_factor(factor))
        return value

    def eval_factor(self, factor):
        if isinstance(factor, IntegerFactor):
            return Integer(factor.value)

        elif isinstance(factor, StringFactor):
            return String(factor.value)

        elif isinstance(factor, BooleanFactor):
            return Boolean(factor.value)

        elif isinstance(factor, IdentFactor):
            value = self.scope.lookup(factor.name)
            if value is None:
                raise UnresolvedIdentifierError("identifier {} not found in current scope", factor.name,
                                                diagnosis=False)
            return value

        elif isinstance(factor, StatementFactor):
            return self.exec_statement(factor.statement)

        raise GenericException("unknown factor {}", type(factor).__name__, internal=True)


def divide(left, right):
    """Integer division truncating toward zero."""
    if right == 0:
        raise MathError("division by zero", diagnosis=False)

    quotient = abs(left) // abs(right)
    return -quotient if (left < 0) != (right < 0) else quotient


def binary(op, left, right):
    """Applies binary operator op to two Values."""
    if isinstance(left, Integer) and isinstance(right, Integer):
        if op == "+":
            return Integer(left.value + right.value)
        elif op == "-":
            return Integer(left.value - right.value)
        elif op == "*":
            return Integer(left.value * right.value)
        elif op == "/":
            return Integer(divide(left.value, right.value))

    elif isinstance(left, String) and isinstance(right, String) and op == "+":
        return String(left.value + right.value)

    elif isinstance(left, String) and isinstance(right, Integer) and op == "*":
        if right.value < 0:
            raise MathError("cannot repeat a string {} times", str(right.value), diagnosis=False)
        return String(left.value * right.value)

    raise TypeMismatchError("unsupported operation {1} for {0} and {2}", (left.kind, op, right.kind), diagnosis=False)


def evaluate(program, natives=NATIVES):
    """Evaluates program with a fresh Interpreter and returns its final Value."""
    return Interpreter(natives).evaluate(program)
