import io
import unittest
from contextlib import redirect_stdout

from suro.core.evaluator import Interpreter, evaluate
from suro.core.grammar import parse
from suro.core.natives import get_natives
from suro.core.token import tokenize
from suro.core.values import NULL, Boolean, Function, Integer, String
from suro.lang.error import (
    MathError, NotCallableError, ParseError, ReassignmentError, TypeMismatchError, UnresolvedIdentifierError,
)


def run(source, interpreter=None):
    program = parse(tokenize(source))
    if interpreter is None:
        return evaluate(program)
    return interpreter.evaluate(program)


class ArithmeticTestCase(unittest.TestCase):

    def test_integers(self):
        cases = {
            "{ set x to 2 + 3 * 4; return x; }": 14,
            "{ return 10 - 3 - 2; }": 5,
            "(2 + 3) * 4": 20,
            "7 / 2": 3,
            "(0 - 7) / 2": -3,
            "7 / (0 - 2)": -3,
            "(0 - 7) / (0 - 2)": 3,
            "8 / 2 * 3": 12,
            "2147483647": 2147483647,
            "0 - 2147483647 - 1": -2147483648,
        }
        for case, expected in cases.items():
            self.assertEqual(Integer(expected), run(case), case)

    def test_strings(self):
        cases = {
            "{ return \"ab\" * 3; }": "ababab",
            "'ab' + \"cd\"": "abcd",
            "'ab' * 0": "",
            "'' + ''": "",
        }
        for case, expected in cases.items():
            self.assertEqual(String(expected), run(case), case)

    def test_math_errors(self):
        should_raise = [
            "{ return \"x\" * (0 - 1); }",
            "1 / 0",
            "2147483647 + 1",
            "0 - 2147483647 - 2",
            "65536 * 65536",
            "(0 - 2147483647 - 1) / (0 - 1)",
        ]
        for case in should_raise:
            self.assertRaises(MathError, run, case)

    def test_negative_literal_is_a_syntax_error(self):
        self.assertRaises(ParseError, run, "{ return \"x\" * -1; }")

    def test_unsupported_operations(self):
        should_raise = [
            "1 + 'a'",
            "'a' - 'b'",
            "'a' / 2",
            "3 * 'ab'",
            "true + 1",
            "(true) * (true)",
            "print + 1",
            "(func 1) - 1",
        ]
        for case in should_raise:
            self.assertRaises(TypeMismatchError, run, case)


class StatementTestCase(unittest.TestCase):

    def test_scoping(self):
        self.assertEqual(Integer(1), run("{ set x to 1; { set x to 2; }; return x; }"))
        self.assertEqual(Integer(2), run("{ set x to 1; { change x to 2; }; return x; }"))
        self.assertRaises(UnresolvedIdentifierError, run, "{ { set y to 2; }; return y; }")

    def test_reassignment_of_undefined(self):
        self.assertRaises(ReassignmentError, run, "{ change y to 5; }")

    def test_unresolved(self):
        self.assertRaises(UnresolvedIdentifierError, run, "y")
        self.assertRaises(UnresolvedIdentifierError, run, "{ set x to y; }")

    def test_block_values(self):
        cases = {
            "{ set x to 1; }": NULL,
            "{}": NULL,
            "{ { return 1; }; return 2; }": Integer(2),
            "({ return 1; }) + 1": Integer(2),
            "{ return { return 3; }; }": Integer(3),
            "set x to 1": NULL,
        }
        for case, expected in cases.items():
            self.assertEqual(expected, run(case), case)

    def test_return_stops_block(self):
        output = io.StringIO()
        with redirect_stdout(output):
            result = run("{ return 1; print('unreachable'); }")
        self.assertEqual(Integer(1), result)
        self.assertEqual("", output.getvalue())

    def test_if_chains(self):
        cases = {
            "{ set x to 0; if x then return 1; else if (to_bool(1)) then return 2; else return 3; }": Integer(2),
            "{ if 1 then return 'a'; else return 'b'; }": String("a"),
            "{ if '' then return 'a'; else return 'b'; }": String("b"),
            "{ if false then return 1; else if 0 then return 2; }": NULL,
            "if true then 5": Integer(5),
            "if 0 then 5": NULL,
            "(if 0 then 1 else 2) * 10": Integer(20),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, run(case), case)

    def test_if_condition_coercion(self):
        should_raise = ["if print() then 1", "if (func 1) then 1"]
        for case in should_raise:
            self.assertRaises(TypeMismatchError, run, case)

    def test_top_level_return(self):
        self.assertEqual(Integer(4), run("return 4"))

    def test_persistent_root_scope(self):
        interpreter = Interpreter()
        run("set x to 3", interpreter)
        self.assertEqual(Integer(4), run("x + 1", interpreter))

    def test_frames_balanced(self):
        interpreter = Interpreter()

        run("{ { return 1; }; set y to 2; return y; }", interpreter)
        self.assertEqual(0, interpreter.scope.depth)

        self.assertRaises(MathError, run, "{ { set z to 1 / 0; }; }", interpreter)
        self.assertEqual(0, interpreter.scope.depth)

        run("{ set f to func { return 1; }; return f(); }", interpreter)
        self.assertEqual(0, interpreter.scope.depth)


class CallTestCase(unittest.TestCase):

    def test_not_callable(self):
        should_raise = ["call 1", "{ set x to 1; return x(); }", "'f'()", "(print())()"]
        for case in should_raise:
            self.assertRaises(NotCallableError, run, case)

    def test_function_value(self):
        result = run("func takes (a) a")
        self.assertIsInstance(result, Function)
        self.assertEqual(("a",), result.params)

    def test_user_functions(self):
        cases = {
            "{ set add to func takes (a, b) { return a + b; }; return add(2, 3); }": Integer(5),
            "{ set add to func takes (a, b) a + b; return call add with (2, 3); }": Integer(5),
            "{ set f to func { set x to 1; }; return f(); }": NULL,
            "{ set y to 10; set f to func { return y; }; return f(); }": Integer(10),
            "{ set f to func takes (x) { return x; }; set x to 'outer'; f(1); return x; }": String("outer"),
            "(func takes (s) s * 2)('ab')": String("abab"),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, run(case), case)

    def test_recursion(self):
        source = "{ set sum to func takes (n) { if n then return n + sum(n - 1); else return 0; }; return sum(4); }"
        self.assertEqual(Integer(10), run(source))

    def test_arity(self):
        should_raise = [
            "{ set f to func takes (a) a; return f(); }",
            "{ set f to func a; return f(1); }",
        ]
        for case in should_raise:
            self.assertRaises(TypeMismatchError, run, case)

    def test_argument_order(self):
        output = io.StringIO()
        with redirect_stdout(output):
            run("{ set f to func takes (a, b) b; f(print('a'), print('b')); }")
        self.assertEqual("a\nb\n", output.getvalue())

    def test_custom_natives(self):
        natives = get_natives(("double", lambda args: Integer(args[0].value * 2)))
        interpreter = Interpreter(natives)

        self.assertEqual(Integer(42), run("double(21)", interpreter))
        self.assertEqual(Boolean(True), run("to_bool(1)", interpreter))
        self.assertRaises(UnresolvedIdentifierError, run, "double(21)")


if __name__ == '__main__':
    unittest.main()
