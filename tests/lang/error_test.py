import io
import unittest
from contextlib import redirect_stdout

from suro.lang.error import (
    ErrorHandler, GenericException, LexicalError, MathError, NotCallableError, ParseError, ReassignmentError,
    TypeMismatchError, UnresolvedIdentifierError,
)


class GenericExceptionTestCase(unittest.TestCase):

    def test_fields(self):
        error = GenericException("'{}' is bad", "abc", start=1)
        self.assertEqual("abc", error.expr)
        self.assertEqual(1, error.start)
        self.assertEqual(3, error.end)
        self.assertIn("abc", error.msg)
        self.assertIsNone(error.line_num)

    def test_no_exprs(self):
        error = GenericException("keyboard interrupt")
        self.assertEqual("", error.expr)
        self.assertEqual("keyboard interrupt", error.msg)

    def test_kinds(self):
        subclasses = [
            LexicalError, ParseError, UnresolvedIdentifierError, ReassignmentError, TypeMismatchError, MathError,
            NotCallableError,
        ]
        kinds = {subclass.kind for subclass in subclasses}
        self.assertEqual(len(subclasses), len(kinds))
        for subclass in subclasses:
            self.assertTrue(issubclass(subclass, GenericException), subclass)


class ErrorHandlerTestCase(unittest.TestCase):

    def test_fatal(self):
        output = io.StringIO()
        with redirect_stdout(output), self.assertRaises(SystemExit) as context:
            with ErrorHandler():
                raise MathError("division by zero", diagnosis=False)

        self.assertEqual(1, context.exception.code)
        self.assertIn("division by zero", output.getvalue())
        self.assertIn(MathError.kind, output.getvalue())

    def test_not_fatal(self):
        output = io.StringIO()
        with redirect_stdout(output):
            with ErrorHandler(fatal=False):
                raise UnresolvedIdentifierError("identifier {} not found", "x", diagnosis=False)

        self.assertIn("not found", output.getvalue())

    def test_traceback(self):
        handler = ErrorHandler(fatal=False)
        handler.register_file("prog.suro")
        handler.register_line("prog.suro", "set x to @", 3)

        output = io.StringIO()
        with redirect_stdout(output):
            with handler:
                raise LexicalError("unrecognized character {1}", ("set x to @", "'@'"), start=9, end=10, line_num=3)

        self.assertIn("File 'prog.suro', line 3", output.getvalue())
        self.assertIn("^", output.getvalue())
        self.assertEqual({"prog.suro": (None, None)}, handler.traceback)

    def test_internal(self):
        output = io.StringIO()
        with redirect_stdout(output), self.assertRaises(KeyError):
            with ErrorHandler(fatal=False):
                raise KeyError("oops")
        self.assertIn("[internal]", output.getvalue())

    def test_recursion(self):
        output = io.StringIO()
        with redirect_stdout(output):
            with ErrorHandler(fatal=False):
                raise RecursionError()
        self.assertIn("recursion", output.getvalue())

    def test_diagnose(self):
        error = GenericException("bad {}", "abcdef", start=2, end=4)
        diagnosis = ErrorHandler.diagnose(error)

        first, second = diagnosis.split("\n")
        self.assertIn("cd", first)
        self.assertTrue(second.startswith("    "))
        self.assertIn("^~", second)

    def test_warn(self):
        handler = ErrorHandler()
        output = io.StringIO()
        with redirect_stdout(output):
            handler.warn("'{}' shadows a native", "print", diagnosis=False)
        self.assertIn("warning", output.getvalue())


if __name__ == '__main__':
    unittest.main()
