"""Error handling for the suro language. Only GenericExceptions should be encountered during running: if another type
of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Every suro error is fatal to the evaluation that raised it. Each error kind gets its own GenericException subclass so
that callers (and tests) can tell them apart; the ErrorHandler only cares about the common base.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw a suro error/warning."""
    kind = "error"

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False, line_num=None):
        """Parses args for GenericException or warning. exprs[0] should be the offending source snippet: if line_num
        is given, it is the full source line and start/end point at the offending characters.
        """
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]
        exprs = [str(expr) for expr in exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0] if exprs else ""
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal
        self.line_num = line_num

        super().__init__(self.msg)


class LexicalError(GenericException):
    """Raised by the tokenizer when no rule matches at the cursor."""
    kind = "lexical error"

    def __init__(self, msg, exprs=None, offset=None, **kwargs):
        super().__init__(msg, exprs, **kwargs)
        self.offset = offset  # UTF-8 byte offset of the unmatched character


class ParseError(GenericException):
    """Raised by the parser on an unexpected token or a premature end of the token stream."""
    kind = "syntax error"


class UnresolvedIdentifierError(GenericException):
    """Raised when a name is not defined in any frame of the scope chain."""
    kind = "unresolved identifier"


class ReassignmentError(GenericException):
    """Raised when `change` targets a name no enclosing frame defines."""
    kind = "reassignment error"


class TypeMismatchError(GenericException):
    """Raised when an operator, native function or coercion gets a value of the wrong kind."""
    kind = "type mismatch"


class MathError(GenericException):
    """Raised on division by zero, integer overflow or a negative string repeat count."""
    kind = "arithmetic error"


class NotCallableError(GenericException):
    """Raised when the target of a call is not a function."""
    kind = "not callable"


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom suro errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Called when an error can be pinned to a source line."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path."""
        self.traceback[path] = (None, None)

    @staticmethod
    def diagnose(error, warning=False):
        """Returns offending part of error.expr highlighted and bolded."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def warn(self, *args, **kwargs):
        """Generates and prints runtime warning message based on args."""
        error = GenericException(*args, **kwargs)

        error_msg = ""
        for file, (__, line_num) in self.traceback.items():
            if line_num is not None:
                error_msg += colored(f"{file}:{line_num}:{error.start + 1}: ", attrs=["bold"])
                break

        error_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error, warning=True))

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (line, line_num) representing origination of error.
        """
        error_msg = ""
        lines = 0
        for file, (line, line_num) in self.traceback.items():  # assumes dict is insertion-ordered
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"
                lines += 1

        if lines > 0:
            error_msg = "Traceback:\n" + error_msg

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored(f"{error.kind}: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)
        for path in self.traceback:  # if error occurred, reset traceback (no need if error is fatal)
            self.remove_line(path)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("maximum recursion depth exceeded", diagnosis=False))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            do_exit = True

        return not do_exit
