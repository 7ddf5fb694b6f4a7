"""Session control for the suro language. Runs the tokenize -> parse -> evaluate pipeline over a .suro file or over
lines typed in the shell, keeping one interpreter (and so one root scope) alive for the whole session.
"""

from termcolor import colored

from suro.core.evaluator import Interpreter
from suro.core.grammar import parse
from suro.core.natives import NATIVES
from suro.core.token import TokenKind, tokenize
from suro.core.tree import Assign, Block
from suro.core.values import NULL
from suro.lang.error import GenericException, LexicalError


class Session:
    """Governs a suro session: a queue of parsed programs and the interpreter they run in."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line=False, verbose=False, natives=NATIVES):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.verbose = verbose    # whether or not to print tokens, tree and final value

        self.natives = natives
        self.interpreter = Interpreter(natives)
        self.to_exec = []  # parsed Programs waiting to be run
        self.results = []  # Values of Programs that have been run

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r", encoding="utf-8") as file:
                    source = file.read()
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            self.add(source)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename", diagnosis=False)

    @staticmethod
    def preprocess_line(line, add_to_prev=""):
        """Joins line onto add_to_prev (a pending, unfinished input). Returns the joined line and whether it still has
        unclosed brace/parenthesis tokens and so needs a continuation.
        """
        if add_to_prev:
            line = add_to_prev + "\n" + line
        line = line.rstrip()

        try:
            kinds = tokenize(line).kinds
        except LexicalError:
            return line, False  # complete as far as the shell is concerned, add reports the error

        still_open = (kinds.count(TokenKind.LBRACE) > kinds.count(TokenKind.RBRACE)
                      or kinds.count(TokenKind.LPAREN) > kinds.count(TokenKind.RPAREN))
        return line, still_open

    def add(self, source, line_num=None):
        """Tokenizes and parses source and queues the Program. Raises ValueError if a shell line is blank."""
        if self.cmd_line and not source.strip():
            raise ValueError("source is empty")

        try:
            tokens = tokenize(source)
            if self.verbose:
                self.show("Tokens", tokens.tokens)

            program = parse(tokens)
            if self.verbose:
                self.show("Tree", program.display())

            self.check_shadowing(program)

        except GenericException as error:
            if error.line_num is not None:
                offset = line_num - 1 if line_num is not None else 0
                self.error_handler.register_line(self.path, error.expr, error.line_num + offset)
            raise

        self.to_exec.append(program)

    def check_shadowing(self, program):
        """Warns about top-level `set`s that hide a native function."""
        statements = program.body.statements if isinstance(program.body, Block) else (program.body,)
        for statement in statements:
            if isinstance(statement, Assign) and not statement.reassign and statement.name in self.natives:
                self.error_handler.warn("'{}' shadows a native function", statement.name, diagnosis=False)

    def run(self):
        """Runs the queued Programs in order, appending their Values to self.results. Any error is raised as is."""
        while self.to_exec:
            program = self.to_exec.pop(0)
            result = self.interpreter.evaluate(program)
            self.results.append(result)

            if self.verbose:
                self.show("Result", repr(result))

    def pop(self):
        """Returns the latest result, or None if it is Null."""
        result = self.results.pop()
        return None if result == NULL else result

    @staticmethod
    def show(header, body):
        print(colored(f"{header}:", attrs=["bold"]), body)
