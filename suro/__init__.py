"""suro: a small imperative scripting language.

Pipeline:
    1. tokenize: source text -> TokenStream (suro/core/token.py)
    2. parse: TokenStream -> Program, the syntax tree (suro/core/grammar.py, suro/core/tree.py)
    3. evaluate: Program -> Value, walking the tree against a scope chain (suro/core/evaluator.py)

The lang directory holds everything around the pipeline: errors, sessions, the shell.
"""

from suro.core.evaluator import Interpreter, evaluate
from suro.core.grammar import parse
from suro.core.natives import NATIVES
from suro.core.token import tokenize

__version__ = "0.1.0"
__all__ = ["tokenize", "parse", "evaluate", "Interpreter", "NATIVES"]
