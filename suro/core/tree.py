"""Abstract syntax tree for the suro language. Nodes are plain immutable data: parsing builds them top-down and the
evaluator dispatches on their type.

Binary chains are flat rather than nested:

```
Expr(terms=[t0, t1, t2], ops=["+", "-"])       ; (t0 + t1) - t2
Term(factors=[f0, f1], ops=["*"])              ; f0 * f1
```

Statements, blocks and calls may appear wherever a factor is expected (wrapped in a StatementFactor), so the tree does
not separate expressions from statements beyond the Expr/Term/Factor chain.
"""

from dataclasses import dataclass, fields
from typing import Optional, Tuple


class Node:
    """Superclass of all tree nodes. Only provides display."""

    def display(self, indents=0):
        """Recursively displays the tree with readable format.

        Format:
        <Node>(<field>=<value>, nodes=[
            <Node>(...)
            ...
        ])
        """
        attrs, nodes = [], []
        for field in fields(self):
            value = getattr(self, field.name)
            if isinstance(value, Node):
                nodes.append(value)
            elif isinstance(value, tuple) and value and all(isinstance(item, Node) for item in value):
                nodes.extend(value)
            else:
                attrs.append(f"{field.name}={value!r}")

        result = f"{'    ' * indents}{type(self).__name__}({', '.join(attrs)}"
        if nodes:
            result += ", nodes=[" if attrs else "nodes=["
            for node in nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    def __str__(self):
        return self.display()


class Statement(Node):
    """Superclass of statement nodes."""


class Factor(Node):
    """Superclass of factor nodes."""


@dataclass(frozen=True)
class Term(Node):
    factors: Tuple[Factor, ...]
    ops: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Expr(Node):
    terms: Tuple[Term, ...]
    ops: Tuple[str, ...] = ()


@dataclass(frozen=True)
class IntegerFactor(Factor):
    value: int


@dataclass(frozen=True)
class StringFactor(Factor):
    value: str


@dataclass(frozen=True)
class BooleanFactor(Factor):
    value: bool


@dataclass(frozen=True)
class IdentFactor(Factor):
    name: str


@dataclass(frozen=True)
class StatementFactor(Factor):
    """Parenthesized statement, nested block, call or function declaration used as a factor."""
    statement: Statement


@dataclass(frozen=True)
class Assign(Statement):
    """`set name to expr` (reassign=False) or `change name to expr` (reassign=True)."""
    name: str
    expr: Expr
    reassign: bool = False


@dataclass(frozen=True)
class FunctionDeclaration(Statement):
    params: Tuple[str, ...]
    body: Statement


@dataclass(frozen=True)
class Return(Statement):
    inner: Statement


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    expr: Expr


@dataclass(frozen=True)
class Block(Statement):
    statements: Tuple[Statement, ...] = ()


@dataclass(frozen=True)
class Branch(Node):
    """One arm of an if chain. The final `else` arm has no condition."""
    condition: Optional[Statement]
    consequent: Statement


@dataclass(frozen=True)
class If(Statement):
    branches: Tuple[Branch, ...]


@dataclass(frozen=True)
class Call(Statement):
    callee: Statement
    args: Tuple[Statement, ...] = ()


@dataclass(frozen=True)
class Program(Node):
    body: Statement


def wrap(factor):
    """Wraps a single factor into an ExpressionStatement, so that it can be used where a Statement is expected."""
    return ExpressionStatement(Expr((Term((factor,)),)))
