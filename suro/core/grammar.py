"""Recursive-descent parser for the suro language: one method per grammar production.

```
<program>    ::= <statement> EOF
<block>      ::= "{" ( <statement> ";" )* "}"
<statement>  ::= "set" <ident> "to" <expr>
               | "change" <ident> "to" <expr>
               | "return" <statement>
               | <block>
               | <if>
               | <expr>
<if>         ::= "if" <statement> "then" <statement> [";"]
                 ( "else" "if" <statement> "then" <statement> [";"] )*
                 ( "else" <statement> )?                ; a ";" is only absorbed when "else" follows it
<expr>       ::= <term> ( ( "+" | "-" ) <term> )*
<term>       ::= <factor> ( ( "*" | "/" ) <factor> )*
<factor>     ::= <primary> ( "(" [ <statement> ( "," <statement> )* ] ")" )*
<primary>    ::= <integer> | <string> | "true" | "false" | <ident>
               | "(" <statement> ")" | <block>
               | "call" <primary> ( "with" "(" <statement> ( "," <statement> )* ")" )?
               | "func" ( "takes" "(" [ <ident> ( "," <ident> )* ] ")" )? <statement>
```

There is no unary minus: a leading "-" is a syntax error.
"""

from suro.core.token import TokenKind
from suro.core.tree import (
    Assign, Block, BooleanFactor, Branch, Call, Expr, ExpressionStatement, FunctionDeclaration, IdentFactor, If,
    IntegerFactor, Program, Return, StatementFactor, StringFactor, Term, wrap,
)
from suro.lang.error import ParseError

INT_MIN, INT_MAX = -2 ** 31, 2 ** 31 - 1

EXPR_OPS = {TokenKind.PLUS: "+", TokenKind.MINUS: "-"}
TERM_OPS = {TokenKind.STAR: "*", TokenKind.SLASH: "/"}


class Parser:
    """Consumes a TokenStream left to right and builds a Program."""

    def __init__(self, tokens):
        self.tokens = tokens
        self.idx = 0

    def parse(self):
        return self.parse_program()

    # ---------- helpers ----------

    def error(self, msg, token, *exprs):
        """Returns a ParseError pointing at token. msg may use {1}, {2}... for exprs."""
        if hasattr(self.tokens, "locate"):
            line, line_num, col = self.tokens.locate(token.offset)
        else:
            line, line_num, col = token.text, None, 0
        return ParseError(msg, (line, *exprs), start=col, end=col + max(len(token.text), 1), line_num=line_num)

    @property
    def current(self):
        if self.idx >= len(self.tokens):
            last = self.tokens[-1] if len(self.tokens) else None
            if last is None:
                raise ParseError("ran out of tokens to parse", diagnosis=False)
            raise self.error("ran out of tokens to parse", last)
        return self.tokens[self.idx]

    def peek(self, ahead=1):
        """Kind of the token ahead of the current one, or None past the end."""
        if self.idx + ahead < len(self.tokens):
            return self.tokens[self.idx + ahead].kind
        return None

    def consume(self):
        token = self.current
        self.idx += 1
        return token

    def consume_if(self, kind):
        if self.current.kind is kind:
            self.consume()
            return True
        return False

    def expect(self, kind):
        token = self.current
        if token.kind is not kind:
            raise self.error("expected {1}, got {2}", token, kind.value, token.kind.value)
        return self.consume()

    # ---------- productions ----------

    def parse_program(self):
        program = Program(self.parse_statement())
        self.expect(TokenKind.EOF)
        return program

    def parse_block(self):
        self.expect(TokenKind.LBRACE)
        statements = []
        while self.current.kind is not TokenKind.RBRACE:
            statements.append(self.parse_statement())
            self.expect(TokenKind.SEMI)
        self.expect(TokenKind.RBRACE)
        return Block(tuple(statements))

    def parse_statement(self):
        kind = self.current.kind

        if kind in (TokenKind.SET, TokenKind.CHANGE):
            self.consume()
            name = self.expect(TokenKind.IDENT).text
            self.expect(TokenKind.TO)
            return Assign(name, self.parse_expr(), reassign=kind is TokenKind.CHANGE)

        if kind is TokenKind.RETURN:
            self.consume()
            return Return(self.parse_statement())

        if kind is TokenKind.LBRACE:
            return self.parse_block()

        if kind is TokenKind.IF:
            return self.parse_if()

        return ExpressionStatement(self.parse_expr())

    def parse_if(self):
        branches = []

        self.expect(TokenKind.IF)
        while True:
            condition = self.parse_statement()
            self.expect(TokenKind.THEN)
            branches.append(Branch(condition, self.parse_statement()))

            if self.current.kind is TokenKind.SEMI and self.peek() is TokenKind.ELSE:
                self.consume()  # ";" before else belongs to the chain
            if not self.consume_if(TokenKind.ELSE):
                break
            if not self.consume_if(TokenKind.IF):
                branches.append(Branch(None, self.parse_statement()))
                break

        return If(tuple(branches))

    def parse_expr(self):
        terms, ops = [self.parse_term()], []
        while self.current.kind in EXPR_OPS:
            ops.append(EXPR_OPS[self.consume().kind])
            terms.append(self.parse_term())
        return Expr(tuple(terms), tuple(ops))

    def parse_term(self):
        factors, ops = [self.parse_factor()], []
        while self.current.kind in TERM_OPS:
            ops.append(TERM_OPS[self.consume().kind])
            factors.append(self.parse_factor())
        return Term(tuple(factors), tuple(ops))

    def parse_factor(self):
        factor = self.parse_primary()
        while self.current.kind is TokenKind.LPAREN:
            self.consume()
            args = []
            if self.current.kind is not TokenKind.RPAREN:
                args = self.parse_args()
            self.expect(TokenKind.RPAREN)
            factor = StatementFactor(Call(wrap(factor), tuple(args)))
        return factor

    def parse_primary(self):
        token = self.current

        if token.kind is TokenKind.INTEGER:
            self.consume()
            value = int(token.text)
            if not INT_MIN <= value <= INT_MAX:
                raise self.error("integer literal {1} does not fit in 32 bits", token, token.text)
            return IntegerFactor(value)

        if token.kind is TokenKind.STRING:
            self.consume()
            return StringFactor(token.text[1:-1])  # strip surrounding quotes

        if token.kind in (TokenKind.TRUE, TokenKind.FALSE):
            self.consume()
            return BooleanFactor(token.kind is TokenKind.TRUE)

        if token.kind is TokenKind.IDENT:
            self.consume()
            return IdentFactor(token.text)

        if token.kind is TokenKind.LPAREN:
            self.consume()
            statement = self.parse_statement()
            self.expect(TokenKind.RPAREN)
            return StatementFactor(statement)

        if token.kind is TokenKind.LBRACE:
            return StatementFactor(self.parse_block())

        if token.kind is TokenKind.CALL:
            return self.parse_call()

        if token.kind is TokenKind.FUNC:
            return self.parse_func()

        raise self.error("expected a value, got {1}", token, token.kind.value)

    def parse_call(self):
        self.expect(TokenKind.CALL)
        callee = wrap(self.parse_primary())

        args = []
        if self.consume_if(TokenKind.WITH):
            self.expect(TokenKind.LPAREN)
            args = self.parse_args()
            self.expect(TokenKind.RPAREN)

        return StatementFactor(Call(callee, tuple(args)))

    def parse_args(self):
        args = [self.parse_statement()]
        while self.consume_if(TokenKind.COMMA):
            args.append(self.parse_statement())
        return args

    def parse_func(self):
        self.expect(TokenKind.FUNC)

        params = []
        if self.consume_if(TokenKind.TAKES):
            self.expect(TokenKind.LPAREN)
            if self.current.kind is not TokenKind.RPAREN:
                params.append(self.expect(TokenKind.IDENT).text)
                while self.consume_if(TokenKind.COMMA):
                    params.append(self.expect(TokenKind.IDENT).text)
            self.expect(TokenKind.RPAREN)

        return StatementFactor(FunctionDeclaration(tuple(params), self.parse_statement()))


def parse(tokens):
    """Parses a TokenStream (or any sequence of Tokens ending with EOF) into a Program. Raises ParseError."""
    return Parser(tokens).parse()
