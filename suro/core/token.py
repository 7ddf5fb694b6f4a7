"""Tokenizer for the suro language.

Tokenization is single-pass and first-match: at every position the rules in RULES are tried in order and the first one
that matches wins (not the longest). Rule order is therefore part of the grammar:

```
<comment>    ::= "--" <char>*                  ; runs to end of line, must come before "-"
<string>     ::= '"' <char>* '"' | "'" <char>* "'"
<integer>    ::= [0-9]+
<keyword>    ::= "set" | "change" | ...        ; only if followed by a non-identifier character
<ident>      ::= [A-Za-z_] [A-Za-z0-9_-]*      ; must come after the keywords
```

A keyword needs one character after it that cannot continue an identifier, and only the keyword itself is consumed.
As a consequence a keyword that is the very last text of the source lexes as a plain identifier.
"""

from dataclasses import dataclass
from enum import Enum
import re

from suro.lang.error import LexicalError


class TokenKind(Enum):
    EOF = "EOF"
    COMMENT = "COMMENT"
    WHITESPACE = "WHITESPACE"

    IDENT = "IDENT"
    INTEGER = "INTEGER"
    STRING = "STRING"
    TRUE = "TRUE"
    FALSE = "FALSE"

    SET = "SET"
    CHANGE = "CHANGE"
    TO = "TO"  # assignment marker
    RETURN = "RETURN"
    IF = "IF"
    THEN = "THEN"
    ELSE = "ELSE"
    CALL = "CALL"
    WITH = "WITH"
    FUNC = "FUNC"
    TAKES = "TAKES"

    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    LBRACE = "LBRACE"
    RBRACE = "RBRACE"
    COMMA = "COMMA"
    SEMI = "SEMI"

    PLUS = "PLUS"
    MINUS = "MINUS"
    STAR = "STAR"
    SLASH = "SLASH"

    def __repr__(self):
        return self.value


SKIPPED = (TokenKind.COMMENT, TokenKind.WHITESPACE)

KEYWORDS = {
    "call": TokenKind.CALL,
    "set": TokenKind.SET,
    "change": TokenKind.CHANGE,
    "return": TokenKind.RETURN,
    "to": TokenKind.TO,
    "with": TokenKind.WITH,
    "if": TokenKind.IF,
    "then": TokenKind.THEN,
    "else": TokenKind.ELSE,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "func": TokenKind.FUNC,
    "takes": TokenKind.TAKES,
}


def _keyword(word):
    """Keyword rule: group 1 is the keyword, the trailing character is only looked at."""
    return re.compile(rf"({word})[^A-Za-z0-9_\-]")


RULES = [
    (TokenKind.COMMENT, re.compile(r"--.*")),
    (TokenKind.STRING, re.compile(r'".*?"')),
    (TokenKind.STRING, re.compile(r"'.*?'")),
    (TokenKind.INTEGER, re.compile(r"[0-9]+")),
    (TokenKind.SEMI, re.compile(r";")),
    *((kind, _keyword(word)) for word, kind in KEYWORDS.items()),
    (TokenKind.LPAREN, re.compile(r"\(")),
    (TokenKind.RPAREN, re.compile(r"\)")),
    (TokenKind.LBRACE, re.compile(r"\{")),
    (TokenKind.RBRACE, re.compile(r"\}")),
    (TokenKind.COMMA, re.compile(r",")),
    (TokenKind.PLUS, re.compile(r"\+")),
    (TokenKind.MINUS, re.compile(r"-")),
    (TokenKind.STAR, re.compile(r"\*")),
    (TokenKind.SLASH, re.compile(r"/")),
    (TokenKind.IDENT, re.compile(r"[A-Za-z_][A-Za-z0-9_\-]*")),
    (TokenKind.WHITESPACE, re.compile(r"[ \t\r\n]+")),
]


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    offset: int = 0

    def __repr__(self):
        if self.kind is TokenKind.EOF:
            return "EOF"
        return f"{self.kind.value}({self.text!r})"


class TokenStream:
    """Ordered tokens produced by tokenize, together with the source they were read from (used for error messages)."""

    def __init__(self, tokens, source=""):
        self.tokens = list(tokens)
        self.source = source

    def locate(self, offset):
        """Returns (line, line_num, column) of offset in self.source. line_num is 1-based, column is 0-based."""
        line_start = self.source.rfind("\n", 0, offset) + 1
        line_end = self.source.find("\n", offset)
        if line_end == -1:
            line_end = len(self.source)

        line_num = self.source.count("\n", 0, line_start) + 1
        return self.source[line_start:line_end].rstrip("\r"), line_num, offset - line_start

    @property
    def kinds(self):
        return [token.kind for token in self.tokens]

    def __getitem__(self, idx):
        return self.tokens[idx]

    def __len__(self):
        return len(self.tokens)

    def __iter__(self):
        return iter(self.tokens)

    def __repr__(self):
        return f"TokenStream({self.tokens})"


def tokenize(source):
    """Converts source into a TokenStream ending with an EOF token. Raises LexicalError on an unmatched character."""
    tokens = []
    idx = 0

    while idx < len(source):
        for kind, pattern in RULES:
            match = pattern.match(source, idx)
            if match:
                break
        else:
            line, line_num, col = TokenStream([], source).locate(idx)
            offset = len(source[:idx].encode("utf-8"))
            msg = "unrecognized character {1} at byte {2} (line {3}, column {4})"
            raise LexicalError(msg, (line, repr(source[idx]), offset, line_num, col + 1), offset=offset, start=col,
                               end=col + 1, line_num=line_num)

        end = match.end(match.lastindex) if match.lastindex else match.end()
        if kind not in SKIPPED:
            tokens.append(Token(kind, source[idx:end], idx))
        idx = end

    tokens.append(Token(TokenKind.EOF, "", len(source)))
    return TokenStream(tokens, source)
