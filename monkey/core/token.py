"""Token model for the Monkey language. A token is a lexical category (TokenKind) plus the literal text it was read
from. Keywords are told apart from identifiers here, at lex time, so the parser never sees a keyword as an IDENT.
"""

import enum
from dataclasses import dataclass


class TokenKind(enum.Enum):
    """Closed set of lexical categories. Values are the names shown in parser diagnostics."""
    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    # identifiers + literals
    IDENT = "IDENT"
    INT = "INT"
    STRING = "STRING"

    # operators
    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    BANG = "!"
    ASTERISK = "*"
    SLASH = "/"
    LT = "<"
    GT = ">"
    EQ = "=="
    NOT_EQ = "!="

    # delimiters
    COMMA = ","
    SEMICOLON = ";"
    COLON = ":"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"

    # keywords
    FUNCTION = "FUNCTION"
    LET = "LET"
    TRUE = "TRUE"
    FALSE = "FALSE"
    IF = "IF"
    ELSE = "ELSE"
    RETURN = "RETURN"

    def __str__(self):
        return self.value


KEYWORDS = {
    "fn": TokenKind.FUNCTION,
    "let": TokenKind.LET,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "return": TokenKind.RETURN,
}


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    literal: str

    def __str__(self):
        return self.literal


def lookup_ident(ident):
    """Returns the keyword kind of ident, or IDENT if ident is not a reserved word."""
    return KEYWORDS.get(ident, TokenKind.IDENT)
