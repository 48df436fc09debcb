"""Tokens produced by the lexer. A token never changes after it is scanned."""

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    """Kinds of tokens. Values are the spellings used in parse error messages."""
    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    IDENT = "IDENT"
    INT = "INT"

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

    COMMA = ","
    SEMICOLON = ";"

    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"

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
    "function": TokenType.FUNCTION,
    "fn": TokenType.FUNCTION,
    "let": TokenType.LET,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "return": TokenType.RETURN,
}


@dataclass(frozen=True)
class Token:
    kind: TokenType
    literal: str
    line: int = 1
    column: int = 1

    def __str__(self):
        return self.literal


def lookup_ident(ident):
    """Returns the keyword TokenType for ident, or IDENT if ident is not reserved."""
    return KEYWORDS.get(ident, TokenType.IDENT)
