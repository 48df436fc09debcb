"""Lexical analysis for Monkey source text. Scanning is driven by a single compiled regex with one named group per token
class, tried in order:

```
<whitespace> ::= [ \t\r\n]+                  ; skipped, but advances line/column
<ident>      ::= [A-Za-z_][A-Za-z0-9_]*      ; keywords are idents found in token.KEYWORDS
<int>        ::= [0-9]+
<operator>   ::= "==" | "!=" | "=" | "+" | "-" | "!" | "*" | "/" | "<" | ">"
<delimiter>  ::= "," | ";" | "(" | ")" | "{" | "}"
<illegal>    ::= any other single character
```

The lexer never raises: unknown characters become ILLEGAL tokens and the parser reports them.
"""

import re

from monkey.syntax.token import Token, TokenType, lookup_ident


SYMBOLS = {token_type.value: token_type for token_type in [
    TokenType.EQ, TokenType.NOT_EQ, TokenType.ASSIGN, TokenType.PLUS, TokenType.MINUS, TokenType.BANG,
    TokenType.ASTERISK, TokenType.SLASH, TokenType.LT, TokenType.GT, TokenType.COMMA, TokenType.SEMICOLON,
    TokenType.LPAREN, TokenType.RPAREN, TokenType.LBRACE, TokenType.RBRACE,
]}

TOKEN_SPEC = [
    ("WS", r"[ \t\r\n]+"),
    ("IDENT", r"[A-Za-z_][A-Za-z0-9_]*"),
    ("INT", r"[0-9]+"),
    ("SYMBOL", r"==|!=|[=+\-!*/<>,;(){}]"),
    ("ILLEGAL", r"."),
]

TOKEN_REGEX = re.compile("|".join(f"(?P<{name}>{pattern})" for name, pattern in TOKEN_SPEC), re.DOTALL)


class Lexer:
    """Pull-based scanner: each call to next_token returns the next token. Once the input is exhausted, EOF is returned
    indefinitely.
    """

    def __init__(self, source):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1

    def next_token(self):
        while self.pos < len(self.source):
            match = TOKEN_REGEX.match(self.source, self.pos)
            group = match.lastgroup
            text = match.group(group)
            line, column = self.line, self.column
            self._advance(text)

            if group == "WS":
                continue
            elif group == "IDENT":
                return Token(lookup_ident(text), text, line, column)
            elif group == "INT":
                return Token(TokenType.INT, text, line, column)
            elif group == "SYMBOL":
                return Token(SYMBOLS[text], text, line, column)
            return Token(TokenType.ILLEGAL, text, line, column)

        return Token(TokenType.EOF, "", self.line, self.column)

    def _advance(self, text):
        """Moves past text, keeping line and column in step."""
        self.pos += len(text)
        newlines = text.count("\n")
        if newlines:
            self.line += newlines
            self.column = len(text) - text.rfind("\n")
        else:
            self.column += len(text)

    def __iter__(self):
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenType.EOF:
                return
