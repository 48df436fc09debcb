import unittest

from monkey.syntax.lexer import Lexer
from monkey.syntax.token import Token, TokenType, lookup_ident


def kinds(source):
    return [(token.kind, token.literal) for token in Lexer(source)]


class LexerTestCase(unittest.TestCase):

    def test_next_token(self):
        source = "let five = 5;\nlet add = function(x, y) {\n  x + y;\n};\n!-/*5 < 10 > 5 == != 9;"
        expected = [
            (TokenType.LET, "let"), (TokenType.IDENT, "five"), (TokenType.ASSIGN, "="), (TokenType.INT, "5"),
            (TokenType.SEMICOLON, ";"),
            (TokenType.LET, "let"), (TokenType.IDENT, "add"), (TokenType.ASSIGN, "="),
            (TokenType.FUNCTION, "function"), (TokenType.LPAREN, "("), (TokenType.IDENT, "x"), (TokenType.COMMA, ","),
            (TokenType.IDENT, "y"), (TokenType.RPAREN, ")"), (TokenType.LBRACE, "{"),
            (TokenType.IDENT, "x"), (TokenType.PLUS, "+"), (TokenType.IDENT, "y"), (TokenType.SEMICOLON, ";"),
            (TokenType.RBRACE, "}"), (TokenType.SEMICOLON, ";"),
            (TokenType.BANG, "!"), (TokenType.MINUS, "-"), (TokenType.SLASH, "/"), (TokenType.ASTERISK, "*"),
            (TokenType.INT, "5"), (TokenType.LT, "<"), (TokenType.INT, "10"), (TokenType.GT, ">"), (TokenType.INT, "5"),
            (TokenType.EQ, "=="), (TokenType.NOT_EQ, "!="), (TokenType.INT, "9"), (TokenType.SEMICOLON, ";"),
            (TokenType.EOF, ""),
        ]
        self.assertEqual(expected, kinds(source))

    def test_keywords(self):
        cases = {
            "let": TokenType.LET,
            "return": TokenType.RETURN,
            "if": TokenType.IF,
            "else": TokenType.ELSE,
            "function": TokenType.FUNCTION,
            "fn": TokenType.FUNCTION,
            "true": TokenType.TRUE,
            "false": TokenType.FALSE,
            "lettuce": TokenType.IDENT,
            "_x1": TokenType.IDENT,
        }
        for case, expected in cases.items():
            self.assertEqual(expected, lookup_ident(case), case)
            self.assertEqual(expected, Lexer(case).next_token().kind, case)

    def test_illegal(self):
        cases = {"@": "@", "1 $ 2": "$", "a # b": "#"}
        for case, expected in cases.items():
            illegal = [token for token in Lexer(case) if token.kind is TokenType.ILLEGAL]
            self.assertEqual([expected], [token.literal for token in illegal], case)

    def test_positions(self):
        tokens = list(Lexer("let x\n  = 10;"))
        cases = [(1, 1), (1, 5), (2, 3), (2, 5), (2, 7), (2, 8)]
        self.assertEqual(cases, [(token.line, token.column) for token in tokens])
        self.assertEqual(Token(TokenType.INT, "10", 2, 5), tokens[3])

    def test_eof_repeats(self):
        lexer = Lexer("x")
        self.assertIs(TokenType.IDENT, lexer.next_token().kind)
        for __ in range(3):
            self.assertIs(TokenType.EOF, lexer.next_token().kind)

    def test_empty(self):
        should_pass = ["", "   ", "\n\t\n"]
        for case in should_pass:
            self.assertEqual([(TokenType.EOF, "")], kinds(case), repr(case))


if __name__ == '__main__':
    unittest.main()
