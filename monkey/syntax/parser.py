"""Pratt (operator-precedence) parser for Monkey. Turns a token stream into a Program.

Every token kind that can begin an expression has a prefix parse function; every infix operator has an infix parse
function and a binding precedence (see PRECEDENCES). parse_expression(precedence) keeps folding infix operators into the
left-hand side for as long as the next operator binds tighter than precedence, so operators of equal precedence
associate left and tighter operators nest deeper: "1 + 2 * 3" parses as "(1 + (2 * 3))".

The parser never raises for malformed input. Faults are appended to Parser.errors as ParseErrors, the offending
statement is dropped and parsing resumes at the start of the next statement.

Source: https://interpreterbook.com, https://en.wikipedia.org/wiki/Operator-precedence_parser#Pratt_parsing
"""

from enum import IntEnum

from monkey.lang.error import ParseError
from monkey.runtime.objects import INT64_MAX, INT64_MIN
from monkey.syntax import ast
from monkey.syntax.lexer import Lexer
from monkey.syntax.token import TokenType


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2       # == !=
    LESSGREATER = 3  # < >
    SUM = 4          # + -
    PRODUCT = 5      # * /
    PREFIX = 6       # -x !x
    CALL = 7         # f(x)


PRECEDENCES = {
    TokenType.EQ: Precedence.EQUALS,
    TokenType.NOT_EQ: Precedence.EQUALS,
    TokenType.LT: Precedence.LESSGREATER,
    TokenType.GT: Precedence.LESSGREATER,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.ASTERISK: Precedence.PRODUCT,
    TokenType.SLASH: Precedence.PRODUCT,
    TokenType.LPAREN: Precedence.CALL,
}


class Parser:
    """Parses the tokens pulled from lexer (anything with a next_token method) into a Program. Keeps two tokens of
    lookahead: cur_token is the token being parsed and peek_token is the one after it.

    Parse functions start with cur_token on the first token of their construct and leave it on the last one. On failure
    they record a ParseError and return None, which the enclosing parse functions pass upward.
    """

    def __init__(self, lexer):
        self.lexer = lexer
        self.errors = []

        self.cur_token = None
        self.peek_token = None
        self._depth = 0  # number of enclosing blocks

        self._prefix_parse_fns = {
            TokenType.IDENT: self._parse_identifier,
            TokenType.INT: self._parse_integer_literal,
            TokenType.TRUE: self._parse_boolean,
            TokenType.FALSE: self._parse_boolean,
            TokenType.BANG: self._parse_prefix_expression,
            TokenType.MINUS: self._parse_prefix_expression,
            TokenType.LPAREN: self._parse_grouped_expression,
            TokenType.IF: self._parse_if_expression,
            TokenType.FUNCTION: self._parse_function_literal,
        }
        self._infix_parse_fns = {token_type: self._parse_infix_expression for token_type in PRECEDENCES}
        self._infix_parse_fns[TokenType.LPAREN] = self._parse_call_expression

        # fill cur_token and peek_token
        self._next_token()
        self._next_token()

    def parse_program(self):
        """Parses statements until EOF. Always returns a Program, holding every statement that parsed cleanly; check
        self.errors for the ones that did not.
        """
        statements = self._parse_statements(TokenType.EOF)
        return ast.Program(tuple(statements))

    def _next_token(self):
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def _cur_token_is(self, token_type):
        return self.cur_token.kind is token_type

    def _peek_token_is(self, token_type):
        return self.peek_token.kind is token_type

    def _expect_peek(self, token_type):
        """Advances if peek_token is of token_type. Otherwise records an error and stays put."""
        if self._peek_token_is(token_type):
            self._next_token()
            return True
        self._peek_error(token_type)
        return False

    def _error(self, message, token):
        self.errors.append(ParseError(message, token.line, token.column))

    def _peek_error(self, token_type):
        actual = self.peek_token.kind
        self._error(f"expected next token to be {token_type}, got {actual} instead", self.peek_token)

    def _no_prefix_parse_fn_error(self, token):
        if token.kind is TokenType.ILLEGAL:
            self._error(f"illegal character '{token.literal}'", token)
        else:
            self._error(f"no prefix parse function for {token.kind} found", token)

    def _peek_precedence(self):
        return PRECEDENCES.get(self.peek_token.kind, Precedence.LOWEST)

    def _cur_precedence(self):
        return PRECEDENCES.get(self.cur_token.kind, Precedence.LOWEST)

    # statements

    def _parse_statements(self, end):
        """Parses statements until cur_token is end (or EOF). Statements that fail to parse are dropped, and the parser
        resynchronizes at the next statement.
        """
        statements = []
        while not self._cur_token_is(end) and not self._cur_token_is(TokenType.EOF):
            if self._cur_token_is(TokenType.SEMICOLON):  # empty statement
                self._next_token()
                continue

            statement = self._parse_statement()
            if statement is None:
                self._synchronize()
                continue

            statements.append(statement)
            self._next_token()
        return statements

    def _synchronize(self):
        """Skips tokens after a failed statement. Stops on the token after a ';', on a 'let' or 'return' keyword, or on the
        '}' closing the enclosing block (left for the block to consume).
        """
        while not self._cur_token_is(TokenType.EOF):
            if self._cur_token_is(TokenType.SEMICOLON):
                self._next_token()
                return
            if self._cur_token_is(TokenType.RBRACE) and self._depth > 0:
                return

            self._next_token()
            if self._cur_token_is(TokenType.LET) or self._cur_token_is(TokenType.RETURN):
                return

    def _parse_statement(self):
        if self._cur_token_is(TokenType.LET):
            return self._parse_let_statement()
        elif self._cur_token_is(TokenType.RETURN):
            return self._parse_return_statement()
        return self._parse_expression_statement()

    def _parse_let_statement(self):
        token = self.cur_token

        if not self._expect_peek(TokenType.IDENT):
            return None
        name = ast.Identifier(self.cur_token, self.cur_token.literal)

        if not self._expect_peek(TokenType.ASSIGN):
            return None

        self._next_token()
        value = self._parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        if self._peek_token_is(TokenType.SEMICOLON):
            self._next_token()
        return ast.LetStatement(token, name, value)

    def _parse_return_statement(self):
        token = self.cur_token

        self._next_token()
        return_value = self._parse_expression(Precedence.LOWEST)
        if return_value is None:
            return None

        if self._peek_token_is(TokenType.SEMICOLON):
            self._next_token()
        return ast.ReturnStatement(token, return_value)

    def _parse_expression_statement(self):
        token = self.cur_token

        expression = self._parse_expression(Precedence.LOWEST)
        if expression is None:
            return None

        if self._peek_token_is(TokenType.SEMICOLON):
            self._next_token()
        return ast.ExpressionStatement(token, expression)

    def _parse_block_statement(self):
        """Parses '{' <statement>* '}'. cur_token starts on '{' and ends on '}'."""
        token = self.cur_token
        self._next_token()

        self._depth += 1
        try:
            statements = self._parse_statements(TokenType.RBRACE)
        finally:
            self._depth -= 1

        if not self._cur_token_is(TokenType.RBRACE):
            self._error(f"expected {TokenType.RBRACE}, got {self.cur_token.kind} instead", self.cur_token)
            return None
        return ast.BlockStatement(token, tuple(statements))

    # expressions

    def _parse_expression(self, precedence):
        prefix = self._prefix_parse_fns.get(self.cur_token.kind)
        if prefix is None:
            self._no_prefix_parse_fn_error(self.cur_token)
            return None

        left = prefix()
        while left is not None and not self._peek_token_is(TokenType.SEMICOLON) and precedence < self._peek_precedence():
            infix = self._infix_parse_fns[self.peek_token.kind]
            self._next_token()
            left = infix(left)
        return left

    def _parse_identifier(self):
        return ast.Identifier(self.cur_token, self.cur_token.literal)

    def _parse_integer_literal(self):
        value = int(self.cur_token.literal)
        if not INT64_MIN <= value <= INT64_MAX:
            self._error(f"could not parse {self.cur_token.literal} as integer", self.cur_token)
            return None
        return ast.IntegerLiteral(self.cur_token, value)

    def _parse_boolean(self):
        return ast.Boolean(self.cur_token, self._cur_token_is(TokenType.TRUE))

    def _parse_prefix_expression(self):
        token = self.cur_token

        self._next_token()
        right = self._parse_expression(Precedence.PREFIX)
        if right is None:
            return None
        return ast.PrefixExpression(token, token.literal, right)

    def _parse_infix_expression(self, left):
        token = self.cur_token
        precedence = self._cur_precedence()

        self._next_token()
        right = self._parse_expression(precedence)
        if right is None:
            return None
        return ast.InfixExpression(token, left, token.literal, right)

    def _parse_grouped_expression(self):
        self._next_token()

        expression = self._parse_expression(Precedence.LOWEST)
        if expression is None or not self._expect_peek(TokenType.RPAREN):
            return None
        return expression

    def _parse_if_expression(self):
        token = self.cur_token

        if not self._expect_peek(TokenType.LPAREN):
            return None

        self._next_token()
        condition = self._parse_expression(Precedence.LOWEST)
        if condition is None or not self._expect_peek(TokenType.RPAREN):
            return None

        if not self._expect_peek(TokenType.LBRACE):
            return None
        consequence = self._parse_block_statement()
        if consequence is None:
            return None

        alternative = None
        if self._peek_token_is(TokenType.ELSE):
            self._next_token()

            if not self._expect_peek(TokenType.LBRACE):
                return None
            alternative = self._parse_block_statement()
            if alternative is None:
                return None

        return ast.IfExpression(token, condition, consequence, alternative)

    def _parse_function_literal(self):
        token = self.cur_token

        if not self._expect_peek(TokenType.LPAREN):
            return None

        parameters = self._parse_function_parameters()
        if parameters is None or not self._expect_peek(TokenType.LBRACE):
            return None

        body = self._parse_block_statement()
        if body is None:
            return None
        return ast.FunctionLiteral(token, tuple(parameters), body)

    def _parse_function_parameters(self):
        """Parses a possibly empty, comma separated identifier list. cur_token starts on '(' and ends on ')'."""
        parameters = []

        if self._peek_token_is(TokenType.RPAREN):
            self._next_token()
            return parameters

        if not self._expect_peek(TokenType.IDENT):
            return None
        parameters.append(ast.Identifier(self.cur_token, self.cur_token.literal))

        while self._peek_token_is(TokenType.COMMA):
            self._next_token()
            if not self._expect_peek(TokenType.IDENT):
                return None
            parameters.append(ast.Identifier(self.cur_token, self.cur_token.literal))

        if not self._expect_peek(TokenType.RPAREN):
            return None
        return parameters

    def _parse_call_expression(self, function):
        token = self.cur_token

        arguments = self._parse_call_arguments()
        if arguments is None:
            return None
        return ast.CallExpression(token, function, tuple(arguments))

    def _parse_call_arguments(self):
        """Parses a possibly empty, comma separated expression list. cur_token starts on '(' and ends on ')'."""
        arguments = []

        if self._peek_token_is(TokenType.RPAREN):
            self._next_token()
            return arguments

        self._next_token()
        argument = self._parse_expression(Precedence.LOWEST)
        if argument is None:
            return None
        arguments.append(argument)

        while self._peek_token_is(TokenType.COMMA):
            self._next_token()
            self._next_token()
            argument = self._parse_expression(Precedence.LOWEST)
            if argument is None:
                return None
            arguments.append(argument)

        if not self._expect_peek(TokenType.RPAREN):
            return None
        return arguments


def parse(source):
    """Parses source text. Returns (Program, list of ParseErrors); an empty list means a clean parse."""
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    return program, parser.errors
