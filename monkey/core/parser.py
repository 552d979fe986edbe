"""Parser for the Monkey language: a Pratt (precedence climbing) parser over the Lexer's token stream.

Each token kind may have a prefix parse function (token starts an expression: literals, identifiers, unary operators,
grouping, `if`, `fn`, array/hash literals) and an infix parse function (token continues an expression: binary
operators, `(` for calls, `[` for indexing). parse_expression(precedence) parses one prefix expression, then keeps
folding infix operators into it for as long as the next operator binds tighter than precedence.

The parser never raises. Every unmet expectation appends a message to Parser.errors and the offending sub-parse
returns None; callers must check errors before evaluating the resulting Program.
"""

import enum

from monkey.core import ast
from monkey.core.lexer import Lexer
from monkey.core.token import TokenKind


MAX_INT = 2 ** 63 - 1  # integer literals are signed 64-bit


class Precedence(enum.IntEnum):
    LOWEST = 1
    EQUALS = 2       # == !=
    LESSGREATER = 3  # < >
    SUM = 4          # + -
    PRODUCT = 5      # * /
    PREFIX = 6       # -x !x
    CALL = 7         # f(x)
    INDEX = 7        # a[x], alias of CALL


PRECEDENCES = {
    TokenKind.EQ: Precedence.EQUALS,
    TokenKind.NOT_EQ: Precedence.EQUALS,
    TokenKind.LT: Precedence.LESSGREATER,
    TokenKind.GT: Precedence.LESSGREATER,
    TokenKind.PLUS: Precedence.SUM,
    TokenKind.MINUS: Precedence.SUM,
    TokenKind.ASTERISK: Precedence.PRODUCT,
    TokenKind.SLASH: Precedence.PRODUCT,
    TokenKind.LPAREN: Precedence.CALL,
    TokenKind.LBRACKET: Precedence.INDEX,
}


class Parser:
    """Builds a Program from a Lexer. Keeps a two-token window (current and peek) over the token stream."""

    def __init__(self, lexer):
        self.lexer = lexer
        self.errors = []

        self.cur_token = None
        self.peek_token = None

        self.prefix_parse_fns = {}
        self.infix_parse_fns = {}

        self._register_prefix(TokenKind.IDENT, self.parse_identifier)
        self._register_prefix(TokenKind.INT, self.parse_integer_literal)
        self._register_prefix(TokenKind.STRING, self.parse_string_literal)
        self._register_prefix(TokenKind.TRUE, self.parse_boolean)
        self._register_prefix(TokenKind.FALSE, self.parse_boolean)
        self._register_prefix(TokenKind.BANG, self.parse_prefix_expression)
        self._register_prefix(TokenKind.MINUS, self.parse_prefix_expression)
        self._register_prefix(TokenKind.LPAREN, self.parse_grouped_expression)
        self._register_prefix(TokenKind.IF, self.parse_if_expression)
        self._register_prefix(TokenKind.FUNCTION, self.parse_function_literal)
        self._register_prefix(TokenKind.LBRACKET, self.parse_array_literal)
        self._register_prefix(TokenKind.LBRACE, self.parse_hash_literal)

        for kind in (TokenKind.EQ, TokenKind.NOT_EQ, TokenKind.LT, TokenKind.GT,
                     TokenKind.PLUS, TokenKind.MINUS, TokenKind.ASTERISK, TokenKind.SLASH):
            self._register_infix(kind, self.parse_infix_expression)
        self._register_infix(TokenKind.LPAREN, self.parse_call_expression)
        self._register_infix(TokenKind.LBRACKET, self.parse_index_expression)

        # fill both cur_token and peek_token
        self._next_token()
        self._next_token()

    def _register_prefix(self, kind, fn):
        self.prefix_parse_fns[kind] = fn

    def _register_infix(self, kind, fn):
        self.infix_parse_fns[kind] = fn

    def _next_token(self):
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def _cur_is(self, kind):
        return self.cur_token.kind is kind

    def _peek_is(self, kind):
        return self.peek_token.kind is kind

    def _expect_peek(self, kind):
        """Advances if the peek token is of the given kind. Otherwise records an error and stays put."""
        if self._peek_is(kind):
            self._next_token()
            return True
        self._peek_error(kind)
        return False

    def _peek_precedence(self):
        return PRECEDENCES.get(self.peek_token.kind, Precedence.LOWEST)

    def _cur_precedence(self):
        return PRECEDENCES.get(self.cur_token.kind, Precedence.LOWEST)

    def _peek_error(self, kind):
        self.errors.append(f"Parser expected {kind} but got {self.peek_token.kind}")

    def _no_prefix_parse_fn_error(self, kind):
        self.errors.append(f"no prefix parse function for {kind} found")

    def parse_program(self):
        """Parses statements until EOF. Statements that fail to parse are dropped."""
        program = ast.Program()
        while not self._cur_is(TokenKind.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                program.statements.append(stmt)
            self._next_token()
        return program

    # statements

    def parse_statement(self):
        if self._cur_is(TokenKind.LET):
            return self.parse_let_statement()
        elif self._cur_is(TokenKind.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self):
        token = self.cur_token
        if not self._expect_peek(TokenKind.IDENT):
            return None

        name = ast.Identifier(self.cur_token, self.cur_token.literal)
        if not self._expect_peek(TokenKind.ASSIGN):
            return None

        self._next_token()
        stmt = ast.LetStatement(token, name, self.parse_expression(Precedence.LOWEST))

        if self._peek_is(TokenKind.SEMICOLON):
            self._next_token()
        return stmt

    def parse_return_statement(self):
        stmt = ast.ReturnStatement(self.cur_token)

        if not any(self._peek_is(kind) for kind in (TokenKind.SEMICOLON, TokenKind.RBRACE, TokenKind.EOF)):
            self._next_token()
            stmt.return_value = self.parse_expression(Precedence.LOWEST)

        if self._peek_is(TokenKind.SEMICOLON):
            self._next_token()
        return stmt

    def parse_expression_statement(self):
        stmt = ast.ExpressionStatement(self.cur_token, self.parse_expression(Precedence.LOWEST))

        if self._peek_is(TokenKind.SEMICOLON):
            self._next_token()
        return stmt

    def parse_block_statement(self):
        """Parses statements up to the closing brace. Expects cur_token to be the opening brace."""
        block = ast.BlockStatement(self.cur_token)
        self._next_token()

        while not self._cur_is(TokenKind.RBRACE) and not self._cur_is(TokenKind.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                block.statements.append(stmt)
            self._next_token()

        if self._cur_is(TokenKind.EOF):
            self.errors.append(f"Parser expected {TokenKind.RBRACE} but got {TokenKind.EOF}")
        return block

    # expressions

    def parse_expression(self, precedence):
        prefix = self.prefix_parse_fns.get(self.cur_token.kind)
        if prefix is None:
            self._no_prefix_parse_fn_error(self.cur_token.kind)
            return None
        left = prefix()

        while not self._peek_is(TokenKind.SEMICOLON) and precedence < self._peek_precedence():
            infix = self.infix_parse_fns.get(self.peek_token.kind)
            if infix is None:
                return left

            self._next_token()
            left = infix(left)

        return left

    def parse_expression_list(self, end):
        """Parses comma-separated expressions up to the end token. Returns None if end is missing."""
        exprs = []
        if self._peek_is(end):
            self._next_token()
            return exprs

        self._next_token()
        exprs.append(self.parse_expression(Precedence.LOWEST))
        while self._peek_is(TokenKind.COMMA):
            self._next_token()
            self._next_token()
            exprs.append(self.parse_expression(Precedence.LOWEST))

        if not self._expect_peek(end):
            return None
        return exprs

    def parse_identifier(self):
        return ast.Identifier(self.cur_token, self.cur_token.literal)

    def parse_integer_literal(self):
        literal = self.cur_token.literal
        value = int(literal)  # lexer only produces ASCII digits here
        if value > MAX_INT:
            self.errors.append(f'could not parse "{literal}" as integer')
            return None
        return ast.IntegerLiteral(self.cur_token, value)

    def parse_string_literal(self):
        return ast.StringLiteral(self.cur_token, self.cur_token.literal)

    def parse_boolean(self):
        return ast.Boolean(self.cur_token, self._cur_is(TokenKind.TRUE))

    def parse_prefix_expression(self):
        expr = ast.PrefixExpression(self.cur_token, self.cur_token.literal)
        self._next_token()
        expr.right = self.parse_expression(Precedence.PREFIX)
        return expr

    def parse_infix_expression(self, left):
        expr = ast.InfixExpression(self.cur_token, left, self.cur_token.literal)
        precedence = self._cur_precedence()
        self._next_token()
        expr.right = self.parse_expression(precedence)
        return expr

    def parse_grouped_expression(self):
        self._next_token()
        expr = self.parse_expression(Precedence.LOWEST)
        if not self._expect_peek(TokenKind.RPAREN):
            return None
        return expr

    def parse_if_expression(self):
        expr = ast.IfExpression(self.cur_token)
        if not self._expect_peek(TokenKind.LPAREN):
            return None

        self._next_token()
        expr.condition = self.parse_expression(Precedence.LOWEST)

        if not self._expect_peek(TokenKind.RPAREN):
            return None
        if not self._expect_peek(TokenKind.LBRACE):
            return None
        expr.consequence = self.parse_block_statement()

        if self._peek_is(TokenKind.ELSE):
            self._next_token()
            if not self._expect_peek(TokenKind.LBRACE):
                return None
            expr.alternative = self.parse_block_statement()

        return expr

    def parse_function_literal(self):
        expr = ast.FunctionLiteral(self.cur_token)
        if not self._expect_peek(TokenKind.LPAREN):
            return None

        parameters = self.parse_function_parameters()
        if parameters is None:
            return None
        expr.parameters = parameters

        if not self._expect_peek(TokenKind.LBRACE):
            return None
        expr.body = self.parse_block_statement()
        return expr

    def parse_function_parameters(self):
        """Parses `(a, b, ...)` into Identifiers. Expects cur_token to be the opening parenthesis."""
        identifiers = []
        if self._peek_is(TokenKind.RPAREN):
            self._next_token()
            return identifiers

        if not self._expect_peek(TokenKind.IDENT):
            return None
        identifiers.append(self.parse_identifier())

        while self._peek_is(TokenKind.COMMA):
            self._next_token()
            if not self._expect_peek(TokenKind.IDENT):
                return None
            identifiers.append(self.parse_identifier())

        if not self._expect_peek(TokenKind.RPAREN):
            return None
        return identifiers

    def parse_call_expression(self, function):
        token = self.cur_token
        arguments = self.parse_expression_list(TokenKind.RPAREN)
        if arguments is None:
            return None
        return ast.CallExpression(token, function, arguments)

    def parse_index_expression(self, left):
        expr = ast.IndexExpression(self.cur_token, left)
        self._next_token()
        expr.index = self.parse_expression(Precedence.LOWEST)
        if not self._expect_peek(TokenKind.RBRACKET):
            return None
        return expr

    def parse_array_literal(self):
        token = self.cur_token
        elements = self.parse_expression_list(TokenKind.RBRACKET)
        if elements is None:
            return None
        return ast.ArrayLiteral(token, elements)

    def parse_hash_literal(self):
        expr = ast.HashLiteral(self.cur_token)

        while not self._peek_is(TokenKind.RBRACE):
            self._next_token()
            key = self.parse_expression(Precedence.LOWEST)
            if not self._expect_peek(TokenKind.COLON):
                return None

            self._next_token()
            expr.pairs.append((key, self.parse_expression(Precedence.LOWEST)))

            if not self._peek_is(TokenKind.RBRACE) and not self._expect_peek(TokenKind.COMMA):
                return None

        if not self._expect_peek(TokenKind.RBRACE):
            return None
        return expr


def parse(source):
    """Tokenizes and parses source. Returns (Program, errors), where errors is a (possibly empty) list of strings."""
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    return program, parser.errors
