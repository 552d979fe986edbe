import unittest

from monkey.core import ast
from monkey.core.parser import parse
from monkey.core.token import Token, TokenKind


def ident(name):
    return ast.Identifier(Token(TokenKind.IDENT, name), name)


def integer(value):
    return ast.IntegerLiteral(Token(TokenKind.INT, str(value)), value)


class ASTTestCase(unittest.TestCase):

    def test_str(self):
        program = ast.Program([
            ast.LetStatement(Token(TokenKind.LET, "let"), ident("myVar"), ident("anotherVar")),
        ])
        self.assertEqual("let myVar = anotherVar", str(program))
        self.assertEqual("let", program.token_literal())

    def test_render_nodes(self):
        lbrace = Token(TokenKind.LBRACE, "{")
        body = ast.BlockStatement(lbrace, [
            ast.ExpressionStatement(Token(TokenKind.IDENT, "x"), ident("x")),
        ])
        cases = [
            (ast.StringLiteral(Token(TokenKind.STRING, "hi"), "hi"), '"hi"'),
            (ast.Boolean(Token(TokenKind.TRUE, "true"), True), "true"),
            (ast.PrefixExpression(Token(TokenKind.MINUS, "-"), "-", integer(5)), "(-5)"),
            (ast.InfixExpression(Token(TokenKind.PLUS, "+"), integer(1), "+", integer(2)), "(1 + 2)"),
            (ast.ArrayLiteral(Token(TokenKind.LBRACKET, "["), [integer(1), integer(2)]), "[1, 2]"),
            (ast.ArrayLiteral(Token(TokenKind.LBRACKET, "[")), "[]"),
            (ast.HashLiteral(lbrace, [(ast.StringLiteral(Token(TokenKind.STRING, "a"), "a"), integer(1))]),
             '{"a": 1}'),
            (ast.IndexExpression(Token(TokenKind.LBRACKET, "["), ident("a"), integer(0)), "(a[0])"),
            (ast.CallExpression(Token(TokenKind.LPAREN, "("), ident("f"), [integer(1), ident("y")]), "f(1, y)"),
            (ast.FunctionLiteral(Token(TokenKind.FUNCTION, "fn"), [ident("x")], body), "fn(x) { x }"),
            (ast.IfExpression(Token(TokenKind.IF, "if"), ident("c"), body), "if (c) { x }"),
            (ast.IfExpression(Token(TokenKind.IF, "if"), ident("c"), body, ast.BlockStatement(lbrace)),
             "if (c) { x } else { }"),
            (ast.ReturnStatement(Token(TokenKind.RETURN, "return")), "return"),
            (ast.ReturnStatement(Token(TokenKind.RETURN, "return"), integer(1)), "return 1"),
            (ast.ExpressionStatement(Token(TokenKind.ILLEGAL, "@")), ""),
            (ast.Program(), ""),
        ]
        for node, expected in cases:
            self.assertEqual(expected, str(node), type(node).__name__)

    def test_missing_children(self):
        # sub-nodes that failed to parse are None
        node = ast.InfixExpression(Token(TokenKind.PLUS, "+"), integer(1), "+")
        self.assertEqual("(1 + )", str(node))
        self.assertEqual([integer(1), None], node.nodes)
        self.assertEqual("InfixExpression(expr='(1 + )', nodes=[\n    IntegerLiteral(expr='1')\n])", node.display())

    def test_nodes(self):
        program, __ = parse("let f = fn(a, b) { a[b] }; f([1], 0)")
        let, call = program.statements
        self.assertEqual([let, call], program.nodes)
        self.assertEqual(["f", "fn(a, b) { (a[b]) }"], [str(node) for node in let.nodes])

        fn = let.value
        self.assertEqual(["a", "b", "{ (a[b]) }"], [str(node) for node in fn.nodes])
        self.assertEqual(["f", "[1]", "0"], [str(node) for node in call.expression.nodes])

        self.assertEqual([], ident("x").nodes)
        self.assertEqual("", ast.Program().token_literal())

    def test_display(self):
        program, __ = parse("let x = 5;")
        self.assertEqual("Program(expr='let x = 5', nodes=[\n"
                         "    LetStatement(expr='let x = 5', nodes=[\n"
                         "        Identifier(expr='x'),\n"
                         "        IntegerLiteral(expr='5')\n"
                         "    ])\n"
                         "])", program.display())

        self.assertEqual("Boolean(expr='false')", parse("false")[0].statements[0].expression.display())

    def test_abstract(self):
        should_be_abstract = [ast.Node, ast.Statement, ast.Expression]
        for cls in should_be_abstract:
            with self.assertRaises(TypeError):
                cls()


if __name__ == '__main__':
    unittest.main()
