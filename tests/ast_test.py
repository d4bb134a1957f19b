import unittest

from monkey.core import ast, token
from monkey.core.parser import parse
from monkey.core.token import Token


class NodeTestCase(unittest.TestCase):

    def test_str(self):
        program = ast.Program([
            ast.LetStatement(
                Token(token.LET, "let"),
                ast.Identifier(Token(token.IDENT, "myVar"), "myVar"),
                ast.Identifier(Token(token.IDENT, "anotherVar"), "anotherVar"),
            ),
        ])
        self.assertEqual("let myVar = anotherVar;", str(program))

    def test_rendering(self):
        cases = {
            "return x": "return x;",
            "return;": "return;",
            "\"a b\"": "\"a b\"",
            "if (x) { y } else { z }": "ifx yelse z",
            "fn(a, b) { a + b }": "fn(a, b) (a + b)",
            "f(1, [2, 3])": "f(1, [2, 3])",
            "{\"a\": 1, 2: b}": "{\"a\":1, 2:b}",
            "a[0]": "(a[0])",
        }
        for case, expected in cases.items():
            program, errors = parse(case)
            self.assertEqual([], errors, case)
            self.assertEqual(expected, str(program), case)

    def test_token_literal(self):
        program, __ = parse("let x = 1; fn(y) { y }")
        let_stmt, fn_stmt = program.statements
        self.assertEqual("let", let_stmt.token_literal())
        self.assertEqual("fn", fn_stmt.expression.token_literal())
        self.assertEqual("let", program.token_literal())
        self.assertEqual("", ast.Program([]).token_literal())

    def test_nodes(self):
        program, __ = parse("if (a) { b } else { c }")
        expression = program.statements[0].expression
        self.assertEqual(["a", "b", "c"], [str(node) for node in expression.nodes])

        program, __ = parse("{1: 2, 3: 4}")
        self.assertEqual(["1", "2", "3", "4"], [str(node) for node in program.statements[0].expression.nodes])

    def test_display(self):
        program, __ = parse("1 + 2")
        expected = ("Program(expr='(1 + 2)', nodes=[\n"
                    "    ExpressionStatement(expr='(1 + 2)', nodes=[\n"
                    "        InfixExpression(expr='(1 + 2)', nodes=[\n"
                    "            IntegerLiteral(expr='1'),\n"
                    "            IntegerLiteral(expr='2')\n"
                    "        ])\n"
                    "    ])\n"
                    "])")
        self.assertEqual(expected, program.display())

    def test_repr(self):
        program, __ = parse("-x")
        self.assertEqual("PrefixExpression('(-x)')", repr(program.statements[0].expression))

    def test_nodes_keep_token(self):
        program, __ = parse("a +\n b")
        expression = program.statements[0].expression
        self.assertEqual((token.PLUS, 1, 3), (expression.token.kind, expression.token.line, expression.token.column))


if __name__ == '__main__':
    unittest.main()
