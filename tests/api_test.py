import unittest

from monkey.core import api, token
from monkey.core.object import ERROR_OBJ


class ApiTestCase(unittest.TestCase):

    def test_tokenize(self):
        tokens = api.tokenize("let a = 1;")
        self.assertEqual([token.LET, token.IDENT, token.ASSIGN, token.INT, token.SEMICOLON, token.EOF],
                         [tok.kind for tok in tokens])

    def test_parse(self):
        program, errors = api.parse("1 + 2 + 3")
        self.assertEqual([], errors)
        self.assertEqual("((1 + 2) + 3)", str(program))

        __, errors = api.parse("let 1")
        self.assertEqual(["expected next token to be IDENT, got INT instead"], errors)

    def test_evaluate_in_session_environment(self):
        env = api.new_environment()

        program, __ = api.parse("let greeting = \"hi\";")
        api.evaluate(program, env)

        program, __ = api.parse("greeting + \"!\"")
        self.assertEqual("hi!", api.evaluate(program, env).inspect())

        program, __ = api.parse("greeting - 1")
        result = api.evaluate(program, env)
        self.assertEqual(ERROR_OBJ, result.type())
        self.assertEqual("ERROR: type mismatch: STRING - INTEGER", result.inspect())


if __name__ == '__main__':
    unittest.main()
