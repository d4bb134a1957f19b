import contextlib
import io
import os
import re
import tempfile
import unittest

from monkey.lang.error import ErrorHandler
from monkey.lang.session import Session
from monkey.lang.shell import Shell
from monkey.main import greeting, main


def plain(text):
    return re.sub(r"\x1b\[[0-9;]*m", "", text)


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        self.out = io.StringIO()
        self.shell = Shell(Session(ErrorHandler(fatal=False), Session.SH_FILE, cmd_line=True), stdout=self.out)

    def test_evaluates_lines(self):
        self.shell.onecmd("let x = 2")
        self.shell.onecmd("x + 1")
        self.assertEqual("3\n", self.out.getvalue())

    def test_line_continuation(self):
        self.shell.onecmd("let f = fn(x) {")
        self.assertEqual(Shell.secondary_prompt, self.shell.prompt)

        self.shell.onecmd("  x * 2")
        self.shell.onecmd("};")
        self.assertEqual(Shell._tmp_prompt, self.shell.prompt)

        self.shell.onecmd("f(4)")
        self.assertEqual("8\n", self.out.getvalue())

    def test_errors_do_not_stop_shell(self):
        errors = io.StringIO()
        with contextlib.redirect_stdout(errors):
            self.shell.onecmd("let a = ;")
            self.shell.onecmd("a")
            self.shell.onecmd("1 + true")
        self.shell.onecmd("\"still\" + \" here\"")

        self.assertIn("parser errors:", plain(errors.getvalue()))
        self.assertIn("identifier not found: a", plain(errors.getvalue()))
        self.assertIn("type mismatch: INTEGER + BOOLEAN", plain(errors.getvalue()))
        self.assertEqual("still here\n", self.out.getvalue())

    def test_continuation_lines_are_not_commands(self):
        self.shell.onecmd("let exit = 0; let tokens = 3; let f = fn() {")
        self.assertFalse(self.shell.onecmd("exit"))
        self.assertFalse(self.shell.onecmd("tokens"))
        self.assertEqual(Shell.secondary_prompt, self.shell.prompt)

        self.shell.onecmd("};")
        self.assertEqual(Shell._tmp_prompt, self.shell.prompt)

        self.shell.onecmd("f()")
        self.assertEqual("3\n", self.out.getvalue())

    def test_tokens(self):
        self.shell.onecmd("tokens 1 + x")
        expected = "INT '1' 1:1\n+ '+' 1:3\nIDENT 'x' 1:5\nEOF '' 1:6\n"
        self.assertEqual(expected, self.out.getvalue())

    def test_ast(self):
        self.shell.onecmd("ast -1")
        expected = ("Program(expr='(-1)', nodes=[\n"
                    "    ExpressionStatement(expr='(-1)', nodes=[\n"
                    "        PrefixExpression(expr='(-1)', nodes=[\n"
                    "            IntegerLiteral(expr='1')\n"
                    "        ])\n"
                    "    ])\n"
                    "])\n")
        self.assertEqual(expected, self.out.getvalue())

    def test_exit(self):
        self.assertTrue(self.shell.onecmd("exit"))
        self.assertTrue(self.shell.onecmd("EOF"))

    def test_empty_line(self):
        self.assertFalse(self.shell.onecmd(""))
        self.assertEqual("", self.out.getvalue())


class MainTestCase(unittest.TestCase):

    def test_greeting(self):
        self.assertEqual("Hello Alice! This is the Monkey programming language!\nFeel free to type in commands",
                         greeting("alice"))

    def run_file(self, source):
        with tempfile.NamedTemporaryFile("w", suffix=".mk", delete=False) as file:
            file.write(source)
        out = io.StringIO()
        try:
            with contextlib.redirect_stdout(out):
                main([file.name])
        finally:
            os.remove(file.name)
        return plain(out.getvalue())

    def test_run_file(self):
        output = self.run_file("let a = [1, 2, 3];\nputs(len(a));\nlast(a) * 10\n")
        self.assertEqual("3\n30\n", output)

    def test_run_file_error_is_fatal(self):
        with self.assertRaises(SystemExit) as ctx:
            self.run_file("let a = 1;\na + \"b\"\n")
        self.assertEqual(1, ctx.exception.code)


if __name__ == '__main__':
    unittest.main()
