import contextlib
import io
import re
import unittest

from monkey.lang.error import ErrorHandler, GenericException, escape


def plain(text):
    """Strips terminal color codes."""
    return re.sub(r"\x1b\[[0-9;]*m", "", text)


def captured(fn, *args, **kwargs):
    out = io.StringIO()
    with contextlib.redirect_stdout(out):
        fn(*args, **kwargs)
    return plain(out.getvalue())


class GenericExceptionTestCase(unittest.TestCase):

    def test_template(self):
        error = GenericException("'{}' could not be opened", "a.mk")
        self.assertEqual("'a.mk' could not be opened", plain(error.msg))
        self.assertEqual("a.mk", error.expr)
        self.assertEqual((0, 4), (error.start, error.end))

    def test_escape(self):
        error = GenericException(escape("expected next token to be {, got }"))
        self.assertEqual("expected next token to be {, got }", plain(error.msg))


class ErrorHandlerTestCase(unittest.TestCase):

    def test_diagnose(self):
        error = GenericException("bad", "let x 5", start=6, end=7)
        self.assertEqual("  let x 5\n        ^", plain(ErrorHandler.diagnose(error)))

        error = GenericException("bad", "abc + def", start=6, end=9)
        self.assertEqual("  abc + def\n        ^~~", plain(ErrorHandler.diagnose(error)))

    def test_non_fatal(self):
        def raise_error():
            with ErrorHandler(fatal=False):
                raise GenericException("boom", diagnosis=False)

        self.assertEqual("error: boom\n", captured(raise_error))

    def test_fatal(self):
        def raise_error():
            with ErrorHandler():
                raise GenericException("boom", diagnosis=False)

        with self.assertRaises(SystemExit) as ctx:
            captured(raise_error)
        self.assertEqual(1, ctx.exception.code)

    def test_recursion_error(self):
        def recurse():
            with ErrorHandler(fatal=False):
                raise RecursionError()

        self.assertEqual("error: maximum recursion depth exceeded\n", captured(recurse))

    def test_keyboard_interrupt(self):
        def interrupt():
            with ErrorHandler(fatal=False):
                raise KeyboardInterrupt()

        self.assertEqual("error: keyboard interrupt\n", captured(interrupt))

    def test_internal_error(self):
        def fail():
            with ErrorHandler(fatal=False):
                raise ValueError("bad {value}")

        out = io.StringIO()
        with self.assertRaises(ValueError), contextlib.redirect_stdout(out):
            fail()
        self.assertEqual("[internal] error: unknown error: 'ValueError: bad {value}'\n", plain(out.getvalue()))

    def test_system_exit_passes_through(self):
        with self.assertRaises(SystemExit):
            with ErrorHandler(fatal=False):
                raise SystemExit(0)

    def test_traceback(self):
        handler = ErrorHandler(fatal=False)
        handler.register_line("a.mk", "let a = b;", 1)
        handler.register_line("<stdin>", "a", 3)

        report = plain(handler.format(GenericException("identifier not found: b", diagnosis=False)))
        expected = ("Traceback:\n"
                    "  File 'a.mk', line 1:\n"
                    "    let a = b;\n"
                    "  File '<stdin>', line 3:\n"
                    "    a\n"
                    "error: identifier not found: b")
        self.assertEqual(expected, report)

    def test_traceback_reset_after_error(self):
        handler = ErrorHandler(fatal=False)
        handler.register_line("<stdin>", "1 + true", 1)
        captured(handler.throw, GenericException("type mismatch: INTEGER + BOOLEAN", diagnosis=False))
        self.assertEqual({"<stdin>": (None, None)}, handler.traceback)

    def test_warn(self):
        handler = ErrorHandler(fatal=False)
        handler.register_line("<stdin>", "let len = 1;", 4)
        output = captured(handler.warn, "'{}' shadows a built-in function", "len", diagnosis=False)
        self.assertEqual("<stdin>:4:5: warning: 'len' shadows a built-in function\n", output)


if __name__ == '__main__':
    unittest.main()
