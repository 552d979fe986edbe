import contextlib
import io
import re
import unittest

from monkey.core.objects import Error
from monkey.lang.error import ErrorHandler, EvaluationFailure, GenericException, TracebackEntry


ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")


def capture(fn, *args, **kwargs):
    """Calls fn and returns its standard output with color codes stripped."""
    out = io.StringIO()
    with contextlib.redirect_stdout(out):
        fn(*args, **kwargs)
    return ANSI_ESCAPE.sub("", out.getvalue())


class GenericExceptionTestCase(unittest.TestCase):

    def test_format(self):
        error = GenericException("'{}' failed: {}", ["main.mk", "division by zero"])
        self.assertEqual("'main.mk' failed: division by zero", str(error))
        self.assertEqual("'main.mk' failed: division by zero", ANSI_ESCAPE.sub("", error.msg))
        self.assertEqual(["main.mk", "division by zero"], error.exprs)
        self.assertFalse(error.internal)

    def test_single_expr(self):
        error = GenericException("'{}' could not be opened", "missing.mk")
        self.assertEqual("'missing.mk' could not be opened", str(error))
        self.assertEqual(["missing.mk"], error.exprs)

    def test_no_exprs(self):
        self.assertEqual("keyboard interrupt", str(GenericException("keyboard interrupt")))

    def test_evaluation_failure(self):
        failure = EvaluationFailure("main.mk", Error("identifier not found: x"))
        self.assertIsInstance(failure, GenericException)
        self.assertEqual("'main.mk' failed: identifier not found: x", str(failure))
        self.assertEqual(Error("identifier not found: x"), failure.error)


class ErrorHandlerTestCase(unittest.TestCase):

    def test_warn(self):
        output = capture(ErrorHandler().warn, "'{}' contains no statements", "empty.mk")
        self.assertEqual("warning: 'empty.mk' contains no statements\n", output)

    def test_throw_fatal(self):
        handler = ErrorHandler()
        with self.assertRaises(SystemExit) as context:
            capture(handler.throw, GenericException("boom"))
        self.assertEqual(1, context.exception.code)

    def test_throw_traceback(self):
        handler = ErrorHandler(fatal=False)
        handler.register_file("<in>")
        handler.register_line("<in>", "let x = y;", 3)

        output = capture(handler.throw, GenericException("boom"))
        self.assertEqual("  File '<in>', line 3:\n    let x = y;\nerror: boom\n", output)

        # lines are reset once reported
        self.assertEqual({"<in>": TracebackEntry()}, handler.traceback)
        self.assertEqual("error: boom\n", capture(handler.throw, GenericException("boom")))

    def test_throw_multiple_files(self):
        handler = ErrorHandler(fatal=False)
        handler.register_line("a.mk", "first", 1)
        handler.register_line("b.mk", "second", 2)

        output = capture(handler.throw, GenericException("boom", internal=True))
        self.assertTrue(output.startswith("Traceback:\n  File 'a.mk', line 1:\n    first\n"), output)
        self.assertTrue(output.endswith("[internal] error: boom\n"), output)

    def test_remove_line(self):
        handler = ErrorHandler(fatal=False)
        handler.register_line("<in>", "1 + 1", 1)
        handler.remove_line("<in>")
        self.assertEqual("error: boom\n", capture(handler.throw, GenericException("boom")))

    def test_context_suppresses_generic_exception(self):
        def body():
            with ErrorHandler(fatal=False):
                raise GenericException("'{}' could not be parsed", "bad.mk")

        self.assertEqual("error: 'bad.mk' could not be parsed\n", capture(body))

    def test_context_keyboard_interrupt(self):
        def body():
            with ErrorHandler(fatal=False):
                raise KeyboardInterrupt

        self.assertEqual("error: keyboard interrupt\n", capture(body))

    def test_context_recursion_error(self):
        def body():
            with ErrorHandler(fatal=False):
                raise RecursionError("maximum recursion depth exceeded")

        self.assertEqual("error: maximum recursion depth exceeded during evaluation\n", capture(body))

    def test_context_system_exit(self):
        with self.assertRaises(SystemExit):
            with ErrorHandler(fatal=False):
                raise SystemExit(0)

    def test_context_unknown_error(self):
        out = io.StringIO()
        with self.assertRaises(ValueError):
            with contextlib.redirect_stdout(out):
                with ErrorHandler(fatal=False):
                    raise ValueError("bad value")

        output = ANSI_ESCAPE.sub("", out.getvalue())
        self.assertEqual("[internal] error: unknown error: 'ValueError: bad value'\n", output)

    def test_context_no_error(self):
        with ErrorHandler() as handler:
            self.assertIsInstance(handler, ErrorHandler)


if __name__ == '__main__':
    unittest.main()
