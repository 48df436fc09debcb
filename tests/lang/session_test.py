import io
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stdout

from monkey.lang.error import ErrorHandler, GenericException
from monkey.lang.session import Session
from monkey.runtime.objects import Integer


def shell_session(**kwargs):
    return Session(ErrorHandler(fatal=False), Session.SH_FILE, cmd_line=True, **kwargs)


class SessionTestCase(unittest.TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmp_dir.cleanup()

    def write(self, source):
        path = os.path.join(self.tmp_dir.name, "program.mk")
        with open(path, "w") as file:
            file.write(source)
        return path

    def test_preprocess_line(self):
        cases = {
            "let x = 5;   ": ("let x = 5;", False),
            "let f = function(x) {": ("let f = function(x) {", True),
            "add(1,": ("add(1,", True),
            "}": ("}", False),
            "if (x) { 1 } else { 2 }": ("if (x) { 1 } else { 2 }", False),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, Session.preprocess_line(case), case)

    def test_bindings_persist(self):
        sess = shell_session()

        sess.add("let x = 5;", 1)
        sess.run()
        self.assertEqual([], sess.results)

        sess.add("x + 1", 2)
        sess.run()
        self.assertEqual(Integer(6), sess.pop())
        self.assertEqual({}, sess.to_exec)

    def test_blank_source(self):
        sess = shell_session()
        sess.add("   ", 1)
        self.assertEqual({}, sess.to_exec)

    def test_parse_errors(self):
        sess = shell_session()
        with self.assertRaises(GenericException) as context:
            sess.add("let = 5; let 6;", 3)

        self.assertIn("parser errors:", context.exception.msg)
        self.assertIn("expected next token to be IDENT, got = instead", context.exception.msg)
        self.assertIn("expected next token to be IDENT, got INT instead", context.exception.msg)
        self.assertEqual(("let = 5; let 6;", 3), sess.error_handler.traceback[Session.SH_FILE])
        self.assertEqual({}, sess.to_exec)

    def test_runtime_error(self):
        sess = shell_session()
        sess.add("foobar;", 1)
        with self.assertRaises(GenericException) as context:
            sess.run()
        self.assertIn("identifier not found: foobar", context.exception.msg)
        self.assertEqual({}, sess.to_exec)

    def test_echo_ast(self):
        sess = shell_session(echo_ast=True)
        sess.add("1 + 2 * 3", 1)

        out = io.StringIO()
        with redirect_stdout(out):
            sess.run()
        self.assertEqual("(1 + (2 * 3))\n", out.getvalue())
        self.assertEqual(Integer(7), sess.pop())

    def test_deep_recursion(self):
        sess = shell_session()
        sess.add("let count = function(n) { if (n == 0) { return 0; } 1 + count(n - 1) };", 1)
        sess.add("count(1500)", 2)
        sess.run()
        self.assertEqual(Integer(1500), sess.pop())
        self.assertEqual(Session.RECURSION_LIMIT, sys.getrecursionlimit())

    def test_file(self):
        path = self.write("let fib = function(n) {\n  if (n < 2) { return n; }\n  fib(n - 1) + fib(n - 2)\n};\nfib(10);\n")
        sess = Session(ErrorHandler(), path, cmd_line=False)
        sess.run()
        self.assertEqual([Integer(55)], sess.results)
        self.assertTrue(sess.error_handler.fatal)

    def test_file_parse_error_line(self):
        path = self.write("let a = 1;\nlet b = 2;\nlet = 3;\n")
        handler = ErrorHandler()
        with self.assertRaises(GenericException):
            Session(handler, path, cmd_line=False)
        self.assertEqual(("let = 3;", 3), handler.traceback[path])

    def test_missing_file(self):
        path = os.path.join(self.tmp_dir.name, "missing.mk")
        self.assertRaises(GenericException, Session, ErrorHandler(), path, False)

    def test_reserved_filename(self):
        self.assertRaises(GenericException, Session, ErrorHandler(), Session.SH_FILE, False)


if __name__ == '__main__':
    unittest.main()
