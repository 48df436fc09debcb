import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout

from monkey.lang.error import ErrorHandler
from monkey.lang.session import Session
from monkey.lang.shell import Shell
from monkey.main import main


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        self.shell = Shell(Session(ErrorHandler(), Session.SH_FILE, cmd_line=True))

    def run_lines(self, *lines):
        out = io.StringIO()
        with redirect_stdout(out):
            for line in lines:
                self.shell.onecmd(line)
        return out.getvalue()

    def test_session_is_not_fatal(self):
        self.assertFalse(self.shell.sess.error_handler.fatal)

    def test_evaluate(self):
        cases = {
            "1 + 2": "3\n",
            "let x = 2": "",
            "x * 3": "6\n",
            "!x": "false\n",
            "if (false) { 1 }": "null\n",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, self.run_lines(case), case)

    def test_line_continuation(self):
        output = self.run_lines("let add = function(a, b) {", "a + b", "};")
        self.assertEqual("", output)
        self.assertEqual(self.shell._tmp_prompt, self.shell.prompt)

        self.assertEqual("5\n", self.run_lines("add(2,", "3)"))

    def test_continuation_prompt(self):
        self.run_lines("if (true) {")
        self.assertEqual(self.shell.secondary_prompt, self.shell.prompt)
        self.assertEqual("7\n", self.run_lines("7 }"))

    def test_errors_do_not_stop_shell(self):
        output = self.run_lines("5 + true;", "let = 1;", "10")
        self.assertIn("type mismatch: INTEGER + BOOLEAN", output)
        self.assertIn("expected next token to be IDENT", output)
        self.assertTrue(output.endswith("10\n"))

    def test_tree(self):
        output = self.run_lines("tree 1 + 2")
        self.assertIn("ExpressionStatement('(1 + 2)', nodes=[", output)
        self.assertIn("    InfixExpression('(1 + 2)', nodes=[", output)

        output = self.run_lines("tree let = 1;")
        self.assertIn("warning: ", output)

    def test_exit(self):
        self.assertTrue(self.shell.onecmd("exit"))
        out = io.StringIO()
        with redirect_stdout(out):
            self.assertTrue(self.shell.onecmd("EOF"))

    def test_help(self):
        self.assertIn("Monkey interpreter", self.run_lines("help"))

    def test_bound_names_are_not_commands(self):
        self.run_lines("let help = 3", "let tree = 2", "let exit = 1")
        cases = {
            "help + 1": "4\n",
            "tree * 2": "4\n",
            "exit": "1\n",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, self.run_lines(case), case)

    def test_commands_inside_continuation(self):
        self.run_lines("let f = function(exit) {")
        self.assertEqual("", self.run_lines("exit", "};"))
        self.assertEqual("9\n", self.run_lines("f(9)"))

    def test_emptyline(self):
        self.run_lines("1 + 1")
        self.assertEqual("", self.run_lines(""))


class MainTestCase(unittest.TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmp_dir.cleanup()

    def write(self, source):
        path = os.path.join(self.tmp_dir.name, "main.mk")
        with open(path, "w") as file:
            file.write(source)
        return path

    def test_file(self):
        path = self.write("let newAdder = function(x) { function(y) { x + y }; };\nnewAdder(2)(3);\n")
        out = io.StringIO()
        with redirect_stdout(out):
            main([path])
        self.assertEqual("5\n", out.getvalue())

    def test_ast_flag(self):
        path = self.write("-1 * 2")
        out = io.StringIO()
        with redirect_stdout(out):
            main([path, "--ast"])
        self.assertEqual("((-1) * 2)\n-2\n", out.getvalue())

    def test_errors_exit(self):
        cases = ["let = 5;", "foobar;"]
        for case in cases:
            path = self.write(case)
            out = io.StringIO()
            with redirect_stdout(out), self.assertRaises(SystemExit) as context:
                main([path])
            self.assertEqual(1, context.exception.code, case)


if __name__ == '__main__':
    unittest.main()
