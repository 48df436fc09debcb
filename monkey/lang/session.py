"""Session control for the Monkey interpreter: parses and evaluates source, either a whole file or line by line from the
shell. One global Environment lives as long as the session, so bindings made on one shell line are visible on the next.
"""

import sys

from monkey.lang.error import GenericException
from monkey.runtime.environment import Environment
from monkey.runtime.evaluator import evaluate
from monkey.runtime.objects import is_error
from monkey.syntax.ast import LetStatement
from monkey.syntax.parser import parse


class Session:
    """Governs a Monkey session, with control over the global scope."""
    SH_FILE = "<in>"  # command-line interpreter filename
    RECURSION_LIMIT = 10 ** 4  # Python frames; a Monkey call takes about six

    def __init__(self, error_handler, path, cmd_line, echo_ast=False, recursion_limit=RECURSION_LIMIT):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.echo_ast = echo_ast  # whether to print each program before evaluating it

        self.env = Environment()  # global scope
        self.to_exec = {}         # dict of line num: (source, Program) to evaluate
        self.results = []         # objects produced by run, oldest first

        sys.setrecursionlimit(recursion_limit)  # bounds Monkey call depth

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    source = file.read()
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            self.add(source, 1)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line):
        """Strips trailing whitespace from a line of shell input. Returns the line and whether it leaves a brace or
        parenthesis open, in which case the next line continues it.
        """
        line = line.rstrip()
        return line, line.count("{") > line.count("}") or line.count("(") > line.count(")")

    def add(self, source, line_num):
        """Parses source, starting at line line_num, and queues the resulting Program. Evaluation is delayed until run is
        called. Raises a GenericException listing every parse error, if any.
        """
        if not source.strip():
            return

        program, errors = parse(source)
        if errors:
            lines = source.splitlines()
            first = errors[0]
            error_line = lines[first.line - 1] if first.line <= len(lines) else lines[-1]
            self.error_handler.register_line(self.path, error_line, line_num + first.line - 1)
            raise GenericException.from_parse_errors(errors, source)

        self.to_exec[line_num] = (source, program)

    def run(self):
        """Evaluates queued programs in order, appending their values to self.results. A program whose last statement is
        a let statement produces nothing to show. Raises a GenericException if a program evaluates to an Error.
        """
        for line_num, (source, program) in list(self.to_exec.items()):
            self.error_handler.register_line(self.path, source.splitlines()[0], line_num)

            if self.echo_ast:
                print(program)

            try:
                result = evaluate(program, self.env)
            finally:
                del self.to_exec[line_num]

            if is_error(result):
                raise GenericException(GenericException.escape(result.message), diagnosis=False)

            if program.statements and not isinstance(program.statements[-1], LetStatement):
                self.results.append(result)

            self.error_handler.remove_line(self.path)

    def pop(self):
        """Removes and returns the most recent result."""
        return self.results.pop()
