"""Error handling for the Monkey interpreter host. There are three kinds of error here:

- ParseError: structured data collected by the parser. Never raised.
- Error objects (monkey.runtime.objects.Error): Monkey runtime faults, returned by the evaluator like any other value.
- GenericException: raised by the host (session/shell) to report either of the above, or an internal fault. If any
  other type of exception makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys
from dataclasses import dataclass

from termcolor import colored


@dataclass(frozen=True)
class ParseError:
    """A syntax fault found by the parser, with the 1-based position of the offending token."""
    message: str
    line: int
    column: int

    def __str__(self):
        return f"{self.line}:{self.column}: {self.message}"


class GenericException(Exception):
    """Templates an error/warning message so that it can be thrown by ErrorHandler. Each '{}' in msg is filled with the
    corresponding entry of exprs, highlighted in bold.
    """

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]  # exprs[0] should be the offending expr that caused the error
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal
        super().__init__(self.msg)

    @staticmethod
    def escape(text):
        """Escapes braces so that text (e.g. Monkey source) can be used as a msg template."""
        return text.replace("{", "{{").replace("}", "}}")

    @classmethod
    def from_parse_errors(cls, errors, source):
        """Builds a single exception listing every ParseError in errors. The first error is diagnosed against its line
        in source.
        """
        first = errors[0]
        lines = source.splitlines() or [""]
        line = lines[min(first.line, len(lines)) - 1]

        msg = "parser errors:" + "".join(f"\n\t{cls.escape(str(error))}" for error in errors)
        return cls(msg, line, start=first.column - 1, end=first.column)


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise Monkey host errors/warnings instead."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session add/run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after successful Session add/run."""
        self.traceback[path] = (None, None)

    @staticmethod
    def diagnose(error, warning=False):
        """Returns offending part of error.expr highlighted and bolded."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def warn(self, *args, **kwargs):
        """Generates and prints warning message based on args."""
        error = GenericException(*args, **kwargs)

        location = ""
        for file, (line, line_num) in self.traceback.items():
            if line is not None:
                location = f"{file}:{line_num}: "

        error_msg = colored(location, attrs=["bold"]) if location else ""
        error_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error, warning=True))

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (line, line_num) representing origination of error.
        """
        error_msg = ""
        lines = 0
        for file, (line, line_num) in self.traceback.items():  # assumes dict is insertion-ordered
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"
                lines += 1

        if lines > 1:
            error_msg = "Traceback:\n" + error_msg

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)
        for path in self.traceback:  # if error occurred, reset traceback (no need if error is fatal)
            self.remove_line(path)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("maximum recursion depth exceeded while evaluating", diagnosis=False))
        elif exc_type is GenericException:
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            do_exit = True

        return not do_exit
