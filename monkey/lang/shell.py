"""Handles interactive/command-line mode for the Monkey interpreter. Uses cmd as backend."""

import cmd

from monkey.syntax.parser import parse


class Shell(cmd.Cmd):
    """Monkey interpreter shell."""
    intro = "Monkey interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = ">> "
    secondary_prompt = ".. "  # used for line continuations
    _tmp_prompt = ">> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def parseline(self, line):
        """Like cmd.Cmd.parseline, but a line is Monkey source (passed on to default) if it continues an open line or if
        it starts with a name bound in the global scope, e.g. 'help + 1' after 'let help = 3'. EOF always exits.
        """
        command, arg, line = super().parseline(line)
        if command is None or command == "EOF":
            return command, arg, line

        if self._tmp_line or (line.startswith(command) and command in self.sess.env):
            return None, None, line
        return command, arg, line

    def default(self, line):
        """Evaluates arbitrary Monkey source."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            line, add_to_prev = self.sess.preprocess_line(self._tmp_line + line)

            if add_to_prev:
                self._tmp_line = line + "\n"
                self.prompt = self.secondary_prompt
            else:
                self._tmp_line = ""
                self.prompt = self._tmp_prompt

                self.sess.add(line, self.line_num - line.count("\n"))
                self.sess.run()

                if self.sess.results:
                    print(self.sess.pop())

    def do_tree(self, arg):
        """Displays the syntax tree of a line of Monkey source without evaluating it."""
        program, errors = parse(arg)
        for error in errors:
            self.sess.error_handler.warn("{}", str(error), diagnosis=False)
        for statement in program.statements:
            print(statement.display())

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the Monkey interpreter!\n\n"
              "Monkey is a small language with integers, booleans, first-class functions and \n"
              "closures. Statements end with an optional ';'.\n\n"
              "Try it out by typing 'let add = function(a, b) { a + b };'. This will bind a \n"
              "function to the name 'add'. Next, try typing 'add(1, 2)'. This will call 'add', \n"
              "giving '3' as the result. 'tree <source>' shows how a line is parsed.\n\n"
              "'help', 'tree' and 'exit' are shell commands unless a Monkey name of the same spelling is bound.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        if arg:
            self.sess.error_handler.warn("ignoring unrecognized argument '{}'", arg, diagnosis=False)
        return True
