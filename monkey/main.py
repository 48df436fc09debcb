"""Runs the Monkey interpreter on a file, or in command-line mode. Also uses error handling context manager. Called from
the monkey console script.
"""

import argparse

from monkey.lang.error import ErrorHandler
from monkey.lang.session import Session
from monkey.lang.shell import Shell


def main(argv=None):
    """Runs Monkey interpreter. Called from monkey console script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="monkey", description="Monkey language interpreter")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("--ast", action="store_true", help="print each parsed program before evaluating it")
        parser.add_argument("--recursion-limit", type=int, default=Session.RECURSION_LIMIT,
                            help="Python recursion limit, which bounds Monkey call depth")
        args = parser.parse_args(argv)

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, echo_ast=args.ast,
                           recursion_limit=args.recursion_limit)
            sess.run()

            for result in sess.results:
                print(result)

        else:
            sess = Session(error_handler, Session.SH_FILE, cmd_line=True, echo_ast=args.ast,
                           recursion_limit=args.recursion_limit)
            Shell(sess).cmdloop()


if __name__ == "__main__":
    main()
