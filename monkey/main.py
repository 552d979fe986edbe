"""Runs Monkey source files, or the interactive shell when no file is given. Also uses the error handling context
manager. Called from the monkey console script.

Python version must be >=3.8.
"""

import argparse
import logging
import sys

from monkey.lang.error import ErrorHandler
from monkey.lang.session import Session
from monkey.lang.shell import Shell


def main(argv=None):
    """Runs the Monkey interpreter. Called from the monkey console script."""
    assert sys.version_info >= (3, 8), "monkey cannot be run with python < 3.8"

    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="monkey")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("--ast", action="store_true", help="print the syntax tree of file instead of running it")
        parser.add_argument("-v", "--verbose", action="store_true", help="log interpreter events to stderr")
        args = parser.parse_args(argv)

        if args.verbose:
            logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False)
            if args.ast:
                for program, __, __ in sess.programs:
                    print(program.display())
            else:
                sess.run()

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()


if __name__ == "__main__":
    main()
