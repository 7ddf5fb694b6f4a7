"""Runs .suro files, or the interactive shell when no file is given. Also uses error handling context manager. Called
from the suro console script.
"""

import argparse

from suro.lang.error import ErrorHandler
from suro.lang.session import Session
from suro.lang.shell import Shell


def main(argv=None):
    """Runs suro interpreter. Called from suro console script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="suro")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("-v", "--verbose", help="print tokens, syntax tree and final value", action="store_true")
        args = parser.parse_args(argv)

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, verbose=args.verbose)
            sess.run()

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, verbose=args.verbose)).cmdloop()


if __name__ == "__main__":
    main()
