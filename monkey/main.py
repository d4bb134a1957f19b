"""Runs Monkey files, or the interactive shell when no file is given. Called from the monkey console script.

Whole files are run as a single program and errors in them are fatal; in the shell, errors are reported and the session
carries on.
"""

import argparse
import getpass
import sys

from monkey.lang.error import ErrorHandler
from monkey.lang.session import Session
from monkey.lang.shell import Shell


RECURSION_LIMIT = 5000  # deep but finite recursion in Monkey programs needs more Python frames than the default


def greeting(user):
    """Returns the greeting printed when the shell starts."""
    return (f"Hello {user.title()}! This is the Monkey programming language!\n"
            "Feel free to type in commands")


def current_user():
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "there"


def main(argv=None):
    """Runs monkey interpreter. Called from monkey executable script."""
    sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))

    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="monkey", description="Monkey programming language interpreter")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        args = parser.parse_args(argv)

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False)
            sess.run()

            for result in sess.results:
                print(result)

        else:
            sess = Session(error_handler, Session.SH_FILE, cmd_line=True)
            Shell(sess, intro=greeting(current_user())).cmdloop()


if __name__ == "__main__":
    main()
