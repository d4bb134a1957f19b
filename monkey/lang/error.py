"""Error reporting for the Monkey session layer. Only GenericExceptions should be encountered while running: if another
type of error makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Errors inside a Monkey program never reach this module as Python exceptions: the core returns them as values, and the
session turns them into GenericExceptions.
"""

import sys

from termcolor import colored


def escape(msg):
    """Escapes braces in msg so that it can be used as a GenericException template."""
    return msg.replace("{", "{{").replace("}", "}}")


class GenericException(Exception):
    """Templates an error/warning message. Each '{}' in msg is replaced by the matching entry of exprs in bold.
    exprs[0] should be the source that caused the error, and start/end delimit the offending part of it.
    """

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal
        super().__init__(self.msg)


class ErrorHandler:
    """Context manager that reports GenericExceptions (and anything else that escapes) instead of letting them
    propagate. If fatal, the process exits after the first error.
    """
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called before a Session parses or runs line."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after line was handled without errors."""
        self.traceback[path] = (None, None)

    @staticmethod
    def diagnose(error, warning=False):
        """Returns error.expr with the offending part highlighted and underlined."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def warn(self, *args, **kwargs):
        """Generates and prints a warning based on args, which are passed on to GenericException."""
        error = GenericException(*args, **kwargs)

        location = ""
        for file, (line, line_num) in self.traceback.items():
            if line is not None:
                col = line.find(error.expr) + error.start + 1
                location = f"{file}:{line_num}:{max(col, 1)}: "
                break

        msg = colored(location, attrs=["bold"])
        msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg
        print(msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error, warning=True))

    def format(self, error):
        """Returns the full report for error: traceback (if any), message and diagnosis."""
        entries = []
        for file, (line, line_num) in self.traceback.items():  # dicts are insertion-ordered
            if line:
                entries.append(f"  File '{file}', line {line_num}:\n    {line}\n")

        error_msg = ""
        if len(entries) > 1:  # a single entry is already shown by the diagnosis
            error_msg = "Traceback:\n" + "".join(entries)

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg

        if not error.internal and error.expr and error.diagnosis:
            error_msg += "\n" + ErrorHandler.diagnose(error)

        return error_msg

    def throw(self, error):
        """Reports error, a GenericException. Exits if self.fatal."""
        print(self.format(error))

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
            self.throw(GenericException("maximum recursion depth exceeded"))
        elif exc_type is GenericException:
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {escape(str(exc_val))}'", internal=True))
            do_exit = True

        return not do_exit
