"""Session control for the Monkey interpreter: runs source text from a file or from the interactive shell against a
single long-lived Environment, so that let bindings persist from one input to the next.
"""

from monkey.core import api
from monkey.core.ast import LetStatement
from monkey.core.builtins import BUILTINS
from monkey.core.object import ERROR_OBJ
from monkey.core.parser import parse
from monkey.lang.error import GenericException, escape


class Session:
    """Governs a Monkey session: parsed programs waiting to run, their printable results, and the session scope."""
    SH_FILE = "<stdin>"  # command-line interpreter filename
    OPENERS = "([{"
    CLOSERS = ")]}"

    def __init__(self, error_handler, path, cmd_line):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.env = api.new_environment()
        self.to_exec = {}  # dict of line num: (source, Program) to execute
        self.results = []  # printable results of executed programs, oldest first

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    source = file.read()
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            if source.strip():
                self.add(source, 1)

        elif not cmd_line:
            raise GenericException("'{}' is a reserved filename", Session.SH_FILE, diagnosis=False)

    @staticmethod
    def preprocess_line(line, add_to_prev=""):
        """Joins line onto add_to_prev (the pending, unfinished input, if any). Returns the joined line and whether it
        still has unclosed parentheses, brackets or braces and thus needs a continuation line.
        """
        if add_to_prev:
            line = add_to_prev + "\n" + line

        depth = 0
        in_string = False
        for char in line:
            if char == "\"":
                in_string = not in_string
            elif in_string:
                continue
            elif char in Session.OPENERS:
                depth += 1
            elif char in Session.CLOSERS:
                depth -= 1

        return line, depth > 0

    def add(self, source, line_num):
        """Parses source and queues it for execution. Raises a GenericException listing every parse error."""
        self.error_handler.register_line(self.path, source.strip(), line_num)  # in case error is raised

        program, errors = parse(source)
        if errors:
            msg = "parser errors:" + "".join(f"\n\t{escape(str(error))}" for error in errors)
            first = errors[0].token
            lines = source.splitlines()
            line = lines[first.line - 1] if 0 < first.line <= len(lines) else ""
            start = max(first.column - 1, 0)
            raise GenericException(msg, line, start=start, end=start + max(len(first.literal), 1))

        for stmt in program.statements:
            if isinstance(stmt, LetStatement) and stmt.name.value in BUILTINS:
                self.error_handler.warn("'{}' shadows a built-in function", stmt.name.value, diagnosis=False)

        if program.statements:
            self.to_exec[line_num] = (source, program)

        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self):
        """Evaluates every queued program in order. Results worth printing are appended to self.results; an Error
        result is raised as a GenericException.
        """
        for line_num, (source, program) in list(self.to_exec.items()):
            self.error_handler.register_line(self.path, source.strip(), line_num)

            try:
                result = api.evaluate(program, self.env)
            finally:
                del self.to_exec[line_num]

            if result.type() == ERROR_OBJ:
                raise GenericException(escape(result.message), source.strip(), diagnosis=False)

            if not isinstance(program.statements[-1], LetStatement):
                self.results.append(result.inspect())

            self.error_handler.remove_line(self.path)

    def pop(self):
        """Removes and returns the oldest result."""
        return self.results.pop(0)
