"""Handles interactive/command-line mode for the Monkey interpreter. Uses cmd as backend."""

import cmd

from monkey.core import api
from monkey.lang.error import GenericException, escape


class Shell(cmd.Cmd):
    """Monkey interpreter shell."""
    intro = "Monkey interpreter :: Python backend\nType 'help' for more information."
    prompt = ">> "
    secondary_prompt = ".. "  # used for line continuations
    _tmp_prompt = ">> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, intro=None, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        if intro is not None:
            self.intro = intro

        self._tmp_line = ""
        self.line_num = 0

    def onecmd(self, line):
        """While a continuation is pending, every line but EOF belongs to the pending input, even one that starts like
        a shell command.
        """
        if self._tmp_line and line != "EOF":
            return self.default(line)
        return super().onecmd(line)

    def default(self, line):
        """Evaluates arbitrary Monkey source."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            line, add_to_prev = self.sess.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            self.sess.add(line, self.line_num)
            self.sess.run()

            while self.sess.results:
                print(self.sess.pop(), file=self.stdout)

    def do_tokens(self, arg):
        """tokens SOURCE: prints the tokens of SOURCE, one per line."""
        for tok in api.tokenize(arg):
            print(tok, file=self.stdout)

    def do_ast(self, arg):
        """ast SOURCE: prints the syntax tree of SOURCE."""
        with self.sess.error_handler:
            program, errors = api.parse(arg)
            if errors:
                msg = "parser errors:" + "".join(f"\n\t{escape(error)}" for error in errors)
                raise GenericException(msg, diagnosis=False)
            print(program.display(), file=self.stdout)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the Monkey interpreter!\n\n"
              "Monkey has integers, booleans, strings, arrays, hashes and first-class functions.\n"
              "Bindings made with 'let' last for the whole session, e.g. type\n\n"
              "    let add = fn(a, b) { a + b };\n"
              "    add(1, 2)\n\n"
              "Built-in functions: len, first, last, rest, push, puts.\n"
              "Other commands: 'tokens SOURCE', 'ast SOURCE', 'exit'.", file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
