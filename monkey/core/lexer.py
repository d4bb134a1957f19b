"""Lexical analysis for the Monkey language. The lexer never fails: characters it does not understand and string
literals that run into the end of the source are handed to the parser as ILLEGAL tokens.
"""

from string import ascii_letters, digits

from monkey.core import token
from monkey.core.token import Token


class Lexer:
    """Converts source text into a lazy sequence of Tokens ending with a single EOF token. Iterating over a Lexer always
    starts from the beginning of the source.
    """
    WHITESPACE = " \t\n\r"

    def __init__(self, source):
        self.source = source
        self.reset()

    def reset(self):
        """Rewinds the cursor to the start of the source."""
        self.position = 0       # index of self.char
        self.read_position = 0  # index of the next char to be read
        self.char = ""
        self.line = 1
        self.column = 0
        self._read_char()

    def _read_char(self):
        if self.char == "\n":
            self.line += 1
            self.column = 0

        if self.read_position >= len(self.source):
            self.char = ""
        else:
            self.char = self.source[self.read_position]

        self.position = self.read_position
        self.read_position += 1
        self.column += 1

    def _peek_char(self):
        if self.read_position >= len(self.source):
            return ""
        return self.source[self.read_position]

    def _skip_whitespace(self):
        while self.char and self.char in Lexer.WHITESPACE:
            self._read_char()

    def _read_while(self, chars):
        start = self.position
        while self.char and self.char in chars:
            self._read_char()
        return self.source[start:self.position]

    def _read_string(self, line, column):
        """Reads a string literal starting at the opening quote. An unterminated string becomes an ILLEGAL token holding
        everything from the opening quote onwards.
        """
        start = self.position + 1
        while True:
            self._read_char()
            if self.char == "\"":
                literal = self.source[start:self.position]
                self._read_char()
                return Token(token.STRING, literal, line, column)
            if not self.char:
                return Token(token.ILLEGAL, self.source[start - 1:], line, column)

    def next_token(self):
        """Returns the next token and advances the cursor past it."""
        self._skip_whitespace()
        line, column = self.line, self.column

        if not self.char:
            return Token(token.EOF, "", line, column)

        if self.char + self._peek_char() in token.DOUBLE_CHARS:
            literal = self.char + self._peek_char()
            self._read_char()
            self._read_char()
            return Token(token.DOUBLE_CHARS[literal], literal, line, column)

        if self.char in token.SINGLE_CHARS:
            tok = Token(token.SINGLE_CHARS[self.char], self.char, line, column)
            self._read_char()
            return tok

        if self.char == "\"":
            return self._read_string(line, column)

        if self.char in ascii_letters or self.char == "_":
            ident = self._read_while(ascii_letters + "_")
            return Token(token.lookup_ident(ident), ident, line, column)

        if self.char in digits:
            return Token(token.INT, self._read_while(digits), line, column)

        tok = Token(token.ILLEGAL, self.char, line, column)
        self._read_char()
        return tok

    def __iter__(self):
        self.reset()
        while True:
            tok = self.next_token()
            yield tok
            if tok.kind == token.EOF:
                return


def tokenize(source):
    """Returns every token of source, including the final EOF."""
    return list(Lexer(source))
