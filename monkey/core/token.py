"""Token model for the Monkey language. Tokens are produced by the lexer and consumed by the parser; AST nodes keep the
token they originated from so that diagnostics can point back at the source.
"""

from collections import namedtuple


# special
ILLEGAL = "ILLEGAL"
EOF = "EOF"

# identifiers and literals
IDENT = "IDENT"
INT = "INT"
STRING = "STRING"

# operators
ASSIGN = "="
PLUS = "+"
MINUS = "-"
BANG = "!"
ASTERISK = "*"
SLASH = "/"
LT = "<"
GT = ">"
EQ = "=="
NOT_EQ = "!="

# delimiters
COMMA = ","
SEMICOLON = ";"
COLON = ":"
LPAREN = "("
RPAREN = ")"
LBRACE = "{"
RBRACE = "}"
LBRACKET = "["
RBRACKET = "]"

# keywords
FUNCTION = "FUNCTION"
LET = "LET"
TRUE = "TRUE"
FALSE = "FALSE"
IF = "IF"
ELSE = "ELSE"
RETURN = "RETURN"

KEYWORDS = {
    "fn": FUNCTION,
    "let": LET,
    "true": TRUE,
    "false": FALSE,
    "if": IF,
    "else": ELSE,
    "return": RETURN,
}

SINGLE_CHARS = {
    "=": ASSIGN,
    "+": PLUS,
    "-": MINUS,
    "!": BANG,
    "*": ASTERISK,
    "/": SLASH,
    "<": LT,
    ">": GT,
    ",": COMMA,
    ";": SEMICOLON,
    ":": COLON,
    "(": LPAREN,
    ")": RPAREN,
    "{": LBRACE,
    "}": RBRACE,
    "[": LBRACKET,
    "]": RBRACKET,
}

DOUBLE_CHARS = {
    "==": EQ,
    "!=": NOT_EQ,
}


class Token(namedtuple("Token", ["kind", "literal", "line", "column"])):
    """Minimal lexical unit. line and column are 1-based and point at the first character of literal."""
    __slots__ = ()

    def __new__(cls, kind, literal, line=0, column=0):
        return super().__new__(cls, kind, literal, line, column)

    def __str__(self):
        return f"{self.kind} {self.literal!r} {self.line}:{self.column}"


def lookup_ident(ident):
    """Returns the keyword kind for ident, or IDENT if ident is not reserved."""
    return KEYWORDS.get(ident, IDENT)
