"""Entry points into the Monkey interpreter core.

Basic program flow:
    1. Lexer: turns source text into tokens (see core/lexer.py, core/token.py)
        - never fails: unknown characters and unterminated strings become ILLEGAL tokens
    2. Parser: builds a syntax tree from the tokens with a Pratt parser (see core/parser.py, core/ast.py)
        - collects every error it runs into instead of stopping at the first one
    3. Evaluator: walks the syntax tree against an Environment (see core/evaluator.py, core/object.py)
        - not a compiler, so the tree is interpreted directly

The session layer (lang/) only talks to the core through the functions below.
"""

from monkey.core import lexer, parser
from monkey.core.environment import Environment
from monkey.core.evaluator import evaluate as _evaluate


def tokenize(source):
    """Returns the list of tokens in source, ending with EOF."""
    return lexer.tokenize(source)


def parse(source):
    """Returns (program, messages), where messages lists every parse error as a string."""
    program, errors = parser.parse(source)
    return program, [str(error) for error in errors]


def new_environment():
    """Returns an empty top-level Environment, e.g. for a new session."""
    return Environment()


def evaluate(program, env):
    """Evaluates program in env. Bindings made by let statements stay in env."""
    return _evaluate(program, env)
