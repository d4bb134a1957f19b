"""Pratt (top down operator precedence) parser for the Monkey language.

Statements are parsed by plain recursive descent:

```
<program>    ::= <statement>*
<statement>  ::= "let" <ident> "=" <expression> [";"]
               | "return" [<expression>] [";"]
               | <expression> [";"]
<block>      ::= "{" <statement>* "}"
```

Expressions are parsed by precedence climbing: every token kind that can start an expression has a prefix rule, and
every token kind that can continue one has an infix rule plus a precedence. parse_expression keeps folding infix rules
into the left-hand side for as long as the upcoming operator binds tighter than the precedence it was called with,
which makes chains of equal precedence associate to the left.

Errors never stop the parser: they are collected in Parser.errors and the offending statement is dropped.
"""

from monkey.core import ast
from monkey.core import token
from monkey.core.lexer import Lexer


# precedences, lowest to highest
LOWEST = 1
EQUALS = 2       # ==
LESSGREATER = 3  # > or <
SUM = 4          # +
PRODUCT = 5      # *
PREFIX = 6       # -x or !x
CALL = 7         # fn(x) or array[x]

PRECEDENCES = {
    token.EQ: EQUALS,
    token.NOT_EQ: EQUALS,
    token.LT: LESSGREATER,
    token.GT: LESSGREATER,
    token.PLUS: SUM,
    token.MINUS: SUM,
    token.SLASH: PRODUCT,
    token.ASTERISK: PRODUCT,
    token.LPAREN: CALL,
    token.LBRACKET: CALL,
}

MAX_INT = 2 ** 63 - 1


class ParseError:
    """A single parse error: a human readable message plus the token the parser was looking at."""

    def __init__(self, msg, tok):
        self.msg = msg
        self.token = tok

    def __repr__(self):
        return f"ParseError({self.msg!r})"

    def __str__(self):
        return self.msg

    def __eq__(self, other):
        if isinstance(other, str):
            return self.msg == other
        return isinstance(other, ParseError) and self.msg == other.msg


class Parser:
    """Consumes tokens from a Lexer and builds an ast.Program. Any errors encountered are stored in self.errors."""

    def __init__(self, lexer):
        self.lexer = lexer
        self.errors = []

        self.cur_token = None
        self.peek_token = None

        self.prefix_parse_fns = {
            token.IDENT: self.parse_identifier,
            token.INT: self.parse_integer_literal,
            token.STRING: self.parse_string_literal,
            token.TRUE: self.parse_boolean,
            token.FALSE: self.parse_boolean,
            token.BANG: self.parse_prefix_expression,
            token.MINUS: self.parse_prefix_expression,
            token.LPAREN: self.parse_grouped_expression,
            token.IF: self.parse_if_expression,
            token.FUNCTION: self.parse_function_literal,
            token.LBRACKET: self.parse_array_literal,
            token.LBRACE: self.parse_hash_literal,
        }
        self.infix_parse_fns = {kind: self.parse_infix_expression for kind in PRECEDENCES}
        self.infix_parse_fns[token.LPAREN] = self.parse_call_expression
        self.infix_parse_fns[token.LBRACKET] = self.parse_index_expression

        # read two tokens, so cur_token and peek_token are both set
        self.next_token()
        self.next_token()

    @classmethod
    def from_source(cls, source):
        return cls(Lexer(source))

    def next_token(self):
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, kind):
        return self.cur_token.kind == kind

    def peek_token_is(self, kind):
        return self.peek_token.kind == kind

    def expect_peek(self, kind):
        """Advances if the peek token is of the given kind, otherwise records an error. Returns whether it advanced."""
        if self.peek_token_is(kind):
            self.next_token()
            return True
        self.peek_error(kind)
        return False

    def peek_precedence(self):
        return PRECEDENCES.get(self.peek_token.kind, LOWEST)

    def cur_precedence(self):
        return PRECEDENCES.get(self.cur_token.kind, LOWEST)

    # ==================== ERRORS ====================

    def peek_error(self, kind):
        tok = self.peek_token
        if tok.kind == token.ILLEGAL:
            self.illegal_token_error(tok)
        else:
            self.errors.append(ParseError(f"expected next token to be {kind}, got {tok.kind} instead", tok))

    def illegal_token_error(self, tok):
        msg = f"illegal token \"{tok.literal}\" at line {tok.line}, column {tok.column}"
        self.errors.append(ParseError(msg, tok))

    def no_prefix_parse_fn_error(self, tok):
        if tok.kind == token.ILLEGAL:
            self.illegal_token_error(tok)
        else:
            self.errors.append(ParseError(f"no prefix parse function for {tok.kind} found", tok))

    # ==================== STATEMENTS ====================

    def parse_program(self):
        statements = []
        while not self.cur_token_is(token.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self.next_token()
        return ast.Program(statements)

    def parse_statement(self):
        if self.cur_token_is(token.LET):
            return self.parse_let_statement()
        elif self.cur_token_is(token.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self):
        tok = self.cur_token

        if not self.expect_peek(token.IDENT):
            return None
        name = ast.Identifier(self.cur_token, self.cur_token.literal)

        if not self.expect_peek(token.ASSIGN):
            return None

        self.next_token()
        value = self.parse_expression(LOWEST)
        if value is None:
            return None

        if self.peek_token_is(token.SEMICOLON):
            self.next_token()
        return ast.LetStatement(tok, name, value)

    def parse_return_statement(self):
        tok = self.cur_token

        if self.peek_token_is(token.SEMICOLON) or self.peek_token_is(token.RBRACE) or self.peek_token_is(token.EOF):
            value = None
        else:
            self.next_token()
            value = self.parse_expression(LOWEST)
            if value is None:
                return None

        if self.peek_token_is(token.SEMICOLON):
            self.next_token()
        return ast.ReturnStatement(tok, value)

    def parse_expression_statement(self):
        tok = self.cur_token
        expression = self.parse_expression(LOWEST)
        if expression is None:
            return None

        if self.peek_token_is(token.SEMICOLON):
            self.next_token()
        return ast.ExpressionStatement(tok, expression)

    def parse_block_statement(self):
        """Parses statements up to the closing brace. Assumes cur_token is the opening brace."""
        tok = self.cur_token
        statements = []

        self.next_token()
        while not self.cur_token_is(token.RBRACE):
            if self.cur_token_is(token.EOF):
                self.errors.append(ParseError(f"expected next token to be {token.RBRACE}, got {token.EOF} instead",
                                              self.cur_token))
                return None

            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self.next_token()

        return ast.BlockStatement(tok, statements)

    # ==================== EXPRESSIONS ====================

    def parse_expression(self, precedence):
        prefix = self.prefix_parse_fns.get(self.cur_token.kind)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.cur_token)
            return None
        left = prefix()

        while left is not None and not self.peek_token_is(token.SEMICOLON) and precedence < self.peek_precedence():
            infix = self.infix_parse_fns.get(self.peek_token.kind)
            if infix is None:
                return left

            self.next_token()
            left = infix(left)

        return left

    def parse_identifier(self):
        return ast.Identifier(self.cur_token, self.cur_token.literal)

    def parse_integer_literal(self):
        value = int(self.cur_token.literal)
        if value > MAX_INT:
            self.errors.append(ParseError(f"could not parse \"{self.cur_token.literal}\" as integer", self.cur_token))
            return None
        return ast.IntegerLiteral(self.cur_token, value)

    def parse_string_literal(self):
        return ast.StringLiteral(self.cur_token, self.cur_token.literal)

    def parse_boolean(self):
        return ast.BooleanLiteral(self.cur_token, self.cur_token_is(token.TRUE))

    def parse_prefix_expression(self):
        tok = self.cur_token

        self.next_token()
        right = self.parse_expression(PREFIX)
        if right is None:
            return None
        return ast.PrefixExpression(tok, tok.literal, right)

    def parse_infix_expression(self, left):
        tok = self.cur_token
        precedence = self.cur_precedence()

        self.next_token()
        right = self.parse_expression(precedence)
        if right is None:
            return None
        return ast.InfixExpression(tok, tok.literal, left, right)

    def parse_grouped_expression(self):
        self.next_token()
        expression = self.parse_expression(LOWEST)

        if expression is None or not self.expect_peek(token.RPAREN):
            return None
        return expression

    def parse_if_expression(self):
        tok = self.cur_token

        if not self.expect_peek(token.LPAREN):
            return None

        self.next_token()
        condition = self.parse_expression(LOWEST)
        if condition is None or not self.expect_peek(token.RPAREN):
            return None

        if not self.expect_peek(token.LBRACE):
            return None
        consequence = self.parse_block_statement()
        if consequence is None:
            return None

        alternative = None
        if self.peek_token_is(token.ELSE):
            self.next_token()
            if not self.expect_peek(token.LBRACE):
                return None
            alternative = self.parse_block_statement()
            if alternative is None:
                return None

        return ast.IfExpression(tok, condition, consequence, alternative)

    def parse_function_literal(self):
        tok = self.cur_token

        if not self.expect_peek(token.LPAREN):
            return None
        parameters = self.parse_function_parameters()
        if parameters is None:
            return None

        if not self.expect_peek(token.LBRACE):
            return None
        body = self.parse_block_statement()
        if body is None:
            return None

        return ast.FunctionLiteral(tok, parameters, body)

    def parse_function_parameters(self):
        """Parses a comma-separated list of identifiers. Assumes cur_token is the opening parenthesis."""
        identifiers = []

        if self.peek_token_is(token.RPAREN):
            self.next_token()
            return identifiers

        if not self.expect_peek(token.IDENT):
            return None
        identifiers.append(ast.Identifier(self.cur_token, self.cur_token.literal))

        while self.peek_token_is(token.COMMA):
            self.next_token()
            if not self.expect_peek(token.IDENT):
                return None
            identifiers.append(ast.Identifier(self.cur_token, self.cur_token.literal))

        if not self.expect_peek(token.RPAREN):
            return None
        return identifiers

    def parse_call_expression(self, function):
        tok = self.cur_token
        arguments = self.parse_expression_list(token.RPAREN)
        if arguments is None:
            return None
        return ast.CallExpression(tok, function, arguments)

    def parse_index_expression(self, left):
        tok = self.cur_token

        self.next_token()
        index = self.parse_expression(LOWEST)
        if index is None or not self.expect_peek(token.RBRACKET):
            return None
        return ast.IndexExpression(tok, left, index)

    def parse_array_literal(self):
        tok = self.cur_token
        elements = self.parse_expression_list(token.RBRACKET)
        if elements is None:
            return None
        return ast.ArrayLiteral(tok, elements)

    def parse_expression_list(self, end):
        """Parses a comma-separated list of expressions terminated by end. Assumes cur_token is the opening token."""
        expressions = []

        if self.peek_token_is(end):
            self.next_token()
            return expressions

        self.next_token()
        expression = self.parse_expression(LOWEST)
        if expression is None:
            return None
        expressions.append(expression)

        while self.peek_token_is(token.COMMA):
            self.next_token()
            self.next_token()
            expression = self.parse_expression(LOWEST)
            if expression is None:
                return None
            expressions.append(expression)

        if not self.expect_peek(end):
            return None
        return expressions

    def parse_hash_literal(self):
        tok = self.cur_token
        pairs = []

        while not self.peek_token_is(token.RBRACE):
            self.next_token()
            key = self.parse_expression(LOWEST)
            if key is None or not self.expect_peek(token.COLON):
                return None

            self.next_token()
            value = self.parse_expression(LOWEST)
            if value is None:
                return None
            pairs.append((key, value))

            if not self.peek_token_is(token.RBRACE) and not self.expect_peek(token.COMMA):
                return None

        if not self.expect_peek(token.RBRACE):
            return None
        return ast.HashLiteral(tok, pairs)


def parse(source):
    """Parses source, returning (program, errors), where errors is a list of ParseErrors."""
    parser = Parser.from_source(source)
    program = parser.parse_program()
    return program, parser.errors
