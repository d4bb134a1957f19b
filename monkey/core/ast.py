"""Abstract syntax tree for the Monkey language.

Every node keeps the token it was built from and can render itself back to source-like text via str(). Rendering
parenthesizes every prefix and infix expression, so the rendered text of a tree makes its precedence explicit:

```
1 + 2 * 3      ->  (1 + (2 * 3))
-a * b         ->  ((-a) * b)
a + b[1]       ->  (a + (b[1]))
```

Nodes are built whole by the parser and never modified afterwards.
"""

from abc import ABC, abstractmethod


class Node(ABC):
    """Superclass for every node in a Monkey syntax tree."""

    def __init__(self, token):
        self.token = token

    def token_literal(self):
        """Literal of the token this node originated from."""
        return self.token.literal

    @property
    def nodes(self):
        """Child nodes in source order. Leaves have none."""
        return []

    @abstractmethod
    def __str__(self):
        """Renders this node as source-like text."""

    def display(self, indents=0):
        """Recursively displays the tree rooted at this node.

        Format:
        <Node>(expr='<expr>', nodes=[
            <Node>(expr='<expr>', nodes=[
                ...
                <Node>(expr='<expr>')  # <-- if nodes is empty
            ])
        ])
        """
        result = f"{'    ' * indents}{type(self).__name__}(expr='{self}'"
        if self.nodes:
            result += ", nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    def __repr__(self):
        return f"{type(self).__name__}('{self}')"


class Statement(Node):
    """Marker superclass for statements."""


class Expression(Node):
    """Marker superclass for expressions."""


class Program(Node):
    """Root of every syntax tree: an ordered sequence of statements."""

    def __init__(self, statements):
        super().__init__(statements[0].token if statements else None)
        self.statements = statements

    def token_literal(self):
        return self.token.literal if self.token else ""

    @property
    def nodes(self):
        return list(self.statements)

    def __str__(self):
        return "".join(str(stmt) for stmt in self.statements)


# ==================== STATEMENTS ====================

class LetStatement(Statement):

    def __init__(self, token, name, value):
        super().__init__(token)
        self.name = name
        self.value = value

    @property
    def nodes(self):
        return [self.name, self.value]

    def __str__(self):
        return f"{self.token_literal()} {self.name} = {self.value};"


class ReturnStatement(Statement):
    """return <expression>; the expression may be absent, in which case value is None."""

    def __init__(self, token, value=None):
        super().__init__(token)
        self.value = value

    @property
    def nodes(self):
        return [self.value] if self.value is not None else []

    def __str__(self):
        if self.value is None:
            return f"{self.token_literal()};"
        return f"{self.token_literal()} {self.value};"


class ExpressionStatement(Statement):
    """A statement consisting solely of one expression, e.g. `x + 10;`."""

    def __init__(self, token, expression):
        super().__init__(token)
        self.expression = expression

    @property
    def nodes(self):
        return [self.expression]

    def __str__(self):
        return str(self.expression)


class BlockStatement(Statement):

    def __init__(self, token, statements):
        super().__init__(token)
        self.statements = statements

    @property
    def nodes(self):
        return list(self.statements)

    def __str__(self):
        return "".join(str(stmt) for stmt in self.statements)


# ==================== EXPRESSIONS ====================

class Identifier(Expression):

    def __init__(self, token, value):
        super().__init__(token)
        self.value = value

    def __str__(self):
        return self.value


class IntegerLiteral(Expression):

    def __init__(self, token, value):
        super().__init__(token)
        self.value = value

    def __str__(self):
        return self.token_literal()


class StringLiteral(Expression):

    def __init__(self, token, value):
        super().__init__(token)
        self.value = value

    def __str__(self):
        return f"\"{self.value}\""


class BooleanLiteral(Expression):

    def __init__(self, token, value):
        super().__init__(token)
        self.value = value

    def __str__(self):
        return self.token_literal()


class PrefixExpression(Expression):
    """<operator><right>, e.g. `-5` or `!ok`."""

    def __init__(self, token, operator, right):
        super().__init__(token)
        self.operator = operator
        self.right = right

    @property
    def nodes(self):
        return [self.right]

    def __str__(self):
        return f"({self.operator}{self.right})"


class InfixExpression(Expression):
    """<left> <operator> <right>, e.g. `5 * 5`."""

    def __init__(self, token, operator, left, right):
        super().__init__(token)
        self.operator = operator
        self.left = left
        self.right = right

    @property
    def nodes(self):
        return [self.left, self.right]

    def __str__(self):
        return f"({self.left} {self.operator} {self.right})"


class IfExpression(Expression):
    """if (<condition>) <consequence> else <alternative>. alternative is None when there is no else branch."""

    def __init__(self, token, condition, consequence, alternative=None):
        super().__init__(token)
        self.condition = condition
        self.consequence = consequence
        self.alternative = alternative

    @property
    def nodes(self):
        nodes = [self.condition, self.consequence]
        if self.alternative is not None:
            nodes.append(self.alternative)
        return nodes

    def __str__(self):
        result = f"if{self.condition} {self.consequence}"
        if self.alternative is not None:
            result += f"else {self.alternative}"
        return result


class FunctionLiteral(Expression):
    """fn(<parameters>) <body>"""

    def __init__(self, token, parameters, body):
        super().__init__(token)
        self.parameters = parameters
        self.body = body

    @property
    def nodes(self):
        return list(self.parameters) + [self.body]

    def __str__(self):
        params = ", ".join(str(param) for param in self.parameters)
        return f"{self.token_literal()}({params}) {self.body}"


class CallExpression(Expression):
    """<function>(<arguments>). function is any expression that evaluates to something callable."""

    def __init__(self, token, function, arguments):
        super().__init__(token)
        self.function = function
        self.arguments = arguments

    @property
    def nodes(self):
        return [self.function] + list(self.arguments)

    def __str__(self):
        args = ", ".join(str(arg) for arg in self.arguments)
        return f"{self.function}({args})"


class ArrayLiteral(Expression):

    def __init__(self, token, elements):
        super().__init__(token)
        self.elements = elements

    @property
    def nodes(self):
        return list(self.elements)

    def __str__(self):
        return "[" + ", ".join(str(elem) for elem in self.elements) + "]"


class IndexExpression(Expression):
    """<left>[<index>]"""

    def __init__(self, token, left, index):
        super().__init__(token)
        self.left = left
        self.index = index

    @property
    def nodes(self):
        return [self.left, self.index]

    def __str__(self):
        return f"({self.left}[{self.index}])"


class HashLiteral(Expression):
    """{<key>: <value>, ...}. pairs is an ordered list of (key, value) expression tuples."""

    def __init__(self, token, pairs):
        super().__init__(token)
        self.pairs = pairs

    @property
    def nodes(self):
        return [node for pair in self.pairs for node in pair]

    def __str__(self):
        return "{" + ", ".join(f"{key}:{value}" for key, value in self.pairs) + "}"
