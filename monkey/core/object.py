"""Runtime values of the Monkey language.

Every value is an Object that reports its type tag and a textual rendering (inspect). Integers, booleans and strings are
the only hashable values, i.e. the only values that can be used as hash keys. ReturnValue and Error are signals that the
evaluator passes upwards like ordinary values; they are never stored inside other values.

TRUE, FALSE and NULL are shared instances: the evaluator never creates other Boolean or Null objects, so booleans and
null can be compared by identity.
"""

from abc import ABC, abstractmethod
from collections import namedtuple


INTEGER_OBJ = "INTEGER"
BOOLEAN_OBJ = "BOOLEAN"
STRING_OBJ = "STRING"
NULL_OBJ = "NULL"
RETURN_VALUE_OBJ = "RETURN_VALUE"
ERROR_OBJ = "ERROR"
FUNCTION_OBJ = "FUNCTION"
BUILTIN_OBJ = "BUILTIN"
ARRAY_OBJ = "ARRAY"
HASH_OBJ = "HASH"

INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1


HashKey = namedtuple("HashKey", ["type", "value"])
HashPair = namedtuple("HashPair", ["key", "value"])


def wrap_int64(value):
    """Wraps value into the signed 64-bit range, the way two's complement overflow does."""
    if INT64_MIN <= value <= INT64_MAX:
        return value
    return (value - INT64_MIN) % 2 ** 64 + INT64_MIN


class Object(ABC):
    """Superclass for every Monkey runtime value."""
    TYPE = None

    def type(self):
        return self.TYPE

    @abstractmethod
    def inspect(self):
        """Returns the textual rendering of this value."""

    def __repr__(self):
        return f"{type(self).__name__}({self.inspect()!r})"

    def __str__(self):
        return self.inspect()


class Hashable(Object):
    """Values that can be used as hash keys."""

    def __init__(self, value):
        self.value = value

    def hash_key(self):
        return HashKey(self.TYPE, self.value)


class Integer(Hashable):
    TYPE = INTEGER_OBJ

    def __init__(self, value):
        super().__init__(wrap_int64(value))

    def inspect(self):
        return str(self.value)

    def __eq__(self, other):
        return isinstance(other, Integer) and self.value == other.value

    def __hash__(self):
        return hash(self.hash_key())


class Boolean(Hashable):
    TYPE = BOOLEAN_OBJ

    def hash_key(self):
        return HashKey(self.TYPE, 1 if self.value else 0)

    def inspect(self):
        return "true" if self.value else "false"


class String(Hashable):
    TYPE = STRING_OBJ

    def inspect(self):
        return self.value

    def __eq__(self, other):
        return isinstance(other, String) and self.value == other.value

    def __hash__(self):
        return hash(self.hash_key())


class Null(Object):
    TYPE = NULL_OBJ

    def inspect(self):
        return "null"


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool(value):
    """Returns the shared Boolean matching the Python truth value of value."""
    return TRUE if value else FALSE


class ReturnValue(Object):
    """Carries the value of a return statement up to the enclosing function call."""
    TYPE = RETURN_VALUE_OBJ

    def __init__(self, value):
        self.value = value

    def inspect(self):
        return self.value.inspect()


class Error(Object):
    """Evaluation error. Stops evaluation of the current program the same way ReturnValue stops a function body."""
    TYPE = ERROR_OBJ

    def __init__(self, message):
        self.message = message

    def inspect(self):
        return f"ERROR: {self.message}"

    def __eq__(self, other):
        return isinstance(other, Error) and self.message == other.message

    def __hash__(self):
        return hash(self.message)


class Function(Object):
    """User-defined function. env is the environment the function literal was evaluated in, shared by reference."""
    TYPE = FUNCTION_OBJ

    def __init__(self, parameters, body, env):
        self.parameters = parameters
        self.body = body
        self.env = env

    def inspect(self):
        params = ", ".join(str(param) for param in self.parameters)
        return f"fn({params}) {{\n{self.body}\n}}"


class Builtin(Object):
    """Native function. fn takes the evaluated arguments as positional args and returns an Object."""
    TYPE = BUILTIN_OBJ

    def __init__(self, name, fn):
        self.name = name
        self.fn = fn

    def inspect(self):
        return "builtin function"

    def __repr__(self):
        return f"Builtin({self.name!r})"


class Array(Object):
    TYPE = ARRAY_OBJ

    def __init__(self, elements):
        self.elements = elements

    def inspect(self):
        return "[" + ", ".join(elem.inspect() for elem in self.elements) + "]"


class Hash(Object):
    """Mapping of HashKey to HashPair. The original key object is kept in the pair for rendering."""
    TYPE = HASH_OBJ

    def __init__(self, pairs):
        self.pairs = pairs

    def get(self, key):
        """Returns the value stored under key (a Hashable), or None if there is none."""
        pair = self.pairs.get(key.hash_key())
        return pair.value if pair is not None else None

    def inspect(self):
        pairs = ", ".join(f"{pair.key.inspect()}: {pair.value.inspect()}" for pair in self.pairs.values())
        return "{" + pairs + "}"
