"""Built-in functions available in every Monkey program. Each one receives already evaluated arguments and reports
misuse (wrong number of arguments, unsupported argument types) by returning an Error rather than raising.
"""

from monkey.core.object import (
    ARRAY_OBJ,
    NULL,
    STRING_OBJ,
    Array,
    Builtin,
    Error,
    Integer,
)


def _arity_error(got, want):
    return Error(f"wrong number of arguments. got={got}, want={want}")


def _array_argument(name, args):
    """Returns (array, None) if args is a single Array, else (None, error)."""
    if len(args) != 1:
        return None, _arity_error(len(args), 1)
    if args[0].type() != ARRAY_OBJ:
        return None, Error(f"argument to `{name}` must be ARRAY, got {args[0].type()}")
    return args[0], None


def monkey_len(*args):
    """len(string) is the number of characters, len(array) the number of elements."""
    if len(args) != 1:
        return _arity_error(len(args), 1)

    arg = args[0]
    if arg.type() == STRING_OBJ:
        return Integer(len(arg.value))
    elif arg.type() == ARRAY_OBJ:
        return Integer(len(arg.elements))
    return Error(f"argument to `len` not supported, got {arg.type()}")


def monkey_first(*args):
    array, error = _array_argument("first", args)
    if error is not None:
        return error
    return array.elements[0] if array.elements else NULL


def monkey_last(*args):
    array, error = _array_argument("last", args)
    if error is not None:
        return error
    return array.elements[-1] if array.elements else NULL


def monkey_rest(*args):
    """Returns a new array holding every element but the first, or null for an empty array."""
    array, error = _array_argument("rest", args)
    if error is not None:
        return error
    if not array.elements:
        return NULL
    return Array(array.elements[1:])


def monkey_push(*args):
    """push(array, value) returns a new array with value appended; array itself is left untouched."""
    if len(args) != 2:
        return _arity_error(len(args), 2)
    if args[0].type() != ARRAY_OBJ:
        return Error(f"argument to `push` must be ARRAY, got {args[0].type()}")
    return Array(args[0].elements + [args[1]])


def monkey_puts(*args):
    """Prints every argument on its own line."""
    for arg in args:
        print(arg.inspect())
    return NULL


BUILTINS = {
    "len": Builtin("len", monkey_len),
    "first": Builtin("first", monkey_first),
    "last": Builtin("last", monkey_last),
    "rest": Builtin("rest", monkey_rest),
    "push": Builtin("push", monkey_push),
    "puts": Builtin("puts", monkey_puts),
}
