"""Tree-walking evaluator for the Monkey language.

evaluate(node, env) interprets any syntax tree node against an Environment and returns an Object. Nothing in here raises
for errors in the evaluated program: errors are Error objects, and together with ReturnValue they are handed upwards
until something knows what to do with them:

- a block stops at the first ReturnValue or Error and returns it still wrapped, so that nested blocks stop as well
- a function call unwraps a ReturnValue into its value
- a program stops at the first ReturnValue (unwrapped) or Error
- every other construct stops as soon as a sub-expression evaluates to either of them, and hands it on untouched
"""

from monkey.core import ast
from monkey.core.builtins import BUILTINS
from monkey.core.environment import Environment
from monkey.core.object import (
    ARRAY_OBJ,
    ERROR_OBJ,
    FALSE,
    HASH_OBJ,
    INTEGER_OBJ,
    NULL,
    RETURN_VALUE_OBJ,
    STRING_OBJ,
    Array,
    Builtin,
    Error,
    Function,
    Hash,
    Hashable,
    HashPair,
    Integer,
    ReturnValue,
    String,
    native_bool,
)


def is_signal(obj):
    """Whether obj is an Error or a ReturnValue, both of which must reach the enclosing call or program unchanged."""
    return obj.type() in (ERROR_OBJ, RETURN_VALUE_OBJ)


def evaluate(node, env):
    """Evaluates node in env and returns the resulting Object."""
    # statements
    if isinstance(node, ast.Program):
        return eval_program(node.statements, env)

    elif isinstance(node, ast.ExpressionStatement):
        return evaluate(node.expression, env)

    elif isinstance(node, ast.BlockStatement):
        return eval_block_statement(node.statements, env)

    elif isinstance(node, ast.ReturnStatement):
        if node.value is None:
            return ReturnValue(NULL)
        value = evaluate(node.value, env)
        if is_signal(value):
            return value
        return ReturnValue(value)

    elif isinstance(node, ast.LetStatement):
        value = evaluate(node.value, env)
        if is_signal(value):
            return value
        env.set(node.name.value, value)
        return NULL

    # literals
    elif isinstance(node, ast.IntegerLiteral):
        return Integer(node.value)

    elif isinstance(node, ast.StringLiteral):
        return String(node.value)

    elif isinstance(node, ast.BooleanLiteral):
        return native_bool(node.value)

    elif isinstance(node, ast.ArrayLiteral):
        elements = eval_expressions(node.elements, env)
        if len(elements) == 1 and is_signal(elements[0]):
            return elements[0]
        return Array(elements)

    elif isinstance(node, ast.HashLiteral):
        return eval_hash_literal(node, env)

    elif isinstance(node, ast.FunctionLiteral):
        return Function(node.parameters, node.body, env)

    # expressions
    elif isinstance(node, ast.Identifier):
        return eval_identifier(node, env)

    elif isinstance(node, ast.PrefixExpression):
        right = evaluate(node.right, env)
        if is_signal(right):
            return right
        return eval_prefix_expression(node.operator, right)

    elif isinstance(node, ast.InfixExpression):
        left = evaluate(node.left, env)
        if is_signal(left):
            return left
        right = evaluate(node.right, env)
        if is_signal(right):
            return right
        return eval_infix_expression(node.operator, left, right)

    elif isinstance(node, ast.IfExpression):
        return eval_if_expression(node, env)

    elif isinstance(node, ast.CallExpression):
        function = evaluate(node.function, env)
        if is_signal(function):
            return function
        args = eval_expressions(node.arguments, env)
        if len(args) == 1 and is_signal(args[0]):
            return args[0]
        return apply_function(function, args)

    elif isinstance(node, ast.IndexExpression):
        left = evaluate(node.left, env)
        if is_signal(left):
            return left
        index = evaluate(node.index, env)
        if is_signal(index):
            return index
        return eval_index_expression(left, index)

    return Error(f"unknown node: {type(node).__name__}")


def eval_program(statements, env):
    result = NULL
    for stmt in statements:
        result = evaluate(stmt, env)

        if result.type() == RETURN_VALUE_OBJ:
            return result.value
        elif result.type() == ERROR_OBJ:
            return result
    return result


def eval_block_statement(statements, env):
    """Unlike eval_program, leaves ReturnValues wrapped so that the enclosing blocks stop too."""
    result = NULL
    for stmt in statements:
        result = evaluate(stmt, env)

        if is_signal(result):
            return result
    return result


def eval_expressions(expressions, env):
    """Evaluates expressions left to right. On the first Error or ReturnValue, returns a list holding only that object."""
    result = []
    for expression in expressions:
        evaluated = evaluate(expression, env)
        if is_signal(evaluated):
            return [evaluated]
        result.append(evaluated)
    return result


def eval_identifier(node, env):
    value = env.get(node.value)
    if value is not None:
        return value

    builtin = BUILTINS.get(node.value)
    if builtin is not None:
        return builtin

    return Error(f"identifier not found: {node.value}")


def is_truthy(obj):
    """Only false and null are falsy."""
    return obj is not FALSE and obj is not NULL


def eval_prefix_expression(operator, right):
    if operator == "!":
        return native_bool(not is_truthy(right))
    elif operator == "-":
        if right.type() != INTEGER_OBJ:
            return Error(f"unknown operator: -{right.type()}")
        return Integer(-right.value)
    return Error(f"unknown operator: {operator}{right.type()}")


def eval_infix_expression(operator, left, right):
    if left.type() == INTEGER_OBJ and right.type() == INTEGER_OBJ:
        return eval_integer_infix_expression(operator, left, right)
    elif left.type() == STRING_OBJ and right.type() == STRING_OBJ:
        return eval_string_infix_expression(operator, left, right)
    elif operator == "==":
        return native_bool(left is right)
    elif operator == "!=":
        return native_bool(left is not right)
    elif left.type() != right.type():
        return Error(f"type mismatch: {left.type()} {operator} {right.type()}")
    return Error(f"unknown operator: {left.type()} {operator} {right.type()}")


def _truncating_div(left, right):
    quotient = abs(left) // abs(right)
    return -quotient if (left < 0) != (right < 0) else quotient


INTEGER_OPERATORS = {
    "+": lambda left, right: Integer(left + right),
    "-": lambda left, right: Integer(left - right),
    "*": lambda left, right: Integer(left * right),
    "/": lambda left, right: Integer(_truncating_div(left, right)),
    "<": lambda left, right: native_bool(left < right),
    ">": lambda left, right: native_bool(left > right),
    "==": lambda left, right: native_bool(left == right),
    "!=": lambda left, right: native_bool(left != right),
}


def eval_integer_infix_expression(operator, left, right):
    op = INTEGER_OPERATORS.get(operator)
    if op is None:
        return Error(f"unknown operator: {left.type()} {operator} {right.type()}")
    if operator == "/" and right.value == 0:
        return Error("division by zero")
    return op(left.value, right.value)


def eval_string_infix_expression(operator, left, right):
    if operator != "+":
        return Error(f"unknown operator: {left.type()} {operator} {right.type()}")
    return String(left.value + right.value)


def eval_if_expression(node, env):
    condition = evaluate(node.condition, env)
    if is_signal(condition):
        return condition

    if is_truthy(condition):
        return evaluate(node.consequence, env)
    elif node.alternative is not None:
        return evaluate(node.alternative, env)
    return NULL


def apply_function(fn, args):
    if isinstance(fn, Function):
        if len(args) != len(fn.parameters):
            return Error(f"wrong number of arguments. got={len(args)}, want={len(fn.parameters)}")

        extended_env = Environment.new_enclosed(fn.env)
        for param, arg in zip(fn.parameters, args):
            extended_env.set(param.value, arg)

        return unwrap_return_value(evaluate(fn.body, extended_env))

    elif isinstance(fn, Builtin):
        return fn.fn(*args)

    return Error(f"not a function: {fn.type()}")


def unwrap_return_value(obj):
    if obj.type() == RETURN_VALUE_OBJ:
        return obj.value
    return obj


def eval_index_expression(left, index):
    if left.type() == ARRAY_OBJ:
        return eval_array_index_expression(left, index)
    elif left.type() == HASH_OBJ:
        return eval_hash_index_expression(left, index)
    return Error(f"index operator not supported: {left.type()}")


def eval_array_index_expression(array, index):
    """Anything but an Integer in [0, len) yields null."""
    if index.type() != INTEGER_OBJ:
        return NULL
    idx = index.value
    if idx < 0 or idx >= len(array.elements):
        return NULL
    return array.elements[idx]


def eval_hash_index_expression(hash_obj, index):
    if not isinstance(index, Hashable):
        return Error(f"unusable as hash key: {index.type()}")

    value = hash_obj.get(index)
    return value if value is not None else NULL


def eval_hash_literal(node, env):
    pairs = {}
    for key_node, value_node in node.pairs:
        key = evaluate(key_node, env)
        if is_signal(key):
            return key

        if not isinstance(key, Hashable):
            return Error(f"unusable as hash key: {key.type()}")

        value = evaluate(value_node, env)
        if is_signal(value):
            return value

        pairs[key.hash_key()] = HashPair(key, value)

    return Hash(pairs)
