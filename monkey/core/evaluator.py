"""Tree-walking evaluator for the Monkey language.

evaluate(node, env) dispatches on the node's class through EVALUATORS, one handler per concrete AST class, and
returns an Object (or None for nodes that produce nothing, like `let`).

Two kinds of values get special treatment on the way back up the tree:
    - Error: an evaluation error. Every handler that evaluates a sub-node checks for it and returns it unchanged, so
      the first error short-circuits the rest of the evaluation. Side effects made before the error stay in place.
    - ReturnValue: produced by `return`. Blocks pass it up untouched; only function application (and the program
      itself, at top level) unwraps it. This lets `return` leave nested ifs/blocks without leaving the whole program.

Each Monkey call nests about a dozen Python frames, so importing this module raises the interpreter's recursion limit
to RECURSION_LIMIT. A call that still runs out of frames evaluates to an Error instead of raising.
"""

import sys

from monkey.core import ast
from monkey.core.builtins import BUILTINS
from monkey.core.environment import Environment
from monkey.core.objects import (
    FALSE,
    NULL,
    TRUE,
    Array,
    Builtin,
    Error,
    Function,
    Hash,
    Hashable,
    HashPair,
    Integer,
    ObjectType,
    ReturnValue,
    String,
    is_error,
    is_truthy,
    native_bool_to_boolean,
    wrap_int,
)


RECURSION_LIMIT = 10000  # Python frames, enough for ~750 nested Monkey calls
RECURSION_ERROR_MSG = "maximum recursion depth exceeded"

if sys.getrecursionlimit() < RECURSION_LIMIT:
    sys.setrecursionlimit(RECURSION_LIMIT)


def evaluate(node, env):
    """Evaluates node in env. Missing (None) nodes left behind by a failed parse evaluate to an Error."""
    if node is None:
        return Error("cannot evaluate a missing node")

    handler = EVALUATORS.get(type(node))
    if handler is None:
        return Error(f"cannot evaluate {type(node).__name__}")
    return handler(node, env)


# statements


def eval_program(program, env):
    result = None
    for stmt in program.statements:
        result = evaluate(stmt, env)

        if isinstance(result, ReturnValue):
            return result.value
        elif isinstance(result, Error):
            return result
    return result


def eval_block_statement(block, env):
    result = None
    for stmt in block.statements:
        result = evaluate(stmt, env)

        if result is not None and result.type in (ObjectType.RETURN_VALUE, ObjectType.ERROR):
            return result
    return result


def eval_expression_statement(stmt, env):
    return evaluate(stmt.expression, env)


def eval_let_statement(stmt, env):
    value = evaluate(stmt.value, env)
    if is_error(value):
        return value
    env.set(stmt.name.value, value)
    return None


def eval_return_statement(stmt, env):
    if stmt.return_value is None:
        return ReturnValue(NULL)

    value = evaluate(stmt.return_value, env)
    if is_error(value):
        return value
    return ReturnValue(value)


# literals


def eval_integer_literal(node, env):
    return Integer(node.value)


def eval_boolean(node, env):
    return native_bool_to_boolean(node.value)


def eval_string_literal(node, env):
    return String(node.value)


def eval_identifier(node, env):
    value, found = env.get(node.value)
    if found:
        return value
    if node.value in BUILTINS:
        return BUILTINS[node.value]
    return Error(f"identifier not found: {node.value}")


def eval_expressions(exprs, env):
    """Evaluates exprs left to right. Returns the list of results, or the first Error encountered."""
    results = []
    for expr in exprs:
        evaluated = evaluate(expr, env)
        if is_error(evaluated):
            return evaluated
        results.append(evaluated)
    return results


def eval_array_literal(node, env):
    elements = eval_expressions(node.elements, env)
    if isinstance(elements, Error):
        return elements
    return Array(elements)


def eval_hash_literal(node, env):
    pairs = {}
    for key_node, value_node in node.pairs:
        key = evaluate(key_node, env)
        if is_error(key):
            return key
        if not isinstance(key, Hashable):
            return Error(f"{key.type} is not hashable")

        value = evaluate(value_node, env)
        if is_error(value):
            return value

        pairs[key.hash_key()] = HashPair(key, value)  # same key twice: last one wins
    return Hash(pairs)


def eval_function_literal(node, env):
    return Function(node.parameters, node.body, env)


# operators


def eval_prefix_expression(node, env):
    right = evaluate(node.right, env)
    if is_error(right):
        return right

    if node.operator == "!":
        return FALSE if is_truthy(right) else TRUE
    elif node.operator == "-" and isinstance(right, Integer):
        return Integer(wrap_int(-right.value))
    return Error(f"unknown operator: {node.operator}{right.type}")


def eval_infix_expression(node, env):
    left = evaluate(node.left, env)
    if is_error(left):
        return left

    right = evaluate(node.right, env)
    if is_error(right):
        return right

    operator = node.operator
    if left.type is not right.type:
        return Error(f"type mismatch: {left.type} {operator} {right.type}")
    elif left.type is ObjectType.INTEGER:
        return eval_integer_infix(operator, left.value, right.value)
    elif left.type is ObjectType.STRING:
        return eval_string_infix(operator, left.value, right.value)
    elif left.type is ObjectType.BOOLEAN and operator == "==":
        return native_bool_to_boolean(left is right)
    elif left.type is ObjectType.BOOLEAN and operator == "!=":
        return native_bool_to_boolean(left is not right)
    return Error(f"unknown operator: {left.type} {operator} {right.type}")


def eval_integer_infix(operator, left, right):
    if operator == "+":
        return Integer(wrap_int(left + right))
    elif operator == "-":
        return Integer(wrap_int(left - right))
    elif operator == "*":
        return Integer(wrap_int(left * right))
    elif operator == "/":
        if right == 0:
            return Error("division by zero")
        quotient = abs(left) // abs(right)  # truncate toward zero
        return Integer(wrap_int(quotient if (left < 0) == (right < 0) else -quotient))
    elif operator == "<":
        return native_bool_to_boolean(left < right)
    elif operator == ">":
        return native_bool_to_boolean(left > right)
    elif operator == "==":
        return native_bool_to_boolean(left == right)
    elif operator == "!=":
        return native_bool_to_boolean(left != right)
    return Error(f"unknown operator: {ObjectType.INTEGER} {operator} {ObjectType.INTEGER}")


def eval_string_infix(operator, left, right):
    if operator == "+":
        return String(left + right)
    elif operator == "==":
        return native_bool_to_boolean(left == right)
    elif operator == "!=":
        return native_bool_to_boolean(left != right)
    return Error(f"unknown operator: {ObjectType.STRING} {operator} {ObjectType.STRING}")


# control flow


def eval_if_expression(node, env):
    condition = evaluate(node.condition, env)
    if is_error(condition):
        return condition

    if is_truthy(condition):
        result = evaluate(node.consequence, env)
    elif node.alternative is not None:
        result = evaluate(node.alternative, env)
    else:
        return NULL
    return NULL if result is None else result  # empty block, or one ending in `let`


def eval_call_expression(node, env):
    function = evaluate(node.function, env)
    if is_error(function):
        return function

    args = eval_expressions(node.arguments, env)
    if isinstance(args, Error):
        return args

    return apply_function(function, args)


def apply_function(function, args):
    """Calls a Function or Builtin with already evaluated args."""
    if isinstance(function, Builtin):
        return function.fn(*args)
    elif not isinstance(function, Function):
        return Error(f"not a function: {function.type}")

    if len(args) != len(function.parameters):
        expected = ", ".join(param.value for param in function.parameters)
        got = ", ".join(arg.inspect() for arg in args)
        return Error(f"wrong number of arguments: want={len(function.parameters)}, got={len(args)}\n"
                     f"\texpected: {expected}\n"
                     f"\tgot: {got}")

    call_env = Environment.enclosed(function.env)
    for param, arg in zip(function.parameters, args):
        call_env.set(param.value, arg)

    try:
        evaluated = evaluate(function.body, call_env)
    except RecursionError:
        return Error(RECURSION_ERROR_MSG)

    if evaluated is None:
        return NULL
    elif isinstance(evaluated, ReturnValue):
        return evaluated.value
    return evaluated


def eval_index_expression(node, env):
    left = evaluate(node.left, env)
    if is_error(left):
        return left

    index = evaluate(node.index, env)
    if is_error(index):
        return index

    if isinstance(left, Array) and isinstance(index, Integer):
        return eval_array_index(left, index.value)
    elif isinstance(left, Hash):
        return eval_hash_index(left, index)
    return Error(f"index operator not supported: {left.type}")


def eval_array_index(array, idx):
    """Negative indexes count from the end. Anything still out of range is null."""
    length = len(array.elements)
    if idx < 0:
        idx += length
    if idx < 0 or idx >= length:
        return NULL
    return array.elements[idx]


def eval_hash_index(hash_obj, key):
    if not isinstance(key, Hashable):
        return Error(f"unusable as hash key: {key.type}")

    pair = hash_obj.pairs.get(key.hash_key())
    if pair is None:
        return NULL
    return pair.value


EVALUATORS = {
    ast.Program: eval_program,
    ast.BlockStatement: eval_block_statement,
    ast.ExpressionStatement: eval_expression_statement,
    ast.LetStatement: eval_let_statement,
    ast.ReturnStatement: eval_return_statement,
    ast.Identifier: eval_identifier,
    ast.IntegerLiteral: eval_integer_literal,
    ast.Boolean: eval_boolean,
    ast.StringLiteral: eval_string_literal,
    ast.ArrayLiteral: eval_array_literal,
    ast.HashLiteral: eval_hash_literal,
    ast.PrefixExpression: eval_prefix_expression,
    ast.InfixExpression: eval_infix_expression,
    ast.IfExpression: eval_if_expression,
    ast.FunctionLiteral: eval_function_literal,
    ast.CallExpression: eval_call_expression,
    ast.IndexExpression: eval_index_expression,
}
