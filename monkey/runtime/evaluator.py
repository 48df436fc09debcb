"""Tree-walking evaluator for Monkey. evaluate(node, env) recursively computes the runtime object of an AST node.

Rules in brief:
- Program/block: statements run in order; the result is the value of the last expression statement. A 'return'
  leaves a ReturnValue that passes up through blocks untouched and is unwrapped by the function call (or the program).
- Truthiness: only false and null are falsy. Every integer, 0 included, is truthy.
- Faults are Error objects. Whenever a step depends on an earlier result, that result is checked first and an Error (or
  a pending ReturnValue) is passed straight up without evaluating anything else.

Dispatch is a closed table keyed by node type (see EVALUATORS); a node type missing from the table is an interpreter
bug and raises an internal GenericException rather than evaluating silently to something. Blocks (bodies and if branches)
and expression statements inside statement lists are evaluated without going through the table, which keeps the number
of Python frames per Monkey call low; the host raises the Python recursion limit to match (see Session).
"""

from monkey.lang.error import GenericException
from monkey.runtime.environment import Environment
from monkey.runtime.objects import (
    FALSE, NULL, Boolean, Error, Function, Integer, ReturnValue, is_error, native_bool_to_boolean, wrap_int64
)
from monkey.syntax import ast

ARITHMETIC = ["+", "-", "*", "/"]


def evaluate(node, env):
    """Returns the object node evaluates to in env. LetStatements evaluate to None, as they produce no value."""
    evaluator = EVALUATORS.get(type(node))
    if evaluator is None:
        raise GenericException("no evaluation rule for '{}'", type(node).__name__, internal=True)
    return evaluator(node, env)


def _interrupts(obj):
    """Whether obj must stop evaluation of its siblings: an Error, or a 'return' on its way to a call boundary."""
    return isinstance(obj, (Error, ReturnValue))


def is_truthy(obj):
    return not (obj is FALSE or obj is NULL)


# statements

def _eval_program(program, env):
    result = NULL
    for statement in program.statements:
        if isinstance(statement, ast.ExpressionStatement):  # inlined, one Python frame less per Monkey call
            value = evaluate(statement.expression, env)
        else:
            value = evaluate(statement, env)

        if isinstance(value, ReturnValue):
            return value.value
        elif is_error(value):
            return value
        elif value is not None:
            result = value
    return result


def _eval_block_statement(block, env):
    result = NULL
    for statement in block.statements:
        if isinstance(statement, ast.ExpressionStatement):
            value = evaluate(statement.expression, env)
        else:
            value = evaluate(statement, env)

        if _interrupts(value):
            return value  # ReturnValue is left wrapped for the enclosing call to unwrap
        elif value is not None:
            result = value
    return result


def _eval_expression_statement(statement, env):
    return evaluate(statement.expression, env)


def _eval_let_statement(statement, env):
    value = evaluate(statement.value, env)
    if _interrupts(value):
        return value

    env.set(statement.name.value, value)
    return None


def _eval_return_statement(statement, env):
    value = evaluate(statement.return_value, env)
    if _interrupts(value):
        return value
    return ReturnValue(value)


# expressions

def _eval_integer_literal(node, env):
    return Integer(node.value)


def _eval_boolean(node, env):
    return native_bool_to_boolean(node.value)


def _eval_identifier(node, env):
    value = env.get(node.value)
    if value is None:
        return Error(f"identifier not found: {node.value}")
    return value


def _eval_prefix_expression(node, env):
    right = evaluate(node.right, env)
    if _interrupts(right):
        return right

    if node.operator == "!":
        return native_bool_to_boolean(not is_truthy(right))
    elif node.operator == "-":
        if not isinstance(right, Integer):
            return Error(f"unknown operator: -{right.type}")
        return Integer(wrap_int64(-right.value))
    return Error(f"unknown operator: {node.operator}{right.type}")


def _eval_infix_expression(node, env):
    left = evaluate(node.left, env)
    if _interrupts(left):
        return left

    right = evaluate(node.right, env)
    if _interrupts(right):
        return right

    return eval_infix(node.operator, left, right)


def eval_infix(operator, left, right):
    """Applies infix operator to two already evaluated operands."""
    if isinstance(left, Integer) and isinstance(right, Integer):
        return _eval_integer_infix(operator, left, right)
    elif isinstance(left, Boolean) and isinstance(right, Boolean) and operator in ["==", "!="]:
        # TRUE and FALSE are singletons, so identity is equality
        return native_bool_to_boolean((left is right) == (operator == "=="))
    elif left.type != right.type and operator in ARITHMETIC:
        return Error(f"type mismatch: {left.type} {operator} {right.type}")
    return Error(f"unknown operator: {left.type} {operator} {right.type}")


def _eval_integer_infix(operator, left, right):
    a, b = left.value, right.value

    if operator == "+":
        return Integer(wrap_int64(a + b))
    elif operator == "-":
        return Integer(wrap_int64(a - b))
    elif operator == "*":
        return Integer(wrap_int64(a * b))
    elif operator == "/":
        if b == 0:
            return Error(f"division by zero: {a} / {b}")
        quotient = abs(a) // abs(b)  # truncates toward zero
        return Integer(wrap_int64(quotient if (a < 0) == (b < 0) else -quotient))
    elif operator == "<":
        return native_bool_to_boolean(a < b)
    elif operator == ">":
        return native_bool_to_boolean(a > b)
    elif operator == "==":
        return native_bool_to_boolean(a == b)
    elif operator == "!=":
        return native_bool_to_boolean(a != b)
    return Error(f"unknown operator: {left.type} {operator} {right.type}")


def _eval_if_expression(node, env):
    condition = evaluate(node.condition, env)
    if _interrupts(condition):
        return condition

    if is_truthy(condition):
        return _eval_block_statement(node.consequence, env)
    elif node.alternative is not None:
        return _eval_block_statement(node.alternative, env)
    return NULL


def _eval_function_literal(node, env):
    return Function(node.parameters, node.body, env)


def _eval_call_expression(node, env):
    function = evaluate(node.function, env)
    if _interrupts(function):
        return function
    if not isinstance(function, Function):
        return Error(f"not a function: {function.type}")

    args = []
    for argument in node.arguments:  # left to right, in the caller's environment
        value = evaluate(argument, env)
        if _interrupts(value):
            return value
        args.append(value)

    return apply_function(function, args)


def apply_function(function, args):
    """Calls function with already evaluated args. Extra arguments are ignored; missing ones are bound to null."""
    if not isinstance(function, Function):
        return Error(f"not a function: {function.type}")

    call_env = Environment.enclosed(function.env)
    for idx, param in enumerate(function.parameters):
        call_env.set(param.value, args[idx] if idx < len(args) else NULL)

    result = _eval_block_statement(function.body, call_env)
    if isinstance(result, ReturnValue):
        return result.value
    return result


EVALUATORS = {
    ast.Program: _eval_program,
    ast.BlockStatement: _eval_block_statement,
    ast.ExpressionStatement: _eval_expression_statement,
    ast.LetStatement: _eval_let_statement,
    ast.ReturnStatement: _eval_return_statement,
    ast.IntegerLiteral: _eval_integer_literal,
    ast.Boolean: _eval_boolean,
    ast.Identifier: _eval_identifier,
    ast.PrefixExpression: _eval_prefix_expression,
    ast.InfixExpression: _eval_infix_expression,
    ast.IfExpression: _eval_if_expression,
    ast.FunctionLiteral: _eval_function_literal,
    ast.CallExpression: _eval_call_expression,
}
