"""
Monkey Interpreter
Tree-walking evaluator: reduces AST nodes to runtime objects in an environment.
Runtime faults are Error objects that every step passes through unchanged.
"""

import sys
from typing import List, Optional

from syntax_tree import (
  BlockStatement,
  BooleanLiteral,
  CallExpression,
  ExpressionStatement,
  FunctionLiteral,
  Identifier,
  IfExpression,
  InfixExpression,
  IntegerLiteral,
  LetStatement,
  Node,
  PrefixExpression,
  Program,
  ReturnStatement,
)
from objects import (
  Error,
  Function,
  Integer,
  MonkeyObject,
  NULL,
  ReturnValue,
  is_error,
  is_truthy,
  is_unwinding,
  native_bool_to_boolean,
)
from environment import Environment
from operators import apply_infix_operator, apply_prefix_operator
from utilities import arity_error, identifier_not_found_error, not_a_function_error
from parsing import create_parser
from error_handling import MonkeyRuntimeError


# Each Monkey call nests roughly a dozen Python frames
RECURSION_LIMIT = 10000


# ============================================================================
# EVALUATION FUNCTIONS
# ============================================================================

def eval_node(node: Node, env: Environment, debug: bool = False) -> Optional[MonkeyObject]:
  """
  Evaluate an AST node in env and return the resulting object.
  Only let statements produce None (they have no value).
  """
  if debug:
    print(f"Evaluating: {type(node).__name__}")

  # Statements
  if isinstance(node, Program):
    return eval_program(node, env, debug)
  elif isinstance(node, BlockStatement):
    return eval_block_statement(node, env, debug)
  elif isinstance(node, ExpressionStatement):
    return eval_node(node.expression, env, debug)
  elif isinstance(node, LetStatement):
    return eval_let_statement(node, env, debug)
  elif isinstance(node, ReturnStatement):
    return eval_return_statement(node, env, debug)

  # Expressions
  elif isinstance(node, IntegerLiteral):
    return Integer(node.value)
  elif isinstance(node, BooleanLiteral):
    return native_bool_to_boolean(node.value)
  elif isinstance(node, Identifier):
    return eval_identifier(node, env, debug)
  elif isinstance(node, PrefixExpression):
    return eval_prefix_expression(node, env, debug)
  elif isinstance(node, InfixExpression):
    return eval_infix_expression(node, env, debug)
  elif isinstance(node, IfExpression):
    return eval_if_expression(node, env, debug)
  elif isinstance(node, FunctionLiteral):
    return Function(node.parameters, node.body, env)
  elif isinstance(node, CallExpression):
    return eval_call_expression(node, env, debug)

  raise TypeError(f"Unknown node type: {type(node).__name__}")


def eval_program(program: Program, env: Environment, debug: bool = False) -> Optional[MonkeyObject]:
  """Evaluate top-level statements; a return ends the program with its value"""
  result = NULL
  for statement in program.statements:
    result = eval_node(statement, env, debug)

    if isinstance(result, ReturnValue):
      return result.value
    if is_error(result):
      return result

  return result


def eval_block_statement(block: BlockStatement, env: Environment, debug: bool = False) -> MonkeyObject:
  """Evaluate a block; return values and errors leave it still wrapped"""
  result = NULL
  for statement in block.statements:
    result = eval_node(statement, env, debug)

    if isinstance(result, (ReturnValue, Error)):
      return result

  return NULL if result is None else result


def eval_let_statement(node: LetStatement, env: Environment, debug: bool = False) -> Optional[MonkeyObject]:
  value = eval_node(node.value, env, debug)
  if is_unwinding(value):
    return value

  env.set(node.name, value)
  return None


def eval_return_statement(node: ReturnStatement, env: Environment, debug: bool = False) -> MonkeyObject:
  value = eval_node(node.value, env, debug)
  if is_unwinding(value):
    return value
  return ReturnValue(value)


def eval_identifier(node: Identifier, env: Environment, debug: bool = False) -> MonkeyObject:
  """Evaluate identifier by looking up in environment"""
  value = env.get(node.name)
  if value is None:
    return identifier_not_found_error(node.name)
  return value


def eval_prefix_expression(node: PrefixExpression, env: Environment, debug: bool = False) -> MonkeyObject:
  right = eval_node(node.right, env, debug)
  if is_unwinding(right):
    return right
  return apply_prefix_operator(node.operator, right)


def eval_infix_expression(node: InfixExpression, env: Environment, debug: bool = False) -> MonkeyObject:
  """Evaluate binary operation, left operand first"""
  left = eval_node(node.left, env, debug)
  if is_unwinding(left):
    return left

  right = eval_node(node.right, env, debug)
  if is_unwinding(right):
    return right

  return apply_infix_operator(node.operator, left, right)


def eval_if_expression(node: IfExpression, env: Environment, debug: bool = False) -> MonkeyObject:
  condition = eval_node(node.condition, env, debug)
  if is_unwinding(condition):
    return condition

  if is_truthy(condition):
    return eval_node(node.consequence, env, debug)
  elif node.alternative is not None:
    return eval_node(node.alternative, env, debug)
  return NULL


def eval_expressions(expressions, env: Environment, debug: bool = False) -> List[MonkeyObject]:
  """
  Evaluate expressions left to right.
  Stops at the first error (or return escaping a nested block) and returns
  it as a one-element list.
  """
  results = []
  for expression in expressions:
    evaluated = eval_node(expression, env, debug)
    if is_unwinding(evaluated):
      return [evaluated]
    results.append(evaluated)
  return results


def eval_call_expression(node: CallExpression, env: Environment, debug: bool = False) -> MonkeyObject:
  """Evaluate function application"""
  function = eval_node(node.function, env, debug)
  if is_unwinding(function):
    return function

  args = eval_expressions(node.arguments, env, debug)
  if len(args) == 1 and is_unwinding(args[0]):
    return args[0]

  return apply_function(function, args, debug)


def apply_function(function: MonkeyObject, args: List[MonkeyObject], debug: bool = False) -> MonkeyObject:
  if not isinstance(function, Function):
    return not_a_function_error(function)

  if len(args) != len(function.parameters):
    return arity_error(len(function.parameters), len(args))

  extended_env = extend_function_env(function, args)
  evaluated = eval_node(function.body, extended_env, debug)
  return unwrap_return_value(evaluated)


def extend_function_env(function: Function, args: List[MonkeyObject]) -> Environment:
  env = Environment.new_enclosed_environment(function.env)
  for name, value in zip(function.parameters, args):
    env.set(name, value)
  return env


def unwrap_return_value(obj: MonkeyObject) -> MonkeyObject:
  if isinstance(obj, ReturnValue):
    return obj.value
  return obj


# ============================================================================
# INTERPRETER FRONT END
# ============================================================================

class MonkeyInterpreter:
  """Evaluates programs against one long-lived global environment"""

  def __init__(self, debug: bool = False):
    self.debug = debug
    self.global_env = Environment()
    if sys.getrecursionlimit() < RECURSION_LIMIT:
      sys.setrecursionlimit(RECURSION_LIMIT)
    self.parser = create_parser(debug)

  def evaluate(self, program: Program, env: Optional[Environment] = None) -> Optional[MonkeyObject]:
    """
    Evaluate program (global environment by default).
    Runtime faults come back as Error objects; the environment stays usable.
    """
    if env is None:
      env = self.global_env
    try:
      return eval_node(program, env, self.debug)
    except RecursionError:
      return Error("maximum recursion depth exceeded")

  def interpret_program(self, program: Program) -> Optional[MonkeyObject]:
    """Evaluate program, raising MonkeyRuntimeError if it fails"""
    result = self.evaluate(program)
    if is_error(result):
      raise MonkeyRuntimeError(result.message)
    return result

  def run_source(self, text: str, filename: str = "<input>") -> Optional[MonkeyObject]:
    """Parse and evaluate source text in the global environment"""
    program = self.parser.parse_string(text, filename)
    return self.evaluate(program)


# ============================================================================
# FACTORY FUNCTIONS
# ============================================================================

def create_interpreter(debug: bool = False) -> MonkeyInterpreter:
  """Factory function returning an interpreter"""
  return MonkeyInterpreter(debug=debug)


def create_debug_interpreter() -> MonkeyInterpreter:
  """Factory function returning a debug interpreter"""
  return create_interpreter(debug=True)
