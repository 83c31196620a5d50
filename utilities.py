"""
Utilities module for the Monkey interpreter
Contains runtime error builders, integer range helpers and the factories the
operator tables are built from
"""

from typing import Any, Callable

from objects import (
  Error,
  Integer,
  MonkeyObject,
  native_bool_to_boolean,
)


INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


# ==================== ERROR MESSAGE BUILDERS ====================

def type_mismatch_error(left: MonkeyObject, operator: str, right: MonkeyObject) -> Error:
  """
  Generate type mismatch error for an infix operation

  Args:
    left: Left operand
    operator: Operator symbol
    right: Right operand

  Returns:
    Error object, e.g. "type mismatch: INTEGER + BOOLEAN"
  """
  return Error(f"type mismatch: {left.type_name} {operator} {right.type_name}")


def unknown_infix_operator_error(left: MonkeyObject, operator: str, right: MonkeyObject) -> Error:
  """
  Generate error for an infix operator undefined on its operand types

  Args:
    left: Left operand
    operator: Operator symbol
    right: Right operand

  Returns:
    Error object, e.g. "unknown operator: BOOLEAN + BOOLEAN"
  """
  return Error(f"unknown operator: {left.type_name} {operator} {right.type_name}")


def unknown_prefix_operator_error(operator: str, right: MonkeyObject) -> Error:
  """Generate error for a prefix operator undefined on its operand type"""
  return Error(f"unknown operator: {operator}{right.type_name}")


def identifier_not_found_error(name: str) -> Error:
  return Error(f"identifier not found: {name}")


def not_a_function_error(value: MonkeyObject) -> Error:
  return Error(f"not a function: {value.type_name}")


def arity_error(expected: int, got: int) -> Error:
  """
  Generate arity mismatch error

  Args:
    expected: Number of declared parameters
    got: Number of arguments supplied

  Returns:
    Error object with formatted message
  """
  return Error(f"wrong number of arguments: want={expected}, got={got}")


# ==================== INTEGER HELPERS ====================

def in_int64_range(value: int) -> bool:
  return INT64_MIN <= value <= INT64_MAX


def truncating_div(dividend: int, divisor: int) -> int:
  """
  Integer division rounding toward zero (Python's // rounds toward -inf)

  Examples:
    truncating_div(7, 2) -> 3
    truncating_div(-7, 2) -> -3
  """
  quotient = abs(dividend) // abs(divisor)
  return quotient if (dividend < 0) == (divisor < 0) else -quotient


# ==================== BINARY OPERATION FACTORIES ====================

def integer_arithmetic_op(
  op: Callable[[int, int], int],
  symbol: str
) -> Callable[[Integer, Integer], MonkeyObject]:
  """
  Factory for arithmetic on two Integer operands

  Results outside the signed 64-bit range become an Error rather than
  silently growing.

  Args:
    op: Function on the raw Python ints (e.g., operator.add)
    symbol: Operator symbol for error messages

  Returns:
    Function that performs the arithmetic operation

  Examples:
    monkey_add = integer_arithmetic_op(operator.add, "+")
    monkey_add(Integer(1), Integer(2)) -> Integer(3)
  """
  def arithmetic(left: Integer, right: Integer) -> MonkeyObject:
    result = op(left.value, right.value)
    if not in_int64_range(result):
      return Error(f"integer overflow: {left.value} {symbol} {right.value}")
    return Integer(result)

  return arithmetic


def comparison_op(op: Callable[[Any, Any], bool]) -> Callable[[MonkeyObject, MonkeyObject], MonkeyObject]:
  """
  Factory for comparisons on operands of one type

  Args:
    op: Python comparison (e.g., operator.lt)

  Returns:
    Function comparing the operands' raw values, answering TRUE or FALSE
  """
  def comparison(left: MonkeyObject, right: MonkeyObject) -> MonkeyObject:
    return native_bool_to_boolean(op(left.value, right.value))

  return comparison
