"""
Monkey Operators
Prefix and infix operator tables and their dispatch on operand types
"""

from typing import Callable, Dict
import operator

from objects import (
  BOOLEAN_OBJ,
  INTEGER_OBJ,
  Error,
  Integer,
  MonkeyObject,
  FALSE,
  NULL,
  TRUE,
)
from utilities import (
  comparison_op,
  in_int64_range,
  integer_arithmetic_op,
  truncating_div,
  type_mismatch_error,
  unknown_infix_operator_error,
  unknown_prefix_operator_error,
)


# ============================================================================
# PREFIX OPERATORS
# ============================================================================

def monkey_bang(right: MonkeyObject) -> MonkeyObject:
  """Logical not: only false and null negate to true"""
  if right is FALSE or right is NULL:
    return TRUE
  if right is TRUE:
    return FALSE
  if right.type_name == BOOLEAN_OBJ:
    return FALSE if right.value else TRUE
  return FALSE


def monkey_negate(right: MonkeyObject) -> MonkeyObject:
  if right.type_name != INTEGER_OBJ:
    return unknown_prefix_operator_error("-", right)
  if not in_int64_range(-right.value):
    return Error(f"integer overflow: -{right.value}")
  return Integer(-right.value)


PREFIX_OPERATORS: Dict[str, Callable[[MonkeyObject], MonkeyObject]] = {
    '!': monkey_bang,
    '-': monkey_negate,
}


# ============================================================================
# INFIX OPERATORS
# ============================================================================

monkey_add = integer_arithmetic_op(operator.add, "+")
monkey_sub = integer_arithmetic_op(operator.sub, "-")
monkey_mul = integer_arithmetic_op(operator.mul, "*")
_monkey_quotient = integer_arithmetic_op(truncating_div, "/")


def monkey_div(left: Integer, right: Integer) -> MonkeyObject:
  """Integer division truncating toward zero"""
  if right.value == 0:
    return Error(f"division by zero: {left.value} / 0")
  return _monkey_quotient(left, right)


monkey_lt = comparison_op(operator.lt)
monkey_gt = comparison_op(operator.gt)
monkey_eq = comparison_op(operator.eq)
monkey_ne = comparison_op(operator.ne)


INTEGER_INFIX_OPERATORS: Dict[str, Callable[[MonkeyObject, MonkeyObject], MonkeyObject]] = {
    '+': monkey_add,
    '-': monkey_sub,
    '*': monkey_mul,
    '/': monkey_div,
    '<': monkey_lt,
    '>': monkey_gt,
    '==': monkey_eq,
    '!=': monkey_ne,
}

BOOLEAN_INFIX_OPERATORS: Dict[str, Callable[[MonkeyObject, MonkeyObject], MonkeyObject]] = {
    '==': monkey_eq,
    '!=': monkey_ne,
}

INFIX_OPERATORS_BY_TYPE = {
    INTEGER_OBJ: INTEGER_INFIX_OPERATORS,
    BOOLEAN_OBJ: BOOLEAN_INFIX_OPERATORS,
}


# ============================================================================
# DISPATCH
# ============================================================================

def apply_prefix_operator(op: str, right: MonkeyObject) -> MonkeyObject:
  op_func = PREFIX_OPERATORS.get(op)
  if op_func is None:
    return unknown_prefix_operator_error(op, right)
  return op_func(right)


def apply_infix_operator(op: str, left: MonkeyObject, right: MonkeyObject) -> MonkeyObject:
  """Apply op to two evaluated operands

  Operands of different types are a type mismatch; operands of one type
  without an entry for op in that type's table are an unknown operator.
  """
  if left.type_name != right.type_name:
    return type_mismatch_error(left, op, right)

  op_func = INFIX_OPERATORS_BY_TYPE.get(left.type_name, {}).get(op)
  if op_func is None:
    return unknown_infix_operator_error(left, op, right)
  return op_func(left, right)
