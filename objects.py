"""
Monkey Object Model
Runtime values produced by the interpreter
"""

from typing import Any, Tuple, Union
from dataclasses import dataclass, field

from syntax_tree import BlockStatement


INTEGER_OBJ = "INTEGER"
BOOLEAN_OBJ = "BOOLEAN"
NULL_OBJ = "NULL"
FUNCTION_OBJ = "FUNCTION"
RETURN_VALUE_OBJ = "RETURN_VALUE"
ERROR_OBJ = "ERROR"


@dataclass(frozen=True)
class Integer:
  value: int
  type_name = INTEGER_OBJ

  def inspect(self) -> str:
    return str(self.value)


@dataclass(frozen=True)
class Boolean:
  value: bool
  type_name = BOOLEAN_OBJ

  def inspect(self) -> str:
    return "true" if self.value else "false"


@dataclass(frozen=True)
class Null:
  type_name = NULL_OBJ

  def inspect(self) -> str:
    return "null"


@dataclass(eq=False)
class Function:
  """User function closing over the environment it was defined in"""
  parameters: Tuple[str, ...]
  body: BlockStatement
  env: Any = field(repr=False)
  type_name = FUNCTION_OBJ

  def inspect(self) -> str:
    return f"fn({', '.join(self.parameters)}) {self.body}"


@dataclass(frozen=True)
class ReturnValue:
  """Carries a returned value out of nested blocks up to the call boundary"""
  value: "MonkeyObject"
  type_name = RETURN_VALUE_OBJ

  def inspect(self) -> str:
    return self.value.inspect()


@dataclass(frozen=True)
class Error:
  message: str
  type_name = ERROR_OBJ

  def inspect(self) -> str:
    return f"ERROR: {self.message}"


MonkeyObject = Union[Integer, Boolean, Null, Function, ReturnValue, Error]


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool_to_boolean(value: bool) -> Boolean:
  """Map a Python bool onto the canonical Boolean singletons"""
  return TRUE if value else FALSE


def is_truthy(obj: MonkeyObject) -> bool:
  """Only null and false are falsy"""
  if obj is NULL or isinstance(obj, Null):
    return False
  if isinstance(obj, Boolean):
    return obj.value
  return True


def is_error(obj: Any) -> bool:
  return isinstance(obj, Error)


def is_unwinding(obj: Any) -> bool:
  """True for values that stop evaluation and travel up to a call or program boundary"""
  return isinstance(obj, (Error, ReturnValue))
