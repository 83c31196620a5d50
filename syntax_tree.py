"""
Monkey Abstract Syntax Tree
Immutable node types produced by the parser and walked by the interpreter.
str() of any node renders source text that parses back to an equal tree.
"""

from typing import Optional, Tuple, Union
from dataclasses import dataclass, fields, is_dataclass


# ============================================================================
# EXPRESSIONS
# ============================================================================

@dataclass(frozen=True)
class IntegerLiteral:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BooleanLiteral:
    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class Identifier:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class PrefixExpression:
    operator: str
    right: "Expression"

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass(frozen=True)
class InfixExpression:
    left: "Expression"
    operator: str
    right: "Expression"

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass(frozen=True)
class IfExpression:
    condition: "Expression"
    consequence: "BlockStatement"
    alternative: Optional["BlockStatement"] = None

    def __str__(self) -> str:
        result = f"if ({self.condition}) {self.consequence}"
        if self.alternative is not None:
            result += f" else {self.alternative}"
        return result


@dataclass(frozen=True)
class FunctionLiteral:
    parameters: Tuple[str, ...]
    body: "BlockStatement"

    def __str__(self) -> str:
        return f"fn({', '.join(self.parameters)}) {self.body}"


@dataclass(frozen=True)
class CallExpression:
    function: "Expression"
    arguments: Tuple["Expression", ...]

    def __str__(self) -> str:
        args = ", ".join(str(arg) for arg in self.arguments)
        return f"{self.function}({args})"


Expression = Union[
    IntegerLiteral, BooleanLiteral, Identifier, PrefixExpression,
    InfixExpression, IfExpression, FunctionLiteral, CallExpression,
]


# ============================================================================
# STATEMENTS
# ============================================================================

@dataclass(frozen=True)
class LetStatement:
    name: str
    value: Expression

    def __str__(self) -> str:
        return f"let {self.name} = {self.value};"


@dataclass(frozen=True)
class ReturnStatement:
    value: Expression

    def __str__(self) -> str:
        return f"return {self.value};"


@dataclass(frozen=True)
class ExpressionStatement:
    expression: Expression

    def __str__(self) -> str:
        return f"{self.expression};"


Statement = Union[LetStatement, ReturnStatement, ExpressionStatement]


@dataclass(frozen=True)
class BlockStatement:
    """Statements of an if branch or function body"""
    statements: Tuple[Statement, ...] = ()

    def __str__(self) -> str:
        if not self.statements:
            return "{ }"
        return "{ " + " ".join(str(stmt) for stmt in self.statements) + " }"


@dataclass(frozen=True)
class Program:
    """Top-level sequence of statements"""
    statements: Tuple[Statement, ...] = ()

    def __str__(self) -> str:
        return " ".join(str(stmt) for stmt in self.statements)


Node = Union[Program, BlockStatement, Statement, Expression]


# ============================================================================
# DEBUG OUTPUT
# ============================================================================

def pretty_print_ast(node: Node, indent: int = 0) -> str:
    """Pretty print an AST node as an indented tree for debugging"""
    pad = "  " * indent
    scalars = []
    children = []

    for f in fields(node):
        value = getattr(node, f.name)
        if is_dataclass(value):
            children.append((f.name, [value]))
        elif isinstance(value, tuple) and value and is_dataclass(value[0]):
            children.append((f.name, list(value)))
        elif value is not None:
            scalars.append(f"{f.name}={value!r}")

    result = pad + type(node).__name__
    if scalars:
        result += f"({', '.join(scalars)})"
    result += "\n"

    for name, nodes in children:
        result += f"{pad}  .{name}\n"
        for child in nodes:
            result += pretty_print_ast(child, indent + 2)

    return result
