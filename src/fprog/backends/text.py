"""
Plain-text rendering of F-program ASTs.

    OUT := (A AND B) OR NOT C

Nested binary sub-expressions are always parenthesised, so the output
is unambiguous without precedence rules. The text is meant for
printing and logging, it is never parsed back.
"""

import os
from typing import Iterable

from fprog.expressions import (
    Expression,
    BinaryExpression,
    BinaryOperator,
    UnaryExpression,
    UnaryOperator,
    VariableReference,
    Literal,
)


_BINARY_SYMBOLS = {
    BinaryOperator.AND: "AND",
    BinaryOperator.OR: "OR",
    BinaryOperator.XOR: "XOR",
}


def _format_operand(expr: Expression) -> str:
    if isinstance(expr, BinaryExpression):
        return f"({format_expression(expr)})"
    return format_expression(expr)


def format_expression(expr: Expression) -> str:
    """Render an expression tree as a single line of text."""
    if isinstance(expr, BinaryExpression):
        left = _format_operand(expr.left)
        right = _format_operand(expr.right)
        op_str = _BINARY_SYMBOLS.get(expr.operator, str(expr.operator.value))
        return f"{left} {op_str} {right}"

    elif isinstance(expr, UnaryExpression):
        if expr.operator is UnaryOperator.NOT:
            return f"NOT {_format_operand(expr.operand)}"
        return f"{expr.operator.value} {_format_operand(expr.operand)}"

    elif isinstance(expr, VariableReference):
        return expr.name

    elif isinstance(expr, Literal):
        return "TRUE" if expr.value else "FALSE"

    return "?"


def format_statement(output: VariableReference, expression: Expression) -> str:
    return f"{output.name} := {format_expression(expression)}"


def format_lines(lines: Iterable[str], sep: str = os.linesep) -> str:
    """Join lines with `sep`; no trailing separator, no lines gives ''."""
    return sep.join(lines)
