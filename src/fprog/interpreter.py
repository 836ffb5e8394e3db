"""
Interpreter for boolean expressions and F-programs.

Evaluates ASTs under a concrete input assignment. Used by the
truth-table decision procedure and for replaying counterexamples.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Mapping

from fprog.expressions import (
    Expression,
    BinaryExpression,
    BinaryOperator,
    UnaryExpression,
    UnaryOperator,
    VariableReference,
    Literal,
)

if TYPE_CHECKING:
    from fprog.model import Program


class UnboundVariableError(KeyError):
    """Raised when an expression reads a variable missing from the assignment."""
    pass


def evaluate(expr: Expression, assignment: Mapping[str, bool]) -> bool:
    if isinstance(expr, Literal):
        return bool(expr.value)
    if isinstance(expr, VariableReference):
        try:
            return bool(assignment[expr.name])
        except KeyError:
            raise UnboundVariableError(expr.name) from None
    if isinstance(expr, UnaryExpression):
        if expr.operator is UnaryOperator.NOT:
            return not evaluate(expr.operand, assignment)
    if isinstance(expr, BinaryExpression):
        left = evaluate(expr.left, assignment)
        right = evaluate(expr.right, assignment)
        if expr.operator is BinaryOperator.AND:
            return left and right
        if expr.operator is BinaryOperator.OR:
            return left or right
        if expr.operator is BinaryOperator.XOR:
            return left != right
    raise TypeError(f"Unsupported Expression type: {type(expr)}")


def evaluate_program(program: Program, assignment: Mapping[str, bool]) -> Dict[str, bool]:
    """
    Compute every output of a program.

    Right-hand sides only read `assignment`; an output name that appears
    on a right-hand side is read from the assignment like any input.

    Returns:
        Mapping of output variable name to its value
    """
    return {
        stmt.output.name: evaluate(stmt.expression, assignment)
        for stmt in program.statements
    }
