"""
Boolean Expression System for F-programs

Every right-hand side of an assignment formula is an Abstract Syntax
Tree (AST) over named variables, boolean constants and the boolean
operators NOT, AND, OR and XOR.

This ensures:
    - Structural comparison without string matching
    - Serialization capability
    - A single representation shared by the simplifier,
      the interpreter and the constraint encoder

ARCHITECTURAL RULE:
    No raw strings or code fragments in an F-program.
    All logic must be AST-based.
"""

import re
from abc import ABC
from dataclasses import dataclass
from enum import Enum
from functools import reduce
from typing import FrozenSet, Iterable


_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class MalformedExpressionError(ValueError):
    """Raised when an expression tree violates its well-formedness rules."""
    pass


class Expression(ABC):
    """
    Base class for all boolean AST expressions.

    This is intentionally minimal.
    It exists to provide type-safety for the expression hierarchy.

    DO NOT:
        - Add evaluation logic here (belongs in the interpreter)
        - Add string representations (belongs in backends)
        - Add rewrite rules here (belongs in the simplifier)

    This class is structure only.
    """
    pass


class BinaryOperator(Enum):
    """
    Binary boolean operators.

    AND, OR and XOR are all commutative; isomorphism relies on that.
    """

    AND = "AND"
    OR = "OR"
    XOR = "XOR"


class UnaryOperator(Enum):
    """Unary boolean operators."""
    NOT = "NOT"


@dataclass(frozen=True)
class VariableReference(Expression):
    """
    References a boolean variable by name.

    Examples:
        - A
        - carry_in
        - OUT

    The same class is used for the output side of an assignment
    statement and for inputs read on the right-hand side.

    IMPORTANT:
        This object does NOT validate the name on construction.
        Validation belongs in validate_expression().
    """

    name: str


@dataclass(frozen=True)
class Literal(Expression):
    """
    Represents a boolean constant.

    Properties:
        value: True or False
    """

    value: bool


@dataclass(frozen=True)
class UnaryExpression(Expression):
    """
    Represents a unary operation.

    Example:
        NOT (A AND B)

    Becomes:
        UnaryExpression(
            operator=UnaryOperator.NOT,
            operand=BinaryExpression(...)
        )
    """

    operator: UnaryOperator
    operand: Expression


@dataclass(frozen=True)
class BinaryExpression(Expression):
    """
    Represents a binary boolean expression.

    Example:
        A OR (A AND B)

    Becomes:
        BinaryExpression(
            operator=BinaryOperator.OR,
            left=VariableReference("A"),
            right=BinaryExpression(
                operator=BinaryOperator.AND,
                left=VariableReference("A"),
                right=VariableReference("B")
            )
        )

    IMPORTANT:
        This object is immutable (frozen=True).
        It contains structure only.
        It does NOT evaluate itself.
    """

    operator: BinaryOperator
    left: Expression
    right: Expression


TRUE = Literal(True)
FALSE = Literal(False)


def var(name: str) -> VariableReference:
    return VariableReference(name)


def lit(value: bool) -> Literal:
    return TRUE if value else FALSE


def not_(operand: Expression) -> UnaryExpression:
    return UnaryExpression(operator=UnaryOperator.NOT, operand=operand)


def and_(left: Expression, right: Expression) -> BinaryExpression:
    return BinaryExpression(operator=BinaryOperator.AND, left=left, right=right)


def or_(left: Expression, right: Expression) -> BinaryExpression:
    return BinaryExpression(operator=BinaryOperator.OR, left=left, right=right)


def xor_(left: Expression, right: Expression) -> BinaryExpression:
    return BinaryExpression(operator=BinaryOperator.XOR, left=left, right=right)


def conjunction(operands: Iterable[Expression]) -> Expression:
    """Left-folded AND of the operands; an empty conjunction is TRUE."""
    operands = list(operands)
    if not operands:
        return TRUE
    return reduce(and_, operands)


def disjunction(operands: Iterable[Expression]) -> Expression:
    """Left-folded OR of the operands; an empty disjunction is FALSE."""
    operands = list(operands)
    if not operands:
        return FALSE
    return reduce(or_, operands)


def variables(expr: Expression) -> FrozenSet[str]:
    """Collect the names of all variables referenced in an expression tree."""
    found = set()
    stack = [expr]
    while stack:
        node = stack.pop()
        if isinstance(node, VariableReference):
            found.add(node.name)
        elif isinstance(node, UnaryExpression):
            stack.append(node.operand)
        elif isinstance(node, BinaryExpression):
            stack.append(node.left)
            stack.append(node.right)
    return frozenset(found)


def is_identifier(name: object) -> bool:
    return isinstance(name, str) and _IDENTIFIER_RE.match(name) is not None


def validate_expression(expr: object) -> bool:
    """
    Check that an expression tree is well-formed.

    Rules:
        - Every node is one of the four Expression classes
        - Literals hold a bool (not 0/1, not a string)
        - Operators come from the matching operator enum
        - Variable names are identifiers

    Returns:
        True when the tree is well-formed

    Raises:
        MalformedExpressionError: on the first violation found
    """
    if isinstance(expr, VariableReference):
        if not is_identifier(expr.name):
            raise MalformedExpressionError(f"Invalid variable name: {expr.name!r}")
        return True
    if isinstance(expr, Literal):
        if not isinstance(expr.value, bool):
            raise MalformedExpressionError(f"Literal value must be a bool, got {expr.value!r}")
        return True
    if isinstance(expr, UnaryExpression):
        if not isinstance(expr.operator, UnaryOperator):
            raise MalformedExpressionError(f"Unsupported unary operator: {expr.operator!r}")
        return validate_expression(expr.operand)
    if isinstance(expr, BinaryExpression):
        if not isinstance(expr.operator, BinaryOperator):
            raise MalformedExpressionError(f"Unsupported binary operator: {expr.operator!r}")
        return validate_expression(expr.left) and validate_expression(expr.right)
    raise MalformedExpressionError(f"Unsupported Expression type: {type(expr).__name__}")
