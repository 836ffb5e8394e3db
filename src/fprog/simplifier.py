"""
Boolean expression simplifier.

Applies a small set of semantics-preserving rewrite rules bottom-up
until nothing changes:

    NOT TRUE -> FALSE, NOT FALSE -> TRUE, NOT NOT x -> x
    x AND TRUE -> x,   x AND FALSE -> FALSE
    x OR TRUE -> TRUE, x OR FALSE -> x
    x XOR FALSE -> x,  x XOR TRUE -> NOT x
    x AND x -> x,      x OR x -> x,       x XOR x -> FALSE
    x AND NOT x -> FALSE,  x OR NOT x -> TRUE,  x XOR NOT x -> TRUE
    x OR (x AND y) -> x,   x AND (x OR y) -> x

Every rule is checked in both operand orders. The program model treats
this module as an opaque per-statement transform.
"""

from fprog.expressions import (
    Expression,
    BinaryExpression,
    BinaryOperator,
    UnaryExpression,
    UnaryOperator,
    Literal,
    TRUE,
    FALSE,
    not_,
)


def _is_negation_of(a: Expression, b: Expression) -> bool:
    return (
        (isinstance(a, UnaryExpression) and a.operator is UnaryOperator.NOT and a.operand == b)
        or (isinstance(b, UnaryExpression) and b.operator is UnaryOperator.NOT and b.operand == a)
    )


def _absorbs(x: Expression, other: Expression, inner: BinaryOperator) -> bool:
    """True when `other` is `x <inner> y` or `y <inner> x`."""
    return (
        isinstance(other, BinaryExpression)
        and other.operator is inner
        and (other.left == x or other.right == x)
    )


def _simplify_not(operand: Expression) -> Expression:
    if isinstance(operand, Literal):
        return FALSE if operand.value else TRUE
    if isinstance(operand, UnaryExpression) and operand.operator is UnaryOperator.NOT:
        return operand.operand
    return not_(operand)


def _simplify_binary(op: BinaryOperator, left: Expression, right: Expression) -> Expression:
    # Constants
    for const, other in ((left, right), (right, left)):
        if isinstance(const, Literal):
            if op is BinaryOperator.AND:
                return other if const.value else FALSE
            if op is BinaryOperator.OR:
                return TRUE if const.value else other
            if op is BinaryOperator.XOR:
                return _simplify_not(other) if const.value else other

    # Idempotence and complement
    if left == right:
        return FALSE if op is BinaryOperator.XOR else left
    if _is_negation_of(left, right):
        return FALSE if op is BinaryOperator.AND else TRUE

    # Absorption
    if op is BinaryOperator.OR:
        if _absorbs(left, right, BinaryOperator.AND):
            return left
        if _absorbs(right, left, BinaryOperator.AND):
            return right
    if op is BinaryOperator.AND:
        if _absorbs(left, right, BinaryOperator.OR):
            return left
        if _absorbs(right, left, BinaryOperator.OR):
            return right

    return BinaryExpression(operator=op, left=left, right=right)


def _simplify_once(expr: Expression) -> Expression:
    if isinstance(expr, UnaryExpression):
        return _simplify_not(_simplify_once(expr.operand))
    if isinstance(expr, BinaryExpression):
        return _simplify_binary(expr.operator, _simplify_once(expr.left), _simplify_once(expr.right))
    return expr


def simplify(expr: Expression) -> Expression:
    """Rewrite `expr` to a fixpoint of the rules listed in the module docstring."""
    current = expr
    while True:
        simplified = _simplify_once(current)
        if simplified == current:
            return simplified
        current = simplified
