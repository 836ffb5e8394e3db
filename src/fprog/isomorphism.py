"""
Reordering-tolerant comparison of expressions and statement collections.

Two relations live here:
    - expression isomorphism, parameterised by an IsomorphismPolicy
    - unordered matching of two collections under any pairwise relation

Unordered matching is an exhaustive correspondence search (bipartite
matching with augmenting paths), never a sort: the pairwise relation is
not required to agree with any total order.
"""

from enum import Enum
from typing import Callable, List, Optional, Sequence, TypeVar

from fprog.expressions import (
    Expression,
    BinaryExpression,
    UnaryExpression,
    VariableReference,
    Literal,
)


T = TypeVar("T")


class IsomorphismPolicy(Enum):
    """
    How permissive expression isomorphism is.

    STRUCTURAL:
        Same tree, same operand order. Identical to equality.
    COMMUTATIVE:
        Operands of AND, OR and XOR may be swapped at any node,
        recursively. `A AND B` is isomorphic to `B AND A`.
    """

    STRUCTURAL = "structural"
    COMMUTATIVE = "commutative"


def expressions_isomorphic(
    left: Expression,
    right: Expression,
    policy: IsomorphismPolicy = IsomorphismPolicy.COMMUTATIVE,
) -> bool:
    if policy is IsomorphismPolicy.STRUCTURAL:
        return left == right

    if isinstance(left, BinaryExpression) and isinstance(right, BinaryExpression):
        if left.operator != right.operator:
            return False
        if (expressions_isomorphic(left.left, right.left, policy)
                and expressions_isomorphic(left.right, right.right, policy)):
            return True
        return (expressions_isomorphic(left.left, right.right, policy)
                and expressions_isomorphic(left.right, right.left, policy))

    if isinstance(left, UnaryExpression) and isinstance(right, UnaryExpression):
        return (left.operator == right.operator
                and expressions_isomorphic(left.operand, right.operand, policy))

    if isinstance(left, (VariableReference, Literal)):
        return left == right

    return False


def _augment(
    i: int,
    adjacency: List[List[int]],
    match_of_right: List[Optional[int]],
    seen: List[bool],
) -> bool:
    for j in adjacency[i]:
        if seen[j]:
            continue
        seen[j] = True
        if match_of_right[j] is None or _augment(match_of_right[j], adjacency, match_of_right, seen):
            match_of_right[j] = i
            return True
    return False


def unordered_match(
    left: Sequence[T],
    right: Sequence[T],
    related: Callable[[T, T], bool],
) -> bool:
    """
    Check that two sequences are equal as multisets under `related`.

    Every element of `left` must be paired with exactly one element of
    `right` (and vice versa) such that related(l, r) holds.

    Args:
        left: First collection
        right: Second collection
        related: Pairwise relation, evaluated for every (l, r) pair

    Returns:
        True iff a perfect matching exists
    """
    if len(left) != len(right):
        return False

    adjacency = [
        [j for j, r in enumerate(right) if related(l, r)]
        for l in left
    ]
    if any(not candidates for candidates in adjacency):
        return False

    match_of_right: List[Optional[int]] = [None] * len(right)
    for i in range(len(left)):
        if not _augment(i, adjacency, match_of_right, [False] * len(right)):
            return False
    return True
