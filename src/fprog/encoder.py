"""
Constraint encoder: turns a pair of programs into one satisfiability query.

The query is a miter. Each side's outputs get their own copy
(`OUT@left`, `OUT@right`), defined by that side's expression over the
shared inputs, and the formula asks for at least one output whose two
copies differ:

    AND( OUT@left <-> expr_left(OUT)   for each left statement  )
    AND( OUT@right <-> expr_right(OUT) for each right statement )
    AND OR( OUT@left XOR OUT@right     for each shared output   )

The formula is satisfiable exactly when some input assignment makes
the programs disagree. Inputs are shared by name; an input used by only
one side is a free variable the other side ignores.

The query is backend-neutral: it is built from fprog expressions, and
each DecisionProcedure translates it as it sees fit.
"""

from dataclasses import dataclass
from typing import Tuple

from fprog.expressions import (
    Expression,
    VariableReference,
    conjunction,
    disjunction,
    not_,
    xor_,
)
from fprog.model import Program


LEFT = "left"
RIGHT = "right"


@dataclass(frozen=True)
class EquivalenceQuery:
    """
    Satisfiability query asserting that two programs disagree.

    Properties:
        inputs:
            Sorted names of the free input variables (union of both sides)
        outputs:
            Sorted names of the output variables shared by both sides
        left, right:
            (output name, defining expression) pairs for each side
        definitions:
            One `OUT@side <-> expr` constraint per statement of either side
        mismatches:
            One `OUT@left XOR OUT@right` term per shared output

    The constraints are kept flat so backends can assert them one at a
    time; `formula` folds them into the single miter expression.
    """

    inputs: Tuple[str, ...]
    outputs: Tuple[str, ...]
    left: Tuple[Tuple[str, Expression], ...]
    right: Tuple[Tuple[str, Expression], ...]
    definitions: Tuple[Expression, ...]
    mismatches: Tuple[Expression, ...]

    @property
    def size(self) -> int:
        return len(self.left) + len(self.right)

    @property
    def formula(self) -> Expression:
        return conjunction(self.definitions + (disjunction(self.mismatches),))


def side_variable(name: str, side: str) -> VariableReference:
    """Per-side copy of an output; `@` keeps it apart from identifier-shaped inputs."""
    return VariableReference(f"{name}@{side}")


def _definitions(program: Program) -> Tuple[Tuple[str, Expression], ...]:
    return tuple((stmt.output.name, stmt.expression) for stmt in program.statements)


def _iff(a: Expression, b: Expression) -> Expression:
    return not_(xor_(a, b))


def encode_equivalence(left: Program, right: Program) -> EquivalenceQuery:
    """
    Build the disagreement query for two validated programs.

    Only outputs assigned by both programs are compared. Callers are
    expected to have rejected programs whose output sets differ.
    """
    inputs = tuple(sorted(set(left.input_variables()) | set(right.input_variables())))
    left_outputs = {v.name for v in left.output_variables()}
    right_outputs = {v.name for v in right.output_variables()}
    shared = tuple(sorted(left_outputs & right_outputs))

    left_defs = _definitions(left)
    right_defs = _definitions(right)

    definitions = tuple(_iff(side_variable(name, LEFT), expr) for name, expr in left_defs)
    definitions += tuple(_iff(side_variable(name, RIGHT), expr) for name, expr in right_defs)
    mismatches = tuple(
        xor_(side_variable(name, LEFT), side_variable(name, RIGHT)) for name in shared
    )

    return EquivalenceQuery(
        inputs=inputs,
        outputs=shared,
        left=left_defs,
        right=right_defs,
        definitions=definitions,
        mismatches=mismatches,
    )
