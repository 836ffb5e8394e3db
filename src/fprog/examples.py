"""
Example program builders used by the demo and the tests.

Builds a few small combinational circuits, each in more than one
syntactic form, so equivalence and isomorphism have something to bite on.
"""
from fprog.model import Program
from fprog.statements import AssignmentStatement
from fprog.expressions import (
    Expression,
    var,
    not_,
    and_,
    or_,
    xor_,
    disjunction,
    conjunction,
)


def _assign(name: str, expr: Expression) -> AssignmentStatement:
    return AssignmentStatement(output=var(name), expression=expr)


def majority(a: str, b: str, c: str) -> Expression:
    # (a AND b) OR (a AND c) OR (b AND c)
    return disjunction([
        and_(var(a), var(b)),
        and_(var(a), var(c)),
        and_(var(b), var(c)),
    ])


def build_majority_program(output: str = "MAJ") -> Program:
    return Program([_assign(output, majority("A", "B", "C"))])


def build_factored_majority_program(output: str = "MAJ") -> Program:
    # A AND (B OR C) OR (B AND C)
    expr = or_(
        and_(var("A"), or_(var("B"), var("C"))),
        and_(var("B"), var("C")),
    )
    return Program([_assign(output, expr)])


def build_full_adder_program() -> Program:
    """SUM := (A XOR B) XOR CIN, COUT := majority(A, B, CIN)."""
    return Program([
        _assign("SUM", xor_(xor_(var("A"), var("B")), var("CIN"))),
        _assign("COUT", majority("A", "B", "CIN")),
    ])


def build_sum_of_products_full_adder() -> Program:
    """The same adder written only with AND, OR and NOT, outputs in reverse order."""
    a, b, c = var("A"), var("B"), var("CIN")
    na, nb, nc = not_(a), not_(b), not_(c)
    total = disjunction([
        conjunction([a, nb, nc]),
        conjunction([na, b, nc]),
        conjunction([na, nb, c]),
        conjunction([a, b, c]),
    ])
    carry = or_(and_(a, b), and_(c, or_(a, b)))
    return Program([
        _assign("COUT", carry),
        _assign("SUM", total),
    ])


def build_faulty_full_adder() -> Program:
    """Carry is missing the (B AND CIN) term."""
    return Program([
        _assign("SUM", xor_(xor_(var("A"), var("B")), var("CIN"))),
        _assign("COUT", or_(and_(var("A"), var("B")), and_(var("A"), var("CIN")))),
    ])
