"""
Core F-Program Model

Defines the program object: an ordered collection of assignment
statements, one per output variable.

    X   := A AND B
    OUT := A OR (A AND B)

Statement order matters for rendering and for structural equality.
It does not matter for isomorphism or semantic equivalence.

ARCHITECTURAL RULE:
    Programs are immutable.
    append, merge and simplify return a new Program.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Iterator, Mapping, Optional, Tuple

from fprog.backends.text import format_lines
from fprog.expressions import VariableReference, variables
from fprog.interpreter import evaluate_program
from fprog.isomorphism import IsomorphismPolicy, unordered_match
from fprog.statements import AssignmentStatement, MalformedStatementError

if TYPE_CHECKING:
    from fprog.solvers.base import DecisionProcedure


class ProgramInvariantError(ValueError):
    """Raised when a program is empty, assigns an output twice, or holds a malformed statement."""
    pass


@dataclass(frozen=True)
class Program:
    """
    Root container for one F-program.

    Properties:
        statements:
            Assignment statements in source order. Any iterable is
            accepted and copied into a tuple owned by the program.

    INVARIANTS (checked by validate()):
        - At least one statement
        - No two statements assign the same output variable
        - Every statement is well-formed

    Program() builds the empty program. It exists as a neutral starting
    point for append/merge and always fails validate().
    """

    statements: Tuple[AssignmentStatement, ...] = ()

    def __post_init__(self):
        if not isinstance(self.statements, tuple):
            object.__setattr__(self, "statements", tuple(self.statements))

    def __len__(self) -> int:
        return len(self.statements)

    def __iter__(self) -> Iterator[AssignmentStatement]:
        return iter(self.statements)

    # =========================================================================
    # INVARIANTS
    # =========================================================================

    def validate(self) -> bool:
        """
        Check every program invariant.

        Returns:
            True when the program is well-formed

        Raises:
            ProgramInvariantError: for an empty program, duplicate output
                variables, or a malformed statement
        """
        if not self.statements:
            raise ProgramInvariantError("Program has no statements")

        for stmt in self.statements:
            if not isinstance(stmt, AssignmentStatement):
                raise ProgramInvariantError(f"Not an assignment statement: {stmt!r}")
            try:
                stmt.validate()
            except MalformedStatementError as e:
                raise ProgramInvariantError(str(e)) from e

        counts = Counter(stmt.output.name for stmt in self.statements)
        duplicates = sorted(name for name, count in counts.items() if count > 1)
        if duplicates:
            raise ProgramInvariantError(f"Duplicate output variables: {', '.join(duplicates)}")
        return True

    # =========================================================================
    # TRANSFORMS
    # =========================================================================

    def append(self, statement: AssignmentStatement) -> Program:
        return Program(self.statements + (statement,))

    def merge(self, other: Program) -> Program:
        """
        Combine two programs into one.

        The shorter statement sequence is appended to the longer one.
        Nothing is de-duplicated: an output assigned by both programs
        shows up twice and fails validate().
        """
        if len(self.statements) > len(other.statements):
            longer, shorter = self.statements, other.statements
        else:
            longer, shorter = other.statements, self.statements
        merged = Program(longer + shorter)
        assert len(merged) == len(self) + len(other)
        return merged

    def simplify(self) -> Program:
        return Program(stmt.simplify() for stmt in self.statements)

    # =========================================================================
    # DERIVED VARIABLE SETS
    # =========================================================================

    def output_variables(self) -> Tuple[VariableReference, ...]:
        """
        Distinct output variables, sorted by name.

        Compare results with set semantics; the ordering only keeps
        derived collections reproducible.
        """
        distinct = {stmt.output for stmt in self.statements}
        return tuple(sorted(distinct, key=lambda v: v.name))

    def input_variables(self) -> Tuple[str, ...]:
        """Names of every variable read on a right-hand side, sorted."""
        names = set()
        for stmt in self.statements:
            names.update(variables(stmt.expression))
        return tuple(sorted(names))

    def evaluate(self, assignment: Mapping[str, bool]) -> Dict[str, bool]:
        return evaluate_program(self, assignment)

    # =========================================================================
    # COMPARISON
    # =========================================================================

    def isomorphic(
        self,
        other: object,
        policy: IsomorphismPolicy = IsomorphismPolicy.COMMUTATIVE,
    ) -> bool:
        """
        Check that two programs hold the same statements in any order.

        Each statement must pair with exactly one isomorphic statement
        of the other program.
        """
        if type(other) is not Program:
            return False
        return unordered_match(
            self.statements,
            other.statements,
            lambda a, b: a.isomorphic(b, policy),
        )

    def equivalent(self, other: object, solver: Optional[DecisionProcedure] = None) -> bool:
        """
        Check that two programs compute the same outputs for every input.

        Both programs must pass validate(); ProgramInvariantError is
        raised otherwise. See fprog.equivalence.check_equivalence.
        """
        if type(other) is not Program:
            return False
        from fprog.equivalence import check_equivalence
        return check_equivalence(self, other, solver=solver).equivalent

    def __str__(self) -> str:
        return format_lines(str(stmt) for stmt in self.statements)
