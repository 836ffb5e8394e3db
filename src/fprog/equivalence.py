"""
Semantic equivalence of F-programs.

Two programs are equivalent when every output they share takes the same
value in both, for every assignment of the input variables.

Procedure:
    1. Both programs must pass validate(). A malformed program is a
       programming error: ProgramInvariantError propagates.
    2. Output-variable sets are compared. Different sets mean "not
       equivalent" and no query is built.
    3. Input-variable sets are NOT compared. An input read by only one
       program is a don't-care for the other.
    4. The pair is encoded as a disagreement query (fprog.encoder).
    5. The decision procedure decides it.
    6. Satisfiable means a counterexample exists, so the verdict is the
       negation of the solver's answer.

Solver failures (SolverError) propagate unchanged. Nothing here retries
or assumes an answer.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Set

from fprog.config import EquivalenceConfig
from fprog.encoder import encode_equivalence
from fprog.model import Program
from fprog.solvers import DecisionProcedure, create_solver

logger = logging.getLogger(__name__)


class Verdict(enum.Enum):
    EQUIVALENT = "equivalent"
    OUTPUTS_DIFFER = "outputs_differ"
    COUNTEREXAMPLE = "counterexample"


@dataclass
class EquivalenceResult:
    """Outcome of comparing two programs."""

    verdict: Verdict
    counterexample: Optional[Dict[str, bool]] = None
    only_in_left: Set[str] = field(default_factory=set)
    only_in_right: Set[str] = field(default_factory=set)
    backend: Optional[str] = None

    @property
    def equivalent(self) -> bool:
        return self.verdict is Verdict.EQUIVALENT

    def __bool__(self) -> bool:
        return self.equivalent


def check_equivalence(
    left: Program,
    right: Program,
    solver: Optional[DecisionProcedure] = None,
    config: Optional[EquivalenceConfig] = None,
) -> EquivalenceResult:
    """
    Decide whether two programs are semantically equivalent.

    Args:
        left: First program
        right: Second program
        solver: Decision procedure to use; built from `config` when None
        config: Used only when no solver is given (default: z3)

    Returns:
        EquivalenceResult; a counterexample is attached when the solver
        found a disagreeing input assignment

    Raises:
        ProgramInvariantError: if either program is malformed
        SolverError: if the decision procedure cannot decide
    """
    left.validate()
    right.validate()

    left_outputs = {v.name for v in left.output_variables()}
    right_outputs = {v.name for v in right.output_variables()}
    if left_outputs != right_outputs:
        logger.debug(
            "Output variables differ: only left %s, only right %s",
            sorted(left_outputs - right_outputs),
            sorted(right_outputs - left_outputs),
        )
        return EquivalenceResult(
            verdict=Verdict.OUTPUTS_DIFFER,
            only_in_left=left_outputs - right_outputs,
            only_in_right=right_outputs - left_outputs,
        )

    if solver is None:
        solver = create_solver(config)

    query = encode_equivalence(left, right)
    logger.debug(
        "Checking %d outputs over %d inputs with %s",
        len(query.outputs), len(query.inputs), solver.name,
    )
    outcome = solver.solve(query)

    if outcome.satisfiable:
        return EquivalenceResult(
            verdict=Verdict.COUNTEREXAMPLE,
            counterexample=dict(outcome.witness) if outcome.witness is not None else None,
            backend=solver.name,
        )
    return EquivalenceResult(verdict=Verdict.EQUIVALENT, backend=solver.name)


@dataclass
class ComparisonReport:
    """All three relations between two programs."""

    equal: bool
    isomorphic: bool
    equivalence: EquivalenceResult

    @property
    def equivalent(self) -> bool:
        return self.equivalence.equivalent


def compare_programs(
    left: Program,
    right: Program,
    solver: Optional[DecisionProcedure] = None,
    config: Optional[EquivalenceConfig] = None,
) -> ComparisonReport:
    """
    Compare two programs by structure, by isomorphism and by semantics.

    The isomorphism policy comes from `config` (default: COMMUTATIVE).
    """
    config = config or EquivalenceConfig()
    return ComparisonReport(
        equal=left == right,
        isomorphic=left.isomorphic(right, config.isomorphism),
        equivalence=check_equivalence(left, right, solver=solver, config=config),
    )
