"""
Bounded brute-force decision procedure.

Enumerates every assignment of the query's inputs (FALSE before TRUE,
first input most significant) and evaluates both sides directly. The
first disagreement is returned as the witness. Exponential in the number
of inputs, so the input count is capped.
"""

import itertools
import logging
import time

from fprog.encoder import EquivalenceQuery
from fprog.interpreter import evaluate
from fprog.solvers.base import DecisionProcedure, SolverError, SolverOutcome, SolverResult

logger = logging.getLogger(__name__)


class TruthTableDecisionProcedure(DecisionProcedure):

    name = "truth-table"

    def __init__(self, max_inputs: int = 16):
        self.max_inputs = max_inputs

    def solve(self, query: EquivalenceQuery) -> SolverOutcome:
        n = len(query.inputs)
        if n > self.max_inputs:
            raise SolverError(
                f"Truth table over {n} inputs exceeds the limit of {self.max_inputs}"
            )

        left = dict(query.left)
        right = dict(query.right)
        t0 = time.monotonic()
        for values in itertools.product((False, True), repeat=n):
            assignment = dict(zip(query.inputs, values))
            for name in query.outputs:
                if evaluate(left[name], assignment) != evaluate(right[name], assignment):
                    elapsed = time.monotonic() - t0
                    logger.debug("truth-table: %s differs under %s", name, assignment)
                    return SolverOutcome(SolverResult.SAT, witness=assignment, time_seconds=elapsed)

        elapsed = time.monotonic() - t0
        logger.debug("truth-table: %d rows agree", 2 ** n)
        return SolverOutcome(SolverResult.UNSAT, time_seconds=elapsed)
