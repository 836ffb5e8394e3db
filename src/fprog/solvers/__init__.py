"""Decision procedures for equivalence queries (z3, truth table)."""

from typing import Optional

from fprog.config import EquivalenceConfig
from .base import DecisionProcedure, SolverError, SolverOutcome, SolverResult
from .truth_table import TruthTableDecisionProcedure
from .z3_backend import Z3DecisionProcedure


def create_solver(config: Optional[EquivalenceConfig] = None) -> DecisionProcedure:
    """Build the decision procedure named by `config.backend`."""
    config = config or EquivalenceConfig()
    if config.backend == "truth-table":
        return TruthTableDecisionProcedure(max_inputs=config.max_truth_table_inputs)
    return Z3DecisionProcedure(timeout_ms=config.timeout_ms)


__all__ = [
    "DecisionProcedure",
    "SolverError",
    "SolverOutcome",
    "SolverResult",
    "TruthTableDecisionProcedure",
    "Z3DecisionProcedure",
    "create_solver",
]
