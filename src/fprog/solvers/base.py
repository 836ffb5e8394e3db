"""
Decision procedure interface.

A decision procedure answers one question about an EquivalenceQuery:
is there an input assignment that satisfies it? For the miter built by
fprog.encoder, a satisfying assignment is a counterexample to
equivalence.

Backends never guess. A backend that cannot decide (timeout,
interruption, size limit, internal failure) raises SolverError.
"""

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional

from fprog.encoder import EquivalenceQuery


class SolverError(RuntimeError):
    """Raised when a decision procedure cannot decide a query."""
    pass


class SolverResult(enum.Enum):
    SAT = "sat"
    UNSAT = "unsat"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class SolverOutcome:
    """Result from a decision procedure invocation."""
    result: SolverResult
    witness: Optional[Dict[str, bool]] = None
    time_seconds: float = 0.0

    @property
    def satisfiable(self) -> bool:
        if self.result is SolverResult.UNKNOWN:
            raise SolverError("Decision procedure returned UNKNOWN")
        return self.result is SolverResult.SAT


class DecisionProcedure(ABC):
    """Abstract decision procedure for equivalence queries."""

    name = "abstract"

    @abstractmethod
    def solve(self, query: EquivalenceQuery) -> SolverOutcome:
        """
        Decide the query.

        Returns:
            SAT with a witness over query.inputs, or UNSAT

        Raises:
            SolverError: if the backend cannot decide the query
        """
        ...

    def check(self, query: EquivalenceQuery) -> bool:
        """True iff the query is satisfiable (a disagreeing input exists)."""
        return self.solve(query).satisfiable
