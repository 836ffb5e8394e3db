"""
Decision procedure backed by the Z3 SMT solver.

Every solve() runs in a fresh z3.Context, so concurrent instances do not
share solver state and interrupt() only cancels this instance's queries.
"""

import logging
import threading
import time
from typing import Dict, List, Optional

import z3

from fprog.encoder import EquivalenceQuery
from fprog.expressions import (
    Expression,
    BinaryExpression,
    BinaryOperator,
    UnaryExpression,
    UnaryOperator,
    VariableReference,
    Literal,
)
from fprog.solvers.base import DecisionProcedure, SolverError, SolverOutcome, SolverResult

logger = logging.getLogger(__name__)


class Z3Translator:
    """Translates fprog expressions into z3 Bool terms inside one context."""

    def __init__(self, ctx: z3.Context):
        self.ctx = ctx
        self._vars: Dict[str, z3.BoolRef] = {}

    def variable(self, name: str) -> z3.BoolRef:
        if name not in self._vars:
            self._vars[name] = z3.Bool(name, self.ctx)
        return self._vars[name]

    def translate(self, expr: Expression) -> z3.BoolRef:
        if isinstance(expr, VariableReference):
            return self.variable(expr.name)
        if isinstance(expr, Literal):
            return z3.BoolVal(bool(expr.value), self.ctx)
        if isinstance(expr, UnaryExpression) and expr.operator is UnaryOperator.NOT:
            return z3.Not(self.translate(expr.operand))
        if isinstance(expr, BinaryExpression):
            if expr.operator is BinaryOperator.AND:
                return z3.And([self.translate(e) for e in _chain(expr)])
            if expr.operator is BinaryOperator.OR:
                return z3.Or([self.translate(e) for e in _chain(expr)])
            if expr.operator is BinaryOperator.XOR:
                return z3.Xor(self.translate(expr.left), self.translate(expr.right))
        raise SolverError(f"Cannot translate expression to z3: {expr!r}")


def _chain(expr: BinaryExpression) -> List[Expression]:
    """Operands of a run of nested same-operator nodes, left to right."""
    operands = []
    stack = [expr]
    while stack:
        node = stack.pop()
        if isinstance(node, BinaryExpression) and node.operator is expr.operator:
            stack.append(node.right)
            stack.append(node.left)
        else:
            operands.append(node)
    return operands


class _Run:
    """One solve() in flight on a Z3DecisionProcedure."""

    def __init__(self):
        self.ctx: Optional[z3.Context] = None
        self.cancelled = False


class Z3DecisionProcedure(DecisionProcedure):
    """
    Decision procedure backed by z3.

    Args:
        timeout_ms: Optional z3 `timeout` parameter. Left unset by default;
            when it fires, z3 answers unknown and solve() raises SolverError.

    interrupt() cancels every solve() running on the instance, including
    one that has not created its context yet.
    """

    name = "z3"

    def __init__(self, timeout_ms: Optional[int] = None):
        self.timeout_ms = timeout_ms
        self._lock = threading.Lock()
        self._runs: List[_Run] = []

    def interrupt(self) -> None:
        """Cancel the queries currently running on this instance, if any."""
        with self._lock:
            for run in self._runs:
                run.cancelled = True
                if run.ctx is not None:
                    run.ctx.interrupt()

    def solve(self, query: EquivalenceQuery) -> SolverOutcome:
        run = _Run()
        with self._lock:
            self._runs.append(run)
        try:
            return self._solve(run, query)
        except z3.Z3Exception as e:
            if run.cancelled:
                raise SolverError("z3 query interrupted") from e
            raise SolverError(f"z3 failed: {e}") from e
        finally:
            with self._lock:
                self._runs.remove(run)

    def _check_cancelled(self, run: _Run) -> None:
        if run.cancelled:
            raise SolverError("z3 query interrupted")

    def _solve(self, run: _Run, query: EquivalenceQuery) -> SolverOutcome:
        ctx = z3.Context()
        with self._lock:
            run.ctx = ctx
            self._check_cancelled(run)

        translator = Z3Translator(ctx)
        solver = z3.Solver(ctx=ctx)
        if self.timeout_ms is not None:
            solver.set("timeout", self.timeout_ms)
        for constraint in query.definitions:
            solver.add(translator.translate(constraint))
        mismatches = [translator.translate(m) for m in query.mismatches]
        solver.add(z3.Or(mismatches) if mismatches else z3.BoolVal(False, ctx))

        logger.debug("z3: %d inputs, %d definitions", len(query.inputs), query.size)
        with self._lock:
            self._check_cancelled(run)
        t0 = time.monotonic()
        result = solver.check()
        elapsed = time.monotonic() - t0
        logger.debug("z3: %s in %.3fs", result, elapsed)

        if result == z3.sat:
            model = solver.model()
            witness = {
                name: z3.is_true(model.eval(translator.variable(name), model_completion=True))
                for name in query.inputs
            }
            return SolverOutcome(SolverResult.SAT, witness=witness, time_seconds=elapsed)
        if result == z3.unsat:
            return SolverOutcome(SolverResult.UNSAT, time_seconds=elapsed)
        self._check_cancelled(run)
        raise SolverError(f"z3 returned unknown: {solver.reason_unknown()}")
