"""
Program Analyzer — early diagnostics and inventory of F-programs.

This module provides lightweight analysis of Program objects:
    - Input/output variable inventory
    - Expression complexity metrics
    - Invariant problems (duplicate outputs) reported, not raised
    - Warning flags for suspicious formulas

IMPORTANT: This is read-only. It does NOT modify the program and it
does not require the program to pass validate().
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Set

from fprog.expressions import Expression, BinaryExpression, VariableReference, Literal, UnaryExpression
from fprog.model import Program
from fprog.simplifier import simplify


@dataclass
class ExpressionMetrics:
    """Metrics about a single expression tree."""
    depth: int = 0
    node_count: int = 0
    variable_references: Set[str] = field(default_factory=set)


def _analyze_expression(expr: Expression) -> ExpressionMetrics:
    """Recursively analyze an expression tree."""
    metrics = ExpressionMetrics(node_count=1)

    if isinstance(expr, BinaryExpression):
        left = _analyze_expression(expr.left)
        right = _analyze_expression(expr.right)
        metrics.depth = 1 + max(left.depth, right.depth)
        metrics.node_count += left.node_count + right.node_count
        metrics.variable_references.update(left.variable_references)
        metrics.variable_references.update(right.variable_references)

    elif isinstance(expr, UnaryExpression):
        operand = _analyze_expression(expr.operand)
        metrics.depth = 1 + operand.depth
        metrics.node_count += operand.node_count
        metrics.variable_references.update(operand.variable_references)

    elif isinstance(expr, VariableReference):
        metrics.variable_references.add(expr.name)

    elif isinstance(expr, Literal):
        # Literals don't reference variables
        pass

    return metrics


@dataclass
class ProgramReport:
    """Analysis report for one program."""

    total_statements: int = 0
    input_variables: Set[str] = field(default_factory=set)
    output_variables: Set[str] = field(default_factory=set)
    duplicate_outputs: Set[str] = field(default_factory=set)

    # Outputs that are also read on some right-hand side
    outputs_read_as_inputs: Set[str] = field(default_factory=set)
    # Outputs whose formula simplifies to TRUE/FALSE
    constant_outputs: Dict[str, bool] = field(default_factory=dict)

    # Expression complexity, keyed by output name
    depth_by_output: Dict[str, int] = field(default_factory=dict)
    max_expression_depth: int = 0
    total_expression_nodes: int = 0

    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def analyze_program(program: Program) -> ProgramReport:
    """
    Perform analysis of a Program.

    Returns a ProgramReport with metrics and warnings.
    """
    report = ProgramReport(total_statements=len(program))

    counts = Counter(stmt.output.name for stmt in program.statements)
    report.output_variables = set(counts)
    report.duplicate_outputs = {name for name, count in counts.items() if count > 1}

    for stmt in program.statements:
        metrics = _analyze_expression(stmt.expression)
        report.input_variables.update(metrics.variable_references)
        report.total_expression_nodes += metrics.node_count
        name = stmt.output.name
        report.depth_by_output[name] = max(report.depth_by_output.get(name, 0), metrics.depth)

        simplified = simplify(stmt.expression)
        if isinstance(simplified, Literal):
            report.constant_outputs[name] = simplified.value

    if report.depth_by_output:
        report.max_expression_depth = max(report.depth_by_output.values())
    report.outputs_read_as_inputs = report.output_variables & report.input_variables

    # =========================================================================
    # WARNING FLAGS
    # =========================================================================

    if not program.statements:
        report.add_warning("Program has no statements")

    if report.duplicate_outputs:
        report.add_warning(
            f"Duplicate output variables: {', '.join(sorted(report.duplicate_outputs))}"
        )

    if report.outputs_read_as_inputs:
        report.add_warning(
            f"Outputs read as inputs (treated as free inputs): {', '.join(sorted(report.outputs_read_as_inputs))}"
        )

    for name in sorted(report.constant_outputs):
        value = "TRUE" if report.constant_outputs[name] else "FALSE"
        report.add_warning(f"Constant output: {name} is always {value}")

    if report.max_expression_depth > 5:
        report.add_warning(
            f"High expression complexity: max depth {report.max_expression_depth}"
        )

    return report
