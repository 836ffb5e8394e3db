"""
Tests for the Program Analyzer.

Tests verify that the analyzer correctly:
    - Inventories input and output variables
    - Reports duplicate outputs without raising
    - Flags outputs read as inputs and constant outputs
    - Measures expression complexity
"""

from fprog.analyzer import analyze_program
from fprog.examples import build_full_adder_program
from fprog.expressions import var, not_, and_, or_, xor_, TRUE
from fprog.model import Program
from fprog.statements import AssignmentStatement


def assign(name, expr):
    return AssignmentStatement(output=var(name), expression=expr)


def test_full_adder_inventory():
    """Analyze the reference full adder."""
    report = analyze_program(build_full_adder_program())

    assert report.total_statements == 2
    assert report.input_variables == {"A", "B", "CIN"}
    assert report.output_variables == {"SUM", "COUT"}
    assert not report.duplicate_outputs
    assert not report.outputs_read_as_inputs
    assert report.warnings == []


def test_duplicate_outputs_reported():
    program = Program([assign("X", var("A")), assign("X", var("B"))])
    report = analyze_program(program)

    assert report.duplicate_outputs == {"X"}
    assert any("Duplicate" in w for w in report.warnings)


def test_outputs_read_as_inputs():
    program = Program([assign("X", var("A")), assign("Y", not_(var("X")))])
    report = analyze_program(program)

    assert report.outputs_read_as_inputs == {"X"}
    assert any("read as inputs" in w for w in report.warnings)


def test_constant_outputs():
    program = Program([
        assign("T", or_(var("A"), not_(var("A")))),
        assign("F", xor_(var("B"), var("B"))),
        assign("N", and_(var("A"), var("B"))),
    ])
    report = analyze_program(program)

    assert report.constant_outputs == {"T": True, "F": False}
    assert "Constant output: F is always FALSE" in report.warnings
    assert "Constant output: T is always TRUE" in report.warnings


def test_literal_output_is_constant():
    report = analyze_program(Program([assign("X", TRUE)]))
    assert report.constant_outputs == {"X": True}
    assert report.input_variables == set()


def test_expression_complexity():
    """Depth counts operator levels; leaves have depth 0."""
    program = Program([
        assign("X", var("A")),
        assign("Y", and_(var("A"), not_(var("B")))),
    ])
    report = analyze_program(program)

    assert report.depth_by_output == {"X": 0, "Y": 2}
    assert report.max_expression_depth == 2
    assert report.total_expression_nodes == 1 + 4


def test_deep_expression_warning():
    expr = var("A")
    for name in "BCDEFG":
        expr = and_(expr, var(name))
    report = analyze_program(Program([assign("X", expr)]))

    assert report.max_expression_depth == 6
    assert any("High expression complexity" in w for w in report.warnings)


def test_empty_program():
    report = analyze_program(Program())
    assert report.total_statements == 0
    assert report.max_expression_depth == 0
    assert "Program has no statements" in report.warnings


def test_warnings_are_not_repeated():
    program = Program([assign("X", var("A"))])
    report = analyze_program(program)
    report.add_warning("same")
    report.add_warning("same")
    assert report.warnings.count("same") == 1
