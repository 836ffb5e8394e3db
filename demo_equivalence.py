"""
Demo: Analyze the example full adders and check them for equivalence.
"""

import logging

from fprog.analyzer import analyze_program
from fprog.equivalence import compare_programs
from fprog.examples import (
    build_full_adder_program,
    build_sum_of_products_full_adder,
    build_faulty_full_adder,
)
from fprog.serialization import program_to_yaml


def print_report(name, program, report):
    """Pretty-print a ProgramReport."""
    print()
    print("=" * 70)
    print(f"PROGRAM: {name}")
    print("=" * 70)
    print(program)
    print()

    print("📊 BASIC METRICS")
    print(f"  Statements:            {report.total_statements}")
    print(f"  Inputs:                {sorted(report.input_variables)}")
    print(f"  Outputs:               {sorted(report.output_variables)}")
    print(f"  Max Expression Depth:  {report.max_expression_depth}")
    print(f"  Total Expression Nodes:{report.total_expression_nodes}")
    print()

    if report.warnings:
        print("⚠️  WARNINGS")
        for i, warning in enumerate(report.warnings, 1):
            print(f"  {i}. {warning}")
    else:
        print("✨ NO WARNINGS - Program looks clean!")
    print()


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    reference = build_full_adder_program()
    programs = {
        "sum-of-products": build_sum_of_products_full_adder(),
        "faulty": build_faulty_full_adder(),
    }

    print_report("reference", reference, analyze_program(reference))

    for name, program in programs.items():
        print_report(name, program, analyze_program(program))
        comparison = compare_programs(reference, program)
        result = comparison.equivalence
        print(f"🔍 reference vs {name}")
        print(f"  Equal:                 {comparison.equal}")
        print(f"  Isomorphic:            {comparison.isomorphic}")
        print(f"  Equivalent:            {result.equivalent}")
        if result.counterexample is not None:
            print(f"  Counterexample:        {result.counterexample}")
            print(f"    reference -> {reference.evaluate(result.counterexample)}")
            print(f"    {name} -> {program.evaluate(result.counterexample)}")
        print()

    with open("example_program_output.yaml", "w") as f:
        f.write(program_to_yaml(reference))
    print(f"✅ Program exported to example_program_output.yaml")
