"""
F-Program Model and Equivalence Checker

An F-program is a list of boolean assignment formulas:

    X   := A AND B
    OUT := A OR (A AND B)

This package provides:
    - The program model and its invariants
    - Structural equality and reordering-tolerant isomorphism
    - Semantic equivalence, decided by reduction to a satisfiability query

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - Surface syntax or parsing
    - Command-line or reporting layers
    - Solver internals (decision procedures sit behind fprog.solvers)
"""

__version__ = "0.1.0"
