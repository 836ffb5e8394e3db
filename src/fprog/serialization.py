"""
Serialization helpers for F-program objects (Program, AssignmentStatement, Expression).

Provides lossless JSON/YAML round-trip via intermediate dict representation.
This module intentionally keeps serialization structure stable and explicit.
"""
from __future__ import annotations

import json
from typing import Any, Dict

import yaml

from fprog.model import Program
from fprog.statements import AssignmentStatement
from fprog.expressions import (
    Expression,
    BinaryExpression,
    VariableReference,
    Literal,
    UnaryExpression,
    BinaryOperator,
    UnaryOperator,
)


class SerializationError(TypeError):
    """Raised when an object or dict cannot be (de)serialized."""
    pass


def expr_to_dict(expr: Expression) -> Dict[str, Any]:
    if isinstance(expr, BinaryExpression):
        return {
            "type": "binary",
            "operator": expr.operator.value,
            "left": expr_to_dict(expr.left),
            "right": expr_to_dict(expr.right),
        }
    if isinstance(expr, VariableReference):
        return {"type": "var", "name": expr.name}
    if isinstance(expr, Literal):
        return {"type": "lit", "value": expr.value}
    if isinstance(expr, UnaryExpression):
        return {
            "type": "unary",
            "operator": expr.operator.value,
            "operand": expr_to_dict(expr.operand),
        }
    raise SerializationError(f"Unsupported Expression type: {type(expr)}")


def expr_from_dict(d: Any) -> Expression:
    if not isinstance(d, dict):
        raise SerializationError(f"Expected an expression dict, got {type(d).__name__}")
    t = d.get("type")
    try:
        if t == "binary":
            op = BinaryOperator(d["operator"])
            return BinaryExpression(operator=op, left=expr_from_dict(d["left"]), right=expr_from_dict(d["right"]))
        if t == "var":
            return VariableReference(d["name"])
        if t == "lit":
            return Literal(d["value"])
        if t == "unary":
            op = UnaryOperator(d["operator"])
            return UnaryExpression(operator=op, operand=expr_from_dict(d["operand"]))
    except (KeyError, ValueError) as e:
        raise SerializationError(f"Invalid {t} expression: {e}") from e
    raise SerializationError(f"Unsupported expression dict type: {t}")


def statement_to_dict(s: AssignmentStatement) -> Dict[str, Any]:
    return {"output": s.output.name, "expression": expr_to_dict(s.expression)}


def statement_from_dict(d: Dict[str, Any]) -> AssignmentStatement:
    if not isinstance(d, dict):
        raise SerializationError(f"Expected a statement dict, got {type(d).__name__}")
    try:
        output = VariableReference(d["output"])
        expression = expr_from_dict(d["expression"])
    except KeyError as e:
        raise SerializationError(f"Statement is missing {e}") from e
    return AssignmentStatement(output=output, expression=expression)


def program_to_dict(p: Program) -> Dict[str, Any]:
    return {"statements": [statement_to_dict(s) for s in p.statements]}


def program_from_dict(d: Dict[str, Any]) -> Program:
    if not isinstance(d, dict):
        raise SerializationError(f"Program must be a mapping, got {type(d).__name__}")
    statements = d.get("statements", [])
    if not isinstance(statements, list):
        raise SerializationError(f"Program statements must be a list, got {type(statements).__name__}")
    return Program(statement_from_dict(s) for s in statements)


def program_to_json(p: Program) -> str:
    return json.dumps(program_to_dict(p), sort_keys=True)


def program_from_json(s: str) -> Program:
    d = json.loads(s)
    return program_from_dict(d)


def program_to_yaml(p: Program) -> str:
    return yaml.safe_dump(program_to_dict(p))


def program_from_yaml(s: str) -> Program:
    d = yaml.safe_load(s)
    return program_from_dict(d)
