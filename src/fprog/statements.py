"""
Assignment statements: one output variable defined by one boolean expression.

    OUT := A OR (A AND B)

ARCHITECTURAL RULE:
    Statements are immutable values. Every transform returns a new
    statement, so statements can be shared freely between programs.
"""

from dataclasses import dataclass

from fprog.backends.text import format_statement
from fprog.expressions import (
    Expression,
    VariableReference,
    MalformedExpressionError,
    is_identifier,
    validate_expression,
)
from fprog.isomorphism import IsomorphismPolicy, expressions_isomorphic
from fprog.simplifier import simplify as simplify_expression


class MalformedStatementError(ValueError):
    """Raised when an assignment statement is not well-formed."""
    pass


@dataclass(frozen=True)
class AssignmentStatement:
    """
    Pairs an output variable with the expression that defines it.

    Properties:
        output:
            Variable being assigned (e.g., VariableReference("OUT"))

        expression:
            Boolean Expression over input variables

    Equality is structural: same output, same expression tree with
    operands in the same order.
    """

    output: VariableReference
    expression: Expression

    @property
    def output_variable(self) -> VariableReference:
        return self.output

    def validate(self) -> bool:
        """
        Check that the statement is well-formed.

        Returns:
            True

        Raises:
            MalformedStatementError: if the output is not a named variable
                or the expression is malformed
        """
        if not isinstance(self.output, VariableReference) or not is_identifier(self.output.name):
            raise MalformedStatementError(f"Invalid output variable: {self.output!r}")
        try:
            validate_expression(self.expression)
        except MalformedExpressionError as e:
            raise MalformedStatementError(
                f"Malformed expression for {self.output.name}: {e}"
            ) from e
        return True

    def simplify(self) -> "AssignmentStatement":
        return AssignmentStatement(output=self.output, expression=simplify_expression(self.expression))

    def isomorphic(
        self,
        other: object,
        policy: IsomorphismPolicy = IsomorphismPolicy.COMMUTATIVE,
    ) -> bool:
        if not isinstance(other, AssignmentStatement):
            return False
        return (self.output == other.output
                and expressions_isomorphic(self.expression, other.expression, policy))

    def __str__(self) -> str:
        return format_statement(self.output, self.expression)
