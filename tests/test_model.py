"""
Tests for the F-Program Model

These tests verify:
    - Program construction and immutability
    - Invariants (validate)
    - append / merge / simplify
    - Derived variable sets
    - Text rendering
    - Structural equality and isomorphism
"""

import os

import pytest
from fprog.expressions import var, not_, and_, or_, xor_, TRUE, Literal
from fprog.isomorphism import IsomorphismPolicy
from fprog.model import Program, ProgramInvariantError
from fprog.statements import AssignmentStatement


def assign(name, expr):
    return AssignmentStatement(output=var(name), expression=expr)


X_AND = assign("X", and_(var("A"), var("B")))
Y_OR = assign("Y", or_(var("A"), var("C")))
Z_NOT = assign("Z", not_(var("B")))


class TestConstruction:
    """Test building programs."""

    def test_from_list(self):
        program = Program([X_AND, Y_OR])
        assert program.statements == (X_AND, Y_OR)
        assert len(program) == 2

    def test_from_generator(self):
        program = Program(s for s in [X_AND, Y_OR])
        assert program.statements == (X_AND, Y_OR)

    def test_owns_a_copy(self):
        """Mutating the source list does not change the program."""
        source = [X_AND]
        program = Program(source)
        source.append(Y_OR)
        assert len(program) == 1

    def test_immutable(self):
        program = Program([X_AND])
        with pytest.raises(AttributeError):
            program.statements = ()

    def test_empty_default(self):
        program = Program()
        assert len(program) == 0

    def test_iterates_in_order(self):
        assert list(Program([Y_OR, X_AND])) == [Y_OR, X_AND]


class TestValidate:
    """Test program invariants."""

    def test_valid_program(self):
        assert Program([X_AND, Y_OR, Z_NOT]).validate() is True

    def test_empty_program_fails(self):
        with pytest.raises(ProgramInvariantError, match="no statements"):
            Program().validate()

    def test_duplicate_outputs_fail(self):
        """Two statements assigning the same output break the invariant."""
        program = Program([assign("OUT", var("A")), assign("OUT", var("B"))])
        with pytest.raises(ProgramInvariantError, match="OUT"):
            program.validate()

    def test_malformed_statement_fails(self):
        program = Program([X_AND, assign("Y", Literal(0))])
        with pytest.raises(ProgramInvariantError) as excinfo:
            program.validate()
        assert excinfo.value.__cause__ is not None

    def test_bare_string_output_fails(self):
        program = Program([AssignmentStatement(output="X", expression=var("A"))])
        with pytest.raises(ProgramInvariantError, match="Invalid output variable"):
            program.validate()

    def test_non_statement_element_fails(self):
        with pytest.raises(ProgramInvariantError, match="Not an assignment statement"):
            Program([var("A")]).validate()

    def test_malformed_element_reported_before_duplicates(self):
        program = Program([X_AND, X_AND, "Y := A"])
        with pytest.raises(ProgramInvariantError, match="Not an assignment statement"):
            program.validate()

    def test_invariant_error_is_value_error(self):
        with pytest.raises(ValueError):
            Program().validate()


class TestTransforms:
    """Test append, merge and simplify."""

    def test_append_returns_new_program(self):
        program = Program([X_AND])
        appended = program.append(Y_OR)
        assert appended.statements == (X_AND, Y_OR)
        assert program.statements == (X_AND,)

    def test_append_duplicate_is_detected_by_validate(self):
        program = Program([X_AND]).append(assign("X", var("C")))
        assert len(program) == 2
        with pytest.raises(ProgramInvariantError):
            program.validate()

    def test_merge_size(self):
        p = Program([X_AND, Y_OR])
        q = Program([Z_NOT])
        merged = p.merge(q)
        assert len(merged) == len(p) + len(q)
        assert merged.validate()

    def test_merge_appends_shorter_to_longer(self):
        p = Program([Z_NOT])
        q = Program([X_AND, Y_OR])
        assert p.merge(q).statements == (X_AND, Y_OR, Z_NOT)
        assert q.merge(p).statements == (X_AND, Y_OR, Z_NOT)

    def test_merge_rendering_contains_every_line_once(self):
        p = Program([X_AND, Y_OR])
        q = Program([Z_NOT])
        lines = str(p.merge(q)).split(os.linesep)
        expected = str(p).split(os.linesep) + str(q).split(os.linesep)
        assert sorted(lines) == sorted(expected)

    def test_merge_does_not_deduplicate(self):
        p = Program([X_AND])
        merged = p.merge(p)
        assert len(merged) == 2
        with pytest.raises(ProgramInvariantError):
            merged.validate()

    def test_merge_with_empty(self):
        p = Program([X_AND])
        assert p.merge(Program()) == p
        assert Program().merge(p) == p

    def test_simplify(self):
        program = Program([
            assign("X", or_(var("A"), and_(var("A"), var("B")))),
            assign("Y", and_(var("C"), TRUE)),
        ])
        simplified = program.simplify()
        assert simplified.statements == (assign("X", var("A")), assign("Y", var("C")))
        assert len(program.simplify()) == len(program)

    def test_simplify_keeps_output_variables(self):
        program = Program([
            assign("X", xor_(var("A"), var("A"))),
            assign("Y", or_(var("B"), not_(var("B")))),
            Z_NOT,
        ])
        assert program.simplify().output_variables() == program.output_variables()


class TestVariableSets:
    """Test derived variable sets."""

    def test_output_variables_sorted(self):
        program = Program([Z_NOT, X_AND, Y_OR])
        assert program.output_variables() == (var("X"), var("Y"), var("Z"))

    def test_output_variables_distinct(self):
        program = Program([X_AND, assign("X", var("C"))])
        assert program.output_variables() == (var("X"),)

    def test_input_variables(self):
        program = Program([X_AND, Y_OR, Z_NOT])
        assert program.input_variables() == ("A", "B", "C")

    def test_constant_program_has_no_inputs(self):
        assert Program([assign("X", TRUE)]).input_variables() == ()


class TestRendering:
    """Test text rendering."""

    def test_one_statement_per_line(self):
        program = Program([X_AND, Y_OR, Z_NOT])
        assert str(program) == os.linesep.join([
            "X := A AND B",
            "Y := A OR C",
            "Z := NOT B",
        ])

    def test_no_trailing_separator(self):
        text = str(Program([X_AND, Y_OR]))
        assert not text.endswith(os.linesep)

    def test_single_statement(self):
        assert str(Program([X_AND])) == "X := A AND B"

    def test_empty_program_renders_empty(self):
        assert str(Program()) == ""


class TestEquality:
    """Test structural equality."""

    def test_reflexive(self):
        program = Program([X_AND, Y_OR])
        assert program == program
        assert program == Program([X_AND, Y_OR])

    def test_order_matters(self):
        assert Program([X_AND, Y_OR]) != Program([Y_OR, X_AND])

    def test_length_matters(self):
        assert Program([X_AND]) != Program([X_AND, Y_OR])

    def test_other_types_are_not_equal(self):
        program = Program([X_AND])
        assert program != None  # noqa: E711
        assert program != (X_AND,)
        assert program != "X := A AND B"


class TestIsomorphism:
    """Test order-independent comparison."""

    def test_reflexive(self):
        program = Program([X_AND, Y_OR])
        assert program.isomorphic(program)

    def test_reordered_statements(self):
        p = Program([X_AND, Y_OR, Z_NOT])
        q = Program([Z_NOT, X_AND, Y_OR])
        assert p != q
        assert p.isomorphic(q)
        assert q.isomorphic(p)

    def test_commuted_operands(self):
        p = Program([assign("OUT", and_(var("A"), var("B")))])
        q = Program([assign("OUT", and_(var("B"), var("A")))])
        assert p != q
        assert p.isomorphic(q)
        assert not p.isomorphic(q, IsomorphismPolicy.STRUCTURAL)

    def test_structural_policy_still_ignores_statement_order(self):
        p = Program([X_AND, Y_OR])
        q = Program([Y_OR, X_AND])
        assert p.isomorphic(q, IsomorphismPolicy.STRUCTURAL)

    def test_different_statement_counts(self):
        assert not Program([X_AND]).isomorphic(Program([X_AND, Y_OR]))

    def test_multiset_not_set(self):
        """Repeated statements must be matched one for one."""
        p = Program([X_AND, X_AND, Y_OR])
        q = Program([X_AND, Y_OR, Y_OR])
        assert not p.isomorphic(q)

    def test_rejects_other_types(self):
        program = Program([X_AND])
        assert not program.isomorphic(None)
        assert not program.isomorphic([X_AND])

    def test_subclass_is_a_different_kind(self):
        """Same rule as ==: only an exact Program compares."""
        class TaggedProgram(Program):
            pass

        program = Program([X_AND])
        tagged = TaggedProgram([X_AND])
        assert program != tagged
        assert not program.isomorphic(tagged)
        assert not program.equivalent(tagged)
