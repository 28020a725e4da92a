"""Tests for the comparison table and operator negation."""

from __future__ import annotations

import pytest

from cqrs_ddd_persistence_dynamodb import (
    COMPARISONS,
    ELEMENT_OPERATORS,
    ComparisonOperator,
    InvalidStateError,
)


@pytest.mark.parametrize(
    ("method", "normal", "negated"),
    [
        ("null", ComparisonOperator.NULL, ComparisonOperator.NOT_NULL),
        ("eq", ComparisonOperator.EQ, ComparisonOperator.NE),
        ("lt", ComparisonOperator.LT, ComparisonOperator.GE),
        ("le", ComparisonOperator.LE, ComparisonOperator.GT),
        ("ge", ComparisonOperator.GE, ComparisonOperator.LT),
        ("gt", ComparisonOperator.GT, ComparisonOperator.LE),
        ("contains", ComparisonOperator.CONTAINS, ComparisonOperator.NOT_CONTAINS),
    ],
)
def test_resolve_with_and_without_negation(method, normal, negated):
    comparison = COMPARISONS[method]
    assert comparison.resolve(False) is normal
    assert comparison.resolve(True) is negated


@pytest.mark.parametrize("method", ["begins_with", "in_", "between"])
def test_resolve_negated_without_inverse_raises(method):
    comparison = COMPARISONS[method]
    assert comparison.negated is None
    with pytest.raises(InvalidStateError, match=r"cannot follow not_\(\)"):
        comparison.resolve(True)


def test_arity():
    assert COMPARISONS["null"].arity == 0
    assert COMPARISONS["eq"].arity == 1
    assert COMPARISONS["between"].arity == 2
    assert COMPARISONS["in_"].arity is None


def test_operator_values_are_wire_names():
    for op in ComparisonOperator:
        assert op.value == op.name


def test_element_operators():
    assert ELEMENT_OPERATORS == {
        ComparisonOperator.CONTAINS,
        ComparisonOperator.NOT_CONTAINS,
        ComparisonOperator.BEGINS_WITH,
        ComparisonOperator.IN,
    }
