"""Scan comparison operators and the builder state enum."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .exceptions import InvalidStateError


class ComparisonOperator(str, Enum):
    """DynamoDB ``ScanFilter`` comparison operators (wire names)."""

    EQ = "EQ"
    NE = "NE"
    LT = "LT"
    LE = "LE"
    GT = "GT"
    GE = "GE"
    NULL = "NULL"
    NOT_NULL = "NOT_NULL"
    CONTAINS = "CONTAINS"
    NOT_CONTAINS = "NOT_CONTAINS"
    BEGINS_WITH = "BEGINS_WITH"
    IN = "IN"
    BETWEEN = "BETWEEN"


class ScanState(str, Enum):
    """Where the builder is between ``where()`` and a comparison."""

    IDLE = "idle"
    ATTRIBUTE_SELECTED = "attribute_selected"
    ATTRIBUTE_SELECTED_NEGATED = "attribute_selected_negated"


@dataclass(frozen=True)
class Comparison:
    """One builder comparison method: its operator, negated form and arity.

    ``arity`` is ``None`` for variadic comparisons (``in_``).
    """

    method: str
    operator: ComparisonOperator
    negated: ComparisonOperator | None
    arity: int | None

    def resolve(self, negated: bool) -> ComparisonOperator:
        """Return the operator to send, honouring a pending ``not_()``."""
        if not negated:
            return self.operator
        if self.negated is None:
            raise InvalidStateError(
                f"Invalid scan state: {self.method}() cannot follow not_()"
            )
        return self.negated


_C = ComparisonOperator

COMPARISONS: dict[str, Comparison] = {
    c.method: c
    for c in (
        Comparison("null", _C.NULL, _C.NOT_NULL, 0),
        Comparison("eq", _C.EQ, _C.NE, 1),
        Comparison("lt", _C.LT, _C.GE, 1),
        Comparison("le", _C.LE, _C.GT, 1),
        Comparison("ge", _C.GE, _C.LT, 1),
        Comparison("gt", _C.GT, _C.LE, 1),
        Comparison("contains", _C.CONTAINS, _C.NOT_CONTAINS, 1),
        Comparison("begins_with", _C.BEGINS_WITH, None, 1),
        Comparison("in_", _C.IN, None, None),
        Comparison("between", _C.BETWEEN, None, 2),
    )
}

# Operands of these are compared against one element of a set or list
# attribute rather than the whole attribute value.
ELEMENT_OPERATORS: frozenset[ComparisonOperator] = frozenset(
    {_C.CONTAINS, _C.NOT_CONTAINS, _C.BEGINS_WITH, _C.IN}
)
