"""Per-attribute filter descriptors accumulated by the scan builder."""

from __future__ import annotations

from collections.abc import Mapping, Sequence, Set
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Union
from uuid import UUID

from .operators import ComparisonOperator

Scalar = Union[str, int, float, Decimal, bool, bytes, datetime, date, UUID, Enum, None]

# Everything DynamoSchema.encode() knows how to turn into an attribute value.
Operand = Union[Scalar, Set[Any], Sequence[Any], Mapping[str, Any]]


@dataclass(frozen=True)
class FilterDescriptor:
    """A finalized comparison on one attribute."""

    name: str
    operator: ComparisonOperator
    operands: tuple[Operand, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "attr": self.name,
            "op": self.operator.value,
            "val": list(self.operands),
        }
