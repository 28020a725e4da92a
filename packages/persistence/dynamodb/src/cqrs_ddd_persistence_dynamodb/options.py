"""
Scan options for projection and pagination.

``ScanOptions`` carries the result-shaping parameters of a scan. The
builder's filters define *what* to match; these options define *how much*
comes back and *where* the page starts.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class ScanOptions:
    """
    Immutable container for scan request options.

    Attributes:
        limit: Maximum number of items DynamoDB evaluates per page.
        exclusive_start_key: Continuation cursor from a previous page
            (``LastEvaluatedKey``), copied verbatim into the request.
        select_fields: Attribute names to return (projection).
    """

    limit: int | None = None
    exclusive_start_key: dict[str, Any] | None = None
    select_fields: list[str] = field(default_factory=list)

    def with_limit(self, limit: int | None) -> ScanOptions:
        """Return a copy with the page size replaced."""
        if limit is not None and limit < 1:
            raise ValueError(f"limit must be a positive integer, got {limit}")
        return replace(self, limit=limit)

    def with_start_key(self, key: dict[str, Any] | None) -> ScanOptions:
        """Return a copy resuming after ``key``."""
        return replace(self, exclusive_start_key=key)

    def with_select_fields(self, *fields: str) -> ScanOptions:
        """Return a copy projecting only ``fields``."""
        return replace(self, select_fields=list(fields))

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a JSON-compatible dictionary."""
        result: dict[str, Any] = {}
        if self.limit is not None:
            result["limit"] = self.limit
        if self.exclusive_start_key is not None:
            result["exclusive_start_key"] = self.exclusive_start_key
        if self.select_fields:
            result["select_fields"] = self.select_fields
        return result
