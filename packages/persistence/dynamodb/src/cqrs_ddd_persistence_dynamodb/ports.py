"""IScanClient - Protocol for the store side of a scan."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IScanClient(Protocol):
    """
    Executes one DynamoDB ``Scan`` request.

    Returns the raw response (``Items``, ``LastEvaluatedKey``, ``Count``...).
    Implementations own retries, timeouts and connection limits and raise
    ``StoreError`` when the service rejects the request.
    """

    async def scan(self, request: dict[str, Any]) -> dict[str, Any]: ...
