"""Sample models and an in-memory scan client shared by the tests."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from cqrs_ddd_persistence_dynamodb import DynamoModel


class User(DynamoModel):
    __table_name__ = "users"

    id: str
    name: str = ""
    age: int = 0
    score: float | None = None
    tags: set[str] = Field(default_factory=set)
    created_at: datetime | None = None
    email_address: str | None = Field(default=None, alias="email")


class Tenant(DynamoModel):
    id: str


class FakeScanClient:
    """In-memory IScanClient returning canned responses in order.

    Once the canned responses run out it returns an empty body.
    """

    def __init__(
        self,
        responses: list[dict[str, Any]] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.requests: list[dict[str, Any]] = []
        self._responses = list(responses or [])
        self._error = error

    async def scan(self, request: dict[str, Any]) -> dict[str, Any]:
        self.requests.append(request)
        if self._error is not None:
            raise self._error
        if self._responses:
            return self._responses.pop(0)
        return {}
