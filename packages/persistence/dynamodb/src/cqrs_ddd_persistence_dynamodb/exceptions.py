"""
DynamoDB persistence exception hierarchy.

All exceptions inherit from ``DynamoPersistenceError`` and provide
``to_dict()`` for API-friendly error responses.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class DynamoPersistenceError(Exception):
    """Base for DynamoDB persistence errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class DynamoConnectionError(DynamoPersistenceError):
    """Raised when the DynamoDB client cannot be created."""


class InvalidStateError(DynamoPersistenceError):
    """Scan builder call made out of order or with an unsupported negation."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_SCAN_STATE",
            "message": str(self),
        }


class EncodingError(DynamoPersistenceError):
    """A literal could not be converted to a DynamoDB attribute value."""

    def __init__(self, attribute: str, message: str) -> None:
        self.attribute = attribute
        self.message = message
        super().__init__(f"Cannot encode value for '{attribute}': {message}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "ENCODING_ERROR",
            "attribute": self.attribute,
            "message": self.message,
        }


class UnknownAttributeError(EncodingError):
    """
    Filter on an attribute the model schema does not declare.

    Uses fuzzy matching to suggest similar attribute names.
    """

    def __init__(
        self,
        attribute: str,
        model_name: str,
        available_attributes: list[str],
    ) -> None:
        self.model_name = model_name
        self.available_attributes = available_attributes
        self.suggestions = get_close_matches(
            attribute, available_attributes, n=3, cutoff=0.6
        )

        message = f"unknown attribute on '{model_name}'."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(attribute, message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNKNOWN_ATTRIBUTE",
            "attribute": self.attribute,
            "model": self.model_name,
            "suggestions": self.suggestions,
            "available_attributes": sorted(self.available_attributes),
        }


class DecodingError(DynamoPersistenceError):
    """A returned row could not be materialized into a model instance."""

    def __init__(self, attribute: str | None, message: str) -> None:
        self.attribute = attribute
        self.message = message
        if attribute is None:
            super().__init__(f"Cannot decode row: {message}")
        else:
            super().__init__(f"Cannot decode attribute '{attribute}': {message}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "DECODING_ERROR",
            "attribute": self.attribute,
            "message": self.message,
        }


class StoreError(DynamoPersistenceError):
    """DynamoDB rejected the request or could not be reached.

    ``code`` carries the AWS error code (e.g. ``ProvisionedThroughputExceededException``)
    when the service returned one.
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        self.code = code
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "STORE_ERROR",
            "code": self.code,
            "message": str(self),
        }
