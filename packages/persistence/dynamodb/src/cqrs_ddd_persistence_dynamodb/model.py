"""DynamoModel - pydantic base class for items read from a DynamoDB table."""

from __future__ import annotations

from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict, PrivateAttr

from .schema import DynamoSchema

TModel = TypeVar("TModel", bound="DynamoModel")

_SCHEMAS: dict[type[Any], DynamoSchema] = {}


class DynamoModel(BaseModel):
    """Base class for models stored in a DynamoDB table.

    Usage::

        class User(DynamoModel):
            __table_name__ = "users"

            id: str
            age: int
            tags: set[str] = set()

    ``__table_name__`` defaults to the class name.
    """

    model_config = ConfigDict(populate_by_name=True)

    __table_name__: ClassVar[str | None] = None

    _is_new: bool = PrivateAttr(default=True)

    @classmethod
    def table_name(cls) -> str:
        return cls.__table_name__ or cls.__name__

    @classmethod
    def dynamo_schema(cls) -> DynamoSchema:
        """Return the attribute schema for this model (built once per class)."""
        schema = _SCHEMAS.get(cls)
        if schema is None:
            schema = _SCHEMAS[cls] = DynamoSchema.from_model(cls)
        return schema

    @classmethod
    def new_persisted(cls: type[TModel]) -> TModel:
        """Create an empty, unvalidated instance for an item that already exists."""
        instance = cls.model_construct()
        instance.mark_persisted()
        return instance

    @property
    def is_new(self) -> bool:
        return self._is_new

    def mark_persisted(self) -> None:
        self._is_new = False
