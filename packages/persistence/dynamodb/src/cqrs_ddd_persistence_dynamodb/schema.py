"""Pydantic model fields <-> DynamoDB attribute values (Decimal, datetime, UUID, sets)."""

from __future__ import annotations

import collections.abc
import logging
import types
from collections.abc import Mapping, Set
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from functools import cached_property
from typing import TYPE_CHECKING, Any, Union, get_args, get_origin
from uuid import UUID

from boto3.dynamodb.types import Binary, TypeDeserializer, TypeSerializer
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .exceptions import DecodingError, EncodingError, UnknownAttributeError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pydantic import BaseModel

    from .filters import Operand

logger = logging.getLogger("cqrs_ddd.dynamodb.schema")

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()

_COLLECTION_ORIGINS = (
    set,
    frozenset,
    list,
    tuple,
    collections.abc.Set,
    collections.abc.MutableSet,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
)

# String and number sets are sorted so the same filter always yields the same request.
_SORTED_SET_TYPES = ("SS", "NS")


def _to_native(value: Any) -> Any:
    """Convert Python values to types TypeSerializer accepts."""
    if isinstance(value, Enum):
        return _to_native(value.value)
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Set):
        return {_to_native(v) for v in value}
    if isinstance(value, (list, tuple)):
        return [_to_native(v) for v in value]
    if isinstance(value, Mapping):
        return {str(k): _to_native(v) for k, v in value.items()}
    return value


def _element_annotation(annotation: Any) -> Any:
    """Return the element type of a collection annotation.

    ``set[str] | None`` gives ``str``; a scalar annotation is its own element
    type, minus ``None``.
    """
    if annotation in (set, frozenset, list, tuple):
        return Any
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        members = [a for a in get_args(annotation) if a is not type(None)]
        if len(members) == 1:
            return _element_annotation(members[0])
        return Union[tuple(_element_annotation(a) for a in members)]
    if origin in _COLLECTION_ORIGINS:
        args = get_args(annotation)
        return args[0] if args else Any
    return annotation


def _from_native(value: Any) -> Any:
    """Unwrap boto3 ``Binary`` so pydantic sees plain bytes."""
    if isinstance(value, Binary):
        return value.value
    if isinstance(value, set):
        return {_from_native(v) for v in value}
    if isinstance(value, list):
        return [_from_native(v) for v in value]
    if isinstance(value, dict):
        return {k: _from_native(v) for k, v in value.items()}
    return value


@dataclass(frozen=True)
class AttributeDefinition:
    """
    One stored attribute of a model.

    ``name`` is the attribute name in DynamoDB (the field alias when one is
    declared), ``field_name`` the Python attribute on the model.
    """

    name: str
    field_name: str
    annotation: Any

    @cached_property
    def adapter(self) -> TypeAdapter[Any]:
        return TypeAdapter(self.annotation)

    @cached_property
    def element_adapter(self) -> TypeAdapter[Any]:
        return TypeAdapter(_element_annotation(self.annotation))

    def to_dynamo(self, value: Operand, *, element: bool = False) -> dict[str, Any]:
        """
        Encode ``value`` as a typed attribute value (``{"S": ...}``, ``{"N": ...}``).

        The value is validated against the field type first, or against
        the field's element type when ``element`` is set (the operand of
        ``contains`` on a set attribute, for instance). Sets stay typed
        sets (``SS``/``NS``/``BS``).
        """
        adapter = self.element_adapter if element else self.adapter
        try:
            value = adapter.validate_python(value)
        except PydanticValidationError as e:
            raise EncodingError(self.name, str(e)) from e
        try:
            encoded = _serializer.serialize(_to_native(value))
        except (TypeError, ValueError, ArithmeticError) as e:
            raise EncodingError(self.name, str(e)) from e
        for set_type in _SORTED_SET_TYPES:
            if set_type in encoded:
                encoded[set_type] = sorted(encoded[set_type])
        return encoded

    def from_dynamo(self, attribute_value: Mapping[str, Any]) -> Any:
        """Decode a typed attribute value and coerce it to the field type."""
        try:
            native = _from_native(_deserializer.deserialize(attribute_value))
        except (TypeError, ValueError, AttributeError) as e:
            raise DecodingError(self.name, str(e)) from e
        try:
            return self.adapter.validate_python(native)
        except PydanticValidationError as e:
            raise DecodingError(self.name, str(e)) from e


class DynamoSchema:
    """Attribute definitions of one model, keyed by stored attribute name."""

    def __init__(
        self,
        model_name: str,
        attributes: Iterable[AttributeDefinition],
    ) -> None:
        self.model_name = model_name
        self._attributes = {a.name: a for a in attributes}

    @classmethod
    def from_model(cls, model_cls: type[BaseModel]) -> DynamoSchema:
        """Derive the schema from a pydantic model's declared fields."""
        return cls(
            model_cls.__name__,
            (
                AttributeDefinition(
                    name=info.alias or field_name,
                    field_name=field_name,
                    annotation=info.annotation,
                )
                for field_name, info in model_cls.model_fields.items()
            ),
        )

    @property
    def attribute_names(self) -> list[str]:
        return list(self._attributes)

    def attribute(self, name: str) -> AttributeDefinition:
        try:
            return self._attributes[name]
        except KeyError:
            raise UnknownAttributeError(
                name, self.model_name, self.attribute_names
            ) from None

    def encode(
        self,
        name: str,
        value: Operand,
        *,
        element: bool = False,
    ) -> dict[str, Any]:
        return self.attribute(name).to_dynamo(value, element=element)

    def decode_into(self, row: Mapping[str, Any], target: BaseModel) -> None:
        """
        Populate ``target`` from a raw DynamoDB item.

        Attributes the model does not declare are skipped; attributes the
        row lacks (e.g. under a projection) are left unset.
        """
        if not isinstance(row, Mapping):
            raise DecodingError(None, f"row must be a mapping, got {type(row).__name__}")
        for attr_name, attribute_value in row.items():
            definition = self._attributes.get(attr_name)
            if definition is None:
                logger.debug(
                    "Skipping undeclared attribute %r on %s", attr_name, self.model_name
                )
                continue
            value = definition.from_dynamo(attribute_value)
            try:
                setattr(target, definition.field_name, value)
            except PydanticValidationError as e:
                raise DecodingError(attr_name, str(e)) from e
