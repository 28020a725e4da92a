"""DynamoDB Scan request builder from accumulated filter descriptors."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .operators import ELEMENT_OPERATORS

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .filters import FilterDescriptor
    from .options import ScanOptions
    from .schema import DynamoSchema


class ScanRequestBuilder:
    """Compiles filter descriptors and options to ``client.scan(**request)`` kwargs.

    Performs no I/O; every operand is validated and encoded by the schema so
    encoding failures surface before the request is sent.
    """

    def __init__(self, schema: DynamoSchema) -> None:
        self._schema = schema

    def build_request(
        self,
        table_name: str,
        filters: Mapping[str, FilterDescriptor],
        options: ScanOptions,
    ) -> dict[str, Any]:
        request: dict[str, Any] = {"TableName": table_name}
        scan_filter = self.build_filter(filters)
        if scan_filter:
            request["ScanFilter"] = scan_filter
        projection = self.build_projection(options.select_fields)
        if projection:
            request["AttributesToGet"] = projection
        if options.limit is not None:
            request["Limit"] = options.limit
        if options.exclusive_start_key is not None:
            request["ExclusiveStartKey"] = options.exclusive_start_key
        return request

    def build_filter(
        self, filters: Mapping[str, FilterDescriptor]
    ) -> dict[str, dict[str, Any]]:
        """Build the ``ScanFilter`` clause. Empty mapping means a full scan."""
        scan_filter: dict[str, dict[str, Any]] = {}
        for name, descriptor in filters.items():
            # Unknown names fail here even for operand-less NULL checks.
            attribute = self._schema.attribute(name)
            element = descriptor.operator in ELEMENT_OPERATORS
            scan_filter[name] = {
                "ComparisonOperator": descriptor.operator.value,
                "AttributeValueList": [
                    attribute.to_dynamo(operand, element=element)
                    for operand in descriptor.operands
                ],
            }
        return scan_filter

    def build_projection(self, fields: list[str] | None) -> list[str] | None:
        """Build ``AttributesToGet``. None means every attribute."""
        if not fields:
            return None
        return list(fields)
