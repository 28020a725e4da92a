"""DynamoDB persistence for CQRS/DDD.

Fluent scan builder that compiles chained attribute comparisons into a
DynamoDB ``Scan`` request and materializes the returned items as pydantic
models, with continuation-cursor pagination.
"""

from __future__ import annotations

from .connection import DynamoConnectionManager, DynamoStoreClient
from .exceptions import (
    DecodingError,
    DynamoConnectionError,
    DynamoPersistenceError,
    EncodingError,
    InvalidStateError,
    StoreError,
    UnknownAttributeError,
)
from .filters import FilterDescriptor, Operand
from .model import DynamoModel
from .operators import (
    COMPARISONS,
    ELEMENT_OPERATORS,
    Comparison,
    ComparisonOperator,
    ScanState,
)
from .options import ScanOptions
from .ports import IScanClient
from .repository import DynamoScanRepository
from .request_builder import ScanRequestBuilder
from .scan import Scan, ScanPage
from .schema import AttributeDefinition, DynamoSchema

__all__ = [
    # Core
    "Scan",
    "ScanPage",
    "ScanOptions",
    "DynamoScanRepository",
    "DynamoModel",
    # Connection
    "DynamoConnectionManager",
    "DynamoStoreClient",
    "IScanClient",
    # Building blocks
    "ComparisonOperator",
    "Comparison",
    "COMPARISONS",
    "ELEMENT_OPERATORS",
    "ScanState",
    "FilterDescriptor",
    "Operand",
    "ScanRequestBuilder",
    "DynamoSchema",
    "AttributeDefinition",
    # Exceptions
    "DynamoPersistenceError",
    "DynamoConnectionError",
    "InvalidStateError",
    "EncodingError",
    "UnknownAttributeError",
    "StoreError",
    "DecodingError",
]
