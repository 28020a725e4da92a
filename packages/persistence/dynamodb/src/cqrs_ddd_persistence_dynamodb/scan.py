"""
Fluent DynamoDB scan builder.

Example::

    page = await (
        Scan(User, client, "age")
        .ge(21)
        .where("tags")
        .not_()
        .contains("banned")
        .limit(50)
    )
    # → ScanFilter: age GE 21, tags NOT_CONTAINS "banned"

    next_page = await Scan(User, client).start_at(page.last_evaluated_key)

Each attribute takes exactly one comparison, and the comparison must
directly follow ``where()`` (or the attribute given to the constructor).
Filters on different attributes are combined with AND by DynamoDB.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Generic, TypeVar, cast

from .exceptions import InvalidStateError, StoreError
from .filters import FilterDescriptor
from .operators import COMPARISONS, ScanState
from .options import ScanOptions
from .request_builder import ScanRequestBuilder

if TYPE_CHECKING:
    from collections.abc import Generator, Iterable, Iterator, Mapping

    from .filters import Operand
    from .model import DynamoModel
    from .ports import IScanClient
    from .schema import DynamoSchema

logger = logging.getLogger("cqrs_ddd.dynamodb.scan")

T = TypeVar("T", bound="DynamoModel")


@dataclass(frozen=True)
class ScanPage(Generic[T]):
    """One page of scan results.

    ``last_evaluated_key`` is the store's continuation cursor, ``None`` once
    the table has been read to the end.
    """

    items: list[T] = field(default_factory=list)
    last_evaluated_key: dict[str, Any] | None = None

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    @property
    def has_more(self) -> bool:
        return self.last_evaluated_key is not None


class Scan(Generic[T]):
    """
    Single-use scan over one model's table.

    Chain ``where()`` / ``not_()`` / comparison calls, then ``await`` the
    scan (or call ``execute()``) exactly once.
    """

    def __init__(
        self,
        model_cls: type[T],
        client: IScanClient,
        attribute: str | None = None,
        *,
        schema: DynamoSchema | None = None,
        options: ScanOptions | None = None,
    ) -> None:
        self._model_cls = model_cls
        self._client = client
        self._schema = schema if schema is not None else model_cls.dynamo_schema()
        self._request_builder = ScanRequestBuilder(self._schema)
        self._options = options if options is not None else ScanOptions()
        self._filters: dict[str, FilterDescriptor] = {}
        self._state = ScanState.IDLE
        self._pending: str | None = None
        self._consumed = False
        if attribute is not None:
            self.where(attribute)

    @property
    def state(self) -> ScanState:
        return self._state

    @property
    def filters(self) -> Mapping[str, FilterDescriptor]:
        return MappingProxyType(self._filters)

    @property
    def options(self) -> ScanOptions:
        return self._options

    # -- attribute selection -------------------------------------------------

    def where(self, name: str) -> Scan[T]:
        """Select the attribute the next comparison applies to."""
        if self._state is not ScanState.IDLE:
            raise InvalidStateError(
                f"Invalid scan state; where({name!r}) cannot follow "
                f"where({self._pending!r}) before a comparison"
            )
        if name in self._filters:
            raise InvalidStateError(
                f"Invalid scan state; {name!r} can only be filtered once"
            )
        self._pending = name
        self._state = ScanState.ATTRIBUTE_SELECTED
        return self

    def and_(self) -> Scan[T]:
        """No-op for readability: filters are always combined with AND."""
        return self

    def not_(self) -> Scan[T]:
        """Use the inverse of the next comparison. Calling it twice does not cancel."""
        if self._state is ScanState.IDLE:
            raise InvalidStateError(
                "Invalid scan state; not_() must follow scan('attr') or where('attr')"
            )
        self._state = ScanState.ATTRIBUTE_SELECTED_NEGATED
        return self

    # -- comparisons ---------------------------------------------------------

    def null(self) -> Scan[T]:
        return self._compare("null", ())

    def eq(self, value: Operand) -> Scan[T]:
        return self._compare("eq", (value,))

    def lt(self, value: Operand) -> Scan[T]:
        return self._compare("lt", (value,))

    def le(self, value: Operand) -> Scan[T]:
        return self._compare("le", (value,))

    def ge(self, value: Operand) -> Scan[T]:
        return self._compare("ge", (value,))

    def gt(self, value: Operand) -> Scan[T]:
        return self._compare("gt", (value,))

    def contains(self, value: Operand) -> Scan[T]:
        return self._compare("contains", (value,))

    def begins_with(self, value: Operand) -> Scan[T]:
        return self._compare("begins_with", (value,))

    def in_(self, values: Iterable[Operand]) -> Scan[T]:
        """Match any of ``values`` (pass a list, not a bare string)."""
        if isinstance(values, (str, bytes)):
            raise InvalidStateError(
                "Invalid scan state; in_() takes a collection of values, "
                f"got {type(values).__name__}"
            )
        return self._compare("in_", tuple(values))

    def between(self, low: Operand, high: Operand) -> Scan[T]:
        """Inclusive range ``low <= value <= high``."""
        return self._compare("between", (low, high))

    def _compare(self, method: str, operands: tuple[Operand, ...]) -> Scan[T]:
        comparison = COMPARISONS[method]
        if self._state is ScanState.IDLE:
            raise InvalidStateError(
                f"Invalid scan state; {method}() must follow scan('attr') or where('attr')"
            )
        operator = comparison.resolve(
            self._state is ScanState.ATTRIBUTE_SELECTED_NEGATED
        )
        if comparison.arity is None and not operands:
            raise InvalidStateError(
                f"Invalid scan state; {method}() requires at least one value"
            )
        name = cast("str", self._pending)
        self._filters[name] = FilterDescriptor(name, operator, operands)
        self._pending = None
        self._state = ScanState.IDLE
        return self

    # -- options -------------------------------------------------------------

    def limit(self, limit: int) -> Scan[T]:
        self._options = self._options.with_limit(limit)
        return self

    def start_at(self, key: dict[str, Any] | None) -> Scan[T]:
        """Resume after ``key`` (a previous page's ``last_evaluated_key``)."""
        self._options = self._options.with_start_key(key)
        return self

    def attributes(self, *fields: str) -> Scan[T]:
        """Return only ``fields`` for each item."""
        self._options = self._options.with_select_fields(*fields)
        return self

    # -- execution -----------------------------------------------------------

    def build_request(self) -> dict[str, Any]:
        """Translate the configured filters and options into a Scan request."""
        if self._state is not ScanState.IDLE:
            raise InvalidStateError(
                f"Invalid scan state; comparison for {self._pending!r} is still pending"
            )
        return self._request_builder.build_request(
            self._model_cls.table_name(), self._filters, self._options
        )

    async def execute(self) -> ScanPage[T]:
        """Send the scan and materialize the returned page.

        Raises:
            InvalidStateError: A comparison is pending or the scan already ran.
            EncodingError: An operand could not be encoded (nothing was sent).
            StoreError: Propagated unchanged from the client.
            DecodingError: A returned item could not be materialized.
        """
        if self._consumed:
            raise InvalidStateError(
                "Invalid scan state; scan already executed, "
                "start a new scan with start_at() for the next page"
            )
        request = self.build_request()
        self._consumed = True

        logger.debug("Scan request: %s", request)
        try:
            response = await self._client.scan(request)
        except StoreError as e:
            logger.warning(
                "Scan on %s failed: %s", request["TableName"], e, exc_info=True
            )
            raise

        if not response:
            return ScanPage()

        rows = response.get("Items") or []
        items = [self._materialize(row) for row in rows]
        logger.debug(
            "Scan on %s returned %d item(s)", request["TableName"], len(items)
        )
        return ScanPage(items, response.get("LastEvaluatedKey"))

    def _materialize(self, row: Mapping[str, Any]) -> T:
        instance = self._model_cls.new_persisted()
        self._schema.decode_into(row, instance)
        return instance

    def __await__(self) -> Generator[Any, None, ScanPage[T]]:
        """Make ``await scan`` equivalent to ``await scan.execute()``."""
        return self.execute().__await__()
