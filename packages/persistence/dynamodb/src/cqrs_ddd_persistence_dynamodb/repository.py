"""DynamoScanRepository[T] - scan entry point for one model's table."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Generic, TypeVar

from .scan import Scan

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

    from .model import DynamoModel
    from .ports import IScanClient
    from .scan import ScanPage

logger = logging.getLogger("cqrs_ddd.dynamodb.repository")

T = TypeVar("T", bound="DynamoModel")


class DynamoScanRepository(Generic[T]):
    """Creates scans over ``model_cls``'s table and walks their pages.

    Usage::

        repo = DynamoScanRepository(DynamoStoreClient(connection), User)
        page = await repo.scan("age").ge(21).limit(100)

        adults = await repo.scan_all(lambda s: s.where("age").ge(21))
    """

    def __init__(self, client: IScanClient, model_cls: type[T]) -> None:
        self._client = client
        self._model_cls = model_cls

    def scan(self, attribute: str | None = None) -> Scan[T]:
        """Start a new scan, optionally selecting the first attribute."""
        return Scan(self._model_cls, self._client, attribute)

    async def scan_pages(
        self,
        configure: Callable[[Scan[T]], Scan[T]] | None = None,
        *,
        page_size: int | None = None,
    ) -> AsyncIterator[ScanPage[T]]:
        """Yield every page, issuing one fresh scan per page.

        ``configure`` applies the same filters to each page's scan.
        """
        cursor = None
        pages = 0
        while True:
            scan = self.scan()
            if configure is not None:
                scan = configure(scan)
            if page_size is not None:
                scan.limit(page_size)
            page = await scan.start_at(cursor)
            pages += 1
            yield page
            cursor = page.last_evaluated_key
            if cursor is None:
                logger.debug(
                    "Scan of %s finished after %d page(s)",
                    self._model_cls.table_name(),
                    pages,
                )
                return

    async def scan_all(
        self,
        configure: Callable[[Scan[T]], Scan[T]] | None = None,
        *,
        page_size: int | None = None,
    ) -> list[T]:
        """Return the items of every page, in order.

        .. note:: This reads the whole table. Prefer ``scan_pages()`` on
           large tables.
        """
        return [
            item
            async for page in self.scan_pages(configure, page_size=page_size)
            for item in page
        ]
