"""DynamoDB client management and the aiobotocore-backed scan client."""

from __future__ import annotations

import logging
from typing import Any

from aiobotocore.session import AioSession
from botocore.exceptions import BotoCoreError, ClientError

from .exceptions import DynamoConnectionError, StoreError

logger = logging.getLogger("cqrs_ddd.dynamodb.connection")


class DynamoConnectionManager:
    """Manages a shared aiobotocore DynamoDB client."""

    def __init__(
        self,
        region_name: str = "us-east-1",
        *,
        session: AioSession | None = None,
        endpoint_url: str | None = None,
        **client_kwargs: Any,
    ) -> None:
        """Configure region, optional session, local endpoint and client kwargs."""
        self._region = region_name
        self._session = session or AioSession()
        self._endpoint_url = endpoint_url
        self._client_kwargs = client_kwargs
        self._client: Any = None
        self._client_cm: Any = None

    async def get_client(self) -> Any:
        """Return shared DynamoDB client; create if needed."""
        if self._client is None:
            kwargs = dict(self._client_kwargs)
            if self._endpoint_url is not None:
                kwargs["endpoint_url"] = self._endpoint_url
            try:
                self._client_cm = self._session.create_client(
                    "dynamodb",
                    region_name=self._region,
                    **kwargs,
                )
                self._client = await self._client_cm.__aenter__()
            except (BotoCoreError, ClientError) as e:
                self._client_cm = None
                raise DynamoConnectionError(str(e)) from e
            logger.debug("Created DynamoDB client for region %s", self._region)
        return self._client

    async def close(self) -> None:
        """Close the client if open."""
        if self._client_cm is not None:
            await self._client_cm.__aexit__(None, None, None)
            self._client_cm = None
            self._client = None

    async def health_check(self) -> bool:
        """Return True if we can list tables (lightweight check)."""
        try:
            client = await self.get_client()
            await client.list_tables(Limit=1)
            return True
        except Exception:  # noqa: BLE001
            return False


class DynamoStoreClient:
    """IScanClient over a DynamoConnectionManager.

    Service and transport failures are raised as ``StoreError`` carrying the
    AWS error code. No retries beyond botocore's own retry configuration.
    """

    def __init__(self, connection: DynamoConnectionManager) -> None:
        self._connection = connection

    async def scan(self, request: dict[str, Any]) -> dict[str, Any]:
        client = await self._connection.get_client()
        try:
            response: dict[str, Any] = await client.scan(**request)
        except ClientError as e:
            error = e.response.get("Error", {})
            raise StoreError(
                str(error.get("Message") or e), code=error.get("Code")
            ) from e
        except BotoCoreError as e:
            raise StoreError(str(e)) from e
        return response
