"""Unit tests for DynamoScanRepository paging."""

from __future__ import annotations

import pytest

from cqrs_ddd_persistence_dynamodb import DynamoScanRepository, Scan, ScanState
from dynamodb_tests.fakes import FakeScanClient, User


def _page(*ids: str, cursor: str | None = None) -> dict:
    response: dict = {"Items": [{"id": {"S": i}} for i in ids]}
    if cursor is not None:
        response["LastEvaluatedKey"] = {"id": {"S": cursor}}
    return response


def test_scan_factory_selects_attribute():
    repo = DynamoScanRepository(FakeScanClient(), User)
    scan = repo.scan("age")
    assert isinstance(scan, Scan)
    assert scan.state is ScanState.ATTRIBUTE_SELECTED


def test_scan_factory_returns_fresh_scans():
    repo = DynamoScanRepository(FakeScanClient(), User)
    assert repo.scan() is not repo.scan()


@pytest.mark.asyncio
async def test_scan_pages_follows_cursor():
    client = FakeScanClient([_page("u-1", "u-2", cursor="u-2"), _page("u-3")])
    repo = DynamoScanRepository(client, User)

    pages = [
        page
        async for page in repo.scan_pages(
            lambda s: s.where("age").ge(18), page_size=2
        )
    ]

    assert [[u.id for u in p] for p in pages] == [["u-1", "u-2"], ["u-3"]]
    first, second = client.requests
    assert "ExclusiveStartKey" not in first
    assert second["ExclusiveStartKey"] == {"id": {"S": "u-2"}}
    assert first["Limit"] == second["Limit"] == 2
    assert first["ScanFilter"] == second["ScanFilter"]


@pytest.mark.asyncio
async def test_scan_all_flattens_pages():
    client = FakeScanClient(
        [_page("u-1", cursor="u-1"), _page(cursor="u-1b"), _page("u-2")]
    )
    repo = DynamoScanRepository(client, User)
    users = await repo.scan_all()
    assert [u.id for u in users] == ["u-1", "u-2"]
    assert len(client.requests) == 3


@pytest.mark.asyncio
async def test_scan_all_empty_table():
    repo = DynamoScanRepository(FakeScanClient(), User)
    assert await repo.scan_all() == []
