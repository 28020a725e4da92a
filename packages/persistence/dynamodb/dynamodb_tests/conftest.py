"""Test configuration for DynamoDB persistence package."""

from __future__ import annotations

import pytest

from cqrs_ddd_persistence_dynamodb import Scan
from dynamodb_tests.fakes import FakeScanClient, User


@pytest.fixture
def client() -> FakeScanClient:
    return FakeScanClient()


@pytest.fixture
def scan(client: FakeScanClient) -> Scan[User]:
    return Scan(User, client)
