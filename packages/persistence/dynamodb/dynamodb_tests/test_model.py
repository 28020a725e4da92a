"""Tests for DynamoModel table naming and persisted-state tracking."""

from __future__ import annotations

from cqrs_ddd_persistence_dynamodb import DynamoModel
from dynamodb_tests.fakes import Tenant, User


def test_table_name():
    assert User.table_name() == "users"
    assert Tenant.table_name() == "Tenant"


def test_constructed_instance_is_new():
    assert User(id="u-1").is_new is True


def test_new_persisted_is_empty_and_not_new():
    user = User.new_persisted()
    assert isinstance(user, User)
    assert user.is_new is False
    assert user.model_fields_set == set()


def test_mark_persisted():
    user = User(id="u-1")
    user.mark_persisted()
    assert user.is_new is False


def test_dynamo_schema_cached_per_class():
    assert User.dynamo_schema() is User.dynamo_schema()
    assert User.dynamo_schema() is not Tenant.dynamo_schema()
    assert Tenant.dynamo_schema().attribute_names == ["id"]


def test_populate_by_alias_or_name():
    class Account(DynamoModel):
        owner_id: str = ""

    assert Account(owner_id="x").owner_id == "x"
    assert User(id="u", email="a@b.c").email_address == "a@b.c"
    assert User(id="u", email_address="a@b.c").email_address == "a@b.c"
