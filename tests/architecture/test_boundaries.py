from pytest_archon import archrule


def test_builder_independent_of_transport() -> None:
    """
    The scan builder, request translation and operator table must not
    depend on the aiobotocore client. They talk to the store through IScanClient.
    """
    (
        archrule("builder_is_transport_free")
        .match("cqrs_ddd_persistence_dynamodb.scan")
        .match("cqrs_ddd_persistence_dynamodb.request_builder")
        .match("cqrs_ddd_persistence_dynamodb.operators")
        .match("cqrs_ddd_persistence_dynamodb.filters")
        .match("cqrs_ddd_persistence_dynamodb.options")
        .should_not_import("cqrs_ddd_persistence_dynamodb.connection")
        .should_not_import("aiobotocore*")
        .check("cqrs_ddd_persistence_dynamodb")
    )


def test_ports_layering() -> None:
    """
    Ports (interfaces) should not depend on implementations.
    """
    (
        archrule("ports_layering")
        .match("cqrs_ddd_persistence_dynamodb.ports")
        .should_not_import("cqrs_ddd_persistence_dynamodb.connection")
        .should_not_import("cqrs_ddd_persistence_dynamodb.scan")
        .should_not_import("cqrs_ddd_persistence_dynamodb.repository")
        .check("cqrs_ddd_persistence_dynamodb")
    )


def test_schema_independent_of_scan() -> None:
    """
    Attribute encoding is a collaborator of the scan, never the other way round.
    """
    (
        archrule("schema_independence")
        .match("cqrs_ddd_persistence_dynamodb.schema")
        .match("cqrs_ddd_persistence_dynamodb.model")
        .should_not_import("cqrs_ddd_persistence_dynamodb.scan")
        .should_not_import("cqrs_ddd_persistence_dynamodb.repository")
        .should_not_import("cqrs_ddd_persistence_dynamodb.connection")
        .check("cqrs_ddd_persistence_dynamodb")
    )
