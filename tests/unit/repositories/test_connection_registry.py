"""Unit tests for the DynamoDB connection registry."""

from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import EndpointConnectionError

from chat_relay.config import Settings
from chat_relay.exceptions import RegistryError
from chat_relay.models import Connection
from chat_relay.repositories import ConnectionRegistry
from tests.mocks import ConnectionsTableMock


def test_put_connection_stores_item(registry, table):
    connection = registry.put_connection("A")

    assert connection == Connection(connection_id="A")
    assert table.items == {"A": {"connectionId": "A"}}


def test_put_connection_twice_keeps_one_record(registry, table):
    registry.put_connection("A")
    registry.put_connection("A")

    assert list(table.items) == ["A"]
    assert len(registry.scan_connections()) == 1


def test_delete_unknown_connection_is_not_an_error(registry, table):
    registry.delete_connection("missing")

    assert table.calls == ["delete_item"]


def test_delete_connection_removes_item(registry, table):
    registry.put_connection("A")
    registry.put_connection("B")

    registry.delete_connection("A")

    assert list(table.items) == ["B"]


def test_attach_username_without_connect_creates_record(registry, table):
    connection = registry.attach_username("A", "alice")

    assert connection.username == "alice"
    assert table.items["A"] == {"connectionId": "A", "username": "alice"}


def test_attach_username_merges_into_existing_record(registry, table):
    table.items["A"] = {"connectionId": "A", "connectedAt": "2024-01-01"}

    registry.attach_username("A", "alice")

    assert table.items["A"] == {
        "connectionId": "A",
        "connectedAt": "2024-01-01",
        "username": "alice",
    }


def test_attach_username_sends_update_expression():
    table = MagicMock()
    table.update_item.return_value = {}
    registry = ConnectionRegistry(table)

    connection = registry.attach_username("A", "alice")

    kwargs = table.update_item.call_args.kwargs
    assert kwargs['Key'] == {'connectionId': 'A'}
    assert kwargs['ExpressionAttributeNames'] == {'#username': 'username'}
    assert kwargs['ExpressionAttributeValues'] == {':username': 'alice'}
    assert connection == Connection(connection_id="A", username="alice")


def test_scan_follows_pagination():
    table = ConnectionsTableMock(page_size=2)
    registry = ConnectionRegistry(table)
    for connection_id in ["A", "B", "C", "D", "E"]:
        registry.put_connection(connection_id)
    registry.attach_username("C", "carol")

    connections = registry.scan_connections()

    assert [c.connection_id for c in connections] == ["A", "B", "C", "D", "E"]
    assert connections[2].username == "carol"
    assert table.calls.count("scan") == 3


def test_scan_skips_items_without_connection_id():
    table = MagicMock()
    table.scan.return_value = {'Items': [{'connectionId': 'A'}, {'username': 'ghost'}]}
    registry = ConnectionRegistry(table)

    connections = registry.scan_connections()

    assert connections == [Connection(connection_id="A")]


@pytest.mark.parametrize("operation, call", [
    ("put", lambda r: r.put_connection("A")),
    ("update", lambda r: r.attach_username("A", "alice")),
    ("delete", lambda r: r.delete_connection("A")),
    ("scan", lambda r: r.scan_connections()),
])
def test_client_errors_become_registry_errors(operation, call):
    table = ConnectionsTableMock()
    table.fail_on = {"put_item", "update_item", "delete_item", "scan"}
    registry = ConnectionRegistry(table)

    with pytest.raises(RegistryError) as exc_info:
        call(registry)

    assert exc_info.value.operation == operation
    assert "ProvisionedThroughputExceededException" in str(exc_info.value)


def test_botocore_errors_become_registry_errors():
    table = MagicMock()
    table.scan.side_effect = EndpointConnectionError(endpoint_url="http://localhost:8000")
    registry = ConnectionRegistry(table)

    with pytest.raises(RegistryError) as exc_info:
        registry.scan_connections()

    assert exc_info.value.to_dict()['details']['operation'] == 'scan'


def test_from_settings_uses_table_name_and_endpoint():
    settings = Settings(
        _env_file=None,
        CONNECTIONS_TABLE="chat-connections",
        DYNAMODB_ENDPOINT_URL="http://localhost:8000",
        AWS_REGION="eu-west-1",
    )
    with patch('chat_relay.repositories.connection_registry.boto3.resource') as mock_resource:
        registry = ConnectionRegistry.from_settings(settings)

    mock_resource.assert_called_once_with(
        'dynamodb',
        region_name="eu-west-1",
        endpoint_url="http://localhost:8000"
    )
    mock_resource.return_value.Table.assert_called_once_with("chat-connections")
    assert registry.table is mock_resource.return_value.Table.return_value
