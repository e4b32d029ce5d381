"""Connection registry backed by a DynamoDB table.

Each open WebSocket connection is one item keyed by ``connectionId``. The
registry only forwards put/update/delete/scan calls; it keeps no state of
its own between calls.
"""

from typing import Any, Dict, List

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from chat_relay.constants import CONNECTION_ID_ATTR, USERNAME_ATTR
from chat_relay.exceptions import RegistryError
from chat_relay.models import Connection
from chat_relay.utils.logger import get_logger

logger = get_logger(__name__)


class ConnectionRegistry:
    """Repository for connection records."""

    def __init__(self, table: Any):
        """Initialize the registry.

        Args:
            table: boto3 DynamoDB Table resource
        """
        self.table = table

    @classmethod
    def from_settings(cls, settings) -> "ConnectionRegistry":
        """Create a registry for the table named in settings."""
        resource_kwargs = {'region_name': settings.AWS_REGION}
        if settings.DYNAMODB_ENDPOINT_URL:
            resource_kwargs['endpoint_url'] = settings.DYNAMODB_ENDPOINT_URL
        dynamodb = boto3.resource('dynamodb', **resource_kwargs)
        return cls(dynamodb.Table(settings.CONNECTIONS_TABLE))

    def put_connection(self, connection_id: str) -> Connection:
        """Store a connection, replacing any existing record for the id."""
        connection = Connection(connection_id=connection_id)
        try:
            self.table.put_item(Item=connection.to_item())
        except (BotoCoreError, ClientError) as e:
            raise RegistryError(
                f"Error storing connection {connection_id}: {str(e)}",
                operation='put',
                connection_id=connection_id
            ) from e
        logger.info(f"Connection stored: {connection_id}")
        return connection

    def attach_username(self, connection_id: str, username: str) -> Connection:
        """Set the username on a connection.

        The record is created when it does not exist yet; other attributes of
        an existing record are kept.
        """
        try:
            response = self.table.update_item(
                Key={CONNECTION_ID_ATTR: connection_id},
                UpdateExpression='SET #username = :username',
                ExpressionAttributeNames={'#username': USERNAME_ATTR},
                ExpressionAttributeValues={':username': username},
                ReturnValues='ALL_NEW'
            )
        except (BotoCoreError, ClientError) as e:
            raise RegistryError(
                f"Error attaching username to connection {connection_id}: {str(e)}",
                operation='update',
                connection_id=connection_id,
                details={'username': username}
            ) from e
        logger.info(f"Username attached to connection {connection_id}")
        attributes = response.get('Attributes') or {
            CONNECTION_ID_ATTR: connection_id,
            USERNAME_ATTR: username
        }
        return Connection.from_item(attributes)

    def delete_connection(self, connection_id: str) -> None:
        """Remove a connection. Removing an unknown id is not an error."""
        try:
            self.table.delete_item(Key={CONNECTION_ID_ATTR: connection_id})
        except (BotoCoreError, ClientError) as e:
            raise RegistryError(
                f"Error removing connection {connection_id}: {str(e)}",
                operation='delete',
                connection_id=connection_id
            ) from e
        logger.info(f"Connection removed: {connection_id}")

    def scan_connections(self) -> List[Connection]:
        """Return every recorded connection, following scan pagination."""
        connections: List[Connection] = []
        scan_kwargs: Dict[str, Any] = {}
        try:
            while True:
                response = self.table.scan(**scan_kwargs)
                for item in response.get('Items', []):
                    if item.get(CONNECTION_ID_ATTR):
                        connections.append(Connection.from_item(item))
                    else:
                        logger.warning(f"Skipping connection item without {CONNECTION_ID_ATTR}: {item}")
                if 'LastEvaluatedKey' not in response:
                    break
                scan_kwargs['ExclusiveStartKey'] = response['LastEvaluatedKey']
        except (BotoCoreError, ClientError) as e:
            raise RegistryError(
                f"Error scanning connections: {str(e)}",
                operation='scan'
            ) from e
        logger.debug(f"Scanned {len(connections)} connections")
        return connections
