"""API Gateway Management API client for pushing to WebSocket connections."""

from typing import Any, Union

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from chat_relay.constants import GONE_ERROR_CODES
from chat_relay.exceptions import ConnectionGoneError, DeliveryError


class PushGateway:
    """Posts data to individual WebSocket connections."""

    def __init__(self, client: Any):
        """Initialize the gateway.

        Args:
            client: boto3 ``apigatewaymanagementapi`` client
        """
        self.client = client

    @classmethod
    def for_endpoint(cls, endpoint_url: str, region_name: str = None, max_attempts: int = 1) -> "PushGateway":
        """Create a gateway for one WebSocket API stage.

        Args:
            endpoint_url: ``https://{domainName}/{stage}``
            region_name: AWS region of the API
            max_attempts: botocore attempts per call, 1 disables retries
        """
        client = boto3.client(
            'apigatewaymanagementapi',
            endpoint_url=endpoint_url,
            region_name=region_name,
            config=Config(retries={'max_attempts': max_attempts, 'mode': 'standard'})
        )
        return cls(client)

    def post(self, connection_id: str, data: Union[str, bytes]) -> None:
        """Deliver data to one connection.

        Raises:
            ConnectionGoneError: If the connection no longer exists
            DeliveryError: If the gateway rejects the call for any other reason
        """
        if isinstance(data, str):
            data = data.encode('utf-8')
        try:
            self.client.post_to_connection(ConnectionId=connection_id, Data=data)
        except ClientError as e:
            error = e.response.get('Error', {})
            code = error.get('Code')
            if code in GONE_ERROR_CODES:
                raise ConnectionGoneError(connection_id, str(e), error_code=code) from e
            raise DeliveryError(connection_id, str(e), error_code=code) from e
        except BotoCoreError as e:
            raise DeliveryError(connection_id, str(e)) from e
