"""Mock objects for testing."""

from .dynamodb_mock import ConnectionsTableMock, ManagementApiMock, client_error
from .lambda_events import ENDPOINT_URL, LambdaContext, make_event

__all__ = [
    'ConnectionsTableMock',
    'ManagementApiMock',
    'client_error',
    'ENDPOINT_URL',
    'LambdaContext',
    'make_event',
]
