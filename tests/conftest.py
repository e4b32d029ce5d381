"""Test configuration module."""

import pytest

from chat_relay.config import Settings
from chat_relay.repositories import ConnectionRegistry
from chat_relay.services.context import RelayContext
from chat_relay.services.gateway import PushGateway
from tests.mocks import ConnectionsTableMock, ENDPOINT_URL, LambdaContext, ManagementApiMock


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def table() -> ConnectionsTableMock:
    return ConnectionsTableMock()


@pytest.fixture
def registry(table) -> ConnectionRegistry:
    return ConnectionRegistry(table)


@pytest.fixture
def management_api() -> ManagementApiMock:
    return ManagementApiMock()


@pytest.fixture
def gateway(management_api) -> PushGateway:
    return PushGateway(management_api)


@pytest.fixture
def relay(settings, registry, gateway) -> RelayContext:
    return RelayContext(settings, registry, gateways={ENDPOINT_URL: gateway})


@pytest.fixture
def lambda_context() -> LambdaContext:
    return LambdaContext()
