"""Process-wide runtime context.

boto3 clients are built once per Lambda execution environment and reused by
every warm invocation. Only client handles live here; connection records are
always read from the registry.
"""

import threading
from functools import lru_cache
from typing import Dict, Optional

from chat_relay.config import Settings, get_settings
from chat_relay.repositories import ConnectionRegistry
from chat_relay.services.broadcast import BroadcastDispatcher
from chat_relay.services.gateway import PushGateway


class RelayContext:
    """Long-lived handles shared across invocations."""

    def __init__(
        self,
        settings: Settings,
        registry: ConnectionRegistry,
        gateways: Optional[Dict[str, PushGateway]] = None
    ):
        self.settings = settings
        self.registry = registry
        self._gateways: Dict[str, PushGateway] = dict(gateways or {})
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "RelayContext":
        return cls(settings, ConnectionRegistry.from_settings(settings))

    def gateway_for(self, endpoint_url: str) -> PushGateway:
        """Return the gateway for an API stage, creating it on first use."""
        with self._lock:
            gateway = self._gateways.get(endpoint_url)
            if gateway is None:
                gateway = PushGateway.for_endpoint(
                    endpoint_url,
                    region_name=self.settings.AWS_REGION,
                    max_attempts=self.settings.GATEWAY_MAX_ATTEMPTS
                )
                self._gateways[endpoint_url] = gateway
            return gateway

    def dispatcher_for(self, endpoint_url: str) -> BroadcastDispatcher:
        return BroadcastDispatcher(
            self.gateway_for(endpoint_url),
            registry=self.registry,
            max_concurrency=self.settings.BROADCAST_MAX_CONCURRENCY,
            prune_stale=self.settings.PRUNE_STALE_CONNECTIONS
        )


@lru_cache()
def get_relay_context() -> RelayContext:
    """Get the cached context for this process."""
    return RelayContext.from_settings(get_settings())
