"""Broadcast dispatcher.

Fans one payload out to every recorded connection. Deliveries run
concurrently and are joined with wait-for-all semantics: a failed delivery
is logged and never stops the others. Connections the gateway reports as
gone can be pruned from the registry once the fan-out has settled.
"""

import asyncio
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Union

from chat_relay.constants import PAYLOAD_POLICY_RAW, PAYLOAD_POLICY_USERNAME_PREFIXED
from chat_relay.exceptions import ConnectionGoneError, RegistryError
from chat_relay.models import Connection
from chat_relay.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class BroadcastResult:
    """Per-connection outcome of one broadcast."""

    attempted: List[str] = field(default_factory=list)
    delivered: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)
    stale: List[str] = field(default_factory=list)
    pruned: List[str] = field(default_factory=list)


def message_text(data: Any) -> str:
    """Text form of the ``data`` field of a SendMessage body."""
    if isinstance(data, str):
        return data
    return json.dumps(data)


def format_broadcast_payload(
    text: str,
    sender: Optional[Connection],
    policy: str = PAYLOAD_POLICY_USERNAME_PREFIXED
) -> str:
    """Build the payload delivered to every connection.

    With the ``username_prefixed`` policy the sender's username is put in
    front of the text. A sender without a username gets the raw text.
    """
    if policy == PAYLOAD_POLICY_RAW:
        return text
    if policy != PAYLOAD_POLICY_USERNAME_PREFIXED:
        raise ValueError(f"Unknown broadcast payload policy: {policy}")
    if sender is None or not sender.username:
        return text
    return f"{sender.username}: {text}"


class BroadcastDispatcher:
    """Delivers one payload to many connections."""

    def __init__(
        self,
        gateway: Any,
        registry: Any = None,
        max_concurrency: int = 32,
        prune_stale: bool = True
    ):
        """Initialize the dispatcher.

        Args:
            gateway: PushGateway used for every delivery
            registry: ConnectionRegistry used to prune stale connections
            max_concurrency: Maximum deliveries in flight at once
            prune_stale: Delete connections the gateway reports as gone
        """
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self.gateway = gateway
        self.registry = registry
        self.max_concurrency = max_concurrency
        self.prune_stale = prune_stale

    async def _deliver(
        self,
        semaphore: asyncio.Semaphore,
        connection_id: str,
        payload: Union[str, bytes]
    ) -> None:
        async with semaphore:
            # boto3 calls block, keep them off the event loop
            await asyncio.to_thread(self.gateway.post, connection_id, payload)

    async def dispatch(
        self,
        payload: Union[str, bytes],
        connection_ids: Iterable[str]
    ) -> BroadcastResult:
        """Attempt delivery of payload to every connection id.

        Every id is attempted once, whatever happens to the others. The
        returned result is for logging and inspection; failures are never
        raised.
        """
        ids = list(dict.fromkeys(connection_ids))
        result = BroadcastResult(attempted=ids)
        if not ids:
            logger.info("No connections to broadcast to")
            return result

        semaphore = asyncio.Semaphore(self.max_concurrency)
        outcomes = await asyncio.gather(
            *(self._deliver(semaphore, connection_id, payload) for connection_id in ids),
            return_exceptions=True
        )

        for connection_id, outcome in zip(ids, outcomes):
            if outcome is None:
                result.delivered.append(connection_id)
                continue
            result.failed[connection_id] = str(outcome)
            if isinstance(outcome, ConnectionGoneError):
                result.stale.append(connection_id)
                logger.warning(f"Connection {connection_id} is gone: {outcome}")
            else:
                logger.error(f"Error sending message to connection {connection_id}: {outcome}")

        if result.stale and self.prune_stale:
            await self._prune(result)

        logger.info(
            f"Broadcast settled: {len(result.delivered)}/{len(ids)} delivered, "
            f"{len(result.failed)} failed, {len(result.pruned)} stale pruned"
        )
        return result

    async def _prune(self, result: BroadcastResult) -> None:
        if self.registry is None:
            logger.debug("No registry configured, skipping stale connection pruning")
            return
        for connection_id in result.stale:
            try:
                await asyncio.to_thread(self.registry.delete_connection, connection_id)
                result.pruned.append(connection_id)
                logger.info(f"Removed stale connection: {connection_id}")
            except RegistryError as e:
                logger.error(f"Error removing stale connection {connection_id}: {str(e)}")

    def broadcast(
        self,
        payload: Union[str, bytes],
        connection_ids: Iterable[str]
    ) -> BroadcastResult:
        """Blocking wrapper around dispatch() for synchronous Lambda handlers."""
        return asyncio.run(self.dispatch(payload, connection_ids))
