"""
WebSocket Lambda Handler for AWS API Gateway

This module provides the Lambda entry point for a WebSocket API whose
$connect, $disconnect and message routes all point at one function.
"""

from typing import Any, Dict, Optional

from chat_relay.constants import (
    BODY_CONNECTED,
    BODY_CONNECT_ERROR,
    BODY_DEFAULT,
    BODY_DISCONNECTED,
    BODY_DISCONNECT_ERROR,
    BODY_MESSAGE_SENT,
    BODY_USERNAME_ATTACHED,
    EVENT_CONNECT,
    EVENT_DISCONNECT,
    EVENT_MESSAGE,
    MESSAGE_DATA_FIELD,
    MESSAGE_USERNAME_FIELD,
)
from chat_relay.exceptions import MalformedEventError, RegistryError
from chat_relay.models import WebSocketEvent
from chat_relay.services.broadcast import format_broadcast_payload, message_text
from chat_relay.services.context import RelayContext, get_relay_context
from chat_relay.utils.logger import get_logger, get_request_logger

logger = get_logger(__name__)


def _response(status_code: int, body: str) -> Dict[str, Any]:
    return {'statusCode': status_code, 'body': body}


def default_response() -> Dict[str, Any]:
    """Response for triggers the relay does not act on."""
    return _response(200, BODY_DEFAULT)


def handler(event, context, relay: Optional[RelayContext] = None):
    """
    Handle every WebSocket route.

    Args:
        event: Lambda event
        context: Lambda context
        relay: Runtime context, the cached process context when omitted

    Returns:
        dict: Response
    """
    try:
        ws_event = WebSocketEvent.from_lambda_event(event)
    except MalformedEventError as e:
        logger.warning(f"Ignoring malformed event: {e.message}")
        return default_response()

    relay = relay or get_relay_context()
    log = get_request_logger(logger, getattr(context, 'aws_request_id', None), ws_event.connection_id)

    if ws_event.event_type == EVENT_CONNECT:
        return handle_connect(ws_event, relay, log)
    if ws_event.event_type == EVENT_DISCONNECT:
        return handle_disconnect(ws_event, relay, log)
    if ws_event.event_type == EVENT_MESSAGE:
        return handle_message(ws_event, relay, log)

    log.warning(f"Ignoring event type {ws_event.event_type!r}")
    return default_response()


def handle_connect(ws_event: WebSocketEvent, relay: RelayContext, log) -> Dict[str, Any]:
    """Record a new connection."""
    try:
        relay.registry.put_connection(ws_event.connection_id)
        return _response(200, BODY_CONNECTED)
    except RegistryError as e:
        log.error(f"Error storing connectionId: {str(e)}")
        return _response(500, BODY_CONNECT_ERROR)


def handle_disconnect(ws_event: WebSocketEvent, relay: RelayContext, log) -> Dict[str, Any]:
    """Forget a closed connection."""
    try:
        relay.registry.delete_connection(ws_event.connection_id)
        return _response(200, BODY_DISCONNECTED)
    except RegistryError as e:
        log.error(f"Error deleting connectionId: {str(e)}")
        return _response(500, BODY_DISCONNECT_ERROR)


def handle_message(ws_event: WebSocketEvent, relay: RelayContext, log) -> Dict[str, Any]:
    """Route a MESSAGE event by its route key."""
    settings = relay.settings

    if ws_event.route_key == settings.SEND_MESSAGE_ROUTE:
        return handle_send_message(ws_event, relay, log)
    if ws_event.route_key == settings.SEND_USERNAME_ROUTE:
        return handle_send_username(ws_event, relay, log)

    log.warning(f"Ignoring message on route {ws_event.route_key!r}")
    return default_response()


def handle_send_message(ws_event: WebSocketEvent, relay: RelayContext, log) -> Dict[str, Any]:
    """Broadcast the message in the body to every recorded connection."""
    try:
        body = ws_event.json_body()
        endpoint_url = ws_event.endpoint_url
    except MalformedEventError as e:
        log.warning(f"Ignoring message: {e.message}")
        return default_response()

    if MESSAGE_DATA_FIELD not in body:
        log.warning(f"Ignoring message without {MESSAGE_DATA_FIELD!r} field")
        return default_response()

    try:
        connections = relay.registry.scan_connections()
    except RegistryError as e:
        log.error(f"Error sending message: {str(e)}")
        return _response(500, f"Error sending message: {str(e)}")

    sender = next(
        (c for c in connections if c.connection_id == ws_event.connection_id),
        None
    )
    payload = format_broadcast_payload(
        message_text(body[MESSAGE_DATA_FIELD]),
        sender,
        relay.settings.BROADCAST_PAYLOAD_POLICY
    )

    relay.dispatcher_for(endpoint_url).broadcast(
        payload,
        [c.connection_id for c in connections]
    )
    return _response(200, BODY_MESSAGE_SENT)


def handle_send_username(ws_event: WebSocketEvent, relay: RelayContext, log) -> Dict[str, Any]:
    """Attach the username in the body to the sending connection."""
    try:
        body = ws_event.json_body()
    except MalformedEventError as e:
        log.warning(f"Ignoring username message: {e.message}")
        return default_response()

    username = body.get(MESSAGE_USERNAME_FIELD)
    if not isinstance(username, str) or not username:
        log.warning(f"Ignoring username message without {MESSAGE_USERNAME_FIELD!r} field")
        return default_response()

    try:
        relay.registry.attach_username(ws_event.connection_id, username)
        return _response(200, BODY_USERNAME_ATTACHED)
    except RegistryError as e:
        log.error(f"Error attaching username: {str(e)}")
        return _response(
            500,
            f"Error attaching username '{username}' to connection {ws_event.connection_id}: {str(e)}"
        )
