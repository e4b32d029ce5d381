"""
Lambda function handlers for AWS services.

This package contains Lambda function handlers for the WebSocket API.
"""

from .websocket_handler import (
    handler,
    handle_connect,
    handle_disconnect,
    handle_message,
    handle_send_message,
    handle_send_username,
)

__all__ = [
    'handler',
    'handle_connect',
    'handle_disconnect',
    'handle_message',
    'handle_send_message',
    'handle_send_username',
]
