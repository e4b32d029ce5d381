"""Relay models."""

from .connection import Connection
from .event import WebSocketEvent

__all__ = ['Connection', 'WebSocketEvent']
