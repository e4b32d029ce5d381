"""Relay repositories."""

from .connection_registry import ConnectionRegistry

__all__ = ['ConnectionRegistry']
