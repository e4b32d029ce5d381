"""Relay exceptions initialization."""

from .base_exceptions import (
    BaseError,
    ConfigurationError,
    MalformedEventError,
)
from .registry_exceptions import RegistryError
from .gateway_exceptions import DeliveryError, ConnectionGoneError

__all__ = [
    'BaseError',
    'ConfigurationError',
    'MalformedEventError',
    'RegistryError',
    'DeliveryError',
    'ConnectionGoneError',
]
