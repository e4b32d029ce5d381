"""Base exceptions for the relay."""

from typing import Dict, Any, Optional
from datetime import datetime, timezone


class BaseError(Exception):
    """Base exception class for all relay exceptions."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            'error': self.__class__.__name__,
            'message': self.message,
            'timestamp': self.timestamp.isoformat(),
            'details': self._get_details()
        }

    def _get_details(self) -> Dict[str, Any]:
        """Get additional error details. Override in subclasses."""
        return {}


class ConfigurationError(BaseError):
    """Raised when there is a configuration error."""

    def __init__(self, message: str, config_key: str, expected_type: Optional[str] = None):
        super().__init__(message)
        self.config_key = config_key
        self.expected_type = expected_type

    def _get_details(self) -> Dict[str, Any]:
        return {
            'config_key': self.config_key,
            'expected_type': self.expected_type
        }


class MalformedEventError(BaseError):
    """Raised when a Lambda trigger cannot be interpreted."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field

    def _get_details(self) -> Dict[str, Any]:
        return {'field': self.field}
