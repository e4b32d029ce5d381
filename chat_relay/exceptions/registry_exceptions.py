"""Connection registry exceptions."""

from typing import Dict, Any, Optional

from .base_exceptions import BaseError


class RegistryError(BaseError):
    """Raised when the connections table rejects an operation."""

    def __init__(
        self,
        message: str,
        operation: str,
        connection_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.operation = operation
        self.connection_id = connection_id
        self.details = details or {}

    def _get_details(self) -> Dict[str, Any]:
        return {
            'operation': self.operation,
            'connection_id': self.connection_id,
            **self.details
        }
