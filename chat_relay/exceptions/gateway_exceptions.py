"""Push gateway exceptions."""

from typing import Dict, Any, Optional

from .base_exceptions import BaseError


class DeliveryError(BaseError):
    """Raised when a message cannot be posted to a connection."""

    def __init__(
        self,
        connection_id: str,
        reason: str,
        error_code: Optional[str] = None
    ):
        super().__init__(f"Failed to deliver message to connection {connection_id}: {reason}")
        self.connection_id = connection_id
        self.reason = reason
        self.error_code = error_code

    def _get_details(self) -> Dict[str, Any]:
        return {
            'connection_id': self.connection_id,
            'reason': self.reason,
            'error_code': self.error_code
        }


class ConnectionGoneError(DeliveryError):
    """Raised when the gateway reports the connection no longer exists."""
