"""Connection record model."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from chat_relay.constants import CONNECTION_ID_ATTR, USERNAME_ATTR


class Connection(BaseModel):
    """One open WebSocket session as stored in the connections table."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    connection_id: str = Field(..., min_length=1, alias=CONNECTION_ID_ATTR)
    username: Optional[str] = Field(default=None, alias=USERNAME_ATTR)

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "Connection":
        """Build a connection from a DynamoDB item."""
        return cls.model_validate(item)

    def to_item(self) -> Dict[str, Any]:
        """Convert to a DynamoDB item, leaving out unset attributes."""
        return self.model_dump(by_alias=True, exclude_none=True)
