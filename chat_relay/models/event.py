"""API Gateway WebSocket trigger model."""

import json
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError

from chat_relay.exceptions import MalformedEventError


class WebSocketEvent(BaseModel):
    """The parts of a WebSocket Lambda proxy event the relay uses."""

    event_type: Optional[str] = None
    connection_id: str = Field(..., min_length=1)
    route_key: Optional[str] = None
    domain_name: Optional[str] = None
    stage: Optional[str] = None
    request_id: Optional[str] = None
    body: Optional[str] = None

    @classmethod
    def from_lambda_event(cls, event: Dict[str, Any]) -> "WebSocketEvent":
        """Parse a raw Lambda event.

        Raises:
            MalformedEventError: If the event has no requestContext or
                no connection id
        """
        if not isinstance(event, dict):
            raise MalformedEventError("Event is not an object")

        request_context = event.get('requestContext')
        if not isinstance(request_context, dict):
            raise MalformedEventError("Event has no requestContext", field='requestContext')

        connection_id = request_context.get('connectionId')
        if not connection_id:
            raise MalformedEventError("Event has no connection ID", field='requestContext.connectionId')

        try:
            return cls(
                event_type=request_context.get('eventType'),
                connection_id=connection_id,
                route_key=request_context.get('routeKey'),
                domain_name=request_context.get('domainName'),
                stage=request_context.get('stage'),
                request_id=request_context.get('requestId'),
                body=event.get('body'),
            )
        except ValidationError as e:
            raise MalformedEventError(f"Invalid event: {e}") from e

    @property
    def endpoint_url(self) -> str:
        """Management API endpoint for this WebSocket API stage."""
        if not self.domain_name or not self.stage:
            raise MalformedEventError("Event has no domainName/stage", field='requestContext.domainName')
        return f"https://{self.domain_name}/{self.stage}"

    def json_body(self) -> Dict[str, Any]:
        """Parse the message body as a JSON object."""
        if not self.body:
            raise MalformedEventError("Message has no body", field='body')
        try:
            parsed = json.loads(self.body)
        except json.JSONDecodeError as e:
            raise MalformedEventError(f"Invalid JSON in message body: {e}", field='body') from e
        if not isinstance(parsed, dict):
            raise MalformedEventError("Message body is not a JSON object", field='body')
        return parsed
