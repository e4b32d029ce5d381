"""API Gateway WebSocket event factories for testing."""

import json
from typing import Any, Dict, Optional

DOMAIN_NAME = "abc123.execute-api.us-east-2.amazonaws.com"
STAGE = "production"
ENDPOINT_URL = f"https://{DOMAIN_NAME}/{STAGE}"


class LambdaContext:
    """Minimal Lambda context object."""

    def __init__(self, aws_request_id: str = "req-1"):
        self.aws_request_id = aws_request_id
        self.function_name = "chat-relay"


def make_event(
    event_type: str,
    connection_id: str = "A",
    route_key: Optional[str] = None,
    body: Any = None
) -> Dict[str, Any]:
    """Build an API Gateway WebSocket proxy event."""
    route_key = route_key or {
        "CONNECT": "$connect",
        "DISCONNECT": "$disconnect",
    }.get(event_type, "$default")
    if body is not None and not isinstance(body, str):
        body = json.dumps(body)
    return {
        "requestContext": {
            "routeKey": route_key,
            "eventType": event_type,
            "connectionId": connection_id,
            "domainName": DOMAIN_NAME,
            "stage": STAGE,
            "requestId": f"{connection_id}-request",
        },
        "body": body,
        "isBase64Encoded": False,
    }
