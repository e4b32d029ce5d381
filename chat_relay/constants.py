"""Constants shared by the relay handlers."""

# API Gateway WebSocket event types (requestContext.eventType)
EVENT_CONNECT = "CONNECT"
EVENT_DISCONNECT = "DISCONNECT"
EVENT_MESSAGE = "MESSAGE"

# Attribute names in the connections table
CONNECTION_ID_ATTR = "connectionId"
USERNAME_ATTR = "username"

# Body fields for MESSAGE routes
MESSAGE_DATA_FIELD = "data"
MESSAGE_USERNAME_FIELD = "username"

# Broadcast payload policies
PAYLOAD_POLICY_RAW = "raw"
PAYLOAD_POLICY_USERNAME_PREFIXED = "username_prefixed"
PAYLOAD_POLICIES = (PAYLOAD_POLICY_RAW, PAYLOAD_POLICY_USERNAME_PREFIXED)

# Gateway error codes for connections that no longer exist
GONE_ERROR_CODES = ("GoneException", "410")

# Response bodies
BODY_DEFAULT = "Event Handler"
BODY_CONNECTED = "Connected"
BODY_CONNECT_ERROR = "Error connecting."
BODY_DISCONNECTED = "Disconnected"
BODY_DISCONNECT_ERROR = "Error disconnecting."
BODY_MESSAGE_SENT = "Message sent to all connections"
BODY_USERNAME_ATTACHED = "Username attached successfully"
