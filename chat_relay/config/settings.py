"""Application settings module.

This module provides centralized configuration for the chat relay.
All settings are defined here and can be overridden using environment
variables of the same name.

Environment Variable Precedence:
1. OS Environment Variables (Highest Priority)
   - Set in the Lambda function configuration
   - Example: export CONNECTIONS_TABLE="prod-websocket-connections"

2. Default .env File
   - .env file in the working directory
   - Local development settings

3. Settings Class Defaults (Lowest Priority)

Usage:
    from chat_relay.config import get_settings

    settings = get_settings()
    table_name = settings.CONNECTIONS_TABLE
"""

import logging
from typing import Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from chat_relay.constants import PAYLOAD_POLICIES, PAYLOAD_POLICY_USERNAME_PREFIXED


class Settings(BaseSettings):
    """Relay settings.

    Settings are loaded from environment variables and an optional .env file.
    """

    # Application settings
    APP_NAME: str = Field(default="chat-relay", description="Application name")
    APP_ENVIRONMENT: str = Field(default="development", description="Application environment")

    # AWS settings
    AWS_REGION: str = Field(default="us-east-2", description="Region of the connections table")
    CONNECTIONS_TABLE: str = Field(
        default="WebSocketConnections",
        description="DynamoDB table holding one item per open connection"
    )
    DYNAMODB_ENDPOINT_URL: Optional[str] = Field(
        default=None,
        description="DynamoDB endpoint override (local DynamoDB)"
    )

    # Routes
    SEND_MESSAGE_ROUTE: str = Field(default="SendMessage", description="Route key for broadcasts")
    SEND_USERNAME_ROUTE: str = Field(default="SendUsername", description="Route key for username attach")

    # Broadcast settings
    BROADCAST_PAYLOAD_POLICY: str = Field(
        default=PAYLOAD_POLICY_USERNAME_PREFIXED,
        description="Either 'raw' or 'username_prefixed'"
    )
    BROADCAST_MAX_CONCURRENCY: int = Field(default=32, description="Maximum deliveries in flight")
    PRUNE_STALE_CONNECTIONS: bool = Field(
        default=True,
        description="Delete connections the gateway reports as gone"
    )
    GATEWAY_MAX_ATTEMPTS: int = Field(
        default=1,
        description="botocore attempts per post_to_connection call"
    )

    # Logging settings
    LOG_LEVEL: Union[str, int] = Field(default=logging.INFO, description="Logging level")
    LOG_JSON: bool = Field(default=False, description="Emit JSON log lines")

    @field_validator('BROADCAST_PAYLOAD_POLICY')
    @classmethod
    def validate_payload_policy(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in PAYLOAD_POLICIES:
            raise ValueError(f"BROADCAST_PAYLOAD_POLICY must be one of {', '.join(PAYLOAD_POLICIES)}")
        return v

    @field_validator('BROADCAST_MAX_CONCURRENCY', 'GATEWAY_MAX_ATTEMPTS')
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be at least 1")
        return v

    @field_validator('LOG_LEVEL')
    @classmethod
    def normalize_log_level(cls, v: Union[str, int]) -> Union[str, int]:
        if isinstance(v, str):
            return v.upper()
        return v

    model_config = {
        "case_sensitive": True,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore"
    }
