"""Configuration module.

This module provides configuration settings for the relay.
"""

from functools import lru_cache

from pydantic import ValidationError

from chat_relay.exceptions import ConfigurationError

from .aws_settings import is_aws_environment, load_aws_environment_variables
from .settings import Settings

__all__ = ['Settings', 'get_settings', 'is_aws_environment']


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Parameter Store values are copied into the environment first when
    running in AWS with USE_PARAMETER_STORE enabled.

    Returns:
        Settings: Relay settings

    Raises:
        ConfigurationError: If a setting has an invalid value
    """
    load_aws_environment_variables()
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid relay configuration",
            config_key=", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
        ) from e
