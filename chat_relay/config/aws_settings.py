"""AWS Settings Helper.

This module provides utilities for loading settings from AWS Parameter Store
when running in an AWS environment.
"""

import os
import logging
from typing import Dict

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)

DEFAULT_PARAMETER_STORE_PATH = "/chat-relay/"


def is_aws_environment() -> bool:
    """Check if the relay is running in an AWS environment.

    Returns:
        bool: True if running in AWS, False otherwise
    """
    return os.environ.get("AWS_EXECUTION_ENV") is not None or \
        os.environ.get("AWS_LAMBDA_FUNCTION_NAME") is not None


def use_parameter_store() -> bool:
    return os.environ.get("USE_PARAMETER_STORE", "false").lower() in ("true", "1", "yes")


def load_aws_parameters(path: str = None) -> Dict[str, str]:
    """Load parameters from AWS Parameter Store.

    Parameter names are reduced to their last path segment and upper-cased,
    so ``/chat-relay/connections_table`` becomes ``CONNECTIONS_TABLE``.

    Args:
        path: Parameter Store path prefix

    Returns:
        Dict[str, str]: Dictionary of parameters
    """
    path = path or os.environ.get("PARAMETER_STORE_PATH", DEFAULT_PARAMETER_STORE_PATH)

    try:
        logger.info(f"Loading parameters from AWS Parameter Store path {path}")
        ssm = boto3.client('ssm')
        parameters = {}
        kwargs = {'Path': path, 'Recursive': True, 'WithDecryption': True}

        while True:
            response = ssm.get_parameters_by_path(**kwargs)
            for param in response.get('Parameters', []):
                name = param['Name'].split('/')[-1].upper()
                parameters[name] = param['Value']
            if 'NextToken' not in response:
                break
            kwargs['NextToken'] = response['NextToken']

        logger.info(f"Loaded {len(parameters)} parameters from Parameter Store")
        return parameters
    except (BotoCoreError, ClientError) as e:
        logger.error(f"Error loading parameters from AWS Parameter Store: {str(e)}")
        return {}


def load_aws_environment_variables() -> None:
    """Copy Parameter Store values into the environment.

    Existing environment variables win over Parameter Store values. Nothing
    happens outside AWS or when USE_PARAMETER_STORE is not enabled.
    """
    if not is_aws_environment() or not use_parameter_store():
        logger.debug("Parameter Store loading is disabled, skipping")
        return

    parameters = load_aws_parameters()
    for key, value in parameters.items():
        if key not in os.environ:
            os.environ[key] = value
