"""Serverless WebSocket chat relay.

AWS Lambda handlers that keep a registry of open WebSocket connections in
DynamoDB and broadcast chat messages to them through the API Gateway
Management API.
"""

__version__ = "0.1.0"
