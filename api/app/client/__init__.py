"""Console client for the life agent API."""

from app.client.api_client import ApiError, LifeAgentClient, friendly_error

__all__ = ["ApiError", "LifeAgentClient", "friendly_error"]
