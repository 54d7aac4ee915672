from . import (
    profile_service,
    recommendation_service,
    record_service,
)
from . import recommendation_engine

__all__ = [
    "profile_service",
    "recommendation_engine",
    "recommendation_service",
    "record_service",
]
"""Service-layer helpers for API operations."""
