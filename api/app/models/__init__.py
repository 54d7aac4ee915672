from app.models.profile import Preference, PreferenceCategory, Profile, Routine
from app.models.recommendation import Feedback, RecommendationHistory, RecommendationType
from app.models.record import Record, RecordTag, RecordType

__all__ = [
    "Feedback",
    "Preference",
    "PreferenceCategory",
    "Profile",
    "Record",
    "RecordTag",
    "RecordType",
    "RecommendationHistory",
    "RecommendationType",
    "Routine",
]
"""SQLAlchemy ORM models for the life agent API."""
