"""Recommendation, feedback, and model-output schemas."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from app.models.recommendation import RecommendationType
from app.schema.base import CamelModel


class RecommendationRequest(CamelModel):
    """Payload for requesting fresh recommendations."""
    type: RecommendationType
    context: str | None = None
    location: str | None = None
    limit: int = Field(default=5, ge=1, le=10)


class RecommendationItem(CamelModel):
    id: UUID
    name: str
    reason: str
    score: float
    details: str | None = None


class RecommendationResponse(CamelModel):
    type: RecommendationType
    recommendations: list[RecommendationItem]
    generated_at: datetime
    context: str | None = None


class FeedbackCreate(CamelModel):
    liked: bool
    reason: str | None = Field(default=None, max_length=1000)


class FeedbackRead(CamelModel):
    liked: bool
    reason: str | None = None


class HistoryEntry(CamelModel):
    """A persisted recommendation with its latest feedback, if any."""
    id: UUID
    type: RecommendationType
    name: str
    reason: str
    score: float
    details: str | None = None
    context: str | None = None
    created_at: datetime
    feedback: FeedbackRead | None = None


class HistoryResponse(CamelModel):
    history: list[HistoryEntry]


class FeedbackCounts(CamelModel):
    liked: int = 0
    disliked: int = 0


class FeedbackStats(CamelModel):
    total: int
    liked: int
    disliked: int
    by_type: dict[str, FeedbackCounts]


class ModelRecommendation(BaseModel):
    """One suggestion as returned by the language model."""
    name: str = Field(min_length=1)
    reason: str
    score: float = Field(allow_inf_nan=False)
    details: str | None = None

    @field_validator("details", mode="before")
    @classmethod
    def _stringify_details(cls, value: Any) -> str | None:
        if value is None or isinstance(value, str):
            return value
        return json.dumps(value, ensure_ascii=False)


class ModelRecommendationSet(BaseModel):
    """Expected top-level shape of a recommendation completion."""
    recommendations: list[ModelRecommendation]


class PatternGroups(CamelModel):
    food: list[str] = Field(default_factory=list)
    travel: list[str] = Field(default_factory=list)
    exercise: list[str] = Field(default_factory=list)


class PatternAnalysis(CamelModel):
    """Taste patterns the model found across the user's records."""
    patterns: PatternGroups = Field(default_factory=PatternGroups)
    suggestions: list[str] = Field(default_factory=list)
    insights: str = ""


class ChatRequest(CamelModel):
    message: str = Field(min_length=1, max_length=4000)


class ChatResponse(CamelModel):
    reply: str


class FeedbackAnalysis(CamelModel):
    """How the model proposes to adjust future suggestions after one piece of feedback."""
    adjustment: str
    avoid: list[str] = Field(default_factory=list)
    prefer: list[str] = Field(default_factory=list)
    note: str = ""
