"""Recommendation generation, history, feedback, and pattern analysis endpoints."""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_active_profile, get_db, get_optional_profile, get_recommendation_engine
from app.models.profile import Profile
from app.models.recommendation import RecommendationType
from app.schema.base import MessageResponse
from app.schema.recommendation import (
    FeedbackAnalysis,
    FeedbackCreate,
    FeedbackStats,
    HistoryResponse,
    PatternAnalysis,
    RecommendationRequest,
    RecommendationResponse,
)
from app.services import recommendation_service
from app.services.recommendation_engine import RecommendationEngine

router = APIRouter()

FEEDBACK_MESSAGE = "Feedback recorded. It will shape your next recommendations."


@router.post("", response_model=RecommendationResponse)
async def create_recommendations(
    payload: RecommendationRequest,
    engine: RecommendationEngine = Depends(get_recommendation_engine),
) -> RecommendationResponse:
    """Generate and store fresh recommendations from the language model."""
    return await engine.generate(payload)


@router.get("/history", response_model=HistoryResponse)
async def recommendation_history(
    profile: Profile | None = Depends(get_optional_profile),
    session: AsyncSession = Depends(get_db),
    type: RecommendationType | None = None,
) -> HistoryResponse:
    """List past recommendations; empty until a profile exists."""
    if profile is None:
        return HistoryResponse(history=[])
    rows = await recommendation_service.list_history(session, profile.id, rec_type=type)
    return HistoryResponse(history=[recommendation_service.serialize_history(row) for row in rows])


@router.get("/feedback/stats", response_model=FeedbackStats)
async def feedback_stats(
    profile: Profile = Depends(get_active_profile),
    session: AsyncSession = Depends(get_db),
) -> FeedbackStats:
    return await recommendation_service.get_feedback_stats(session, profile.id)


@router.post("/analysis", response_model=PatternAnalysis)
async def analyze_patterns(
    engine: RecommendationEngine = Depends(get_recommendation_engine),
) -> PatternAnalysis:
    """Ask the model for taste patterns across recent records."""
    return await engine.analyze_patterns()


@router.post("/{recommendation_id}/feedback", response_model=MessageResponse)
async def submit_feedback(
    recommendation_id: uuid.UUID,
    payload: FeedbackCreate,
    profile: Profile | None = Depends(get_optional_profile),
    session: AsyncSession = Depends(get_db),
) -> MessageResponse:
    """Attach a like/dislike to a recommendation.

    Feedback that matches no recommendation of the active profile is dropped
    but still acknowledged.
    """
    if profile is not None:
        await recommendation_service.add_feedback(session, profile.id, recommendation_id, payload)
    return MessageResponse(message=FEEDBACK_MESSAGE)


@router.post("/{recommendation_id}/feedback/analysis", response_model=FeedbackAnalysis)
async def analyze_feedback(
    recommendation_id: uuid.UUID,
    payload: FeedbackCreate,
    engine: RecommendationEngine = Depends(get_recommendation_engine),
) -> FeedbackAnalysis:
    """Ask the model how this feedback should change future recommendations."""
    return await engine.process_feedback(recommendation_id, payload)
