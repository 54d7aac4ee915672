"""Recommendation history and feedback persistence."""

from __future__ import annotations

import logging
import uuid
from typing import Sequence

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.recommendation import Feedback, RecommendationHistory, RecommendationType
from app.schema.recommendation import (
    FeedbackCounts,
    FeedbackCreate,
    FeedbackRead,
    FeedbackStats,
    HistoryEntry,
    ModelRecommendation,
    RecommendationItem,
)

logger = logging.getLogger("app.services.recommendation")

HISTORY_LIMIT = 50


async def save_many(
    session: AsyncSession,
    profile_id: uuid.UUID,
    rec_type: RecommendationType,
    items: Sequence[ModelRecommendation],
    context: str | None = None,
) -> list[RecommendationHistory]:
    """Persist generated recommendations in one commit, preserving model order."""
    rows = [
        RecommendationHistory(
            profile_id=profile_id,
            recommendation_type=rec_type,
            name=item.name,
            reason=item.reason,
            score=item.score,
            details=item.details,
            context=context,
        )
        for item in items
    ]
    session.add_all(rows)
    await session.commit()
    return rows


async def list_history(
    session: AsyncSession,
    profile_id: uuid.UUID,
    *,
    rec_type: RecommendationType | None = None,
    limit: int = HISTORY_LIMIT,
) -> list[RecommendationHistory]:
    """List past recommendations newest first."""
    query = (
        select(RecommendationHistory)
        .options(selectinload(RecommendationHistory.feedback_entries))
        .where(RecommendationHistory.profile_id == profile_id)
    )
    if rec_type:
        query = query.where(RecommendationHistory.recommendation_type == rec_type)
    query = query.order_by(RecommendationHistory.created_at.desc()).limit(limit)
    result = await session.execute(query.execution_options(populate_existing=True))
    return list(result.scalars().all())


async def get_recommendation(
    session: AsyncSession, profile_id: uuid.UUID, recommendation_id: uuid.UUID
) -> RecommendationHistory:
    """Fetch one history row scoped to the profile."""
    result = await session.execute(
        select(RecommendationHistory).where(
            RecommendationHistory.id == recommendation_id,
            RecommendationHistory.profile_id == profile_id,
        )
    )
    row = result.scalar_one_or_none()
    if not row:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recommendation not found")
    return row


async def add_feedback(
    session: AsyncSession,
    profile_id: uuid.UUID,
    recommendation_id: uuid.UUID,
    payload: FeedbackCreate,
) -> Feedback | None:
    """Record a like/dislike; every submission is kept as its own row.

    Feedback for a recommendation outside the profile is ignored and None is
    returned so callers can still acknowledge the request.
    """
    result = await session.execute(
        select(RecommendationHistory.id).where(
            RecommendationHistory.id == recommendation_id,
            RecommendationHistory.profile_id == profile_id,
        )
    )
    if result.scalar_one_or_none() is None:
        logger.warning("Ignoring feedback for unknown recommendation %s", recommendation_id)
        return None

    feedback = Feedback(
        profile_id=profile_id,
        recommendation_id=recommendation_id,
        liked=payload.liked,
        reason=payload.reason,
    )
    session.add(feedback)
    await session.commit()
    return feedback


async def get_feedback_stats(session: AsyncSession, profile_id: uuid.UUID) -> FeedbackStats:
    """Count likes and dislikes overall and per recommendation type."""
    result = await session.execute(
        select(RecommendationHistory.recommendation_type, Feedback.liked, func.count(Feedback.id))
        .select_from(Feedback)
        .join(RecommendationHistory, RecommendationHistory.id == Feedback.recommendation_id)
        .where(Feedback.profile_id == profile_id)
        .group_by(RecommendationHistory.recommendation_type, Feedback.liked)
    )
    by_type = {rec_type.value: FeedbackCounts() for rec_type in RecommendationType}
    for rec_type, liked, count in result.all():
        counts = by_type[rec_type.value]
        if liked:
            counts.liked += count
        else:
            counts.disliked += count

    liked_total = sum(counts.liked for counts in by_type.values())
    disliked_total = sum(counts.disliked for counts in by_type.values())
    return FeedbackStats(
        total=liked_total + disliked_total,
        liked=liked_total,
        disliked=disliked_total,
        by_type=by_type,
    )


def serialize_item(row: RecommendationHistory) -> RecommendationItem:
    return RecommendationItem(
        id=row.id,
        name=row.name,
        reason=row.reason,
        score=row.score,
        details=row.details,
    )


def serialize_history(row: RecommendationHistory) -> HistoryEntry:
    feedback = row.feedback
    return HistoryEntry(
        id=row.id,
        type=row.recommendation_type,
        name=row.name,
        reason=row.reason,
        score=row.score,
        details=row.details,
        context=row.context,
        created_at=row.created_at,
        feedback=FeedbackRead(liked=feedback.liked, reason=feedback.reason) if feedback else None,
    )
