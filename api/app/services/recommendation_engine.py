"""Recommendation orchestration: profile lookup, prompting, parsing, persistence.

Invariants:
- No model call happens without an active profile.
- Nothing is persisted unless the model output validates in full.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.llm.base import BaseLanguageModel, ChatMessage, LLMError
from app.llm.prompts import (
    build_analysis_prompt,
    build_chat_greeting,
    build_feedback_prompt,
    build_recommendation_prompt,
)
from app.models.profile import Profile
from app.models.record import RecordType
from app.schema.profile import ProfileRead
from app.schema.recommendation import (
    FeedbackAnalysis,
    FeedbackCreate,
    ModelRecommendationSet,
    PatternAnalysis,
    RecommendationRequest,
    RecommendationResponse,
)
from app.services import profile_service, recommendation_service, record_service

logger = logging.getLogger("app.services.recommendation_engine")

RECENT_RECORD_LIMIT = 10
ANALYSIS_RECORD_LIMIT = 50


class ProfileNotFoundError(LookupError):
    """Raised when an operation needs the active profile and none exists."""

    def __init__(self, message: str = "Profile not found. Create a profile first.") -> None:
        super().__init__(message)
        self.message = message


async def require_profile(session: AsyncSession) -> Profile:
    profile = await profile_service.get_first_profile(session)
    if profile is None:
        raise ProfileNotFoundError()
    return profile


def _merge_context(context: str | None, location: str | None) -> str | None:
    if location and context:
        return f"{context}\nCurrent location: {location}"
    if location:
        return f"Current location: {location}"
    return context


class RecommendationEngine:
    """Sequence the single-request recommendation pipeline."""

    def __init__(self, session: AsyncSession, llm: BaseLanguageModel) -> None:
        self.session = session
        self.llm = llm

    async def _load_profile(self) -> tuple[Profile, ProfileRead]:
        profile = await require_profile(self.session)
        return profile, profile_service.serialize_profile(profile)

    async def generate(self, request: RecommendationRequest) -> RecommendationResponse:
        """Generate, persist, and return recommendations for one request.

        Raises:
            ProfileNotFoundError: No profile exists; the model is not called.
            LLMError: The model failed or its output did not match the
                expected shape; nothing is persisted.
        """
        profile, profile_view = await self._load_profile()
        records = await record_service.list_recent_records(
            self.session, profile.id, RecordType(request.type.value), limit=RECENT_RECORD_LIMIT
        )
        prompt = build_recommendation_prompt(
            request.type,
            profile_view,
            context=_merge_context(request.context, request.location),
            recent_records=[record_service.serialize_record(record) for record in records],
        )

        logger.info("Requesting %s recommendations (limit=%d)", request.type.value, request.limit)
        payload = await self.llm.generate_json(prompt)
        try:
            parsed = ModelRecommendationSet.model_validate(payload)
        except ValidationError as exc:
            logger.error("Model output did not match the recommendation schema: %s", exc.error_count())
            raise LLMError("Language model returned recommendations in an unexpected shape") from exc

        items = parsed.recommendations[: request.limit]
        rows = await recommendation_service.save_many(
            self.session, profile.id, request.type, items, context=request.context
        )
        logger.info("Stored %d %s recommendations", len(rows), request.type.value)
        return RecommendationResponse(
            type=request.type,
            recommendations=[recommendation_service.serialize_item(row) for row in rows],
            generated_at=datetime.now(timezone.utc),
            context=request.context,
        )

    async def analyze_patterns(self) -> PatternAnalysis:
        """Summarize taste patterns across the most recent records."""
        profile, profile_view = await self._load_profile()
        records = await record_service.list_recent_records(
            self.session, profile.id, limit=ANALYSIS_RECORD_LIMIT
        )
        if not records:
            return PatternAnalysis(
                suggestions=["Log a few more records so your patterns can be analyzed."],
                insights="There are not enough records to analyze yet.",
            )

        prompt = build_analysis_prompt(
            profile_view, [record_service.serialize_record(record) for record in records]
        )
        payload = await self.llm.generate_json(prompt)
        try:
            return PatternAnalysis.model_validate(payload)
        except ValidationError as exc:
            raise LLMError("Language model returned an analysis in an unexpected shape") from exc

    async def process_feedback(self, recommendation_id: uuid.UUID, feedback: FeedbackCreate) -> FeedbackAnalysis:
        """Ask the model how a like/dislike should shape future recommendations.

        Raises:
            ProfileNotFoundError: No profile exists.
            HTTPException: The recommendation does not belong to the profile (404).
            LLMError: The model failed or answered in an unexpected shape.
        """
        profile = await require_profile(self.session)
        row = await recommendation_service.get_recommendation(self.session, profile.id, recommendation_id)
        prompt = build_feedback_prompt(row.name, feedback.liked, feedback.reason)
        payload = await self.llm.generate_json(prompt)
        try:
            return FeedbackAnalysis.model_validate(payload)
        except ValidationError as exc:
            raise LLMError("Language model returned a feedback analysis in an unexpected shape") from exc

    async def chat(self, message: str) -> str:
        _, profile_view = await self._load_profile()
        persona, greeting = build_chat_greeting(profile_view)
        history = [
            ChatMessage(role="user", content=persona),
            ChatMessage(role="model", content=greeting),
            ChatMessage(role="user", content=message),
        ]
        return await self.llm.chat(history)
