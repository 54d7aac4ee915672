"""Generated recommendation history and user feedback."""

from __future__ import annotations

import enum
import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, Float, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base_class import Base
from app.models.profile import Profile, utcnow


class RecommendationType(str, enum.Enum):
    """Domains the agent can make suggestions for."""
    FOOD = "food"
    TRAVEL = "travel"
    EXERCISE = "exercise"


class RecommendationHistory(Base):
    """One model suggestion persisted after a successful generation."""
    __tablename__ = "recommendation_history"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    profile_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    recommendation_type: Mapped[RecommendationType] = mapped_column(
        "type",
        Enum(
            RecommendationType,
            name="recommendation_type",
            values_callable=lambda enum_cls: [e.value for e in enum_cls],
        ),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    # Passed through from the model; expected in [0, 1] but not clamped.
    score: Mapped[float] = mapped_column(Float, nullable=False)
    details: Mapped[str | None] = mapped_column(Text)
    context: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)

    profile: Mapped[Profile] = relationship(back_populates="recommendations")
    feedback_entries: Mapped[list["Feedback"]] = relationship(
        back_populates="recommendation", cascade="all, delete-orphan", order_by="Feedback.created_at"
    )

    @property
    def feedback(self) -> "Feedback | None":
        """Most recent feedback; earlier submissions are kept as history."""
        if not self.feedback_entries:
            return None
        return self.feedback_entries[-1]


class Feedback(Base):
    """A like/dislike attached to a recommendation."""
    __tablename__ = "feedback"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    profile_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    recommendation_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("recommendation_history.id", ondelete="CASCADE"), nullable=False, index=True
    )
    liked: Mapped[bool] = mapped_column(Boolean, nullable=False)
    reason: Mapped[str | None] = mapped_column(String(1000))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    profile: Mapped[Profile] = relationship(back_populates="feedback")
    recommendation: Mapped[RecommendationHistory] = relationship(back_populates="feedback_entries")
