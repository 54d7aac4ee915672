"""Profile model with its preference tags and daily routine."""

from __future__ import annotations

import enum
import typing
import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base_class import Base

if typing.TYPE_CHECKING:  # pragma: no cover
    from app.models.recommendation import Feedback, RecommendationHistory
    from app.models.record import Record


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PreferenceCategory(str, enum.Enum):
    """Tag list buckets stored on a profile."""
    FOOD = "food"
    TRAVEL = "travel"
    EXERCISE = "exercise"
    ALLERGIES = "allergies"
    DISLIKES = "dislikes"


class Profile(Base):
    """The single user's identity record."""
    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str | None] = mapped_column(String(255))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    preferences: Mapped[list["Preference"]] = relationship(
        back_populates="profile", cascade="all, delete-orphan", order_by="Preference.position"
    )
    routine: Mapped["Routine | None"] = relationship(
        back_populates="profile", cascade="all, delete-orphan", uselist=False
    )
    records: Mapped[list["Record"]] = relationship(back_populates="profile", cascade="all, delete-orphan")
    recommendations: Mapped[list["RecommendationHistory"]] = relationship(
        back_populates="profile", cascade="all, delete-orphan"
    )
    feedback: Mapped[list["Feedback"]] = relationship(back_populates="profile", cascade="all, delete-orphan")


class Preference(Base):
    """One preference tag in a category; order within a category is kept by position."""
    __tablename__ = "preferences"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    profile_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # Persist the enum values (lowercase) instead of names (uppercase)
    category: Mapped[PreferenceCategory] = mapped_column(
        Enum(
            PreferenceCategory,
            name="preference_category",
            values_callable=lambda enum_cls: [e.value for e in enum_cls],
        ),
        nullable=False,
    )
    value: Mapped[str] = mapped_column(String(255), nullable=False)
    position: Mapped[int] = mapped_column(default=0)

    profile: Mapped[Profile] = relationship(back_populates="preferences")


class Routine(Base):
    """Optional time-of-day strings describing the user's day."""
    __tablename__ = "routines"
    __table_args__ = (UniqueConstraint("profile_id", name="uq_routine_profile"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    profile_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    wake_up_time: Mapped[str | None] = mapped_column(String(64))
    sleep_time: Mapped[str | None] = mapped_column(String(64))
    work_schedule: Mapped[str | None] = mapped_column(String(255))
    exercise_time: Mapped[str | None] = mapped_column(String(64))

    profile: Mapped[Profile] = relationship(back_populates="routine")
