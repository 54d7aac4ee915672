"""Logged life events and their tags."""

from __future__ import annotations

import enum
import uuid
from datetime import date, datetime

from sqlalchemy import JSON, CheckConstraint, Date, DateTime, Enum, ForeignKey, String, Text, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base_class import Base
from app.models.profile import Profile, utcnow

JSON_COMPATIBLE = JSON().with_variant(JSONB, "postgresql")


class RecordType(str, enum.Enum):
    """Kinds of events a user can log."""
    FOOD = "food"
    TRAVEL = "travel"
    EXERCISE = "exercise"
    OTHER = "other"


class Record(Base):
    """A meal, trip, workout, or other event logged by the user."""
    __tablename__ = "records"
    __table_args__ = (
        CheckConstraint("rating IS NULL OR (rating >= 1 AND rating <= 5)", name="ck_record_rating_range"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    profile_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    record_type: Mapped[RecordType] = mapped_column(
        "type",
        Enum(RecordType, name="record_type", values_callable=lambda enum_cls: [e.value for e in enum_cls]),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    rating: Mapped[int | None]
    location: Mapped[str | None] = mapped_column(String(255))
    record_date: Mapped[date] = mapped_column("date", Date, nullable=False, default=lambda: utcnow().date(), index=True)
    metadata_: Mapped[dict | None] = mapped_column("metadata", JSON_COMPATIBLE)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    profile: Mapped[Profile] = relationship(back_populates="records")
    tag_links: Mapped[list["RecordTag"]] = relationship(
        back_populates="record", cascade="all, delete-orphan", order_by="RecordTag.position"
    )

    @property
    def tags(self) -> list[str]:
        return [link.tag for link in self.tag_links]


class RecordTag(Base):
    __tablename__ = "record_tags"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    record_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("records.id", ondelete="CASCADE"), nullable=False, index=True
    )
    tag: Mapped[str] = mapped_column(String(64), nullable=False)
    position: Mapped[int] = mapped_column(default=0)

    record: Mapped[Record] = relationship(back_populates="tag_links")
