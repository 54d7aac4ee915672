"""Initial schema for profiles, records, recommendations and feedback.

Revision ID: 20261019_000001
Revises:
Create Date: 2026-10-19 00:00:01
"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "20261019_000001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


preference_category_enum = sa.Enum(
    "food", "travel", "exercise", "allergies", "dislikes", name="preference_category"
)
record_type_enum = sa.Enum("food", "travel", "exercise", "other", name="record_type")
recommendation_type_enum = sa.Enum("food", "travel", "exercise", name="recommendation_type")
json_type = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    """Create all tables for the initial schema."""
    op.create_table(
        "profiles",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        "preferences",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("profile_id", sa.Uuid(), sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("category", preference_category_enum, nullable=False),
        sa.Column("value", sa.String(length=255), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index(op.f("ix_preferences_profile_id"), "preferences", ["profile_id"], unique=False)

    op.create_table(
        "routines",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("profile_id", sa.Uuid(), sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("wake_up_time", sa.String(length=64), nullable=True),
        sa.Column("sleep_time", sa.String(length=64), nullable=True),
        sa.Column("work_schedule", sa.String(length=255), nullable=True),
        sa.Column("exercise_time", sa.String(length=64), nullable=True),
        sa.UniqueConstraint("profile_id", name="uq_routine_profile"),
    )

    op.create_table(
        "records",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("profile_id", sa.Uuid(), sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("type", record_type_enum, nullable=False),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("rating", sa.Integer(), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("metadata", json_type, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("rating IS NULL OR (rating >= 1 AND rating <= 5)", name="ck_record_rating_range"),
    )
    op.create_index(op.f("ix_records_profile_id"), "records", ["profile_id"], unique=False)
    op.create_index(op.f("ix_records_type"), "records", ["type"], unique=False)
    op.create_index(op.f("ix_records_date"), "records", ["date"], unique=False)

    op.create_table(
        "record_tags",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("record_id", sa.Uuid(), sa.ForeignKey("records.id", ondelete="CASCADE"), nullable=False),
        sa.Column("tag", sa.String(length=64), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index(op.f("ix_record_tags_record_id"), "record_tags", ["record_id"], unique=False)

    op.create_table(
        "recommendation_history",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("profile_id", sa.Uuid(), sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("type", recommendation_type_enum, nullable=False),
        sa.Column("name", sa.String(length=500), nullable=False),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.Column("score", sa.Float(), nullable=False),
        sa.Column("details", sa.Text(), nullable=True),
        sa.Column("context", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index(
        op.f("ix_recommendation_history_profile_id"), "recommendation_history", ["profile_id"], unique=False
    )
    op.create_index(
        op.f("ix_recommendation_history_created_at"), "recommendation_history", ["created_at"], unique=False
    )

    op.create_table(
        "feedback",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("profile_id", sa.Uuid(), sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "recommendation_id",
            sa.Uuid(),
            sa.ForeignKey("recommendation_history.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("liked", sa.Boolean(), nullable=False),
        sa.Column("reason", sa.String(length=1000), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index(op.f("ix_feedback_profile_id"), "feedback", ["profile_id"], unique=False)
    op.create_index(op.f("ix_feedback_recommendation_id"), "feedback", ["recommendation_id"], unique=False)


def downgrade() -> None:
    """Drop all tables and enum types."""
    op.drop_index(op.f("ix_feedback_recommendation_id"), table_name="feedback")
    op.drop_index(op.f("ix_feedback_profile_id"), table_name="feedback")
    op.drop_table("feedback")
    op.drop_index(op.f("ix_recommendation_history_created_at"), table_name="recommendation_history")
    op.drop_index(op.f("ix_recommendation_history_profile_id"), table_name="recommendation_history")
    op.drop_table("recommendation_history")
    op.drop_index(op.f("ix_record_tags_record_id"), table_name="record_tags")
    op.drop_table("record_tags")
    op.drop_index(op.f("ix_records_date"), table_name="records")
    op.drop_index(op.f("ix_records_type"), table_name="records")
    op.drop_index(op.f("ix_records_profile_id"), table_name="records")
    op.drop_table("records")
    op.drop_table("routines")
    op.drop_index(op.f("ix_preferences_profile_id"), table_name="preferences")
    op.drop_table("preferences")
    op.drop_table("profiles")
    bind = op.get_bind()
    recommendation_type_enum.drop(bind, checkfirst=True)
    record_type_enum.drop(bind, checkfirst=True)
    preference_category_enum.drop(bind, checkfirst=True)
