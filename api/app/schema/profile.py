"""Profile, preference, and routine schemas."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from app.schema.base import CamelModel, NonBlankStr, PreferenceStr


class Preferences(CamelModel):
    """The five preference tag lists of a profile."""
    food: list[str] = Field(default_factory=list)
    travel: list[str] = Field(default_factory=list)
    exercise: list[str] = Field(default_factory=list)
    allergies: list[str] = Field(default_factory=list)
    dislikes: list[str] = Field(default_factory=list)


class PreferencesUpdate(CamelModel):
    """Partial preference update; omitted categories are left untouched."""
    food: list[PreferenceStr] | None = None
    travel: list[PreferenceStr] | None = None
    exercise: list[PreferenceStr] | None = None
    allergies: list[PreferenceStr] | None = None
    dislikes: list[PreferenceStr] | None = None


class Routines(CamelModel):
    wake_up_time: str | None = None
    sleep_time: str | None = None
    work_schedule: str | None = None
    exercise_time: str | None = None


class ProfileUpsert(CamelModel):
    """Payload for creating or replacing the active profile."""
    name: NonBlankStr = Field(max_length=255)
    location: str | None = Field(default=None, max_length=255)
    preferences: PreferencesUpdate | None = None
    routines: Routines | None = None


class ProfileRead(CamelModel):
    id: UUID
    name: str
    location: str | None = None
    preferences: Preferences
    routines: Routines
    created_at: datetime
    updated_at: datetime


class ProfileEnvelope(CamelModel):
    success: bool = True
    data: ProfileRead


class PreferencesEnvelope(CamelModel):
    success: bool = True
    message: str
    data: Preferences


class RoutinesEnvelope(CamelModel):
    success: bool = True
    message: str
    data: Routines
