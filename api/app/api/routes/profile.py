"""Profile endpoints for the single active profile."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_active_profile, get_db
from app.models.profile import Profile
from app.schema.profile import (
    PreferencesEnvelope,
    PreferencesUpdate,
    ProfileEnvelope,
    ProfileRead,
    ProfileUpsert,
    Routines,
    RoutinesEnvelope,
)
from app.services import profile_service

router = APIRouter()


@router.get("", response_model=ProfileRead)
async def read_profile(profile: Profile = Depends(get_active_profile)) -> ProfileRead:
    """Return the active profile."""
    return profile_service.serialize_profile(profile)


@router.post("", response_model=ProfileEnvelope)
async def upsert_profile(
    payload: ProfileUpsert,
    session: AsyncSession = Depends(get_db),
) -> ProfileEnvelope:
    """Create the profile, or replace its fields if one already exists."""
    profile = await profile_service.upsert_profile(session, payload)
    return ProfileEnvelope(data=profile_service.serialize_profile(profile))


@router.patch("/preferences", response_model=PreferencesEnvelope)
async def update_preferences(
    payload: PreferencesUpdate,
    profile: Profile = Depends(get_active_profile),
    session: AsyncSession = Depends(get_db),
) -> PreferencesEnvelope:
    """Replace the listed preference categories."""
    profile = await profile_service.update_preferences(session, profile, payload)
    return PreferencesEnvelope(
        message="Preferences updated.",
        data=profile_service.serialize_preferences(profile),
    )


@router.patch("/routines", response_model=RoutinesEnvelope)
async def update_routines(
    payload: Routines,
    profile: Profile = Depends(get_active_profile),
    session: AsyncSession = Depends(get_db),
) -> RoutinesEnvelope:
    """Set the given routine fields."""
    profile = await profile_service.update_routines(session, profile, payload)
    return RoutinesEnvelope(
        message="Routines updated.",
        data=profile_service.serialize_routines(profile),
    )
