"""Profile persistence for the single active profile."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.profile import Preference, PreferenceCategory, Profile, Routine
from app.schema.profile import Preferences, PreferencesUpdate, ProfileRead, ProfileUpsert, Routines
from app.utils.text import clean_tags

logger = logging.getLogger("app.services.profile")

ROUTINE_FIELDS = ("wake_up_time", "sleep_time", "work_schedule", "exercise_time")


def _profile_query():
    return select(Profile).options(selectinload(Profile.preferences), selectinload(Profile.routine))


async def get_first_profile(session: AsyncSession) -> Profile | None:
    """Return the active profile: the oldest one, or None when none exists."""
    result = await session.execute(_profile_query().order_by(Profile.created_at.asc()).limit(1))
    return result.scalar_one_or_none()


async def get_profile(session: AsyncSession, profile_id: uuid.UUID) -> Profile | None:
    result = await session.execute(
        _profile_query().where(Profile.id == profile_id).execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def create_profile(session: AsyncSession, payload: ProfileUpsert) -> Profile:
    """Insert a new profile with its preferences and routines."""
    profile = Profile(name=payload.name.strip(), location=payload.location)
    session.add(profile)
    _apply_children(profile, payload)
    await _commit(session)
    logger.info("Created profile %s", profile.id)
    return await _reload(session, profile.id)


async def upsert_profile(session: AsyncSession, payload: ProfileUpsert) -> Profile:
    """Create the active profile or replace its fields in a single transaction."""
    profile = await get_first_profile(session)
    if profile is None:
        return await create_profile(session, payload)

    profile.name = payload.name.strip()
    profile.location = payload.location
    _apply_children(profile, payload)
    await _commit(session)
    return await _reload(session, profile.id)


async def update_preferences(session: AsyncSession, profile: Profile, payload: PreferencesUpdate) -> Profile:
    """Replace the values of every category present in the payload."""
    _apply_preferences(profile, payload)
    await _commit(session)
    return await _reload(session, profile.id)


async def update_routines(session: AsyncSession, profile: Profile, payload: Routines) -> Profile:
    """Set the routine fields present in the payload, creating the routine if needed."""
    _apply_routines(profile, payload.model_dump(exclude_unset=True))
    await _commit(session)
    return await _reload(session, profile.id)


def _apply_children(profile: Profile, payload: ProfileUpsert) -> None:
    if payload.preferences is not None:
        _apply_preferences(profile, payload.preferences)
    if payload.routines is not None:
        _apply_routines(profile, payload.routines.model_dump(exclude_unset=True))


def _apply_preferences(profile: Profile, payload: PreferencesUpdate) -> None:
    preferences = list(profile.preferences)
    for category in PreferenceCategory:
        values = getattr(payload, category.value)
        if values is None:
            continue
        preferences = [pref for pref in preferences if pref.category != category]
        preferences.extend(
            Preference(category=category, value=value, position=index)
            for index, value in enumerate(clean_tags(values))
        )
    profile.preferences = preferences


def _apply_routines(profile: Profile, fields: dict[str, str | None]) -> None:
    if profile.routine is None:
        profile.routine = Routine()
    for field in ROUTINE_FIELDS:
        if field in fields:
            setattr(profile.routine, field, fields[field])


async def _commit(session: AsyncSession) -> None:
    try:
        await session.commit()
    except Exception:
        await session.rollback()
        raise


async def _reload(session: AsyncSession, profile_id: uuid.UUID) -> Profile:
    profile = await get_profile(session, profile_id)
    if profile is None:  # pragma: no cover - row was just written
        raise LookupError("Profile vanished after write")
    return profile


def serialize_preferences(profile: Profile) -> Preferences:
    grouped: dict[str, list[str]] = {category.value: [] for category in PreferenceCategory}
    for pref in sorted(profile.preferences, key=lambda item: item.position):
        grouped[pref.category.value].append(pref.value)
    return Preferences(**grouped)


def serialize_routines(profile: Profile) -> Routines:
    routine = profile.routine
    if routine is None:
        return Routines()
    return Routines(**{field: getattr(routine, field) for field in ROUTINE_FIELDS})


def serialize_profile(profile: Profile) -> ProfileRead:
    """Map the ORM profile and its children to the API shape."""
    return ProfileRead(
        id=profile.id,
        name=profile.name,
        location=profile.location,
        preferences=serialize_preferences(profile),
        routines=serialize_routines(profile),
        created_at=profile.created_at,
        updated_at=profile.updated_at,
    )
