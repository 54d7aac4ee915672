"""Seed script for demo data in local/dev environments."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import configure_logging
from app.db.session import async_session, init_models
from app.models.profile import Profile
from app.models.record import Record, RecordType
from app.schema.profile import PreferencesUpdate, ProfileUpsert, Routines
from app.schema.record import RecordCreate
from app.services import profile_service, record_service

logger = logging.getLogger("app.scripts.seed")

DEMO_NAME = "Demo User"
DEMO_LOCATION = "Gangnam-gu, Seoul"


@dataclass(frozen=True)
class SeedRecordDefinition:
    record_type: RecordType
    title: str
    description: str
    rating: int
    record_date: date
    tags: tuple[str, ...]


SEED_RECORDS: tuple[SeedRecordDefinition, ...] = (
    SeedRecordDefinition(
        record_type=RecordType.FOOD,
        title="Italian restaurant in Gangnam",
        description="The truffle cream pasta was excellent",
        rating=5,
        record_date=date(2024, 1, 15),
        tags=("italian", "pasta", "gangnam"),
    ),
    SeedRecordDefinition(
        record_type=RecordType.EXERCISE,
        title="Han River 10km run",
        description="Great weather, felt good the whole way",
        rating=4,
        record_date=date(2024, 1, 14),
        tags=("running", "han-river", "10km"),
    ),
    SeedRecordDefinition(
        record_type=RecordType.TRAVEL,
        title="Jeju Olle Trail",
        description="Walked route 7, the views were stunning",
        rating=5,
        record_date=date(2024, 1, 10),
        tags=("jeju", "olle-trail", "trekking"),
    ),
)


async def seed(session: AsyncSession | None = None) -> None:
    """Seed demo data into the database."""
    if session is None:
        await init_models()
        async with async_session() as managed_session:
            await _seed_session(managed_session)
    else:
        await _seed_session(session)


async def _seed_session(session: AsyncSession) -> None:
    profile = await _ensure_profile(session)
    await _ensure_records(session, profile)


async def _ensure_profile(session: AsyncSession) -> Profile:
    """Create the demo profile unless one already exists."""
    existing = await profile_service.get_first_profile(session)
    if existing is not None:
        logger.info("Profile %s already present; leaving it untouched", existing.id)
        return existing
    return await profile_service.create_profile(
        session,
        ProfileUpsert(
            name=DEMO_NAME,
            location=DEMO_LOCATION,
            preferences=PreferencesUpdate(
                food=["korean", "italian", "spicy"],
                travel=["nature", "city", "resort"],
                exercise=["running", "gym", "swimming"],
                allergies=["shellfish"],
            ),
            routines=Routines(wake_up_time="07:00", sleep_time="23:00", exercise_time="18:00"),
        ),
    )


async def _ensure_records(session: AsyncSession, profile: Profile) -> None:
    """Insert the demo records that are not already logged (matched by title)."""
    result = await session.execute(select(Record.title).where(Record.profile_id == profile.id))
    existing_titles = set(result.scalars().all())
    for definition in SEED_RECORDS:
        if definition.title in existing_titles:
            continue
        await record_service.create_record(
            session,
            profile.id,
            RecordCreate(
                type=definition.record_type,
                title=definition.title,
                description=definition.description,
                rating=definition.rating,
                record_date=definition.record_date,
                tags=list(definition.tags),
            ),
        )
    logger.info("Seeded demo data for profile %s", profile.id)


def main() -> None:
    """CLI entrypoint for seeding demo data."""
    configure_logging()
    asyncio.run(seed())


if __name__ == "__main__":
    main()
