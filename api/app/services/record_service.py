"""Record CRUD helpers and summary statistics."""

from __future__ import annotations

import uuid
from collections import Counter

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.profile import utcnow
from app.models.record import Record, RecordTag, RecordType
from app.schema.record import RecordCreate, RecordRead, RecordStats, RecordUpdate, TagCount
from app.utils.text import clean_tags

TOP_TAG_LIMIT = 10


async def list_records(
    session: AsyncSession,
    profile_id: uuid.UUID,
    *,
    record_type: RecordType | None = None,
    limit: int = 20,
    offset: int = 0,
) -> tuple[list[Record], int]:
    """List records newest first with the total matching count."""
    query = select(Record).options(selectinload(Record.tag_links)).where(Record.profile_id == profile_id)
    count_query = select(func.count(Record.id)).where(Record.profile_id == profile_id)
    if record_type:
        query = query.where(Record.record_type == record_type)
        count_query = count_query.where(Record.record_type == record_type)
    query = query.order_by(Record.record_date.desc(), Record.created_at.desc())
    result = await session.execute(query.offset(offset).limit(limit))
    total = await session.execute(count_query)
    return list(result.scalars().all()), int(total.scalar_one() or 0)


async def list_recent_records(
    session: AsyncSession, profile_id: uuid.UUID, record_type: RecordType | None = None, limit: int = 10
) -> list[Record]:
    records, _ = await list_records(session, profile_id, record_type=record_type, limit=limit)
    return records


async def get_record(session: AsyncSession, profile_id: uuid.UUID, record_id: uuid.UUID) -> Record:
    """Fetch a single record scoped to the profile."""
    result = await session.execute(
        select(Record)
        .options(selectinload(Record.tag_links))
        .where(Record.profile_id == profile_id, Record.id == record_id)
        .execution_options(populate_existing=True)
    )
    record = result.scalar_one_or_none()
    if not record:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Record not found")
    return record


async def create_record(session: AsyncSession, profile_id: uuid.UUID, payload: RecordCreate) -> Record:
    record = Record(
        profile_id=profile_id,
        record_type=payload.type,
        title=payload.title.strip(),
        description=payload.description,
        rating=payload.rating,
        location=payload.location,
        record_date=payload.record_date or utcnow().date(),
        metadata_=payload.metadata,
        tag_links=_tag_links(payload.tags),
    )
    session.add(record)
    await session.commit()
    return await get_record(session, profile_id, record.id)


async def update_record(session: AsyncSession, record: Record, payload: RecordUpdate) -> Record:
    """Apply a partial update; explicit nulls clear optional fields."""
    updates = payload.model_dump(exclude_unset=True)
    if "tags" in updates:
        record.tag_links = _tag_links(updates.pop("tags"))
    if "type" in updates:
        new_type = updates.pop("type")
        if new_type is not None:
            record.record_type = new_type
    if "title" in updates:
        new_title = updates.pop("title")
        if new_title is not None:
            record.title = new_title.strip()
    if "record_date" in updates:
        new_date = updates.pop("record_date")
        if new_date is not None:
            record.record_date = new_date
    if "metadata" in updates:
        record.metadata_ = updates.pop("metadata")
    for field, value in updates.items():
        setattr(record, field, value)
    await session.commit()
    return await get_record(session, record.profile_id, record.id)


async def delete_record(session: AsyncSession, record: Record) -> None:
    await session.delete(record)
    await session.commit()


async def get_stats(session: AsyncSession, profile_id: uuid.UUID) -> RecordStats:
    """Summarize every record of a profile.

    Tag ties keep the order in which tags were first seen while scanning
    records by creation time.
    """
    result = await session.execute(
        select(Record)
        .options(selectinload(Record.tag_links))
        .where(Record.profile_id == profile_id)
        .order_by(Record.created_at.asc())
    )
    records = result.scalars().all()

    by_type = {record_type.value: 0 for record_type in RecordType}
    tag_counts: Counter[str] = Counter()
    ratings: list[int] = []
    for record in records:
        by_type[record.record_type.value] += 1
        if record.rating:
            ratings.append(record.rating)
        tag_counts.update(record.tags)

    return RecordStats(
        total_records=len(records),
        by_type=by_type,
        top_tags=[TagCount(tag=tag, count=count) for tag, count in tag_counts.most_common(TOP_TAG_LIMIT)],
        average_rating=sum(ratings) / len(ratings) if ratings else 0,
    )


def _tag_links(tags: list[str] | None) -> list[RecordTag]:
    return [RecordTag(tag=tag, position=index) for index, tag in enumerate(clean_tags(tags))]


def serialize_record(record: Record) -> RecordRead:
    return RecordRead(
        id=record.id,
        type=record.record_type,
        title=record.title,
        description=record.description,
        rating=record.rating,
        tags=record.tags,
        location=record.location,
        record_date=record.record_date,
        metadata=record.metadata_,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )
