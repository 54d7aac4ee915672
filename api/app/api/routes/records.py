"""Record CRUD endpoints and summary statistics."""

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_active_profile, get_db
from app.models.profile import Profile
from app.models.record import RecordType
from app.schema.base import MessageResponse
from app.schema.record import (
    Pagination,
    RecordCreate,
    RecordEnvelope,
    RecordList,
    RecordRead,
    RecordStats,
    RecordUpdate,
)
from app.services import record_service

router = APIRouter()


@router.get("", response_model=RecordList)
async def list_records(
    profile: Profile = Depends(get_active_profile),
    session: AsyncSession = Depends(get_db),
    type: RecordType | None = None,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
) -> RecordList:
    """List records newest first."""
    records, total = await record_service.list_records(
        session, profile.id, record_type=type, limit=limit, offset=offset
    )
    return RecordList(
        records=[record_service.serialize_record(record) for record in records],
        pagination=Pagination(total=total, limit=limit, offset=offset),
    )


@router.get("/stats/summary", response_model=RecordStats)
async def record_stats(
    profile: Profile = Depends(get_active_profile),
    session: AsyncSession = Depends(get_db),
) -> RecordStats:
    return await record_service.get_stats(session, profile.id)


@router.get("/{record_id}", response_model=RecordRead)
async def read_record(
    record_id: uuid.UUID,
    profile: Profile = Depends(get_active_profile),
    session: AsyncSession = Depends(get_db),
) -> RecordRead:
    record = await record_service.get_record(session, profile.id, record_id)
    return record_service.serialize_record(record)


@router.post("", response_model=RecordEnvelope)
async def create_record(
    payload: RecordCreate,
    profile: Profile = Depends(get_active_profile),
    session: AsyncSession = Depends(get_db),
) -> RecordEnvelope:
    """Log a new record for the active profile."""
    record = await record_service.create_record(session, profile.id, payload)
    return RecordEnvelope(message="Record saved.", data=record_service.serialize_record(record))


@router.patch("/{record_id}", response_model=RecordEnvelope)
async def update_record(
    record_id: uuid.UUID,
    payload: RecordUpdate,
    profile: Profile = Depends(get_active_profile),
    session: AsyncSession = Depends(get_db),
) -> RecordEnvelope:
    record = await record_service.get_record(session, profile.id, record_id)
    record = await record_service.update_record(session, record, payload)
    return RecordEnvelope(data=record_service.serialize_record(record))


@router.delete("/{record_id}", response_model=MessageResponse)
async def delete_record(
    record_id: uuid.UUID,
    profile: Profile = Depends(get_active_profile),
    session: AsyncSession = Depends(get_db),
) -> MessageResponse:
    record = await record_service.get_record(session, profile.id, record_id)
    await record_service.delete_record(session, record)
    return MessageResponse(message="Record deleted.")
