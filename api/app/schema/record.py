"""Record request/response schemas and summary statistics."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import Field

from app.models.record import RecordType
from app.schema.base import CamelModel, NonBlankStr, TagStr


class RecordCreate(CamelModel):
    """Payload for logging a new record."""
    type: RecordType
    title: NonBlankStr = Field(max_length=500)
    description: str | None = None
    rating: int | None = Field(default=None, ge=1, le=5)
    tags: list[TagStr] | None = None
    location: str | None = Field(default=None, max_length=255)
    record_date: date | None = Field(default=None, alias="date")
    metadata: dict[str, Any] | None = None


class RecordUpdate(CamelModel):
    """Partial record update; tags are replaced wholesale when present."""
    type: RecordType | None = None
    title: NonBlankStr | None = Field(default=None, max_length=500)
    description: str | None = None
    rating: int | None = Field(default=None, ge=1, le=5)
    tags: list[TagStr] | None = None
    location: str | None = Field(default=None, max_length=255)
    record_date: date | None = Field(default=None, alias="date")
    metadata: dict[str, Any] | None = None


class RecordRead(CamelModel):
    id: UUID
    type: RecordType
    title: str
    description: str | None = None
    rating: int | None = None
    tags: list[str] = Field(default_factory=list)
    location: str | None = None
    record_date: date = Field(alias="date")
    metadata: dict[str, Any] | None = None
    created_at: datetime
    updated_at: datetime


class Pagination(CamelModel):
    total: int
    limit: int
    offset: int


class RecordList(CamelModel):
    records: list[RecordRead]
    pagination: Pagination


class RecordEnvelope(CamelModel):
    success: bool = True
    message: str | None = None
    data: RecordRead


class TagCount(CamelModel):
    tag: str
    count: int


class RecordStats(CamelModel):
    """Aggregate view over every record of a profile."""
    total_records: int
    by_type: dict[str, int]
    top_tags: list[TagCount]
    average_rating: float
