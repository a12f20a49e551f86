from __future__ import annotations

from datetime import datetime

from pydantic import Field

from app.schemas.base import CamelModel
from app.schemas.user import ReducedStudent


class SegmentIn(CamelModel):
    duration: int
    effort: int | None = None
    description: str | None = None


class RoutineCreateRequest(CamelModel):
    name: str
    description: str | None = None
    segments: list[SegmentIn] = Field(default_factory=list)


class RoutineUpdateRequest(CamelModel):
    # Omitted fields are left untouched; ``segments`` replaces the whole list
    # and must not be null.
    name: str | None = None
    description: str | None = None
    segments: list[SegmentIn] | None = None


class SegmentOut(CamelModel):
    id: int
    position: int
    duration: int
    effort: int | None
    description: str | None


class ReducedRoutine(CamelModel):
    id: int
    name: str
    description: str | None
    total_duration: int


class FullRoutine(ReducedRoutine):
    segments: list[SegmentOut]
    created_at: datetime
    updated_at: datetime


class InstructorRoutine(FullRoutine):
    students: list[ReducedStudent]
