from __future__ import annotations

from app.schemas.base import CamelModel
from app.schemas.routine import ReducedRoutine
from app.schemas.user import ReducedStudent


class StudentDetail(ReducedStudent):
    routines: list[ReducedRoutine]


class UpdateStudentRoutinesRequest(CamelModel):
    routine_ids: list[int]
