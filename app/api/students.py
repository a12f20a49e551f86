from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_actor
from app.db.deps import get_db_session
from app.schemas.routine import FullRoutine, ReducedRoutine
from app.schemas.user import StudentSelf
from app.services import routines, students
from app.services.access import Actor


router = APIRouter(prefix="/students", tags=["students"])


@router.get("/me", response_model=StudentSelf)
async def me(
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db_session),
) -> StudentSelf:
    return await students.get_student_self(db, actor)


@router.get("/routines", response_model=list[ReducedRoutine])
async def list_routines(
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db_session),
) -> list[ReducedRoutine]:
    return await routines.list_student_routines(db, actor)


@router.get("/routines/{routine_id}", response_model=FullRoutine)
async def get_routine(
    routine_id: int,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db_session),
) -> FullRoutine:
    return await routines.get_student_routine(db, actor, routine_id)
