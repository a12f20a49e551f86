from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_actor
from app.core.settings import Settings, get_settings
from app.db.deps import get_db_session
from app.schemas.code import CodeCheckRequest, CodeCheckResponse, CodeResponse
from app.schemas.routine import InstructorRoutine, ReducedRoutine, RoutineCreateRequest, RoutineUpdateRequest
from app.schemas.student import StudentDetail, UpdateStudentRoutinesRequest
from app.schemas.user import ReducedStudent
from app.services import instructor_codes, routines, students
from app.services.access import Actor


router = APIRouter(prefix="/instructor", tags=["instructor"])


@router.get("/code", response_model=CodeResponse)
async def get_code(
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> CodeResponse:
    return await instructor_codes.get_code(db, actor, length=settings.instructor_code_length)


@router.post("/code/regenerate", response_model=CodeResponse)
async def regenerate_code(
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> CodeResponse:
    return await instructor_codes.regenerate_code(db, actor, length=settings.instructor_code_length)


# Public: used by the signup form before the student has an account.
@router.post("/code/check", response_model=CodeCheckResponse, response_model_exclude_none=True)
async def check_code(
    body: CodeCheckRequest,
    db: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> CodeCheckResponse:
    return await instructor_codes.check_code(db, body.code, length=settings.instructor_code_length)


@router.post("/routines", response_model=InstructorRoutine, status_code=status.HTTP_201_CREATED)
async def create_routine(
    body: RoutineCreateRequest,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db_session),
) -> InstructorRoutine:
    return await routines.create_routine(db, actor, body)


@router.get("/routines", response_model=list[ReducedRoutine])
async def list_routines(
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db_session),
) -> list[ReducedRoutine]:
    return await routines.list_routines(db, actor)


@router.get("/routines/{routine_id}", response_model=InstructorRoutine)
async def get_routine(
    routine_id: int,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db_session),
) -> InstructorRoutine:
    return await routines.get_routine(db, actor, routine_id)


@router.patch("/routines/{routine_id}", response_model=InstructorRoutine)
async def update_routine(
    routine_id: int,
    body: RoutineUpdateRequest,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db_session),
) -> InstructorRoutine:
    return await routines.update_routine(db, actor, routine_id, body)


@router.get("/students", response_model=list[ReducedStudent])
async def list_students(
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db_session),
) -> list[ReducedStudent]:
    return await students.list_students(db, actor)


@router.get("/students/{student_id}", response_model=StudentDetail)
async def get_student(
    student_id: int,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db_session),
) -> StudentDetail:
    return await students.get_student_detail(db, actor, student_id)


@router.patch("/students/{student_id}/routines", response_model=list[ReducedRoutine])
async def update_student_routines(
    student_id: int,
    body: UpdateStudentRoutinesRequest,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db_session),
) -> list[ReducedRoutine]:
    return await students.update_student_routines(db, actor, student_id, body.routine_ids)
