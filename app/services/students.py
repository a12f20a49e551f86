from __future__ import annotations

import logging

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.errors import NotFoundError, ValidationError
from app.db.models.routine import Routine
from app.db.models.routine_assignment import RoutineAssignment
from app.db.models.user import User, UserRole
from app.schemas.routine import ReducedRoutine
from app.schemas.student import StudentDetail
from app.schemas.user import InstructorContact, ReducedStudent, StudentSelf
from app.services.access import Actor, ensure_student_visible, require_instructor, require_student
from app.services.projections import reduced_routine, reduced_student
from app.services.routines import newest_first


logger = logging.getLogger(__name__)


def _assigned_by(instructor_id: int):
    """Subquery of student ids holding at least one routine of the instructor."""
    return (
        select(RoutineAssignment.student_id)
        .join(Routine, Routine.id == RoutineAssignment.routine_id)
        .where(Routine.instructor_id == instructor_id)
    )


async def _assigned_routine_owner_ids(db: AsyncSession, student_id: int) -> set[int]:
    result = await db.execute(
        select(Routine.instructor_id)
        .join(RoutineAssignment, RoutineAssignment.routine_id == Routine.id)
        .where(RoutineAssignment.student_id == student_id)
        .distinct()
    )
    return set(result.scalars().all())


async def _routines_of_student_for(db: AsyncSession, instructor_id: int, student_id: int) -> list[ReducedRoutine]:
    assigned = select(RoutineAssignment.routine_id).where(RoutineAssignment.student_id == student_id)
    result = await db.execute(
        newest_first(
            select(Routine)
            .where(Routine.instructor_id == instructor_id)
            .where(Routine.id.in_(assigned))
            .options(selectinload(Routine.segments))
        )
    )
    return [reduced_routine(r) for r in result.scalars().all()]


async def _load_visible_student(db: AsyncSession, actor: Actor, student_id: int) -> User:
    student = await db.get(User, student_id)
    owner_ids = await _assigned_routine_owner_ids(db, student_id) if student is not None else set()
    return ensure_student_visible(actor, student, assigned_routine_owner_ids=owner_ids)


async def list_students(db: AsyncSession, actor: Actor) -> list[ReducedStudent]:
    require_instructor(actor)

    result = await db.execute(
        select(User)
        .where(User.role == UserRole.STUDENT)
        .where(or_(User.instructor_id == actor.user_id, User.id.in_(_assigned_by(actor.user_id))))
        .order_by(User.last_name.asc(), User.first_name.asc(), User.id.asc())
    )
    return [reduced_student(u) for u in result.scalars().all()]


async def get_student_detail(db: AsyncSession, actor: Actor, student_id: int) -> StudentDetail:
    require_instructor(actor)

    student = await _load_visible_student(db, actor, student_id)
    routines = await _routines_of_student_for(db, actor.user_id, student.id)
    return StudentDetail(
        id=student.id,
        first_name=student.first_name,
        last_name=student.last_name,
        email=student.email,
        routines=routines,
    )


async def update_student_routines(
    db: AsyncSession, actor: Actor, student_id: int, routine_ids: list[int]
) -> list[ReducedRoutine]:
    """Make ``routine_ids`` the complete set of the caller's routines assigned to the student.

    Assignments of routines owned by other instructors are left alone. If
    any id is not one of the caller's routines, nothing is written.
    """
    require_instructor(actor)

    student = await _load_visible_student(db, actor, student_id)

    wanted = list(dict.fromkeys(routine_ids))
    if wanted:
        result = await db.execute(
            select(Routine.id).where(Routine.id.in_(wanted)).where(Routine.instructor_id == actor.user_id)
        )
        owned = set(result.scalars().all())
        foreign = [rid for rid in wanted if rid not in owned]
        if foreign:
            logger.warning(
                "Instructor %s tried to assign routines they do not own: %s", actor.user_id, foreign
            )
            raise ValidationError(f"Unknown routine ids: {', '.join(str(rid) for rid in foreign)}")

    own_routines = select(Routine.id).where(Routine.instructor_id == actor.user_id)
    await db.execute(
        delete(RoutineAssignment)
        .where(RoutineAssignment.student_id == student.id)
        .where(RoutineAssignment.routine_id.in_(own_routines))
        .execution_options(synchronize_session=False)
    )
    for rid in wanted:
        db.add(RoutineAssignment(routine_id=rid, student_id=student.id))
    await db.commit()

    logger.info("Instructor %s set routines of student %s to %s", actor.user_id, student.id, wanted)
    return await _routines_of_student_for(db, actor.user_id, student.id)


def _contact(instructor: User) -> InstructorContact:
    return InstructorContact(
        id=instructor.id,
        first_name=instructor.first_name,
        last_name=instructor.last_name,
        email=instructor.email,
    )


async def get_student_self(db: AsyncSession, actor: Actor) -> StudentSelf:
    require_student(actor)

    result = await db.execute(
        select(User)
        .where(User.id == actor.user_id)
        .options(selectinload(User.instructor))
        .execution_options(populate_existing=True)
    )
    student = result.scalar_one_or_none()
    if student is None:
        raise NotFoundError("Student not found")

    return StudentSelf(
        id=student.id,
        first_name=student.first_name,
        last_name=student.last_name,
        email=student.email,
        role=student.role,
        instructor=_contact(student.instructor) if student.instructor is not None else None,
    )
