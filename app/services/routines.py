from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.errors import ValidationError
from app.db.models.routine import Routine
from app.db.models.routine_assignment import RoutineAssignment
from app.db.models.segment import Segment
from app.schemas.routine import (
    FullRoutine,
    InstructorRoutine,
    ReducedRoutine,
    RoutineCreateRequest,
    RoutineUpdateRequest,
    SegmentIn,
)
from app.services.access import (
    Actor,
    ensure_routine_assigned,
    ensure_routine_owned,
    require_instructor,
    require_student,
)
from app.services.projections import full_routine, instructor_routine, reduced_routine


logger = logging.getLogger(__name__)


def _clean_name(name: str | None) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Routine name must not be empty")
    if len(cleaned) > 255:
        raise ValidationError("Routine name is too long")
    return cleaned


def _build_segments(segments: list[SegmentIn]) -> list[Segment]:
    built: list[Segment] = []
    for position, segment in enumerate(segments):
        if segment.duration < 1:
            raise ValidationError(f"Segment {position + 1}: duration must be a positive number of minutes")
        if segment.effort is not None and not 1 <= segment.effort <= 10:
            raise ValidationError(f"Segment {position + 1}: effort must be between 1 and 10")
        built.append(
            Segment(
                position=position,
                duration=segment.duration,
                effort=segment.effort,
                description=segment.description,
            )
        )
    return built


def _with_detail():
    return (
        selectinload(Routine.segments),
        selectinload(Routine.assignments).selectinload(RoutineAssignment.student),
    )


def newest_first(stmt):
    return stmt.order_by(Routine.created_at.desc(), Routine.id.desc())


async def load_routine(db: AsyncSession, routine_id: int) -> Routine | None:
    result = await db.execute(
        select(Routine)
        .where(Routine.id == routine_id)
        .options(*_with_detail())
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def create_routine(db: AsyncSession, actor: Actor, body: RoutineCreateRequest) -> InstructorRoutine:
    require_instructor(actor)

    routine = Routine(
        instructor_id=actor.user_id,
        name=_clean_name(body.name),
        description=body.description,
        segments=_build_segments(body.segments),
    )
    db.add(routine)
    await db.commit()

    logger.info("Instructor %s created routine %s", actor.user_id, routine.id)
    return instructor_routine(await load_routine(db, routine.id))


async def list_routines(db: AsyncSession, actor: Actor) -> list[ReducedRoutine]:
    require_instructor(actor)

    result = await db.execute(
        newest_first(
            select(Routine)
            .where(Routine.instructor_id == actor.user_id)
            .options(selectinload(Routine.segments))
        )
    )
    return [reduced_routine(r) for r in result.scalars().all()]


async def get_routine(db: AsyncSession, actor: Actor, routine_id: int) -> InstructorRoutine:
    require_instructor(actor)

    routine = ensure_routine_owned(actor, await load_routine(db, routine_id))
    return instructor_routine(routine)


async def update_routine(
    db: AsyncSession, actor: Actor, routine_id: int, body: RoutineUpdateRequest
) -> InstructorRoutine:
    require_instructor(actor)

    routine = ensure_routine_owned(actor, await load_routine(db, routine_id))
    fields = body.model_fields_set

    if "name" in fields:
        routine.name = _clean_name(body.name)
    if "description" in fields:
        routine.description = body.description
    if "segments" in fields:
        # An empty list clears the segments; null is not a list.
        if body.segments is None:
            raise ValidationError("segments must be a list")
        new_segments = _build_segments(body.segments)
        # Old rows must be gone before new positions are inserted.
        routine.segments.clear()
        await db.flush()
        routine.segments.extend(new_segments)

    await db.commit()

    logger.info("Instructor %s updated routine %s", actor.user_id, routine.id)
    return instructor_routine(await load_routine(db, routine.id))


async def list_student_routines(db: AsyncSession, actor: Actor) -> list[ReducedRoutine]:
    require_student(actor)

    assigned = select(RoutineAssignment.routine_id).where(RoutineAssignment.student_id == actor.user_id)
    result = await db.execute(
        newest_first(
            select(Routine)
            .where(Routine.id.in_(assigned))
            .options(selectinload(Routine.segments))
        )
    )
    return [reduced_routine(r) for r in result.scalars().all()]


async def get_student_routine(db: AsyncSession, actor: Actor, routine_id: int) -> FullRoutine:
    require_student(actor)

    routine = ensure_routine_assigned(actor, await load_routine(db, routine_id))
    return full_routine(routine)
