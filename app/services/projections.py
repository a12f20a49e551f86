from __future__ import annotations

from collections.abc import Iterable

from app.db.models.routine import Routine
from app.db.models.segment import Segment
from app.db.models.user import User
from app.schemas.routine import FullRoutine, InstructorRoutine, ReducedRoutine, SegmentOut
from app.schemas.user import ReducedStudent


def total_duration(segments: Iterable[Segment]) -> int:
    # Sum over distinct segment rows; a joined row set may repeat them.
    seen: set[int] = set()
    total = 0
    for segment in segments:
        key = segment.id if segment.id is not None else id(segment)
        if key in seen:
            continue
        seen.add(key)
        total += segment.duration
    return total


def reduced_student(user: User) -> ReducedStudent:
    return ReducedStudent(id=user.id, first_name=user.first_name, last_name=user.last_name, email=user.email)


def reduced_routine(routine: Routine) -> ReducedRoutine:
    return ReducedRoutine(
        id=routine.id,
        name=routine.name,
        description=routine.description,
        total_duration=total_duration(routine.segments),
    )


def _segments_out(routine: Routine) -> list[SegmentOut]:
    return [
        SegmentOut(
            id=s.id,
            position=s.position,
            duration=s.duration,
            effort=s.effort,
            description=s.description,
        )
        for s in routine.segments
    ]


def full_routine(routine: Routine) -> FullRoutine:
    """Detail shape shown to students; never includes other students."""
    return FullRoutine(
        id=routine.id,
        name=routine.name,
        description=routine.description,
        total_duration=total_duration(routine.segments),
        segments=_segments_out(routine),
        created_at=routine.created_at,
        updated_at=routine.updated_at,
    )


def instructor_routine(routine: Routine) -> InstructorRoutine:
    students: dict[int, ReducedStudent] = {}
    for assignment in routine.assignments:
        if assignment.student_id not in students:
            students[assignment.student_id] = reduced_student(assignment.student)

    return InstructorRoutine(
        **full_routine(routine).model_dump(),
        students=list(students.values()),
    )
