from __future__ import annotations

from datetime import datetime, timezone

from app.db.models.routine import Routine
from app.db.models.routine_assignment import RoutineAssignment
from app.db.models.segment import Segment
from app.db.models.user import User, UserRole
from app.services.projections import full_routine, instructor_routine, reduced_routine, total_duration


NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _routine(*durations: int) -> Routine:
    return Routine(
        id=1,
        instructor_id=1,
        name="Base",
        description=None,
        created_at=NOW,
        updated_at=NOW,
        segments=[Segment(id=i + 1, position=i, duration=d) for i, d in enumerate(durations)],
    )


def test_total_duration_sums_segments():
    assert total_duration(_routine(30, 15).segments) == 45


def test_total_duration_empty_is_zero():
    assert total_duration([]) == 0


def test_total_duration_counts_each_segment_once():
    seg_a = Segment(id=1, position=0, duration=30)
    seg_b = Segment(id=2, position=1, duration=15)
    # Shape of a row set joined against two assignments.
    assert total_duration([seg_a, seg_b, seg_a, seg_b]) == 45


def test_reduced_projection_fields():
    reduced = reduced_routine(_routine(30, 15))
    assert reduced.model_dump(by_alias=True) == {
        "id": 1,
        "name": "Base",
        "description": None,
        "totalDuration": 45,
    }


def test_full_projection_keeps_segment_order_and_hides_students():
    routine = _routine(5, 20, 10)
    routine.assignments = [
        RoutineAssignment(student_id=7, student=User(id=7, first_name="A", last_name="B", email="a@example.com", role=UserRole.STUDENT))
    ]

    full = full_routine(routine).model_dump(by_alias=True)

    assert [s["duration"] for s in full["segments"]] == [5, 20, 10]
    assert "students" not in full


def test_instructor_projection_lists_each_student_once():
    student = User(id=7, first_name="Kim", last_name="Lee", email="kim@example.com", role=UserRole.STUDENT)
    routine = _routine(10)
    routine.assignments = [
        RoutineAssignment(student_id=7, student=student),
        RoutineAssignment(student_id=7, student=student),
    ]

    view = instructor_routine(routine)

    assert view.total_duration == 10
    assert [s.id for s in view.students] == [7]
