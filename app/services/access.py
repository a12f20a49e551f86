"""Authorization predicates.

Every service operation receives the caller as an explicit :class:`Actor`
and calls one of these first. They raise the errors from
:mod:`app.core.errors` and return nothing on success.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from app.core.errors import AuthenticationError, AuthorizationError, NotFoundError
from app.db.models.routine import Routine
from app.db.models.user import User, UserRole


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Actor:
    user_id: int
    role: UserRole

    @property
    def is_instructor(self) -> bool:
        return self.role == UserRole.INSTRUCTOR

    @property
    def is_student(self) -> bool:
        return self.role == UserRole.STUDENT


def require_authenticated(actor: Actor | None) -> Actor:
    if actor is None:
        raise AuthenticationError()
    return actor


def require_role(actor: Actor | None, role: UserRole) -> None:
    actor = require_authenticated(actor)
    if actor.role != role:
        logger.warning("User %s with role %s denied %s-only operation", actor.user_id, actor.role.value, role.value)
        raise AuthorizationError()


def require_instructor(actor: Actor | None) -> None:
    require_role(actor, UserRole.INSTRUCTOR)


def require_student(actor: Actor | None) -> None:
    require_role(actor, UserRole.STUDENT)


def can_manage_routine(actor: Actor, routine: Routine | None) -> bool:
    return routine is not None and actor.is_instructor and routine.instructor_id == actor.user_id


def ensure_routine_owned(actor: Actor, routine: Routine | None) -> Routine:
    # Missing and foreign routines are reported identically.
    if not can_manage_routine(actor, routine):
        raise NotFoundError("Routine not found")
    return routine


def can_view_assigned_routine(actor: Actor, routine: Routine | None) -> bool:
    if routine is None or not actor.is_student:
        return False
    return any(a.student_id == actor.user_id for a in routine.assignments)


def ensure_routine_assigned(actor: Actor, routine: Routine | None) -> Routine:
    if not can_view_assigned_routine(actor, routine):
        raise NotFoundError("Routine not found")
    return routine


def can_view_student(actor: Actor, student: User | None, *, assigned_routine_owner_ids: set[int]) -> bool:
    """True when ``student`` belongs to the instructor ``actor``.

    A student belongs to an instructor when they signed up with that
    instructor's code, or when at least one of the instructor's routines is
    assigned to them (``assigned_routine_owner_ids`` holds the owners of
    the student's assigned routines).
    """
    if student is None or not actor.is_instructor or student.role != UserRole.STUDENT:
        return False
    if student.instructor_id == actor.user_id:
        return True
    return actor.user_id in assigned_routine_owner_ids


def ensure_student_visible(actor: Actor, student: User | None, *, assigned_routine_owner_ids: set[int]) -> User:
    if not can_view_student(actor, student, assigned_routine_owner_ids=assigned_routine_owner_ids):
        raise NotFoundError("Student not found")
    return student
