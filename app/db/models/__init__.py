from app.db.models.instructor_code import InstructorCode
from app.db.models.routine import Routine
from app.db.models.routine_assignment import RoutineAssignment
from app.db.models.segment import Segment
from app.db.models.user import User, UserRole

__all__ = [
    "InstructorCode",
    "Routine",
    "RoutineAssignment",
    "Segment",
    "User",
    "UserRole",
]
