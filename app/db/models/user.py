from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


if TYPE_CHECKING:
    from app.db.models.instructor_code import InstructorCode
    from app.db.models.routine import Routine
    from app.db.models.routine_assignment import RoutineAssignment


class UserRole(str, enum.Enum):
    INSTRUCTOR = "INSTRUCTOR"
    STUDENT = "STUDENT"


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(sa.Integer(), primary_key=True, autoincrement=True)

    first_name: Mapped[str] = mapped_column(sa.String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(sa.String(100), nullable=False)
    email: Mapped[str] = mapped_column(sa.String(255), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(sa.Text(), nullable=False)

    role: Mapped[UserRole] = mapped_column(sa.Enum(UserRole, name="user_role"), nullable=False)

    # Set for students who signed up with an instructor code.
    instructor_id: Mapped[int | None] = mapped_column(
        sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )

    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), server_default=sa.func.now(), onupdate=sa.func.now(), nullable=False
    )

    instructor: Mapped["User | None"] = relationship(remote_side=[id], back_populates="students")
    students: Mapped[list["User"]] = relationship(back_populates="instructor")

    code: Mapped["InstructorCode | None"] = relationship(
        back_populates="instructor", uselist=False, cascade="all, delete-orphan"
    )
    routines_created: Mapped[list["Routine"]] = relationship(back_populates="instructor")
    routine_assignments: Mapped[list["RoutineAssignment"]] = relationship(
        back_populates="student", cascade="all, delete-orphan"
    )
