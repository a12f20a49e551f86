from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


if TYPE_CHECKING:
    from app.db.models.routine import Routine
    from app.db.models.user import User


class RoutineAssignment(Base):
    __tablename__ = "routine_assignments"

    id: Mapped[int] = mapped_column(sa.Integer(), primary_key=True, autoincrement=True)

    routine_id: Mapped[int] = mapped_column(
        sa.Integer(), sa.ForeignKey("routines.id", ondelete="CASCADE"), nullable=False, index=True
    )
    student_id: Mapped[int] = mapped_column(
        sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
    )

    routine: Mapped["Routine"] = relationship(back_populates="assignments")
    student: Mapped["User"] = relationship(back_populates="routine_assignments")
