from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


if TYPE_CHECKING:
    from app.db.models.routine_assignment import RoutineAssignment
    from app.db.models.segment import Segment
    from app.db.models.user import User


class Routine(Base):
    __tablename__ = "routines"

    id: Mapped[int] = mapped_column(sa.Integer(), primary_key=True, autoincrement=True)

    instructor_id: Mapped[int] = mapped_column(
        sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    name: Mapped[str] = mapped_column(sa.String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), server_default=sa.func.now(), onupdate=sa.func.now(), nullable=False
    )

    instructor: Mapped["User"] = relationship(back_populates="routines_created")
    segments: Mapped[list["Segment"]] = relationship(
        back_populates="routine",
        cascade="all, delete-orphan",
        order_by="Segment.position",
    )
    assignments: Mapped[list["RoutineAssignment"]] = relationship(
        back_populates="routine", cascade="all, delete-orphan"
    )
