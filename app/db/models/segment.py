from __future__ import annotations

from typing import TYPE_CHECKING

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


if TYPE_CHECKING:
    from app.db.models.routine import Routine


class Segment(Base):
    __tablename__ = "segments"

    __table_args__ = (
        sa.UniqueConstraint("routine_id", "position", name="uq_segments_routine_position"),
        sa.CheckConstraint("duration > 0", name="duration_positive"),
        sa.CheckConstraint("effort IS NULL OR effort BETWEEN 1 AND 10", name="effort_range"),
    )

    id: Mapped[int] = mapped_column(sa.Integer(), primary_key=True, autoincrement=True)

    routine_id: Mapped[int] = mapped_column(
        sa.Integer(), sa.ForeignKey("routines.id", ondelete="CASCADE"), nullable=False, index=True
    )

    position: Mapped[int] = mapped_column(sa.Integer(), nullable=False)

    # Minutes.
    duration: Mapped[int] = mapped_column(sa.Integer(), nullable=False)
    effort: Mapped[int | None] = mapped_column(sa.Integer(), nullable=True)
    description: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)

    routine: Mapped["Routine"] = relationship(back_populates="segments")
