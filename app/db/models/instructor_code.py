from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


if TYPE_CHECKING:
    from app.db.models.user import User


class InstructorCode(Base):
    """The single active access code of an instructor.

    Regeneration rewrites ``code`` on this row, so a previous value stops
    resolving as soon as the new one is committed.
    """

    __tablename__ = "instructor_codes"

    id: Mapped[int] = mapped_column(sa.Integer(), primary_key=True, autoincrement=True)

    instructor_id: Mapped[int] = mapped_column(
        sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )

    code: Mapped[str] = mapped_column(sa.String(16), unique=True, index=True, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), server_default=sa.func.now(), onupdate=sa.func.now(), nullable=False
    )

    instructor: Mapped["User"] = relationship(back_populates="code")
