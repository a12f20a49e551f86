from __future__ import annotations

import logging
import re
import secrets

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import CodeAllocationError, ValidationError
from app.db.models.instructor_code import InstructorCode
from app.db.models.user import User, UserRole
from app.schemas.code import CodeCheckResponse, CodeResponse
from app.schemas.user import InstructorOwner
from app.services.access import Actor, require_instructor


logger = logging.getLogger(__name__)

# No 0/O or 1/I, so codes survive being read aloud or typed from paper.
_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
_MAX_ATTEMPTS = 10
DEFAULT_CODE_LENGTH = 6


def generate_code(*, length: int = DEFAULT_CODE_LENGTH) -> str:
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def normalize_code(raw: str, *, length: int = DEFAULT_CODE_LENGTH) -> str:
    code = (raw or "").strip().upper()
    if len(code) != length or not re.fullmatch(r"[A-Z0-9]+", code):
        raise ValidationError(f"Code must be {length} alphanumeric characters")
    return code


async def _get_code_row(db: AsyncSession, instructor_id: int) -> InstructorCode | None:
    result = await db.execute(select(InstructorCode).where(InstructorCode.instructor_id == instructor_id))
    return result.scalar_one_or_none()


async def assign_new_code(db: AsyncSession, instructor_id: int, *, length: int = DEFAULT_CODE_LENGTH) -> str:
    """Give the instructor a fresh code, replacing any existing one.

    Collisions with other instructors' codes are caught by the unique
    constraint and retried with a new value.
    """
    for _ in range(_MAX_ATTEMPTS):
        row = await _get_code_row(db, instructor_id)
        new_code = generate_code(length=length)
        if row is None:
            db.add(InstructorCode(instructor_id=instructor_id, code=new_code))
        else:
            row.code = new_code

        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            continue

        return new_code

    logger.error("Could not allocate a unique code for instructor %s", instructor_id)
    raise CodeAllocationError()


async def get_code(db: AsyncSession, actor: Actor, *, length: int = DEFAULT_CODE_LENGTH) -> CodeResponse:
    require_instructor(actor)

    row = await _get_code_row(db, actor.user_id)
    if row is not None:
        return CodeResponse(code=row.code)

    # Instructors created before codes existed get one on first read.
    return CodeResponse(code=await assign_new_code(db, actor.user_id, length=length))


async def regenerate_code(db: AsyncSession, actor: Actor, *, length: int = DEFAULT_CODE_LENGTH) -> CodeResponse:
    require_instructor(actor)

    code = await assign_new_code(db, actor.user_id, length=length)
    logger.info("Instructor %s regenerated their access code", actor.user_id)
    return CodeResponse(code=code)


async def find_instructor_by_code(
    db: AsyncSession, raw_code: str, *, length: int = DEFAULT_CODE_LENGTH
) -> User | None:
    code = normalize_code(raw_code, length=length)
    result = await db.execute(
        select(User)
        .join(InstructorCode, InstructorCode.instructor_id == User.id)
        .where(InstructorCode.code == code)
        .where(User.role == UserRole.INSTRUCTOR)
    )
    return result.scalar_one_or_none()


async def check_code(db: AsyncSession, raw_code: str, *, length: int = DEFAULT_CODE_LENGTH) -> CodeCheckResponse:
    instructor = await find_instructor_by_code(db, raw_code, length=length)
    if instructor is None:
        return CodeCheckResponse(valid=False)

    return CodeCheckResponse(
        valid=True,
        user=InstructorOwner(
            id=instructor.id,
            first_name=instructor.first_name,
            last_name=instructor.last_name,
        ),
    )
