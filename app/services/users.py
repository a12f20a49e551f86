from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import AuthenticationError, ConflictError, ValidationError
from app.core.security import create_access_token, hash_password, verify_password
from app.core.settings import Settings
from app.db.models.user import User, UserRole
from app.schemas.user import LoginRequest, SignupRequest, TokenResponse, UserResponse
from app.services.instructor_codes import assign_new_code, find_instructor_by_code


logger = logging.getLogger(__name__)


def _clean_person_name(value: str, label: str) -> str:
    cleaned = value.strip()
    if not cleaned:
        raise ValidationError(f"{label} must not be empty")
    return cleaned


def _user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        role=user.role,
    )


async def signup(db: AsyncSession, settings: Settings, body: SignupRequest) -> UserResponse:
    """Create a user.

    Students must present a valid instructor code and are linked to its
    owner. Instructors get an access code of their own.
    """
    instructor: User | None = None
    if body.role == UserRole.STUDENT:
        if not body.code:
            raise ValidationError("An instructor code is required to sign up as a student")
        instructor = await find_instructor_by_code(db, body.code, length=settings.instructor_code_length)
        if instructor is None:
            raise ValidationError("Invalid instructor code")

    user = User(
        first_name=_clean_person_name(body.first_name, "First name"),
        last_name=_clean_person_name(body.last_name, "Last name"),
        email=str(body.email).lower(),
        password_hash=hash_password(body.password),
        role=body.role,
        instructor_id=instructor.id if instructor is not None else None,
    )
    db.add(user)

    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError("Email already registered")

    response = _user_response(user)
    if response.role == UserRole.INSTRUCTOR:
        await assign_new_code(db, response.id, length=settings.instructor_code_length)

    logger.info("Signed up user %s as %s", response.id, response.role.value)
    return response


async def login(db: AsyncSession, settings: Settings, body: LoginRequest) -> TokenResponse:
    result = await db.execute(select(User).where(User.email == str(body.email).lower()))
    user = result.scalar_one_or_none()

    if user is None or not verify_password(body.password, user.password_hash):
        logger.warning("Failed login attempt")
        raise AuthenticationError("Invalid credentials")

    token = create_access_token(settings, user_id=user.id, role=user.role.value)
    return TokenResponse(access_token=token, role=user.role)
