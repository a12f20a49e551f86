from __future__ import annotations

from pydantic import EmailStr, Field, field_validator

from app.db.models.user import UserRole
from app.schemas.base import CamelModel


class SignupRequest(CamelModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=8, max_length=72)
    role: UserRole
    # Instructor access code; required when role is STUDENT.
    code: str | None = None

    @field_validator("password")
    @classmethod
    def _password_fits_bcrypt(cls, value: str) -> str:
        # bcrypt only uses the first 72 bytes; max_length counts characters.
        if len(value.encode("utf-8")) > 72:
            raise ValueError("Password too long (bcrypt max is 72 bytes)")
        return value


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=72)


class TokenResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    role: UserRole


class UserResponse(CamelModel):
    id: int
    first_name: str
    last_name: str
    email: str
    role: UserRole


class InstructorOwner(CamelModel):
    id: int
    first_name: str
    last_name: str


class ReducedStudent(CamelModel):
    id: int
    first_name: str
    last_name: str
    email: str


class InstructorContact(CamelModel):
    id: int
    first_name: str
    last_name: str
    email: str


class StudentSelf(UserResponse):
    instructor: InstructorContact | None = None
