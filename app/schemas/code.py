from __future__ import annotations

from app.schemas.base import CamelModel
from app.schemas.user import InstructorOwner


class CodeResponse(CamelModel):
    code: str


class CodeCheckRequest(CamelModel):
    code: str


class CodeCheckResponse(CamelModel):
    valid: bool
    user: InstructorOwner | None = None
