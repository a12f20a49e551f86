from __future__ import annotations


class AppError(Exception):
    """Base for errors raised by the service layer.

    Each subclass carries the HTTP status the API surface reports it with.
    """

    status_code: int = 500
    default_detail: str = "Internal error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class AuthenticationError(AppError):
    status_code = 401
    default_detail = "Not authenticated"


class AuthorizationError(AppError):
    status_code = 403
    default_detail = "Forbidden"


class NotFoundError(AppError):
    # Also used when a resource exists but is not owned by/assigned to the caller.
    status_code = 404
    default_detail = "Not found"


class ValidationError(AppError):
    status_code = 422
    default_detail = "Invalid request"


class ConflictError(AppError):
    status_code = 409
    default_detail = "Conflict"


class CodeAllocationError(AppError):
    status_code = 503
    default_detail = "Unable to allocate a unique instructor code. Please retry."
