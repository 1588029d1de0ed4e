"""Application error taxonomy.

Every error raised by services and dependencies is an ``AppError``; the
handlers registered in ``tablemenu.main`` turn them into the error envelope
``{"ok": false, "code", "message", "details"}``.
"""
from __future__ import annotations


class AppError(Exception):
    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str, *, code: str | None = None, details: list[dict] | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.details = details or []

    @classmethod
    def for_field(cls, field: str, message: str, *, summary: str | None = None, code: str | None = None):
        return cls(summary or message, code=code, details=[{"field": field, "message": message}])


class ValidationError(AppError):
    status_code = 400
    code = "VALIDATION_ERROR"


class InvalidReference(ValidationError):
    code = "INVALID_REFERENCE"


class Unauthorized(AppError):
    status_code = 401
    code = "UNAUTHORIZED"


class Forbidden(AppError):
    status_code = 403
    code = "FORBIDDEN"


class NotFound(AppError):
    status_code = 404
    code = "NOT_FOUND"


class DuplicateEntry(AppError):
    status_code = 409
    code = "DUPLICATE_ENTRY"


class Conflict(AppError):
    status_code = 409
    code = "CONFLICT"


class UpstreamError(AppError):
    status_code = 502
    code = "IMAGE_UPLOAD_ERROR"


def require_fields(summary: str, **values) -> None:
    """Raise ``ValidationError`` listing every blank or missing field."""
    details = [
        {"field": field, "message": f"{field} is required"}
        for field, value in values.items()
        if value is None or (isinstance(value, str) and not value.strip())
    ]
    if details:
        raise ValidationError(summary, details=details)
