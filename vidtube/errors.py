"""Application error taxonomy.

Every failure a handler can report is an ``AppError`` subclass carrying its
HTTP status. ``vidtube.main`` installs one exception handler that turns them
into the uniform error envelope::

    {"statusCode": 404, "message": "Video not found", "success": false, "errors": []}
"""

import uuid
from typing import Any


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500
    default_message: str = "Something went wrong"

    def __init__(self, message: str | None = None, errors: list[Any] | None = None):
        self.message = message or self.default_message
        self.errors = errors or []
        super().__init__(self.message)


class InvalidArgument(AppError):
    """Malformed identifier or missing/empty required field."""

    status_code = 400
    default_message = "Invalid request"


class Unauthenticated(AppError):
    """Missing, invalid or expired credentials."""

    status_code = 401
    default_message = "Unauthorized request"


class PermissionDenied(AppError):
    """The principal is not allowed to touch this resource."""

    status_code = 403
    default_message = "You are not allowed to modify this resource"


class NotFound(AppError):
    """Referenced resource does not exist."""

    status_code = 404
    default_message = "Resource not found"


class Conflict(AppError):
    """Unique field already taken."""

    status_code = 409
    default_message = "Resource already exists"


class Internal(AppError):
    """A downstream write or upload failed."""

    status_code = 500


def parse_id(value: str | uuid.UUID | None, name: str = "id") -> uuid.UUID:
    """Parse a resource identifier, raising ``InvalidArgument`` when malformed."""
    if isinstance(value, uuid.UUID):
        return value
    if not value:
        raise InvalidArgument(f"Invalid {name}")
    try:
        return uuid.UUID(str(value))
    except ValueError:
        raise InvalidArgument(f"Invalid {name}") from None


def require_text(**fields: str | None) -> None:
    """Raise ``InvalidArgument`` if any of the given fields is missing or blank."""
    missing = [name for name, value in fields.items() if value is None or not value.strip()]
    if missing:
        raise InvalidArgument(
            f"{', '.join(missing)} {'is' if len(missing) == 1 else 'are'} required",
            errors=[{"field": name, "message": "Field is required"} for name in missing],
        )
