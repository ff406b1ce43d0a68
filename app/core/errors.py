"""
Application error taxonomy.

Every error carries the HTTP status it maps to and a stable ``error_code`` so
that routes and the client layer can tell failures apart without parsing
messages.
"""

from typing import Any, Optional


class AppError(Exception):
    """Base class for expected, user-facing failures"""

    status_code = 500
    error_code = "APP_ERROR"

    def __init__(self, message: str, **context: Any) -> None:
        self.message = message
        self.context = context
        super().__init__(message)


class ValidationError(AppError):
    """Bad or missing input"""

    status_code = 400
    error_code = "VALIDATION_ERROR"


class NotFoundError(AppError):
    """Lookup miss (seat, table or photo)"""

    status_code = 404
    error_code = "NOT_FOUND"


class ConflictError(AppError):
    """Duplicate vote for the same photo from the same voter IP"""

    status_code = 400
    error_code = "ALREADY_VOTED"


class VotingClosedError(AppError):
    """Vote attempted while voting is disabled or stopped"""

    status_code = 403
    error_code = "VOTING_CLOSED"


class UpstreamError(AppError):
    """Text generation service failure"""

    status_code = 502
    error_code = "UPSTREAM_ERROR"


class PersistenceError(AppError):
    """Save or load of stored state failed"""

    status_code = 500
    error_code = "PERSISTENCE_ERROR"


def error_from_status(status_code: int, message: str, error_code: Optional[str] = None) -> AppError:
    """Rebuild the matching error from an HTTP error response"""
    for cls in (VotingClosedError, ValidationError, ConflictError, NotFoundError, UpstreamError):
        if cls.status_code == status_code and (error_code is None or cls.error_code == error_code):
            return cls(message)
    return PersistenceError(message, status_code=status_code)
