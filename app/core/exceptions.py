"""
Application error taxonomy.

Services raise these; handlers registered in main.py turn them into a
JSON body of the form {"message": ...} with the matching status code.
"""

from typing import Dict, Optional


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500
    default_message: str = "Server error"
    headers: Optional[Dict[str, str]] = None

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed, missing or out-of-range input."""
    status_code = 400
    default_message = "Invalid request"


class AuthError(AppError):
    """Missing, invalid or expired token, or bad credentials."""
    status_code = 401
    default_message = "Not authenticated"
    headers = {"WWW-Authenticate": "Bearer"}


class ForbiddenError(AppError):
    """Valid identity, but the record belongs to someone else."""
    status_code = 403
    default_message = "Access denied"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class ConflictError(AppError):
    """Duplicate unique key."""
    status_code = 409
    default_message = "Conflict"


class InternalError(AppError):
    """Unclassified failure. The message never carries internal detail."""
    status_code = 500
    default_message = "Server error"
