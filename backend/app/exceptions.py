"""
WorshipDeck Backend - Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the error outcomes of every route.
Why:   Services raise typed errors; global handlers in main.py map them to
       HTTP status codes so no route needs its own try/except.
How:   Each exception carries a message and an optional context dict.

Exception Hierarchy:
    WorshipDeckError (base)
    ├── ValidationError   → 400 Bad Request (missing/empty required field)
    ├── NotFoundError     → 404 Not Found
    ├── ConflictError     → 409 Conflict (near-duplicate song name)
    └── DatabaseError     → 500 Internal Server Error (storage failure)

Retry guidance:
    ValidationError and ConflictError leave no partial state; the client
    must change its input. DatabaseError may be transient. Retrying a song
    create is safe because the retry re-runs the full duplicate check.
"""

from typing import Any, Dict, Optional


class WorshipDeckError(Exception):
    """
    Base exception for all WorshipDeck application errors.

    Attributes:
        message:  User-facing error description (returned in the API response)
        context:  Additional debug info for logs and the `details` field
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(WorshipDeckError):
    """
    Raised when client input fails validation.

    When:    A required field is missing or empty, a query parameter is
             absent, or a bulk payload is not a non-empty list.
    HTTP:    400 Bad Request

    Why 400 (not 422):
        FastAPI already answers malformed JSON and wrong types with 422.
        These are business rules (e.g. "song_name must not be empty") that
        the client can fix by resending.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        fields: Optional[list] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if fields:
            ctx["fields"] = list(fields)
        super().__init__(message=message, context=ctx)
        self.fields = list(fields or [])


class NotFoundError(WorshipDeckError):
    """
    Raised when a requested row does not exist.

    HTTP:    404 Not Found

    The message is passed in verbatim so each resource keeps its own
    wording ("Song not found", "Verse not found.", ...).
    """

    def __init__(
        self,
        message: str = "The requested resource was not found",
        resource: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource:
            ctx["resource"] = resource
        super().__init__(message=message, context=ctx)


class ConflictError(WorshipDeckError):
    """
    Raised when a new song's name is too similar to an existing one.

    HTTP:    409 Conflict

    Context carries the matched name and its score so the client can show
    which song blocked the insert.
    """

    def __init__(
        self,
        message: str = "A similar song already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(WorshipDeckError):
    """
    Raised when a storage operation fails.

    HTTP:    500 Internal Server Error

    The message includes the driver's own error text (e.g. "database is
    locked", "NOT NULL constraint failed: songs.song_name"). This backend
    runs on a trusted local network and clients rely on the cause to
    decide whether to retry.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

    @classmethod
    def from_exception(cls, exc: Exception, operation: str) -> "DatabaseError":
        """Wrap a driver/ORM exception, keeping the store's own message."""
        cause = getattr(exc, "orig", None) or exc
        return cls(
            message=str(cause),
            context={"operation": operation, "error_type": type(exc).__name__},
        )
