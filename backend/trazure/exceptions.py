"""
Trazure Backend — Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the error scenarios of the API.
Why:   Targeted error handling with appropriate HTTP status codes and
       user-friendly messages, without leaking storage details to clients.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) turn them into
       structured JSON error responses.
Who:   Raised by services, repositories' callers and dependencies.

Exception Hierarchy:
    TrazureError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    ├── NotFoundError     → 404 Not Found
    ├── FileStorageError  → 500 Internal Server Error
    └── PersistenceError  → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class TrazureError(Exception):
    """
    Base exception for all Trazure application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, only returned for validation errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(TrazureError):
    """
    Raised when client input breaks a business rule.

    When:    Coordinates missing or out of range, bad identity header,
             unsupported upload type or size.
    HTTP:    400 Bad Request

    Type-level problems (a string where a number belongs) are caught earlier
    by FastAPI's schema validation and keep its 422 response.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(TrazureError):
    """
    Raised when a requested resource does not exist for the caller.

    When:    GET /footprints/{id} for a missing id, or one owned by someone else.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class FileStorageError(TrazureError):
    """
    Raised when writing an upload to disk fails.

    When:    Disk full, permission denied, directory not writable.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PersistenceError(TrazureError):
    """
    Raised when the record store rejects or cannot serve an operation.

    When:    Connection lost, constraint violation, deadlock.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the original
    error type travels in context and is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A storage error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
