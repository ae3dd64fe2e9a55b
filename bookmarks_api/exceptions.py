"""
Bookmarks API - Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for each error scenario.
How:   Each exception carries a user-facing message and an optional context
       dict. Global handlers (registered in main.py) map each class to one
       HTTP status and a JSON error body.
Who:   Raised by services and dependencies; caught by global handlers.

Exception Hierarchy:
    BookmarksError (base)
    ├── ValidationError   → 400 Bad Request
    ├── AuthError         → 401 Unauthorized
    ├── NotFoundError     → 404 Not Found
    ├── ConflictError     → 409 Conflict
    └── DatabaseError     → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class BookmarksError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only for 400s)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(BookmarksError):
    """
    Raised when client input fails a business validation rule.

    Schema-level problems (missing fields, wrong types) are reported by
    FastAPI's RequestValidationError, which main.py maps to the same 400
    response shape.
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


class AuthError(BookmarksError):
    """
    Raised when the caller cannot be authenticated.

    When:  Wrong signin credentials; missing, malformed, expired or badly
           signed bearer token; token for a user that no longer exists.
    HTTP:  401 Unauthorized with `WWW-Authenticate: Bearer`.

    The message never says which part of the credentials was wrong.
    """

    def __init__(
        self,
        message: str = "Not authenticated",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(BookmarksError):
    """
    Raised when a requested resource does not exist for the caller.

    A bookmark owned by another user is reported exactly like a missing one.
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


class ConflictError(BookmarksError):
    """Raised when a write would violate a uniqueness rule (duplicate email)."""

    def __init__(
        self,
        message: str = "Credentials taken",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class DatabaseError(BookmarksError):
    """
    Raised when database operations fail unexpectedly.

    The client always receives a generic message; constraint names, SQL and
    driver errors stay in the server log via `context`.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
