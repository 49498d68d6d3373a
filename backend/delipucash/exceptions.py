"""
DelipuCash Backend: Custom Exception Hierarchy
================================================

What:  Defines application-specific exceptions for the interaction engine.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly messages.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by the repository and services; caught by global handlers.

Exception Hierarchy:
    DelipuCashError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── NotFoundError            → 404 Not Found (response or user missing)
    ├── ConstraintConflictError  → never reaches HTTP (benign race, swallowed)
    └── DatabaseError            → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class DelipuCashError(Exception):
    """
    Base exception for all DelipuCash application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged; only selectively returned)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(DelipuCashError):
    """
    Raised when client input fails a business rule.

    When:    Blank or missing reply text.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Reply text is required",
            "details": {"field": "replyText"}
        }
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


class NotFoundError(DelipuCashError):
    """
    Raised when a referenced Response or AppUser does not exist.

    HTTP:    404 Not Found

    The `resource` attribute names the missing entity ("response" or "user")
    so clients can tell the two apart.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class ConstraintConflictError(DelipuCashError):
    """
    Raised when an insert trips the (user_id, response_id) unique constraint.

    Two concurrent "like" calls from the same user can both observe "no
    existing row" and both insert. The loser of that race lands here. The
    desired end state already holds, so callers treat it as success.
    """

    def __init__(
        self,
        message: str = "Row already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(DelipuCashError):
    """
    Raised when a database operation fails unexpectedly.

    When:    Connection lost mid-query, timeout, deadlock, etc.
    HTTP:    500 Internal Server Error

    The underlying cause is kept on `cause` and in `context["cause"]`; the
    error handler only returns it to clients outside production.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        cause: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if cause is not None:
            ctx.setdefault("original_error", type(cause).__name__)
            ctx.setdefault("cause", str(cause))
        super().__init__(message=message, context=ctx)
        self.cause = cause
