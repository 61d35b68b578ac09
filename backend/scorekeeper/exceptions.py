"""
Scorekeeper Backend — Custom Exception Hierarchy
==================================================

What:  Application-specific exceptions for the domain's failure kinds.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services and the persistence gateway; caught by global handlers.

Exception Hierarchy:
    ScorekeeperError (base)
    ├── ValidationError    → 400 Bad Request
    ├── UnauthorizedError  → 401 Unauthorized
    ├── NotFoundError      → 404 Not Found
    ├── ConflictError      → 409 Conflict
    └── DatabaseError      → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class ScorekeeperError(Exception):
    """
    Base exception for all Scorekeeper application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client
                  unless the handler opts in)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ScorekeeperError):
    """
    Raised when client input fails validation.

    HTTP:    400 Bad Request

    FastAPI's own RequestValidationError (bad UUID in the path, missing body
    field, non-integer points) is mapped to the same response shape.
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


class UnauthorizedError(ScorekeeperError):
    """
    Raised when credentials do not match.

    HTTP:    401 Unauthorized

    The same message is used for an unknown name and for a wrong password,
    so callers cannot tell which one failed.
    """

    def __init__(
        self,
        message: str = "Invalid credentials",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(ScorekeeperError):
    """
    Raised when a referenced user, room or player does not exist.

    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        if resource_id:
            message = f"{resource.capitalize()} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource


class ConflictError(ScorekeeperError):
    """
    Raised when a uniqueness rule would be violated.

    HTTP:    409 Conflict

    Raised both by the service-level pre-checks and by the persistence
    gateway when the storage engine rejects a write with an integrity error.
    """

    def __init__(
        self,
        message: str = "Resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(ScorekeeperError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic.
        Detailed error info (statement, constraint name, etc.) is logged
        server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
