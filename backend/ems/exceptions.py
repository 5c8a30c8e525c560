"""
EMS Backend — Custom Exception Hierarchy
=========================================

What:  Defines application-specific exceptions for the three failure kinds.
Why:   Each kind maps to one HTTP status code and one fixed client message.
       Engine errors are wrapped so internal messages never reach the client.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    EMSError (base)
    ├── ValidationError   → 400 Bad Request (missing required input)
    ├── NotFoundError     → 404 Not Found (target row absent)
    └── DatabaseError     → 500 Internal Server Error (store failure)

No retries:
    A store failure is surfaced immediately. Failures are either caller-correctable
    (bad input) or environment-level (store unavailable).
"""

from typing import Any, Dict, Optional


class EMSError(Exception):
    """
    Base exception for all EMS application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(EMSError):
    """
    Raised when client input fails a presence check.

    When:    Missing or empty name/role/status on create, missing role name.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Missing required fields.",
            "details": {"fields": ["status"]}
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


class NotFoundError(EMSError):
    """
    Raised when the targeted row does not exist.

    When:    A lookup returns no row, or an UPDATE/DELETE affects zero rows.
    HTTP:    404 Not Found

    The message is fixed per resource ("Employee not found.", "Role not found.")
    so responses stay identical regardless of which id was asked for.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found."
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource


class DatabaseError(EMSError):
    """
    Raised when a store operation fails.

    When:    Engine error, including primary-key collisions on role names.
    HTTP:    500 Internal Server Error

    Security Note:
        The message is a fixed per-operation text ("Failed to create role.").
        The engine's own error text is kept in `context` and logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
