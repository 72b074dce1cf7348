"""
Hersteller Service — Infrastructure Exception Hierarchy
=========================================================

What:  Exceptions for faults the service cannot recover from by itself.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services and routes; caught by global handlers.

Business outcomes (constraint violations, name conflicts, stale versions, ...)
are NOT exceptions: the services return them as tagged values, see
hersteller_api.services.errors. Only what is listed here travels as an
exception.

Exception Hierarchy:
    HerstellerServiceError (base)
    ├── NotFoundError            → 404 Not Found
    └── DatabaseError            → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class HerstellerServiceError(Exception):
    """
    Base exception for all Hersteller service faults.

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


class NotFoundError(HerstellerServiceError):
    """
    Raised when a requested resource does not exist.

    When:    A transport adapter looks up a record that is absent and the
             transport has no soft "absent" representation of its own.
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


class DatabaseError(HerstellerServiceError):
    """
    Raised when database operations fail unexpectedly.

    When:    Connection lost mid-query, deadlock, driver errors.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. SQL text,
    constraint names and driver messages go to the server log only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
