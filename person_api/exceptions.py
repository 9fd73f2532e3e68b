"""
Person API — Custom Exception Hierarchy
========================================

What:  Application-specific exceptions for the two failure tiers of the API.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return `{"error": ...}` JSON bodies with the matching status code.
Who:   Raised by the person service; caught by the global handlers.

Exception Hierarchy:
    PersonApiError (base)
    ├── NotFoundError   → 404 Not Found
    └── StoreError      → 500 Internal Server Error (raw store message)

    CastError (ValueError) is raised by the store when a field value cannot
    be converted to the stored type. The service wraps it in StoreError like
    any other store failure.
"""

from typing import Any, Dict, Optional


class PersonApiError(Exception):
    """
    Base exception for all Person API errors.

    Attributes:
        message:  Error description returned in the `error` field of the response
        context:  Additional debug info (logged, not returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(PersonApiError):
    """
    Raised when no person matches the requested identifier or name.

    HTTP:    404 Not Found
    Message: Always "Person not found"; the lookup that failed goes to context.
    """

    def __init__(
        self,
        lookup: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if lookup is not None:
            ctx["lookup"] = lookup
        super().__init__(message="Person not found", context=ctx)


class StoreError(PersonApiError):
    """
    Raised when the record store fails for any reason other than absence.

    HTTP:    500 Internal Server Error
    The message is the underlying store error, surfaced verbatim.
    """

    def __init__(
        self,
        message: str = "The person store failed to complete the operation",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


def json_type_name(value: Any) -> str:
    """Name of a decoded JSON value's type as clients see it."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "Array"
    if isinstance(value, dict):
        return "Object"
    return type(value).__name__


class CastError(ValueError):
    """Raised by the store when a value cannot be cast to its field type."""

    def __init__(self, kind: str, value: Any, path: str):
        self.kind = kind
        self.value = value
        self.path = path
        super().__init__(
            f'Cast to {kind} failed for value "{value}" '
            f'(type {json_type_name(value)}) at path "{path}"'
        )
