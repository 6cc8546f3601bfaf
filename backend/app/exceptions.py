"""
Catalog API — Custom Exception Hierarchy
==========================================

What:  Application-specific exceptions for each failure kind a handler can hit.
How:   Each exception carries a client-safe message and an optional context
       dict. Global exception handlers (registered in main.py) map them to
       structured JSON error responses with the right HTTP status code.
Who:   Raised by the document service; caught by the global handlers.

Exception Hierarchy:
    CatalogError (base)
    ├── ValidationError  → 400 Bad Request (malformed id, bad page,
    │                                      missing field, empty update)
    ├── NotFoundError    → 404 Not Found
    └── DatabaseError    → 500 Internal Server Error (any store failure)

Callers branch on the error kind with ordinary except clauses; no
exception carries partial results, since every operation is a single
store call.
"""

from typing import Any, Dict, Optional


class CatalogError(Exception):
    """
    Base exception for all Catalog API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned for 5xx errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(CatalogError):
    """
    Raised when client input fails validation.

    When:    Unparseable identifier, non-positive or non-numeric page,
             missing required field on create, update body with no fields.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "price is required",
            "details": {"field": "price"}
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


class NotFoundError(CatalogError):
    """
    Raised when a requested document does not exist.

    When:    GET or PATCH on an identifier with no stored document.
    HTTP:    404 Not Found

    The driver returns None for a missing document; the service converts
    that into this exception.
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
        self.resource = resource
        self.resource_id = resource_id


class DatabaseError(CatalogError):
    """
    Raised when the document store fails.

    When:    Connection lost, server selection timeout, operation timeout,
             document encoding failure.
    HTTP:    500 Internal Server Error

    The client always receives a generic message; driver details stay
    in the server log. No retry is attempted: the caller may retry.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
