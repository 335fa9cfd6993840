"""
Catalog API — Custom Exception Hierarchy
==========================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions let services signal an outcome once and have the
       global handlers (registered in main.py) pick the HTTP status code.
How:   Each exception class carries a message and optional context dict.
       Handlers return `{"error": message}`; context is only logged.
Who:   Raised by services and the storage gateway; caught by global handlers.

Exception Hierarchy:
    CatalogError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── NotFoundError            → 404 Not Found
    ├── OperationFailedError     → 400 Bad Request (store rejected a write)
    └── DatabaseError            → 500 Internal Server Error (read path failed)
"""

from typing import Any, Dict, Optional


class CatalogError(Exception):
    """
    Base exception for all Catalog API errors.

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


class ValidationError(CatalogError):
    """
    Raised when client input fails validation.

    When:    Missing required field on create, unparseable price,
             page/page_size that is not a positive integer.
    HTTP:    400 Bad Request

    Example response:
        {"error": "The field [category] is required"}
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
    Raised when a requested resource does not exist.

    When:    GET, PATCH or DELETE /api/products/{id} with an unknown id.
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing rows; the gateway converts that
    into this exception so every path reports a missing id the same way.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource.capitalize()} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class OperationFailedError(CatalogError):
    """
    Raised when the store rejects a create, update or delete.

    When:    Constraint violation, lost connection, any store error on a write.
    HTTP:    400 Bad Request

    The message is generic ("Could not create the product"); the original
    exception type goes into context for the server log only.
    """

    def __init__(
        self,
        message: str = "The operation could not be completed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(CatalogError):
    """
    Raised when a read from the store fails unexpectedly.

    When:    Listing or fetching products and the query raises.
    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic.
        Detailed error info is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
