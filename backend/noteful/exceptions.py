"""
Noteful Backend: Custom Exception Hierarchy
=============================================

What:  The closed set of application errors raised by services and routes.
How:   Each exception class carries a user-facing message, an optional context
       dict (logged, never returned), an HTTP status and a machine-readable
       error code. A single handler registered in main.py turns any
       NotefulError into a JSON response.

Exception Hierarchy:
    NotefulError (base)
    ├── ValidationError  → 400 Bad Request  (missing field, malformed id)
    ├── ConflictError    → 400 Bad Request  (unique name already taken)
    ├── NotFoundError    → 404 Not Found
    └── InternalError    → 500 Internal Server Error (persistence failure)
"""

from typing import Any, Dict, Optional


class NotefulError(Exception):
    """
    Base exception for all Noteful application errors.

    Attributes:
        message:      User-facing error description (safe to return)
        context:      Additional debug info (logged but NOT returned to client)
        status_code:  HTTP status the response handler uses
        error_code:   Machine-readable code placed in the response body
    """

    status_code: int = 500
    error_code: str = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotefulError):
    """
    Raised when client input fails validation.

    When:    Missing/empty required field, malformed identifier in the path,
             the query string or the body.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "The `id` is not valid",
            "details": {"field": "id"}
        }
    """

    status_code = 400
    error_code = "validation_error"

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

    @classmethod
    def missing(cls, field: str) -> "ValidationError":
        return cls(message=f"Missing `{field}` in request body", field=field)

    @classmethod
    def invalid_id(cls, field: str = "id") -> "ValidationError":
        return cls(message=f"The `{field}` is not valid", field=field)


class ConflictError(NotefulError):
    """
    Raised when an insert or update collides with a unique constraint.

    HTTP:    400 Bad Request (the client picks another name)
    """

    status_code = 400
    error_code = "conflict"

    def __init__(
        self,
        entity: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["entity"] = entity
        super().__init__(message=f"The {entity} name already exists", context=ctx)
        self.entity = entity


class NotFoundError(NotefulError):
    """
    Raised when a well-formed id matches no document.

    HTTP:    404 Not Found. Deletes never raise it; they are idempotent.
    """

    status_code = 404
    error_code = "not_found"

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


class InternalError(NotefulError):
    """
    Raised when the persistence layer fails unexpectedly.

    HTTP:    500 Internal Server Error

    The response message is always generic. The cause (exception type,
    operation, entity) goes to the server log only, so SQL text and
    constraint names never reach the client.
    """

    status_code = 500
    error_code = "server_error"

    def __init__(
        self,
        message: str = "An internal error occurred. Please try again later.",
        cause: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if cause:
            ctx["cause"] = cause
        super().__init__(message=message, context=ctx)
        self.cause = cause
