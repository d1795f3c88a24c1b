"""
VeggieFresh Admin API — Custom Exception Hierarchy
====================================================

What:  Application-specific exceptions for the different error scenarios.
How:   Each exception carries a user-facing message and an optional context
       dict. Global exception handlers (registered in main.py) turn them into
       the JSON error envelope with the matching HTTP status code.
Who:   Raised by services and dependencies; caught by global handlers.

Exception Hierarchy:
    VeggieFreshError (base)
    ├── ValidationError        → 400 Bad Request (client can fix)
    ├── AuthenticationError    → 401 Unauthorized
    ├── AuthorizationError     → 403 Forbidden
    ├── NotFoundError          → 404 Not Found
    ├── DatabaseError          → 500 Internal Server Error
    └── ConfigurationError     → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class VeggieFreshError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, only returned for validation errors)
    """

    code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(VeggieFreshError):
    """
    Raised when client input breaks a business rule.

    When:    Duplicate names, referenced category missing, category still in use.
    HTTP:    400 Bad Request

    Schema-level problems (wrong types, missing fields) are caught earlier by
    FastAPI and reported through the same 400 envelope.
    """

    code = "validation_error"

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


class AuthenticationError(VeggieFreshError):
    """
    Raised when the caller cannot be identified.

    When:    Missing bearer token, bad signature, expired token, wrong credentials.
    HTTP:    401 Unauthorized (with a `WWW-Authenticate: Bearer` header)
    """

    code = "unauthorized"

    def __init__(
        self,
        message: str = "Authentication required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AuthorizationError(VeggieFreshError):
    """
    Raised when an authenticated user lacks the admin role.

    HTTP:    403 Forbidden
    """

    code = "forbidden"

    def __init__(
        self,
        message: str = "Admin access required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(VeggieFreshError):
    """
    Raised when a requested record does not exist.

    When:    GET/PUT/PATCH/DELETE on an id that is not in the database.
    HTTP:    404 Not Found

    The message is "<Resource> not found" (e.g. "Product not found"); the id
    only goes into the context.
    """

    code = "not_found"

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


class DatabaseError(VeggieFreshError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. Driver errors,
    statements and constraint names are logged server-side only.
    """

    code = "server_error"

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConfigurationError(VeggieFreshError):
    """
    Raised when a required setting is missing at the moment it is needed.

    When:    Issuing or verifying tokens without JWT_SECRET.
    HTTP:    500 Internal Server Error
    """

    code = "server_error"

    def __init__(
        self,
        message: str = "Server is not configured correctly",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
