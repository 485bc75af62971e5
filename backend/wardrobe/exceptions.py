"""
Wardrobe Backend — Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for every client and server error class.
Why:   Services raise these instead of building responses; global handlers
       (registered in main.py) turn them into `{"message": ...}` JSON bodies
       with the right status code.
How:   Each exception carries a user-safe `message` and an optional `context`
       dict that is logged server-side but never returned to the client.

Exception Hierarchy:
    WardrobeError (base)
    ├── ValidationError          → 400 Bad Request (malformed id, missing field, type mismatch)
    ├── AuthenticationError      → 401 Unauthorized (bad credentials, missing/invalid token)
    ├── NotFoundError            → 404 Not Found
    ├── ConflictError            → 409 Conflict (unique name, duplicate association)
    ├── PayloadTooLargeError     → 413 Payload Too Large
    ├── UnsupportedContentError  → 415 Unsupported Media Type (unrecognised byte signature)
    └── DatabaseError            → 500 Internal Server Error (generic message)
"""

from typing import Any, Dict, Optional


class WardrobeError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(WardrobeError):
    """
    Raised when client input fails validation.

    When:    Non-numeric id, missing required field, unknown enum value,
             uploaded content that disagrees with the declared logical type.
    HTTP:    400 Bad Request
    """

    status_code = 400

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


class AuthenticationError(WardrobeError):
    """
    Raised for failed logins and for missing, malformed or expired tokens.

    The login path always uses the same message for "unknown user" and
    "wrong password" so the response cannot be used to enumerate usernames.
    """

    status_code = 401

    def __init__(
        self,
        message: str = "Authentication required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(WardrobeError):
    """
    Raised when a requested or referenced resource does not exist.

    Existence predicates return booleans; services convert False into this
    exception so routes stay free of status-code logic.
    """

    status_code = 404

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


class ConflictError(WardrobeError):
    """
    Raised when a write would violate a uniqueness rule.

    Two sources:
        1. The pre-check found an existing row (fast path)
        2. The database rejected the write with a unique-constraint violation
           (a concurrent request won the race); this one is authoritative
    """

    status_code = 409

    def __init__(
        self,
        message: str = "The resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PayloadTooLargeError(WardrobeError):
    """Raised when an uploaded body exceeds MAX_UPLOAD_SIZE."""

    status_code = 413

    def __init__(
        self,
        max_size: int,
        context: Optional[Dict[str, Any]] = None,
    ):
        max_mb = max_size / (1024 * 1024)
        ctx = context or {}
        ctx["max_size"] = max_size
        super().__init__(
            message=f"Upload exceeds the maximum size of {max_mb:.0f}MB.",
            context=ctx,
        )
        self.max_size = max_size


class UnsupportedContentError(WardrobeError):
    """
    Raised when the uploaded bytes match no known file signature.

    HTTP:    415 Unsupported Media Type
    """

    status_code = 415

    def __init__(
        self,
        message: str = "Unsupported file content",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(WardrobeError):
    """
    Raised when database operations fail unexpectedly.

    When:    Connection lost mid-query, a constraint violation that was not
             pre-checked, or a write that affected zero rows after its
             existence check passed.
    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic; the handler in
        main.py logs `context` and never echoes it.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
