"""
Blog API Backend: Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions and the error kinds they map to.
How:   Each exception carries a message, an optional context dict and an
       `ErrorKind`. A single global handler (registered in main.py) turns
       any BlogApiError into a response envelope whose status code comes
       from `ErrorKind.status_code`.
Who:   Raised by the identity extractor and the post service.

Exception Hierarchy:
    BlogApiError (base)            → INTERNAL        → 500
    ├── NotFoundError              → NOT_FOUND       → 404
    ├── NotOwnerError              → NOT_OWNER       → 400
    ├── AuthenticationError        → UNAUTHENTICATED → 401
    └── DatabaseError              → INTERNAL        → 500

Note on NotOwnerError:
    Existing clients treat "not the owner" as 400 Bad Request, so the
    mapping stays at 400 rather than 403.
"""

import enum
from typing import Any, Dict, Optional


class ErrorKind(str, enum.Enum):
    """Enumerated error kinds with a fixed transport status."""

    NOT_FOUND = "not_found"
    NOT_OWNER = "not_owner"
    UNAUTHENTICATED = "unauthenticated"
    INTERNAL = "internal"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.NOT_OWNER: 400,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.INTERNAL: 500,
}


class BlogApiError(Exception):
    """
    Base exception for all Blog API application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
        kind:     ErrorKind deciding the HTTP status
    """

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return self.kind.status_code


class NotFoundError(BlogApiError):
    """
    Raised when a referenced post or category does not exist.

    SQLAlchemy returns None for missing rows; the service converts that
    None into this exception so the handler can answer 404.
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"No {resource} found with the given id"
        ctx = dict(context or {})
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class NotOwnerError(BlogApiError):
    """Raised when the acting user is not the stored owner of a post."""

    kind = ErrorKind.NOT_OWNER

    def __init__(
        self,
        post_id: Optional[int] = None,
        user_id: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = dict(context or {})
        ctx.update(post_id=post_id, user_id=user_id)
        super().__init__(message="Sorry, you are not the owner of this post", context=ctx)


class AuthenticationError(BlogApiError):
    """
    Raised when the bearer credential is missing, malformed or invalid.

    The response message is the same for every failure; the specific
    reason travels in `context` for the logs.
    """

    kind = ErrorKind.UNAUTHENTICATED

    def __init__(
        self,
        reason: str = "invalid credentials",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = dict(context or {})
        ctx["reason"] = reason
        super().__init__(message="Could not validate credentials", context=ctx)
        self.reason = reason


class DatabaseError(BlogApiError):
    """
    Raised when a write fails unexpectedly.

    The message returned to the client is always generic. The original
    error type is kept in `context` and the traceback is logged by the
    service that caught it.
    """

    kind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str = "An internal error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
