"""
Slug Routes — Custom Exception Hierarchy
========================================

What:  Application-specific exceptions raised while binding route parameters.
Why:   A missing record is a normal outcome for a lookup but an error for the
       request; a dedicated type lets the app render it as 404 without the
       resolver knowing about HTTP responses.
How:   Each exception carries a message and optional context dict.
       Handlers registered in main.py turn them into JSON responses.
Who:   Raised by ParameterResolver and SlugRouter; caught by global handlers.

Exception Hierarchy:
    SlugRoutesError (base)
    ├── NotFoundError               → 404 Not Found
    └── BindingNotRegisteredError   → 500 Internal Server Error

Anything raised by the database session (connection loss, bad SQL) is not
wrapped here; it propagates unchanged.
"""

from typing import Any, Dict, Optional


class SlugRoutesError(Exception):
    """
    Base exception for all slug_routes errors.

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


class NotFoundError(SlugRoutesError):
    """
    Raised when a route parameter does not resolve to a record and no
    fallback callback was supplied.

    HTTP:    404 Not Found

    SQLAlchemy returns None for a missing row. The resolver converts that
    None into this exception only after the fallback path is exhausted.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class BindingNotRegisteredError(SlugRoutesError):
    """
    Raised when a route depends on `SlugRouter.binding(key)` but nothing was
    registered for `key` by the time the request arrives.

    HTTP:    500 Internal Server Error (a wiring mistake, not a client error)
    """

    def __init__(
        self,
        key: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["key"] = key
        super().__init__(
            message=f"No binder registered for route parameter '{key}'",
            context=ctx,
        )
        self.key = key
