"""
svc-notes: Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions for the failure modes of the service.
How:   Each exception carries a message and an optional context dict. The
       context is for server-side logs only; handlers registered in main.py
       never copy it into a response body.
Who:   Raised by the configuration loader, the note service and the
       persistence gateway.

Exception Hierarchy:
    NotesServiceError (base)
    ├── ConfigurationError   → fatal at boot, no listener is bound
    ├── ValidationError      → 400 Bad Request, handled by the route
    └── PersistenceError     → 500 Internal Server Error, terminal handler

Readiness failures are not exceptions: NoteGateway.ping() reports them as
False and the readiness handler answers 500 "NOT READY" itself.
"""

from typing import Any, Dict, Optional


class NotesServiceError(Exception):
    """
    Base exception for all svc-notes errors.

    Attributes:
        message:  Human-readable description
        context:  Additional debug info (logged, never returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ConfigurationError(NotesServiceError):
    """
    Raised when a required environment variable is missing or invalid.

    The process logs the message and exits before binding a listener.
    """

    def __init__(
        self,
        message: str = "Invalid configuration",
        variable: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if variable:
            ctx["variable"] = variable
        super().__init__(message=message, context=ctx)
        self.variable = variable


class ValidationError(NotesServiceError):
    """
    Raised when caller input breaks a business rule (e.g. empty content).

    HTTP: 400 Bad Request, with `message` as the error text.
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


class PersistenceError(NotesServiceError):
    """
    Raised when a database operation fails.

    When:    Connection lost mid-query, constraint violation, pool exhausted.
    HTTP:    500 Internal Server Error with a generic body.

    The original driver exception is chained as __cause__ and its type name
    is kept in `context`; neither reaches the API consumer.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
