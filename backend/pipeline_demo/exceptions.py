"""
Pipeline Demo — Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for the service and the test harness.
Why:   Services raise typed errors; global handlers in main.py turn them into
       the `{success: false, error}` envelope with the right status code.
How:   Each exception carries a message and an optional context dict.
       The context is logged server-side, never returned to the client.

Exception Hierarchy:
    PipelineDemoError (base)      → 500 Internal Server Error
    ├── ValidationError           → 400 Bad Request (client can fix)
    └── HarnessAssertionError     → harness only, exit status 1
"""

from typing import Any, Dict, Optional


class PipelineDemoError(Exception):
    """
    Base exception for all application errors.

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


class ValidationError(PipelineDemoError):
    """
    Raised when client input fails validation.

    When:    POST /api/users without a truthy name or email.
    HTTP:    400 Bad Request

    Example response:
        {"success": false, "error": "Name and email are required"}
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


class HarnessAssertionError(PipelineDemoError):
    """
    Raised by the test harness when a checked condition is false.

    The first one raised aborts the remaining checks of the run; the runner
    reports it and exits with status 1.
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message=f"Test failed: {message}", context=context)
        self.check = message
