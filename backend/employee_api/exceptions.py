"""
Employee API: Custom Exception Hierarchy
==========================================

What:  Application-specific exceptions for the error scenarios the API reports.
How:   Each exception carries a user-facing message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and return
       the JSON error envelope with the matching HTTP status code.
Who:   Raised by the validation module and services; caught by global handlers.

Exception Hierarchy:
    EmployeeAPIError (base)
    ├── ValidationError          → 400 Bad Request (missing/invalid field)
    ├── InvalidIdentifierError   → 400 Bad Request (malformed employee id)
    ├── NotFoundError            → 404 Not Found
    └── DatabaseError            → 500 Internal Server Error
"""

from typing import Any, Dict, List, Optional


class EmployeeAPIError(Exception):
    """
    Base exception for all Employee API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, only exposed in development)
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


class ValidationError(EmployeeAPIError):
    """
    Raised when a request body fails the employee field rules.

    `errors` holds one human-readable message per offending field, e.g.
    ["Employee name is required", "Salary cannot be negative"].

    Example response:
        {
            "success": false,
            "message": "Please provide all required fields: name, position, location, salary",
            "errors": ["Employee name is required"]
        }
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation Error",
        errors: Optional[List[str]] = None,
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.errors = list(errors or [])
        self.field = field


class InvalidIdentifierError(EmployeeAPIError):
    """Raised when a path or body id is not a well-formed employee identifier."""

    status_code = 400

    def __init__(self, raw_id: Any = None, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["raw_id"] = raw_id
        super().__init__(message="Invalid employee ID format", context=ctx)


class NotFoundError(EmployeeAPIError):
    """
    Raised when a well-formed identifier matches no record.

    SQLAlchemy returns None for missing rows; the service layer converts that
    None into this exception so routes stay free of status-code logic.
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "Employee",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)


class DatabaseError(EmployeeAPIError):
    """
    Raised when a database operation fails unexpectedly.

    The client sees "Server Error"; the driver's own message is kept in
    context["original_error"] and only returned when running in development.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
