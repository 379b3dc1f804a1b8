# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error response uses the same envelope as successful responses:
#   {"success": false, "message": ..., "code": ...}
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class BaakhException(Exception):
    """
    Base exception for the Baakh API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "BAAKH_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result: dict[str, Any] = {
            "success": False,
            "message": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Lookup Exceptions
# =============================================================================

class ResourceNotFoundError(BaakhException):
    """Raised when a row doesn't exist (or has been soft-deleted)."""

    def __init__(self, resource: str, identifier: str | int):
        super().__init__(
            message=f"{resource} not found",
            code=f"{resource.upper().replace(' ', '_')}_NOT_FOUND",
            status_code=404,
            suggestion=f"Check that the {resource.lower()} id or slug is correct",
            details={"id": str(identifier)},
        )


# =============================================================================
# Input Exceptions
# =============================================================================

class MissingFieldsError(BaakhException):
    """Raised when a create request lacks required fields."""

    def __init__(self, message: str, fields: list[str]):
        super().__init__(
            message=message,
            code="MISSING_FIELDS",
            status_code=400,
            suggestion=f"Provide values for: {', '.join(fields)}",
            details={"fields": fields},
        )


class InvalidParameterError(BaakhException):
    """Raised when a query or body parameter has an unsupported value."""

    def __init__(self, name: str, value: Any, allowed: list[str] | None = None):
        suggestion = f"Use one of: {', '.join(allowed)}" if allowed else None
        super().__init__(
            message=f"Invalid value for '{name}': {value}",
            code="INVALID_PARAMETER",
            status_code=400,
            suggestion=suggestion,
            details={"parameter": name, "value": str(value)},
        )


# =============================================================================
# Auth Exceptions
# =============================================================================

class AdminRequiredError(BaakhException):
    """Raised when a non-admin user calls an admin endpoint."""

    def __init__(self, user_id: str):
        super().__init__(
            message="Admin or editor access required",
            code="ADMIN_REQUIRED",
            status_code=403,
            suggestion="Sign in with an account that has admin or editor rights",
            details={"user_id": user_id},
        )


# =============================================================================
# Database Exceptions
# =============================================================================

class DatabaseError(BaakhException):
    """Raised when a Supabase query fails."""

    def __init__(self, action: str, error: str):
        super().__init__(
            message=f"Failed to {action}",
            code="DATABASE_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"error": error},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def baakh_exception_handler(
    request: Request,
    exc: BaakhException
) -> JSONResponse:
    """Convert BaakhException to JSON response."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message} {exc.details}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def supabase_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Translate SupabaseClientError raised below the service layer into a
    DatabaseError response.

    These are always server-side failures, so they map to 500.
    """
    logger.error(f"{request.method} {request.url.path} database error: {exc}")
    error = DatabaseError("complete the database request", getattr(exc, "message", str(exc)))
    error.details["code"] = getattr(exc, "code", "SUPABASE_ERROR")
    return JSONResponse(
        status_code=error.status_code,
        content=error.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle request validation errors."""
    errors = jsonable_encoder(exc.errors()) if hasattr(exc, "errors") else str(exc)
    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "message": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }
    )
