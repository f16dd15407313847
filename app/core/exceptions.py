"""
Application Exception Handling

Single AppException class for all API errors with FastAPI integration.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


# Module logger
logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


class AppException(Exception):
    """
    Unified application exception for all error scenarios.

    Provides consistent error response format across the entire API.

    Usage:
        raise AppException("Invalid credentials", "INVALID_CREDENTIALS", 401)
        raise AppException("Validation failed", "VALIDATION_ERROR", 400, {"name": "..."})

    Error Codes:
        Authentication:
            - INVALID_CREDENTIALS (401)
            - TOKEN_EXPIRED (401)
            - TOKEN_INVALID (401)
            - ACCOUNT_DISABLED (403)

        Authorization:
            - FORBIDDEN (403)
            - ADMIN_REQUIRED (403)

        Catalog:
            - VALIDATION_ERROR (400)
            - PRODUCT_NOT_FOUND (400 on update/delete, 404 on read)

        General:
            - USER_NOT_FOUND (401)
            - INTERNAL_ERROR (500)
    """

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize application exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "PRODUCT_NOT_FOUND")
            status_code: HTTP status code (default: 400)
            details: Additional error context (optional)
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        error_dict = {
            "success": False,
            "error": {
                "code": self.code,
                "message": self.message,
                "timestamp": self.timestamp
            }
        }

        if self.details:
            error_dict["error"]["details"] = self.details

        return error_dict


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Convert AppException to its JSON error response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def request_validation_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Report unparseable bodies and query parameters as field errors.

    The last element of each error location is the offending field.
    """
    errors: Dict[str, str] = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = location[-1] if location else "body"
        errors.setdefault(field, error.get("msg", "Invalid value"))

    logger.warning(f"Request validation failed on {request.url.path}: {errors}")
    return await app_exception_handler(request, validation_failed(errors))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the full error server-side and return a generic 500."""
    logger.error(f"Unexpected error on {request.method} {request.url.path}", exc_info=exc)
    return await app_exception_handler(request, internal_error())


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


# ============================================
# CONVENIENCE FACTORY FUNCTIONS
# ============================================

def invalid_credentials() -> AppException:
    """Create invalid credentials exception."""
    return AppException("Invalid username or password", "INVALID_CREDENTIALS", 401)


def token_expired() -> AppException:
    """Create token expired exception."""
    return AppException("Token has expired", "TOKEN_EXPIRED", 401)


def token_invalid() -> AppException:
    """Create invalid token exception."""
    return AppException("Invalid or malformed token", "TOKEN_INVALID", 401)


def account_disabled() -> AppException:
    """Create account disabled exception."""
    return AppException("Account has been disabled", "ACCOUNT_DISABLED", 403)


def forbidden(message: str = "Access denied") -> AppException:
    """Create forbidden access exception."""
    return AppException(message, "FORBIDDEN", 403)


def admin_required() -> AppException:
    """Create admin role required exception."""
    return AppException("Admin role required", "ADMIN_REQUIRED", 403)


def user_not_found(user_id: Optional[str] = None) -> AppException:
    """Create exception for a token whose user no longer exists."""
    details = {"user_id": user_id} if user_id else {}
    return AppException("User not found", "USER_NOT_FOUND", 401, details)


def validation_failed(errors: Dict[str, str]) -> AppException:
    """Create validation exception carrying a field -> message mapping."""
    return AppException("Validation failed", "VALIDATION_ERROR", 400, dict(errors))


def product_not_found(product_id: int, status_code: int = 400) -> AppException:
    """
    Create product not found exception.

    Update and delete report a missing product as a bad request; reads
    pass ``status_code=404``.
    """
    return AppException(
        f"Product not found with id: {product_id}",
        "PRODUCT_NOT_FOUND",
        status_code,
        {"product_id": product_id}
    )


def internal_error(message: str = GENERIC_ERROR_MESSAGE) -> AppException:
    """Create internal server error exception."""
    return AppException(message, "INTERNAL_ERROR", 500)
