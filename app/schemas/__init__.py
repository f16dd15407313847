"""
==============================================================================
Schemas Package - Pydantic Models
==============================================================================

Request and response schemas using Pydantic.

This package provides:
- Common: Error response schemas
- Auth: Authentication schemas
- Product: Catalog payload and response schemas

==============================================================================
"""

from .common import ErrorBody, ErrorResponse, ERROR_RESPONSES
from .auth import (
    LoginRequest,
    TokenResponse,
    RefreshRequest,
    UserInfo,
    CurrentUserInfo,
    CurrentUserResponse,
)
from .product import ProductRequest, ProductResponse

__all__ = [
    # Common
    "ErrorBody",
    "ErrorResponse",
    "ERROR_RESPONSES",
    # Auth
    "LoginRequest",
    "TokenResponse",
    "RefreshRequest",
    "UserInfo",
    "CurrentUserInfo",
    "CurrentUserResponse",
    # Product
    "ProductRequest",
    "ProductResponse",
]
