"""
==============================================================================
Common Schemas Module
==============================================================================

Shared response schemas used across API endpoints.

==============================================================================
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


class ErrorBody(BaseModel):
    """Error payload produced by AppException.to_dict()."""
    code: str
    message: str
    timestamp: str
    details: Optional[Dict[str, Any]] = None


class ErrorResponse(BaseModel):
    """Standard error response wrapper."""
    success: bool = Field(default=False)
    error: ErrorBody


# OpenAPI documentation for the error statuses a route can return
ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Validation failed or product not found"},
    401: {"model": ErrorResponse, "description": "Missing or invalid token"},
    403: {"model": ErrorResponse, "description": "Role not permitted"},
    500: {"model": ErrorResponse, "description": "Unexpected server error"},
}
