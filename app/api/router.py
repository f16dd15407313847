"""
==============================================================================
Main API Router
==============================================================================

Combines all v1 API routes under /api/v1 prefix.

==============================================================================
"""

from fastapi import APIRouter

from app.api.v1 import health, auth, products


def create_api_router() -> APIRouter:
    """Build the /api/v1 router with health, auth and product routes."""
    router = APIRouter(prefix="/api/v1")
    for module in (health, auth, products):
        router.include_router(module.router)
    return router


api_router = create_api_router()
