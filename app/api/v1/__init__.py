"""
==============================================================================
API v1 Endpoints
==============================================================================

Version 1 of the REST API.

Routers:
--------
- health: Health check endpoints
- auth: Authentication endpoints
- products: Product catalog CRUD and search

==============================================================================
"""

from . import health, auth, products

__all__ = ["health", "auth", "products"]
