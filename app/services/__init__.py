"""
==============================================================================
Services Package - Business Logic Layer
==============================================================================

Service classes sitting between the API routers and the data layer.

    ┌─────────────────┐
    │   API Router    │  ← role checks, HTTP mapping
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │    Service      │  ← validation, transactions, outcomes
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │   Repository    │  ← queries (SQLAlchemy)
    └─────────────────┘

This package provides:
- AuthService: login and token refresh
- ProductService: catalog reads and mutations
- results: Ok / ValidationFailed / NotFound / Unclassified outcomes

==============================================================================
"""

from .auth_service import AuthService
from .product_service import ProductService
from .results import MutationResult, NotFound, Ok, Unclassified, ValidationFailed

__all__ = [
    "AuthService",
    "ProductService",
    "MutationResult",
    "Ok",
    "ValidationFailed",
    "NotFound",
    "Unclassified",
]
