"""
==============================================================================
Catalog Package - Validation and Query Core
==============================================================================

Framework-free rules of the product catalog.

Modules:
--------
- models: Violation and the ProductFields protocol
- validation: ProductValidator field rules
- predicates: composable read filters (in memory and SQL)

==============================================================================
"""

from .models import ProductFields, Violation, violations_to_dict
from .validation import INTEGER_MAX, INTEGER_MIN, ProductValidator, validate_product
from .predicates import (
    ProductPredicate,
    filter_products,
    match_all,
    name_contains,
    price_at_least,
    stock_less_than,
    price_between,
    stock_greater_than,
    name_and_stock_above,
)

__all__ = [
    "ProductFields",
    "Violation",
    "violations_to_dict",
    "ProductValidator",
    "validate_product",
    "INTEGER_MIN",
    "INTEGER_MAX",
    "ProductPredicate",
    "filter_products",
    "match_all",
    "name_contains",
    "price_at_least",
    "stock_less_than",
    "price_between",
    "stock_greater_than",
    "name_and_stock_above",
]
