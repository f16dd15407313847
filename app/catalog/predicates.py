"""
==============================================================================
Product Query Predicates Module
==============================================================================

The read filters of the catalog, each defined once and usable two ways:

- ``matches(product)`` evaluates the filter in memory
- ``clause()`` renders the same filter as a SQLAlchemy WHERE expression

Filter Semantics:
----------------
    name_contains(q)              q found anywhere in name, ignoring case
    price_at_least(floor)         price >= floor        (inclusive)
    stock_less_than(ceiling)      stock <  ceiling      (exclusive)
    price_between(low, high)      low <= price <= high  (inclusive)
    stock_greater_than(n)         stock >  n            (exclusive)
    name_and_stock_above(q, n)    name_contains(q) AND stock_greater_than(n)

Filters combine with ``&``. None of them orders the results.

==============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Tuple

from sqlalchemy import and_, true
from sqlalchemy.sql.elements import ColumnElement

from app.db.models import Product


class ProductPredicate:
    """
    Base class for product filters.

    Example:
        >>> cheap_and_scarce = price_between(Decimal("1"), Decimal("5")) & stock_less_than(3)
        >>> cheap_and_scarce.matches(product)
        True
        >>> session.query(Product).filter(cheap_and_scarce.clause())
    """

    def matches(self, product: Product) -> bool:
        raise NotImplementedError

    def clause(self) -> ColumnElement:
        raise NotImplementedError

    def __and__(self, other: ProductPredicate) -> ProductPredicate:
        if not isinstance(other, ProductPredicate):
            return NotImplemented
        return AllOf((self, other))

    def __call__(self, product: Product) -> bool:
        return self.matches(product)


@dataclass(frozen=True)
class MatchAll(ProductPredicate):
    """Accepts every product."""

    def matches(self, product: Product) -> bool:
        return True

    def clause(self) -> ColumnElement:
        return true()


@dataclass(frozen=True)
class NameContains(ProductPredicate):
    """Case-insensitive substring match on the name."""

    query: str

    def matches(self, product: Product) -> bool:
        if product.name is None:
            return False
        return self.query.lower() in product.name.lower()

    def clause(self) -> ColumnElement:
        # autoescape keeps '%' and '_' in the query literal
        return Product.name.icontains(self.query, autoescape=True)


@dataclass(frozen=True)
class PriceAtLeast(ProductPredicate):
    floor: Decimal

    def matches(self, product: Product) -> bool:
        return product.price >= self.floor

    def clause(self) -> ColumnElement:
        return Product.price >= self.floor


@dataclass(frozen=True)
class PriceBetween(ProductPredicate):
    """Inclusive on both ends; an inverted range matches nothing."""

    low: Decimal
    high: Decimal

    def matches(self, product: Product) -> bool:
        return self.low <= product.price <= self.high

    def clause(self) -> ColumnElement:
        return Product.price.between(self.low, self.high)


@dataclass(frozen=True)
class StockLessThan(ProductPredicate):
    ceiling: int

    def matches(self, product: Product) -> bool:
        return product.stock < self.ceiling

    def clause(self) -> ColumnElement:
        return Product.stock < self.ceiling


@dataclass(frozen=True)
class StockGreaterThan(ProductPredicate):
    threshold: int

    def matches(self, product: Product) -> bool:
        return product.stock > self.threshold

    def clause(self) -> ColumnElement:
        return Product.stock > self.threshold


@dataclass(frozen=True)
class AllOf(ProductPredicate):
    """Conjunction of other predicates."""

    parts: Tuple[ProductPredicate, ...]

    def matches(self, product: Product) -> bool:
        return all(part.matches(product) for part in self.parts)

    def clause(self) -> ColumnElement:
        return and_(*(part.clause() for part in self.parts))

    def __and__(self, other: ProductPredicate) -> ProductPredicate:
        if not isinstance(other, ProductPredicate):
            return NotImplemented
        return AllOf(self.parts + (other,))


# =============================================================================
# FACTORY FUNCTIONS
# =============================================================================

def match_all() -> ProductPredicate:
    return MatchAll()


def name_contains(query: str) -> ProductPredicate:
    return NameContains(query)


def price_at_least(floor: Decimal) -> ProductPredicate:
    return PriceAtLeast(floor)


def stock_less_than(ceiling: int) -> ProductPredicate:
    return StockLessThan(ceiling)


def price_between(low: Decimal, high: Decimal) -> ProductPredicate:
    return PriceBetween(low, high)


def stock_greater_than(threshold: int) -> ProductPredicate:
    return StockGreaterThan(threshold)


def name_and_stock_above(query: str, threshold: int) -> ProductPredicate:
    """Name contains ``query`` (any case) and stock is above ``threshold``."""
    return name_contains(query) & stock_greater_than(threshold)


def filter_products(
    products: Iterable[Product],
    predicate: ProductPredicate
) -> List[Product]:
    """Apply a predicate in memory, keeping the input order."""
    return [product for product in products if predicate.matches(product)]
