"""
==============================================================================
Product Repository Module
==============================================================================

Data access for the products table.

The repository issues queries and stages changes on the session it is
given; committing or rolling back is left to the caller, so one service
call maps to one transaction.

Filtered reads are built from the catalog predicates, which keeps the SQL
and the in-memory semantics identical.

==============================================================================
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.catalog import predicates
from app.db.models import Product


# Module logger
logger = logging.getLogger(__name__)


class ProductRepository:
    """
    Session-bound repository for ``Product`` rows.

    Example:
        >>> repo = ProductRepository(session)
        >>> product = repo.save(Product(name="Widget", price=Decimal("9.99"), stock=3))
        >>> session.commit()
        >>> repo.find_by_price_between(Decimal("5"), Decimal("10"))
        [Product(id=1, ...)]
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    # =========================================================================
    # BASIC OPERATIONS
    # =========================================================================

    def find_all(self) -> List[Product]:
        return self.find_where(predicates.match_all())

    def find_by_id(self, product_id: int) -> Optional[Product]:
        return self._db.get(Product, product_id)

    def exists_by_id(self, product_id: int) -> bool:
        query = select(Product.id).where(Product.id == product_id)
        return self._db.execute(query).first() is not None

    def save(self, product: Product) -> Product:
        """
        Stage a new or modified product and flush it.

        The flush assigns the identifier of a new row without committing.
        """
        self._db.add(product)
        self._db.flush()
        return product

    def delete_by_id(self, product_id: int) -> None:
        product = self.find_by_id(product_id)
        if product is not None:
            self._db.delete(product)
            self._db.flush()
            logger.debug(f"Product staged for removal: {product_id}")

    def count(self) -> int:
        return self._db.query(Product).count()

    # =========================================================================
    # FILTERED READS
    # =========================================================================

    def find_where(self, predicate: predicates.ProductPredicate) -> List[Product]:
        """Return all products matching the predicate, unsorted."""
        query = select(Product).where(predicate.clause())
        return list(self._db.execute(query).scalars().all())

    def find_by_name_containing_ignore_case(self, name: str) -> List[Product]:
        return self.find_where(predicates.name_contains(name))

    def find_by_price_greater_than_equal(self, price: Decimal) -> List[Product]:
        return self.find_where(predicates.price_at_least(price))

    def find_by_stock_less_than(self, stock: int) -> List[Product]:
        return self.find_where(predicates.stock_less_than(stock))

    def find_by_price_between(
        self,
        min_price: Decimal,
        max_price: Decimal
    ) -> List[Product]:
        return self.find_where(predicates.price_between(min_price, max_price))

    def find_by_name_and_stock_greater_than(
        self,
        name: str,
        stock: int
    ) -> List[Product]:
        return self.find_where(predicates.name_and_stock_above(name, stock))
