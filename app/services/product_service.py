"""
==============================================================================
Product Service Module
==============================================================================

Business logic for the product catalog.

This module implements:
- ProductService: reads and validated mutations of catalog records

Mutation Flow:
-------------
    create(payload)
        validate ──▶ ValidationFailed
           │
           ▼
        save + commit ──▶ Ok(product)

    update(id, payload)
        validate ──▶ ValidationFailed      (checked before existence)
           │
           ▼
        find_by_id ──▶ NotFound(id)
           │
           ▼
        copy fields (id kept) + commit ──▶ Ok(product)

    delete(id)
        exists_by_id ──▶ NotFound(id)
           │
           ▼
        delete_by_id + commit ──▶ Ok(None)

Any SQLAlchemy error rolls the transaction back and becomes
Unclassified(error). Nothing is retried.

==============================================================================
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.catalog.models import ProductFields
from app.catalog.validation import ProductValidator
from app.db.models import Product
from app.db.repository import ProductRepository
from app.services.results import (
    MutationResult,
    NotFound,
    Ok,
    Unclassified,
    ValidationFailed,
)


# Module logger
logger = logging.getLogger(__name__)


class ProductService:
    """
    Catalog service combining validation, queries and persistence.

    Attributes:
        _db: Database session owning the transaction
        _repository: ProductRepository bound to the same session
        _validator: ProductValidator applied before every write

    Example:
        >>> service = ProductService(db_session)
        >>> result = service.create_product(payload)
        >>> if isinstance(result, Ok):
        ...     print(result.value.id)
    """

    def __init__(
        self,
        db: Session,
        repository: Optional[ProductRepository] = None,
        validator: Optional[ProductValidator] = None
    ) -> None:
        self._db = db
        self._repository = repository or ProductRepository(db)
        self._validator = validator or ProductValidator()

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    def get_all_products(self) -> List[Product]:
        return self._repository.find_all()

    def get_product_by_id(self, product_id: int) -> Optional[Product]:
        """Return the product, or None when no such id exists."""
        return self._repository.find_by_id(product_id)

    def search_products_by_name(self, name: str) -> List[Product]:
        return self._repository.find_by_name_containing_ignore_case(name)

    def find_products_by_price_greater_than_equal(self, price: Decimal) -> List[Product]:
        return self._repository.find_by_price_greater_than_equal(price)

    def find_products_by_stock_less_than(self, stock: int) -> List[Product]:
        return self._repository.find_by_stock_less_than(stock)

    def find_products_by_price_between(
        self,
        min_price: Decimal,
        max_price: Decimal
    ) -> List[Product]:
        return self._repository.find_by_price_between(min_price, max_price)

    def find_products_by_name_and_stock_greater_than(
        self,
        name: str,
        stock: int
    ) -> List[Product]:
        return self._repository.find_by_name_and_stock_greater_than(name, stock)

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def create_product(self, payload: ProductFields) -> MutationResult[Product]:
        """
        Validate and persist a new product.

        Args:
            payload: Field values; any id on the payload is ignored

        Returns:
            Ok(product) with the assigned id, or ValidationFailed/Unclassified
        """
        violations = self._validator.validate(payload)
        if violations:
            return self._rejected("create", violations)

        product = Product(
            name=payload.name,
            description=payload.description,
            price=payload.price,
            stock=payload.stock
        )

        try:
            self._repository.save(product)
            self._db.commit()
            self._db.refresh(product)
        except SQLAlchemyError as e:
            return self._failed("create", e)

        logger.info(f"✅ Product created: id={product.id}, name={product.name!r}")
        return Ok(product)

    def update_product(
        self,
        product_id: int,
        payload: ProductFields
    ) -> MutationResult[Product]:
        """
        Replace every field of an existing product except its id.

        The payload is validated before the lookup, so an invalid payload
        for a missing id reports ValidationFailed.
        """
        violations = self._validator.validate(payload)
        if violations:
            return self._rejected("update", violations)

        try:
            product = self._repository.find_by_id(product_id)
            if product is None:
                logger.warning(f"Update failed: product not found - {product_id}")
                return NotFound(product_id)

            product.name = payload.name
            product.description = payload.description
            product.price = payload.price
            product.stock = payload.stock

            self._repository.save(product)
            self._db.commit()
            self._db.refresh(product)
        except SQLAlchemyError as e:
            return self._failed("update", e)

        logger.info(f"✅ Product updated: id={product.id}")
        return Ok(product)

    def delete_product(self, product_id: int) -> MutationResult[None]:
        """Remove a product; a missing id leaves the store untouched."""
        try:
            if not self._repository.exists_by_id(product_id):
                logger.warning(f"Delete failed: product not found - {product_id}")
                return NotFound(product_id)

            self._repository.delete_by_id(product_id)
            self._db.commit()
        except SQLAlchemyError as e:
            return self._failed("delete", e)

        logger.info(f"✅ Product deleted: id={product_id}")
        return Ok(None)

    # =========================================================================
    # HELPERS
    # =========================================================================

    @staticmethod
    def _rejected(operation: str, violations) -> ValidationFailed:
        result = ValidationFailed(frozenset(violations))
        logger.warning(f"Product {operation} rejected: {result.errors}")
        return result

    def _failed(self, operation: str, error: SQLAlchemyError) -> Unclassified:
        self._db.rollback()
        logger.error(f"Product {operation} failed in the data store", exc_info=error)
        return Unclassified(error)
