"""
==============================================================================
Product Validation Module
==============================================================================

Field rules a product must satisfy before it is written.

Validation Rules:
----------------
- name:        required, not blank, at most 100 characters
- description: optional, at most 255 characters
- price:       required, greater than 0, at most 10 integer digits and
               2 fractional digits (never rounded)
- stock:       required, zero or more, fits a 32-bit integer column

Every rule runs on every call; the result holds all violations found.
Nothing here touches the database.

==============================================================================
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional, Set

from .models import ProductFields, Violation


# Range of the integer columns (stock, product id)
INTEGER_MIN = -2 ** 31
INTEGER_MAX = 2 ** 31 - 1


class ProductValidator:
    """
    Validator for product payloads.

    Example:
        >>> validator = ProductValidator()
        >>> validator.validate(payload)
        set()
        >>> validator.is_valid(payload)
        True
    """

    NAME_MAX_LENGTH = 100
    DESCRIPTION_MAX_LENGTH = 255
    PRICE_INTEGER_DIGITS = 10
    PRICE_FRACTION_DIGITS = 2

    NAME_REQUIRED = "Product name is required"
    NAME_TOO_LONG = f"Product name must be at most {NAME_MAX_LENGTH} characters"
    DESCRIPTION_TOO_LONG = f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters"
    PRICE_REQUIRED = "Price is required"
    PRICE_NOT_POSITIVE = "Price must be greater than 0"
    PRICE_BAD_PRECISION = "Price must be a valid monetary amount"
    STOCK_REQUIRED = "Stock is required"
    STOCK_NEGATIVE = "Stock cannot be negative"
    STOCK_TOO_LARGE = f"Stock must be at most {INTEGER_MAX}"

    def validate(self, candidate: ProductFields) -> Set[Violation]:
        """
        Check a candidate against every field rule.

        Args:
            candidate: Object exposing name, description, price and stock

        Returns:
            Set of violations, empty when the candidate may be persisted
        """
        violations: Set[Violation] = set()
        violations.update(self._check_name(candidate.name))
        violations.update(self._check_description(candidate.description))
        violations.update(self._check_price(candidate.price))
        violations.update(self._check_stock(candidate.stock))
        return violations

    def is_valid(self, candidate: ProductFields) -> bool:
        """Quick validation check."""
        return not self.validate(candidate)

    # =========================================================================
    # FIELD RULES
    # =========================================================================

    def _check_name(self, name: Optional[str]) -> Set[Violation]:
        if name is None:
            return {Violation("name", self.NAME_REQUIRED)}

        violations = set()
        if not name.strip():
            violations.add(Violation("name", self.NAME_REQUIRED))
        if len(name) > self.NAME_MAX_LENGTH:
            violations.add(Violation("name", self.NAME_TOO_LONG))
        return violations

    def _check_description(self, description: Optional[str]) -> Set[Violation]:
        if description is not None and len(description) > self.DESCRIPTION_MAX_LENGTH:
            return {Violation("description", self.DESCRIPTION_TOO_LONG)}
        return set()

    def _check_price(self, price: Optional[Decimal]) -> Set[Violation]:
        if price is None:
            return {Violation("price", self.PRICE_REQUIRED)}

        if not isinstance(price, Decimal):
            price = Decimal(str(price))

        # NaN and infinities cannot be ordered against zero
        if not price.is_finite():
            return {Violation("price", self.PRICE_BAD_PRECISION)}

        violations = set()
        if price <= 0:
            violations.add(Violation("price", self.PRICE_NOT_POSITIVE))
        if not self.has_monetary_precision(price):
            violations.add(Violation("price", self.PRICE_BAD_PRECISION))
        return violations

    def _check_stock(self, stock: Optional[int]) -> Set[Violation]:
        if stock is None:
            return {Violation("stock", self.STOCK_REQUIRED)}
        if stock < 0:
            return {Violation("stock", self.STOCK_NEGATIVE)}
        if stock > INTEGER_MAX:
            return {Violation("stock", self.STOCK_TOO_LARGE)}
        return set()

    @classmethod
    def has_monetary_precision(cls, value: Decimal) -> bool:
        """
        Check the digit budget of a finite decimal.

        Trailing zeros are not significant: ``10.500`` has one fractional
        digit and ``1E+3`` has four integer digits.

        Example:
            >>> ProductValidator.has_monetary_precision(Decimal("19.99"))
            True
            >>> ProductValidator.has_monetary_precision(Decimal("19.999"))
            False
        """
        if value.is_zero():
            return True

        _, digits, exponent = value.normalize().as_tuple()
        fraction_digits = max(0, -exponent)
        integer_digits = max(0, len(digits) + exponent)

        return (
            integer_digits <= cls.PRICE_INTEGER_DIGITS
            and fraction_digits <= cls.PRICE_FRACTION_DIGITS
        )


def validate_product(candidate: ProductFields) -> Set[Violation]:
    """
    Convenience function to validate a product payload.

    Args:
        candidate: Object exposing name, description, price and stock

    Returns:
        Set of violations (empty when valid)
    """
    return ProductValidator().validate(candidate)
