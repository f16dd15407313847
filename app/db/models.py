"""
==============================================================================
SQLAlchemy ORM Models Module
==============================================================================

ORM models for the catalog service.

This module defines:
- UserRole: Enum for access levels
- User: Account used by the role-gated API
- Product: Catalog record

Database Schema:
---------------

    ┌─────────────────────────────────────────────────────────────────┐
    │                           users                                  │
    ├─────────────────────────────────────────────────────────────────┤
    │ id (UUID, PK)                                                   │
    │ username (VARCHAR, UNIQUE, NOT NULL)                            │
    │ password_hash (VARCHAR, NOT NULL)                               │
    │ role (ENUM: admin, user)                                        │
    │ is_active (BOOLEAN, DEFAULT true)                               │
    │ created_at (DATETIME, DEFAULT now)                              │
    │ updated_at (DATETIME, AUTO UPDATE)                              │
    └─────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────┐
    │                          products                                │
    ├─────────────────────────────────────────────────────────────────┤
    │ id (INTEGER, PK, AUTO INCREMENT)                                │
    │ name (VARCHAR(100), NOT NULL)                                   │
    │ description (VARCHAR(255), NULLABLE)                            │
    │ price (NUMERIC(12, 2), NOT NULL)                                │
    │ stock (INTEGER, NOT NULL)                                       │
    └─────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from __future__ import annotations

import enum
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    Integer,
    Numeric,
    String,
    func,
)

from app.db.database import Base


# =============================================================================
# ENUMS
# =============================================================================

class UserRole(str, enum.Enum):
    """
    User role enumeration.

    - ADMIN: elevated role, may create, update and delete products
    - USER: standard role, read-only catalog access

    The enum inherits from str to enable JSON serialization.
    """

    ADMIN = "admin"
    USER = "user"

    def __str__(self) -> str:
        return self.value


# =============================================================================
# USER MODEL
# =============================================================================

class User(Base):
    """
    User account model.

    Attributes:
        id: Unique identifier (UUID)
        username: Unique login name (lowercase)
        password_hash: Bcrypt hashed password
        role: Access level (admin/user)
        is_active: Account status
        created_at: Account creation timestamp
        updated_at: Last modification timestamp
    """

    __tablename__ = "users"

    id: str = Column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        doc="Unique user identifier (UUID)"
    )

    username: str = Column(
        String(50),
        unique=True,
        nullable=False,
        index=True,
        doc="Unique login name (lowercase)"
    )

    password_hash: str = Column(
        String(255),
        nullable=False,
        doc="Bcrypt hashed password"
    )

    role: UserRole = Column(
        Enum(UserRole),
        default=UserRole.USER,
        nullable=False,
        doc="User role for access control"
    )

    is_active: bool = Column(
        Boolean,
        default=True,
        nullable=False,
        doc="Account status"
    )

    created_at: datetime = Column(
        DateTime,
        default=func.now(),
        nullable=False,
        doc="Account creation timestamp"
    )

    updated_at: datetime = Column(
        DateTime,
        default=func.now(),
        onupdate=func.now(),
        nullable=False,
        doc="Last modification timestamp"
    )

    @property
    def is_admin(self) -> bool:
        """Check if user has the elevated role."""
        return self.role == UserRole.ADMIN

    def __repr__(self) -> str:
        return (
            f"User(id={self.id!r}, "
            f"username={self.username!r}, "
            f"role={self.role.value!r}, "
            f"is_active={self.is_active})"
        )

    def __str__(self) -> str:
        return f"{self.username} ({self.role.value})"


# =============================================================================
# PRODUCT MODEL
# =============================================================================

class Product(Base):
    """
    Catalog product record.

    Equality and hashing are identifier based: two products are equal when
    their ids are equal, regardless of the other columns. A product that has
    not been flushed yet (id is None) is only equal to itself.

    Attributes:
        id: Store-assigned identifier, None until first flush
        name: Display name (1-100 characters, not blank)
        description: Optional free text (up to 255 characters)
        price: Unit price, positive, two decimal places
        stock: Units on hand, zero or more

    Example:
        >>> product = Product(name="Widget", price=Decimal("9.99"), stock=3)
        >>> session.add(product)
        >>> session.commit()
        >>> product.id
        1
    """

    __tablename__ = "products"

    id: Optional[int] = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
        doc="Store-assigned product identifier"
    )

    name: str = Column(
        String(100),
        nullable=False,
        doc="Product display name"
    )

    description: Optional[str] = Column(
        String(255),
        nullable=True,
        doc="Optional product description"
    )

    price: Decimal = Column(
        Numeric(12, 2),
        nullable=False,
        doc="Unit price"
    )

    stock: int = Column(
        Integer,
        nullable=False,
        doc="Units on hand"
    )

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Product):
            return NotImplemented
        if self.id is None or other.id is None:
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        if self.id is None:
            return object.__hash__(self)
        return hash((Product, self.id))

    def __repr__(self) -> str:
        return (
            f"Product(id={self.id!r}, "
            f"name={self.name!r}, "
            f"description={self.description!r}, "
            f"price={self.price!r}, "
            f"stock={self.stock!r})"
        )
