"""
==============================================================================
Database Package
==============================================================================

SQLAlchemy database infrastructure, ORM models and data access.

Architecture:
------------
├── database.py    - DatabaseManager class, session factory
├── models.py      - User and Product ORM models
├── repository.py  - ProductRepository queries
└── init_db.py     - DatabaseInitializer for startup

Usage:
------
    from app.db import DatabaseManager, Product, ProductRepository

    db_manager = DatabaseManager()
    session = db_manager.get_session()
    products = ProductRepository(session).find_all()

==============================================================================
"""

from .database import DatabaseManager, Base, get_db
from .models import User, UserRole, Product
from .repository import ProductRepository
from .init_db import DatabaseInitializer, init_db

__all__ = [
    # Database management
    "DatabaseManager",
    "Base",
    "get_db",
    # Models
    "User",
    "UserRole",
    "Product",
    # Data access
    "ProductRepository",
    # Initialization
    "DatabaseInitializer",
    "init_db",
]
