"""
==============================================================================
Pytest Configuration and Fixtures
==============================================================================

Provides test database, client, authentication and catalog fixtures.

==============================================================================
"""

import pytest
from decimal import Decimal
from typing import Generator, Dict, List
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.database import Base, get_db
from app.db.models import Product, User, UserRole
from app.core.security import get_security_manager


# ============================================================================
# DATABASE FIXTURES
# ============================================================================

# In-memory SQLite for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """
    Create test client with database override.

    The client is not entered as a context manager, so the startup hook
    that initializes the configured database file never runs.
    """
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


# ============================================================================
# USER FIXTURES
# ============================================================================

def _create_user(db: Session, username: str, password: str, role: UserRole) -> User:
    user = User(
        username=username,
        password_hash=get_security_manager().hash_password(password),
        role=role,
        is_active=True
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin_user(db: Session) -> User:
    """Create an admin user in the test database."""
    return _create_user(db, "admin", "admin123", UserRole.ADMIN)


@pytest.fixture
def standard_user(db: Session) -> User:
    """Create a standard (read-only) user in the test database."""
    return _create_user(db, "user", "user1234", UserRole.USER)


# ============================================================================
# TOKEN FIXTURES
# ============================================================================

def _access_token(user: User) -> str:
    return get_security_manager().create_access_token({
        "sub": user.id,
        "username": user.username,
        "role": user.role.value
    })


@pytest.fixture
def admin_token(admin_user: User) -> str:
    """Create access token for admin user."""
    return _access_token(admin_user)


@pytest.fixture
def user_token(standard_user: User) -> str:
    """Create access token for standard user."""
    return _access_token(standard_user)


# ============================================================================
# HEADER FIXTURES
# ============================================================================

@pytest.fixture
def admin_headers(admin_token: str) -> Dict[str, str]:
    """Authorization headers for admin user."""
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def user_headers(user_token: str) -> Dict[str, str]:
    """Authorization headers for standard user."""
    return {"Authorization": f"Bearer {user_token}"}


# ============================================================================
# CATALOG FIXTURES
# ============================================================================

@pytest.fixture
def products(db: Session) -> List[Product]:
    """Seed a small catalog; returned in insertion order."""
    rows = [
        Product(name="Widget", description="Small widget", price=Decimal("10.00"), stock=5),
        Product(name="Gadget", description=None, price=Decimal("25.50"), stock=0),
        Product(name="Super Widget", description="Large widget", price=Decimal("99.99"), stock=20),
    ]
    db.add_all(rows)
    db.commit()
    for row in rows:
        db.refresh(row)
    return rows
