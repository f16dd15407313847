"""
==============================================================================
Database Initialization Module
==============================================================================

Startup setup for the catalog database.

Initialization Flow:
-------------------
1. Create all tables from ORM models
2. Create the default admin account if no admin exists
3. Create the default standard account if it is configured and missing
4. Verify the connection

Security Notes:
--------------
- Seeded credentials come from settings and should be changed immediately
- Passwords are hashed before storage

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.db.database import DatabaseManager
from app.db.models import User, UserRole
from app.core.security import get_security_manager


# Module logger
logger = logging.getLogger(__name__)


class DatabaseInitializer:
    """
    Database initialization manager.

    Example:
        >>> initializer = DatabaseInitializer()
        >>> initializer.initialize()
    """

    def __init__(
        self,
        db_manager: Optional[DatabaseManager] = None,
        session: Optional[Session] = None
    ) -> None:
        """
        Args:
            db_manager: Optional DatabaseManager instance (singleton if None)
            session: Optional existing session (creates new if None)
        """
        self._db_manager = db_manager or DatabaseManager()
        self._security = get_security_manager()
        self._settings = get_settings()
        self._session = session

    def _get_session(self) -> Session:
        if self._session is not None:
            return self._session
        return self._db_manager.get_session()

    # =========================================================================
    # TABLE OPERATIONS
    # =========================================================================

    def create_tables(self) -> None:
        """Create all database tables (idempotent)."""
        logger.info("Creating database tables...")
        self._db_manager.create_tables()
        logger.info("✅ Database tables created successfully")

    # =========================================================================
    # ACCOUNT SEEDING
    # =========================================================================

    def create_default_admin(self) -> Optional[User]:
        """
        Create the default admin user if no admin exists.

        Returns:
            Created User object, or None if an admin already exists
        """
        session = self._get_session()

        try:
            existing_admin = session.query(User).filter(
                User.role == UserRole.ADMIN
            ).first()

            if existing_admin:
                logger.info(f"Admin user already exists: {existing_admin.username}")
                return None

            admin_user = self._add_user(
                session,
                self._settings.default_admin_username,
                self._settings.default_admin_password,
                UserRole.ADMIN
            )

            logger.info(f"✅ Default admin user created: {admin_user.username}")
            logger.warning("⚠️ Please change the default admin password immediately!")
            return admin_user

        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Failed to create default admin: {e}")
            raise
        finally:
            if self._session is None:
                session.close()

    def create_default_user(self) -> Optional[User]:
        """
        Create the default standard user when configured and missing.

        Returns:
            Created User object, or None if seeding is disabled or the
            username is taken
        """
        username = self._settings.default_user_username
        if not username:
            return None

        session = self._get_session()

        try:
            existing = session.query(User).filter(
                User.username == username.lower()
            ).first()

            if existing:
                logger.info(f"Standard user already exists: {existing.username}")
                return None

            user = self._add_user(
                session,
                username,
                self._settings.default_user_password,
                UserRole.USER
            )

            logger.info(f"✅ Default standard user created: {user.username}")
            return user

        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Failed to create default user: {e}")
            raise
        finally:
            if self._session is None:
                session.close()

    def _add_user(
        self,
        session: Session,
        username: str,
        password: str,
        role: UserRole
    ) -> User:
        user = User(
            username=username.lower(),
            password_hash=self._security.hash_password(password),
            role=role,
            is_active=True
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    # =========================================================================
    # INITIALIZATION
    # =========================================================================

    def initialize(self) -> None:
        """Create tables and seed the default accounts."""
        logger.info("=" * 60)
        logger.info("Initializing database...")
        logger.info("=" * 60)

        self.create_tables()
        self.create_default_admin()
        self.create_default_user()
        logger.info("Database initialization complete")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def init_db() -> None:
    """
    Initialize the database at application startup.

    Usage:
        from app.db import init_db
        init_db()
    """
    initializer = DatabaseInitializer()
    initializer.initialize()
