"""
==============================================================================
Database Initialization Tests
==============================================================================

Default account seeding at startup.

==============================================================================
"""

from sqlalchemy.orm import Session

from app.core.security import get_security_manager
from app.db.init_db import DatabaseInitializer
from app.db.models import User, UserRole


class TestAccountSeeding:

    def test_seeds_admin_and_standard_user(self, db: Session):
        initializer = DatabaseInitializer(session=db)

        admin = initializer.create_default_admin()
        user = initializer.create_default_user()

        assert admin.role == UserRole.ADMIN
        assert user.role == UserRole.USER
        assert get_security_manager().verify_password("admin123", admin.password_hash)
        assert db.query(User).count() == 2

    def test_seeding_is_idempotent(self, db: Session):
        initializer = DatabaseInitializer(session=db)
        initializer.create_default_admin()
        initializer.create_default_user()

        assert initializer.create_default_admin() is None
        assert initializer.create_default_user() is None
        assert db.query(User).count() == 2

    def test_existing_admin_skips_seeding(self, db: Session, admin_user: User):
        assert DatabaseInitializer(session=db).create_default_admin() is None
