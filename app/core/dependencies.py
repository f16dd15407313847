"""
==============================================================================
FastAPI Dependencies Module
==============================================================================

Dependency injection for authentication and role-based authorization.

Dependency Hierarchy:
--------------------
                    ┌─────────────────┐
                    │    get_db()     │
                    └────────┬────────┘
                             │
                    ┌────────▼────────┐
                    │get_current_user │  → 401 when missing/invalid
                    └────────┬────────┘
                             │
              ┌──────────────┴──────────────┐
              │                             │
      ┌───────▼───────┐             ┌───────▼───────┐
      │ require_user  │             │ require_admin │  → 403 when
      │ (user, admin) │             │   (admin)     │    under-privileged
      └───────────────┘             └───────────────┘

Usage Examples:
--------------
    # Read access
    @router.get("/products")
    async def list_products(user: User = Depends(require_user)):
        ...

    # Write access
    @router.post("/products")
    async def create_product(admin: User = Depends(require_admin)):
        ...

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.db.database import get_db
from app.db.models import User, UserRole
from app.core.security import SecurityManager, get_security_manager
from app.core import exceptions


# Module logger
logger = logging.getLogger(__name__)

# HTTP Bearer security scheme for Swagger UI
security_scheme = HTTPBearer(auto_error=False)


class AuthenticationManager:
    """
    Manages user authentication and authorization.

    Example:
        >>> auth = AuthenticationManager(security_manager, db_session)
        >>> user = auth.get_current_user(credentials)
        >>> auth.require_role(user, UserRole.ADMIN)
    """

    def __init__(
        self,
        security: SecurityManager,
        db: Optional[Session]
    ) -> None:
        self._security = security
        self._db = db

    # =========================================================================
    # AUTHENTICATION
    # =========================================================================

    def extract_token_from_header(
        self,
        credentials: Optional[HTTPAuthorizationCredentials]
    ) -> str:
        """
        Extract JWT token from the Authorization header.

        Raises:
            AppException: TOKEN_INVALID if no credentials were sent
        """
        if not credentials:
            logger.debug("No authorization credentials provided")
            raise exceptions.token_invalid()

        return credentials.credentials

    def authenticate_from_token(self, token: str) -> User:
        """
        Authenticate user from an access token.

        1. Verifies the token signature, expiration and type
        2. Loads the user named by the 'sub' claim
        3. Rejects inactive accounts

        Raises:
            AppException: If token is invalid, expired, or user unusable
        """
        payload = self._security.verify_token(token, SecurityManager.TOKEN_TYPE_ACCESS)

        if not payload:
            logger.debug("Token verification failed")
            raise exceptions.token_expired()

        user_id = payload.get("sub")

        if not user_id:
            logger.warning("Token payload missing 'sub' claim")
            raise exceptions.token_invalid()

        user = self._db.query(User).filter(User.id == user_id).first()

        if not user:
            logger.warning(f"User not found for token: {user_id}")
            raise exceptions.user_not_found(user_id)

        if not user.is_active:
            logger.warning(f"Disabled user attempted access: {user.username}")
            raise exceptions.account_disabled()

        logger.debug(f"User authenticated: {user.username}")
        return user

    def get_current_user(
        self,
        credentials: Optional[HTTPAuthorizationCredentials]
    ) -> User:
        token = self.extract_token_from_header(credentials)
        return self.authenticate_from_token(token)

    # =========================================================================
    # ROLE-BASED ACCESS CONTROL
    # =========================================================================

    def require_role(self, user: User, *allowed_roles: UserRole) -> User:
        """
        Verify user has one of the allowed roles.

        Raises:
            AppException: ADMIN_REQUIRED or FORBIDDEN (403)
        """
        if user.role not in allowed_roles:
            logger.warning(
                f"Role check failed for {user.username}: "
                f"has {user.role.value}, needs {[r.value for r in allowed_roles]}"
            )

            if allowed_roles == (UserRole.ADMIN,):
                raise exceptions.admin_required()
            raise exceptions.forbidden()

        return user

    def require_admin(self, user: User) -> User:
        return self.require_role(user, UserRole.ADMIN)

    def require_user(self, user: User) -> User:
        """Standard or elevated role: read access to the catalog."""
        return self.require_role(user, UserRole.USER, UserRole.ADMIN)


# =============================================================================
# FASTAPI DEPENDENCY FUNCTIONS
# =============================================================================

def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_scheme),
    db: Session = Depends(get_db)
) -> User:
    """
    FastAPI dependency to get the current authenticated user.

    Raises:
        AppException: If authentication fails (401)
    """
    auth_manager = AuthenticationManager(get_security_manager(), db)
    return auth_manager.get_current_user(credentials)


def require_user(user: User = Depends(get_current_user)) -> User:
    """FastAPI dependency for catalog read access."""
    auth_manager = AuthenticationManager(get_security_manager(), None)
    return auth_manager.require_user(user)


def require_admin(user: User = Depends(get_current_user)) -> User:
    """
    FastAPI dependency requiring the admin role.

    Usage:
        @router.delete("/products/{product_id}")
        async def delete_product(admin: User = Depends(require_admin)):
            ...
    """
    auth_manager = AuthenticationManager(get_security_manager(), None)
    return auth_manager.require_admin(user)
