"""
==============================================================================
Authentication Service Module
==============================================================================

Login and token refresh for API clients.

Authentication Flow:
-------------------
    ┌─────────────┐
    │   Login     │
    │  Request    │
    └──────┬──────┘
           │
    ┌──────▼──────┐     ┌─────────────┐
    │ Find User   │────▶│ User Not    │ → INVALID_CREDENTIALS
    └──────┬──────┘     │   Found     │
           │            └─────────────┘
    ┌──────▼──────┐     ┌─────────────┐
    │  Verify     │────▶│  Password   │ → INVALID_CREDENTIALS
    │  Password   │     │   Wrong     │
    └──────┬──────┘     └─────────────┘
           │
    ┌──────▼──────┐     ┌─────────────┐
    │   Check     │────▶│  Account    │ → ACCOUNT_DISABLED
    │   Active    │     │  Disabled   │
    └──────┬──────┘     └─────────────┘
           │
    ┌──────▼──────┐
    │  Generate   │
    │   Tokens    │
    └─────────────┘

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from app.db.models import User
from app.core import exceptions
from app.core.security import SecurityManager, get_security_manager


# Module logger
logger = logging.getLogger(__name__)


class AuthService:
    """
    Authentication service for user login and token management.

    Example:
        >>> auth_service = AuthService(db_session)
        >>> user, access, refresh = auth_service.authenticate("admin", "admin123")
        >>> user, new_access, new_refresh = auth_service.refresh_tokens(refresh)
    """

    def __init__(
        self,
        db: Session,
        security: Optional[SecurityManager] = None
    ) -> None:
        self._db = db
        self._security = security or get_security_manager()

    def authenticate(
        self,
        username: str,
        password: str
    ) -> Tuple[User, str, str]:
        """
        Authenticate user with username and password.

        Returns:
            Tuple of (User, access_token, refresh_token)

        Raises:
            AppException: INVALID_CREDENTIALS if user not found or password wrong
            AppException: ACCOUNT_DISABLED if user is inactive
        """
        normalized_username = username.lower().strip()

        user = self._db.query(User).filter(
            User.username == normalized_username
        ).first()

        if not user:
            logger.warning(f"Login failed: user not found - {normalized_username}")
            raise exceptions.invalid_credentials()

        if not self._security.verify_password(password, user.password_hash):
            logger.warning(f"Login failed: invalid password - {normalized_username}")
            raise exceptions.invalid_credentials()

        if not user.is_active:
            logger.warning(f"Login failed: account disabled - {normalized_username}")
            raise exceptions.account_disabled()

        access_token, refresh_token = self._generate_tokens(user)

        logger.info(f"✅ User authenticated: {user.username}")

        return user, access_token, refresh_token

    def refresh_tokens(self, refresh_token: str) -> Tuple[User, str, str]:
        """
        Issue a new token pair from a valid refresh token.

        Raises:
            AppException: TOKEN_EXPIRED, TOKEN_INVALID, USER_NOT_FOUND or
                ACCOUNT_DISABLED
        """
        payload = self._security.verify_token(
            refresh_token,
            SecurityManager.TOKEN_TYPE_REFRESH
        )

        if not payload:
            logger.warning("Token refresh failed: invalid or expired token")
            raise exceptions.token_expired()

        user_id = payload.get("sub")

        if not user_id:
            logger.warning("Token refresh failed: missing 'sub' claim")
            raise exceptions.token_invalid()

        user = self._db.query(User).filter(User.id == user_id).first()

        if not user:
            logger.warning(f"Token refresh failed: user not found - {user_id}")
            raise exceptions.user_not_found(user_id)

        if not user.is_active:
            logger.warning(f"Token refresh failed: account disabled - {user.username}")
            raise exceptions.account_disabled()

        access_token, new_refresh_token = self._generate_tokens(user)

        logger.info(f"✅ Tokens refreshed for: {user.username}")

        return user, access_token, new_refresh_token

    def _generate_tokens(self, user: User) -> Tuple[str, str]:
        token_data = {
            "sub": user.id,
            "username": user.username,
            "role": user.role.value
        }

        access_token = self._security.create_access_token(token_data)
        refresh_token = self._security.create_refresh_token(token_data)

        return access_token, refresh_token

    def get_token_expiry_seconds(self) -> int:
        return self._security.get_access_token_expire_seconds()
