"""
==============================================================================
Security Module - Authentication & Cryptography
==============================================================================

JWT token handling and password hashing for the catalog API.

This module implements:
- SecurityManager: password hashing (bcrypt) and JWT issue/verify
- get_security_manager(): cached singleton accessor

Token Structure:
---------------
{
    "sub": "user-uuid",           # Subject (user ID)
    "username": "alice",          # Username for convenience
    "role": "admin|user",         # Access level at issue time
    "type": "access|refresh",     # Token type
    "exp": 1234567890,            # Expiration timestamp
    "iat": 1234567890             # Issued at timestamp
}

The role claim is informational only; authorization always reloads the
user and checks the stored role.

==============================================================================
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import get_settings


# Module logger
logger = logging.getLogger(__name__)


class SecurityManager:
    """
    Centralized security manager for authentication operations.

    Example:
        >>> security = SecurityManager()
        >>> hashed = security.hash_password("secret123")
        >>> security.verify_password("secret123", hashed)
        True
        >>> token = security.create_access_token({"sub": "user-id"})
        >>> security.verify_token(token, "access")["sub"]
        'user-id'
    """

    TOKEN_TYPE_ACCESS = "access"
    TOKEN_TYPE_REFRESH = "refresh"

    def __init__(self) -> None:
        self._pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
        self._settings = get_settings()

        logger.debug("SecurityManager initialized")

    # =========================================================================
    # PASSWORD HASHING
    # =========================================================================

    def hash_password(self, plain_password: str) -> str:
        """
        Hash a plain text password using bcrypt.

        Raises:
            ValueError: If the password is empty
        """
        if not plain_password:
            raise ValueError("Password cannot be empty")

        return self._pwd_context.hash(plain_password)

    def verify_password(
        self,
        plain_password: str,
        hashed_password: str
    ) -> bool:
        """
        Verify a plain text password against a bcrypt hash.

        Malformed hashes count as a mismatch.
        """
        try:
            return self._pwd_context.verify(plain_password, hashed_password)
        except (ValueError, TypeError) as e:
            logger.warning(f"Password verification error: {type(e).__name__}")
            return False

    # =========================================================================
    # JWT TOKEN CREATION
    # =========================================================================

    def create_access_token(
        self,
        data: Dict[str, Any],
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """
        Create a short-lived access token.

        Args:
            data: Payload data (must include 'sub' for user ID)
            expires_delta: Custom expiration time (optional)
        """
        return self._create_token(
            data=data,
            token_type=self.TOKEN_TYPE_ACCESS,
            expires_delta=expires_delta or timedelta(
                minutes=self._settings.access_token_expire_minutes
            )
        )

    def create_refresh_token(
        self,
        data: Dict[str, Any],
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """Create a long-lived refresh token."""
        return self._create_token(
            data=data,
            token_type=self.TOKEN_TYPE_REFRESH,
            expires_delta=expires_delta or timedelta(
                days=self._settings.refresh_token_expire_days
            )
        )

    def _create_token(
        self,
        data: Dict[str, Any],
        token_type: str,
        expires_delta: timedelta
    ) -> str:
        payload = data.copy()

        now = datetime.now(timezone.utc)
        expire = now + expires_delta

        payload.update({
            "type": token_type,
            "exp": expire,
            "iat": now
        })

        encoded_token = jwt.encode(
            payload,
            self._settings.jwt_secret_key,
            algorithm=self._settings.jwt_algorithm
        )

        logger.debug(f"Created {token_type} token, expires: {expire.isoformat()}")

        return encoded_token

    # =========================================================================
    # JWT TOKEN VERIFICATION
    # =========================================================================

    def verify_token(
        self,
        token: str,
        token_type: str = TOKEN_TYPE_ACCESS
    ) -> Optional[Dict[str, Any]]:
        """
        Verify signature, expiry and type of a token.

        Args:
            token: The JWT token string to verify
            token_type: Expected token type ('access' or 'refresh')

        Returns:
            Decoded payload dictionary if valid, None otherwise
        """
        try:
            payload = jwt.decode(
                token,
                self._settings.jwt_secret_key,
                algorithms=[self._settings.jwt_algorithm]
            )
        except jwt.ExpiredSignatureError:
            logger.debug("Token verification failed: token expired")
            return None
        except JWTError as e:
            logger.warning(f"Token verification failed: {e}")
            return None

        if payload.get("type") != token_type:
            logger.warning(
                f"Token type mismatch: expected {token_type}, "
                f"got {payload.get('type')}"
            )
            return None

        return payload

    def get_access_token_expire_seconds(self) -> int:
        return self._settings.access_token_expire_seconds


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

@lru_cache(maxsize=1)
def get_security_manager() -> SecurityManager:
    """
    Get the global SecurityManager instance.

    Example:
        >>> security = get_security_manager()
        >>> hashed = security.hash_password("secret")
    """
    return SecurityManager()
