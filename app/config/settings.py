"""
==============================================================================
Application Settings Module
==============================================================================

Configuration management for the catalog service using Pydantic Settings.

A single cached Settings instance is shared by the whole application.

Configuration Priority (highest to lowest):
------------------------------------------
1. Environment variables
2. .env file
3. Default values

Security Considerations:
-----------------------
- Never commit .env files to version control
- Use a strong JWT_SECRET_KEY in production
- Change the seeded account passwords immediately

==============================================================================
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Module logger
logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Display name for the application
        app_env: Environment mode (development/staging/production)
        debug: Enable debug mode for verbose logging
        host: Server bind address
        port: Server port number
        database_url: SQLAlchemy database connection string
        jwt_secret_key: Secret key for JWT token signing
        jwt_algorithm: Algorithm for JWT signing (e.g., HS256)
        access_token_expire_minutes: Access token lifetime in minutes
        refresh_token_expire_days: Refresh token lifetime in days
        default_admin_username: Seeded admin account username
        default_admin_password: Seeded admin account password
        default_user_username: Seeded standard account username
        default_user_password: Seeded standard account password
        audit_log_file: Optional file receiving the audit trail
        cors_origins: Allowed CORS origins (JSON array string)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================
    app_name: str = Field(
        default="Product Catalog API",
        description="Display name for the application"
    )

    app_env: str = Field(
        default="development",
        description="Environment mode: development, staging, production"
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode for verbose logging"
    )

    # =========================================================================
    # SERVER SETTINGS
    # =========================================================================
    host: str = Field(
        default="0.0.0.0",
        description="Server bind address"
    )

    port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Server port number"
    )

    # =========================================================================
    # DATABASE SETTINGS
    # =========================================================================
    database_url: str = Field(
        default="sqlite:///./storage/db/catalog.db",
        description="SQLAlchemy database connection string"
    )

    # =========================================================================
    # JWT AUTHENTICATION SETTINGS
    # =========================================================================
    jwt_secret_key: str = Field(
        default="change-this-in-production",
        min_length=16,
        description="Secret key for JWT token signing"
    )

    jwt_algorithm: str = Field(
        default="HS256",
        description="Algorithm for JWT signing"
    )

    access_token_expire_minutes: int = Field(
        default=30,
        ge=1,
        le=1440,
        description="Access token lifetime in minutes"
    )

    refresh_token_expire_days: int = Field(
        default=7,
        ge=1,
        le=90,
        description="Refresh token lifetime in days"
    )

    # =========================================================================
    # SEEDED ACCOUNTS
    # =========================================================================
    default_admin_username: str = Field(
        default="admin",
        min_length=3,
        max_length=50,
        description="Seeded admin account username"
    )

    default_admin_password: str = Field(
        default="admin123",
        min_length=6,
        description="Seeded admin account password"
    )

    default_user_username: Optional[str] = Field(
        default="user",
        description="Seeded standard account username (empty disables seeding)"
    )

    default_user_password: str = Field(
        default="user1234",
        min_length=6,
        description="Seeded standard account password"
    )

    # =========================================================================
    # AUDIT SETTINGS
    # =========================================================================
    audit_log_file: Optional[str] = Field(
        default=None,
        description="File that receives product audit entries"
    )

    # =========================================================================
    # CORS SETTINGS
    # =========================================================================
    cors_origins: str = Field(
        default='["*"]',
        description="Allowed CORS origins as JSON array string"
    )

    # =========================================================================
    # VALIDATORS
    # =========================================================================
    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, value: str) -> str:
        """Normalize the environment name, falling back to development."""
        valid_envs = {"development", "staging", "production"}
        normalized = value.lower().strip()

        if normalized not in valid_envs:
            logger.warning(
                f"Unknown environment '{value}', defaulting to 'development'"
            )
            return "development"

        return normalized

    @field_validator("jwt_algorithm")
    @classmethod
    def validate_jwt_algorithm(cls, value: str) -> str:
        """
        Validate JWT algorithm is supported.

        Raises:
            ValueError: If algorithm is not supported
        """
        supported = {"HS256", "HS384", "HS512"}

        if value.upper() not in supported:
            raise ValueError(
                f"Unsupported JWT algorithm: {value}. "
                f"Supported: {', '.join(sorted(supported))}"
            )

        return value.upper()

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================

    @property
    def audit_log_path(self) -> Optional[Path]:
        """Audit file as a Path, or None when file auditing is off."""
        if not self.audit_log_file:
            return None
        return Path(self.audit_log_file)

    @property
    def cors_origins_list(self) -> List[str]:
        """
        Parse CORS origins from JSON string to list.

        Returns:
            List of allowed origin strings
        """
        try:
            origins = json.loads(self.cors_origins)
            if isinstance(origins, list):
                return origins
            return ["*"]
        except json.JSONDecodeError:
            logger.warning(
                f"Invalid CORS origins JSON: {self.cors_origins}, "
                "defaulting to ['*']"
            )
            return ["*"]

    @property
    def access_token_expire_seconds(self) -> int:
        return self.access_token_expire_minutes * 60

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================
    def get_database_path(self) -> Optional[Path]:
        """
        Extract database file path for SQLite databases.

        Returns:
            Path to database file, or None for non-file databases
        """
        if self.database_url.startswith("sqlite:///"):
            db_path = self.database_url.replace("sqlite:///", "")
            if db_path.startswith("./"):
                db_path = db_path[2:]
            if db_path and db_path != ":memory:":
                return Path(db_path)
        return None

    def ensure_directories(self) -> None:
        """Create the SQLite and audit file directories if needed."""
        db_path = self.get_database_path()
        if db_path:
            db_path.parent.mkdir(parents=True, exist_ok=True)

        audit_path = self.audit_log_path
        if audit_path:
            audit_path.parent.mkdir(parents=True, exist_ok=True)

        logger.debug("Required directories created/verified")

    def __repr__(self) -> str:
        return (
            f"Settings(app_name={self.app_name!r}, "
            f"app_env={self.app_env!r}, "
            f"debug={self.debug})"
        )


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get the global Settings instance (singleton pattern).

    Returns:
        Global Settings instance

    Example:
        >>> settings = get_settings()
        >>> print(settings.app_name)
        'Product Catalog API'
    """
    settings = Settings()
    settings.ensure_directories()

    if settings.debug:
        logger.info(f"Configuration loaded: {settings}")

    return settings
