"""
==============================================================================
Core Package
==============================================================================

Core infrastructure for the application.

Modules:
--------
- exceptions: AppException class and error factory functions
- security: SecurityManager for password hashing and JWT handling
- dependencies: FastAPI dependencies for authentication and roles

Usage:
------
    from app.core import AppException, require_admin
    from app.core import exceptions

    raise exceptions.product_not_found(42)

==============================================================================
"""

from .exceptions import (
    AppException,
    register_exception_handlers,
)
from .security import SecurityManager, get_security_manager
from .dependencies import (
    AuthenticationManager,
    get_current_user,
    require_admin,
    require_user,
)

__all__ = [
    # Exceptions
    "AppException",
    "register_exception_handlers",
    # Security
    "SecurityManager",
    "get_security_manager",
    # Dependencies
    "AuthenticationManager",
    "get_current_user",
    "require_admin",
    "require_user",
]
