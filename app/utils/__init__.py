"""
==============================================================================
Utilities Package
==============================================================================

Utility classes for the application.

Modules:
--------
- audit_logger: audit trail for catalog additions

==============================================================================
"""

from .audit_logger import AUDIT_LOGGER_NAME, AuditLogger, get_audit_logger

__all__ = [
    "AUDIT_LOGGER_NAME",
    "AuditLogger",
    "get_audit_logger",
]
