"""
==============================================================================
Audit Logger Module
==============================================================================

Audit trail for catalog additions.

Entries go to the dedicated ``AUDIT_LOGGER`` logger, so deployments can
route them separately from application logs. When ``audit_log_file`` is
configured, a file handler is attached once; an unusable path is logged
and skipped.

Entry Format:
------------
    Product added: id=42, name='Widget', by user='admin'

==============================================================================
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from app.config import get_settings


AUDIT_LOGGER_NAME = "AUDIT_LOGGER"

# Module logger
logger = logging.getLogger(__name__)


class AuditLogger:
    """
    Writes audit entries for successful product creation.

    Logging errors are handled inside the logging framework, so recording
    an entry never fails the request that triggered it.

    Example:
        >>> audit = AuditLogger()
        >>> audit.log_product_addition(42, "Widget", "admin")
    """

    def __init__(self, log_file: Optional[Path] = None) -> None:
        """
        Args:
            log_file: Custom audit file (uses settings if None)
        """
        self._logger = logging.getLogger(AUDIT_LOGGER_NAME)
        self._attach_file_handler(log_file or get_settings().audit_log_path)

    def _attach_file_handler(self, log_file: Optional[Path]) -> None:
        if log_file is None:
            return

        target = str(log_file.resolve())
        for handler in self._logger.handlers:
            if isinstance(handler, logging.FileHandler) and handler.baseFilename == target:
                return

        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as e:
            logger.warning(f"⚠️ Audit file unavailable, entries go to the application log: {e}")
            return

        handler.setFormatter(logging.Formatter("%(asctime)s %(message)s"))
        self._logger.addHandler(handler)
        self._logger.setLevel(logging.INFO)

    def log_product_addition(
        self,
        product_id: int,
        product_name: str,
        username: str
    ) -> None:
        """
        Record that a product was added.

        Args:
            product_id: Identifier assigned to the new product
            product_name: Name of the new product
            username: Account that created it
        """
        self._logger.info(
            "Product added: id=%s, name='%s', by user='%s'",
            product_id,
            product_name,
            username
        )


@lru_cache(maxsize=1)
def get_audit_logger() -> AuditLogger:
    """Get the global AuditLogger instance."""
    return AuditLogger()
