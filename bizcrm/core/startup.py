"""Startup validation and bootstrap helpers."""

from __future__ import annotations

import logging

from bizcrm.core.config import get_config
from bizcrm.core.logging_config import configure_logging
from bizcrm.database.db import get_active_database_url, init_db, verify_database_connection

logger = logging.getLogger(__name__)


def validate_startup_config() -> bool:
    """Fail-fast config and connectivity checks."""
    config = get_config()
    database_ok = verify_database_connection()
    active_database_url = get_active_database_url()
    if not database_ok and config.DB_CONNECTIVITY_REQUIRED:
        raise RuntimeError("Database connectivity check failed.")
    if not database_ok:
        logger.warning(
            "startup.database.connectivity_optional_failed",
            extra={"event": "startup.database.connectivity_optional_failed"},
        )

    if config.is_production and active_database_url.startswith("sqlite"):
        logger.warning(
            "startup.production.sqlite_detected",
            extra={"event": "startup.production.sqlite_detected"},
        )

    logger.info(
        "startup.config.validated",
        extra={
            "event": "startup.config.validated",
            "env": config.ENV,
            "database_url_scheme": active_database_url.split("://", 1)[0],
            "default_tax_percentage": config.DEFAULT_TAX_PERCENTAGE,
        },
    )
    return database_ok


def bootstrap() -> None:
    """Initialize logging, validate runtime configuration and ensure the schema exists."""
    configure_logging()
    if validate_startup_config():
        init_db()
