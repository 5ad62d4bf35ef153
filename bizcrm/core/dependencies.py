"""Dependency providers for API handlers."""

from __future__ import annotations

from collections.abc import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from bizcrm.core.config import Config, get_config
from bizcrm.database.db import get_db
from bizcrm.services.invoice_service import InvoiceService
from bizcrm.services.pipeline_service import PipelineService


def get_settings() -> Config:
    """Return validated application configuration."""
    return get_config()


def get_db_session() -> Generator[Session, None, None]:
    """Yield SQLAlchemy session for dependency injection."""
    yield from get_db()


def get_pipeline_service(db: Session = Depends(get_db_session)) -> PipelineService:
    return PipelineService(db=db)


def get_invoice_service(db: Session = Depends(get_db_session)) -> InvoiceService:
    return InvoiceService(db=db)
