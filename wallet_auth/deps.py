from __future__ import annotations

import logging
from collections.abc import Iterator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from .repo import db_session
from .services.settings import SqlConfigStore, WalletAuthSettingsService
from .services.settings.service import AUDIT_LOGGER_NAME


def get_db() -> Iterator[Session]:
    with db_session() as db:
        yield db


def get_settings_service(request: Request, db: Session = Depends(get_db)) -> WalletAuthSettingsService:
    """Settings service bound to this request's DB session and base URL."""
    return WalletAuthSettingsService(
        SqlConfigStore(db),
        logger=logging.getLogger(AUDIT_LOGGER_NAME),
        base_url=lambda: str(request.base_url).rstrip("/"),
    )
