from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...repo import get_config_row, get_or_create_config_row

from .schema import CONFIG_NAME

log = logging.getLogger(__name__)


class ConfigStore:
    """Named configuration blob: read single keys, replace everything at once."""

    name: str = CONFIG_NAME

    def get(self, key: str) -> Any | None:
        return self.get_all().get(key)

    def get_all(self) -> dict[str, Any]:
        raise NotImplementedError

    def set_all(self, values: dict[str, Any]) -> None:
        raise NotImplementedError


class SqlConfigStore(ConfigStore):
    """ConfigStore backed by one row of the `config` table.

    Errors from SQLAlchemy are raised as-is after a rollback; retry policy is
    the caller's business.
    """

    def __init__(self, db: Session, name: str = CONFIG_NAME):
        self.db = db
        self.name = name

    def get_all(self) -> dict[str, Any]:
        row = get_config_row(self.db, self.name)
        if row is None:
            return {}
        try:
            data = json.loads(row.data or "{}")
        except ValueError:
            log.warning("Config %s holds invalid JSON, treating it as empty", self.name)
            return {}
        return data if isinstance(data, dict) else {}

    def set_all(self, values: dict[str, Any]) -> None:
        payload = json.dumps(values, ensure_ascii=False)
        try:
            row = get_or_create_config_row(self.db, self.name)
            row.data = payload
            row.updated_at = datetime.utcnow()
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
