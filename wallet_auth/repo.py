from __future__ import annotations

from contextlib import contextmanager
from sqlalchemy.orm import Session

from .db import SessionLocal
from .models import ConfigObject


@contextmanager
def db_session() -> Session:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_config_row(db: Session, name: str) -> ConfigObject | None:
    return db.get(ConfigObject, name)


def get_or_create_config_row(db: Session, name: str) -> ConfigObject:
    row = db.get(ConfigObject, name)
    if row:
        return row
    row = ConfigObject(name=name, data="{}")
    db.add(row)
    return row
