"""
Shared fixtures: an in-memory SQLite database per test, the settings service
wired to it, and a TestClient with the DB dependency overridden.
"""

import os
import tempfile
from unittest.mock import Mock

# Must happen before wallet_auth.db is imported (the engine is built at import time).
os.environ.setdefault("WALLET_AUTH_SQLITE_PATH", os.path.join(tempfile.mkdtemp(), "wallet_auth.db"))

import logging

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from wallet_auth.deps import get_db
from wallet_auth.main import app
from wallet_auth.schema import ensure_schema
from wallet_auth.services.settings import ConfigStore, SqlConfigStore, WalletAuthSettingsService


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    ensure_schema(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    yield session
    session.close()


@pytest.fixture
def store(db):
    return SqlConfigStore(db)


@pytest.fixture
def logger():
    return Mock(spec=logging.Logger)


@pytest.fixture
def service(store, logger):
    return WalletAuthSettingsService(store, logger=logger, base_url=lambda: "https://example.org")


@pytest.fixture
def valid_raw():
    """A submission as the settings form posts it"""
    return {
        "network": "polygon",
        "enable_auto_connect": "0",
        "nonce_lifetime": "600",
        "authentication_methods": {"email": "email", "social": "social"},
        "allowed_socials": {"google": "google", "twitter": 0, "discord": "discord", "bluesky": 0},
        "redirect_on_success": "/dashboard",
    }


@pytest.fixture
def client(db):
    def _override_db():
        yield db

    app.dependency_overrides[get_db] = _override_db
    yield TestClient(app)
    app.dependency_overrides.clear()


class FailingStore(ConfigStore):
    """Store whose writes always fail like a locked SQLite database."""

    def get_all(self):
        return {}

    def set_all(self, values):
        raise OperationalError("UPDATE config", {}, Exception("database is locked"))


@pytest.fixture
def failing_store():
    return FailingStore()
