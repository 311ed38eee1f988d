from __future__ import annotations

"""DB schema bootstrap (SQLite).

No Alembic: the only table is the `config` blob store, so creating missing
tables is all the migration we need. Callable from the web app and from tests.
"""

from .db import engine
from .models import Base


def ensure_schema(bind=None) -> None:
    """Create missing tables on `bind` (defaults to the app engine)."""
    Base.metadata.create_all(bind=bind or engine)
