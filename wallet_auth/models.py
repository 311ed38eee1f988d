from __future__ import annotations

from datetime import datetime
from sqlalchemy import String, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column

from .db import Base


class ConfigObject(Base):
    """One named configuration blob (e.g. ``wallet_auth.settings``).

    The whole JSON object is replaced on every save, so a row never holds a
    mix of old and new keys.
    """

    __tablename__ = "config"

    name: Mapped[str] = mapped_column(String(255), primary_key=True)
    data: Mapped[str] = mapped_column(Text, default="{}", nullable=False)  # JSON object

    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
