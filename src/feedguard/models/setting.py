"""SQLAlchemy model for persisted client preferences."""

from typing import Any

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from feedguard.db.session import Base


class StoredSetting(Base):
    """A JSON document stored under a stable key."""

    __tablename__ = "stored_setting"

    key: Mapped[str] = mapped_column(String(128), primary_key=True)
    value: Mapped[Any] = mapped_column(JSON, nullable=False)
