"""Durable key/value storage for client preferences."""
from __future__ import annotations

import asyncio
from typing import Any, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from feedguard.models.setting import StoredSetting

__all__ = ["SettingsStorage", "SqlSettingsStorage", "StorageError"]


class StorageError(RuntimeError):
    """Raised when persisted settings cannot be read or written."""


class SettingsStorage(Protocol):
    """Persistence boundary used by preference stores."""

    async def load(self, key: str) -> Any | None:
        """Return the JSON document stored under ``key`` or None."""

    async def save(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous document."""


class SqlSettingsStorage:
    """Settings storage backed by a SQLAlchemy database.

    Database work runs in a worker thread so callers on the event loop are
    never blocked by disk I/O.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        """Initialize the storage with a session factory."""
        self._session_factory = session_factory

    async def load(self, key: str) -> Any | None:
        return await asyncio.to_thread(self._load, key)

    async def save(self, key: str, value: Any) -> None:
        await asyncio.to_thread(self._save, key, value)

    def _load(self, key: str) -> Any | None:
        try:
            with self._session_factory() as session:
                row = session.get(StoredSetting, key)
                return None if row is None else row.value
        except (SQLAlchemyError, ValueError) as exc:
            raise StorageError(f"Could not read setting {key!r}: {exc}") from exc

    def _save(self, key: str, value: Any) -> None:
        try:
            with self._session_factory() as session:
                row = session.get(StoredSetting, key)
                if row is None:
                    session.add(StoredSetting(key=key, value=value))
                else:
                    row.value = value
                session.commit()
        except (SQLAlchemyError, ValueError) as exc:
            raise StorageError(f"Could not write setting {key!r}: {exc}") from exc
