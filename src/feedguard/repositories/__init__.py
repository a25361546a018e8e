"""Data access helpers."""

from .settings_repo import SettingsStorage, SqlSettingsStorage, StorageError

__all__ = ["SettingsStorage", "SqlSettingsStorage", "StorageError"]
