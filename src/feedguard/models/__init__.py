"""SQLAlchemy models for Feedguard."""

from .setting import StoredSetting

__all__ = ["StoredSetting"]
