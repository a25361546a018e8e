"""Store owning the reader's moderation preference."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from feedguard.core.settings import settings
from feedguard.repositories.settings_repo import SettingsStorage, StorageError
from feedguard.schemas.settings import ModerationPolicy

__all__ = ["ModerationPolicyStore"]

logger = logging.getLogger(__name__)


class ModerationPolicyStore:
    """Holds the current ``ModerationPolicy`` and persists every change.

    Reads are synchronous and always succeed. Storage failures never block a
    change from taking effect for the current session: unreadable storage
    yields the default policy, and a failed write is logged and the in-memory
    value is kept.
    """

    def __init__(self, storage: SettingsStorage, key: str | None = None) -> None:
        self._storage = storage
        self.key = key or settings.policy_store_key
        self._policy = ModerationPolicy()

    @property
    def policy(self) -> ModerationPolicy:
        return self._policy

    async def load(self) -> ModerationPolicy:
        """Initialize the policy from storage, falling back to the default."""
        try:
            raw = await self._storage.load(self.key)
        except StorageError:
            logger.warning("Moderation settings unreadable; using defaults", exc_info=True)
            self._policy = ModerationPolicy()
            return self._policy

        if raw is None:
            self._policy = ModerationPolicy()
            return self._policy

        try:
            self._policy = ModerationPolicy.model_validate(raw)
        except ValidationError:
            logger.warning("Stored moderation settings are invalid; using defaults", exc_info=True)
            self._policy = ModerationPolicy()
        return self._policy

    async def set_hide_offensive_words(self, value: bool) -> ModerationPolicy:
        """Change the preference; the only legal way to mutate the policy."""
        self._policy = self._policy.model_copy(update={"hide_offensive_words": bool(value)})
        await self._persist()
        return self._policy

    async def reset_to_defaults(self) -> ModerationPolicy:
        self._policy = ModerationPolicy()
        await self._persist()
        return self._policy

    async def _persist(self) -> None:
        try:
            await self._storage.save(self.key, self._policy.model_dump(by_alias=True))
        except StorageError:
            logger.error("Failed to persist moderation settings; keeping in-memory value", exc_info=True)
