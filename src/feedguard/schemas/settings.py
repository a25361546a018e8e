"""Schemas for user-owned moderation preferences."""

from pydantic import BaseModel, ConfigDict, Field


class ModerationPolicy(BaseModel):
    """Per-user moderation preference, persisted as ``{"hideOffensiveWords": bool}``."""

    hide_offensive_words: bool = Field(default=False, alias="hideOffensiveWords")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ModerationPolicyUpdate(BaseModel):
    """Payload accepted by the policy setter endpoint."""

    hide_offensive_words: bool = Field(..., alias="hideOffensiveWords")

    model_config = ConfigDict(populate_by_name=True)
