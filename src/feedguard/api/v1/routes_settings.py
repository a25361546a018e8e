"""Endpoints for the reader's moderation preference."""
from __future__ import annotations

from fastapi import APIRouter

from feedguard.api.v1.dependencies import PolicyStoreDep
from feedguard.schemas.settings import ModerationPolicy, ModerationPolicyUpdate

router = APIRouter(tags=["settings"])


@router.get("/moderation", response_model=ModerationPolicy, response_model_by_alias=True)
async def get_moderation_policy(store: PolicyStoreDep) -> ModerationPolicy:
    """Return the current moderation preference."""
    return store.policy


@router.put("/moderation", response_model=ModerationPolicy, response_model_by_alias=True)
async def update_moderation_policy(
    payload: ModerationPolicyUpdate,
    store: PolicyStoreDep,
) -> ModerationPolicy:
    """Change whether items containing blocked terms are hidden entirely."""
    return await store.set_hide_offensive_words(payload.hide_offensive_words)


@router.delete("/moderation", response_model=ModerationPolicy, response_model_by_alias=True)
async def reset_moderation_policy(store: PolicyStoreDep) -> ModerationPolicy:
    """Restore the default moderation preference."""
    return await store.reset_to_defaults()
