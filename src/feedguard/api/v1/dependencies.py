"""Shared API dependencies resolving process-scoped stores."""

from typing import Annotated

from fastapi import Depends, Request

from feedguard.services.feed import FeedRegistry
from feedguard.services.policy import ModerationPolicyStore


def get_feed_registry(request: Request) -> FeedRegistry:
    """Return the feed registry created at startup."""
    return request.app.state.feeds


def get_policy_store(request: Request) -> ModerationPolicyStore:
    """Return the moderation policy store created at startup."""
    return request.app.state.policy_store


FeedRegistryDep = Annotated[FeedRegistry, Depends(get_feed_registry)]
PolicyStoreDep = Annotated[ModerationPolicyStore, Depends(get_policy_store)]
