"""
Pydantic schemas for feed items, preferences and configuration.

These schemas define the structure of data for serialization and validation.
"""

from .feed import FeedStatus, FeedView, ModeratedItem, Page, RawItem
from .settings import ModerationPolicy, ModerationPolicyUpdate
from .wordlist import BlockedTermsConfig

__all__ = [
    "FeedStatus", "FeedView", "ModeratedItem", "Page", "RawItem",
    "ModerationPolicy", "ModerationPolicyUpdate",
    "BlockedTermsConfig",
]
