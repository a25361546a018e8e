"""Moderation and feed delivery services for Feedguard."""

from .feed import FeedRegistry, PaginatedFeed
from .moderation import ModerationInternalError, moderate_item, redact
from .page_source import HttpPageSource, TransportError
from .policy import ModerationPolicyStore
from .wordlist import BlockedTermSet, get_blocked_terms, load_blocked_terms

__all__ = [
    "BlockedTermSet",
    "FeedRegistry",
    "HttpPageSource",
    "ModerationInternalError",
    "ModerationPolicyStore",
    "PaginatedFeed",
    "TransportError",
    "get_blocked_terms",
    "load_blocked_terms",
    "moderate_item",
    "redact",
]
