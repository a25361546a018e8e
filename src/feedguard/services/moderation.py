"""Redaction of blocked terms in user-generated text.

Redaction fails open: if the matcher cannot be built or applied, the original
text is returned and the failure is logged, so a moderation fault never breaks
the screen that renders the text.
"""

from __future__ import annotations

import logging

from feedguard.schemas.feed import ModeratedItem, RawItem
from feedguard.schemas.settings import ModerationPolicy
from feedguard.services.contact_scrubber import scrub_contact_details
from feedguard.services.wordlist import BlockedTermSet

__all__ = [
    "MASK_TOKEN",
    "ModerationInternalError",
    "contains_blocked_term",
    "moderate_item",
    "redact",
]

# Configure logger for this module
logger = logging.getLogger(__name__)

MASK_TOKEN = "***"


class ModerationInternalError(RuntimeError):
    """Raised when the term matcher cannot be built or applied."""


def _find_spans(text: str, terms: BlockedTermSet) -> list[tuple[int, int]]:
    try:
        return terms.matcher.find_spans(text)
    except Exception as exc:
        raise ModerationInternalError(f"Blocked-term matching failed: {exc}") from exc


def redact(text: str | None, terms: BlockedTermSet) -> str | None:
    """Mask every whole-word, case-insensitive occurrence of a blocked term.

    Each match becomes ``***`` whatever its length; every other character is
    kept in place. Empty or missing text is returned as is, and text without
    matches is returned as the very same object.

    Args:
        text: Text to redact.
        terms: Blocked terms to mask.

    Returns:
        The redacted text, or ``text`` unchanged on any internal failure.
    """
    if not text:
        return text

    try:
        spans = _find_spans(text, terms)
    except ModerationInternalError:
        logger.exception("Redaction failed; delivering text unredacted")
        return text

    if not spans:
        return text

    pieces: list[str] = []
    cursor = 0
    for start, end in spans:
        pieces.append(text[cursor:start])
        pieces.append(MASK_TOKEN)
        cursor = end
    pieces.append(text[cursor:])
    return "".join(pieces)


def contains_blocked_term(text: str | None, terms: BlockedTermSet) -> bool:
    """Return True if ``text`` holds a blocked term; False on internal failure."""
    if not text:
        return False
    try:
        return bool(_find_spans(text, terms))
    except ModerationInternalError:
        logger.exception("Blocked-term check failed; treating text as clean")
        return False


def moderate_item(
    item: RawItem,
    terms: BlockedTermSet,
    policy: ModerationPolicy,
    *,
    scrub_contacts: bool = False,
) -> ModeratedItem:
    """Derive the moderated view of a feed item.

    Redaction always applies. The reader's ``hide_offensive_words`` preference
    only decides whether a flagged item is hidden from the list altogether.
    """
    title = redact(item.title, terms)
    body = redact(item.body, terms)
    flagged = title != item.title or body != item.body

    if scrub_contacts:
        title = scrub_contact_details(title)
        body = scrub_contact_details(body)

    return ModeratedItem(
        id=item.id,
        title=title,
        body=body,
        flagged=flagged,
        hidden=flagged and policy.hide_offensive_words,
        item=item,
    )
