"""Masking of contact details that users paste into public posts."""

from __future__ import annotations

import re

__all__ = ["CONTACT_MASK", "scrub_contact_details"]

CONTACT_MASK = "[***]"

# Applied in order; earlier patterns consume text before later ones see it.
_CONTACT_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}"),
    re.compile(r"(?:https?://|www\.)\S+", re.IGNORECASE),
    re.compile(r"\b(?:\d[ -]?){12,15}\d\b"),
    re.compile(r"\b\d{3}[- ]?\d{2}[- ]?\d{4}\b"),
    re.compile(r"(?<!\w)(?:\+?\d{1,3}[\s.-]?)?\(?\d{3}\)?[\s.-]?\d{3}[\s.-]?\d{4}\b"),
)


def scrub_contact_details(text: str | None) -> str | None:
    """Replace e-mail addresses, URLs, card, SSN and phone numbers with ``[***]``."""
    if not text:
        return text
    scrubbed = text
    for pattern in _CONTACT_PATTERNS:
        scrubbed = pattern.sub(CONTACT_MASK, scrubbed)
    return scrubbed if scrubbed != text else text
