"""Registry for the blocked-term list shipped with the application."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from functools import lru_cache
from importlib import resources
from pathlib import Path

from feedguard.core.settings import settings
from feedguard.schemas.wordlist import BlockedTermsConfig
from feedguard.services.matcher import TermMatcher, fold_char

__all__ = [
    "MASK_CHAR",
    "BlockedTermSet",
    "get_blocked_terms",
    "load_blocked_terms",
    "normalize_term",
]

logger = logging.getLogger(__name__)

MASK_CHAR = "*"
_PACKAGED_LIST = "data/blocked_terms.json"


def normalize_term(term: str) -> str:
    """Return the canonical lower-case form of a configured term.

    Raises:
        ValueError: If the term is empty or contains the mask character.
    """
    if not isinstance(term, str):
        raise ValueError(f"blocked term must be a string, got {type(term).__name__}")
    cleaned = term.strip()
    if not cleaned:
        raise ValueError("blocked terms must not be empty")
    if MASK_CHAR in cleaned:
        # A term containing the mask could match text that was already redacted.
        raise ValueError(f"blocked term {cleaned!r} contains the mask character")
    return "".join(fold_char(ch) for ch in cleaned)


class BlockedTermSet:
    """Ordered, de-duplicated, immutable collection of blocked terms."""

    def __init__(
        self,
        terms: Iterable[str] = (),
        *,
        version: str = "unversioned",
        categories: Mapping[str, str] | None = None,
    ) -> None:
        ordered: dict[str, None] = {}
        for term in terms:
            ordered.setdefault(normalize_term(term), None)
        self._terms: tuple[str, ...] = tuple(ordered)
        self._categories: dict[str, str] = dict(categories or {})
        self.version = version
        self._matcher: TermMatcher | None = None

    @classmethod
    def from_config(cls, config: BlockedTermsConfig) -> BlockedTermSet:
        """Build a term set from a validated configuration artifact."""
        if config.terms is not None:
            return cls(config.terms, version=config.version)

        categories: dict[str, str] = {}
        flattened: list[str] = []
        for category, members in (config.categories or {}).items():
            for member in members:
                term = normalize_term(member)
                owner = categories.get(term)
                if owner is not None and owner != category:
                    raise ValueError(
                        f"blocked term {term!r} listed under both {owner!r} and {category!r}"
                    )
                categories[term] = category
                flattened.append(term)
        return cls(flattened, version=config.version, categories=categories)

    @property
    def terms(self) -> tuple[str, ...]:
        return self._terms

    def category_of(self, term: str) -> str | None:
        """Return the category a term was declared under, if any."""
        return self._categories.get(normalize_term(term))

    @property
    def matcher(self) -> TermMatcher:
        """Compiled matcher for this term set, built on first use."""
        if self._matcher is None:
            self._matcher = TermMatcher(self._terms)
        return self._matcher

    def __contains__(self, term: object) -> bool:
        if not isinstance(term, str):
            return False
        return "".join(fold_char(ch) for ch in term.strip()) in self._terms

    def __iter__(self):
        return iter(self._terms)

    def __len__(self) -> int:
        return len(self._terms)

    def __repr__(self) -> str:
        return f"BlockedTermSet(version={self.version!r}, terms={len(self._terms)})"


def load_blocked_terms(path: Path | None = None) -> BlockedTermSet:
    """Load and validate a blocked-term artifact.

    Args:
        path: JSON file to read. The list packaged with Feedguard is used when omitted.

    Raises:
        ValueError: If the artifact is malformed (pydantic ``ValidationError`` included).
        OSError: If the file cannot be read.
    """
    if path is None:
        raw = resources.files("feedguard").joinpath(_PACKAGED_LIST).read_text(encoding="utf-8")
        source = _PACKAGED_LIST
    else:
        raw = Path(path).read_text(encoding="utf-8")
        source = str(path)

    config = BlockedTermsConfig.model_validate_json(raw)
    term_set = BlockedTermSet.from_config(config)
    logger.info("Loaded %d blocked terms (version %s) from %s", len(term_set), term_set.version, source)
    return term_set


@lru_cache(maxsize=1)
def get_blocked_terms() -> BlockedTermSet:
    """Return the process-wide blocked-term set, loading it on first use."""
    return load_blocked_terms(settings.blocked_terms_path)
