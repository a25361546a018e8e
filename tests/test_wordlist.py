import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from feedguard.schemas.wordlist import BlockedTermsConfig
from feedguard.services.wordlist import BlockedTermSet, load_blocked_terms, normalize_term


def test_terms_are_normalized_deduplicated_and_ordered() -> None:
    terms = BlockedTermSet(["Crap", " damn ", "crap", "JERK"])
    assert terms.terms == ("crap", "damn", "jerk")
    assert len(terms) == 3
    assert "CRAP" in terms
    assert "scrap" not in terms


@pytest.mark.parametrize("bad", ["", "   ", "f**k"])
def test_invalid_terms_rejected(bad: str) -> None:
    with pytest.raises(ValueError):
        normalize_term(bad)


def test_packaged_list_loads_with_categories() -> None:
    terms = load_blocked_terms()
    assert terms.version
    assert len(terms) > 0
    assert terms.category_of("damn") == "profanity"
    assert terms.category_of("Bastard") == "insults"
    assert terms.category_of("lovely") is None


def test_load_flat_list_from_path(tmp_path: Path) -> None:
    path = tmp_path / "terms.json"
    path.write_text(json.dumps({"version": "7", "terms": ["Alpha", "beta", "alpha"]}), encoding="utf-8")

    terms = load_blocked_terms(path)

    assert terms.version == "7"
    assert terms.terms == ("alpha", "beta")
    assert terms.category_of("alpha") is None


def test_term_in_two_categories_rejected() -> None:
    config = BlockedTermsConfig(version="1", categories={"a": ["dup"], "b": ["DUP"]})
    with pytest.raises(ValueError, match="both"):
        BlockedTermSet.from_config(config)


def test_config_requires_exactly_one_layout() -> None:
    with pytest.raises(ValidationError):
        BlockedTermsConfig(version="1")
    with pytest.raises(ValidationError):
        BlockedTermsConfig(version="1", terms=["a"], categories={"x": ["b"]})


def test_malformed_artifact_fails_at_load(tmp_path: Path) -> None:
    path = tmp_path / "terms.json"
    path.write_text('{"version": "1", "terms": ["ok", ""]}', encoding="utf-8")
    with pytest.raises(ValueError):
        load_blocked_terms(path)


def test_matcher_is_built_once() -> None:
    terms = BlockedTermSet(["crap"])
    assert terms.matcher is terms.matcher
