import time

import pytest

from feedguard.services.matcher import TermMatcher, fold_char, is_word_char


def _matches(matcher: TermMatcher, text: str) -> list[str]:
    return [text[start:end] for start, end in matcher.find_spans(text)]


def test_whole_word_only() -> None:
    matcher = TermMatcher(["ass"])
    assert _matches(matcher, "first class passenger") == []
    assert _matches(matcher, "what an ass.") == ["ass"]


def test_boundaries_at_text_edges() -> None:
    matcher = TermMatcher(["dam"])
    assert matcher.find_spans("dam") == [(0, 3)]
    assert _matches(matcher, "adamant dam") == ["dam"]
    assert _matches(matcher, "dam, dams, dam!") == ["dam", "dam"]


def test_case_insensitive_both_ways() -> None:
    matcher = TermMatcher(["Foo"])
    assert _matches(matcher, "foo FOO FoO") == ["foo", "FOO", "FoO"]


def test_underscore_and_digits_are_word_characters() -> None:
    matcher = TermMatcher(["crap"])
    assert _matches(matcher, "crap_talk crap2 2crap") == []
    assert _matches(matcher, "(crap)") == ["crap"]


def test_overlaps_resolve_leftmost_longest() -> None:
    matcher = TermMatcher(["damn", "damn it", "it all"])
    assert _matches(matcher, "damn it all") == ["damn it"]
    assert _matches(matcher, "oh damn") == ["damn"]


def test_shared_suffixes_are_all_reported() -> None:
    matcher = TermMatcher(["she", "he", "hers"])
    assert _matches(matcher, "she said he has hers") == ["she", "he", "hers"]


def test_terms_with_regex_metacharacters_are_literal() -> None:
    matcher = TermMatcher(["a.b", "(x)"])
    assert _matches(matcher, "axb a.b") == ["a.b"]
    # Boundaries follow \b: "(x)" needs word characters on both sides.
    assert _matches(matcher, "x (x) y") == []
    assert _matches(matcher, "a(x)b") == ["(x)"]


def test_unicode_text_keeps_positions() -> None:
    matcher = TermMatcher(["über"])
    text = "İstanbul ÜBER alles 🎉"
    spans = matcher.find_spans(text)
    assert [text[s:e] for s, e in spans] == ["ÜBER"]


def test_duplicate_terms_counted_once() -> None:
    matcher = TermMatcher(["jerk", "JERK", "jerk"])
    assert matcher.term_count == 1


def test_empty_term_rejected() -> None:
    with pytest.raises(ValueError):
        TermMatcher(["ok", ""])


def test_contains() -> None:
    matcher = TermMatcher(["jerk"])
    assert matcher.contains("such a Jerk")
    assert not matcher.contains("jerky")


def test_helpers() -> None:
    assert fold_char("A") == "a"
    assert fold_char("İ") == "İ"  # lower() would yield two characters
    assert is_word_char("_")
    assert is_word_char("é")
    assert not is_word_char("*")


def test_adversarial_prefixes_scan_in_linear_time() -> None:
    """Many terms sharing a long prefix must not slow down a scan of that prefix."""
    terms = ["a" * length + "b" for length in range(1, 401)]
    matcher = TermMatcher(terms)

    short_text = "a" * 20_000
    long_text = "a" * 200_000

    started = time.perf_counter()
    assert matcher.find_spans(short_text) == []
    short_elapsed = time.perf_counter() - started

    started = time.perf_counter()
    assert matcher.find_spans(long_text) == []
    long_elapsed = time.perf_counter() - started

    assert long_elapsed < 10.0
    # Ten times the input should cost roughly ten times as much, not a hundred.
    assert long_elapsed < max(short_elapsed, 0.01) * 40


def test_large_term_list_builds_and_matches() -> None:
    terms = [f"term{index}" for index in range(20_000)]
    started = time.perf_counter()
    matcher = TermMatcher(terms)
    text = " ".join(["plain words here"] * 2_000 + ["term19999"])
    assert _matches(matcher, text) == ["term19999"]
    assert time.perf_counter() - started < 10.0
