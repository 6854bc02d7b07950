"""Test suite for catalog text normalization and match patterns."""

from __future__ import annotations

import pytest

from motoin.domain.normalization import (
    case_insensitive_exact_match,
    composite_key,
    fuzzy_search_pattern,
    normalize,
)


# ==============================================================================
# normalize
# ==============================================================================


@pytest.mark.parametrize("text", ["AD 250", "ad250", " ad250 ", "Ad\t250", "A D 2 5 0"])
def test_normalize_removes_whitespace_and_case(text: str) -> None:
    assert normalize(text) == "ad250"


@pytest.mark.parametrize("text", [None, "", "   "])
def test_normalize_empty_input(text: str | None) -> None:
    assert normalize(text) == ""


def test_normalize_keeps_punctuation() -> None:
    assert normalize("MT-07 (ABS)") == "mt-07(abs)"


# ==============================================================================
# composite_key
# ==============================================================================


def test_composite_key_ignores_spacing_and_case() -> None:
    assert composite_key("Honda", "CBR 600") == composite_key(" honda ", "cbr600")


def test_composite_key_separates_make_and_model() -> None:
    """Moving text between make and model yields a different key."""
    assert composite_key("Honda", "CBR 600") != composite_key("HondaCBR", "600")


def test_composite_key_of_different_models_differs() -> None:
    assert composite_key("Honda", "CBR 600 RR") != composite_key("Honda", "CBR 1000 RR")


# ==============================================================================
# case_insensitive_exact_match
# ==============================================================================


def test_exact_match_is_case_insensitive_and_anchored() -> None:
    pattern = case_insensitive_exact_match("honda")

    assert pattern is not None
    assert pattern.search("Honda")
    assert pattern.search("HONDA")
    assert not pattern.search("Honda Motor")
    assert not pattern.search("Hond")


def test_exact_match_trims_value() -> None:
    pattern = case_insensitive_exact_match("  Yamaha ")

    assert pattern is not None
    assert pattern.search("yamaha")


def test_exact_match_escapes_metacharacters() -> None:
    pattern = case_insensitive_exact_match("MT-07 (ABS)")

    assert pattern is not None
    assert pattern.search("mt-07 (abs)")
    assert not pattern.search("MT-07 ABS")


@pytest.mark.parametrize("value", [None, "", "   "])
def test_exact_match_blank_means_no_filter(value: str | None) -> None:
    assert case_insensitive_exact_match(value) is None


# ==============================================================================
# fuzzy_search_pattern
# ==============================================================================


def test_fuzzy_pattern_ignores_space_placement() -> None:
    pattern = fuzzy_search_pattern("s1000rr")

    assert pattern is not None
    assert pattern.search("S 1000 RR")
    assert pattern.search("s1000rr")
    assert not pattern.search("s2000rr")


def test_fuzzy_pattern_matches_inside_longer_text() -> None:
    pattern = fuzzy_search_pattern("cbr 600")

    assert pattern is not None
    assert pattern.search("Honda CBR600 RR")


def test_fuzzy_pattern_escapes_metacharacters() -> None:
    pattern = fuzzy_search_pattern("r.1")

    assert pattern is not None
    assert pattern.search("R.1")
    assert not pattern.search("RX1")


@pytest.mark.parametrize("term", [None, "", "  \t "])
def test_fuzzy_pattern_blank_means_no_filter(term: str | None) -> None:
    assert fuzzy_search_pattern(term) is None
