"""Text normalization and match patterns for the motorcycle catalog.

The normalized form is used only for comparison (duplicate detection during
imports). It is never displayed or stored as the entry's make/model.
"""

from __future__ import annotations

import re

# normalize() strips every whitespace character, so a space can never occur
# inside a normalized make or model.
KEY_SEPARATOR = " "


def normalize(text: str | None) -> str:
    """
    Lowercase the text and remove all whitespace, including internal spaces.

    "AD 250", " ad250 " and "Ad\\t250" all normalize to "ad250".
    Empty or missing input normalizes to "".
    """
    if not text:
        return ""
    return "".join(text.lower().split())


def composite_key(make: str | None, model: str | None) -> str:
    """De-duplication identity of a (make, model) pair."""
    return f"{normalize(make)}{KEY_SEPARATOR}{normalize(model)}"


def case_insensitive_exact_match(value: str | None) -> re.Pattern[str] | None:
    """
    Build an anchored, case-insensitive literal pattern for a filter value.

    Returns None when the value is missing or blank (no filter). Regex
    metacharacters in the value are escaped, so "MT-07 (ABS)" only matches
    that exact text.
    """
    if value is None:
        return None
    trimmed = value.strip()
    if not trimmed:
        return None
    return re.compile(f"^{re.escape(trimmed)}$", re.IGNORECASE)


def fuzzy_search_pattern(term: str | None) -> re.Pattern[str] | None:
    """
    Build a case-insensitive pattern that ignores where spaces fall.

    Every non-whitespace character of the term is matched literally, in
    order, with optional whitespace allowed between each pair:
    "s1000rr" matches "S 1000 RR".
    """
    if term is None:
        return None
    chars = [char for char in term if not char.isspace()]
    if not chars:
        return None
    return re.compile(r"\s*".join(re.escape(char) for char in chars), re.IGNORECASE)
