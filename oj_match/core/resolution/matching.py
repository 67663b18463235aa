"""
Equivalence rules for organizational unit names.

This module decides whether two names denote the same unit:
- Exact matching (identical normalized forms)
- Ordinal elision (an unnumbered unit is the "first" one)
- Inclusion matching (one normalized form contains the other)
- Similarity scoring and component comparison for diagnostics

All functions are pure and have no I/O dependencies.
"""

from __future__ import annotations

import re
from difflib import SequenceMatcher
from typing import Optional

from .extractor import extract
from .models import MatchKind, Specialty
from .normalizer import convert_spelled_ordinals, normalize, standardize_prepositions

LEADING_ORDINAL_PATTERN = re.compile(r"^(\d+)[aªº°]?\s*")


def leading_ordinal(normalized: str) -> tuple[Optional[int], str]:
    """
    Split a leading ordinal off a normalized name.

    Spelled-out ordinals count as numeric ones.

    Examples:
        "1ª vara do trabalho" → (1, "vara do trabalho")
        "segunda vara civel" → (2, "vara civel")
        "vara do trabalho" → (None, "vara do trabalho")
    """
    text = convert_spelled_ordinals(normalized)
    match = LEADING_ORDINAL_PATTERN.match(text)
    if not match:
        return None, normalized
    return int(match.group(1)), text[match.end():]


def match_ordinal(candidate: str, query: str) -> Optional[MatchKind]:
    """
    Apply the ordinal rules to two normalized names.

    Only a pair where exactly one side is numbered is decided here; every
    other pair returns None and falls through to inclusion matching.
    """
    ordinal_c, rest_c = leading_ordinal(candidate)
    ordinal_q, rest_q = leading_ordinal(query)

    if (ordinal_c is None) == (ordinal_q is None):
        return None

    if rest_c != rest_q:
        return None

    # Exactly one side is numbered; the unnumbered unit stands for the first
    ordinal = ordinal_c if ordinal_c is not None else ordinal_q
    return MatchKind.EXACT if ordinal == 1 else MatchKind.NONE


def match_inclusion(candidate: str, query: str) -> bool:
    return candidate in query or query in candidate


def classify(candidate: str, query: str) -> MatchKind:
    """
    Classify a registry entry against a query, both already normalized.

    Rules are applied in order and short-circuit:
    1. Empty forms only match each other
    2. Identical forms are exact
    3. An ordinal on one side only decides when the rest of the names agree
    4. Containment in either direction is an inclusion

    Args:
        candidate: Normalized registry entry
        query: Normalized query

    Returns:
        MatchKind.EXACT, MatchKind.INCLUSION or MatchKind.NONE
    """
    if not candidate or not query:
        return MatchKind.EXACT if candidate == query else MatchKind.NONE

    if candidate == query:
        return MatchKind.EXACT

    kind = match_ordinal(candidate, query)
    if kind is not None:
        return kind

    if match_inclusion(candidate, query):
        return MatchKind.INCLUSION

    return MatchKind.NONE


def match_kind(candidate: Optional[str], query: Optional[str]) -> MatchKind:
    return classify(normalize(candidate), normalize(query))


def equivalent(name_a: Optional[str], name_b: Optional[str]) -> bool:
    return match_kind(name_a, name_b) is not MatchKind.NONE


def ratio(norm_a: str, norm_b: str) -> float:
    """Similarity of two normalized names (0.0 to 1.0)."""
    if not norm_a or not norm_b:
        return 1.0 if norm_a == norm_b else 0.0
    return SequenceMatcher(None, norm_a, norm_b).ratio()


def similarity(name_a: Optional[str], name_b: Optional[str]) -> float:
    return ratio(normalize(name_a), normalize(name_b))


def _comparison_form(name: Optional[str]) -> str:
    return standardize_prepositions(convert_spelled_ordinals(normalize(name)))


def compare_components(name_a: Optional[str], name_b: Optional[str]) -> bool:
    """
    Loose comparison of two names through their extracted components.

    Type, ordinal, specialty and city are compared; an absent ordinal or
    unknown specialty on either side counts as agreement. Two different
    cities always rule the pair out; otherwise three of the four checks
    must agree.

    Examples:
        "Primeira Vara do Trabalho de Franca" vs "1ª Vara do Trabalho - Franca" → True
        "Franca" vs "Vara do Trabalho de São José dos Campos" → False
    """
    text_a = _comparison_form(name_a)
    text_b = _comparison_form(name_b)
    if text_a == text_b:
        return True
    if not text_a or not text_b:
        return False

    comp_a = extract(text_a)
    comp_b = extract(text_b)

    city_match = (
        comp_a.city == comp_b.city
        or comp_a.city in comp_b.city
        or comp_b.city in comp_a.city
    )
    if comp_a.city and comp_b.city and not city_match:
        return False

    checks = (
        comp_a.type is comp_b.type,
        comp_a.ordinal is None or comp_b.ordinal is None or comp_a.ordinal == comp_b.ordinal,
        Specialty.UNKNOWN in (comp_a.specialty, comp_b.specialty)
        or comp_a.specialty is comp_b.specialty,
        city_match,
    )
    return sum(checks) >= 3
