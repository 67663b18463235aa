"""
Organizational unit name resolution.

This module handles:
- Name normalization (case, diacritics, hyphens, unit codes)
- Component extraction (type, ordinal, specialty, city)
- Equivalence matching (exact, ordinal elision, inclusion)
- Abbreviation expansion for diagnostics (VT, DIVEX, city short forms)
- Resolution of a query against a registry, with explicit diagnostics

All logic is pure: no I/O, no shared state, safe to call concurrently.
"""

from __future__ import annotations

from .aliases import DEFAULT_ALIASES, apply_aliases
from .extractor import extract
from .matching import classify, compare_components, equivalent, match_kind, similarity
from .models import (
    CheckReport,
    CheckStatus,
    Components,
    EntryCheck,
    Match,
    MatchKind,
    MatchResult,
    Specialty,
    Suggestion,
    UnitType,
)
from .normalizer import convert_spelled_ordinals, normalize
from .resolver import best_match, resolve, resolve_with_aliases, suggest_similar
from .validation import check_entries, check_entry

__all__ = [
    "DEFAULT_ALIASES",
    "CheckReport",
    "CheckStatus",
    "Components",
    "EntryCheck",
    "Match",
    "MatchKind",
    "MatchResult",
    "Specialty",
    "Suggestion",
    "UnitType",
    "apply_aliases",
    "best_match",
    "check_entries",
    "check_entry",
    "classify",
    "compare_components",
    "convert_spelled_ordinals",
    "equivalent",
    "extract",
    "match_kind",
    "normalize",
    "resolve",
    "resolve_with_aliases",
    "similarity",
    "suggest_similar",
]
