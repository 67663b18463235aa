"""
Resolution of a query against an ordered registry of canonical names.

resolve() is the primary operation. resolve_with_aliases(), suggest_similar()
and best_match() are diagnostics a caller runs explicitly, typically after
an empty result; resolve() never falls back to them.
"""

from __future__ import annotations

from typing import Callable, Iterable, Mapping, Optional, Sequence

from .aliases import DEFAULT_ALIASES, apply_aliases
from .matching import classify, ratio
from .models import Match, MatchKind, MatchResult, Suggestion
from .normalizer import normalize


def _collect(
    query: Optional[str],
    query_form: str,
    registry: Iterable[str],
    form: Callable[[str], str],
) -> MatchResult:
    matches = []
    for entry in registry:
        kind = classify(form(entry), query_form)
        if kind is not MatchKind.NONE:
            matches.append(Match(canonical=entry, kind=kind))
    return MatchResult(query=query if isinstance(query, str) else "", matches=tuple(matches))


def resolve(query: Optional[str], registry: Iterable[str]) -> MatchResult:
    """
    Find every registry entry equivalent to the query.

    Matches keep registry order and are not de-duplicated: a registry may
    hold distinct units sharing a display name.

    Args:
        query: Raw query text
        registry: Canonical names, in source order

    Returns:
        MatchResult with exact and inclusion matches
    """
    return _collect(query, normalize(query), registry, normalize)


def resolve_with_aliases(
    query: Optional[str],
    registry: Iterable[str],
    aliases: Optional[Mapping[str, str]] = DEFAULT_ALIASES,
) -> MatchResult:
    """Like resolve(), with abbreviations expanded on both sides first."""
    return _collect(
        query,
        apply_aliases(normalize(query), aliases),
        registry,
        lambda entry: apply_aliases(normalize(entry), aliases),
    )


def _longest_tokens(normalized: str, count: int = 2) -> list[str]:
    tokens = [t for t in normalized.split(" ") if t and t != "-"]
    # sorted() is stable, so equal lengths keep query order
    return sorted(tokens, key=len, reverse=True)[:count]


def suggest_similar(
    query: Optional[str],
    registry: Sequence[str],
    *,
    limit: Optional[int] = 10,
    min_score: float = 0.8,
    aliases: Optional[Mapping[str, str]] = DEFAULT_ALIASES,
) -> list[Suggestion]:
    """
    Suggest registry entries close to a query that did not resolve.

    Both sides are compared after alias expansion. An entry qualifies when
    its form contains the two longest tokens of the query, or when its
    similarity reaches min_score. A query made only of separators has no
    tokens and qualifies entries by similarity alone. Suggestions are
    ordered by score, ties in registry order.

    Args:
        query: Raw query text
        registry: Canonical names
        limit: Maximum number of suggestions, None for all
        min_score: Similarity threshold for entries lacking the tokens
        aliases: Variant table, None to compare plain normalized forms

    Returns:
        List of Suggestion, possibly empty
    """
    query_norm = apply_aliases(normalize(query), aliases)
    if not query_norm or not registry:
        return []

    tokens = _longest_tokens(query_norm)
    suggestions = []
    for entry in registry:
        entry_norm = apply_aliases(normalize(entry), aliases)
        if not entry_norm:
            continue
        score = ratio(entry_norm, query_norm)
        if tokens and all(token in entry_norm for token in tokens):
            suggestions.append(Suggestion(canonical=entry, score=score, reason="tokens"))
        elif score >= min_score:
            suggestions.append(Suggestion(canonical=entry, score=score, reason="similarity"))

    suggestions.sort(key=lambda s: s.score, reverse=True)
    if limit is not None:
        suggestions = suggestions[:limit]
    return suggestions


def best_match(
    query: Optional[str],
    registry: Iterable[str],
    *,
    aliases: Optional[Mapping[str, str]] = DEFAULT_ALIASES,
) -> Optional[Suggestion]:
    """Most similar registry entry after alias expansion; the earliest one wins ties."""
    query_norm = apply_aliases(normalize(query), aliases)
    best: Optional[Suggestion] = None
    for entry in registry:
        score = ratio(apply_aliases(normalize(entry), aliases), query_norm)
        if best is None or score > best.score:
            best = Suggestion(canonical=entry, score=score, reason="similarity")
    return best
