"""
Validation of configured unit names against the canonical registry.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Optional, Sequence

from .aliases import DEFAULT_ALIASES, apply_aliases
from .matching import compare_components, ratio
from .models import CheckReport, CheckStatus, EntryCheck, MatchResult
from .normalizer import normalize
from .resolver import best_match, resolve, resolve_with_aliases


def _matched(name: str, result: MatchResult, via: str) -> Optional[EntryCheck]:
    preferred = result.first()
    if preferred is None:
        return None
    return EntryCheck(
        original=name,
        status=CheckStatus.MATCHED,
        canonical=preferred.canonical,
        score=1.0,
        kind=preferred.kind,
        via=via,
    )


def check_entry(
    name: str,
    registry: Sequence[str],
    *,
    confident: float = 0.8,
    suggest: float = 0.5,
    aliases: Optional[Mapping[str, str]] = DEFAULT_ALIASES,
) -> EntryCheck:
    """
    Classify one configured name.

    Stages, first hit wins:
    1. The name resolves as written
    2. The name resolves once abbreviations are expanded on both sides
    3. The extracted components agree with a registry entry
    4. The most similar registry entry is offered as a correction above
       ``confident``, as a suggestion above ``suggest``, and the name is
       not found below that
    """
    matched = _matched(name, resolve(name, registry), "resolve")
    if matched is None and aliases:
        matched = _matched(name, resolve_with_aliases(name, registry, aliases), "aliases")
    if matched is not None:
        return matched

    query_form = apply_aliases(normalize(name), aliases)
    for entry in registry:
        entry_form = apply_aliases(normalize(entry), aliases)
        if compare_components(entry_form, query_form):
            return EntryCheck(
                original=name,
                status=CheckStatus.MATCHED,
                canonical=entry,
                score=ratio(entry_form, query_form),
                via="components",
            )

    candidate = best_match(name, registry, aliases=aliases)
    if candidate is None:
        return EntryCheck(original=name, status=CheckStatus.NOT_FOUND, score=0.0)
    if candidate.score > confident:
        status = CheckStatus.CORRECTED
    elif candidate.score > suggest:
        status = CheckStatus.SUGGESTED
    else:
        return EntryCheck(original=name, status=CheckStatus.NOT_FOUND, score=candidate.score)
    return EntryCheck(
        original=name,
        status=status,
        canonical=candidate.canonical,
        score=candidate.score,
    )


def check_entries(
    configured: Iterable[str],
    registry: Sequence[str],
    *,
    confident: float = 0.8,
    suggest: float = 0.5,
    aliases: Optional[Mapping[str, str]] = DEFAULT_ALIASES,
) -> CheckReport:
    entries = tuple(
        check_entry(name, registry, confident=confident, suggest=suggest, aliases=aliases)
        for name in configured
    )
    return CheckReport(entries=entries)
