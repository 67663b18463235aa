from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from ..cache import ResolutionCache
from ..config import MatchingSettings
from ..core.resolution import MatchResult, Suggestion, suggest_similar
from .output import score

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ResolveReport:
    results: list[MatchResult] = field(default_factory=list)
    suggestions: dict[str, list[Suggestion]] = field(default_factory=dict)
    lines: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(result.found for result in self.results)


def run(
    cache: ResolutionCache,
    queries: Sequence[str],
    matching: MatchingSettings,
    *,
    suggest: bool = False,
) -> ResolveReport:
    report = ResolveReport()
    for query in queries:
        result = cache.resolve(query)
        report.results.append(result)
        report.lines.append(f"{query}:")
        if result.found:
            for match in result.matches:
                report.lines.append(f"  [{match.kind.value}] {match.canonical}")
            continue

        logger.info("No registry entry matches %r", query)
        report.lines.append("  not found")
        if not suggest:
            continue
        suggestions = suggest_similar(
            query,
            cache.registry,
            limit=matching.max_suggestions,
            min_score=matching.suggestion_min_score,
            aliases=matching.aliases,
        )
        report.suggestions[query] = suggestions
        for item in suggestions:
            report.lines.append(f"  ? {item.canonical} ({item.reason}, {score(item.score)})")
    return report
