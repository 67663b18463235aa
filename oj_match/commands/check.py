from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from ..config import MatchingSettings
from ..core.resolution import CheckReport, CheckStatus, EntryCheck, check_entries
from ..registry import load_entries
from .output import error, ok as ok_line, score, warning

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CheckCommandReport:
    ok: bool
    report: CheckReport
    checks: list[str]


def _matched_label(entry: EntryCheck) -> str:
    if entry.kind is None:
        return entry.via or "matched"
    if entry.via == "aliases":
        return f"{entry.kind.value} via aliases"
    return entry.kind.value


def run(
    names_path: Path,
    registry: Sequence[str],
    matching: MatchingSettings,
    *,
    name_field: str,
) -> CheckCommandReport:
    configured = load_entries(names_path, name_field)
    report = check_entries(
        configured,
        registry,
        confident=matching.confident_similarity,
        suggest=matching.suggestion_similarity,
        aliases=matching.aliases,
    )

    checks: list[str] = []
    for entry in report.entries:
        match entry.status:
            case CheckStatus.MATCHED:
                checks.append(ok_line(entry.original, f"{_matched_label(entry)}: {entry.canonical}"))
            case CheckStatus.CORRECTED:
                checks.append(
                    warning(entry.original, f"corrected to {entry.canonical}, {score(entry.score)}")
                )
            case CheckStatus.SUGGESTED:
                checks.append(
                    warning(entry.original, f"did you mean {entry.canonical}? {score(entry.score)}")
                )
            case CheckStatus.NOT_FOUND:
                logger.warning("Configured unit not found in registry: %s", entry.original)
                checks.append(error(entry.original, "not found"))

    summary = ", ".join(
        f"{report.count(status)} {status.value}" for status in CheckStatus
    )
    checks.append(f"Total: {len(report.entries)} ({summary})")
    return CheckCommandReport(ok=report.ok, report=report, checks=checks)
