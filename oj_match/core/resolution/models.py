"""
Domain models for organizational unit resolution.

These are pure data models with no dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class UnitType(str, Enum):
    VARA = "vara"
    JUIZADO = "juizado"
    TRIBUNAL = "tribunal"
    UNKNOWN = "unknown"


class Specialty(str, Enum):
    TRABALHO = "trabalho"
    CIVEL = "civel"
    CRIMINAL = "criminal"
    UNKNOWN = "unknown"


class MatchKind(str, Enum):
    EXACT = "exact"
    INCLUSION = "inclusion"
    NONE = "none"


class CheckStatus(str, Enum):
    MATCHED = "matched"
    CORRECTED = "corrected"
    SUGGESTED = "suggested"
    NOT_FOUND = "not_found"


@dataclass(frozen=True, slots=True)
class Components:
    """
    Structured fields decomposed from a normalized unit name.

    Example:
        "2 vara de trabalho de sao jose de campos"
        - type: UnitType.VARA
        - ordinal: 2
        - specialty: Specialty.TRABALHO
        - city: "sao jose de campos"
    """
    type: UnitType = UnitType.UNKNOWN
    ordinal: Optional[int] = None
    specialty: Specialty = Specialty.UNKNOWN
    city: str = ""


@dataclass(frozen=True, slots=True)
class Match:
    canonical: str
    """Registry entry exactly as supplied"""

    kind: MatchKind


@dataclass(frozen=True)
class MatchResult:
    """
    Result of resolving one query against a registry.

    An empty ``matches`` tuple is the "not found" outcome, not an error.
    """
    query: str
    matches: tuple[Match, ...] = field(default_factory=tuple)

    @property
    def found(self) -> bool:
        return bool(self.matches)

    @property
    def exact(self) -> tuple[Match, ...]:
        return tuple(m for m in self.matches if m.kind is MatchKind.EXACT)

    @property
    def inclusion(self) -> tuple[Match, ...]:
        return tuple(m for m in self.matches if m.kind is MatchKind.INCLUSION)

    def first(self) -> Optional[Match]:
        """Preferred match: the first exact one, else the first inclusion one."""
        exact = self.exact
        if exact:
            return exact[0]
        return self.matches[0] if self.matches else None


@dataclass(frozen=True, slots=True)
class Suggestion:
    canonical: str
    score: float
    """Similarity of the normalized forms (0.0 to 1.0)"""

    reason: str
    """Why the entry was suggested (tokens, similarity)"""


@dataclass(frozen=True, slots=True)
class EntryCheck:
    original: str
    status: CheckStatus
    canonical: Optional[str] = None
    score: Optional[float] = None
    kind: Optional[MatchKind] = None
    """Match kind, unset when the components decided the match"""

    via: Optional[str] = None
    """Stage that matched the name (resolve, aliases, components)"""


@dataclass(frozen=True)
class CheckReport:
    """Outcome of validating a configured list of names against a registry."""
    entries: tuple[EntryCheck, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not any(e.status is CheckStatus.NOT_FOUND for e in self.entries)

    def count(self, status: CheckStatus) -> int:
        return sum(1 for e in self.entries if e.status is status)

    def by_status(self, status: CheckStatus) -> list[EntryCheck]:
        return [e for e in self.entries if e.status is status]
