from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .core.resolution.aliases import DEFAULT_ALIASES
from .registry import DEFAULT_NAME_FIELD


class RegistrySettings(BaseModel):
    path: Optional[Path] = None
    name_field: str = DEFAULT_NAME_FIELD

    @field_validator("path", mode="before")
    @classmethod
    def _expand_path(cls, value: Optional[str | Path]) -> Optional[Path]:
        if value is None:
            return None
        return Path(value).expanduser().resolve()


class MatchingSettings(BaseModel):
    confident_similarity: float = Field(default=0.8, ge=0.0, le=1.0)
    suggestion_similarity: float = Field(default=0.5, ge=0.0, le=1.0)
    suggestion_min_score: float = Field(default=0.8, ge=0.0, le=1.0)
    max_suggestions: int = Field(default=10, ge=1)
    aliases: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_ALIASES))

    @field_validator("aliases", mode="before")
    @classmethod
    def _empty_aliases(cls, value: Optional[dict[str, str]]) -> dict[str, str]:
        # "aliases:" with no entries turns expansion off
        return {} if value is None else value


class CacheSettings(BaseModel):
    ttl_seconds: float = Field(default=30.0, ge=0.0)
    max_entries: int = Field(default=1024, ge=0)


class Settings(BaseModel):
    registry: RegistrySettings = RegistrySettings()
    matching: MatchingSettings = MatchingSettings()
    cache: CacheSettings = CacheSettings()

    @classmethod
    def load(cls, path: Path) -> "Settings":
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
        return cls.model_validate(raw or {})


def find_config(explicit_path: Optional[Path]) -> Optional[Path]:
    if explicit_path:
        if not explicit_path.exists():
            raise FileNotFoundError(f"Config file not found: {explicit_path}")
        return explicit_path
    cwd = Path.cwd()
    for candidate in (cwd / "oj-match.yaml", cwd / "oj-match.yml"):
        if candidate.exists():
            return candidate
    return None
