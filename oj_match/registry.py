from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_NAME_FIELD = "ds_orgao_julgador"


class RegistryError(Exception):
    """Raised when a registry or name list cannot be read."""


def _parse(path: Path, text: str) -> Any:
    suffix = path.suffix.lower()
    try:
        if suffix == ".json":
            return json.loads(text)
        if suffix in {".yaml", ".yml"}:
            return yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise RegistryError(f"Malformed {suffix[1:]} in {path}: {exc}") from exc
    return [
        line.strip()
        for line in text.splitlines()
        if line.strip() and not line.lstrip().startswith("#")
    ]


def _entry_name(item: Any, name_field: str) -> str | None:
    if isinstance(item, str):
        return item
    if isinstance(item, dict):
        value = item.get(name_field)
        if isinstance(value, str):
            return value
    return None


def load_entries(path: Path, name_field: str = DEFAULT_NAME_FIELD) -> list[str]:
    """
    Read unit names from a JSON, YAML or plain text file.

    JSON and YAML files hold a list of names or a list of records carrying
    ``name_field``; text files hold one name per line.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RegistryError(f"Could not read {path}: {exc}") from exc

    data = _parse(path, text)
    if data is None:
        return []
    if not isinstance(data, list):
        raise RegistryError(f"Expected a list of names in {path}, got {type(data).__name__}")

    names: list[str] = []
    for index, item in enumerate(data):
        name = _entry_name(item, name_field)
        if name is None or not name.strip():
            logger.warning("Skipping entry %d in %s: no usable %r", index, path, name_field)
            continue
        names.append(name)
    logger.debug("Loaded %d names from %s", len(names), path)
    return names


def load_registry(path: Path, name_field: str = DEFAULT_NAME_FIELD) -> list[str]:
    names = load_entries(path, name_field)
    if not names:
        logger.warning("Registry %s is empty", path)
    return names
