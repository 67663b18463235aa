"""
Text normalization for organizational unit names.

normalize() is the single canonical policy every comparison goes through.
All functions are pure and have no I/O dependencies.
"""

from __future__ import annotations

import re
import unicodedata

# Dash variants folded into the ASCII hyphen before hyphen canonicalization
DASH_PATTERN = re.compile("[‐‑‒–—―−]")
HYPHEN_PATTERN = re.compile(r"\s*-\s*")
WHITESPACE_PATTERN = re.compile(r"\s+")

# Unit codes that are registered as "<code> - <city>"
CODE_CITY_PATTERN = re.compile(
    r"^(liq\d+|exe\d+|dam|con\d+|divex|ccp)\s+(.+)$", re.IGNORECASE
)

SPELLED_ORDINALS = {
    "primeiro": "1", "primeira": "1",
    "segundo": "2", "segunda": "2",
    "terceiro": "3", "terceira": "3",
    "quarto": "4", "quarta": "4",
    "quinto": "5", "quinta": "5",
    "sexto": "6", "sexta": "6",
    "setimo": "7", "setima": "7",
    "oitavo": "8", "oitava": "8",
    "nono": "9", "nona": "9",
    "decimo": "10", "decima": "10",
}
SPELLED_ORDINAL_PATTERN = re.compile(
    r"\b(" + "|".join(SPELLED_ORDINALS) + r")\b", re.IGNORECASE
)

PREPOSITION_PATTERN = re.compile(r"\b(?:do|da|dos|das)\b")


def strip_diacritics(value: str) -> str:
    decomposed = unicodedata.normalize("NFD", value)
    return "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")


def normalize(text: object) -> str:
    """
    Canonicalize a raw unit name into its comparison form.

    Process:
    1. Lowercase
    2. Strip combining marks (NFD, drop category Mn)
    3. Fold dash variants into "-"
    4. Render every hyphen as " - "
    5. Collapse whitespace and trim
    6. Insert " - " between a leading unit code and the city

    Examples:
        "DAM - Jundiaí" → "dam - jundiai"
        "DAM Jundiai" → "dam - jundiai"
        "1ª Vara do Trabalho–Franca" → "1ª vara do trabalho - franca"

    Args:
        text: The raw name; anything that is not a string counts as empty

    Returns:
        The normalized name, "" for absent input
    """
    if not isinstance(text, str) or not text:
        return ""

    value = strip_diacritics(text.lower())
    value = DASH_PATTERN.sub("-", value)
    value = HYPHEN_PATTERN.sub(" - ", value)
    value = WHITESPACE_PATTERN.sub(" ", value).strip()

    if " - " not in value:
        value = CODE_CITY_PATTERN.sub(r"\1 - \2", value)

    return value


def convert_spelled_ordinals(text: str) -> str:
    """
    Rewrite spelled-out ordinals to digits.

    Examples:
        "primeira vara do trabalho" → "1 vara do trabalho"
        "decimo juizado" → "10 juizado"
    """
    if not text:
        return ""
    return SPELLED_ORDINAL_PATTERN.sub(
        lambda m: SPELLED_ORDINALS[m.group(1).lower()], text
    )


def standardize_prepositions(text: str) -> str:
    """Fold do/da/dos/das into "de" and drop hyphen separators."""
    if not text:
        return ""
    value = PREPOSITION_PATTERN.sub("de", text)
    value = HYPHEN_PATTERN.sub(" ", value)
    return WHITESPACE_PATTERN.sub(" ", value).strip()
