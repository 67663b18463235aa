"""
Component extraction for normalized unit names.

The city heuristic is positional and tuned for the common surface pattern
"<type> <ordinal> de <specialty> de <city>"; it is not a place-name parser.
"""

from __future__ import annotations

import re
from typing import Optional

from .models import Components, Specialty, UnitType
from .normalizer import convert_spelled_ordinals

# Priority order, not position in the text
TYPE_KEYWORDS = (UnitType.VARA, UnitType.JUIZADO, UnitType.TRIBUNAL)
SPECIALTY_KEYWORDS = (Specialty.TRABALHO, Specialty.CIVEL, Specialty.CRIMINAL)

ORDINAL_PATTERN = re.compile(r"(\d+)[ªº°]?")
CITY_MARKER = " de "


def extract_type(text: str) -> UnitType:
    for unit_type in TYPE_KEYWORDS:
        if unit_type.value in text:
            return unit_type
    return UnitType.UNKNOWN


def extract_ordinal(text: str) -> Optional[int]:
    match = ORDINAL_PATTERN.search(convert_spelled_ordinals(text))
    if not match:
        return None
    return int(match.group(1))


def extract_specialty(text: str) -> Specialty:
    for specialty in SPECIALTY_KEYWORDS:
        if specialty.value in text:
            return specialty
    return Specialty.UNKNOWN


def extract_city(text: str, specialty: Specialty = Specialty.UNKNOWN) -> str:
    """
    Locate the city part of a normalized name.

    With a specialty, the city follows the first " de " after the specialty
    keyword; when nothing follows, the whole text is returned. Without a
    specialty, the city follows the last " de " in the text.

    Examples:
        "2 vara de trabalho de sao jose de campos" → "sao jose de campos"
        "juizado especial de franca" → "franca"
        "limeira" → "limeira"
    """
    if specialty is not Specialty.UNKNOWN:
        start = text.find(specialty.value)
        if start != -1:
            marker = text.find(CITY_MARKER, start + len(specialty.value))
            if marker != -1:
                return text[marker + len(CITY_MARKER):].strip()
        return text.strip()

    marker = text.rfind(CITY_MARKER)
    if marker != -1:
        return text[marker + len(CITY_MARKER):].strip()
    return text.strip()


def extract(normalized: Optional[str]) -> Components:
    """
    Decompose a normalized name into type, ordinal, specialty and city.

    Extraction is best-effort and never fails: unrecognized fields stay
    unknown and the city falls back to the whole text.

    Args:
        normalized: Output of normalize()

    Returns:
        The extracted Components
    """
    text = normalized if isinstance(normalized, str) else ""
    specialty = extract_specialty(text)
    return Components(
        type=extract_type(text),
        ordinal=extract_ordinal(text),
        specialty=specialty,
        city=extract_city(text, specialty),
    )
