"""
Abbreviation and variant expansion for unit names.

Configured lists are often typed by hand: "VT Franca", "DIVEX Limeira",
"Rib. Preto". An alias table maps such variants to the long form used by
the registry. Expansion is applied by the diagnostics (validation and
suggestions) before comparing names; normalize() itself never expands.

Dots are folded into spaces before lookup, so "v.t." and "s. jose" are
written in the table as "v t" and "s jose".
"""

from __future__ import annotations

import re
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping, Optional

from .normalizer import normalize

DEFAULT_ALIASES: Mapping[str, str] = MappingProxyType({
    # Varas do Trabalho
    "vt": "vara do trabalho",
    "v t": "vara do trabalho",
    "vara trabalhista": "vara do trabalho",
    # Divisão de Execução
    "divex": "divisao de execucao",
    "div execucao": "divisao de execucao",
    "div de execucao": "divisao de execucao",
    "divisao execucao": "divisao de execucao",
    # Conciliation centres
    "ccp": "cejusc",
    "centro judiciario": "cejusc",
    "centro de conciliacao": "cejusc",
    "centro conciliacao": "cejusc",
    # Tribunal
    "trt": "tribunal regional do trabalho",
    "tribunal reg trabalho": "tribunal regional do trabalho",
    "trib regional": "tribunal regional",
    "gab desembargador": "gabinete desembargador",
    "gabinete des": "gabinete desembargador",
    "secao espec": "secao especializada",
    # Cities
    "rib preto": "ribeirao preto",
    "pres prudente": "presidente prudente",
    "s carlos": "sao carlos",
    "s jose dos campos": "sao jose dos campos",
    "s j dos campos": "sao jose dos campos",
    "s jose do rio preto": "sao jose do rio preto",
    "s j rio pardo": "sao jose do rio pardo",
    "sao jose rio pardo": "sao jose do rio pardo",
    "s bernardo": "sao bernardo do campo",
    "s bernardo do campo": "sao bernardo do campo",
    "sao bernardo": "sao bernardo do campo",
    "sao bernardo do campo": "sao bernardo do campo",
})

DOT_PATTERN = re.compile(r"\.")


def _alias_form(text: str) -> str:
    return normalize(DOT_PATTERN.sub(" ", text))


@lru_cache(maxsize=32)
def _compile(items: tuple[tuple[str, str], ...]) -> tuple[Optional[re.Pattern[str]], dict[str, str]]:
    table: dict[str, str] = {}
    for variant, canonical in items:
        key = _alias_form(variant)
        if key:
            table[key] = _alias_form(canonical)
    if not table:
        return None, table
    # Longest first, so "s bernardo do campo" wins over "s bernardo"
    alternation = "|".join(re.escape(key) for key in sorted(table, key=len, reverse=True))
    return re.compile(rf"(?<!\w)(?:{alternation})(?!\w)"), table


def apply_aliases(normalized: str, aliases: Optional[Mapping[str, str]] = DEFAULT_ALIASES) -> str:
    """
    Expand known variants in a normalized name.

    Every variant is replaced in a single pass on whole words, so an
    expansion is never expanded again. A name without any variant is
    returned unchanged.

    Examples:
        "vt franca" → "vara do trabalho franca"
        "divex - limeira" → "divisao de execucao - limeira"
        "1 vara do trabalho de s. jose dos campos" → "1 vara do trabalho de sao jose dos campos"
    """
    if not normalized or not aliases:
        return normalized
    pattern, table = _compile(tuple(sorted(aliases.items())))
    if pattern is None:
        return normalized
    expanded, count = pattern.subn(lambda m: table[m.group(0)], _alias_form(normalized))
    if not count:
        return normalized
    return normalize(expanded)
