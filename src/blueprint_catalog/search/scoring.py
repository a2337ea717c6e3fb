# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Fuzzy field scoring built on :mod:`rapidfuzz`.

Distances range from ``0.0`` (exact match) to ``1.0`` (nothing in common).
The query is always the needle: when it fits inside the field text the best
aligned window is scored, so a match anywhere in the field counts.
"""

from __future__ import annotations

import math
import unicodedata
from dataclasses import dataclass
from typing import Final

from rapidfuzz import fuzz

PERFECT_MATCH_FLOOR: Final[float] = 2.220446049250313e-16
NO_MATCH: Final[float] = 1.0


@dataclass(frozen=True, slots=True)
class FieldAlignment:
    """Fuzzy distance of one field plus the matched span of its text."""

    distance: float
    start: int
    end: int


def fold(text: str, *, ignore_diacritics: bool = False) -> str:
    """Return ``text`` prepared for case-insensitive comparison.

    Args:
        text: Raw field or query text.
        ignore_diacritics: Strip combining marks so ``café`` equals ``cafe``.

    Returns:
        str: Case-folded text.
    """

    folded = text.casefold()
    if ignore_diacritics:
        decomposed = unicodedata.normalize("NFKD", folded)
        folded = "".join(char for char in decomposed if not unicodedata.combining(char))
    return folded


def field_alignment(query: str, text: str) -> FieldAlignment:
    """Return the fuzzy distance of a folded query and where it lands in ``text``.

    Args:
        query: Folded, non-empty query.
        text: Folded field text.

    Returns:
        FieldAlignment: Distance in ``[0.0, 1.0]`` plus the ``[start, end)``
        span of ``text`` that produced it. Offsets index the folded text.
    """

    if not query or not text:
        return FieldAlignment(distance=NO_MATCH, start=0, end=0)
    if len(query) <= len(text):
        alignment = fuzz.partial_ratio_alignment(query, text)
        if alignment is not None:
            return FieldAlignment(
                distance=1.0 - alignment.score / 100.0,
                start=alignment.dest_start,
                end=alignment.dest_end,
            )
    return FieldAlignment(distance=1.0 - fuzz.ratio(query, text) / 100.0, start=0, end=len(text))


def field_distance(query: str, text: str) -> float:
    """Return the fuzzy distance between a folded query and folded field text."""

    return field_alignment(query, text).distance


def field_norm(text: str, *, weight: float) -> float:
    """Return the length norm for a field, penalising long fields.

    Args:
        text: Folded field text.
        weight: Strength of the penalty; ``0`` disables it.

    Returns:
        float: Norm in ``(0.0, 1.0]`` rounded to three decimals.
    """

    tokens = max(len(text.split()), 1)
    return round(1.0 / math.pow(tokens, 0.5 * weight), 3)


def combine(distance: float, *, weight: float, norm: float) -> float:
    """Return one matched field's factor in a record's relevance score."""

    return math.pow(max(distance, PERFECT_MATCH_FLOOR), weight * norm)


__all__ = ["NO_MATCH", "FieldAlignment", "combine", "field_alignment", "field_distance", "field_norm", "fold"]
