# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Run-time deduplication that gives every catalog entry a unique identifier.

The normalizer only drops entries that are not JSON objects or that carry no
identifying information. Descriptive fields with the wrong JSON type are
converted or defaulted by :meth:`TemplateRecord.from_mapping` instead.

The first record presented under a raw ``id`` keeps it; later records sharing
that ``id`` (or lacking one) are re-keyed from their display name, with the
zero-based input position appended once the name has been seen before. This
is intentionally different from
:func:`blueprint_catalog.catalog.maintenance.dedupe_and_sort`, which discards
duplicates from the stored catalog.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from .model_template import TemplateRecord
from .types import ID_SEPARATOR, JSONValue

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SkippedRecord:
    """Diagnostic describing a raw entry the normalizer could not use."""

    position: int
    reason: str


@dataclass(frozen=True, slots=True)
class NormalizationResult:
    """Records produced by a normalization pass plus the skipped entries."""

    records: tuple[TemplateRecord, ...]
    skipped: tuple[SkippedRecord, ...] = ()


def normalize(records: Sequence[JSONValue]) -> tuple[TemplateRecord, ...]:
    """Return the normalized records for ``records``.

    Args:
        records: Raw catalog entries in catalog order.

    Returns:
        tuple[TemplateRecord, ...]: Records with pairwise-distinct identifiers.
    """

    return normalize_catalog(records).records


def normalize_catalog(records: Sequence[JSONValue]) -> NormalizationResult:
    """Normalize ``records`` and report the entries that had to be skipped.

    Args:
        records: Raw catalog entries in catalog order.

    Returns:
        NormalizationResult: Unique records in insertion order and skip diagnostics.
    """

    keyed: dict[str, TemplateRecord] = {}
    seen_names: set[str] = set()
    skipped: list[SkippedRecord] = []

    for position, raw in enumerate(records):
        context = f"catalog[{position}]"
        if not isinstance(raw, Mapping):
            skipped.append(_skip(position, f"{context}: expected a JSON object"))
            continue
        record = TemplateRecord.from_mapping(raw, context=context)

        key = record.id
        if not key or key in keyed:
            if not record.name:
                reason = f"{context}: cannot derive a unique id without a name"
                skipped.append(_skip(position, reason))
                continue
            key = _fallback_key(record.name, position, keyed=keyed, seen_names=seen_names)
            LOGGER.debug("re-keyed %s from %r to %r", context, record.id, key)

        keyed[key] = record.with_id(key)
        seen_names.add(record.name)

    return NormalizationResult(records=tuple(keyed.values()), skipped=tuple(skipped))


def _fallback_key(
    name: str,
    position: int,
    *,
    keyed: Mapping[str, TemplateRecord],
    seen_names: set[str],
) -> str:
    """Return the synthesized key for a record whose raw id is unusable.

    Args:
        name: Display name of the record.
        position: Zero-based position of the record in the raw catalog.
        keyed: Records accepted so far, keyed by identifier.
        seen_names: Display names encountered earlier in the pass.

    Returns:
        str: Identifier not yet present in ``keyed``.
    """

    candidate = name
    suffix = f"{ID_SEPARATOR}{position}"
    if candidate in seen_names or candidate in keyed:
        candidate = f"{name}{suffix}"
    while candidate in keyed:
        candidate = f"{candidate}{suffix}"
    return candidate


def _skip(position: int, reason: str) -> SkippedRecord:
    LOGGER.warning("skipping malformed catalog entry: %s", reason)
    return SkippedRecord(position=position, reason=reason)


__all__ = ["NormalizationResult", "SkippedRecord", "normalize", "normalize_catalog"]
