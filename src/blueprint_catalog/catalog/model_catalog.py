# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Catalog aggregate models shared by the loader and the view layer."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Final

from .checksum import compute_catalog_checksum
from .model_template import TemplateRecord
from .normalizer import SkippedRecord, normalize_catalog
from .types import JSONValue

REVISION_LENGTH: Final[int] = 12


@dataclass(frozen=True, slots=True)
class TagFacet:
    """Tag name paired with the number of templates carrying it."""

    tag: str
    count: int


@dataclass(frozen=True, slots=True, eq=False)
class CatalogSnapshot:
    """Normalized catalog records loaded from one source revision.

    Snapshots are never mutated; reloading the catalog produces a new
    snapshot, so identity is what distinguishes two revisions.
    """

    records: tuple[TemplateRecord, ...]
    checksum: str = ""
    source: str = ""
    skipped: tuple[SkippedRecord, ...] = ()
    _by_id: Mapping[str, TemplateRecord] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Index records by identifier for detail lookups."""

        object.__setattr__(self, "_by_id", {record.id: record for record in self.records})

    @classmethod
    def from_raw(
        cls,
        entries: Sequence[JSONValue],
        *,
        payload: bytes = b"",
        source: str = "",
    ) -> CatalogSnapshot:
        """Normalize raw catalog entries into a snapshot.

        Args:
            entries: Raw catalog entries in catalog order.
            payload: Original catalog bytes used for the checksum.
            source: Human-readable catalog location.

        Returns:
            CatalogSnapshot: Snapshot holding uniquely keyed records.
        """

        result = normalize_catalog(entries)
        return cls(
            records=result.records,
            checksum=compute_catalog_checksum(payload) if payload else "",
            source=source,
            skipped=result.skipped,
        )

    @property
    def revision(self) -> str:
        """Return a short label for the catalog revision derived from its checksum."""

        return self.checksum[:REVISION_LENGTH] if self.checksum else "unversioned"

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[TemplateRecord]:
        return iter(self.records)

    def get(self, template_id: str) -> TemplateRecord | None:
        """Return the record registered under ``template_id`` if any."""

        return self._by_id.get(template_id)

    def tag_facets(self) -> tuple[TagFacet, ...]:
        """Return tag usage counts, most common first and then alphabetical.

        Returns:
            tuple[TagFacet, ...]: One facet per distinct tag in the catalog.
        """

        counter: Counter[str] = Counter()
        for record in self.records:
            counter.update(set(record.tags))
        ordered = sorted(counter.items(), key=lambda item: (-item[1], item[0].casefold(), item[0]))
        return tuple(TagFacet(tag=tag, count=count) for tag, count in ordered)


__all__ = ["CatalogSnapshot", "TagFacet"]
