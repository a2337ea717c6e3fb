# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Composition of fuzzy search and tag facets into the visible result.

The stages run in a fixed order: text search narrows and reorders the
catalog, then the tag facet narrows further without reordering.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import dataclass

from ..catalog.model_catalog import CatalogSnapshot
from ..catalog.model_template import TemplateRecord
from ..config import SearchConfig
from ..search.index import SearchIndex, build_index


@dataclass(frozen=True, slots=True, eq=False)
class SearchableCatalog:
    """A catalog snapshot paired with the index built from it.

    Identity equality makes instances usable as memoization keys: a reload
    always produces a new instance.
    """

    snapshot: CatalogSnapshot
    index: SearchIndex | None

    @classmethod
    def build(cls, snapshot: CatalogSnapshot, options: SearchConfig | None = None) -> SearchableCatalog:
        """Index ``snapshot`` once and bundle both together."""

        return cls(snapshot=snapshot, index=build_index(snapshot.records, options))

    @property
    def records(self) -> tuple[TemplateRecord, ...]:
        """Return the normalized records in catalog order."""

        return self.snapshot.records


def filter_templates(
    records: Sequence[TemplateRecord],
    query: str,
    selected_tags: Collection[str],
    *,
    index: SearchIndex | None,
) -> tuple[TemplateRecord, ...]:
    """Return the records visible for ``query`` and ``selected_tags``.

    Args:
        records: Normalized catalog in catalog order.
        query: Debounced query text.
        selected_tags: Tags a record must all carry (logical AND).
        index: Index built over ``records``; ``None`` disables text search.

    Returns:
        tuple[TemplateRecord, ...]: Matches in relevance order, or in catalog
        order when no text search applied.
    """

    working: Sequence[TemplateRecord] = records
    if query.strip() and index is not None:
        working = index.search(query)
    if selected_tags:
        required = frozenset(selected_tags)
        working = [record for record in working if required.issubset(record.tags)]
    return tuple(working)


def derive_result(
    catalog: SearchableCatalog,
    query: str,
    selected_tags: frozenset[str],
) -> tuple[TemplateRecord, ...]:
    """Pure derivation of the filtered result from its three inputs."""

    return filter_templates(catalog.records, query, selected_tags, index=catalog.index)


__all__ = ["SearchableCatalog", "derive_result", "filter_templates"]
