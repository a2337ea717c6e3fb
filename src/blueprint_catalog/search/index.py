# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Weighted fuzzy search over normalized template records."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..catalog.model_template import TemplateRecord
from ..config import SearchConfig
from .scoring import combine, field_alignment, field_norm, fold


@dataclass(frozen=True, slots=True)
class FieldMatch:
    """Where a query matched inside one searchable field.

    ``start`` and ``end`` delimit the matched span of the case-folded field
    text; for ``tags`` that text is the tags joined by single spaces.
    """

    field: str
    distance: float
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class SearchHit:
    """Matched record with its relevance score (lower is better)."""

    record: TemplateRecord
    score: float
    matches: tuple[FieldMatch, ...]

    @property
    def matched_fields(self) -> tuple[str, ...]:
        """Return the names of the fields that matched, in weight order."""

        return tuple(match.field for match in self.matches)


@dataclass(frozen=True, slots=True)
class _FieldEntry:
    name: str
    weight: float
    text: str
    norm: float


def _field_text(record: TemplateRecord, name: str) -> str:
    if name == "tags":
        return " ".join(record.tags)
    value = getattr(record, name)
    return value if isinstance(value, str) else ""


@dataclass(frozen=True, slots=True, eq=False)
class SearchIndex:
    """Pre-folded field texts for every record of one catalog snapshot.

    Build instances with :func:`build_index`; an index is never updated in
    place, a new catalog gets a new index.
    """

    records: tuple[TemplateRecord, ...]
    options: SearchConfig
    _documents: tuple[tuple[_FieldEntry, ...], ...]

    def search_with_details(self, query: str) -> tuple[SearchHit, ...]:
        """Return scored hits for ``query`` ordered by descending relevance.

        Args:
            query: Free-text query; surrounding whitespace is ignored.

        Returns:
            tuple[SearchHit, ...]: Matches, best first. Records with equal
            scores keep their catalog order.
        """

        needle = fold(query.strip(), ignore_diacritics=self.options.ignore_diacritics)
        if not needle:
            return ()
        hits: list[SearchHit] = []
        for record, entries in zip(self.records, self._documents, strict=True):
            score = 1.0
            matched: list[FieldMatch] = []
            for entry in entries:
                alignment = field_alignment(needle, entry.text)
                if alignment.distance > self.options.threshold:
                    continue
                matched.append(
                    FieldMatch(
                        field=entry.name,
                        distance=alignment.distance,
                        start=alignment.start,
                        end=alignment.end,
                    ),
                )
                score *= combine(alignment.distance, weight=entry.weight, norm=entry.norm)
            if matched:
                hits.append(SearchHit(record=record, score=score, matches=tuple(matched)))
        hits.sort(key=lambda hit: hit.score)
        return tuple(hits)

    def search(self, query: str) -> tuple[TemplateRecord, ...]:
        """Return the records matching ``query``, most relevant first.

        A blank query matches every record in catalog order.
        """

        if not query.strip():
            return self.records
        return tuple(hit.record for hit in self.search_with_details(query))


def build_index(records: Sequence[TemplateRecord], options: SearchConfig | None = None) -> SearchIndex | None:
    """Build a search index over ``records``.

    Args:
        records: Normalized catalog records in catalog order.
        options: Matching parameters; defaults to :class:`SearchConfig`.

    Returns:
        SearchIndex | None: ``None`` for an empty catalog, meaning no text
        filtering is possible and every record passes through.
    """

    if not records:
        return None
    settings = options or SearchConfig()
    weights = settings.normalized_weights()
    documents: list[tuple[_FieldEntry, ...]] = []
    for record in records:
        entries: list[_FieldEntry] = []
        for name, weight in weights:
            text = fold(_field_text(record, name), ignore_diacritics=settings.ignore_diacritics)
            norm = 1.0 if settings.ignore_field_norm else field_norm(text, weight=settings.field_norm_weight)
            entries.append(_FieldEntry(name=name, weight=weight, text=text, norm=norm))
        documents.append(tuple(entries))
    return SearchIndex(records=tuple(records), options=settings, _documents=tuple(documents))


def search(index: SearchIndex | None, query: str) -> tuple[TemplateRecord, ...]:
    """Return records matching ``query`` or an empty tuple without an index.

    Args:
        index: Index returned by :func:`build_index`.
        query: Free-text query.

    Returns:
        tuple[TemplateRecord, ...]: Matches ordered by descending relevance.
    """

    if index is None:
        return ()
    return index.search(query)


__all__ = ["FieldMatch", "SearchHit", "SearchIndex", "build_index", "search"]
