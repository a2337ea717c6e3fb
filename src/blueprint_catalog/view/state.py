# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""View state exposed to the rendering layer.

Every mutation builds a complete :class:`ViewSnapshot` and swaps it in with a
single assignment before listeners run, so readers never see a result list
paired with a stale count.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, cast

from ..cache import CacheInfo, memoize
from ..catalog.errors import CatalogLoadError
from ..catalog.loader import CatalogLoader
from ..catalog.model_catalog import CatalogSnapshot
from ..catalog.model_template import TemplateRecord
from ..catalog.types import JSONValue
from ..config import SearchConfig, ViewConfig
from .debounce import Debouncer
from .pipeline import SearchableCatalog, derive_result
from .scheduler import Scheduler

LOGGER = logging.getLogger(__name__)

RESULT_CACHE_SIZE = 32

SnapshotListener = Callable[["ViewSnapshot"], None]


class _MemoizedDerive(Protocol):
    def __call__(
        self,
        catalog: SearchableCatalog,
        query: str,
        selected_tags: frozenset[str],
    ) -> tuple[TemplateRecord, ...]: ...

    def cache_clear(self) -> None: ...

    def cache_metadata(self) -> CacheInfo: ...


class LoadStatus(str, Enum):
    """Lifecycle of the catalog backing a view."""

    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class QueryState:
    """The user's current search intent."""

    raw_query: str = ""
    debounced_query: str = ""
    selected_tags: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ViewSnapshot:
    """Read-only state published to the rendering layer.

    ``count`` is always derived from ``items``.
    """

    items: tuple[TemplateRecord, ...] = ()
    status: LoadStatus = LoadStatus.LOADING
    query: QueryState = field(default_factory=QueryState)
    error: str | None = None
    count: int = field(init=False)

    def __post_init__(self) -> None:
        """Derive ``count`` from ``items``."""

        object.__setattr__(self, "count", len(self.items))

    @property
    def is_empty(self) -> bool:
        """Return ``True`` for a loaded catalog with no visible templates."""

        return self.status is LoadStatus.READY and self.count == 0

    @property
    def has_filters(self) -> bool:
        """Return ``True`` when a query or tag facet is active."""

        return bool(self.query.raw_query.strip() or self.query.selected_tags)


def _unique_tags(tags: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(tag for tag in tags if tag))


class ViewState:
    """Single-threaded sink combining catalog, query and tag facets."""

    def __init__(
        self,
        *,
        scheduler: Scheduler,
        view_config: ViewConfig | None = None,
        search_config: SearchConfig | None = None,
        initial_query: str = "",
        initial_tags: Iterable[str] = (),
    ) -> None:
        """Create the view in the loading state.

        Args:
            scheduler: Timer source for query debouncing.
            view_config: Interactive behaviour settings.
            search_config: Matching parameters used when indexing catalogs.
            initial_query: Query text the view starts with (also the seed of
                the debounced query).
            initial_tags: Tags selected when the view starts.
        """

        settings = view_config or ViewConfig()
        self._search_config = search_config or SearchConfig()
        self._catalog: SearchableCatalog | None = None
        self._raw_query = initial_query
        self._tags = _unique_tags(initial_tags)
        self._status = LoadStatus.LOADING
        self._error: str | None = None
        self._listeners: list[SnapshotListener] = []
        self._derive = cast(_MemoizedDerive, memoize(maxsize=RESULT_CACHE_SIZE)(derive_result))
        self._debouncer: Debouncer[str] = Debouncer(
            initial_query,
            scheduler=scheduler,
            delay=settings.debounce_seconds,
        )
        self._debouncer.subscribe(self._on_debounced)
        self._snapshot = self._build_snapshot()

    @property
    def snapshot(self) -> ViewSnapshot:
        """Return the most recently published snapshot."""

        return self._snapshot

    @property
    def catalog(self) -> CatalogSnapshot | None:
        """Return the loaded catalog snapshot, if any."""

        return self._catalog.snapshot if self._catalog is not None else None

    @property
    def searchable(self) -> SearchableCatalog | None:
        """Return the indexed catalog backing the view, if loaded."""

        return self._catalog

    @property
    def debouncer(self) -> Debouncer[str]:
        """Return the debouncer feeding the text search."""

        return self._debouncer

    def result_cache_info(self) -> CacheInfo:
        """Return statistics of the memoized result derivation."""

        return self._derive.cache_metadata()

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register ``listener`` for every published snapshot.

        Args:
            listener: Callable receiving each new snapshot.

        Returns:
            Callable[[], None]: Function removing the listener again.
        """

        self._listeners.append(listener)
        return lambda: self._unsubscribe(listener)

    def set_query(self, text: str) -> None:
        """Update the raw query now; the search follows once typing pauses."""

        self._raw_query = text
        self._debouncer.push(text)
        self._publish()

    def toggle_tag(self, tag: str) -> None:
        """Select ``tag`` if it is not selected, otherwise deselect it."""

        if tag in self._tags:
            self._tags = tuple(selected for selected in self._tags if selected != tag)
        else:
            self._tags = _unique_tags((*self._tags, tag))
        self._publish()

    def add_tag(self, tag: str) -> None:
        """Select ``tag``, keeping the selection unchanged if already present."""

        self._tags = _unique_tags((*self._tags, tag))
        self._publish()

    def remove_tag(self, tag: str) -> None:
        """Deselect ``tag`` if selected."""

        self._tags = tuple(selected for selected in self._tags if selected != tag)
        self._publish()

    def set_tags(self, tags: Iterable[str]) -> None:
        """Replace the tag selection, keeping first-seen order for display."""

        self._tags = _unique_tags(tags)
        self._publish()

    def clear_filters(self) -> None:
        """Clear the query and tag selection immediately, without debouncing."""

        self._raw_query = ""
        self._tags = ()
        self._debouncer.push("")
        self._debouncer.flush()
        self._publish()

    def load(self, entries: Sequence[JSONValue], *, source: str = "") -> None:
        """Normalize raw catalog entries and make them the current catalog."""

        self.load_snapshot(CatalogSnapshot.from_raw(entries, source=source))

    def load_snapshot(self, snapshot: CatalogSnapshot) -> None:
        """Index ``snapshot`` and make it the current catalog.

        The previous catalog, its index and the results cached for it are
        dropped.
        """

        self._derive.cache_clear()
        self._catalog = SearchableCatalog.build(snapshot, self._search_config)
        self._status = LoadStatus.READY
        self._error = None
        self._publish()

    async def load_from(self, loader: CatalogLoader) -> None:
        """Fetch the catalog through ``loader`` and publish the outcome.

        A failed fetch moves the view to :attr:`LoadStatus.ERROR`; it is not
        retried.
        """

        self._status = LoadStatus.LOADING
        self._error = None
        self._publish()
        try:
            snapshot = await loader.load_snapshot_async()
        except CatalogLoadError as exc:
            self.fail(exc)
            return
        self.load_snapshot(snapshot)

    def fail(self, error: BaseException | str) -> None:
        """Enter the terminal error state with ``error`` as the user message."""

        LOGGER.error("error fetching templates: %s", error)
        self._derive.cache_clear()
        self._catalog = None
        self._status = LoadStatus.ERROR
        self._error = str(error)
        self._publish()

    def _on_debounced(self, _value: str) -> None:
        self._publish()

    def _build_snapshot(self) -> ViewSnapshot:
        query = QueryState(
            raw_query=self._raw_query,
            debounced_query=self._debouncer.value,
            selected_tags=self._tags,
        )
        items: tuple[TemplateRecord, ...] = ()
        if self._catalog is not None:
            items = self._derive(self._catalog, self._debouncer.value, frozenset(self._tags))
        return ViewSnapshot(items=items, status=self._status, query=query, error=self._error)

    def _publish(self) -> None:
        snapshot = self._build_snapshot()
        self._snapshot = snapshot
        LOGGER.debug("filtered templates updated: %d", snapshot.count)
        for listener in tuple(self._listeners):
            listener(snapshot)

    def _unsubscribe(self, listener: SnapshotListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)


__all__ = ["LoadStatus", "QueryState", "ViewSnapshot", "ViewState"]
