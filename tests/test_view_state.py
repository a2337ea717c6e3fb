# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the view state sink."""

from __future__ import annotations

import asyncio
from pathlib import Path

from blueprint_catalog.catalog.loader import CatalogLoader
from blueprint_catalog.config import ViewConfig
from blueprint_catalog.view.state import LoadStatus, ViewSnapshot, ViewState
from tests.helpers.scheduler import ManualScheduler


def _ids(snapshot: ViewSnapshot) -> list[str]:
    return [record.id for record in snapshot.items]


def _ready_view(scheduler: ManualScheduler, entries: list[dict[str, object]]) -> ViewState:
    view = ViewState(scheduler=scheduler)
    view.load(entries, source="memory")
    return view


def test_initial_snapshot_is_loading(scheduler: ManualScheduler) -> None:
    view = ViewState(scheduler=scheduler)
    snapshot = view.snapshot
    assert snapshot.status is LoadStatus.LOADING
    assert snapshot.items == ()
    assert snapshot.count == 0
    assert not snapshot.is_empty


def test_load_publishes_full_catalog(scheduler: ManualScheduler, sample_entries: list[dict[str, object]]) -> None:
    view = _ready_view(scheduler, sample_entries)
    snapshot = view.snapshot
    assert snapshot.status is LoadStatus.READY
    assert _ids(snapshot) == ["ghost", "redis", "postgres"]
    assert snapshot.count == len(snapshot.items) == 3


def test_query_waits_for_quiet_interval(scheduler: ManualScheduler, sample_entries: list[dict[str, object]]) -> None:
    view = _ready_view(scheduler, sample_entries)
    view.set_query("g")
    view.set_query("gh")
    view.set_query("ghst")
    assert view.snapshot.query.raw_query == "ghst"
    assert view.snapshot.query.debounced_query == ""
    assert view.snapshot.count == 3

    scheduler.advance(0.5)
    assert view.snapshot.query.debounced_query == "ghst"
    assert _ids(view.snapshot) == ["ghost"]


def test_tag_changes_apply_immediately(scheduler: ManualScheduler, sample_entries: list[dict[str, object]]) -> None:
    view = _ready_view(scheduler, sample_entries)
    view.toggle_tag("database")
    assert _ids(view.snapshot) == ["redis", "postgres"]
    view.toggle_tag("cache")
    assert _ids(view.snapshot) == ["redis"]
    view.toggle_tag("database")
    assert _ids(view.snapshot) == ["redis"]
    assert view.snapshot.query.selected_tags == ("cache",)


def test_set_tags_replaces_selection(scheduler: ManualScheduler, sample_entries: list[dict[str, object]]) -> None:
    view = _ready_view(scheduler, sample_entries)
    view.set_tags(["cms", "cms", "blog"])
    assert view.snapshot.query.selected_tags == ("cms", "blog")
    assert _ids(view.snapshot) == ["ghost"]
    view.set_tags([])
    assert view.snapshot.count == 3


def test_add_and_remove_tag(scheduler: ManualScheduler, sample_entries: list[dict[str, object]]) -> None:
    view = _ready_view(scheduler, sample_entries)
    view.add_tag("database")
    view.add_tag("database")
    assert view.snapshot.query.selected_tags == ("database",)
    view.remove_tag("database")
    view.remove_tag("missing")
    assert view.snapshot.query.selected_tags == ()


def test_no_match_is_empty_not_error(scheduler: ManualScheduler, sample_entries: list[dict[str, object]]) -> None:
    view = _ready_view(scheduler, sample_entries)
    view.set_tags(["nonexistent"])
    snapshot = view.snapshot
    assert snapshot.is_empty
    assert snapshot.status is LoadStatus.READY
    assert snapshot.has_filters


def test_clear_filters_skips_debounce(scheduler: ManualScheduler, sample_entries: list[dict[str, object]]) -> None:
    view = ViewState(scheduler=scheduler, initial_query="redis", initial_tags=["cache"])
    view.load(sample_entries)
    assert _ids(view.snapshot) == ["redis"]
    view.clear_filters()
    assert view.snapshot.query.debounced_query == ""
    assert view.snapshot.count == 3
    assert scheduler.active == []


def test_initial_query_applies_without_delay(
    scheduler: ManualScheduler,
    sample_entries: list[dict[str, object]],
) -> None:
    view = ViewState(scheduler=scheduler, initial_query="ghst")
    view.load(sample_entries)
    assert _ids(view.snapshot) == ["ghost"]


def test_listeners_see_consistent_snapshots(
    scheduler: ManualScheduler,
    sample_entries: list[dict[str, object]],
) -> None:
    view = ViewState(scheduler=scheduler)
    seen: list[ViewSnapshot] = []

    def listener(snapshot: ViewSnapshot) -> None:
        assert view.snapshot is snapshot
        seen.append(snapshot)

    unsubscribe = view.subscribe(listener)
    view.load(sample_entries)
    view.toggle_tag("cms")
    unsubscribe()
    view.toggle_tag("cms")
    assert len(seen) == 2
    assert all(snapshot.count == len(snapshot.items) for snapshot in seen)


def test_fail_enters_error_state(scheduler: ManualScheduler, sample_entries: list[dict[str, object]]) -> None:
    view = _ready_view(scheduler, sample_entries)
    view.fail("Failed to fetch templates")
    snapshot = view.snapshot
    assert snapshot.status is LoadStatus.ERROR
    assert snapshot.error == "Failed to fetch templates"
    assert snapshot.items == ()
    assert view.catalog is None


def test_reload_replaces_catalog(scheduler: ManualScheduler, sample_entries: list[dict[str, object]]) -> None:
    view = _ready_view(scheduler, sample_entries)
    first = view.searchable
    view.load(sample_entries[:1])
    assert view.searchable is not first
    assert _ids(view.snapshot) == ["ghost"]


def test_custom_debounce_delay(scheduler: ManualScheduler, sample_entries: list[dict[str, object]]) -> None:
    view = ViewState(scheduler=scheduler, view_config=ViewConfig(debounce_seconds=1.0))
    view.load(sample_entries)
    view.set_query("redis")
    scheduler.advance(0.5)
    assert view.snapshot.query.debounced_query == ""
    scheduler.advance(0.6)
    assert view.snapshot.query.debounced_query == "redis"


def test_load_from_file(catalog_file: Path) -> None:
    async def scenario() -> ViewState:
        view = ViewState(scheduler=asyncio.get_running_loop(), initial_tags=["database"])
        await view.load_from(CatalogLoader(location=catalog_file))
        return view

    view = asyncio.run(scenario())
    assert view.snapshot.status is LoadStatus.READY
    assert _ids(view.snapshot) == ["redis", "postgres"]
    assert view.catalog is not None
    assert view.catalog.checksum


def test_load_from_missing_file_sets_error(tmp_path: Path) -> None:
    async def scenario() -> ViewState:
        view = ViewState(scheduler=asyncio.get_running_loop())
        await view.load_from(CatalogLoader(location=tmp_path / "absent.json"))
        return view

    view = asyncio.run(scenario())
    assert view.snapshot.status is LoadStatus.ERROR
    assert view.snapshot.error is not None
    assert "Failed to fetch templates" in view.snapshot.error


def test_load_from_malformed_url_sets_error() -> None:
    async def scenario() -> ViewState:
        view = ViewState(scheduler=asyncio.get_running_loop())
        await view.load_from(CatalogLoader(location="http://[bad/meta.json"))
        return view

    view = asyncio.run(scenario())
    assert view.snapshot.status is LoadStatus.ERROR
    assert view.snapshot.error is not None
    assert "Failed to fetch templates" in view.snapshot.error


def test_reload_drops_results_cached_for_previous_catalog(
    scheduler: ManualScheduler,
    sample_entries: list[dict[str, object]],
) -> None:
    view = _ready_view(scheduler, sample_entries)
    for tag in ("cms", "database", "cache"):
        view.toggle_tag(tag)
        view.toggle_tag(tag)
    assert view.result_cache_info().current_size > 1

    view.load(sample_entries)
    assert view.result_cache_info().current_size == 1

    view.fail("Failed to fetch templates")
    assert view.result_cache_info().current_size == 0


def test_repeated_inputs_reuse_cached_result(
    scheduler: ManualScheduler,
    sample_entries: list[dict[str, object]],
) -> None:
    view = _ready_view(scheduler, sample_entries)
    view.toggle_tag("cms")
    view.toggle_tag("cms")
    assert view.result_cache_info().hits >= 1
