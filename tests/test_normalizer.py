# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for run-time catalog normalization."""

from __future__ import annotations

import logging

import pytest

from blueprint_catalog.catalog.normalizer import normalize, normalize_catalog


def test_distinct_ids_pass_through_in_order() -> None:
    records = normalize(
        [
            {"id": "b", "name": "Beta", "tags": []},
            {"id": "a", "name": "Alpha", "tags": []},
        ],
    )
    assert [record.id for record in records] == ["b", "a"]
    assert [record.name for record in records] == ["Beta", "Alpha"]


def test_duplicate_id_is_rekeyed_from_name() -> None:
    records = normalize(
        [
            {"id": "ghost", "name": "Ghost", "tags": ["cms", "blog"]},
            {"id": "ghost", "name": "Ghost Dup", "tags": ["cms"]},
        ],
    )
    assert [record.id for record in records] == ["ghost", "Ghost Dup"]
    assert records[1].tags == ("cms",)


def test_repeated_name_gets_position_suffix() -> None:
    records = normalize(
        [
            {"id": "ghost", "name": "Ghost"},
            {"id": "ghost", "name": "Ghost"},
        ],
    )
    assert [record.id for record in records] == ["ghost", "Ghost-1"]


def test_missing_id_uses_name() -> None:
    records = normalize([{"name": "Nextcloud", "tags": ["storage"]}])
    assert records[0].id == "Nextcloud"
    assert records[0].description == ""
    assert records[0].version == ""


def test_fallback_never_overwrites_existing_key() -> None:
    records = normalize(
        [
            {"id": "Ghost", "name": "Anything"},
            {"id": "ghost", "name": "Ghost"},
            {"id": "ghost", "name": "Ghost"},
        ],
    )
    ids = [record.id for record in records]
    assert len(ids) == len(set(ids)) == 3
    assert ids[0] == "Ghost"
    assert records[0].name == "Anything"


def test_output_ids_are_pairwise_distinct() -> None:
    raw = [{"id": "x", "name": "Same"} for _ in range(6)]
    records = normalize(raw)
    assert len(records) == 6
    assert len({record.id for record in records}) == 6


def test_malformed_entries_are_skipped_with_warning(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="blueprint_catalog"):
        result = normalize_catalog(
            [
                "not an object",
                {"id": "ok", "name": "Fine"},
                {"id": "bad", "name": "Broken", "tags": "cms"},
                {"id": "", "name": ""},
            ],
        )
    assert [record.id for record in result.records] == ["ok", "bad"]
    assert [skipped.position for skipped in result.skipped] == [0, 3]
    assert "skipping malformed catalog entry" in caplog.text


def test_unknown_keys_are_preserved() -> None:
    (record,) = normalize([{"id": "a", "name": "A", "category": "web"}])
    assert record.extra["category"] == "web"
    assert record.to_mapping()["category"] == "web"


def test_empty_catalog() -> None:
    assert normalize([]) == ()


def test_position_suffix_repeats_until_unique() -> None:
    records = normalize(
        [
            {"id": "Beta-2", "name": "Other"},
            {"id": "b", "name": "Beta"},
            {"id": "b", "name": "Beta"},
        ],
    )
    assert [record.id for record in records] == ["Beta-2", "b", "Beta-2-2"]


def test_mistyped_descriptive_fields_keep_the_record(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="blueprint_catalog"):
        result = normalize_catalog(
            [
                {"id": "ghost", "name": "Ghost", "version": 5, "tags": ["cms", 2]},
                {"id": "redis", "name": "Redis", "links": {"docs": 3, "github": "https://github.com/redis/redis"}},
                {"id": "nginx", "name": "Nginx", "tags": "web", "links": "https://nginx.org", "logo": {}},
            ],
        )
    assert result.skipped == ()
    ghost, redis, nginx = result.records
    assert ghost.version == "5"
    assert ghost.tags == ("cms", "2")
    assert redis.links.docs == "3"
    assert redis.links.github == "https://github.com/redis/redis"
    assert nginx.tags == ()
    assert nginx.logo is None
    assert nginx.links.to_mapping() == {}
    assert "converted 'version'" in caplog.text


def test_mistyped_values_survive_serialisation() -> None:
    (record,) = normalize([{"id": "nginx", "name": "Nginx", "tags": "web", "links": {"docs": 3}}])
    payload = record.to_mapping()
    assert payload["tags"] == "web"
    assert payload["links"] == {"docs": 3}
