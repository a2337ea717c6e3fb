# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tests.helpers.scheduler import ManualScheduler

SAMPLE_CATALOG: list[dict[str, object]] = [
    {
        "id": "ghost",
        "name": "Ghost",
        "description": "Publishing platform",
        "version": "5.0",
        "tags": ["cms", "blog"],
    },
    {
        "id": "redis",
        "name": "Redis",
        "description": "In-memory data store",
        "version": "7.2",
        "links": {"github": "https://github.com/redis/redis"},
        "tags": ["database", "cache"],
    },
    {
        "id": "postgres",
        "name": "Postgres",
        "description": "Relational database",
        "version": "16",
        "tags": ["database"],
    },
]


@pytest.fixture
def scheduler() -> ManualScheduler:
    """Return a scheduler advanced explicitly by the test."""
    return ManualScheduler()


@pytest.fixture
def sample_entries() -> list[dict[str, object]]:
    """Return a fresh copy of the sample catalog entries."""
    return json.loads(json.dumps(SAMPLE_CATALOG))


@pytest.fixture
def catalog_file(tmp_path: Path, sample_entries: list[dict[str, object]]) -> Path:
    """Write the sample catalog to ``meta.json`` and return its path."""
    path = tmp_path / "meta.json"
    path.write_text(json.dumps(sample_entries), encoding="utf-8")
    return path
