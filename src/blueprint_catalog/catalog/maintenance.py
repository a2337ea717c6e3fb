# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Repository hygiene for the stored catalog document.

Unlike the run-time normalizer, maintenance removes later duplicate ids
entirely (first occurrence wins) and re-sorts the stored catalog by id.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path

from .io import dump_catalog, load_catalog_document
from .schema import load_record_validator, record_errors
from .types import JSONValue

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DuplicateEntry:
    """Catalog entry removed because an earlier entry used the same id."""

    id: str
    name: str
    original_index: int


@dataclass(frozen=True, slots=True)
class MaintenanceReport:
    """Outcome of a :func:`dedupe_and_sort` run."""

    original: int
    duplicates: tuple[DuplicateEntry, ...]
    invalid: tuple[int, ...]
    final: int
    backup_path: Path | None

    @property
    def duplicates_removed(self) -> int:
        """Return the number of duplicate entries dropped."""

        return len(self.duplicates)


@dataclass(frozen=True, slots=True)
class EntryProblem:
    """Schema violations found for one stored catalog entry."""

    index: int
    id: str | None
    messages: tuple[str, ...]


def _display_name(item: Mapping[str, JSONValue]) -> str:
    name = item.get("name")
    return name if isinstance(name, str) and name else "Unknown"


def _sort_key(item: Mapping[str, JSONValue]) -> tuple[str, str]:
    identifier = str(item["id"])
    return identifier.casefold(), identifier


def dedupe_and_sort(
    path: Path,
    *,
    dry_run: bool = False,
    clock: Callable[[], float] = time.time,
) -> MaintenanceReport:
    """Remove duplicate ids from a stored catalog and sort it by id.

    A backup named ``<path>.backup.<epoch-ms>`` holding the previous content is
    written before the catalog is overwritten.

    Args:
        path: Catalog document to rewrite.
        dry_run: When ``True`` compute the report without touching the disk.
        clock: Source of the current time in seconds, used for the backup name.

    Returns:
        MaintenanceReport: Counts, removed duplicates, and the backup location.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        CatalogIntegrityError: If ``path`` is not a JSON array.
    """

    payload, entries = load_catalog_document(path)
    seen_ids: set[str] = set()
    duplicates: list[DuplicateEntry] = []
    invalid: list[int] = []
    unique: list[Mapping[str, JSONValue]] = []

    for index, item in enumerate(entries):
        if not isinstance(item, Mapping):
            LOGGER.warning("skipping invalid item at index %d: %r", index, item)
            invalid.append(index)
            continue
        identifier = item.get("id")
        if not isinstance(identifier, str) or not identifier:
            LOGGER.warning("skipping item without id at index %d: %s", index, _display_name(item))
            invalid.append(index)
            continue
        if identifier in seen_ids:
            LOGGER.warning("duplicate id found: %r (%s)", identifier, _display_name(item))
            duplicates.append(DuplicateEntry(id=identifier, name=_display_name(item), original_index=index))
            continue
        seen_ids.add(identifier)
        unique.append(item)

    unique.sort(key=_sort_key)

    backup_path: Path | None = None
    if not dry_run:
        backup_path = path.with_name(f"{path.name}.backup.{int(clock() * 1000)}")
        backup_path.write_bytes(payload)
        path.write_text(dump_catalog(unique) + "\n", encoding="utf-8")

    return MaintenanceReport(
        original=len(entries),
        duplicates=tuple(duplicates),
        invalid=tuple(invalid),
        final=len(unique),
        backup_path=backup_path,
    )


def validate_catalog(path: Path) -> tuple[EntryProblem, ...]:
    """Check every stored entry against the bundled template record schema.

    Args:
        path: Catalog document to inspect.

    Returns:
        tuple[EntryProblem, ...]: Problems per offending entry, empty when valid.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        CatalogIntegrityError: If ``path`` is not a JSON array.
    """

    _, entries = load_catalog_document(path)
    validator = load_record_validator()
    problems: list[EntryProblem] = []
    for index, item in enumerate(entries):
        messages = record_errors(validator, item)
        if not messages:
            continue
        identifier = item.get("id") if isinstance(item, Mapping) else None
        problems.append(
            EntryProblem(
                index=index,
                id=identifier if isinstance(identifier, str) else None,
                messages=messages,
            ),
        )
    return tuple(problems)


__all__ = ["DuplicateEntry", "EntryProblem", "MaintenanceReport", "dedupe_and_sort", "validate_catalog"]
