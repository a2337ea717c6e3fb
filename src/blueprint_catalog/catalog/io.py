# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""I/O helpers for reading and writing catalog JSON documents."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import cast

from .errors import CatalogIntegrityError
from .types import JSONValue


def parse_catalog(payload: bytes | str, *, context: str) -> list[JSONValue]:
    """Decode a catalog payload and ensure it is a JSON array.

    Args:
        payload: Raw catalog document.
        context: Human-readable context string used in error messages.

    Returns:
        list[JSONValue]: Raw catalog entries in document order.

    Raises:
        CatalogIntegrityError: If the payload is not valid JSON or not an array.
    """
    try:
        document = cast(JSONValue, json.loads(payload))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise CatalogIntegrityError(f"{context}: invalid JSON ({exc})") from exc
    if not isinstance(document, list):
        raise CatalogIntegrityError(f"{context}: expected an array, got {type(document).__name__}")
    return document


def load_catalog_document(path: Path) -> tuple[bytes, list[JSONValue]]:
    """Read a catalog file and return both its raw bytes and parsed entries.

    Args:
        path: Filesystem path to the catalog document.

    Returns:
        tuple[bytes, list[JSONValue]]: Original payload and decoded entries.

    Raises:
        FileNotFoundError: If the catalog document is missing.
        CatalogIntegrityError: If the document is not a JSON array.
    """
    if not path.exists():
        raise FileNotFoundError(path)
    payload = path.read_bytes()
    return payload, parse_catalog(payload, context=str(path))


def dump_catalog(entries: Sequence[JSONValue]) -> str:
    """Serialise catalog entries using the canonical two-space layout."""

    return json.dumps(list(entries), indent=2, ensure_ascii=False)


__all__ = ["dump_catalog", "load_catalog_document", "parse_catalog"]
