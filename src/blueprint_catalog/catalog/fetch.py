# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Retrieval of the raw catalog and per-template documents.

Locations are either filesystem paths or ``http(s)`` URLs. A catalog fetch is
all-or-nothing: any failure raises :class:`CatalogLoadError` and no partial
catalog is ever returned.
"""

from __future__ import annotations

import asyncio
import http.client
import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import Final
from urllib.parse import urlparse

from .errors import CatalogIntegrityError, CatalogLoadError
from .io import parse_catalog
from .types import JSONValue

USER_AGENT: Final[str] = "blueprint-catalog/1.0"
DEFAULT_TIMEOUT: Final[float] = 10.0
_HTTP_NOT_FOUND: Final[int] = 404
FETCH_ERRORS: Final[tuple[type[Exception], ...]] = (OSError, ValueError, http.client.HTTPException)


@dataclass(frozen=True, slots=True)
class FetchedCatalog:
    """Raw catalog payload together with its decoded entries."""

    source: str
    payload: bytes
    entries: tuple[JSONValue, ...]


def is_remote(location: str | Path) -> bool:
    """Return ``True`` when ``location`` names an ``http(s)`` resource."""

    if isinstance(location, Path):
        return False
    return urlparse(location).scheme in {"http", "https"}


def read_resource(location: str | Path, *, timeout: float = DEFAULT_TIMEOUT) -> bytes | None:
    """Return the bytes stored at ``location`` or ``None`` when it does not exist.

    Args:
        location: Filesystem path or ``http(s)`` URL.
        timeout: Socket timeout applied to remote requests.

    Returns:
        bytes | None: Resource content, ``None`` for a missing file or HTTP 404.

    Raises:
        OSError: If the resource exists but cannot be read.
        ValueError: If ``location`` is not a well-formed URL.
        http.client.HTTPException: If the server breaks the HTTP protocol.
    """

    if is_remote(location):
        request = urllib.request.Request(str(location), headers={"User-Agent": USER_AGENT})
        opener = urllib.request.build_opener(urllib.request.HTTPSHandler(context=ssl.create_default_context()))
        try:
            with opener.open(request, timeout=timeout) as response:
                return bytes(response.read())
        except urllib.error.HTTPError as exc:
            if exc.code == _HTTP_NOT_FOUND:
                return None
            raise
    path = Path(location)
    if not path.is_file():
        return None
    return path.read_bytes()


def fetch_catalog(location: str | Path, *, timeout: float = DEFAULT_TIMEOUT) -> FetchedCatalog:
    """Fetch and decode the full catalog from ``location``.

    Args:
        location: Filesystem path or ``http(s)`` URL of ``meta.json``.
        timeout: Socket timeout applied to remote requests.

    Returns:
        FetchedCatalog: Payload and raw entries in document order.

    Raises:
        CatalogLoadError: On any failure: a malformed location, a missing or
            unreadable resource, or a payload that is not a JSON array.
    """

    source = str(location)
    try:
        payload = read_resource(location, timeout=timeout)
    except FETCH_ERRORS as exc:
        raise CatalogLoadError(f"Failed to fetch templates from {source}: {exc}", source=source) from exc
    if payload is None:
        raise CatalogLoadError(f"Failed to fetch templates: {source} not found", source=source)
    try:
        entries = parse_catalog(payload, context=source)
    except CatalogIntegrityError as exc:
        raise CatalogLoadError(str(exc), source=source) from exc
    return FetchedCatalog(source=source, payload=payload, entries=tuple(entries))


async def fetch_catalog_async(location: str | Path, *, timeout: float = DEFAULT_TIMEOUT) -> FetchedCatalog:
    """Fetch the catalog without blocking the running event loop.

    Args:
        location: Filesystem path or ``http(s)`` URL of ``meta.json``.
        timeout: Socket timeout applied to remote requests.

    Returns:
        FetchedCatalog: Payload and raw entries in document order.
    """

    return await asyncio.to_thread(fetch_catalog, location, timeout=timeout)


__all__ = [
    "DEFAULT_TIMEOUT",
    "FETCH_ERRORS",
    "FetchedCatalog",
    "fetch_catalog",
    "fetch_catalog_async",
    "is_remote",
    "read_resource",
]
