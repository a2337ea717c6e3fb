# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""High-level loader that materialises catalog snapshots."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .fetch import DEFAULT_TIMEOUT, FetchedCatalog, fetch_catalog, fetch_catalog_async
from .model_catalog import CatalogSnapshot

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class CatalogLoader:
    """Loader that fetches the raw catalog once and normalizes it."""

    location: str | Path
    timeout: float = DEFAULT_TIMEOUT

    def load_snapshot(self) -> CatalogSnapshot:
        """Fetch the catalog and produce a normalized snapshot.

        Returns:
            CatalogSnapshot: Snapshot of uniquely keyed template records.

        Raises:
            CatalogLoadError: If the catalog cannot be fetched or decoded.
        """

        return self._materialise(fetch_catalog(self.location, timeout=self.timeout))

    async def load_snapshot_async(self) -> CatalogSnapshot:
        """Asynchronous variant of :meth:`load_snapshot`.

        Returns:
            CatalogSnapshot: Snapshot of uniquely keyed template records.

        Raises:
            CatalogLoadError: If the catalog cannot be fetched or decoded.
        """

        fetched = await fetch_catalog_async(self.location, timeout=self.timeout)
        return self._materialise(fetched)

    @staticmethod
    def _materialise(fetched: FetchedCatalog) -> CatalogSnapshot:
        snapshot = CatalogSnapshot.from_raw(fetched.entries, payload=fetched.payload, source=fetched.source)
        LOGGER.info(
            "loaded %d templates from %s at revision %s (%d raw entries, %d skipped)",
            len(snapshot),
            fetched.source,
            snapshot.revision,
            len(fetched.entries),
            len(snapshot.skipped),
        )
        return snapshot


__all__ = ["CatalogLoader"]
