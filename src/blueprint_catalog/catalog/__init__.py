# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Public export surface for the template catalog."""

from __future__ import annotations

from typing import Final

from .details import TemplateDetails, fetch_template_details, load_template_details
from .errors import CatalogError, CatalogIntegrityError, CatalogLoadError
from .fetch import FetchedCatalog, fetch_catalog, fetch_catalog_async
from .loader import CatalogLoader
from .maintenance import MaintenanceReport, dedupe_and_sort, validate_catalog
from .model_catalog import CatalogSnapshot, TagFacet
from .model_template import TemplateLinks, TemplateRecord
from .normalizer import NormalizationResult, SkippedRecord, normalize, normalize_catalog

__all__: Final[tuple[str, ...]] = (
    "CatalogError",
    "CatalogIntegrityError",
    "CatalogLoadError",
    "CatalogLoader",
    "CatalogSnapshot",
    "FetchedCatalog",
    "MaintenanceReport",
    "NormalizationResult",
    "SkippedRecord",
    "TagFacet",
    "TemplateDetails",
    "TemplateLinks",
    "TemplateRecord",
    "dedupe_and_sort",
    "fetch_catalog",
    "fetch_catalog_async",
    "fetch_template_details",
    "load_template_details",
    "normalize",
    "normalize_catalog",
    "validate_catalog",
)
