# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Search and filter the blueprint template catalog."""

from __future__ import annotations

from typing import Final

from .catalog import (
    CatalogLoader,
    CatalogLoadError,
    CatalogSnapshot,
    TemplateDetails,
    TemplateRecord,
    normalize,
)
from .config import Config, ConfigError, SearchConfig, ViewConfig, load_config
from .search import SearchIndex, build_index, search
from .view import Debouncer, LoadStatus, ViewSnapshot, ViewState, filter_templates

__version__: Final[str] = "1.0.0"

__all__: Final[tuple[str, ...]] = (
    "CatalogLoadError",
    "CatalogLoader",
    "CatalogSnapshot",
    "Config",
    "ConfigError",
    "Debouncer",
    "LoadStatus",
    "SearchConfig",
    "SearchIndex",
    "TemplateDetails",
    "TemplateRecord",
    "ViewConfig",
    "ViewSnapshot",
    "ViewState",
    "__version__",
    "build_index",
    "filter_templates",
    "load_config",
    "normalize",
    "search",
)
