# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Query state, debouncing and the filtered view published to renderers."""

from __future__ import annotations

from .debounce import Debouncer
from .pipeline import SearchableCatalog, derive_result, filter_templates
from .scheduler import Scheduler, TimerHandle
from .state import LoadStatus, QueryState, ViewSnapshot, ViewState

__all__ = [
    "Debouncer",
    "LoadStatus",
    "QueryState",
    "Scheduler",
    "SearchableCatalog",
    "TimerHandle",
    "ViewSnapshot",
    "ViewState",
    "derive_result",
    "filter_templates",
]
