# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Fuzzy search over the normalized template catalog."""

from __future__ import annotations

from .index import FieldMatch, SearchHit, SearchIndex, build_index, search

__all__ = ["FieldMatch", "SearchHit", "SearchIndex", "build_index", "search"]
