# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Custom exceptions raised by template catalog operations."""

from __future__ import annotations


class CatalogError(RuntimeError):
    """Base class for every catalog failure surfaced by this package."""


class CatalogLoadError(CatalogError):
    """Raised when the catalog source does not yield a usable catalog."""

    def __init__(self, message: str, *, source: str | None = None) -> None:
        """Create the load error.

        Args:
            message: Human-readable description of the failure.
            source: Catalog location that failed to load, when known.
        """

        super().__init__(message)
        self.source = source


class CatalogIntegrityError(CatalogError):
    """Raised when catalog data violates structural expectations."""


__all__ = ("CatalogError", "CatalogIntegrityError", "CatalogLoadError")
