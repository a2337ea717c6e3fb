# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Checksum utilities for catalog payloads."""

from __future__ import annotations

import hashlib


def compute_catalog_checksum(payload: bytes) -> str:
    """Return the hex-encoded SHA-256 checksum of a raw catalog payload.

    Args:
        payload: Catalog bytes exactly as fetched from the source.

    Returns:
        str: Hex digest identifying this revision of the catalog.
    """
    return hashlib.sha256(payload).hexdigest()


__all__ = ["compute_catalog_checksum"]
