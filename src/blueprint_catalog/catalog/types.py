# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared type aliases and constants for the template catalog."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Final, TypeAlias

JSONPrimitive: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONPrimitive | Sequence["JSONValue"] | Mapping[str, "JSONValue"]

CATALOG_FILENAME: Final[str] = "meta.json"
COMPOSE_FILENAME: Final[str] = "docker-compose.yml"
TEMPLATE_CONFIG_FILENAME: Final[str] = "template.toml"
ID_SEPARATOR: Final[str] = "-"

__all__ = [
    "CATALOG_FILENAME",
    "COMPOSE_FILENAME",
    "ID_SEPARATOR",
    "TEMPLATE_CONFIG_FILENAME",
    "JSONPrimitive",
    "JSONValue",
]
