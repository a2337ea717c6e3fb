# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Reusable Typer option declarations."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Annotated

import typer

CATALOG_OPTION = Annotated[
    str | None,
    typer.Option("--catalog", "-c", help="Catalog path or URL (defaults to the configured source)."),
]
CONFIG_OPTION = Annotated[
    Path | None,
    typer.Option("--config", help="TOML configuration file or pyproject.toml."),
]
TAG_OPTION = Annotated[
    list[str] | None,
    typer.Option("--tag", "-t", help="Only show templates carrying this tag (repeatable)."),
]
LIMIT_OPTION = Annotated[
    int | None,
    typer.Option("--limit", "-n", min=1, help="Show at most this many templates."),
]
SCORES_OPTION = Annotated[
    bool,
    typer.Option("--scores", help="Show relevance scores for text searches."),
]
BLUEPRINTS_OPTION = Annotated[
    str | None,
    typer.Option("--blueprints", "-b", help="Blueprints directory or URL holding template documents."),
]
DRY_RUN_OPTION = Annotated[
    bool,
    typer.Option("--dry-run", help="Report changes without rewriting the catalog."),
]
EMOJI_OPTION = Annotated[
    bool | None,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output."),
]
COLOR_OPTION = Annotated[
    bool | None,
    typer.Option("--color/--no-color", help="Toggle colour output."),
]


def normalize_cli_values(values: Sequence[str] | None) -> tuple[str, ...]:
    """Return stripped, non-empty CLI values preserving order."""

    if not values:
        return ()
    return tuple(stripped for entry in values if (stripped := entry.strip()))


__all__ = [
    "BLUEPRINTS_OPTION",
    "CATALOG_OPTION",
    "COLOR_OPTION",
    "CONFIG_OPTION",
    "DRY_RUN_OPTION",
    "EMOJI_OPTION",
    "LIMIT_OPTION",
    "SCORES_OPTION",
    "TAG_OPTION",
    "normalize_cli_values",
]
