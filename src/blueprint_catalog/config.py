# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and helpers for blueprint-catalog."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .catalog.types import CATALOG_FILENAME

SEARCHABLE_FIELDS: Final[frozenset[str]] = frozenset({"id", "name", "description", "tags"})
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "blueprint-catalog"


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


def _default_weights() -> dict[str, float]:
    return {"name": 0.7, "description": 0.2, "tags": 0.1}


class CatalogConfig(BaseModel):
    """Where the catalog and the per-template documents are read from."""

    model_config = ConfigDict(validate_assignment=True)

    source: str = CATALOG_FILENAME
    blueprints: str = "blueprints"
    timeout_seconds: float = Field(default=10.0, gt=0)


class SearchConfig(BaseModel):
    """Fuzzy matching parameters for the search index.

    ``threshold`` is the largest per-field distance (0 = exact, 1 = anything)
    still counted as a match. ``weights`` maps searchable fields to their
    relative importance; weights are normalised to sum to one when scoring.
    """

    model_config = ConfigDict(frozen=True)

    threshold: float = Field(default=0.3, ge=0.0, le=1.0)
    weights: dict[str, float] = Field(default_factory=_default_weights)
    ignore_diacritics: bool = False
    ignore_field_norm: bool = False
    field_norm_weight: float = Field(default=1.0, ge=0.0)

    @field_validator("weights")
    @classmethod
    def _validate_weights(cls, value: dict[str, float]) -> dict[str, float]:
        if not value:
            raise ValueError("at least one field must be searchable")
        unknown = sorted(set(value) - SEARCHABLE_FIELDS)
        if unknown:
            raise ValueError(f"unknown searchable fields: {', '.join(unknown)}")
        if any(weight <= 0 for weight in value.values()):
            raise ValueError("field weights must be positive")
        return value

    def normalized_weights(self) -> tuple[tuple[str, float], ...]:
        """Return ``(field, weight)`` pairs scaled so the weights sum to one."""

        total = sum(self.weights.values())
        return tuple((name, weight / total) for name, weight in self.weights.items())


class ViewConfig(BaseModel):
    """Interactive view behaviour."""

    model_config = ConfigDict(validate_assignment=True)

    debounce_seconds: float = Field(default=0.3, ge=0.0)


class OutputConfig(BaseModel):
    """Console rendering preferences."""

    model_config = ConfigDict(validate_assignment=True)

    emoji: bool = True
    color: bool = True
    limit: int | None = Field(default=None, gt=0)


class Config(BaseModel):
    """Top-level configuration aggregating every section."""

    model_config = ConfigDict(validate_assignment=True)

    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    view: ViewConfig = Field(default_factory=ViewConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    def to_dict(self) -> dict[str, Any]:
        """Return the configuration as plain JSON-compatible data."""

        return self.model_dump(mode="json")


def _extract_section(document: Mapping[str, Any], path: Path) -> Mapping[str, Any]:
    """Return the configuration table from ``document``.

    ``pyproject.toml`` files keep the settings under
    ``[tool.blueprint-catalog]``; standalone files use the top level.
    """

    if path.name != "pyproject.toml":
        return document
    tool = document.get(PYPROJECT_TOOL_KEY, {})
    section = tool.get(PYPROJECT_SECTION_KEY, {}) if isinstance(tool, Mapping) else {}
    if not isinstance(section, Mapping):
        raise ConfigError(f"{path}: [{PYPROJECT_TOOL_KEY}.{PYPROJECT_SECTION_KEY}] must be a table")
    return section


def load_config(path: Path | None = None, *, overrides: Mapping[str, Any] | None = None) -> Config:
    """Load configuration from a TOML file merged over the defaults.

    Args:
        path: TOML file to read; ``None`` or a missing file yields the defaults.
        overrides: Section-level values applied on top of the file contents.

    Returns:
        Config: Validated configuration.

    Raises:
        ConfigError: If the file cannot be parsed or holds invalid values.
    """

    data: dict[str, Any] = {}
    if path is not None and path.exists():
        try:
            with path.open("rb") as handle:
                document = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"{path}: invalid TOML ({exc})") from exc
        section = _extract_section(document, path)
        data = {key: dict(value) if isinstance(value, Mapping) else value for key, value in section.items()}
    for name, values in (overrides or {}).items():
        merged = dict(data.get(name, {}))
        merged.update(values)
        data[name] = merged
    try:
        return Config.model_validate(data)
    except ValidationError as exc:
        source = str(path) if path is not None else "configuration"
        raise ConfigError(f"{source}: {exc}") from exc


__all__ = [
    "CatalogConfig",
    "Config",
    "ConfigError",
    "OutputConfig",
    "SearchConfig",
    "ViewConfig",
    "load_config",
]
