# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Schema loading utilities for validating stored catalog entries."""

from __future__ import annotations

import json
from collections.abc import Iterable
from importlib import resources
from typing import Final, Protocol, cast, runtime_checkable

from jsonschema import Draft202012Validator

from .errors import CatalogIntegrityError
from .types import JSONValue

RECORD_SCHEMA_RESOURCE: Final[str] = "template_record.schema.json"


class SchemaValidationError(Protocol):
    """Represent schema validation errors surfaced by jsonschema."""

    @property
    def message(self) -> str:
        """Return the descriptive validation error message."""

    @property
    def json_path(self) -> str:
        """Return the JSON path of the offending value."""


@runtime_checkable
class SchemaValidator(Protocol):
    """Minimal interface exposed by jsonschema validators."""

    def iter_errors(self, instance: JSONValue) -> Iterable[SchemaValidationError]:
        """Iterate over validation errors for ``instance``."""


def load_record_schema() -> dict[str, JSONValue]:
    """Return the bundled template record JSON schema.

    Returns:
        dict[str, JSONValue]: Parsed schema document.

    Raises:
        CatalogIntegrityError: If the bundled schema is not a JSON object.
    """

    resource = resources.files("blueprint_catalog.catalog") / "data" / RECORD_SCHEMA_RESOURCE
    text = resource.read_text(encoding="utf-8")
    schema = json.loads(text)
    if not isinstance(schema, dict):
        raise CatalogIntegrityError(f"{RECORD_SCHEMA_RESOURCE}: expected a JSON object")
    return schema


def load_record_validator() -> SchemaValidator:
    """Return a Draft 2020-12 validator bound to the template record schema."""

    return cast(SchemaValidator, Draft202012Validator(load_record_schema()))


def record_errors(validator: SchemaValidator, entry: JSONValue) -> tuple[str, ...]:
    """Return human-readable schema violations for one catalog entry.

    Args:
        validator: Validator produced by :func:`load_record_validator`.
        entry: Raw catalog entry.

    Returns:
        tuple[str, ...]: Messages sorted by JSON path, empty when valid.
    """

    errors = sorted(validator.iter_errors(entry), key=lambda error: error.json_path)
    return tuple(f"{error.json_path}: {error.message}" for error in errors)


__all__ = ["load_record_schema", "load_record_validator", "record_errors"]
