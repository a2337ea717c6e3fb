# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Utility helpers for reading loosely typed catalog JSON structures.

Catalog entries are community contributed, so a field carrying the wrong JSON
type never invalidates the whole entry. JSON scalars are converted to text;
anything else falls back to the field default. Each helper records the raw
value of a field it could not represent faithfully in ``rejected`` so the
caller can keep it alongside the record.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, MutableMapping, Sequence

from .types import JSONValue

LOGGER = logging.getLogger(__name__)

Rejected = MutableMapping[str, JSONValue]


def _scalar_text(value: JSONValue) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, int, float)):
        return json.dumps(value)
    return None


def optional_string(
    value: JSONValue | None,
    *,
    key: str,
    context: str,
    rejected: Rejected | None = None,
) -> str | None:
    """Return ``value`` as an optional string.

    Args:
        value: Raw JSON value extracted from the catalog payload.
        key: Attribute name used in diagnostics.
        context: Human-friendly prefix describing the validation context.
        rejected: Receives the raw value when it is not a string.

    Returns:
        str | None: ``value`` as text (scalars converted), ``None`` when it is
        missing or not representable as text.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value
    text = _scalar_text(value)
    if text is None:
        LOGGER.warning("%s: ignoring '%s' of type %s", context, key, type(value).__name__)
    else:
        LOGGER.warning("%s: converted '%s' from %s to text", context, key, type(value).__name__)
    if rejected is not None:
        rejected[key] = value
    return text


def text_or_empty(
    value: JSONValue | None,
    *,
    key: str,
    context: str,
    rejected: Rejected | None = None,
) -> str:
    """Return ``value`` as a string, mapping a missing or unusable value to ``""``."""

    return optional_string(value, key=key, context=context, rejected=rejected) or ""


def string_array(
    value: JSONValue | None,
    *,
    key: str,
    context: str,
    rejected: Rejected | None = None,
) -> tuple[str, ...]:
    """Return ``value`` as a tuple of strings.

    Args:
        value: Raw JSON value extracted from the catalog payload.
        key: Attribute name used in diagnostics.
        context: Human-friendly prefix describing the validation context.
        rejected: Receives the raw value when it is not an array of strings.

    Returns:
        tuple[str, ...]: String items of ``value``; scalar items are converted
        and other items dropped. A non-array yields an empty tuple.
    """
    if value is None:
        return ()
    if not isinstance(value, Sequence) or isinstance(value, (str, bytes, bytearray)):
        LOGGER.warning("%s: ignoring '%s', expected an array of strings", context, key)
        if rejected is not None:
            rejected[key] = value
        return ()
    result: list[str] = []
    for index, item in enumerate(value):
        text = _scalar_text(item)
        if text is None:
            LOGGER.warning("%s: dropping '%s[%d]' of type %s", context, key, index, type(item).__name__)
        else:
            result.append(text)
    if len(result) != len(value) or not all(isinstance(item, str) for item in value):
        if rejected is not None:
            rejected[key] = value
    return tuple(result)


def optional_mapping(
    value: JSONValue | None,
    *,
    key: str,
    context: str,
    rejected: Rejected | None = None,
) -> Mapping[str, JSONValue]:
    """Return ``value`` as a mapping, treating a missing or non-object value as empty."""

    if value is None:
        return {}
    if not isinstance(value, Mapping):
        LOGGER.warning("%s: ignoring '%s', expected an object", context, key)
        if rejected is not None:
            rejected[key] = value
        return {}
    return value


__all__ = [
    "optional_mapping",
    "optional_string",
    "string_array",
    "text_or_empty",
]
