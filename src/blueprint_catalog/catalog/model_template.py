# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Template record models materialised from catalog JSON entries."""

from __future__ import annotations

from collections.abc import Collection, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Final

from .types import JSONValue
from .utils import optional_mapping, optional_string, string_array, text_or_empty

_KNOWN_KEYS: Final[frozenset[str]] = frozenset(
    {"id", "name", "description", "version", "logo", "links", "tags"},
)
_LINK_KEYS: Final[tuple[str, ...]] = ("github", "website", "docs")


@dataclass(frozen=True, slots=True)
class TemplateLinks:
    """External links advertised by a template.

    Attributes:
        github: Source repository URL of the deployed service.
        website: Project homepage.
        docs: Documentation URL.
    """

    github: str | None = None
    website: str | None = None
    docs: str | None = None

    @staticmethod
    def from_mapping(
        data: Mapping[str, JSONValue],
        *,
        context: str,
        rejected: dict[str, JSONValue] | None = None,
    ) -> TemplateLinks:
        """Create links metadata from JSON data.

        Args:
            data: Mapping holding the ``links`` block of a template.
            context: Human-readable context used in diagnostics.
            rejected: Receives the raw ``links`` block when any link is not a string.

        Returns:
            TemplateLinks: Frozen links payload.
        """

        mistyped: dict[str, JSONValue] = {}
        links = TemplateLinks(
            github=optional_string(data.get("github"), key="github", context=context, rejected=mistyped),
            website=optional_string(data.get("website"), key="website", context=context, rejected=mistyped),
            docs=optional_string(data.get("docs"), key="docs", context=context, rejected=mistyped),
        )
        if mistyped and rejected is not None:
            rejected["links"] = dict(data)
        return links

    def to_mapping(self) -> dict[str, str]:
        """Return the links as a JSON object omitting absent entries."""

        values = {key: getattr(self, key) for key in _LINK_KEYS}
        return {key: value for key, value in values.items() if value is not None}


@dataclass(frozen=True, slots=True)
class TemplateRecord:
    """Immutable catalog entry describing one deployable service template."""

    id: str
    name: str
    description: str = ""
    version: str = ""
    logo: str | None = None
    links: TemplateLinks = field(default_factory=TemplateLinks)
    tags: tuple[str, ...] = ()
    extra: Mapping[str, JSONValue] = field(
        default_factory=lambda: MappingProxyType({}),
        compare=False,
        hash=False,
        repr=False,
    )

    @staticmethod
    def from_mapping(data: Mapping[str, JSONValue], *, context: str) -> TemplateRecord:
        """Create a template record from a raw catalog entry.

        Missing text fields default to an empty string and scalar values are
        converted to text. Keys this model does not know about are preserved
        in :attr:`extra`, as is the raw value of any descriptive field that
        carried the wrong JSON type, so :meth:`to_mapping` reproduces it.

        Args:
            data: Raw JSON object describing the template.
            context: Human-readable context used in diagnostics.

        Returns:
            TemplateRecord: Frozen record mirroring ``data``.
        """

        extra: dict[str, JSONValue] = {key: value for key, value in data.items() if key not in _KNOWN_KEYS}
        links = TemplateLinks.from_mapping(
            optional_mapping(data.get("links"), key="links", context=context, rejected=extra),
            context=f"{context}.links",
            rejected=extra,
        )
        return TemplateRecord(
            id=text_or_empty(data.get("id"), key="id", context=context),
            name=text_or_empty(data.get("name"), key="name", context=context),
            description=text_or_empty(data.get("description"), key="description", context=context, rejected=extra),
            version=text_or_empty(data.get("version"), key="version", context=context, rejected=extra),
            logo=optional_string(data.get("logo"), key="logo", context=context, rejected=extra),
            links=links,
            tags=string_array(data.get("tags"), key="tags", context=context, rejected=extra),
            extra=MappingProxyType(extra),
        )

    def with_id(self, identifier: str) -> TemplateRecord:
        """Return a copy of the record carrying ``identifier`` as its id."""

        if identifier == self.id:
            return self
        return replace(self, id=identifier)

    def has_tags(self, tags: Collection[str]) -> bool:
        """Return ``True`` when the record carries every tag in ``tags``."""

        return all(tag in self.tags for tag in tags)

    def to_mapping(self) -> dict[str, JSONValue]:
        """Serialise the record back into a catalog JSON object.

        Returns:
            dict[str, JSONValue]: JSON-compatible mapping including preserved extras.
        """

        payload: dict[str, JSONValue] = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "version": self.version,
        }
        if self.logo is not None:
            payload["logo"] = self.logo
        payload["links"] = self.links.to_mapping()
        payload["tags"] = list(self.tags)
        payload.update(self.extra)
        return payload


__all__ = ["TemplateLinks", "TemplateRecord"]
