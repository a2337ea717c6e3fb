# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Per-template document lookups (compose file and template configuration).

Each template lives in ``<blueprints>/<id>/``. Both documents are optional:
a missing document yields ``None`` rather than an error.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from urllib.parse import quote

from .fetch import DEFAULT_TIMEOUT, FETCH_ERRORS, is_remote, read_resource
from .types import COMPOSE_FILENAME, TEMPLATE_CONFIG_FILENAME

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TemplateDetails:
    """Documents published alongside a template."""

    docker_compose: str | None
    config: str | None

    @property
    def is_empty(self) -> bool:
        """Return ``True`` when neither document is available."""

        return self.docker_compose is None and self.config is None


def document_location(blueprints: str | Path, template_id: str, filename: str) -> str | Path | None:
    """Return where ``filename`` for ``template_id`` lives, or ``None`` if unsafe.

    Args:
        blueprints: Blueprints root as a filesystem path or ``http(s)`` URL.
        template_id: Normalized template identifier.
        filename: Document filename within the template directory.

    Returns:
        str | Path | None: Document location, ``None`` when ``template_id``
        would escape the blueprints root.
    """

    parts = PurePosixPath(template_id).parts
    if not template_id or len(parts) != 1 or parts[0] in {".", ".."} or "\\" in template_id:
        return None
    if is_remote(blueprints):
        base = str(blueprints).rstrip("/")
        return f"{base}/{quote(template_id)}/{filename}"
    return Path(blueprints) / template_id / filename


def load_document(
    blueprints: str | Path,
    template_id: str,
    filename: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
) -> str | None:
    """Return one template document as text, or ``None`` when unavailable.

    Args:
        blueprints: Blueprints root as a filesystem path or ``http(s)`` URL.
        template_id: Normalized template identifier.
        filename: Document filename within the template directory.
        timeout: Socket timeout applied to remote requests.

    Returns:
        str | None: Document text when it exists and can be read.
    """

    try:
        location = document_location(blueprints, template_id, filename)
        if location is None:
            LOGGER.warning("refusing to resolve documents for template id %r", template_id)
            return None
        payload = read_resource(location, timeout=timeout)
    except FETCH_ERRORS as exc:
        LOGGER.warning("error fetching %s for %r: %s", filename, template_id, exc)
        return None
    if payload is None:
        return None
    return payload.decode("utf-8", errors="replace")


def load_template_details(
    blueprints: str | Path,
    template_id: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
) -> TemplateDetails:
    """Fetch both documents for ``template_id`` sequentially.

    Args:
        blueprints: Blueprints root as a filesystem path or ``http(s)`` URL.
        template_id: Normalized template identifier.
        timeout: Socket timeout applied to remote requests.

    Returns:
        TemplateDetails: Compose and configuration documents, each optional.
    """

    return TemplateDetails(
        docker_compose=load_document(blueprints, template_id, COMPOSE_FILENAME, timeout=timeout),
        config=load_document(blueprints, template_id, TEMPLATE_CONFIG_FILENAME, timeout=timeout),
    )


async def fetch_template_details(
    blueprints: str | Path,
    template_id: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
) -> TemplateDetails:
    """Fetch both documents for ``template_id`` concurrently.

    Args:
        blueprints: Blueprints root as a filesystem path or ``http(s)`` URL.
        template_id: Normalized template identifier.
        timeout: Socket timeout applied to remote requests.

    Returns:
        TemplateDetails: Compose and configuration documents, each optional.
    """

    compose, config = await asyncio.gather(
        asyncio.to_thread(load_document, blueprints, template_id, COMPOSE_FILENAME, timeout=timeout),
        asyncio.to_thread(load_document, blueprints, template_id, TEMPLATE_CONFIG_FILENAME, timeout=timeout),
    )
    return TemplateDetails(docker_compose=compose, config=config)


__all__ = [
    "TemplateDetails",
    "document_location",
    "fetch_template_details",
    "load_document",
    "load_template_details",
]
