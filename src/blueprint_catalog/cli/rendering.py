# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Rich renderers for view snapshots and catalog reports."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Final

from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from ..catalog.details import TemplateDetails
from ..catalog.maintenance import EntryProblem, MaintenanceReport
from ..catalog.model_catalog import TagFacet
from ..catalog.model_template import TemplateRecord
from ..view.state import ViewSnapshot

VISIBLE_TAGS: Final[int] = 3


def format_tags(tags: Sequence[str], *, visible: int = VISIBLE_TAGS) -> str:
    """Return the first ``visible`` tags plus a ``+N more`` marker."""

    shown = ", ".join(tags[:visible])
    hidden = len(tags) - visible
    if hidden > 0:
        return f"{shown} +{hidden} more"
    return shown


def describe_empty(snapshot: ViewSnapshot) -> tuple[str, str | None]:
    """Return the headline and hint shown when a snapshot has no items.

    Args:
        snapshot: Ready snapshot with zero items.

    Returns:
        tuple[str, str | None]: Message and optional follow-up hint.
    """

    query = snapshot.query.raw_query.strip()
    if query:
        message = f'No templates found matching "{snapshot.query.raw_query}"'
    elif snapshot.query.selected_tags:
        message = "No templates found with selected tags"
    else:
        message = "No templates available"
    hint = "Try adjusting your search criteria or clear filters" if snapshot.has_filters else None
    return message, hint


def render_templates(
    console: Console,
    items: Sequence[TemplateRecord],
    *,
    scores: Mapping[str, float] | None = None,
) -> None:
    """Print templates as a table, optionally with relevance scores."""

    table = Table(show_lines=False)
    table.add_column("ID", no_wrap=True)
    table.add_column("Name")
    table.add_column("Version")
    table.add_column("Tags")
    if scores is not None:
        table.add_column("Score", justify="right")
    for record in items:
        row = [Text(record.id), Text(record.name), Text(record.version), Text(format_tags(record.tags))]
        if scores is not None:
            score = scores.get(record.id)
            row.append(Text("" if score is None else f"{score:.4f}"))
        table.add_row(*row)
    console.print(table)


def render_facets(console: Console, facets: Sequence[TagFacet]) -> None:
    """Print tag facets with their template counts."""

    table = Table()
    table.add_column("Tag")
    table.add_column("Templates", justify="right")
    for facet in facets:
        table.add_row(Text(facet.tag), str(facet.count))
    console.print(table)


def render_record(console: Console, record: TemplateRecord, details: TemplateDetails) -> None:
    """Print one template with its compose file and configuration."""

    table = Table(show_header=False, box=None)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    rows = [
        ("ID", record.id),
        ("Name", record.name),
        ("Version", record.version),
        ("Description", record.description),
        ("Tags", ", ".join(record.tags)),
        *((label.capitalize(), value) for label, value in record.links.to_mapping().items()),
    ]
    for label, value in rows:
        table.add_row(label, Text(value))
    console.print(table)
    for title, document, lexer in (
        ("docker-compose.yml", details.docker_compose, "yaml"),
        ("template.toml", details.config, "toml"),
    ):
        console.rule(title)
        if document is None:
            console.print("(not provided)")
        else:
            console.print(Syntax(document, lexer, word_wrap=True))


def render_maintenance(console: Console, report: MaintenanceReport) -> None:
    """Print statistics for a dedupe-and-sort run."""

    table = Table(show_header=False, box=None)
    table.add_row("Original entries", str(report.original))
    table.add_row("Duplicates removed", str(report.duplicates_removed))
    table.add_row("Invalid entries skipped", str(len(report.invalid)))
    table.add_row("Final entries", str(report.final))
    console.print(table)
    for duplicate in report.duplicates:
        console.print(f'  • "{duplicate.id}" ({duplicate.name}) at index {duplicate.original_index}', markup=False)


def render_problems(console: Console, problems: Sequence[EntryProblem]) -> None:
    """Print schema violations grouped by catalog entry."""

    for problem in problems:
        label = problem.id if problem.id is not None else "<no id>"
        console.print(f"[{problem.index}] {label}", markup=False)
        for message in problem.messages:
            console.print(f"    {message}", markup=False)


__all__ = [
    "describe_empty",
    "format_tags",
    "render_facets",
    "render_maintenance",
    "render_problems",
    "render_record",
    "render_templates",
]
