# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands and shared services."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from pathlib import Path
from typing import Annotated

import typer

from ..catalog.details import load_template_details
from ..catalog.errors import CatalogError
from ..catalog.loader import CatalogLoader
from ..catalog.maintenance import dedupe_and_sort, validate_catalog
from ..catalog.model_catalog import CatalogSnapshot
from ..catalog.types import CATALOG_FILENAME
from ..config import Config, ConfigError, load_config
from ..logging import configure_logging
from ..view.state import LoadStatus, ViewSnapshot, ViewState
from .options import (
    BLUEPRINTS_OPTION,
    CATALOG_OPTION,
    COLOR_OPTION,
    CONFIG_OPTION,
    DRY_RUN_OPTION,
    EMOJI_OPTION,
    LIMIT_OPTION,
    SCORES_OPTION,
    TAG_OPTION,
    normalize_cli_values,
)
from .rendering import (
    describe_empty,
    render_facets,
    render_maintenance,
    render_problems,
    render_record,
    render_templates,
)
from .shared import CLIError, CLILogger, build_cli_logger

app = typer.Typer(
    name="blueprint-catalog",
    help="Search, filter and maintain the blueprint template catalog.",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show diagnostic logging.")] = False,
) -> None:
    """Configure diagnostics shared by every command."""

    configure_logging(verbose=verbose)


def _load_settings(config_path: Path | None, *, emoji: bool | None, color: bool | None) -> Config:
    try:
        config = load_config(config_path)
    except ConfigError as exc:
        logger = build_cli_logger(emoji=bool(emoji), color=bool(color))
        raise _exit_with(logger, CLIError(str(exc))) from exc
    if emoji is not None:
        config.output.emoji = emoji
    if color is not None:
        config.output.color = color
    return config


def _logger_for(config: Config) -> CLILogger:
    return build_cli_logger(emoji=config.output.emoji, color=config.output.color)


def _exit_with(logger: CLILogger, error: CLIError) -> typer.Exit:
    logger.fail(str(error))
    return typer.Exit(code=error.exit_code)


async def _collect_view(config: Config, loader: CatalogLoader, query: str, tags: Sequence[str]) -> ViewState:
    """Load the catalog into a view seeded with ``query`` and ``tags``."""

    view = ViewState(
        scheduler=asyncio.get_running_loop(),
        view_config=config.view,
        search_config=config.search,
        initial_query=query,
        initial_tags=tags,
    )
    await view.load_from(loader)
    return view


def _loader_for(config: Config, catalog: str | None) -> CatalogLoader:
    return CatalogLoader(location=catalog or config.catalog.source, timeout=config.catalog.timeout_seconds)


def _load_snapshot(config: Config, catalog: str | None) -> CatalogSnapshot:
    try:
        return _loader_for(config, catalog).load_snapshot()
    except CatalogError as exc:
        raise CLIError(str(exc)) from exc


def _report_skipped(logger: CLILogger, snapshot: CatalogSnapshot) -> None:
    for skipped in snapshot.skipped:
        logger.warn(f"Skipped entry {skipped.position}: {skipped.reason}")


@app.command("search")
def search_command(
    query: Annotated[str, typer.Argument(help="Fuzzy text query (empty lists everything).")] = "",
    tag: TAG_OPTION = None,
    catalog: CATALOG_OPTION = None,
    config_path: CONFIG_OPTION = None,
    limit: LIMIT_OPTION = None,
    scores: SCORES_OPTION = False,
    emoji: EMOJI_OPTION = None,
    color: COLOR_OPTION = None,
) -> None:
    """Search templates by text and narrow them by tags."""

    config = _load_settings(config_path, emoji=emoji, color=color)
    logger = _logger_for(config)
    tags = normalize_cli_values(tag)
    view = asyncio.run(_collect_view(config, _loader_for(config, catalog), query, tags))
    snapshot = view.snapshot
    if snapshot.status is LoadStatus.ERROR:
        raise _exit_with(logger, CLIError(snapshot.error or "Failed to fetch templates"))
    if view.catalog is not None:
        _report_skipped(logger, view.catalog)
    _render_snapshot(logger, view, snapshot, limit=limit or config.output.limit, scores=scores)


def _render_snapshot(
    logger: CLILogger,
    view: ViewState,
    snapshot: ViewSnapshot,
    *,
    limit: int | None,
    scores: bool,
) -> None:
    if snapshot.is_empty:
        message, hint = describe_empty(snapshot)
        logger.warn(message)
        if hint:
            logger.echo(hint)
        return
    items = snapshot.items[:limit] if limit else snapshot.items
    score_map: dict[str, float] | None = None
    searchable = view.searchable
    if scores and searchable is not None and searchable.index is not None:
        hits = searchable.index.search_with_details(snapshot.query.debounced_query)
        score_map = {hit.record.id: hit.score for hit in hits}
    render_templates(logger.console, items, scores=score_map)
    shown = f"{len(items)} of {snapshot.count}" if len(items) < snapshot.count else str(snapshot.count)
    logger.ok(f"{shown} templates")


@app.command("tags")
def tags_command(
    catalog: CATALOG_OPTION = None,
    config_path: CONFIG_OPTION = None,
    emoji: EMOJI_OPTION = None,
    color: COLOR_OPTION = None,
) -> None:
    """List every tag with the number of templates carrying it."""

    config = _load_settings(config_path, emoji=emoji, color=color)
    logger = _logger_for(config)
    try:
        snapshot = _load_snapshot(config, catalog)
    except CLIError as exc:
        raise _exit_with(logger, exc) from exc
    render_facets(logger.console, snapshot.tag_facets())
    logger.info(f"Catalog revision {snapshot.revision}")


@app.command("show")
def show_command(
    template_id: Annotated[str, typer.Argument(help="Normalized template id.")],
    catalog: CATALOG_OPTION = None,
    blueprints: BLUEPRINTS_OPTION = None,
    config_path: CONFIG_OPTION = None,
    emoji: EMOJI_OPTION = None,
    color: COLOR_OPTION = None,
) -> None:
    """Show one template with its compose file and configuration."""

    config = _load_settings(config_path, emoji=emoji, color=color)
    logger = _logger_for(config)
    try:
        snapshot = _load_snapshot(config, catalog)
    except CLIError as exc:
        raise _exit_with(logger, exc) from exc
    record = snapshot.get(template_id)
    if record is None:
        raise _exit_with(logger, CLIError(f"Unknown template '{template_id}'"))
    logger.section(record.name or record.id)
    details = load_template_details(
        blueprints or config.catalog.blueprints,
        record.id,
        timeout=config.catalog.timeout_seconds,
    )
    render_record(logger.console, record, details)


@app.command("dedupe")
def dedupe_command(
    path: Annotated[Path, typer.Argument(help="Catalog document to rewrite.")] = Path(CATALOG_FILENAME),
    dry_run: DRY_RUN_OPTION = False,
    emoji: EMOJI_OPTION = None,
    color: COLOR_OPTION = None,
) -> None:
    """Remove duplicate ids from a stored catalog and sort it by id."""

    logger = build_cli_logger(emoji=True if emoji is None else emoji, color=True if color is None else color)
    logger.info(f"Processing {path}...")
    try:
        report = dedupe_and_sort(path, dry_run=dry_run)
    except FileNotFoundError as exc:
        raise _exit_with(logger, CLIError(f"File not found: {path}")) from exc
    except CatalogError as exc:
        raise _exit_with(logger, CLIError(str(exc))) from exc
    render_maintenance(logger.console, report)
    if report.backup_path is not None:
        logger.info(f"Backup created: {report.backup_path}")
    if dry_run:
        logger.ok("DRY RUN: catalog left unchanged")
    else:
        logger.ok("Processing completed successfully")


@app.command("validate")
def validate_command(
    path: Annotated[Path, typer.Argument(help="Catalog document to check.")] = Path(CATALOG_FILENAME),
    emoji: EMOJI_OPTION = None,
    color: COLOR_OPTION = None,
) -> None:
    """Check every stored entry against the template record schema."""

    logger = build_cli_logger(emoji=True if emoji is None else emoji, color=True if color is None else color)
    try:
        problems = validate_catalog(path)
    except FileNotFoundError as exc:
        raise _exit_with(logger, CLIError(f"File not found: {path}")) from exc
    except CatalogError as exc:
        raise _exit_with(logger, CLIError(str(exc))) from exc
    if problems:
        render_problems(logger.console, problems)
        raise _exit_with(logger, CLIError(f"{len(problems)} invalid catalog entries"))
    logger.ok(f"{path} is valid")


__all__ = ["app"]
