# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI behaviour tests driven through Typer's runner."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from blueprint_catalog.cli.app import app

runner = CliRunner()
PLAIN = ["--no-emoji", "--no-color"]


def test_search_lists_every_template_without_filters(catalog_file: Path) -> None:
    result = runner.invoke(app, ["search", "--catalog", str(catalog_file), *PLAIN])
    assert result.exit_code == 0
    for template_id in ("ghost", "redis", "postgres"):
        assert template_id in result.output
    assert "3 templates" in result.output


def test_search_with_tags(catalog_file: Path) -> None:
    result = runner.invoke(
        app,
        ["search", "--catalog", str(catalog_file), "--tag", "database", "-t", "cache", *PLAIN],
    )
    assert result.exit_code == 0
    assert "redis" in result.output
    assert "postgres" not in result.output
    assert "1 templates" in result.output


def test_search_with_typo(catalog_file: Path) -> None:
    result = runner.invoke(app, ["search", "ghst", "--catalog", str(catalog_file), "--scores", *PLAIN])
    assert result.exit_code == 0
    assert "Ghost" in result.output
    assert "Redis" not in result.output
    assert "Score" in result.output


def test_search_limit(catalog_file: Path) -> None:
    result = runner.invoke(app, ["search", "--catalog", str(catalog_file), "--limit", "1", *PLAIN])
    assert result.exit_code == 0
    assert "1 of 3 templates" in result.output


def test_search_without_matches(catalog_file: Path) -> None:
    result = runner.invoke(app, ["search", "zzzzqqqq", "--catalog", str(catalog_file), *PLAIN])
    assert result.exit_code == 0
    assert 'No templates found matching "zzzzqqqq"' in result.output
    assert "Try adjusting your search criteria or clear filters" in result.output


def test_search_missing_catalog_fails(tmp_path: Path) -> None:
    result = runner.invoke(app, ["search", "--catalog", str(tmp_path / "meta.json"), *PLAIN])
    assert result.exit_code == 1
    assert "Failed to fetch templates" in result.output


def test_search_reads_config_file(tmp_path: Path, catalog_file: Path) -> None:
    config = tmp_path / "catalog.toml"
    config.write_text(f'[catalog]\nsource = "{catalog_file.as_posix()}"\n', encoding="utf-8")
    result = runner.invoke(app, ["search", "redis", "--config", str(config), *PLAIN])
    assert result.exit_code == 0
    assert "redis" in result.output


def test_invalid_config_fails(tmp_path: Path) -> None:
    config = tmp_path / "catalog.toml"
    config.write_text("[search]\nthreshold = 7\n", encoding="utf-8")
    result = runner.invoke(app, ["search", "--config", str(config), *PLAIN])
    assert result.exit_code == 1


def test_tags_lists_facets(catalog_file: Path) -> None:
    result = runner.invoke(app, ["tags", "--catalog", str(catalog_file), *PLAIN])
    assert result.exit_code == 0
    assert "database" in result.output
    assert "2" in result.output
    assert "Catalog revision" in result.output


def test_show_renders_documents(tmp_path: Path, catalog_file: Path) -> None:
    blueprints = tmp_path / "blueprints"
    (blueprints / "redis").mkdir(parents=True)
    (blueprints / "redis" / "docker-compose.yml").write_text("services:\n  redis: {}\n", encoding="utf-8")
    result = runner.invoke(
        app,
        ["show", "redis", "--catalog", str(catalog_file), "--blueprints", str(blueprints), *PLAIN],
    )
    assert result.exit_code == 0
    assert "In-memory data store" in result.output
    assert "services" in result.output
    assert "(not provided)" in result.output


def test_show_unknown_template(catalog_file: Path) -> None:
    result = runner.invoke(app, ["show", "nope", "--catalog", str(catalog_file), *PLAIN])
    assert result.exit_code == 1
    assert "Unknown template 'nope'" in result.output


def test_dedupe_dry_run(tmp_path: Path) -> None:
    path = tmp_path / "meta.json"
    entries = [{"id": "b", "name": "B"}, {"id": "a", "name": "A"}, {"id": "b", "name": "B2"}]
    path.write_text(json.dumps(entries), encoding="utf-8")
    result = runner.invoke(app, ["dedupe", str(path), "--dry-run", *PLAIN])
    assert result.exit_code == 0
    assert "DRY RUN" in result.output
    assert '"b" (B2) at index 2' in result.output
    assert json.loads(path.read_text(encoding="utf-8")) == entries


def test_dedupe_rewrites_catalog(tmp_path: Path) -> None:
    path = tmp_path / "meta.json"
    path.write_text(json.dumps([{"id": "b", "name": "B"}, {"id": "a", "name": "A"}]), encoding="utf-8")
    result = runner.invoke(app, ["dedupe", str(path), *PLAIN])
    assert result.exit_code == 0
    assert "Backup created" in result.output
    assert "Processing completed successfully" in result.output
    assert [entry["id"] for entry in json.loads(path.read_text(encoding="utf-8"))] == ["a", "b"]


def test_dedupe_missing_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ["dedupe", str(tmp_path / "meta.json"), *PLAIN])
    assert result.exit_code == 1
    assert "File not found" in result.output


def test_validate_reports_invalid_entries(tmp_path: Path) -> None:
    path = tmp_path / "meta.json"
    path.write_text(json.dumps([{"id": "a", "name": "A"}]), encoding="utf-8")
    result = runner.invoke(app, ["validate", str(path), *PLAIN])
    assert result.exit_code == 1
    assert "1 invalid catalog entries" in result.output


def test_validate_accepts_catalog(catalog_file: Path) -> None:
    result = runner.invoke(app, ["validate", str(catalog_file), *PLAIN])
    assert result.exit_code == 0
    assert "is valid" in result.output
