from __future__ import annotations

from contextlib import nullcontext

import pytest
import yaml
from typer.testing import CliRunner

from conftest import RecordingConnection, build_issue_page, heading, paragraph

from recarchive.cli import tags as tags_cli
from recarchive.cli.app import app

runner = CliRunner()


def test_parse_issue_page(tmp_path):
    page = tmp_path / "issue.html"
    page.write_text(
        build_issue_page(
            [heading("Apps"), paragraph('Check out <a href="https://apps.apple.com/app/widget">Widget</a> (link)')],
            published_at="2024-03-10T14:00:00Z",
        ),
        encoding="utf-8",
    )

    result = runner.invoke(app, ["parse", str(page)])

    assert result.exit_code == 0
    assert "Widget" in result.output
    assert "2024-03-10" in result.output


def test_parse_archive_page(tmp_path):
    page = tmp_path / "archive.html"
    page.write_text(
        '<a href="https://www.theverge.com/2024/3/10/24096000/installer-25">Installer No. 25: best stuff</a>',
        encoding="utf-8",
    )

    result = runner.invoke(app, ["parse", str(page), "--archive"])

    assert result.exit_code == 0
    assert "2024-03-10" in result.output


def test_parse_page_without_recommendations(tmp_path):
    page = tmp_path / "empty.html"
    page.write_text("<html></html>", encoding="utf-8")

    result = runner.invoke(app, ["parse", str(page)])

    assert result.exit_code == 0
    assert "No recommendations found." in result.output


def test_init_writes_config_without_database(tmp_path):
    config_dir = tmp_path / "config"
    workspace = tmp_path / "workspace"

    result = runner.invoke(
        app,
        ["init", "--config-dir", str(config_dir), "--workspace", str(workspace), "--skip-db"],
    )

    assert result.exit_code == 0
    data = yaml.safe_load((config_dir / "config.yaml").read_text())
    assert data["workspace_root"] == str(workspace)
    assert data["postgres"]["password_env"] == "RECARCHIVE_DB_PASSWORD"
    assert data["scraper"]["newsletter_path"] == "installer-newsletter"
    assert workspace.is_dir()


def test_init_rejects_bad_base_url(tmp_path):
    result = runner.invoke(
        app,
        ["init", "--config-dir", str(tmp_path), "--base-url", "ftp://nope", "--skip-db"],
    )

    assert result.exit_code == 1
    assert not (tmp_path / "config.yaml").exists()


@pytest.fixture
def tag_db(monkeypatch, config):
    """Route the tag commands to a recording connection."""

    def use(conn):
        monkeypatch.setattr(tags_cli, "load_cli_config", lambda: config)
        monkeypatch.setattr(tags_cli, "get_connection", lambda db_config: nullcontext(conn))
        return conn

    return use


def test_tags_set_replaces_tags(tag_db):
    conn = tag_db(RecordingConnection(fetchone=[{"id": 1, "name": "drama"}, {"id": 2, "name": "sci fi"}]))

    result = runner.invoke(app, ["tags", "set", "5", "Drama", "Sci Fi"])

    assert result.exit_code == 0
    assert "drama, sci fi" in result.output
    assert [params for _, params in conn.statements("INSERT INTO recommendation_tags")] == [(5, 1), (5, 2)]
    assert conn.commits == 1


def test_tags_set_without_names_clears(tag_db):
    conn = tag_db(RecordingConnection())

    result = runner.invoke(app, ["tags", "set", "5"])

    assert result.exit_code == 0
    assert "Cleared tags" in result.output
    assert conn.statements("DELETE FROM recommendation_tags") != []


def test_tags_delete_known_tag(tag_db):
    conn = tag_db(RecordingConnection(fetchone=[{"id": 4, "name": "drama"}]))

    result = runner.invoke(app, ["tags", "delete", "Drama"])

    assert result.exit_code == 0
    assert conn.executed[-1] == ("DELETE FROM tags WHERE id = %s", (4,))


def test_tags_delete_unknown_tag(tag_db):
    conn = tag_db(RecordingConnection())

    result = runner.invoke(app, ["tags", "delete", "ghost"])

    assert result.exit_code == 1
    assert "not found" in result.output
    assert conn.commits == 0
