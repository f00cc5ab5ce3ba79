"""Tests for the click CLI."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from quine.cli import cli


@pytest.fixture
def config_file(write_files, source_dir, tmp_path):
    write_files(
        {
            "index.html": '<link href="style.css"><a href="about.html">a</a>',
            "style.scss": "a { color: blue; }",
            "about.md": "# About",
        }
    )
    path = tmp_path / "quine.config.json"
    path.write_text(json.dumps({"sourceDir": "site", "targetDir": "public", "siteName": "CLI"}))
    return path


class TestBuildCommand:
    def test_build(self, config_file, tmp_path):
        result = CliRunner().invoke(cli, ["--config", str(config_file), "build"])
        assert result.exit_code == 0, result.output
        assert "Built 3 files" in result.output
        assert (tmp_path / "public" / "style.css").exists()
        assert (tmp_path / "public" / "about.html").exists()

    def test_build_json(self, config_file):
        result = CliRunner().invoke(cli, ["--config", str(config_file), "build", "--json"])
        assert result.exit_code == 0, result.output
        payload = json.loads(result.output[result.output.index("{"):])
        assert len(payload["written"]) == 3
        assert payload["failures"] == []

    def test_missing_root_fails(self, tmp_path):
        config = tmp_path / "quine.config.json"
        (tmp_path / "empty").mkdir()
        config.write_text(json.dumps({"sourceDir": "empty"}))
        result = CliRunner().invoke(cli, ["--config", str(config), "build"])
        assert result.exit_code != 0
        assert "index.html" in result.output

    def test_bad_config_fails(self, tmp_path):
        config = tmp_path / "quine.config.json"
        config.write_text("{")
        result = CliRunner().invoke(cli, ["--config", str(config), "build"])
        assert result.exit_code != 0
        assert "Failed to load config" in result.output


class TestInspectCommand:
    def test_inspect_derived(self, config_file):
        result = CliRunner().invoke(cli, ["--config", str(config_file), "inspect", "style.css"])
        assert result.exit_code == 0, result.output
        assert "[CssFile]" in result.output
        assert "derived from" in result.output
        assert "style.scss [ScssFile]" in result.output

    def test_inspect_dependencies(self, config_file):
        result = CliRunner().invoke(cli, ["--config", str(config_file), "inspect", "index.html"])
        assert result.exit_code == 0, result.output
        assert "style.css [CssFile]" in result.output
        assert "about.html [HtmlFile]" in result.output

    def test_inspect_missing(self, config_file):
        result = CliRunner().invoke(cli, ["--config", str(config_file), "inspect", "nope.css"])
        assert result.exit_code != 0
        assert "Nothing resolves" in result.output


def test_version():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "quine" in result.output
