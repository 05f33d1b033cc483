"""Tests for the show and check commands, and bare ``linkctl``."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from linkctl.cli import cli
from linkctl.domain.document import Document
from linkctl.infrastructure.toml_storage import TomlStorage


@pytest.mark.usefixtures("_isolated_links")
class TestShowCommand:
    def test_lists_sections(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["show"])
        assert result.exit_code == 0, result.output
        assert "aliases:" in result.stdout
        assert "https://pypi.org" in result.stdout
        assert "[gh, py]" in result.stdout

    def test_no_subcommand_shows_catalogue(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, [])
        assert result.exit_code == 0
        assert "links:" in result.stdout

    def test_sort_url(self, cli_runner: CliRunner, seeded_storage: TomlStorage) -> None:
        seeded_storage.save(Document(links={"zeta": "https://a", "alpha": "https://z"}))
        result = cli_runner.invoke(cli, ["show", "--sort", "url"])
        assert result.stdout.index("zeta") < result.stdout.index("alpha")

    def test_bad_sort_rejected(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["show", "--sort", "date"])
        assert result.exit_code == 2

    def test_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "show"])
        data = json.loads(result.stdout)
        assert data["op"] == "show"
        assert data["data"]["counts"] == {"links": 3, "aliases": 2, "groups": 2}
        assert data["meta"]["backend"] == "toml"

    def test_empty_catalogue(self, cli_runner: CliRunner, seeded_storage: TomlStorage) -> None:
        seeded_storage.save(Document())
        result = cli_runner.invoke(cli, ["show"])
        assert result.stdout.strip() == "No links yet."


class TestFirstRun:
    def test_seeds_default_document(
        self, cli_runner: CliRunner, _isolated_home: Path
    ) -> None:
        result = cli_runner.invoke(cli, ["show"])
        assert result.exit_code == 0, result.output
        path = _isolated_home / ".config" / "linkctl" / "links" / "config.toml"
        assert path.is_file()
        assert "alias1" in result.stdout

    def test_config_flag(self, cli_runner: CliRunner, links_path: Path) -> None:
        result = cli_runner.invoke(cli, ["-c", str(links_path), "resolve", "alias1"])
        assert result.exit_code == 0
        assert links_path.is_file()


class TestCorruptFile:
    def test_parse_error_is_fatal(self, cli_runner: CliRunner, storage: TomlStorage) -> None:
        storage.path.parent.mkdir(parents=True)
        storage.path.write_text("[links\n", encoding="utf-8")
        result = cli_runner.invoke(cli, ["-c", str(storage.path), "show"])
        assert result.exit_code == 1
        assert "Error: Failed to parse links file" in result.stderr
        assert "Traceback" not in result.output

    def test_non_utf8_file_is_fatal(self, cli_runner: CliRunner, storage: TomlStorage) -> None:
        storage.path.parent.mkdir(parents=True)
        storage.path.write_bytes(b'[links]\nx = "\xff\xfe"\n')
        result = cli_runner.invoke(cli, ["-c", str(storage.path), "show"])
        assert result.exit_code == 1
        assert "Error: Failed to parse links file" in result.stderr
        assert not isinstance(result.exception, UnicodeDecodeError)

    def test_parse_error_in_subgroup_command(
        self, cli_runner: CliRunner, storage: TomlStorage
    ) -> None:
        storage.path.parent.mkdir(parents=True)
        storage.path.write_text("= nope", encoding="utf-8")
        result = cli_runner.invoke(cli, ["-c", str(storage.path), "add", "link", "a", "https://a"])
        assert result.exit_code == 1
        assert "Failed to parse links file" in result.stderr
        assert storage.path.read_text(encoding="utf-8") == "= nope"


@pytest.mark.usefixtures("_isolated_links")
class TestCheckCommand:
    def test_healthy(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["check"])
        assert result.exit_code == 0
        assert "healthy: True" in result.stdout

    def test_reports_issues(self, cli_runner: CliRunner, seeded_storage: TomlStorage) -> None:
        seeded_storage.save(Document(aliases={"x": "gone"}))
        result = cli_runner.invoke(cli, ["check"])
        assert result.exit_code == 0
        assert "alias 'x' points to 'gone' which is not in [links]" in result.stdout

    def test_strict_exits_nonzero(
        self, cli_runner: CliRunner, seeded_storage: TomlStorage
    ) -> None:
        seeded_storage.save(Document(aliases={"x": "gone"}))
        result = cli_runner.invoke(cli, ["check", "--strict"])
        assert result.exit_code == 1

    def test_strict_healthy(self, cli_runner: CliRunner) -> None:
        assert cli_runner.invoke(cli, ["check", "--strict"]).exit_code == 0
