"""Tests for the jdcov CLI commands."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest
import yaml
from click.testing import CliRunner

from jdcov.cli import _config_to_dict, cli
from jdcov.config import CONFIG_FILE, load_config

if TYPE_CHECKING:
    from pathlib import Path


def _write(root: Path, relative: str, content: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def java_project(tmp_path: Path) -> Path:
    """A documented class in an undocumented package: 100% classes, 0% packages."""
    _write(
        tmp_path,
        "src/com/example/Widget.java",
        "package com.example;\n\n/** Widget. */\npublic class Widget {\n"
        "    /** Runs. */\n    public void run() {}\n}\n",
    )
    return tmp_path


def test_version() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "report" in result.output
    assert "config" in result.output


class TestReportCommand:
    def test_report_to_file(self, java_project: Path) -> None:
        output = java_project / "coverage.txt"
        result = CliRunner().invoke(
            cli,
            ["report", str(java_project / "src"), "--path", str(java_project), "-o", str(output)],
        )

        assert result.exit_code == 0, result.output
        text = output.read_text(encoding="utf-8")
        assert text.startswith("Classes/Interfaces/Enums")
        assert "\tClass Widget: Package: com.example Documented: true (100.00%)\n" in text
        assert "\t\tMethod: run Documented: true (100.00%)\n" in text
        assert "\tPackage com.example. Documented: false\n" in text
        assert text.endswith("Project Documentation Coverage: 50.00%\n\n")

    def test_report_to_stdout(self, java_project: Path) -> None:
        result = CliRunner().invoke(
            cli, ["report", str(java_project / "src"), "--path", str(java_project)]
        )
        assert result.exit_code == 0, result.output
        assert "Project Documentation Coverage: 50.00%" in result.output

    def test_fail_under_not_met(self, java_project: Path) -> None:
        result = CliRunner().invoke(
            cli,
            [
                "report",
                str(java_project / "src"),
                "--path",
                str(java_project),
                "--fail-under",
                "90",
            ],
        )
        assert result.exit_code == 1
        assert "below" in result.output

    def test_fail_under_met(self, java_project: Path) -> None:
        result = CliRunner().invoke(
            cli,
            [
                "report",
                str(java_project / "src"),
                "--path",
                str(java_project),
                "--fail-under",
                "50",
            ],
        )
        assert result.exit_code == 0, result.output
        assert "meets" in result.output

    def test_fail_under_out_of_range_rejected(self, java_project: Path) -> None:
        result = CliRunner().invoke(
            cli, ["report", "--path", str(java_project), "--fail-under", "120"]
        )
        assert result.exit_code == 2

    def test_missing_source_path(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(
            cli, ["report", str(tmp_path / "missing"), "--path", str(tmp_path)]
        )
        assert result.exit_code == 2

    def test_syntax_error_aborts(self, tmp_path: Path) -> None:
        _write(tmp_path, "Broken.java", "public class Broken { void x( }\n")
        result = CliRunner().invoke(cli, ["report", "--path", str(tmp_path)])
        assert result.exit_code == 1
        assert "Syntax errors" in result.output

    def test_access_option(self, tmp_path: Path) -> None:
        _write(tmp_path, "Hidden.java", "/** Hidden. */\nclass Hidden {}\n")
        output = tmp_path / "out.txt"

        result = CliRunner().invoke(
            cli, ["report", "--path", str(tmp_path), "--access", "package", "-o", str(output)]
        )

        assert result.exit_code == 0, result.output
        assert "\tClass Hidden: Package: <unnamed> Documented: true" in output.read_text(
            encoding="utf-8"
        )

    def test_no_types_warning(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(cli, ["report", "--path", str(tmp_path)])
        assert result.exit_code == 0, result.output
        assert "No Java types found" in result.output

    def test_exclude_option(self, java_project: Path) -> None:
        _write(java_project, "src/gen/Gen.java", "public class Gen {}\n")
        output = java_project / "out.txt"

        result = CliRunner().invoke(
            cli,
            [
                "report",
                str(java_project / "src"),
                "--path",
                str(java_project),
                "--exclude",
                "gen/*",
                "-o",
                str(output),
            ],
        )

        assert result.exit_code == 0, result.output
        assert "Gen" not in output.read_text(encoding="utf-8")

    def test_summary_table(self, java_project: Path) -> None:
        result = CliRunner().invoke(
            cli,
            [
                "report",
                str(java_project / "src"),
                "--path",
                str(java_project),
                "-o",
                str(java_project / "out.txt"),
                "--summary",
            ],
        )
        assert result.exit_code == 0, result.output
        assert "Documentation Coverage" in result.output

    def test_uses_config_file(self, java_project: Path) -> None:
        _write(
            java_project,
            CONFIG_FILE,
            yaml.dump({"source": {"paths": ["src"]}, "report": {"output": "report.txt"}}),
        )
        result = CliRunner().invoke(cli, ["report", "--path", str(java_project)])

        assert result.exit_code == 0, result.output
        assert (java_project / "report.txt").read_text(encoding="utf-8").endswith(
            "Project Documentation Coverage: 50.00%\n\n"
        )

    def test_config_output_ignores_working_directory(
        self, java_project: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _write(java_project, CONFIG_FILE, yaml.dump({"report": {"output": "out.txt"}}))
        monkeypatch.chdir(java_project / "src")

        result = CliRunner().invoke(cli, ["report", "--path", str(java_project)])

        assert result.exit_code == 0, result.output
        assert (java_project / "out.txt").is_file()
        assert not (java_project / "src" / "out.txt").exists()

    def test_config_threshold(self, java_project: Path) -> None:
        _write(java_project, CONFIG_FILE, yaml.dump({"coverage": {"fail_under": 75}}))
        result = CliRunner().invoke(cli, ["report", "--path", str(java_project)])
        assert result.exit_code == 1

    def test_invalid_config_aborts(self, java_project: Path) -> None:
        _write(java_project, CONFIG_FILE, yaml.dump({"source": {"access": "friends"}}))
        result = CliRunner().invoke(cli, ["report", "--path", str(java_project)])
        assert result.exit_code == 1
        assert "configuration error" in result.output


class TestConfigCommands:
    def test_config_to_dict_drops_raw(self, tmp_path: Path) -> None:
        config_dict = _config_to_dict(load_config(tmp_path))
        assert "raw" not in config_dict
        assert config_dict["source"]["access"] == "protected"

    def test_show_yaml(self, tmp_path: Path) -> None:
        _write(tmp_path, CONFIG_FILE, yaml.dump({"source": {"access": "public"}}))
        result = CliRunner().invoke(cli, ["config", "show", "--path", str(tmp_path)])

        assert result.exit_code == 0, result.output
        shown = yaml.safe_load(result.output)
        assert shown["source"]["access"] == "public"

    def test_show_json(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(
            cli, ["config", "show", "--path", str(tmp_path), "--json-output"]
        )

        assert result.exit_code == 0, result.output
        shown = json.loads(result.output)
        assert shown["report"] == {"output": "-", "summary": False}

    def test_validate_ok(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(cli, ["config", "validate", "--path", str(tmp_path)])
        assert result.exit_code == 0
        assert "Configuration is valid!" in result.output

    def test_validate_errors(self, tmp_path: Path) -> None:
        _write(tmp_path, CONFIG_FILE, yaml.dump({"coverage": {"fail_under": 150}}))
        result = CliRunner().invoke(cli, ["config", "validate", "--path", str(tmp_path)])
        assert result.exit_code == 1
        assert "coverage.fail_under must be between 0 and 100" in result.output

    def test_validate_rejects_quoted_boolean(self, tmp_path: Path) -> None:
        _write(tmp_path, CONFIG_FILE, yaml.dump({"source": {"fail_on_parse_errors": "false"}}))
        result = CliRunner().invoke(cli, ["config", "validate", "--path", str(tmp_path)])
        assert result.exit_code == 1
        assert "source.fail_on_parse_errors must be true or false" in result.output
