"""CLI integration tests for the round-trip demo."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from tools import demo_roundtrip


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


def test_roundtrip_command(cli_runner: CliRunner, tmp_path: Path) -> None:
    target = tmp_path / "people.xlsx"
    result = cli_runner.invoke(
        demo_roundtrip.app,
        ["roundtrip", "--path", str(target), "--count", "5", "--seed", "7"],
    )
    assert result.exit_code == 0, result.stdout
    assert target.exists()
    assert "Round-tripped 5 records" in result.stdout


def test_export_command_writes_requested_formats(cli_runner: CliRunner, tmp_path: Path) -> None:
    options = tmp_path / "options.yaml"
    options.write_text("title: Staff\n", encoding="utf-8")
    result = cli_runner.invoke(
        demo_roundtrip.app,
        [
            "export",
            "--out-dir",
            str(tmp_path / "out"),
            "--format",
            "xlsx",
            "--format",
            "docx",
            "--count",
            "3",
            "--options",
            str(options),
        ],
    )
    assert result.exit_code == 0, result.stdout
    assert (tmp_path / "out" / "people.xlsx").exists()
    assert (tmp_path / "out" / "people.docx").exists()
    assert not (tmp_path / "out" / "people.pdf").exists()


def test_export_rejects_unknown_format(cli_runner: CliRunner, tmp_path: Path) -> None:
    result = cli_runner.invoke(
        demo_roundtrip.app,
        ["export", "--out-dir", str(tmp_path), "--format", "csv"],
    )
    assert result.exit_code != 0


def test_generated_people_are_reproducible() -> None:
    assert demo_roundtrip.generate_people(3, seed=1) == demo_roundtrip.generate_people(3, seed=1)
