"""
tests/test_analyze_cli.py

Tests for the command-line report script.
"""

from __future__ import annotations

import importlib.util
import json
from pathlib import Path

import pytest

SCRIPT_PATH = Path(__file__).resolve().parents[1] / "scripts" / "analyze_defects_csv.py"


@pytest.fixture(scope="module")
def cli():
    spec = importlib.util.spec_from_file_location("analyze_defects_csv", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_prints_report_for_valid_export(
    cli, tmp_path: Path, jira_export_csv: str, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "defects.csv"
    path.write_bytes(jira_export_csv.encode("utf-8"))

    exit_code = cli.main([str(path)])

    assert exit_code == 0
    report = json.loads(capsys.readouterr().out)
    assert report["rows_processed"] == 3
    assert report["groups"] == [
        {"name": "Critical", "count": 1},
        {"name": "High", "count": 1},
        {"name": "Low", "count": 1},
    ]
    assert report["trend"] == [
        {"date": "2024-05-27", "count": 2},
        {"date": "2024-06-03", "count": 1},
    ]
    assert [item["id"] for item in report["attention"]] == ["BUG-3"]
    assert report["resolution_time"]["count"] == 1


def test_resolution_trend_by_month(
    cli, tmp_path: Path, jira_export_csv: str, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "defects.csv"
    path.write_bytes(jira_export_csv.encode("utf-8"))

    exit_code = cli.main([str(path), "--period", "month", "--analysis", "resolution"])

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out)["trend"] == [{"date": "2024-05", "count": 1}]


def test_ingestion_failure_exits_with_one(
    cli, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "header_only.csv"
    path.write_text("Issue key,Summary,Created\n", encoding="utf-8")

    exit_code = cli.main([str(path)])

    assert exit_code == 1
    assert json.loads(capsys.readouterr().err)["code"] == "structural_error"


def test_missing_file_exits_with_two(cli, tmp_path: Path) -> None:
    assert cli.main([str(tmp_path / "missing.csv")]) == 2
