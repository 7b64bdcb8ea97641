from __future__ import annotations

import csv
import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from penguin_eda.cli import app
from penguin_eda.config import AnalysisConfig
from penguin_eda.dataset import DatasetSchemaError
from penguin_eda.models import ReportFormat
from penguin_eda.pipeline import run_pipeline

runner = CliRunner()


def test_run_pipeline_writes_artifacts(sample_csv: Path, tmp_path: Path) -> None:
    cfg = AnalysisConfig(out_dir=tmp_path / "runs", report_format=ReportFormat.HTML, dpi=40)
    manifest = run_pipeline(config=cfg, source=sample_csv, run_id="r1")

    run_dir = tmp_path / "runs" / "r1"
    assert Path(manifest.run_dir) == run_dir
    assert Path(manifest.report) == run_dir / "report.html"
    assert len(manifest.plots) == 9
    assert all(Path(p).exists() for p in manifest.plots)

    with open(manifest.metrics_csv, encoding="utf-8", newline="") as f:
        rows = list(csv.DictReader(f))
    by_key = {(r["section"], r["key"]): r["value"] for r in rows}
    assert by_key[("dataset", "rows_loaded")] == "22"
    assert by_key[("dataset", "rows_clean")] == "19"
    assert float(by_key[("species_means", "Gentoo.avg_body_mass")]) == 5150.0

    log = json.loads(Path(manifest.analysis_log_json).read_text(encoding="utf-8"))
    assert log["run_id"] == "r1"
    assert [s["stage"] for s in log["stages"]] == ["load", "clean", "summarize", "visualize", "report"]
    assert all(s["status"] == "ok" for s in log["stages"])
    assert "finished_at" in log


def test_run_pipeline_logs_load_failure(tmp_path: Path) -> None:
    bad = tmp_path / "bad.csv"
    bad.write_text("species,island\nAdelie,Dream\n", encoding="utf-8")
    cfg = AnalysisConfig(out_dir=tmp_path / "runs")
    with pytest.raises(DatasetSchemaError):
        run_pipeline(config=cfg, source=bad, run_id="r2")

    log = json.loads((tmp_path / "runs" / "r2" / "analysis_log.json").read_text(encoding="utf-8"))
    assert log["errors"][0]["stage"] == "load"
    assert "DatasetSchemaError" in log["errors"][0]["error"]


def test_cli_summary_prints_tables(sample_csv: Path) -> None:
    result = runner.invoke(app, ["summary", "--data", str(sample_csv)])
    assert result.exit_code == 0, result.output
    assert "after cleaning: 19" in result.output
    assert "Summary by species" in result.output
    assert "Body Mass and Flipper Length" in result.output


def test_cli_inspect_prints_missing_counts(sample_csv: Path) -> None:
    result = runner.invoke(app, ["inspect", "--data", str(sample_csv)])
    assert result.exit_code == 0, result.output
    assert "Structure (22 rows x 8 columns)" in result.output
    assert "Missing values" in result.output


def test_cli_render_markdown(sample_csv: Path, tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("PENGUIN_EDA_DPI", "40")
    result = runner.invoke(
        app, ["render", "--data", str(sample_csv), "--out", str(tmp_path / "out"), "--format", "markdown"]
    )
    assert result.exit_code == 0, result.output
    assert "Run complete." in result.output
    reports = list((tmp_path / "out").glob("*/report.md"))
    assert len(reports) == 1


def test_cli_missing_file_exits_2(tmp_path: Path) -> None:
    result = runner.invoke(app, ["summary", "--data", str(tmp_path / "missing.csv")])
    assert result.exit_code == 2
    assert "ERROR" in result.output


def test_cli_schema_error_exits_1() -> None:
    fixture = Path(__file__).parent / "fixtures" / "penguins_bad_species.csv"
    result = runner.invoke(app, ["inspect", "--data", str(fixture)])
    assert result.exit_code == 1
    assert "Emperor" in result.output


def test_cli_render_fails_when_every_row_is_dropped(tmp_path: Path) -> None:
    incomplete = tmp_path / "no_sex.csv"
    incomplete.write_text(
        "species,island,bill_length_mm,bill_depth_mm,flipper_length_mm,body_mass_g,sex,year\n"
        "Adelie,Torgersen,39.1,18.7,181,3750,,2007\n"
        "Gentoo,Biscoe,46.1,13.2,211,4500,,2007\n",
        encoding="utf-8",
    )
    out = tmp_path / "out"
    result = runner.invoke(app, ["render", "--data", str(incomplete), "--out", str(out)])
    assert result.exit_code == 1
    assert "ERROR:" in result.output
    assert "empty table" in result.output

    logs = list(out.glob("*/analysis_log.json"))
    assert len(logs) == 1
    log = json.loads(logs[0].read_text(encoding="utf-8"))
    assert log["errors"] == [{"stage": "visualize", "error": "ValueError: Cannot render charts from an empty table."}]
    assert [s["stage"] for s in log["stages"]] == ["load", "clean", "summarize"]
    assert "finished_at" not in log
