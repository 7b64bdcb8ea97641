from __future__ import annotations

from pathlib import Path
from typing import Optional

import pandas as pd
import typer

from .config import AnalysisConfig
from .dataset import DatasetSchemaError, load_penguins, missing_counts, structure
from .models import ReportFormat
from .pipeline import analyze, run_pipeline
from .summarize import correlation_frame, species_means_frame

app = typer.Typer(add_completion=False, help="Exploratory data analysis of the Palmer penguins dataset")

_DATA_HELP = "CSV with the penguins columns (default: bundled dataset)"


def _heading(title: str) -> None:
    typer.echo("")
    typer.echo(title)
    typer.echo("-" * len(title))


def _echo_frame(df: pd.DataFrame, *, index: bool = True) -> None:
    with pd.option_context("display.width", 160, "display.max_columns", 20):
        typer.echo(df.to_string(index=index))


def _exit_code(e: Exception) -> int:
    return 2 if isinstance(e, FileNotFoundError) else 1


@app.command()
def inspect(data: Optional[Path] = typer.Option(None, "--data", help=_DATA_HELP)):
    """
    Print the raw table's structure, summary and missing counts per column.
    """
    try:
        df = load_penguins(data)
    except (FileNotFoundError, DatasetSchemaError) as e:
        typer.echo(f"ERROR: {e}")
        raise typer.Exit(code=_exit_code(e))

    _heading(f"Structure ({len(df)} rows x {df.shape[1]} columns)")
    _echo_frame(structure(df), index=False)
    _heading("Summary")
    _echo_frame(df.describe(include="all").round(2))
    _heading("Missing values")
    _echo_frame(missing_counts(df).to_frame("missing"))


@app.command()
def summary(data: Optional[Path] = typer.Option(None, "--data", help=_DATA_HELP)):
    """
    Drop incomplete rows, then print descriptive statistics, species means
    and body mass correlations.
    """
    try:
        result = analyze(load_penguins(data))
    except (FileNotFoundError, DatasetSchemaError) as e:
        typer.echo(f"ERROR: {e}")
        raise typer.Exit(code=_exit_code(e))

    c = result.cleaning
    typer.echo(f"Rows loaded: {c.rows_in}  after cleaning: {c.rows_out}  dropped: {c.rows_dropped}")
    _heading("Numeric columns")
    _echo_frame(result.skim.numeric.round(2))
    _heading("Categorical columns")
    _echo_frame(result.skim.categorical.round(3))
    _heading("Summary by species")
    _echo_frame(species_means_frame(result.means).round(2), index=False)
    _heading("Correlation with body mass")
    _echo_frame(correlation_frame(result.correlations).round(4), index=False)


@app.command()
def render(
    data: Optional[Path] = typer.Option(None, "--data", help=_DATA_HELP),
    out: Optional[Path] = typer.Option(None, "--out", help="Root directory for run outputs (default: ./runs)"),
    fmt: Optional[ReportFormat] = typer.Option(
        None, "--format", help="Report document format", case_sensitive=False
    ),
):
    """
    Run the full analysis and write plots, report, metrics.csv and analysis_log.json
    under <out>/<run_id>/.
    """
    cfg = AnalysisConfig.from_env().with_overrides(out_dir=out, report_format=fmt)
    try:
        manifest = run_pipeline(config=cfg, source=data)
    except Exception as e:
        typer.echo(f"ERROR: {e}")
        raise typer.Exit(code=_exit_code(e))

    typer.echo("Run complete.")
    typer.echo(f"Run dir: {manifest.run_dir}")
    typer.echo(f"Report: {manifest.report}")
    typer.echo(f"Metrics: {manifest.metrics_csv}")
    typer.echo(f"Log: {manifest.analysis_log_json}")
    typer.echo(f"Plots: {manifest.plots_dir} ({len(manifest.plots)} files)")
