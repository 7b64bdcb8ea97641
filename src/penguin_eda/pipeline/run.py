from __future__ import annotations

import csv
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Optional, Union

import pandas as pd

from ..clean import CleaningOutcome, clean
from ..config import AnalysisConfig
from ..dataset import load_penguins, missing_counts
from ..models import Correlation, RunManifest, SpeciesMeans
from ..plots import render_charts
from ..report import ReportInputs, write_report
from ..summarize import ColumnSummary, body_mass_correlations, describe_columns, species_means
from ..utils import merge_json, now_iso
from .context import RunContext

BUNDLED_SOURCE = "palmerpenguins (bundled)"


@dataclass(frozen=True)
class Analysis:
    """Numeric results of one pass over the table (no plots, no files)."""

    raw: pd.DataFrame
    cleaned: pd.DataFrame
    cleaning: CleaningOutcome
    missing: pd.Series
    skim: ColumnSummary
    means: dict[str, SpeciesMeans]
    correlations: list[Correlation]


def analyze(raw: pd.DataFrame) -> Analysis:
    """Clean, summarize and correlate an already-loaded table."""
    cleaned, outcome = clean(raw)
    return Analysis(
        raw=raw,
        cleaned=cleaned,
        cleaning=outcome,
        missing=missing_counts(raw),
        skim=describe_columns(cleaned),
        means=species_means(cleaned),
        correlations=body_mass_correlations(cleaned),
    )


@dataclass(frozen=True)
class MetricRow:
    """One row of metrics.csv (section,key,value)."""

    section: str
    key: str
    value: str

    def as_list(self) -> list[str]:
        return [self.section, self.key, self.value]


_METRICS_HEADER = ["section", "key", "value"]


def metric_rows(analysis: Analysis) -> list[MetricRow]:
    rows = [
        MetricRow("dataset", "rows_loaded", str(analysis.cleaning.rows_in)),
        MetricRow("dataset", "rows_clean", str(analysis.cleaning.rows_out)),
        MetricRow("dataset", "rows_dropped", str(analysis.cleaning.rows_dropped)),
    ]
    for col, n in analysis.missing.items():
        rows.append(MetricRow("missing", str(col), str(int(n))))
    for species, m in analysis.means.items():
        rows.append(MetricRow("species_means", f"{species}.n", str(m.n)))
        rows.append(MetricRow("species_means", f"{species}.avg_body_mass", f"{m.avg_body_mass:.6f}"))
        rows.append(MetricRow("species_means", f"{species}.avg_bill_length", f"{m.avg_bill_length:.6f}"))
        rows.append(MetricRow("species_means", f"{species}.avg_bill_depth", f"{m.avg_bill_depth:.6f}"))
        rows.append(MetricRow("species_means", f"{species}.avg_flipper_length", f"{m.avg_flipper_length:.6f}"))
    for c in analysis.correlations:
        rows.append(MetricRow("correlation", f"{c.x}~{c.y}", f"{c.coefficient:.6f}"))
    return rows


def _write_metrics(path: Path, rows: Iterable[MetricRow]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as f:
        w = csv.writer(f)
        w.writerow(_METRICS_HEADER)
        for r in rows:
            w.writerow(r.as_list())


def _log_stage(ctx: RunContext, stage: str, **details: Any) -> None:
    merge_json(ctx.analysis_log_path(), {"stages": [{"stage": stage, "at": now_iso(), **details}]})


def run_pipeline(
    *,
    config: Optional[AnalysisConfig] = None,
    source: Optional[Union[str, Path]] = None,
    run_id: Optional[str] = None,
) -> RunManifest:
    """Load, clean, summarize, plot and report; return the artifact paths.

    Load and render failures propagate to the caller after being recorded
    in analysis_log.json.
    """

    cfg = config or AnalysisConfig()
    ctx = RunContext.create(out_dir=cfg.out_dir, run_id=run_id)
    ctx.run_dir.mkdir(parents=True, exist_ok=True)
    log_path = ctx.analysis_log_path()
    source_label = str(source) if source is not None else BUNDLED_SOURCE

    merge_json(
        log_path,
        {"run_id": ctx.run_id, "created_at": now_iso(), "source": source_label, "config": cfg.as_dict(), "stages": []},
    )

    stage = "load"
    try:
        raw = load_penguins(source)
        _log_stage(ctx, "load", status="ok", rows=int(len(raw)), columns=int(raw.shape[1]))

        stage = "analyze"
        analysis = analyze(raw)
        _log_stage(
            ctx,
            "clean",
            status="ok",
            rows_in=analysis.cleaning.rows_in,
            rows_out=analysis.cleaning.rows_out,
            rows_dropped=analysis.cleaning.rows_dropped,
        )
        _write_metrics(ctx.metrics_csv_path(), metric_rows(analysis))
        _log_stage(ctx, "summarize", status="ok", species=sorted(analysis.means), artifact="metrics.csv")

        stage = "visualize"
        charts = render_charts(analysis.cleaned, ctx.plots_dir(), cfg)
        _log_stage(ctx, "visualize", status="ok", plots=[c.path.name for c in charts])

        stage = "report"
        report_path = write_report(
            ReportInputs(
                run_dir=ctx.run_dir,
                source=source_label,
                cleaning=analysis.cleaning,
                missing=analysis.missing,
                skim=analysis.skim,
                means=analysis.means,
                correlations=analysis.correlations,
                charts=charts,
            ),
            cfg.report_format,
        )
        _log_stage(ctx, "report", status="ok", format=cfg.report_format.value, artifact=report_path.name)
    except Exception as e:
        merge_json(log_path, {"errors": [{"stage": stage, "error": f"{type(e).__name__}: {e}"}]})
        raise

    merge_json(log_path, {"finished_at": now_iso()})
    return RunManifest(
        run_id=ctx.run_id,
        run_dir=str(ctx.run_dir),
        report=str(report_path),
        report_format=cfg.report_format,
        metrics_csv=str(ctx.metrics_csv_path()),
        analysis_log_json=str(log_path),
        plots_dir=str(ctx.plots_dir()),
        plots=[str(c.path) for c in charts],
    )
