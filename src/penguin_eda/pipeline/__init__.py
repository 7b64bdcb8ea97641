"""Pipeline orchestration: load, clean, summarize, visualize, report."""

from .context import RunContext
from .run import Analysis, MetricRow, analyze, metric_rows, run_pipeline

__all__ = ["Analysis", "MetricRow", "RunContext", "analyze", "metric_rows", "run_pipeline"]
