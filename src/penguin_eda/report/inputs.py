from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from ..clean import CleaningOutcome
from ..models import Correlation, SpeciesMeans
from ..plots import PANEL_PAIRS, RenderedChart
from ..summarize import ColumnSummary, correlation_frame, species_means_frame
from .findings import Finding, derive_findings

SECTIONS: tuple[str, ...] = (
    "Dataset Overview",
    "Missing Values",
    "Descriptive Statistics",
    "Summary by Species",
    "Frequency Distribution",
    "Body Mass Analysis",
    "Correlation Analysis",
    "Scatterplot Analysis",
    "Findings",
    "Limitations",
)

TITLE = "Exploratory Data Analysis of the Palmer Penguins Dataset"


@dataclass(frozen=True)
class ReportInputs:
    """Everything the report writers need, already computed."""

    run_dir: Path
    source: str
    cleaning: CleaningOutcome
    missing: pd.Series
    skim: ColumnSummary
    means: dict[str, SpeciesMeans]
    correlations: list[Correlation]
    charts: list[RenderedChart]

    @property
    def findings(self) -> list[Finding]:
        return derive_findings(self.means, self.correlations)

    def means_table(self) -> pd.DataFrame:
        return species_means_frame(self.means).round(2)

    def correlation_table(self) -> pd.DataFrame:
        return correlation_frame(self.correlations).round(4)

    def missing_table(self) -> pd.DataFrame:
        return pd.DataFrame({"column": self.missing.index.astype(str), "missing": self.missing.values})

    def charts_by_section(self, section: str) -> list[RenderedChart]:
        return [c for c in self.charts if c.section == section]

    def chart_rows(self, section: str) -> list[list[RenderedChart]]:
        """Charts of a section grouped into display rows; A/B pairs share one."""
        by_name = {c.name: c for c in self.charts_by_section(section)}
        rows: list[list[RenderedChart]] = []
        used: set[str] = set()
        for chart in self.charts_by_section(section):
            if chart.name in used:
                continue
            pair = next((p for p in PANEL_PAIRS if chart.name in p and all(n in by_name for n in p)), None)
            if pair is None:
                rows.append([chart])
                used.add(chart.name)
            else:
                rows.append([by_name[n] for n in pair])
                used.update(pair)
        return rows

    def limitations(self) -> list[str]:
        lines = [
            f"Rows with any missing field were dropped before analysis "
            f"({self.cleaning.rows_dropped} of {self.cleaning.rows_in} rows); no values were imputed.",
            "Correlations are Pearson coefficients over all species pooled; "
            "relationships within a species can differ in strength.",
        ]
        if any(math.isnan(c.coefficient) for c in self.correlations):
            lines.append("At least one correlation is undefined (too few rows or a constant column).")
        return lines


def format_float(v: object, digits: int = 2) -> str:
    if isinstance(v, float):
        if math.isnan(v):
            return "NA"
        return f"{v:,.{digits}f}"
    return str(v)
