from __future__ import annotations

from pathlib import Path

import pandas as pd

from .inputs import SECTIONS, TITLE, ReportInputs, format_float


def _md_table(df: pd.DataFrame, *, index: bool = False) -> list[str]:
    frame = df.reset_index() if index else df
    cols = [str(c) for c in frame.columns]
    lines = ["| " + " | ".join(cols) + " |", "|" + "|".join(["---"] * len(cols)) + "|"]
    for _, row in frame.iterrows():
        cells = [format_float(row[c]).replace("|", "\\|") for c in frame.columns]
        lines.append("| " + " | ".join(cells) + " |")
    return lines


def _chart_lines(inputs: ReportInputs, section: str) -> list[str]:
    lines: list[str] = []
    for row in inputs.chart_rows(section):
        if len(row) == 1:
            c = row[0]
            lines.append(f"![{c.title}](plots/{c.path.name})")
        else:
            for label, c in zip("AB", row):
                lines.append(f"**{label}.** ![{c.title}](plots/{c.path.name})")
        lines.append("")
    return lines


def _section_bodies(inputs: ReportInputs) -> dict[str, list[str]]:
    cleaning = inputs.cleaning

    stats: list[str] = []
    if not inputs.skim.numeric.empty:
        stats += _md_table(inputs.skim.numeric.round(2), index=True) + [""]
    if not inputs.skim.categorical.empty:
        stats += _md_table(inputs.skim.categorical.round(3), index=True) + [""]

    findings = inputs.findings
    if findings:
        finding_lines = [f"- **{f.title}.** {f.text}" for f in findings]
    else:
        finding_lines = ["- No findings: the cleaned table is empty."]

    return {
        "Dataset Overview": [
            f"- Source: {inputs.source}",
            f"- Rows loaded: {cleaning.rows_in}",
            f"- Rows after cleaning: {cleaning.rows_out}",
            "",
        ],
        "Missing Values": _md_table(inputs.missing_table())
        + ["", f"Rows with any missing field were removed ({cleaning.rows_dropped} dropped).", ""],
        "Descriptive Statistics": stats,
        "Summary by Species": _md_table(inputs.means_table()) + [""],
        "Frequency Distribution": _chart_lines(inputs, "frequency"),
        "Body Mass Analysis": _chart_lines(inputs, "body_mass"),
        "Correlation Analysis": _md_table(inputs.correlation_table()) + [""],
        "Scatterplot Analysis": _chart_lines(inputs, "scatter"),
        "Findings": finding_lines + [""],
        "Limitations": [f"- {l}" for l in inputs.limitations()] + [""],
    }


def build_markdown_report(*, inputs: ReportInputs, output_path: Path) -> None:
    """Write report.md. Charts are linked relative to the run directory."""

    bodies = _section_bodies(inputs)
    lines: list[str] = [f"# {TITLE}", ""]
    for section in SECTIONS:
        lines += [f"## {section}", ""]
        lines += bodies[section]

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text("\n".join(lines), encoding="utf-8")
