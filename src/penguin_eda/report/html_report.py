from __future__ import annotations

import html
from pathlib import Path

import pandas as pd

from ..plots import RenderedChart
from ..plots._util import png_base64
from .inputs import SECTIONS, TITLE, ReportInputs, format_float

_STYLE = (
    "<style>"
    "body{font-family:system-ui,Segoe UI,Arial,sans-serif;margin:24px;line-height:1.35;}"
    "h1,h2{margin:0.6em 0 0.2em 0;}"
    "table{border-collapse:collapse;margin:12px 0;}"
    "th,td{border:1px solid #ddd;padding:6px 8px;font-size:13px;vertical-align:top;}"
    "th{background:#f6f8fa;text-align:left;}"
    ".panels{display:flex;gap:16px;align-items:flex-start;}"
    ".panel{flex:1;}"
    ".label{font-weight:bold;font-size:18px;}"
    ".img{max-width:100%;height:auto;border:1px solid #eee;border-radius:6px;}"
    "</style>"
)


def _dataframe_table(df: pd.DataFrame, *, index: bool = False) -> str:
    frame = df.reset_index() if index else df
    buf: list[str] = ["<table><thead><tr>"]
    for c in frame.columns:
        buf.append(f"<th>{html.escape(str(c))}</th>")
    buf.append("</tr></thead><tbody>")
    for _, row in frame.iterrows():
        buf.append("<tr>")
        for c in frame.columns:
            buf.append(f"<td>{html.escape(format_float(row[c]))}</td>")
        buf.append("</tr>")
    buf.append("</tbody></table>")
    return "".join(buf)


def _img_tag(chart: RenderedChart) -> str:
    return (
        f"<img class='img' alt='{html.escape(chart.title)}' "
        f"src='data:image/png;base64,{png_base64(chart.path)}' />"
    )


def _charts_html(inputs: ReportInputs, section: str) -> list[str]:
    parts: list[str] = []
    for row in inputs.chart_rows(section):
        if len(row) == 1:
            parts.append(f"<p>{_img_tag(row[0])}</p>")
            continue
        parts.append("<div class='panels'>")
        for label, chart in zip("AB", row):
            parts.append(f"<div class='panel'><div class='label'>{label}</div>{_img_tag(chart)}</div>")
        parts.append("</div>")
    return parts


def _section_bodies(inputs: ReportInputs) -> dict[str, list[str]]:
    cleaning = inputs.cleaning

    stats: list[str] = []
    if not inputs.skim.numeric.empty:
        stats.append(_dataframe_table(inputs.skim.numeric.round(2), index=True))
    if not inputs.skim.categorical.empty:
        stats.append(_dataframe_table(inputs.skim.categorical.round(3), index=True))

    findings = inputs.findings
    if findings:
        finding_parts = ["<ul>"]
        finding_parts += [f"<li><b>{html.escape(f.title)}.</b> {html.escape(f.text)}</li>" for f in findings]
        finding_parts.append("</ul>")
    else:
        finding_parts = ["<p>No findings: the cleaned table is empty.</p>"]

    return {
        "Dataset Overview": [
            "<ul>",
            f"<li><b>Source:</b> {html.escape(inputs.source)}</li>",
            f"<li><b>Rows loaded:</b> {cleaning.rows_in:,}</li>",
            f"<li><b>Rows after cleaning:</b> {cleaning.rows_out:,}</li>",
            "</ul>",
        ],
        "Missing Values": [
            _dataframe_table(inputs.missing_table()),
            f"<p>Rows with any missing field were removed ({cleaning.rows_dropped:,} dropped).</p>",
        ],
        "Descriptive Statistics": stats,
        "Summary by Species": [_dataframe_table(inputs.means_table())],
        "Frequency Distribution": _charts_html(inputs, "frequency"),
        "Body Mass Analysis": _charts_html(inputs, "body_mass"),
        "Correlation Analysis": [_dataframe_table(inputs.correlation_table())],
        "Scatterplot Analysis": _charts_html(inputs, "scatter"),
        "Findings": finding_parts,
        "Limitations": ["<ul>"] + [f"<li>{html.escape(line)}</li>" for line in inputs.limitations()] + ["</ul>"],
    }


def build_html_report(*, inputs: ReportInputs, output_path: Path) -> None:
    """Write a self-contained report.html with the charts embedded."""

    bodies = _section_bodies(inputs)
    parts: list[str] = [
        "<!doctype html>",
        "<html><head><meta charset='utf-8'>",
        f"<title>{html.escape(TITLE)}</title>",
        _STYLE,
        "</head><body>",
        f"<h1>{html.escape(TITLE)}</h1>",
    ]
    for section in SECTIONS:
        parts.append(f"<h2>{html.escape(section)}</h2>")
        parts += bodies[section]
    parts.append("</body></html>")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text("\n".join(parts), encoding="utf-8")
