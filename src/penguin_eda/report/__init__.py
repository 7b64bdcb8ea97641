"""Report stage.

Writes the narrative EDA report in one of the supported formats. The
writers only read what the earlier stages computed.
"""

from pathlib import Path

from ..models import ReportFormat
from .findings import Finding, derive_findings
from .html_report import build_html_report
from .inputs import SECTIONS, ReportInputs
from .markdown import build_markdown_report

REPORT_FILENAMES: dict[ReportFormat, str] = {
    ReportFormat.MARKDOWN: "report.md",
    ReportFormat.HTML: "report.html",
}


def write_report(inputs: ReportInputs, fmt: ReportFormat) -> Path:
    out = inputs.run_dir / REPORT_FILENAMES[fmt]
    if fmt == ReportFormat.HTML:
        build_html_report(inputs=inputs, output_path=out)
    else:
        build_markdown_report(inputs=inputs, output_path=out)
    return out


__all__ = [
    "Finding",
    "REPORT_FILENAMES",
    "ReportInputs",
    "SECTIONS",
    "build_html_report",
    "build_markdown_report",
    "derive_findings",
    "write_report",
]
