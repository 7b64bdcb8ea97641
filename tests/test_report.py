from __future__ import annotations

import math
from pathlib import Path

import pandas as pd
import pytest

from penguin_eda.config import AnalysisConfig
from penguin_eda.models import Correlation, ReportFormat, SpeciesMeans
from penguin_eda.pipeline import analyze
from penguin_eda.plots import render_charts
from penguin_eda.report import SECTIONS, ReportInputs, derive_findings, html_report, markdown, write_report


@pytest.fixture
def inputs(sample_df: pd.DataFrame, tmp_path: Path) -> ReportInputs:
    result = analyze(sample_df)
    charts = render_charts(result.cleaned, tmp_path / "plots", AnalysisConfig(dpi=40))
    return ReportInputs(
        run_dir=tmp_path,
        source="penguins_sample.csv",
        cleaning=result.cleaning,
        missing=result.missing,
        skim=result.skim,
        means=result.means,
        correlations=result.correlations,
        charts=charts,
    )


def test_markdown_report_has_all_sections(inputs: ReportInputs) -> None:
    path = write_report(inputs, ReportFormat.MARKDOWN)
    assert path.name == "report.md"
    content = path.read_text(encoding="utf-8")
    for section in SECTIONS:
        assert f"## {section}" in content
    assert "(plots/body_mass_vs_flipper_length.png)" in content
    assert "**A.**" in content and "**B.**" in content
    assert "3 dropped" in content


def test_both_formats_write_sections_in_declared_order(inputs: ReportInputs) -> None:
    md = write_report(inputs, ReportFormat.MARKDOWN).read_text(encoding="utf-8")
    md_headings = [line[3:] for line in md.splitlines() if line.startswith("## ")]
    assert md_headings == list(SECTIONS)

    page = write_report(inputs, ReportFormat.HTML).read_text(encoding="utf-8")
    positions = [page.index(f"<h2>{section}</h2>") for section in SECTIONS]
    assert positions == sorted(positions)
    assert page.count("<h2>") == len(SECTIONS)


def test_section_bodies_cover_every_heading(inputs: ReportInputs) -> None:
    assert set(markdown._section_bodies(inputs)) == set(SECTIONS)
    assert set(html_report._section_bodies(inputs)) == set(SECTIONS)


def test_html_report_embeds_charts(inputs: ReportInputs) -> None:
    path = write_report(inputs, ReportFormat.HTML)
    assert path.name == "report.html"
    content = path.read_text(encoding="utf-8")
    for section in SECTIONS:
        assert f"<h2>{section}</h2>" in content
    assert content.count("data:image/png;base64,") == 9
    assert "class='panels'" in content


def test_findings_follow_the_numbers() -> None:
    def m(species: str, mass: float, flipper: float) -> SpeciesMeans:
        return SpeciesMeans(
            species=species, n=10, avg_body_mass=mass, avg_bill_length=40.0,
            avg_bill_depth=18.0, avg_flipper_length=flipper,
        )

    means = {"Adelie": m("Adelie", 3700.0, 190.0), "Gentoo": m("Gentoo", 5100.0, 217.0)}
    corrs = [
        Correlation(relationship="Body Mass and Bill Depth", x="body_mass_g", y="bill_depth_mm", coefficient=-0.47, n=20),
        Correlation(relationship="Body Mass and Flipper Length", x="body_mass_g", y="flipper_length_mm", coefficient=0.87, n=20),
        Correlation(relationship="Body Mass and Bill Length", x="body_mass_g", y="bill_length_mm", coefficient=math.nan, n=1),
    ]
    findings = derive_findings(means, corrs)

    assert findings[0].title == "Heaviest species"
    assert findings[0].text.startswith("Gentoo")
    assert "Adelie" in findings[0].text
    assert "also have the longest flippers" in findings[1].text
    assert [f.title for f in findings[2:]] == ["Body Mass and Flipper Length", "Body Mass and Bill Depth"]
    assert "strong positive" in findings[2].text
    assert "moderate negative" in findings[3].text
