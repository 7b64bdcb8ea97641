from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from penguin_eda.clean import drop_incomplete_rows
from penguin_eda.config import AnalysisConfig
from penguin_eda.plots import CHARTS, PANEL_PAIRS, linear_fit, render_charts


def test_render_writes_every_chart(sample_df: pd.DataFrame, tmp_path: Path) -> None:
    plots_dir = tmp_path / "plots"
    charts = render_charts(drop_incomplete_rows(sample_df), plots_dir, AnalysisConfig(dpi=40))

    assert [c.name for c in charts] == [s.name for s in CHARTS]
    assert len(charts) == 9
    for c in charts:
        assert c.path.parent == plots_dir
        assert c.path.exists()
        assert c.path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_panel_pairs_refer_to_known_charts() -> None:
    names = {s.name for s in CHARTS}
    for a, b in PANEL_PAIRS:
        assert a in names and b in names


def test_empty_table_cannot_be_rendered(sample_df: pd.DataFrame, tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        render_charts(sample_df.iloc[0:0], tmp_path)


def test_linear_fit_recovers_line() -> None:
    x = pd.Series([180.0, 190.0, 200.0, 210.0])
    y = 50.0 * x - 5000.0
    slope, intercept = linear_fit(x, y)
    assert slope == pytest.approx(50.0)
    assert intercept == pytest.approx(-5000.0)


def test_linear_fit_undefined_for_degenerate_facets() -> None:
    assert linear_fit(pd.Series([200.0]), pd.Series([4000.0])) is None
    assert linear_fit(pd.Series([200.0, 200.0]), pd.Series([4000.0, 4100.0])) is None
