from __future__ import annotations

from pathlib import Path

from penguin_eda.config import AnalysisConfig
from penguin_eda.models import ReportFormat


def test_defaults_without_environment() -> None:
    cfg = AnalysisConfig.from_env({})
    assert cfg == AnalysisConfig()
    assert cfg.hist_bins == 25
    assert cfg.report_format is ReportFormat.MARKDOWN


def test_environment_overrides() -> None:
    cfg = AnalysisConfig.from_env(
        {
            "PENGUIN_EDA_OUT_DIR": "/tmp/eda",
            "PENGUIN_EDA_FORMAT": "HTML",
            "PENGUIN_EDA_BINS": "30",
            "PENGUIN_EDA_DPI": "72",
        }
    )
    assert cfg.out_dir == Path("/tmp/eda")
    assert cfg.report_format is ReportFormat.HTML
    assert cfg.hist_bins == 30
    assert cfg.dpi == 72


def test_invalid_environment_values_fall_back() -> None:
    cfg = AnalysisConfig.from_env(
        {"PENGUIN_EDA_FORMAT": "pdf", "PENGUIN_EDA_BINS": "-3", "PENGUIN_EDA_DPI": "lots", "PENGUIN_EDA_OUT_DIR": " "}
    )
    assert cfg == AnalysisConfig()


def test_with_overrides_ignores_none() -> None:
    cfg = AnalysisConfig().with_overrides(out_dir=None, report_format=ReportFormat.HTML)
    assert cfg.out_dir == Path("runs")
    assert cfg.report_format is ReportFormat.HTML
