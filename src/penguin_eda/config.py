from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Optional

from .models import ReportFormat

ENV_PREFIX = "PENGUIN_EDA_"


@dataclass(frozen=True)
class AnalysisConfig:
    """Knobs for a single analysis run.

    Defaults reproduce the reference charts: 25 histogram bins and
    semi-transparent scatter points.
    """

    out_dir: Path = Path("runs")
    report_format: ReportFormat = ReportFormat.MARKDOWN
    hist_bins: int = 25
    scatter_alpha: float = 0.7
    dpi: int = 120

    @classmethod
    def from_env(cls, environ: Optional[dict[str, str]] = None) -> "AnalysisConfig":
        """Build a config from PENGUIN_EDA_* environment variables.

        Empty or invalid values fall back to the defaults.
        """
        env = os.environ if environ is None else environ
        default = cls()
        return cls(
            out_dir=Path(_get(env, "OUT_DIR") or default.out_dir),
            report_format=_get_format(env, default.report_format),
            hist_bins=_get_positive_int(env, "BINS", default.hist_bins),
            scatter_alpha=default.scatter_alpha,
            dpi=_get_positive_int(env, "DPI", default.dpi),
        )

    def with_overrides(self, **overrides: Any) -> "AnalysisConfig":
        """Return a copy with every non-None override applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **values)

    def as_dict(self) -> dict[str, Any]:
        return {
            "out_dir": str(self.out_dir),
            "report_format": self.report_format.value,
            "hist_bins": self.hist_bins,
            "scatter_alpha": self.scatter_alpha,
            "dpi": self.dpi,
        }


def _get(env: Any, name: str) -> Optional[str]:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return None
    return raw.strip()


def _get_positive_int(env: Any, name: str, default: int) -> int:
    raw = _get(env, name)
    if raw is None:
        return default
    try:
        v = int(raw)
        return v if v > 0 else default
    except ValueError:
        return default


def _get_format(env: Any, default: ReportFormat) -> ReportFormat:
    raw = _get(env, "FORMAT")
    if raw is None:
        return default
    try:
        return ReportFormat(raw.lower())
    except ValueError:
        return default
