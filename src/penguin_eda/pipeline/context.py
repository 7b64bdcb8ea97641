from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..utils import new_id


@dataclass(frozen=True)
class RunContext:
    """Run identifier plus the standard artifact paths of one run."""

    out_dir: Path
    run_id: str

    @classmethod
    def create(cls, *, out_dir: Path, run_id: str | None = None) -> "RunContext":
        return cls(out_dir=Path(out_dir), run_id=run_id or new_id())

    @property
    def run_dir(self) -> Path:
        return self.out_dir / self.run_id

    def path(self, filename: str) -> Path:
        return self.run_dir / filename

    def plots_dir(self) -> Path:
        return self.run_dir / "plots"

    def metrics_csv_path(self) -> Path:
        return self.path("metrics.csv")

    def analysis_log_path(self) -> Path:
        return self.path("analysis_log.json")
