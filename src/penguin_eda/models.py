from __future__ import annotations

import math
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Species(str, Enum):
    ADELIE = "Adelie"
    CHINSTRAP = "Chinstrap"
    GENTOO = "Gentoo"


class Island(str, Enum):
    BISCOE = "Biscoe"
    DREAM = "Dream"
    TORGERSEN = "Torgersen"


class Sex(str, Enum):
    FEMALE = "female"
    MALE = "male"


class ReportFormat(str, Enum):
    """
    Document formats the report step can write.

    - MARKDOWN: report.md, charts referenced from plots/
    - HTML: report.html, self-contained with embedded charts
    """
    MARKDOWN = "markdown"
    HTML = "html"


class PenguinRecord(BaseModel):
    """
    One penguin observation (one row of the dataset).

    Measurements and sex may be missing in the raw data; the cleaning step
    drops any row where one of them is. Present measurements are positive.
    """
    model_config = ConfigDict(frozen=True)

    species: Species
    island: Island
    bill_length_mm: Optional[float] = Field(default=None, gt=0)
    bill_depth_mm: Optional[float] = Field(default=None, gt=0)
    flipper_length_mm: Optional[float] = Field(default=None, gt=0)
    body_mass_g: Optional[float] = Field(default=None, gt=0)
    sex: Optional[Sex] = None
    year: Optional[int] = None


class SpeciesMeans(BaseModel):
    """Arithmetic means of the four numeric fields for one species."""
    model_config = ConfigDict(frozen=True)

    species: str
    n: int
    avg_body_mass: float
    avg_bill_length: float
    avg_bill_depth: float
    avg_flipper_length: float

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.avg_body_mass, self.avg_bill_length, self.avg_bill_depth, self.avg_flipper_length)


class Correlation(BaseModel):
    """Pearson correlation between body mass and one other measurement."""
    model_config = ConfigDict(frozen=True)

    relationship: str
    x: str
    y: str
    coefficient: float
    n: int

    @property
    def defined(self) -> bool:
        return not math.isnan(self.coefficient)


class RunManifest(BaseModel):
    """
    Paths to run artifacts produced by `penguin-eda render`.
    """
    run_id: str
    run_dir: str
    report: str
    report_format: ReportFormat
    metrics_csv: str
    analysis_log_json: str
    plots_dir: str
    plots: list[str] = Field(default_factory=list)
    created_at: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
