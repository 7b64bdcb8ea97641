from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest

from penguin_eda.dataset import load_penguins

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_csv() -> Path:
    return FIXTURES / "penguins_sample.csv"


@pytest.fixture
def sample_df(sample_csv: Path) -> pd.DataFrame:
    return load_penguins(sample_csv)
