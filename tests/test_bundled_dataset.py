from __future__ import annotations

import pandas as pd
import pytest

from penguin_eda.dataset import load_penguins
from penguin_eda.pipeline import analyze


@pytest.fixture(scope="module")
def bundled() -> pd.DataFrame:
    return load_penguins()


def test_bundled_dataset_shape_and_cleaning(bundled: pd.DataFrame) -> None:
    result = analyze(bundled)
    assert bundled.shape == (344, 8)
    assert result.cleaning.rows_out == 333
    assert result.cleaning.rows_dropped == 11
    assert int(result.missing["sex"]) == 11
    assert int(result.missing["body_mass_g"]) == 2


def test_gentoo_is_heaviest_with_longest_flippers(bundled: pd.DataFrame) -> None:
    means = analyze(bundled).means
    assert set(means) == {"Adelie", "Chinstrap", "Gentoo"}
    assert max(means.values(), key=lambda m: m.avg_body_mass).species == "Gentoo"
    assert max(means.values(), key=lambda m: m.avg_flipper_length).species == "Gentoo"
    assert means["Adelie"].n + means["Chinstrap"].n + means["Gentoo"].n == 333


def test_body_mass_correlations_on_bundled_data(bundled: pd.DataFrame) -> None:
    corrs = {c.y: c.coefficient for c in analyze(bundled).correlations}
    assert corrs["flipper_length_mm"] == pytest.approx(0.87, abs=0.01)
    assert corrs["bill_depth_mm"] == pytest.approx(-0.47, abs=0.01)
    assert corrs["bill_length_mm"] == pytest.approx(0.59, abs=0.01)
