from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
import pandas as pd

from .dataset import CATEGORICAL_COLUMNS, NUMERIC_COLUMNS
from .models import Correlation, SpeciesMeans

# (column, label) pairs correlated against body mass, in report order.
BODY_MASS_PAIRS: tuple[tuple[str, str], ...] = (
    ("bill_length_mm", "Body Mass and Bill Length"),
    ("bill_depth_mm", "Body Mass and Bill Depth"),
    ("flipper_length_mm", "Body Mass and Flipper Length"),
)


@dataclass(frozen=True)
class ColumnSummary:
    """Per-column descriptive statistics, split by column kind."""

    numeric: pd.DataFrame
    categorical: pd.DataFrame


def describe_columns(df: pd.DataFrame) -> ColumnSummary:
    """Skim-style summary of every column.

    Numeric: n_missing, complete_rate, mean, sd, p0..p100.
    Categorical: n_missing, complete_rate, n_unique, top_counts.
    """
    n = max(int(len(df)), 1)

    numeric_rows = []
    for c in [c for c in df.columns if c in NUMERIC_COLUMNS or c == "year"]:
        s = pd.to_numeric(df[c], errors="coerce").astype("float64")
        present = s.dropna()
        qs = present.quantile([0.0, 0.25, 0.5, 0.75, 1.0]) if not present.empty else None
        numeric_rows.append(
            {
                "column": c,
                "n_missing": int(s.isna().sum()),
                "complete_rate": float(present.size / n),
                "mean": float(present.mean()) if not present.empty else math.nan,
                "sd": float(present.std()) if present.size > 1 else math.nan,
                "p0": float(qs.loc[0.0]) if qs is not None else math.nan,
                "p25": float(qs.loc[0.25]) if qs is not None else math.nan,
                "p50": float(qs.loc[0.5]) if qs is not None else math.nan,
                "p75": float(qs.loc[0.75]) if qs is not None else math.nan,
                "p100": float(qs.loc[1.0]) if qs is not None else math.nan,
            }
        )

    categorical_rows = []
    for c in [c for c in df.columns if c in CATEGORICAL_COLUMNS]:
        s = df[c]
        vc = s.dropna().astype(str).value_counts()
        categorical_rows.append(
            {
                "column": c,
                "n_missing": int(s.isna().sum()),
                "complete_rate": float(s.notna().sum() / n),
                "n_unique": int(vc.size),
                "top_counts": ", ".join(f"{k}: {v}" for k, v in vc.items()),
            }
        )

    numeric = pd.DataFrame(numeric_rows).set_index("column") if numeric_rows else pd.DataFrame()
    categorical = pd.DataFrame(categorical_rows).set_index("column") if categorical_rows else pd.DataFrame()
    return ColumnSummary(numeric=numeric, categorical=categorical)


def species_means(df: pd.DataFrame) -> dict[str, SpeciesMeans]:
    """Mean body mass, bill length, bill depth and flipper length per species.

    Species with no rows are absent from the result. Keys are in species
    name order.
    """
    if df.empty:
        return {}
    grouped = df.groupby("species", sort=True, observed=True)
    agg = grouped[["body_mass_g", "bill_length_mm", "bill_depth_mm", "flipper_length_mm"]].mean()
    sizes = grouped.size()

    out: dict[str, SpeciesMeans] = {}
    for species, row in agg.iterrows():
        out[str(species)] = SpeciesMeans(
            species=str(species),
            n=int(sizes.loc[species]),
            avg_body_mass=float(row["body_mass_g"]),
            avg_bill_length=float(row["bill_length_mm"]),
            avg_bill_depth=float(row["bill_depth_mm"]),
            avg_flipper_length=float(row["flipper_length_mm"]),
        )
    return out


def species_means_frame(means: dict[str, SpeciesMeans]) -> pd.DataFrame:
    """Tabular form of `species_means` for printing and reporting."""
    rows = [m.model_dump() for m in means.values()]
    cols = ["species", "n", "avg_body_mass", "avg_bill_length", "avg_bill_depth", "avg_flipper_length"]
    return pd.DataFrame(rows, columns=cols)


def pearson(x: pd.Series, y: pd.Series) -> tuple[float, int]:
    """Pearson r over rows where both values are present.

    Returns (r, n_complete). r is NaN with fewer than two complete rows or
    when either side is constant.
    """
    pair = pd.DataFrame(
        {"x": pd.to_numeric(x, errors="coerce"), "y": pd.to_numeric(y, errors="coerce")}
    ).dropna()
    n = int(len(pair))
    if n < 2:
        return math.nan, n
    if pair["x"].nunique() < 2 or pair["y"].nunique() < 2:
        return math.nan, n
    r = float(pair["x"].corr(pair["y"], method="pearson"))
    return float(np.clip(r, -1.0, 1.0)), n


def body_mass_correlations(df: pd.DataFrame) -> list[Correlation]:
    """Correlation of body_mass_g with bill length, bill depth and flipper length."""
    out: list[Correlation] = []
    for col, label in BODY_MASS_PAIRS:
        r, n = pearson(df["body_mass_g"], df[col])
        out.append(Correlation(relationship=label, x="body_mass_g", y=col, coefficient=r, n=n))
    return out


def correlation_frame(correlations: list[Correlation]) -> pd.DataFrame:
    return pd.DataFrame(
        [{"Relationship": c.relationship, "Correlation": c.coefficient} for c in correlations],
        columns=["Relationship", "Correlation"],
    )
