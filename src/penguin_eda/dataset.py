from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import pandas as pd
from pydantic import ValidationError

from .models import Island, PenguinRecord, Sex, Species

NUMERIC_COLUMNS: tuple[str, ...] = ("bill_length_mm", "bill_depth_mm", "flipper_length_mm", "body_mass_g")
CATEGORICAL_COLUMNS: dict[str, tuple[str, ...]] = {
    "species": tuple(s.value for s in Species),
    "island": tuple(i.value for i in Island),
    "sex": tuple(s.value for s in Sex),
}
# Canonical column order of the bundled dataset.
COLUMNS: tuple[str, ...] = (
    "species",
    "island",
    "bill_length_mm",
    "bill_depth_mm",
    "flipper_length_mm",
    "body_mass_g",
    "sex",
    "year",
)
_REQUIRED_NON_NULL = ("species", "island")


class DatasetSchemaError(ValueError):
    """Raised when a table does not match the penguin record schema."""


def load_penguins(source: Optional[Union[str, Path]] = None) -> pd.DataFrame:
    """Load the penguins table and validate it.

    With no source the dataset bundled with the `palmerpenguins` package is
    used. Otherwise `source` must be a CSV file with the same columns.
    """
    if source is None:
        from palmerpenguins import load_penguins as _load_bundled

        raw = _load_bundled()
    else:
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"Dataset not found: {path}")
        raw = pd.read_csv(path)
    return validate_schema(raw)


def validate_schema(df: pd.DataFrame) -> pd.DataFrame:
    """Return a canonical copy of `df`.

    - all eight columns present, in canonical order (extras dropped)
    - measurements coerced to float, year to nullable Int64 (whole years only)
    - categorical values restricted to their known levels
    - every row accepted by the PenguinRecord model

    Missing values are kept; dropping them is the cleaning step's job.
    """
    missing = [c for c in COLUMNS if c not in df.columns]
    if missing:
        raise DatasetSchemaError(f"Missing required columns: {missing}")

    out = df.loc[:, list(COLUMNS)].copy()

    for c in NUMERIC_COLUMNS + ("year",):
        coerced = pd.to_numeric(out[c], errors="coerce")
        bad = out[c].notna() & coerced.isna()
        if bad.any():
            examples = out.loc[bad, c].astype(str).head(3).tolist()
            raise DatasetSchemaError(f"Column '{c}' has non-numeric values: {examples}")
        out[c] = coerced

    years = out["year"]
    fractional = years.notna() & (years % 1 != 0)
    if fractional.any():
        examples = years[fractional].astype(str).head(3).tolist()
        raise DatasetSchemaError(f"Column 'year' has non-integer values: {examples}")
    out["year"] = years.astype("Int64")
    for c in NUMERIC_COLUMNS:
        out[c] = out[c].astype("float64")

    for c, levels in CATEGORICAL_COLUMNS.items():
        s = out[c]
        present = s.notna()
        values = s[present].astype(str).str.strip()
        unknown = sorted(set(values) - set(levels))
        if unknown:
            raise DatasetSchemaError(f"Column '{c}' has unknown values {unknown}; expected one of {list(levels)}")
        out[c] = s.astype(object).where(~present, values)

    for c in _REQUIRED_NON_NULL:
        if out[c].isna().any():
            raise DatasetSchemaError(f"Column '{c}' must not contain missing values")

    records(out)
    return out


def missing_counts(df: pd.DataFrame) -> pd.Series:
    """Missing values per column, in column order."""
    return df.isna().sum().astype(int)


def structure(df: pd.DataFrame, n_examples: int = 3) -> pd.DataFrame:
    """One row per column: dtype, non-null count and the first few values."""
    rows = []
    for c in df.columns:
        s = df[c]
        rows.append(
            {
                "column": str(c),
                "dtype": str(s.dtype),
                "non_null": int(s.notna().sum()),
                "examples": ", ".join(s.head(n_examples).astype(str).tolist()),
            }
        )
    return pd.DataFrame(rows, columns=["column", "dtype", "non_null", "examples"])


def records(df: pd.DataFrame) -> list[PenguinRecord]:
    """Convert each row into a PenguinRecord, preserving row order.

    Raises DatasetSchemaError naming the first row the model rejects.
    """
    out: list[PenguinRecord] = []
    for label, row in zip(df.index, df.loc[:, list(COLUMNS)].to_dict(orient="records")):
        values = {k: (None if pd.isna(v) else v) for k, v in row.items()}
        if values["year"] is not None:
            values["year"] = int(values["year"])
        try:
            out.append(PenguinRecord(**values))
        except ValidationError as e:
            raise DatasetSchemaError(f"Row {label} is not a valid penguin record: {e}") from e
    return out
