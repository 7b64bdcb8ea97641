from __future__ import annotations

from dataclasses import dataclass

import pandas as pd


@dataclass(frozen=True)
class CleaningOutcome:
    """Row accounting for the missing-value step."""

    rows_in: int
    rows_out: int

    @property
    def rows_dropped(self) -> int:
        return self.rows_in - self.rows_out


def drop_incomplete_rows(df: pd.DataFrame) -> pd.DataFrame:
    """Return the rows of `df` that have no missing field.

    A row is dropped entirely if any single field is missing; nothing is
    imputed. Relative order and row labels are preserved and `df` itself is
    not modified. An empty result is valid.
    """
    return df.loc[df.notna().all(axis=1)].copy()


def clean(df: pd.DataFrame) -> tuple[pd.DataFrame, CleaningOutcome]:
    cleaned = drop_incomplete_rows(df)
    return cleaned, CleaningOutcome(rows_in=int(len(df)), rows_out=int(len(cleaned)))
