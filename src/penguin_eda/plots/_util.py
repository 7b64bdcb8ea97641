from __future__ import annotations

import base64
from pathlib import Path
from typing import Any

import matplotlib.pyplot as plt
import pandas as pd

from ..models import Sex, Species

SPECIES_COLORS: dict[str, str] = {
    Species.ADELIE.value: "#F8766D",
    Species.CHINSTRAP.value: "#00BA38",
    Species.GENTOO.value: "#619CFF",
}
SEX_COLORS: dict[str, str] = {
    Sex.FEMALE.value: "#F8766D",
    Sex.MALE.value: "#00BFC4",
}
EDGE_COLOR = "black"


def levels(df: pd.DataFrame, column: str, order: tuple[str, ...]) -> list[str]:
    """Values of `column` present in `df`, in the given canonical order."""
    present = set(df[column].dropna().astype(str))
    return [v for v in order if v in present]


def save_matplotlib(fig: Any, path: Path, *, dpi: int) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=dpi, bbox_inches="tight")
    plt.close(fig)


def png_base64(path: Path) -> str:
    return base64.b64encode(path.read_bytes()).decode("ascii")
