from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from ..config import AnalysisConfig
from ..dataset import CATEGORICAL_COLUMNS
from ._util import EDGE_COLOR, SEX_COLORS, SPECIES_COLORS, levels, save_matplotlib

SPECIES_ORDER = CATEGORICAL_COLUMNS["species"]
ISLAND_ORDER = CATEGORICAL_COLUMNS["island"]
SEX_ORDER = CATEGORICAL_COLUMNS["sex"]


@dataclass(frozen=True)
class ChartSpec:
    name: str
    title: str
    section: str
    build: Callable[[pd.DataFrame, AnalysisConfig], Any]


@dataclass(frozen=True)
class RenderedChart:
    name: str
    title: str
    section: str
    path: Path


def _counts(df: pd.DataFrame, column: str, order: list[str]) -> pd.Series:
    return df[column].astype(str).value_counts().reindex(order, fill_value=0)


def species_frequency(df: pd.DataFrame, cfg: AnalysisConfig):
    species = levels(df, "species", SPECIES_ORDER)
    counts = _counts(df, "species", species)
    fig, ax = plt.subplots(figsize=(6, 4.5))
    ax.bar(species, counts.values, color=[SPECIES_COLORS[s] for s in species], edgecolor=EDGE_COLOR)
    ax.set_title("Frequency of Species")
    ax.set_xlabel("Species")
    ax.set_ylabel("Count")
    return fig


def species_by_island(df: pd.DataFrame, cfg: AnalysisConfig):
    species = levels(df, "species", SPECIES_ORDER)
    islands = levels(df, "island", ISLAND_ORDER)
    fig, axes = plt.subplots(1, len(islands), figsize=(4 * len(islands), 4.5), sharey=True, squeeze=False)
    for ax, island in zip(axes[0], islands):
        counts = _counts(df[df["island"] == island], "species", species)
        ax.bar(species, counts.values, color=[SPECIES_COLORS[s] for s in species], edgecolor=EDGE_COLOR)
        ax.set_title(island)
        ax.set_xlabel("Species")
        ax.tick_params(axis="x", rotation=30)
    axes[0][0].set_ylabel("Count")
    fig.suptitle("Species Distribution by Island")
    return fig


def sex_by_species(df: pd.DataFrame, cfg: AnalysisConfig):
    species = levels(df, "species", SPECIES_ORDER)
    sexes = levels(df, "sex", SEX_ORDER)
    fig, axes = plt.subplots(1, len(species), figsize=(4 * len(species), 4.5), sharey=True, squeeze=False)
    for ax, sp in zip(axes[0], species):
        counts = _counts(df[df["species"] == sp], "sex", sexes)
        ax.bar(sexes, counts.values, color=[SEX_COLORS[s] for s in sexes], edgecolor=EDGE_COLOR)
        ax.set_title(sp)
        ax.set_xlabel("Sex")
    axes[0][0].set_ylabel("Count")
    fig.suptitle("Sex Distribution by Species")
    return fig


def body_mass_by_species_sex(df: pd.DataFrame, cfg: AnalysisConfig):
    species = levels(df, "species", SPECIES_ORDER)
    sexes = levels(df, "sex", SEX_ORDER)
    means = df.groupby(["species", "sex"], observed=True)["body_mass_g"].mean().unstack("sex")
    means = means.reindex(index=species, columns=sexes)

    x = np.arange(len(species))
    width = 0.8 / max(len(sexes), 1)
    fig, ax = plt.subplots(figsize=(7, 4.5))
    for i, sex in enumerate(sexes):
        offset = (i - (len(sexes) - 1) / 2) * width
        ax.bar(x + offset, means[sex].values, width, label=sex, color=SEX_COLORS[sex], edgecolor=EDGE_COLOR)
    ax.set_xticks(x, species)
    ax.set_title("Average Body Mass by Species and Sex")
    ax.set_xlabel("Species")
    ax.set_ylabel("Average Body Mass (g)")
    ax.legend(title="Sex")
    return fig


def body_mass_histogram(df: pd.DataFrame, cfg: AnalysisConfig):
    species = levels(df, "species", SPECIES_ORDER)
    sexes = levels(df, "sex", SEX_ORDER)
    edges = np.histogram_bin_edges(df["body_mass_g"].to_numpy(dtype=float), bins=cfg.hist_bins)
    fig, axes = plt.subplots(
        len(species), len(sexes), figsize=(4 * len(sexes), 2.6 * len(species)),
        sharex=True, sharey=True, squeeze=False,
    )
    for r, sp in enumerate(species):
        for c, sex in enumerate(sexes):
            ax = axes[r][c]
            values = df.loc[(df["species"] == sp) & (df["sex"] == sex), "body_mass_g"]
            ax.hist(values, bins=edges, color=SPECIES_COLORS[sp], edgecolor=EDGE_COLOR)
            if r == 0:
                ax.set_title(sex)
            if c == len(sexes) - 1:
                ax.yaxis.set_label_position("right")
                ax.set_ylabel(sp)
            ax.tick_params(axis="x", rotation=65)
    fig.supxlabel("Body Mass (g)")
    fig.supylabel("Count")
    fig.suptitle("Body Mass Distribution")
    return fig


def _boxplot(df: pd.DataFrame, by: str, order: list[str], colors: dict[str, str], *, title: str, xlabel: str):
    data = [df.loc[df[by] == level, "body_mass_g"].to_numpy(dtype=float) for level in order]
    fig, ax = plt.subplots(figsize=(6, 4.5))
    positions = list(range(1, len(order) + 1))
    bp = ax.boxplot(data, positions=positions, patch_artist=True, widths=0.6)
    for patch, level in zip(bp["boxes"], order):
        patch.set_facecolor(colors[level])
        patch.set_edgecolor(EDGE_COLOR)
    for median in bp["medians"]:
        median.set_color(EDGE_COLOR)
    ax.set_xticks(positions, order)
    ax.set_title(title)
    ax.set_xlabel(xlabel)
    ax.set_ylabel("Body Mass (g)")
    return fig


def body_mass_box_by_species(df: pd.DataFrame, cfg: AnalysisConfig):
    return _boxplot(
        df, "species", levels(df, "species", SPECIES_ORDER), SPECIES_COLORS,
        title="Distribution of Body Mass (g) by Species", xlabel="Species",
    )


def body_mass_box_by_sex(df: pd.DataFrame, cfg: AnalysisConfig):
    return _boxplot(
        df, "sex", levels(df, "sex", SEX_ORDER), SEX_COLORS,
        title="Distribution of Body Mass (g) by Sex", xlabel="Sex",
    )


def linear_fit(x: pd.Series, y: pd.Series) -> tuple[float, float] | None:
    """Least-squares (slope, intercept), or None when a line is not defined."""
    xs = x.to_numpy(dtype=float)
    ys = y.to_numpy(dtype=float)
    if xs.size < 2 or np.unique(xs).size < 2:
        return None
    slope, intercept = np.polyfit(xs, ys, 1)
    return float(slope), float(intercept)


def _faceted_scatter(df: pd.DataFrame, cfg: AnalysisConfig, *, x: str, xlabel: str, title: str):
    species = levels(df, "species", SPECIES_ORDER)
    sexes = levels(df, "sex", SEX_ORDER)
    fig, axes = plt.subplots(
        len(sexes), len(species), figsize=(4 * len(species), 3.4 * len(sexes)),
        sharex=True, sharey=True, squeeze=False,
    )
    for r, sex in enumerate(sexes):
        for c, sp in enumerate(species):
            ax = axes[r][c]
            facet = df[(df["species"] == sp) & (df["sex"] == sex)]
            ax.scatter(facet[x], facet["body_mass_g"], alpha=cfg.scatter_alpha, color=SPECIES_COLORS[sp], s=14)
            fit = linear_fit(facet[x], facet["body_mass_g"])
            if fit is not None:
                slope, intercept = fit
                xs = np.linspace(float(facet[x].min()), float(facet[x].max()), 50)
                ax.plot(xs, slope * xs + intercept, color=SPECIES_COLORS[sp], linewidth=1.6)
            if r == 0:
                ax.set_title(sp)
            if c == len(species) - 1:
                ax.yaxis.set_label_position("right")
                ax.set_ylabel(sex)
            ax.tick_params(axis="x", rotation=65)
    fig.supxlabel(xlabel)
    fig.supylabel("Body Mass (g)")
    fig.suptitle(title)
    return fig


def body_mass_vs_bill_length(df: pd.DataFrame, cfg: AnalysisConfig):
    return _faceted_scatter(
        df, cfg, x="bill_length_mm", xlabel="Bill Length (mm)", title="Body Mass (g) against Bill Length (mm)"
    )


def body_mass_vs_flipper_length(df: pd.DataFrame, cfg: AnalysisConfig):
    return _faceted_scatter(
        df, cfg, x="flipper_length_mm", xlabel="Flipper Length (mm)", title="Body Mass (g) against Flipper Length (mm)"
    )


CHARTS: tuple[ChartSpec, ...] = (
    ChartSpec("species_frequency", "Frequency of Species", "frequency", species_frequency),
    ChartSpec("species_by_island", "Species Distribution by Island", "frequency", species_by_island),
    ChartSpec("sex_by_species", "Sex Distribution by Species", "frequency", sex_by_species),
    ChartSpec("body_mass_by_species_sex", "Average Body Mass by Species and Sex", "body_mass", body_mass_by_species_sex),
    ChartSpec("body_mass_histogram", "Body Mass Distribution", "body_mass", body_mass_histogram),
    ChartSpec("body_mass_box_by_species", "Body Mass by Species", "body_mass", body_mass_box_by_species),
    ChartSpec("body_mass_box_by_sex", "Body Mass by Sex", "body_mass", body_mass_box_by_sex),
    ChartSpec("body_mass_vs_bill_length", "Body Mass against Bill Length", "scatter", body_mass_vs_bill_length),
    ChartSpec("body_mass_vs_flipper_length", "Body Mass against Flipper Length", "scatter", body_mass_vs_flipper_length),
)

# Charts shown side by side as panels A and B.
PANEL_PAIRS: tuple[tuple[str, str], ...] = (
    ("species_frequency", "species_by_island"),
    ("body_mass_box_by_species", "body_mass_box_by_sex"),
)


def render_charts(df: pd.DataFrame, plots_dir: Path, config: AnalysisConfig | None = None) -> list[RenderedChart]:
    """Render every chart in CHARTS to plots_dir/<name>.png."""
    if df.empty:
        raise ValueError("Cannot render charts from an empty table.")
    cfg = config or AnalysisConfig()
    out: list[RenderedChart] = []
    for spec in CHARTS:
        fig = spec.build(df, cfg)
        path = plots_dir / f"{spec.name}.png"
        save_matplotlib(fig, path, dpi=cfg.dpi)
        out.append(RenderedChart(name=spec.name, title=spec.title, section=spec.section, path=path))
    return out
