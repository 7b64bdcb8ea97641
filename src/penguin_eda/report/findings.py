from __future__ import annotations

from dataclasses import dataclass

from ..models import Correlation, SpeciesMeans


@dataclass(frozen=True)
class Finding:
    title: str
    text: str


def _strength(r: float) -> str:
    a = abs(r)
    if a >= 0.7:
        return "strong"
    if a >= 0.4:
        return "moderate"
    if a >= 0.2:
        return "weak"
    return "negligible"


def derive_findings(means: dict[str, SpeciesMeans], correlations: list[Correlation]) -> list[Finding]:
    """Narrative statements backed by the computed summaries.

    Order is stable: body mass, flipper length, then correlations strongest
    first.
    """
    out: list[Finding] = []

    if means:
        heaviest = max(means.values(), key=lambda m: (m.avg_body_mass, m.species))
        lightest = min(means.values(), key=lambda m: (m.avg_body_mass, m.species))
        out.append(
            Finding(
                title="Heaviest species",
                text=(
                    f"{heaviest.species} penguins have the highest average body mass "
                    f"({heaviest.avg_body_mass:,.1f} g), while {lightest.species} penguins have the lowest "
                    f"({lightest.avg_body_mass:,.1f} g)."
                ),
            )
        )
        longest = max(means.values(), key=lambda m: (m.avg_flipper_length, m.species))
        out.append(
            Finding(
                title="Longest flippers",
                text=(
                    f"{longest.species} penguins also have the longest flippers on average "
                    f"({longest.avg_flipper_length:.1f} mm)."
                    if longest.species == heaviest.species
                    else f"{longest.species} penguins have the longest flippers on average "
                    f"({longest.avg_flipper_length:.1f} mm)."
                ),
            )
        )

    defined = sorted([c for c in correlations if c.defined], key=lambda c: (-abs(c.coefficient), c.y))
    for c in defined:
        direction = "positive" if c.coefficient > 0 else "negative"
        out.append(
            Finding(
                title=c.relationship,
                text=f"{c.relationship} show a {_strength(c.coefficient)} {direction} correlation (r = {c.coefficient:.3f}, n = {c.n}).",
            )
        )
    return out
