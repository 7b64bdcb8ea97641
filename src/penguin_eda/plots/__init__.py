"""Static charts of the cleaned penguins table."""

from .charts import CHARTS, PANEL_PAIRS, ChartSpec, RenderedChart, linear_fit, render_charts

__all__ = ["CHARTS", "PANEL_PAIRS", "ChartSpec", "RenderedChart", "linear_fit", "render_charts"]
