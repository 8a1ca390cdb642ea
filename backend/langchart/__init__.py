"""GitHub language chart service: aggregate repository language bytes and render them as SVG."""

from langchart.aggregator import RankedEntry, compute_language_totals, get_language_chart_data, rank_languages
from langchart.exceptions import (
    ConfigurationError,
    LangChartError,
    RenderingError,
    UpstreamAuthError,
    UpstreamNetworkError,
)
from langchart.renderer import render_chart

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "LangChartError",
    "RankedEntry",
    "RenderingError",
    "UpstreamAuthError",
    "UpstreamNetworkError",
    "compute_language_totals",
    "get_language_chart_data",
    "rank_languages",
    "render_chart",
]
