"""Per-player detail view helpers."""

from .chart import ChartSeries, bind_chart, build_chart_figure, metric_color, render_chart_html

__all__ = ["ChartSeries", "bind_chart", "build_chart_figure", "metric_color", "render_chart_html"]
