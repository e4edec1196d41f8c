"""Bind per-gameweek history to chart series and render them with plotly."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

import plotly.graph_objects as go

from fplboard.config.fields import CHART_METRICS, get_chart_metric
from fplboard.models import GameweekEntry


PALETTE: tuple[str, ...] = (
    "#2563eb",
    "#dc2626",
    "#16a34a",
    "#d97706",
    "#7c3aed",
    "#db2777",
    "#0891b2",
    "#65a30d",
    "#ea580c",
    "#475569",
    "#0f766e",
)

_METRIC_INDEX = {metric.key: index for index, metric in enumerate(CHART_METRICS)}


@dataclass(frozen=True)
class ChartSeries:
    key: str
    label: str
    color: str
    points: tuple[tuple[int, float | None], ...]

    def values(self) -> list[float]:
        return [value for _, value in self.points if value is not None]


def metric_color(key: str) -> str:
    """Return the fixed palette color for a chart metric."""

    return PALETTE[_METRIC_INDEX[key] % len(PALETTE)]


def bind_chart(history: Sequence[GameweekEntry], metrics: Iterable[str]) -> list[ChartSeries]:
    """Build one series per selected metric, in selection order.

    Points follow the history order; a missing value stays ``None`` so the
    renderer leaves a gap instead of interpolating.
    """

    series: list[ChartSeries] = []
    seen: set[str] = set()
    for key in metrics:
        if key in seen:
            continue
        seen.add(key)
        metric = get_chart_metric(key)
        points = tuple((entry.round, metric.apply(getattr(entry, key))) for entry in history)
        series.append(ChartSeries(key=key, label=metric.label, color=metric_color(key), points=points))
    return series


def build_chart_figure(series: Sequence[ChartSeries], *, height: int = 320) -> go.Figure:
    """One line trace per series; ``None`` values stay as gaps in the line."""

    fig = go.Figure()
    for item in series:
        fig.add_trace(go.Scatter(
            name=item.label,
            x=[round_number for round_number, _ in item.points],
            y=[value for _, value in item.points],
            mode="lines+markers",
            connectgaps=False,
            line=dict(color=item.color, width=2),
            marker=dict(size=5),
        ))
    fig.update_layout(
        template="plotly_white",
        height=height,
        margin=dict(l=40, r=20, t=20, b=40),
        xaxis_title="Gameweek",
        legend=dict(orientation="h", yanchor="bottom", y=1.02, x=0),
    )
    fig.update_xaxes(dtick=1)
    return fig


def render_chart_html(series: Sequence[ChartSeries], *, height: int = 320) -> str:
    if not any(item.values() for item in series):
        return "<p class=\"chart-empty\">No gameweek data to chart.</p>"
    fig = build_chart_figure(series, height=height)
    return fig.to_html(full_html=False, include_plotlyjs="cdn", config={"displayModeBar": False})


__all__ = ["ChartSeries", "PALETTE", "bind_chart", "build_chart_figure", "metric_color", "render_chart_html"]
