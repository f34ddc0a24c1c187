"""Render ChartData as a Plotly figure dict.

Returns Plotly figure dicts (never go.Figure) so the result can be handed
straight to a front end or serialized.

Dataset ``order`` follows the front-end convention: the higher the order,
the earlier the dataset is drawn, so lower orders end up on top. Mean
markers are always drawn last.
"""

from __future__ import annotations

import math
from typing import Optional, Union

import plotly.graph_objects as go

from landhist.histogram_builder.datasets import ChartData, ChartDataset
from landhist.histogram_builder.theme import (
    ThemeMode,
    get_grid_color,
    get_theme_colors,
    get_theme_template,
    resolve_theme,
)
from landhist.histogram_builder.ticks import pretty_label
from landhist.utils.logging import get_logger

logger = get_logger(__name__)


def _bucket_width(labels: list[float]) -> float:
    if len(labels) < 2:
        return 1.0
    return labels[1] - labels[0]


def tick_values(lo: float, hi: float, step: float) -> list[float]:
    """Multiples of ``step`` inside ``[lo, hi]``."""
    if step <= 0 or not (math.isfinite(lo) and math.isfinite(hi)):
        return []
    first = math.ceil(lo / step - 1e-9)
    last = math.floor(hi / step + 1e-9)
    # round away float noise such as 0.30000000000000004
    return [round(k * step, 10) for k in range(first, last + 1)]


def _bar_trace(ds: ChartDataset, labels: list[float], width: float) -> go.Bar:
    line = dict(width=ds.border_width or 0)
    if ds.border_color is not None:
        line["color"] = ds.border_color
    return go.Bar(
        x=labels,
        y=list(ds.data),
        width=width * (ds.bar_percentage if ds.bar_percentage is not None else 1.0),
        name=ds.label,
        marker=dict(color=ds.background_color, line=line),
    )


def _line_trace(ds: ChartDataset) -> go.Scatter:
    xs = [p["x"] for p in ds.data]
    ys = [p["y"] for p in ds.data]
    dash = None
    if ds.border_dash:
        dash = ",".join(f"{d}px" for d in ds.border_dash)
    return go.Scatter(
        x=xs,
        y=ys,
        mode="lines" if ds.show_line else "markers",
        name=ds.label,
        line=dict(color=ds.border_color, width=ds.border_width, dash=dash),
    )


def chart_data_to_plotly(
    chart_data: ChartData,
    *,
    theme: Optional[Union[str, ThemeMode]] = None,
    x_title: Optional[str] = None,
) -> dict:
    """Create a Plotly histogram figure from chart data.

    Args:
        chart_data: Output of make_chart_data.
        theme: Theme mode (DARK or LIGHT). Defaults to LIGHT if None.
        x_title: Optional x-axis title (usually the indicator name).

    Returns:
        Plotly figure dict.
    """
    theme_mode = ThemeMode.LIGHT if theme is None else resolve_theme(theme)
    template = get_theme_template(theme_mode)
    bg_color, fg_color = get_theme_colors(theme_mode)
    grid_color = get_grid_color(theme_mode)

    labels = list(chart_data.labels)
    width = _bucket_width(labels)

    bars = [ds for ds in chart_data.datasets if ds.type == "bar"]
    lines = [ds for ds in chart_data.datasets if ds.type == "scatter"]
    bars.sort(key=lambda ds: ds.order or 0, reverse=True)

    fig = go.Figure()
    for ds in bars:
        fig.add_trace(_bar_trace(ds, labels, width))
    for ds in lines:
        fig.add_trace(_line_trace(ds))

    xaxis = dict(color=fg_color, gridcolor=grid_color)
    if labels:
        lo = labels[0] - width / 2
        hi = labels[-1] + width / 2
        ticks = tick_values(lo, hi, chart_data.tick_step_size)
        xaxis.update(
            range=[lo, hi],
            tickmode="array",
            tickvals=ticks,
            ticktext=[pretty_label(t) for t in ticks],
        )
    if x_title:
        xaxis["title"] = x_title

    fig.update_layout(
        template=template,
        paper_bgcolor=bg_color,
        plot_bgcolor=bg_color,
        font=dict(color=fg_color),
        barmode="overlay",
        bargap=0,
        xaxis=xaxis,
        yaxis=dict(title="Areas", color=fg_color, gridcolor=grid_color),
        margin=dict(l=0, r=20, t=10, b=20),
        showlegend=True,
    )
    logger.debug(f"plotly figure: {len(bars)} bar traces, {len(lines)} line traces")
    return fig.to_dict()
