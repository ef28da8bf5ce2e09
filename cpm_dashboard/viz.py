"""Visualization utilities for the cost-per-minute dashboard."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from . import utils

PRIMARY = "#2563eb"
PRIMARY_FILL = "rgba(37, 99, 235, 0.18)"
GRID = "rgba(226, 232, 240, 0.9)"


def _empty_figure(message: str) -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(
        text=message,
        showarrow=False,
        x=0.5,
        y=0.5,
        xref="paper",
        yref="paper",
        font=dict(size=14, color="#6c757d"),
    )
    fig.update_layout(margin=dict(l=0, r=0, t=20, b=20))
    return fig


def plot_cost_trend(
    points: Iterable[Mapping[str, object]],
    *,
    currency: str = "BRL",
    rate: float = 1.0,
) -> go.Figure:
    """Return an area chart of cost per minute across the period's buckets."""

    data = list(points)
    if not data:
        return _empty_figure("Sem dados para o período.")

    df = pd.DataFrame(data)
    df["display"] = df["value"].astype(float) * rate
    df["formatted"] = df["display"].apply(lambda value: utils.format_currency(value, currency))

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            name="Custo/min",
            x=df["label"],
            y=df["display"],
            customdata=df["formatted"],
            mode="lines",
            line=dict(color=PRIMARY, width=2, shape="spline"),
            fill="tozeroy",
            fillcolor=PRIMARY_FILL,
            hovertemplate="%{x}<br>%{customdata}<extra></extra>",
        )
    )
    fig.update_layout(
        margin=dict(l=0, r=0, t=10, b=0),
        height=288,
        showlegend=False,
        xaxis=dict(type="category", gridcolor=GRID),
        yaxis=dict(
            tickprefix=utils.currency_symbol(currency),
            tickformat=".2f",
            gridcolor=GRID,
            griddash="dash",
        ),
    )
    return fig


def plot_cost_drivers(rows: Iterable[Mapping[str, object]]) -> go.Figure:
    """Return a donut of the illustrative cost-driver shares."""

    data = list(rows)
    if not data:
        return _empty_figure("Nenhum centro de custo configurado.")

    df = pd.DataFrame(data)
    fig = px.pie(
        df,
        names="name",
        values="share",
        hole=0.55,
    )
    fig.update_traces(textinfo="label+percent", pull=[0.03] * len(df))
    fig.update_layout(margin=dict(l=0, r=0, t=10, b=0), showlegend=False)
    return fig
