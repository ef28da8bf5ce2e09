"""Tests for chart builders and the ticker markup."""

from __future__ import annotations

import plotly.graph_objects as go
import pytest
from cpm_dashboard import config as cfg
from cpm_dashboard import insights, synth, ticker, viz


def test_plot_cost_trend_scales_by_rate() -> None:
    points = synth.generate_data("24h", "Todas")
    figure = viz.plot_cost_trend(points, currency="USD", rate=0.2)

    assert isinstance(figure, go.Figure)
    assert len(figure.data) == 1
    trace = figure.data[0]
    assert list(trace.x) == [p["label"] for p in points]
    assert list(trace.y) == pytest.approx([p["value"] * 0.2 for p in points])
    assert figure.layout.yaxis.tickprefix == "US$"


def test_plot_cost_trend_empty() -> None:
    figure = viz.plot_cost_trend([])
    assert isinstance(figure, go.Figure)
    assert not figure.data
    assert figure.layout.annotations


def test_plot_cost_drivers_returns_fig() -> None:
    rows = insights.driver_rows(cfg.DEFAULT_COST_DRIVERS)
    figure = viz.plot_cost_drivers(rows)
    assert isinstance(figure, go.Figure)
    assert figure.data, "Chart should plot at least one trace"


def test_ticker_renders_items_twice() -> None:
    markup = ticker.render_ticker_html(ticker.DEFAULT_ITEMS, 20)

    for item in ticker.DEFAULT_ITEMS:
        assert markup.count(item) == 2
    assert markup.count('aria-hidden="true"') == 1
    assert "--speed: 20s" in markup


def test_ticker_escapes_items_and_validates_speed() -> None:
    markup = ticker.render_ticker_html(["<b>alerta</b>"], 12.5)
    assert "&lt;b&gt;alerta&lt;/b&gt;" in markup
    assert "<b>" not in markup
    assert "--speed: 12.5s" in markup

    with pytest.raises(ValueError):
        ticker.render_ticker_html(ticker.DEFAULT_ITEMS, 0)


def test_ticker_speed_is_plain_decimal() -> None:
    assert "--speed: 1000000s" in ticker.render_ticker_html(ticker.DEFAULT_ITEMS, 1e6)
    assert "--speed: 0.25s" in ticker.render_ticker_html(ticker.DEFAULT_ITEMS, 0.25)
