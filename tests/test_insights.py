"""Tests for the derived KPI helpers."""

from __future__ import annotations

import pytest
from cpm_dashboard import insights, synth
from cpm_dashboard.config import CostDriver, LossRateModel


def _points(*values: float) -> list[synth.Point]:
    return [{"label": str(idx), "value": value} for idx, value in enumerate(values)]


@pytest.mark.parametrize("period", ["24h", "7d", "30d", "mensal"])
def test_metrics_agree_with_generated_series(period: str) -> None:
    points = synth.generate_data(period, "Todas")
    values = [p["value"] for p in points]
    spec = synth.period_spec(period)

    avg = insights.average(points)
    assert insights.peak(points) == max(values)
    assert avg == pytest.approx(sum(values) / len(values))
    assert insights.total(points, period) == pytest.approx(avg * spec.bucket_count * spec.minutes_per_bucket)
    assert insights.trend_up(points) is (values[-1] >= values[0])


def test_total_uses_minutes_per_bucket() -> None:
    points = _points(0.2, 0.3)

    assert insights.total(points, "24h") == pytest.approx(0.5 * 60)
    assert insights.total(points, "7d") == pytest.approx(0.5 * 1_440)
    assert insights.total(points, "mensal") == pytest.approx(0.5 * 43_200)


def test_trend_compares_endpoints_only() -> None:
    assert insights.trend_up(_points(0.2, 0.9, 0.1, 0.2)) is True
    assert insights.trend_up(_points(0.3, 0.1, 0.5, 0.29)) is False


def test_empty_points_raise() -> None:
    with pytest.raises(ValueError):
        insights.average([])
    with pytest.raises(ValueError):
        insights.peak([])


def test_loss_minutes_by_unit_selection() -> None:
    model = LossRateModel()

    assert insights.loss_minutes("24h", "Todas", model) == 29
    assert insights.loss_minutes("24h", "Unidade A", model) == 36
    assert insights.loss_minutes("7d", "Todas", model) == 202
    assert insights.loss_minutes("mensal", "Todas", model) == 10_368


def test_calculate_kpis_payload() -> None:
    points = synth.generate_data("24h", "Unidade B")
    payload = insights.calculate_kpis(points, "24h", unit="Unidade B", loss_model=LossRateModel())

    assert payload["bucket_count"] == 24
    assert payload["minutes_per_bucket"] == 60
    assert payload["loss_minutes"] == 36
    assert payload["peak"] == max(p["value"] for p in points)

    without_loss = insights.calculate_kpis(points, "24h")
    assert without_loss["loss_minutes"] is None


def test_driver_rows_keep_configured_order() -> None:
    rows = insights.driver_rows(
        [CostDriver("Licenças", 0.19, 0.2), CostDriver("Atendimento", 0.26, 0.38)]
    )
    assert [row["name"] for row in rows] == ["Licenças", "Atendimento"]
    assert rows[1] == {"name": "Atendimento", "cpm": 0.26, "share": 0.38}
