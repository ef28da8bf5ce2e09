"""KPI helpers for the cost-per-minute dashboard."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from typing import TypedDict

from . import synth
from .config import CostDriver, LossRateModel


class KpiPayload(TypedDict):
    period: str
    unit: str | None
    bucket_count: int
    minutes_per_bucket: int
    average: float
    total: float
    peak: float
    trend_up: bool
    loss_minutes: int | None


class DriverRow(TypedDict):
    name: str
    cpm: float
    share: float


def _values(points: Sequence[synth.Point]) -> list[float]:
    if not points:
        raise ValueError("points must not be empty")
    return [float(p["value"]) for p in points]


def average(points: Sequence[synth.Point]) -> float:
    values = _values(points)
    return sum(values) / len(values)


def total(points: Sequence[synth.Point], period: str) -> float:
    """Extrapolate the series to a period total using each bucket's minute weight."""

    minutes = synth.period_spec(period).minutes_per_bucket
    return sum(value * minutes for value in _values(points))


def peak(points: Sequence[synth.Point]) -> float:
    return max(_values(points))


def trend_up(points: Sequence[synth.Point]) -> bool:
    """Compare the last point against the first one.

    Only the endpoints are considered, so a noisy series can flip direction.
    """

    values = _values(points)
    return values[-1] >= values[0]


def loss_minutes(period: str, unit: str | None, model: LossRateModel) -> int:
    """Placeholder estimate of minutes lost in the period for a unit selection."""

    spec = synth.period_spec(period)
    minutes = spec.bucket_count * spec.minutes_per_bucket * model.rate_for(unit)
    return int(math.floor(minutes + 0.5))


def calculate_kpis(
    points: Sequence[synth.Point],
    period: str,
    *,
    unit: str | None = None,
    loss_model: LossRateModel | None = None,
) -> KpiPayload:
    """Compute the scalar KPIs shown on the dashboard cards."""

    spec = synth.period_spec(period)
    return {
        "period": spec.key,
        "unit": unit,
        "bucket_count": len(points),
        "minutes_per_bucket": spec.minutes_per_bucket,
        "average": average(points),
        "total": total(points, period),
        "peak": peak(points),
        "trend_up": trend_up(points),
        "loss_minutes": loss_minutes(period, unit, loss_model) if loss_model else None,
    }


def driver_rows(drivers: Iterable[CostDriver]) -> list[DriverRow]:
    """Return cost drivers as table rows, in the order they were configured."""

    return [{"name": d.name, "cpm": d.cpm, "share": d.share} for d in drivers]
