"""Assemble everything a dashboard page renders for one filter selection."""

from __future__ import annotations

import logging
from typing import TypedDict

from . import insights, synth, utils
from .config import DashboardConfig, DashboardProfile

logger = logging.getLogger(__name__)


class Card(TypedDict):
    title: str
    value: str
    tone: str  # "up", "down" or "neutral"


class DashboardView(TypedDict):
    profile: str
    period: str
    unit: str | None
    currency: str
    rate: float
    points: list[synth.Point]
    kpis: insights.KpiPayload
    trend_label: str
    cards: list[Card]
    drivers: list[dict[str, str]]


def trend_label(up: bool) -> str:
    return "Alta" if up else "Baixa"


def build_view(
    profile: DashboardProfile,
    config: DashboardConfig,
    *,
    period: str,
    currency: str,
    unit: str | None = None,
) -> DashboardView:
    """Generate the series for a selection and format the cards and tables.

    The series depends only on ``(period, unit)``; ``currency`` changes the
    formatted strings and nothing else.
    """

    if period not in profile.periods:
        raise ValueError(f"Period {period!r} is not available in profile {profile.key!r}")
    if currency not in profile.currencies:
        raise ValueError(f"Currency {currency!r} is not available in profile {profile.key!r}")
    if profile.units:
        unit = unit or profile.default_unit
        if unit not in profile.units:
            raise ValueError(f"Unit {unit!r} is not available in profile {profile.key!r}")
    elif unit is not None:
        raise ValueError(f"Profile {profile.key!r} has no unit selector; got unit {unit!r}")

    points = synth.generate_data(period, unit)
    kpis = insights.calculate_kpis(points, period, unit=unit, loss_model=profile.loss_model)
    rate = utils.convert(1.0, currency, config.currency_rates)

    def money(value: float) -> str:
        return utils.format_currency(value * rate, currency)

    tone = "up" if kpis["trend_up"] else "down"
    cards: list[Card] = [
        {"title": "Custo médio por min", "value": money(kpis["average"]), "tone": tone},
        {"title": "Custo total (período)", "value": money(kpis["total"]), "tone": "neutral"},
        {"title": "Pico de custo/min", "value": money(kpis["peak"]), "tone": "neutral"},
        {"title": "Tendência", "value": trend_label(kpis["trend_up"]), "tone": tone},
    ]
    if kpis["loss_minutes"] is not None:
        cards.append(
            {"title": "Minutos perdidos", "value": f"{kpis['loss_minutes']:,}".replace(",", "."), "tone": "neutral"}
        )

    drivers = [
        {"Nome": row["name"], "Custo/min": money(row["cpm"]), "Contribuição": utils.format_share(row["share"])}
        for row in insights.driver_rows(config.cost_drivers)
    ]

    logger.debug("Built view profile=%s period=%s unit=%s currency=%s", profile.key, period, unit, currency)
    return {
        "profile": profile.key,
        "period": period,
        "unit": unit,
        "currency": currency,
        "rate": rate,
        "points": points,
        "kpis": kpis,
        "trend_label": trend_label(kpis["trend_up"]),
        "cards": cards,
        "drivers": drivers,
    }
