"""Runtime configuration for the cost-per-minute dashboard.

The page has two historical variants: a currency view (BRL/USD) and a unit
view with a monthly period and lost-minute estimate. Both are described here
as :class:`DashboardProfile` values instead of separate page implementations.

Anything shown on the page that is *not* derived from the synthetic series
(cost drivers, loss rates, currency rates, ticker headlines) is placeholder
data. It ships with built-in defaults and can be replaced through a JSON file
pointed to by ``CPM_CONFIG_FILE``.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from dotenv import find_dotenv, load_dotenv

from . import ticker

logger = logging.getLogger(__name__)

ALL_UNITS = "Todas"
BASE_CURRENCY = "BRL"

DEFAULT_PROFILE = "custo"
DEFAULT_APPLY_DELAY_SECONDS = 0.6
DEFAULT_TICKER_SPEED_SECONDS = 20.0


class ConfigError(ValueError):
    """Raised when the dashboard configuration cannot be parsed."""


@dataclass(frozen=True)
class CostDriver:
    """Illustrative cost-center row shown next to the chart."""

    name: str
    cpm: float
    share: float


@dataclass(frozen=True)
class LossRateModel:
    """Share of the period's minutes counted as lost, per unit selection."""

    all_units: float = 0.02
    single_unit: float = 0.025

    def rate_for(self, unit: str | None) -> float:
        if unit is None or unit == ALL_UNITS:
            return self.all_units
        return self.single_unit


@dataclass(frozen=True)
class DashboardProfile:
    """Which filters and KPIs a dashboard page exposes."""

    key: str
    title: str
    periods: tuple[str, ...]
    units: tuple[str, ...] = ()
    currencies: tuple[str, ...] = (BASE_CURRENCY,)
    loss_model: LossRateModel | None = None

    @property
    def default_unit(self) -> str | None:
        return self.units[0] if self.units else None

    @property
    def default_currency(self) -> str:
        return self.currencies[0]


DEFAULT_COST_DRIVERS: tuple[CostDriver, ...] = (
    CostDriver(name="Atendimento", cpm=0.26, share=0.38),
    CostDriver(name="Infraestrutura", cpm=0.21, share=0.27),
    CostDriver(name="Licenças", cpm=0.19, share=0.20),
    CostDriver(name="Treinamento", cpm=0.16, share=0.15),
)

# Prototype approximation: ~R$5 per USD.
DEFAULT_CURRENCY_RATES: dict[str, float] = {"BRL": 1.0, "USD": 1 / 5}

UNITS = (ALL_UNITS, "Unidade A", "Unidade B", "Unidade C")


def build_profiles(loss_model: LossRateModel | None = None) -> dict[str, DashboardProfile]:
    """Return the built-in dashboard profiles keyed by name."""

    profiles = [
        DashboardProfile(
            key="custo",
            title="Painel de Custo por Minuto",
            periods=("24h", "7d", "30d"),
            currencies=("BRL", "USD"),
        ),
        DashboardProfile(
            key="unidades",
            title="Custo por Minuto por Unidade",
            periods=("24h", "7d", "30d", "mensal"),
            units=UNITS,
            currencies=(BASE_CURRENCY,),
            loss_model=loss_model or LossRateModel(),
        ),
    ]
    return {p.key: p for p in profiles}


@dataclass(frozen=True)
class DashboardConfig:
    profile: str = DEFAULT_PROFILE
    apply_delay_seconds: float = DEFAULT_APPLY_DELAY_SECONDS
    ticker_speed_seconds: float = DEFAULT_TICKER_SPEED_SECONDS
    ticker_items: tuple[str, ...] = ticker.DEFAULT_ITEMS
    cost_drivers: tuple[CostDriver, ...] = DEFAULT_COST_DRIVERS
    currency_rates: Mapping[str, float] = field(default_factory=lambda: dict(DEFAULT_CURRENCY_RATES))
    profiles: Mapping[str, DashboardProfile] = field(default_factory=build_profiles)

    @property
    def active_profile(self) -> DashboardProfile:
        return self.profiles[self.profile]


def _as_float(value: Any, name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be a number, got {value!r}") from exc


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return _as_float(raw.strip(), name)


def _parse_cost_drivers(raw: Any) -> tuple[CostDriver, ...]:
    if not isinstance(raw, list) or not raw:
        raise ConfigError("cost_drivers must be a non-empty list")

    drivers: list[CostDriver] = []
    for idx, entry in enumerate(raw):
        if not isinstance(entry, Mapping) or "name" not in entry:
            raise ConfigError(f"cost_drivers[{idx}] must be an object with a name")
        cpm = _as_float(entry.get("cpm"), f"cost_drivers[{idx}].cpm")
        share = _as_float(entry.get("share"), f"cost_drivers[{idx}].share")
        if cpm < 0:
            raise ConfigError(f"cost_drivers[{idx}].cpm must not be negative")
        if not 0.0 <= share <= 1.0:
            raise ConfigError(f"cost_drivers[{idx}].share must be between 0 and 1")
        drivers.append(CostDriver(name=str(entry["name"]), cpm=cpm, share=share))
    return tuple(drivers)


def _parse_loss_rates(raw: Any) -> LossRateModel:
    if not isinstance(raw, Mapping):
        raise ConfigError("loss_rates must be an object")

    defaults = LossRateModel()
    all_units = _as_float(raw.get("all_units", defaults.all_units), "loss_rates.all_units")
    single_unit = _as_float(raw.get("single_unit", defaults.single_unit), "loss_rates.single_unit")
    for name, rate in (("all_units", all_units), ("single_unit", single_unit)):
        if not 0.0 <= rate <= 1.0:
            raise ConfigError(f"loss_rates.{name} must be between 0 and 1")
    return LossRateModel(all_units=all_units, single_unit=single_unit)


def _parse_currency_rates(raw: Any) -> dict[str, float]:
    if not isinstance(raw, Mapping):
        raise ConfigError("currency_rates must be an object")

    rates = dict(DEFAULT_CURRENCY_RATES)
    for code, value in raw.items():
        rate = _as_float(value, f"currency_rates.{code}")
        if rate <= 0:
            raise ConfigError(f"currency_rates.{code} must be positive")
        rates[str(code).upper()] = rate
    return rates


def _parse_ticker_items(raw: Any) -> tuple[str, ...]:
    if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
        raise ConfigError("ticker_items must be a list of strings")
    return tuple(raw)


def _read_config_file(path: Path) -> dict[str, Any]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigError(f"{path} must contain a JSON object")
    return payload


def load_dashboard_config(*, load_env: bool = True, config_file: str | Path | None = None) -> DashboardConfig:
    """Build the dashboard configuration from the environment and an optional JSON file."""

    if load_env:
        load_dotenv(find_dotenv(usecwd=True))

    file_value = config_file or os.getenv("CPM_CONFIG_FILE")
    overrides: dict[str, Any] = _read_config_file(Path(file_value)) if file_value else {}

    loss_model = _parse_loss_rates(overrides["loss_rates"]) if "loss_rates" in overrides else LossRateModel()
    profiles = build_profiles(loss_model)

    profile = (os.getenv("CPM_PROFILE") or DEFAULT_PROFILE).strip()
    if profile not in profiles:
        raise ConfigError(f"Unknown profile {profile!r}; expected one of {sorted(profiles)}")

    apply_delay = _float_env("CPM_APPLY_DELAY_SECONDS", DEFAULT_APPLY_DELAY_SECONDS)
    if apply_delay < 0:
        raise ConfigError("CPM_APPLY_DELAY_SECONDS must not be negative")
    ticker_speed = _float_env("CPM_TICKER_SPEED_SECONDS", DEFAULT_TICKER_SPEED_SECONDS)
    if ticker_speed <= 0:
        raise ConfigError("CPM_TICKER_SPEED_SECONDS must be positive")

    config = DashboardConfig(
        profile=profile,
        apply_delay_seconds=apply_delay,
        ticker_speed_seconds=ticker_speed,
        ticker_items=(
            _parse_ticker_items(overrides["ticker_items"]) if "ticker_items" in overrides else ticker.DEFAULT_ITEMS
        ),
        cost_drivers=(
            _parse_cost_drivers(overrides["cost_drivers"]) if "cost_drivers" in overrides else DEFAULT_COST_DRIVERS
        ),
        currency_rates=(
            _parse_currency_rates(overrides["currency_rates"])
            if "currency_rates" in overrides
            else dict(DEFAULT_CURRENCY_RATES)
        ),
        profiles=profiles,
    )
    logger.info(
        "Loaded dashboard config: profile=%s, %d cost drivers, config file=%s",
        config.profile,
        len(config.cost_drivers),
        file_value or "-",
    )
    return config
