"""Synthetic cost-per-minute series.

Values are not measured anywhere. Each series is produced by a sine-based
pseudo-random function seeded from the selected unit, so the same filter
selection always shows the same numbers.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Literal, TypedDict

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

Period = Literal["24h", "7d", "30d", "mensal"]

WEEKDAYS = ("Seg", "Ter", "Qua", "Qui", "Sex", "Sáb", "Dom")
MONTHS = ("Jan", "Fev", "Mar", "Abr", "Mai", "Jun", "Jul", "Ago", "Set", "Out", "Nov", "Dez")

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 1_440
# Months are approximated as 30 days.
MINUTES_PER_MONTH = 30 * MINUTES_PER_DAY


class Point(TypedDict):
    label: str
    value: float


@dataclass(frozen=True)
class PeriodSpec:
    """Bucket layout and value constants for one period option."""

    key: str
    title: str
    labels: tuple[str, ...]
    base: float
    spread: float
    offset: int
    minutes_per_bucket: int

    @property
    def bucket_count(self) -> int:
        return len(self.labels)


PERIODS: dict[str, PeriodSpec] = {
    spec.key: spec
    for spec in (
        PeriodSpec(
            key="24h",
            title="Últimas 24h",
            labels=tuple(f"{hour}h" for hour in range(24)),
            base=0.18,
            spread=0.25,
            offset=1,
            minutes_per_bucket=MINUTES_PER_HOUR,
        ),
        PeriodSpec(
            key="7d",
            title="Últimos 7 dias",
            labels=WEEKDAYS,
            base=0.20,
            spread=0.22,
            offset=11,
            minutes_per_bucket=MINUTES_PER_DAY,
        ),
        PeriodSpec(
            key="30d",
            title="Últimos 30 dias",
            labels=tuple(str(day) for day in range(1, 31)),
            base=0.17,
            spread=0.28,
            offset=21,
            minutes_per_bucket=MINUTES_PER_DAY,
        ),
        PeriodSpec(
            key="mensal",
            title="Mensal (12 meses)",
            labels=MONTHS,
            base=0.19,
            spread=0.26,
            offset=31,
            minutes_per_bucket=MINUTES_PER_MONTH,
        ),
    )
}


def period_spec(period: str) -> PeriodSpec:
    """Look up the bucket layout for ``period``."""

    try:
        return PERIODS[period]
    except KeyError:
        raise ValueError(f"Unknown period {period!r}; expected one of {list(PERIODS)}") from None


def _hash_key(key: str) -> int:
    """Fold ``key`` into a signed 32-bit integer (``h * 31 + code`` per UTF-16 unit)."""

    encoded = key.encode("utf-16-le")
    h = 0
    for idx in range(0, len(encoded), 2):
        code = encoded[idx] | (encoded[idx + 1] << 8)
        h = (h * 31 + code) & 0xFFFFFFFF
    return h - 0x1_0000_0000 if h & 0x8000_0000 else h


def seed_from(key: str) -> Callable[[int], float]:
    """Return a deterministic ``index -> [0, 1)`` function keyed by ``key``.

    Not suitable for anything but display data; the only guarantee is that the
    same ``(key, index)`` pair always yields the same value.
    """

    h = _hash_key(key)

    def rand(index: int) -> float:
        x = np.sin(h + index) * 10_000
        return float(x - np.floor(x))

    return rand


def generate_data(period: str, unit: str | None = None) -> list[Point]:
    """Generate the synthetic cost-per-minute series for a filter selection."""

    spec = period_spec(period)
    rand = seed_from(unit or "")

    points: list[Point] = [
        {"label": label, "value": spec.base + rand(idx + spec.offset) * spec.spread}
        for idx, label in enumerate(spec.labels)
    ]
    logger.debug("Generated %d points for period=%s unit=%s", len(points), period, unit)
    return points


def series_frame(points: Iterable[Point]) -> pd.DataFrame:
    """Return the series as a two-column frame (``label``, ``value``)."""

    return pd.DataFrame(list(points), columns=["label", "value"])
