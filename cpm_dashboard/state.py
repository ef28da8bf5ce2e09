"""Filter state for one dashboard page.

Three independent values: the selected period, the selected unit/currency and
a loading flag. "Aplicar filtros" does no real work; it only raises the loading
flag for a short fixed delay so the page shows feedback.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from .config import DashboardProfile

logger = logging.getLogger(__name__)


@dataclass
class FilterState:
    period: str
    currency: str
    unit: str | None = None
    loading: bool = False

    @classmethod
    def for_profile(cls, profile: DashboardProfile) -> FilterState:
        """Initial selection: first option of every selector."""

        return cls(period=profile.periods[0], currency=profile.default_currency, unit=profile.default_unit)

    def select(
        self,
        profile: DashboardProfile,
        *,
        period: str | None = None,
        unit: str | None = None,
        currency: str | None = None,
    ) -> None:
        """Change one or more selectors, rejecting values the profile does not offer."""

        if period is not None:
            if period not in profile.periods:
                raise ValueError(f"Period {period!r} is not available in profile {profile.key!r}")
            self.period = period
        if unit is not None:
            if unit not in profile.units:
                raise ValueError(f"Unit {unit!r} is not available in profile {profile.key!r}")
            self.unit = unit
        if currency is not None:
            if currency not in profile.currencies:
                raise ValueError(f"Currency {currency!r} is not available in profile {profile.key!r}")
            self.currency = currency


def begin_apply(state: FilterState) -> None:
    state.loading = True
    logger.info("Applying filters: period=%s unit=%s currency=%s", state.period, state.unit, state.currency)


def finish_apply(state: FilterState, delay_seconds: float, *, sleep: Callable[[float], None] = time.sleep) -> None:
    """Hold the loading flag for ``delay_seconds`` and then clear it."""

    try:
        sleep(delay_seconds)
    finally:
        state.loading = False


def apply_filters(state: FilterState, delay_seconds: float, *, sleep: Callable[[float], None] = time.sleep) -> None:
    begin_apply(state)
    finish_apply(state, delay_seconds, sleep=sleep)
