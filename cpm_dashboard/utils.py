"""Shared formatting helpers for the cost-per-minute dashboard."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping

# pt-BR display symbols; codes outside this table are shown as the code itself.
CURRENCY_SYMBOLS = {
    "BRL": "R$",
    "USD": "US$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "JP¥",
}

NBSP = "\u00a0"


def _check_code(currency: str) -> str:
    if len(currency) != 3 or not currency.isascii() or not currency.isalpha():
        raise ValueError(f"Invalid currency code {currency!r}")
    return currency.upper()


def currency_symbol(currency: str) -> str:
    """Return the pt-BR display symbol for an ISO currency code."""

    code = _check_code(currency)
    return CURRENCY_SYMBOLS.get(code, code)


def _group_thousands(digits: str) -> str:
    head = len(digits) % 3 or 3
    groups = [digits[:head]] + [digits[i : i + 3] for i in range(head, len(digits), 3)]
    return ".".join(groups)


def format_currency(value: float, currency: str = "BRL", *, min_digits: int = 2, max_digits: int = 4) -> str:
    """Format ``value`` as pt-BR currency text, e.g. ``R$ 1.234,5678``.

    The display locale is fixed; only the symbol follows ``currency``.
    """

    symbol = currency_symbol(currency)

    quantized = Decimal(repr(float(value))).quantize(Decimal(1).scaleb(-max_digits), rounding=ROUND_HALF_UP)
    negative = quantized < 0
    integer_part, _, fraction = f"{abs(quantized):f}".partition(".")
    fraction = fraction.rstrip("0").ljust(min_digits, "0")

    text = f"{symbol}{NBSP}{_group_thousands(integer_part)},{fraction}"
    return f"-{text}" if negative else text


def format_share(share: float) -> str:
    """Render a ratio as a whole percentage (``0.38`` -> ``"38%"``)."""

    return f"{share * 100:.0f}%"


def convert(value: float, currency: str, rates: Mapping[str, float]) -> float:
    """Convert a base-currency amount into ``currency`` using ``rates``."""

    code = _check_code(currency)
    try:
        return value * rates[code]
    except KeyError:
        raise ValueError(f"No conversion rate configured for {code}") from None
