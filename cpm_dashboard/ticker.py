"""News ticker markup.

The ticker is decorative: the headlines are rendered twice in a row and a CSS
animation slides both copies left, so the second copy fills the gap left by the
first and the loop looks seamless.
"""

from __future__ import annotations

import html
from collections.abc import Sequence

DEFAULT_ITEMS: tuple[str, ...] = (
    "Nova parceria reduz custos em 8%",
    "Unidade B bate recorde de eficiência no mês",
    "Projeto de automação reduz perda de minutos",
    "Relatório mensal: tendência de custo em queda",
)

TICKER_CSS = """
<style>
.cpm-ticker {
    background: #0f172a;
    color: #f8fafc;
    padding: 0.5rem 0;
    overflow: hidden;
    border-radius: 12px;
}
.cpm-ticker__track {
    display: flex;
    gap: 3rem;
    white-space: nowrap;
}
.cpm-ticker__group {
    display: flex;
    flex-shrink: 0;
    gap: 3rem;
    animation: cpm-marquee var(--speed, 20s) linear infinite;
    will-change: transform;
}
.cpm-ticker__item {
    font-weight: 500;
}
@keyframes cpm-marquee {
    from { transform: translateX(0); }
    to { transform: translateX(calc(-100% - 3rem)); }
}
</style>
"""


def _group(items: Sequence[str], *, hidden: bool) -> str:
    spans = "".join(f'<span class="cpm-ticker__item">{html.escape(text)}</span>' for text in items)
    aria = ' aria-hidden="true"' if hidden else ""
    return f'<div class="cpm-ticker__group"{aria}>{spans}</div>'


def render_ticker_html(items: Sequence[str] = DEFAULT_ITEMS, speed_seconds: float = 20.0) -> str:
    """Return self-contained HTML for a looping headline ticker."""

    if speed_seconds <= 0:
        raise ValueError("speed_seconds must be positive")

    speed = f"{speed_seconds:.3f}".rstrip("0").rstrip(".")
    return (
        f"{TICKER_CSS}"
        f'<aside class="cpm-ticker" aria-label="Últimas notícias" style="--speed: {speed}s">'
        f'<div class="cpm-ticker__track">'
        f"{_group(items, hidden=False)}"
        f"{_group(items, hidden=True)}"
        f"</div></aside>"
    )
