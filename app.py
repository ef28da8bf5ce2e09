"""Streamlit entry point for the cost-per-minute dashboard."""

from __future__ import annotations

import pandas as pd
import streamlit as st
from cpm_dashboard import config as cfg
from cpm_dashboard import logs, page, state, synth, ticker, viz

PAGE_CSS = """
<style>
:root {
    --primary-500: #2563eb;
    --slate-900: #0f172a;
    --slate-500: #64748b;
    --success-500: #15803d;
    --danger-500: #dc2626;
}

[data-testid="stAppViewContainer"] {
    background: radial-gradient(circle at 15% 20%, rgba(37, 99, 235, 0.06), transparent 32%),
                radial-gradient(circle at 85% 15%, rgba(99, 102, 241, 0.05), transparent 35%),
                #f5f7fb;
    color: var(--slate-900);
}

[data-testid="stHeader"] {
    background: transparent;
}

h1 {
    font-size: 2.4rem;
    font-weight: 700;
    letter-spacing: -0.01em;
}

.kpi-card {
    background: #ffffff;
    border-radius: 18px;
    border: 1px solid rgba(226, 232, 240, 0.9);
    padding: 1.1rem 1.25rem;
    box-shadow: 0 30px 60px -46px rgba(15, 23, 42, 0.6);
}

.kpi-card__label {
    font-size: 0.85rem;
    color: var(--slate-500);
    margin-bottom: 0.45rem;
}

.kpi-card__value {
    font-size: 1.55rem;
    font-weight: 700;
    color: var(--slate-900);
}

.kpi-card__value--up { color: var(--primary-500); }
.kpi-card__value--down { color: var(--danger-500); }

.kpi-card__icon { float: right; font-size: 1.2rem; }

.stPlotlyChart {
    margin-bottom: 0 !important;
}
</style>
"""

TONE_ICONS = {"up": "▲", "down": "▼", "neutral": "●"}


@st.cache_resource(show_spinner=False)
def _load_config() -> cfg.DashboardConfig:
    logs.configure_logging()
    return cfg.load_dashboard_config()


@st.cache_data(show_spinner=False)
def _load_view(profile_key: str, period: str, unit: str | None, currency: str) -> page.DashboardView:
    config = _load_config()
    return page.build_view(config.profiles[profile_key], config, period=period, unit=unit, currency=currency)


def _state_for(profile: cfg.DashboardProfile) -> state.FilterState:
    key = f"filters_{profile.key}"
    if key not in st.session_state:
        st.session_state[key] = state.FilterState.for_profile(profile)
    return st.session_state[key]


def _render_card(card: page.Card, *, value_tone: bool = False) -> None:
    tone = card["tone"]
    value_class = f" kpi-card__value--{tone}" if value_tone and tone != "neutral" else ""
    st.markdown(
        f"""
        <div class="kpi-card">
            <div class="kpi-card__label">{card['title']}<span class="kpi-card__icon">{TONE_ICONS[tone]}</span></div>
            <div class="kpi-card__value{value_class}">{card['value']}</div>
        </div>
        """,
        unsafe_allow_html=True,
    )


def main() -> None:
    """Render the cost-per-minute dashboard."""

    st.set_page_config(
        page_title="Painel de Custo por Minuto | Indicadores",
        page_icon="⏱️",
        layout="wide",
    )
    st.markdown(PAGE_CSS, unsafe_allow_html=True)

    config = _load_config()

    sidebar = st.sidebar
    sidebar.header("Painel")
    profile_keys = list(config.profiles)
    profile_key = sidebar.radio(
        "Visão",
        profile_keys,
        index=profile_keys.index(config.profile),
        format_func=lambda key: config.profiles[key].title,
        help="Visão por moeda ou por unidade.",
    )
    profile = config.profiles[profile_key]
    filters = _state_for(profile)

    st.markdown(
        ticker.render_ticker_html(config.ticker_items, config.ticker_speed_seconds),
        unsafe_allow_html=True,
    )
    st.title(profile.title)
    st.caption("Visualize indicadores essenciais e tendências de custo por minuto.")

    select_cols = st.columns([1, 1, 1, 1.2])
    period = select_cols[0].selectbox(
        "Período",
        profile.periods,
        index=profile.periods.index(filters.period),
        format_func=lambda key: synth.PERIODS[key].title,
        disabled=filters.loading,
    )
    unit = None
    if profile.units:
        unit = select_cols[1].selectbox(
            "Unidade",
            profile.units,
            index=profile.units.index(filters.unit) if filters.unit in profile.units else 0,
            disabled=filters.loading,
        )
    currency = select_cols[2].selectbox(
        "Moeda",
        profile.currencies,
        index=profile.currencies.index(filters.currency),
        disabled=filters.loading or len(profile.currencies) == 1,
    )
    filters.select(profile, period=period, unit=unit, currency=currency)

    with select_cols[3]:
        st.write("")
        clicked = st.button(
            "Aplicando..." if filters.loading else "Aplicar filtros",
            disabled=filters.loading,
            use_container_width=True,
        )
    if clicked:
        state.begin_apply(filters)
        st.rerun()
    if filters.loading:
        with st.spinner("Aplicando..."):
            state.finish_apply(filters, config.apply_delay_seconds)
        st.rerun()

    view = _load_view(profile.key, filters.period, filters.unit, filters.currency)

    card_cols = st.columns(len(view["cards"]))
    for col, card in zip(card_cols, view["cards"], strict=True):
        with col:
            _render_card(card, value_tone=card["title"] == "Tendência")

    chart_col, table_col = st.columns([2, 1], gap="large")
    with chart_col:
        st.markdown("### Tendência de custo por minuto")
        trend_fig = viz.plot_cost_trend(view["points"], currency=view["currency"], rate=view["rate"])
        st.plotly_chart(trend_fig, use_container_width=True, config={"displayModeBar": False})

    with table_col:
        st.markdown("### Centros de custo")
        st.caption("Valores ilustrativos; não derivados da série exibida.")
        drivers_table = pd.DataFrame(view["drivers"]).set_index("Nome")
        st.table(drivers_table)
        with st.expander("Distribuição"):
            driver_fig = viz.plot_cost_drivers(
                [{"name": d.name, "share": d.share} for d in config.cost_drivers]
            )
            st.plotly_chart(driver_fig, use_container_width=True, config={"displayModeBar": False})

    sidebar.subheader("Exportar")
    series_csv = synth.series_frame(view["points"]).to_csv(index=False)
    sidebar.download_button(
        "Baixar série (CSV)",
        data=series_csv,
        file_name=f"custo_por_minuto_{view['period']}.csv",
        mime="text/csv",
    )


if __name__ == "__main__":
    main()
