"""Tests for dashboard configuration loading."""

from __future__ import annotations

import json

import pytest
from cpm_dashboard import config as cfg
from cpm_dashboard import ticker

ENV_VARS = (
    "CPM_PROFILE",
    "CPM_APPLY_DELAY_SECONDS",
    "CPM_TICKER_SPEED_SECONDS",
    "CPM_CONFIG_FILE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    config = cfg.load_dashboard_config(load_env=False)

    assert config.profile == "custo"
    assert config.apply_delay_seconds == 0.6
    assert config.ticker_speed_seconds == 20.0
    assert config.ticker_items == ticker.DEFAULT_ITEMS
    assert config.cost_drivers == cfg.DEFAULT_COST_DRIVERS
    assert config.currency_rates["USD"] == pytest.approx(0.2)
    assert set(config.profiles) == {"custo", "unidades"}
    assert config.active_profile.currencies == ("BRL", "USD")
    assert config.profiles["unidades"].loss_model == cfg.LossRateModel(all_units=0.02, single_unit=0.025)


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CPM_PROFILE", "unidades")
    monkeypatch.setenv("CPM_APPLY_DELAY_SECONDS", "1.5")
    monkeypatch.setenv("CPM_TICKER_SPEED_SECONDS", "35")

    config = cfg.load_dashboard_config(load_env=False)

    assert config.active_profile.key == "unidades"
    assert config.apply_delay_seconds == 1.5
    assert config.ticker_speed_seconds == 35.0


def test_config_file_replaces_placeholder_data(tmp_path) -> None:
    path = tmp_path / "dashboard.json"
    path.write_text(
        json.dumps(
            {
                "cost_drivers": [{"name": "Energia", "cpm": 0.3, "share": 0.6}],
                "loss_rates": {"all_units": 0.01, "single_unit": 0.05},
                "currency_rates": {"eur": 0.18},
                "ticker_items": ["Olá"],
            }
        ),
        encoding="utf-8",
    )

    config = cfg.load_dashboard_config(load_env=False, config_file=path)

    assert config.cost_drivers == (cfg.CostDriver("Energia", 0.3, 0.6),)
    assert config.profiles["unidades"].loss_model == cfg.LossRateModel(0.01, 0.05)
    assert config.currency_rates["EUR"] == pytest.approx(0.18)
    assert config.currency_rates["BRL"] == 1.0
    assert config.ticker_items == ("Olá",)


@pytest.mark.parametrize(
    "payload",
    [
        {"cost_drivers": []},
        {"cost_drivers": [{"name": "X", "cpm": "abc", "share": 0.1}]},
        {"cost_drivers": [{"name": "X", "cpm": 0.1, "share": 1.5}]},
        {"loss_rates": {"all_units": -0.1}},
        {"currency_rates": {"USD": 0}},
        {"ticker_items": "not a list"},
    ],
)
def test_invalid_config_file_raises(tmp_path, payload: dict) -> None:
    path = tmp_path / "dashboard.json"
    path.write_text(json.dumps(payload), encoding="utf-8")

    with pytest.raises(cfg.ConfigError):
        cfg.load_dashboard_config(load_env=False, config_file=path)


def test_malformed_json_and_missing_file(tmp_path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(cfg.ConfigError, match="Invalid JSON"):
        cfg.load_dashboard_config(load_env=False, config_file=path)
    with pytest.raises(cfg.ConfigError, match="Cannot read"):
        cfg.load_dashboard_config(load_env=False, config_file=tmp_path / "missing.json")


def test_invalid_environment_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CPM_PROFILE", "legacy")
    with pytest.raises(cfg.ConfigError, match="Unknown profile"):
        cfg.load_dashboard_config(load_env=False)

    monkeypatch.setenv("CPM_PROFILE", "custo")
    monkeypatch.setenv("CPM_TICKER_SPEED_SECONDS", "0")
    with pytest.raises(cfg.ConfigError):
        cfg.load_dashboard_config(load_env=False)

    monkeypatch.setenv("CPM_TICKER_SPEED_SECONDS", "fast")
    with pytest.raises(cfg.ConfigError):
        cfg.load_dashboard_config(load_env=False)


def test_loss_rate_model_rate_for() -> None:
    model = cfg.LossRateModel()
    assert model.rate_for("Todas") == 0.02
    assert model.rate_for(None) == 0.02
    assert model.rate_for("Unidade A") == 0.025
