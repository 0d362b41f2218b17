import pytest
from pydantic import ValidationError as SettingsError

from restaurant_client.core.config import DataMode, EnvironmentMode, Settings


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.api_base_url == "http://localhost:3001/api"
    assert settings.api_timeout == 10.0
    assert settings.data_mode == DataMode.FALLBACK
    assert settings.uses_network is True
    assert settings.verify_order_totals is False


def test_modes_parse_case_insensitively():
    settings = Settings(_env_file=None, env_mode="PRODUCTION", data_mode="Strict")
    assert settings.env_mode == EnvironmentMode.PRODUCTION
    assert settings.data_mode == DataMode.STRICT


def test_env_vars_are_read(monkeypatch):
    monkeypatch.setenv("DATA_MODE", "mock")
    monkeypatch.setenv("MOCK_MAX_LATENCY", "0.05")
    monkeypatch.setenv("MOCK_MIN_LATENCY", "0")

    settings = Settings(_env_file=None)
    assert settings.data_mode == DataMode.MOCK
    assert settings.uses_network is False
    assert settings.mock_max_latency == 0.05


def test_invalid_values_rejected():
    with pytest.raises(SettingsError):
        Settings(_env_file=None, data_mode="sometimes")
    with pytest.raises(SettingsError):
        Settings(_env_file=None, mock_min_latency=1.0, mock_max_latency=0.5)


def test_production_config_problems():
    risky = Settings(_env_file=None, env_mode="production")
    assert len(risky.validate_production_config()) == 2

    safe = Settings(_env_file=None, env_mode="production", data_mode="strict",
                    verify_order_totals=True)
    assert safe.validate_production_config() == []

    assert Settings(_env_file=None).validate_production_config() == []
