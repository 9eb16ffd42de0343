"""Settings loading and validation tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from pydantic import ValidationError

from weather_advisor.config import Settings, load_settings
from weather_advisor.exceptions import ConfigError

_OPTIONAL_ENV = (
    "LLM_TIMEOUT_SECONDS",
    "NUBILA_TIMEOUT_SECONDS",
    "NUBILA_BASE_URL",
    "DISPLAY_TIMEZONE",
    "PORT",
    "HOST",
    "LOG_LEVEL",
    "INTENT_TEMPERATURE",
    "INTENT_MAX_TOKENS",
    "ADVICE_TEMPERATURE",
    "ADVICE_MAX_TOKENS",
)


def _set_required_env(monkeypatch: Any, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    for name in _OPTIONAL_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("GAIA_API_ENDPOINT", "https://llm.example.com/v1/chat/completions")
    monkeypatch.setenv("GAIA_API_KEY", "test-llm-key")
    monkeypatch.setenv("GAIA_MODEL_NAME", "test-model")
    monkeypatch.setenv("NUBILA_API_KEY", "test-weather-key")


def test_defaults(monkeypatch: Any, tmp_path: Path) -> None:
    _set_required_env(monkeypatch, tmp_path)
    settings = Settings(_env_file=None)

    assert str(settings.gaia_api_endpoint) == "https://llm.example.com/v1/chat/completions"
    assert settings.gaia_model_name == "test-model"
    assert settings.intent_temperature == 0.2
    assert settings.intent_max_tokens == 150
    assert settings.llm_timeout_seconds is None
    assert settings.nubila_timeout_seconds is None
    assert str(settings.nubila_base_url).rstrip("/") == "https://api.nubila.ai/api/v1"
    assert settings.port == 3000
    assert settings.display_timezone is None


def test_empty_optional_values_are_unset(monkeypatch: Any, tmp_path: Path) -> None:
    _set_required_env(monkeypatch, tmp_path)
    monkeypatch.setenv("LLM_TIMEOUT_SECONDS", "")
    monkeypatch.setenv("NUBILA_TIMEOUT_SECONDS", "  ")
    monkeypatch.setenv("DISPLAY_TIMEZONE", "")

    settings = Settings(_env_file=None)
    assert settings.llm_timeout_seconds is None
    assert settings.nubila_timeout_seconds is None
    assert settings.display_timezone is None


def test_env_overrides(monkeypatch: Any, tmp_path: Path) -> None:
    _set_required_env(monkeypatch, tmp_path)
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("LLM_TIMEOUT_SECONDS", "12.5")
    monkeypatch.setenv("DISPLAY_TIMEZONE", "Europe/Paris")

    settings = Settings(_env_file=None)
    assert settings.port == 8080
    assert settings.llm_timeout_seconds == 12.5
    assert settings.display_timezone == "Europe/Paris"


def test_settings_are_frozen(monkeypatch: Any, tmp_path: Path) -> None:
    _set_required_env(monkeypatch, tmp_path)
    settings = Settings(_env_file=None)
    with pytest.raises(ValidationError):
        settings.port = 9999  # type: ignore[misc]


def test_secrets_hidden_from_repr_and_summary(monkeypatch: Any, tmp_path: Path) -> None:
    _set_required_env(monkeypatch, tmp_path)
    settings = Settings(_env_file=None)

    assert "test-llm-key" not in repr(settings)
    assert "test-weather-key" not in repr(settings)
    summary = settings.safe_summary()
    assert "test-llm-key" not in str(summary)
    assert "test-weather-key" not in str(summary)
    assert summary["llm_model"] == "test-model"


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("GAIA_API_KEY", "   "),
        ("LLM_TIMEOUT_SECONDS", "0"),
        ("NUBILA_TIMEOUT_SECONDS", "-1"),
        ("INTENT_TEMPERATURE", "3"),
        ("ADVICE_MAX_TOKENS", "0"),
        ("PORT", "70000"),
        ("LOG_LEVEL", "CHATTY"),
        ("DISPLAY_TIMEZONE", "Mars/Olympus_Mons"),
        ("GAIA_API_ENDPOINT", "not a url"),
    ],
)
def test_invalid_values_rejected(
    monkeypatch: Any, tmp_path: Path, name: str, value: str
) -> None:
    _set_required_env(monkeypatch, tmp_path)
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_load_settings_wraps_missing_values(monkeypatch: Any, tmp_path: Path) -> None:
    _set_required_env(monkeypatch, tmp_path)
    monkeypatch.delenv("NUBILA_API_KEY", raising=False)
    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_settings()


def test_load_settings_reads_dotenv(monkeypatch: Any, tmp_path: Path) -> None:
    _set_required_env(monkeypatch, tmp_path)
    monkeypatch.delenv("GAIA_MODEL_NAME", raising=False)
    (tmp_path / ".env").write_text("GAIA_MODEL_NAME=model-from-dotenv\n", encoding="utf-8")

    settings = load_settings()
    assert settings.gaia_model_name == "model-from-dotenv"
