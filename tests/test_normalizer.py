"""Tests for reconciling current and forecast payloads into one context."""

from __future__ import annotations

from typing import Any

from weather_advisor.weather.models import (
    CurrentVariant,
    ForecastVariant,
    NormalizedContext,
    classify_payload,
)
from weather_advisor.weather.normalizer import normalize_weather


def _current_payload(**data_overrides: Any) -> CurrentVariant:
    data: dict[str, Any] = {
        "temperature": 18.5,
        "feels_like": 17.9,
        "humidity": 62,
        "wind_speed": 3.4,
        "condition": "Clouds",
        "condition_desc": "scattered clouds",
        "uv": 4,
        "timestamp": 1792396800,
    }
    data.update(data_overrides)
    variant = classify_payload({"ok": True, "data": data})
    assert isinstance(variant, CurrentVariant)
    return variant


def _forecast_payload(entries: list[Any]) -> ForecastVariant:
    variant = classify_payload({"ok": True, "data": entries})
    assert isinstance(variant, ForecastVariant)
    return variant


FORECAST_ENTRIES: list[dict[str, Any]] = [
    {
        "temp": 14.2,
        "feels_like": 13.0,
        "humidity": 80,
        "wind_speed": 5.1,
        "condition": "Rain",
        "condition_desc": "light rain",
        "timestamp": 1792396800,
    },
    {
        "temperature": 16.0,
        "temperature_min": 11.5,
        "temperature_max": 19.0,
        "humidity": 55,
        "condition": "Clear",
        "condition_desc": "clear sky",
        "timestamp": 1792483200,
    },
    {
        "temperature": 21.0,
        "temperature_min": 15.0,
        "temperature_max": 24.0,
        "humidity": 40,
        "condition": "Clouds",
        "timestamp": 1792569600,
    },
]


def test_current_shape_has_no_forecast_summary() -> None:
    context = normalize_weather(_current_payload(), "Paris")

    assert context.location == "Paris"
    assert context.forecast_summary is None
    assert context.current.temperature == 18.5
    assert context.current.feels_like == 17.9
    assert context.current.condition == "Clouds"
    assert context.current.description == "scattered clouds"
    assert context.current.wind_speed == 3.4
    assert context.current.humidity == 62
    assert context.current.uv_index == 4
    assert context.current.is_day is True


def test_forecast_shape_uses_entry_zero_and_entry_one() -> None:
    context = normalize_weather(_forecast_payload(FORECAST_ENTRIES), "Seattle")

    # Entry 0 only has ``temp``; the fallback key is honoured.
    assert context.current.temperature == 14.2
    assert context.current.description == "light rain"
    assert context.current.uv_index == 0

    summary = context.forecast_summary
    assert summary is not None
    assert summary.condition == "Clear"
    assert summary.description == "clear sky"
    assert summary.temp_min == 11.5
    assert summary.temp_max == 19.0
    assert summary.humidity == 55


def test_single_entry_forecast_has_no_summary() -> None:
    context = normalize_weather(_forecast_payload(FORECAST_ENTRIES[:1]), "Seattle")
    assert context.current.temperature == 14.2
    assert context.forecast_summary is None


def test_empty_forecast_yields_blank_current() -> None:
    context = normalize_weather(_forecast_payload([]), "Nowhere")
    assert context.current.temperature is None
    assert context.current.feels_like is None
    assert context.current.uv_index == 0
    assert context.current.is_day is True
    assert context.forecast_summary is None


def test_missing_and_malformed_fields_stay_absent() -> None:
    context = normalize_weather(
        _current_payload(temperature="warm", feels_like=None, humidity=True, uv=None),
        "Paris",
    )
    assert context.current.temperature is None
    assert context.current.feels_like is None
    assert context.current.humidity is None
    assert context.current.uv_index == 0


def test_temperature_preferred_over_temp() -> None:
    context = normalize_weather(_current_payload(temperature=20.0, temp=5.0), "Paris")
    assert context.current.temperature == 20.0


def test_non_mapping_forecast_entries_are_tolerated() -> None:
    context = normalize_weather(_forecast_payload(["garbage", None]), "Paris")
    assert context.current.temperature is None
    assert context.forecast_summary is not None
    assert context.forecast_summary.condition is None


def test_normalizing_twice_is_identical() -> None:
    payload = _forecast_payload(FORECAST_ENTRIES)
    first = normalize_weather(payload, "Seattle")
    second = normalize_weather(payload, "Seattle")
    assert first == second
    assert first.model_dump() == second.model_dump()
    assert payload.data == FORECAST_ENTRIES


def test_context_serializes_with_camel_case_keys() -> None:
    context = normalize_weather(_forecast_payload(FORECAST_ENTRIES), "Seattle")
    dumped = context.model_dump(by_alias=True)
    assert set(dumped) == {"location", "current", "forecastSummary"}
    assert "feelsLike" in dumped["current"]
    assert "uvIndex" in dumped["current"]
    assert "tempMin" in dumped["forecastSummary"]
    assert NormalizedContext.model_validate(dumped) == context


def test_oversized_numbers_are_treated_as_absent() -> None:
    context = normalize_weather(
        _current_payload(temperature=10**400, feels_like=float("inf"), wind_speed=float("nan")),
        "Paris",
    )
    assert context.current.temperature is None
    assert context.current.feels_like is None
    assert context.current.wind_speed is None
