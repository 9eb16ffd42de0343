"""Reconcile current and forecast payload shapes into one context record."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from .models import (
    CurrentConditions,
    CurrentVariant,
    ForecastSummary,
    ForecastVariant,
    NormalizedContext,
)


def normalize_weather(
    payload: CurrentVariant | ForecastVariant, location_name: str
) -> NormalizedContext:
    """Build a ``NormalizedContext``; pure and total over both variants.

    For forecast payloads entry 0 is the current reading and entry 1 (the
    first of the tail) feeds the forecast summary.
    """
    forecast_summary: ForecastSummary | None = None
    if isinstance(payload, ForecastVariant):
        entries = payload.data
        current_entry = _as_mapping(entries[0]) if entries else {}
        tail = entries[1:]
        if tail:
            forecast_summary = _summarize_forecast(_as_mapping(tail[0]))
    else:
        current_entry = payload.data

    return NormalizedContext(
        location=location_name,
        current=_current_conditions(current_entry),
        forecast_summary=forecast_summary,
    )


def _current_conditions(entry: Mapping[str, Any]) -> CurrentConditions:
    uv_index = _as_float(entry.get("uv"))
    return CurrentConditions(
        temperature=_temperature(entry),
        feels_like=_as_float(entry.get("feels_like")),
        condition=_as_str(entry.get("condition")),
        description=_description(entry),
        wind_speed=_as_float(entry.get("wind_speed")),
        humidity=_as_float(entry.get("humidity")),
        uv_index=uv_index if uv_index is not None else 0,
        is_day=True,
    )


def _summarize_forecast(entry: Mapping[str, Any]) -> ForecastSummary:
    return ForecastSummary(
        condition=_as_str(entry.get("condition")),
        description=_description(entry),
        temp_min=_first_float(entry, ("temperature_min", "temp_min")),
        temp_max=_first_float(entry, ("temperature_max", "temp_max")),
        humidity=_as_float(entry.get("humidity")),
    )


def _temperature(entry: Mapping[str, Any]) -> float | None:
    # The current and forecast endpoints disagree on this key.
    return _first_float(entry, ("temperature", "temp"))


def _description(entry: Mapping[str, Any]) -> str | None:
    return _as_str(entry.get("condition_desc")) or _as_str(entry.get("description"))


def _first_float(entry: Mapping[str, Any], keys: tuple[str, ...]) -> float | None:
    for key in keys:
        value = _as_float(entry.get(key))
        if value is not None:
            return value
    return None


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _as_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
        return number if math.isfinite(number) else None
    return None


def _as_str(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None
