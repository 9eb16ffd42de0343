"""Weather retrieval, normalization and day grouping."""

from .base import WeatherProvider
from .grouping import format_day_label, group_forecasts_by_day
from .models import (
    CurrentConditions,
    CurrentVariant,
    ForecastSummary,
    ForecastVariant,
    NormalizedContext,
    RawWeatherPayload,
    classify_payload,
)
from .normalizer import normalize_weather
from .nubila import NubilaWeatherProvider

__all__ = [
    "CurrentConditions",
    "CurrentVariant",
    "ForecastSummary",
    "ForecastVariant",
    "NormalizedContext",
    "NubilaWeatherProvider",
    "RawWeatherPayload",
    "WeatherProvider",
    "classify_payload",
    "format_day_label",
    "group_forecasts_by_day",
    "normalize_weather",
]
