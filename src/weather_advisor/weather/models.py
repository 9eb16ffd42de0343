"""Typed models for provider payloads and the normalized weather context."""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CurrentVariant(BaseModel):
    """Provider payload whose ``data`` is a single current-conditions record."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["current"] = "current"
    ok: bool = True
    data: dict[str, Any]
    message: str | None = None
    raw: dict[str, Any] = Field(description="Provider JSON exactly as received")


class ForecastVariant(BaseModel):
    """Provider payload whose ``data`` is an ordered list of forecast records."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["forecast"] = "forecast"
    ok: bool = True
    data: list[Any]
    message: str | None = None
    raw: dict[str, Any] = Field(description="Provider JSON exactly as received")


RawWeatherPayload = Annotated[CurrentVariant | ForecastVariant, Field(discriminator="kind")]


def classify_payload(payload: dict[str, Any]) -> CurrentVariant | ForecastVariant | None:
    """Tag a provider payload by the shape of its ``data`` field.

    Returns None when ``data`` is neither an object nor an array.
    """
    data = payload.get("data")
    message = payload.get("message")
    common: dict[str, Any] = {
        "ok": payload.get("ok") is not False,
        "message": message if isinstance(message, str) else None,
        "raw": payload,
    }
    if isinstance(data, list):
        return ForecastVariant(data=data, **common)
    if isinstance(data, dict):
        return CurrentVariant(data=data, **common)
    return None


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class CurrentConditions(_CamelModel):
    """Current reading used to personalise advice."""

    temperature: float | None = None
    feels_like: float | None = None
    condition: str | None = None
    description: str | None = None
    wind_speed: float | None = None
    humidity: float | None = None
    uv_index: float = 0
    # The provider gives no day/night flag.
    is_day: bool = True


class ForecastSummary(_CamelModel):
    """Outlook for the entry following the current reading."""

    condition: str | None = None
    description: str | None = None
    temp_min: float | None = None
    temp_max: float | None = None
    humidity: float | None = None


class NormalizedContext(_CamelModel):
    """Single internal view of either payload shape."""

    location: str
    current: CurrentConditions
    forecast_summary: ForecastSummary | None = None
