"""Typed models for query interpretation results."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, JsonValue, model_validator
from pydantic.alias_generators import to_camel

from ..exceptions import ExtractionError

RequestKind = Literal["current", "forecast"]


class Intent(BaseModel):
    """Structured interpretation of a free-text weather query."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    location_name: str = Field(min_length=1)
    latitude: float | None = None
    longitude: float | None = None
    # Kept exactly as the model produced it; ``kind`` is what retrieval uses.
    request_type: JsonValue

    @model_validator(mode="after")
    def _coordinates_paired(self) -> Intent:
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must both be set or both be null")
        return self

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def kind(self) -> RequestKind:
        return "forecast" if self.request_type == "forecast" else "current"

    @property
    def tool_name(self) -> str:
        """Name of the weather tool this intent maps onto."""
        return "get_weather_forecast" if self.kind == "forecast" else "get_current_weather"


class Parsed(BaseModel):
    """Successful extraction of an intent from a model reply."""

    model_config = ConfigDict(frozen=True)

    status: Literal["parsed"] = "parsed"
    intent: Intent
    warnings: tuple[str, ...] = ()


class ParseFailure(BaseModel):
    """Failed extraction, with the text slice that could not be used."""

    model_config = ConfigDict(frozen=True)

    status: Literal["failed"] = "failed"
    reason: str
    raw_slice: str | None = None

    def to_error(self) -> ExtractionError:
        return ExtractionError(self.reason, raw_slice=self.raw_slice)


ParseResult = Parsed | ParseFailure
