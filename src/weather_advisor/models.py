"""Outward response envelopes shared by the HTTP service and the CLI."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .intent.models import Intent
from .weather.models import CurrentVariant, ForecastVariant


class _Envelope(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class SuccessEnvelope(_Envelope):
    """Interpreted request, raw provider payload and advice text."""

    ok: Literal[True] = True
    request_details: Intent
    weather_data: dict[str, Any] = Field(description="Provider JSON exactly as received")
    friendly_advice: str = Field(min_length=1)


class FailureEnvelope(_Envelope):
    """Error body returned for rejected or failed requests."""

    ok: Literal[False] = False
    message: str


def assemble_response(
    intent: Intent,
    payload: CurrentVariant | ForecastVariant,
    advice: str,
) -> SuccessEnvelope:
    """Combine the pipeline outputs; upstream stages already enforced their contracts."""
    return SuccessEnvelope(
        request_details=intent,
        weather_data=payload.raw,
        friendly_advice=advice,
    )
