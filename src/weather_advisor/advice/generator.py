"""Advice stage: personalised guidance, with a templated fallback."""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict

from ..config import Settings
from ..exceptions import LLMRequestError
from ..llm_client import ChatCompletionClient
from ..weather.models import NormalizedContext

ADVICE_PROMPT = """\
You are a friendly weather companion. The user asked: "{query}"

Weather for {location}:
- Now: {condition} ({description}), {temperature}°C, feels like {feels_like}°C
- Humidity: {humidity}%, wind: {wind_speed} m/s, UV index: {uv_index}
{outlook}
Write short, personalised, emoji-friendly advice covering:
1. What to wear
2. Activities that suit this weather
3. Health tips (hydration, sun, cold, air)
4. A mood boost for the day
{outlook_instruction}
Keep each point to one or two lines. Do not repeat the raw numbers as a list.
"""

_OUTLOOK_LINE = (
    "- Tomorrow: {condition} ({description}), "
    "{temp_min}°C to {temp_max}°C, humidity {humidity}%\n"
)
_OUTLOOK_INSTRUCTION = "5. One line on tomorrow's outlook\n"


def _fmt(value: object) -> str:
    if value is None:
        return "N/A"
    if isinstance(value, float):
        return f"{value:.1f}"
    return str(value)


def build_advice_prompt(context: NormalizedContext, query: str, location_name: str) -> str:
    current = context.current
    outlook = ""
    outlook_instruction = ""
    summary = context.forecast_summary
    if summary is not None:
        outlook = _OUTLOOK_LINE.format(
            condition=_fmt(summary.condition),
            description=_fmt(summary.description),
            temp_min=_fmt(summary.temp_min),
            temp_max=_fmt(summary.temp_max),
            humidity=_fmt(summary.humidity),
        )
        outlook_instruction = _OUTLOOK_INSTRUCTION
    return ADVICE_PROMPT.format(
        query=query,
        location=location_name,
        condition=_fmt(current.condition),
        description=_fmt(current.description),
        temperature=_fmt(current.temperature),
        feels_like=_fmt(current.feels_like),
        humidity=_fmt(current.humidity),
        wind_speed=_fmt(current.wind_speed),
        uv_index=_fmt(current.uv_index),
        outlook=outlook,
        outlook_instruction=outlook_instruction,
    )


def fallback_advice(context: NormalizedContext, location_name: str) -> str:
    """Deterministic advice built only from the current reading."""
    current = context.current
    description = current.description or current.condition or "mixed conditions"
    return (
        f"Here's the latest for {location_name}: {description}, "
        f"{_fmt(current.temperature)}°C (feels like {_fmt(current.feels_like)}°C). "
        "Dress for the conditions and enjoy your day! 🌤️"
    )


class AdviceResult(BaseModel):
    """Outcome of the model call: text on success, error otherwise."""

    model_config = ConfigDict(frozen=True)

    text: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.text is not None


class AdviceGenerator:
    """Produces friendly advice; never raises to its caller."""

    def __init__(
        self,
        settings: Settings,
        logger: logging.Logger,
        llm: ChatCompletionClient,
    ) -> None:
        self.settings = settings
        self.logger = logger
        self.llm = llm

    async def generate(self, context: NormalizedContext, query: str, location_name: str) -> str:
        result = await self.request_advice(context, query, location_name)
        if result.ok and result.text:
            return result.text
        self.logger.warning(
            "Advice generation failed, using fallback text: %s",
            result.error,
            extra={"stage": "advise"},
        )
        return fallback_advice(context, location_name)

    async def request_advice(
        self, context: NormalizedContext, query: str, location_name: str
    ) -> AdviceResult:
        """Ask the model for advice; failures come back as ``AdviceResult.error``."""
        prompt = build_advice_prompt(context, query, location_name)
        try:
            content = await self.llm.complete(
                prompt,
                temperature=self.settings.advice_temperature,
                max_tokens=self.settings.advice_max_tokens,
            )
        except LLMRequestError as exc:
            return AdviceResult(error=str(exc))
        text = content.strip()
        if not text:
            return AdviceResult(error="empty advice text")
        return AdviceResult(text=text)
