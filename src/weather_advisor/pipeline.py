"""Interpret → retrieve → explain pipeline behind ``/api/weather-info``."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .advice.generator import AdviceGenerator
from .config import Settings
from .exceptions import ValidationError
from .intent.extractor import IntentExtractor
from .llm_client import ChatCompletionClient
from .models import SuccessEnvelope, assemble_response
from .weather.base import WeatherProvider
from .weather.normalizer import normalize_weather
from .weather.nubila import NubilaWeatherProvider

MISSING_QUERY_MESSAGE = "Query parameter is required."


class WeatherInfoPipeline:
    """Runs the stages strictly in order for one query.

    Holds no per-request state, so one instance serves concurrent runs.
    Interpretation and retrieval failures propagate; advice failures do not.
    """

    def __init__(
        self,
        settings: Settings,
        logger: logging.Logger,
        extractor: IntentExtractor,
        provider: WeatherProvider,
        advisor: AdviceGenerator,
    ) -> None:
        self.settings = settings
        self.logger = logger
        self.extractor = extractor
        self.provider = provider
        self.advisor = advisor

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        logger: logging.Logger,
        *,
        llm_transport: httpx.AsyncBaseTransport | None = None,
        weather_transport: httpx.AsyncBaseTransport | None = None,
    ) -> WeatherInfoPipeline:
        llm = ChatCompletionClient(settings=settings, logger=logger, transport=llm_transport)
        return cls(
            settings=settings,
            logger=logger,
            extractor=IntentExtractor(settings=settings, logger=logger, llm=llm),
            provider=NubilaWeatherProvider(
                settings=settings, logger=logger, transport=weather_transport
            ),
            advisor=AdviceGenerator(settings=settings, logger=logger, llm=llm),
        )

    async def run(self, query: Any) -> SuccessEnvelope:
        """Process one query; raises ValidationError, InterpretationError or RetrievalError."""
        if not isinstance(query, str) or not query.strip():
            raise ValidationError(MISSING_QUERY_MESSAGE)

        intent = await self.extractor.extract(query)
        if not intent.has_coordinates:
            self.logger.warning(
                "No coordinates for %r; skipping weather retrieval", intent.location_name
            )
            raise ValidationError(
                f'Could not determine valid coordinates for "{intent.location_name or query}". '
                "Please be more specific."
            )

        payload = await self.provider.fetch(intent.latitude, intent.longitude, intent.kind)
        context = normalize_weather(payload, intent.location_name)
        advice = await self.advisor.generate(context, query, intent.location_name)
        self.logger.info(
            "Weather request complete for %r (%s)", intent.location_name, payload.kind
        )
        return assemble_response(intent, payload, advice)
