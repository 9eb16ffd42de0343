"""Nubila (api.nubila.ai) weather provider implementation."""

from __future__ import annotations

import logging
import math
from typing import Any

import httpx

from ..config import Settings
from ..exceptions import RetrievalError
from ..redaction import sanitize_headers, sanitize_text
from .base import WeatherProvider
from .models import CurrentVariant, ForecastVariant, classify_payload

_ERROR_PREFIX = "Could not fetch weather data"


class NubilaWeatherProvider(WeatherProvider):
    """Calls Nubila's current or forecast endpoint and returns the raw payload.

    A single best-effort GET per call: no retry, and no timeout unless
    NUBILA_TIMEOUT_SECONDS is configured.
    """

    provider_name = "nubila"

    def __init__(
        self,
        settings: Settings,
        logger: logging.Logger,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self.logger = logger
        self._transport = transport

    def endpoint_url(self, request_type: Any) -> str:
        endpoint = "forecast" if request_type == "forecast" else "weather"
        return f"{str(self.settings.nubila_base_url).rstrip('/')}/{endpoint}"

    async def fetch(
        self,
        latitude: Any,
        longitude: Any,
        request_type: Any,
    ) -> CurrentVariant | ForecastVariant:
        """Fetch current conditions or a forecast for a coordinate pair."""
        self._validate_coordinates(latitude, longitude)
        url = self.endpoint_url(request_type)
        self.logger.info(
            "Querying Nubila %s (lat=%s lon=%s requestType=%r)",
            url,
            latitude,
            longitude,
            request_type,
            extra={"stage": "retrieve", "request_type": str(request_type)},
        )

        payload = await self._request_json(url, params={"lat": latitude, "lon": longitude})
        variant = classify_payload(payload)
        if variant is None:
            raise RetrievalError(
                f"{_ERROR_PREFIX}: unexpected payload shape "
                f"(data is {type(payload.get('data')).__name__})."
            )
        self.logger.info(
            "Nubila returned %s payload (%s)",
            variant.kind,
            f"{len(variant.data)} entries" if isinstance(variant, ForecastVariant) else "1 record",
        )
        return variant

    @staticmethod
    def _validate_coordinates(latitude: Any, longitude: Any) -> None:
        for value in (latitude, longitude):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise RetrievalError("invalid coordinates")
            try:
                finite = math.isfinite(value)
            except OverflowError:
                finite = False
            if not finite:
                raise RetrievalError("invalid coordinates")

    def _sanitize(self, text: str) -> str:
        return sanitize_text(text, secrets=(self.settings.nubila_api_key,))

    async def _request_json(self, url: str, params: dict[str, Any]) -> dict[str, Any]:
        headers = {"X-Api-Key": self.settings.nubila_api_key}
        self.logger.debug("GET %s params=%s headers=%s", url, params, sanitize_headers(headers))
        try:
            async with httpx.AsyncClient(
                timeout=self.settings.nubila_timeout_seconds,
                transport=self._transport,
                headers=headers,
            ) as client:
                response = await client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise RetrievalError(
                f"{_ERROR_PREFIX}: request failed ({type(exc).__name__}): "
                f"{self._sanitize(str(exc))}"
            ) from exc

        try:
            payload: Any = response.json()
        except ValueError as exc:
            raise RetrievalError(
                f"{_ERROR_PREFIX}: non-JSON response with status {response.status_code}."
            ) from exc

        if not isinstance(payload, dict):
            raise RetrievalError(
                f"{_ERROR_PREFIX}: unexpected payload type {type(payload).__name__}."
            )

        if response.is_error or payload.get("ok") is False:
            self.logger.error(
                "Nubila error (%d): %s",
                response.status_code,
                self._sanitize(response.text[:300]),
                extra={"stage": "retrieve", "status_code": response.status_code},
            )
            message = payload.get("message")
            if not isinstance(message, str) or not message.strip():
                message = f"Weather provider request failed with status {response.status_code}"
            raise RetrievalError(f"{_ERROR_PREFIX}: {message}")

        return payload
