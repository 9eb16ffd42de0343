"""Provider-agnostic weather interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from .models import CurrentVariant, ForecastVariant


class WeatherProvider(ABC):
    """Base contract for weather providers used by the pipeline."""

    @abstractmethod
    async def fetch(
        self,
        latitude: Any,
        longitude: Any,
        request_type: Any,
    ) -> CurrentVariant | ForecastVariant:
        """Fetch the raw payload for a "current" or "forecast" request."""
