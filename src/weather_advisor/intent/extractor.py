"""Query interpretation stage: free text in, validated ``Intent`` out."""

from __future__ import annotations

import logging

from ..config import Settings
from ..exceptions import InterpretationError, LLMRequestError
from ..llm_client import ChatCompletionClient
from .models import Intent, ParseFailure
from .parser import IntentReplyParser

EXTRACTION_PROMPT = """\
Analyze the user's weather request. Extract the location name, its approximate latitude, and longitude.
Also determine if the user wants 'current' weather or a 'forecast'.

Respond ONLY with a valid JSON object containing:
- "locationName": string (the extracted location)
- "latitude": number | null (approximate latitude, null if unknown)
- "longitude": number | null (approximate longitude, null if unknown)
- "requestType": "current" | "forecast" (the type of weather info requested)

User Request: "{query}"

JSON Response:
"""


def build_extraction_prompt(query: str) -> str:
    return EXTRACTION_PROMPT.format(query=query)


class IntentExtractor:
    """Asks the language model to interpret a query and validates its answer."""

    def __init__(
        self,
        settings: Settings,
        logger: logging.Logger,
        llm: ChatCompletionClient,
        parser: IntentReplyParser | None = None,
    ) -> None:
        self.settings = settings
        self.logger = logger
        self.llm = llm
        self.parser = parser or IntentReplyParser(logger=logger)

    async def extract(self, query: str) -> Intent:
        """Interpret ``query``; every failure surfaces as ``InterpretationError``."""
        self.logger.info("Interpreting query: %r", query, extra={"stage": "interpret"})
        try:
            content = await self.llm.complete(
                build_extraction_prompt(query),
                temperature=self.settings.intent_temperature,
                max_tokens=self.settings.intent_max_tokens,
            )
        except LLMRequestError as exc:
            raise InterpretationError(f"Could not analyze query: {exc}") from exc

        self.logger.debug("Raw interpretation reply: %s", content)
        result = self.parser.parse(content)
        if isinstance(result, ParseFailure):
            self.logger.error(
                "Could not extract intent (%s); offending text: %r",
                result.reason,
                result.raw_slice,
            )
            error = result.to_error()
            raise InterpretationError(f"Could not analyze query: {error}") from error

        intent = result.intent
        self.logger.info(
            "Interpreted query as location=%r lat=%s lon=%s requestType=%r",
            intent.location_name,
            intent.latitude,
            intent.longitude,
            intent.request_type,
            extra={"stage": "interpret"},
        )
        return intent
