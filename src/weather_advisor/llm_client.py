"""Async adapter for the chat-completion endpoint used by the language-model stages."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .config import Settings
from .exceptions import LLMRequestError
from .redaction import sanitize_headers, sanitize_text


class ChatCompletionClient:
    """Sends single-message chat completions and returns the reply text.

    One request per call; failures are never retried. A fresh
    ``httpx.AsyncClient`` is opened per call so concurrent pipeline runs
    share nothing but the immutable settings.
    """

    def __init__(
        self,
        settings: Settings,
        logger: logging.Logger,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self.logger = logger
        self._transport = transport

    async def complete(self, prompt: str, *, temperature: float, max_tokens: int) -> str:
        """Return ``choices[0].message.content`` for a single user prompt."""
        body = {
            "model": self.settings.gaia_model_name,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.settings.gaia_api_key}",
        }
        url = str(self.settings.gaia_api_endpoint)
        self.logger.debug(
            "Chat completion POST %s model=%s headers=%s",
            url,
            self.settings.gaia_model_name,
            sanitize_headers(headers),
        )
        try:
            async with httpx.AsyncClient(
                timeout=self.settings.llm_timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post(url, json=body, headers=headers)
        except httpx.HTTPError as exc:
            raise LLMRequestError(
                f"Chat completion request failed ({type(exc).__name__}): "
                f"{self._sanitize(str(exc))}"
            ) from exc

        if response.is_error:
            self.logger.error(
                "Chat completion error (%d): %s",
                response.status_code,
                self._sanitize(response.text[:300]),
                extra={"status_code": response.status_code},
            )
            raise LLMRequestError(
                f"Chat completion request failed with status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            payload: Any = response.json()
        except ValueError as exc:
            raise LLMRequestError(
                "Chat completion response was not valid JSON.",
                status_code=response.status_code,
            ) from exc

        content = self._extract_content(payload)
        if content is None:
            self.logger.error("Chat completion response missing content")
            raise LLMRequestError(
                "Invalid response format from language model: No content.",
                status_code=response.status_code,
            )
        return content

    def _sanitize(self, text: str) -> str:
        return sanitize_text(text, secrets=(self.settings.gaia_api_key,))

    @staticmethod
    def _extract_content(payload: Any) -> str | None:
        if not isinstance(payload, dict):
            return None
        choices = payload.get("choices")
        if not isinstance(choices, list) or not choices:
            return None
        first = choices[0]
        message = first.get("message") if isinstance(first, dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if isinstance(content, str) and content:
            return content
        return None
