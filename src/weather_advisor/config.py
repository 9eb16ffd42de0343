"""Typed settings loader for the weather advisor service."""

from __future__ import annotations

import logging
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import AnyHttpUrl, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError


class Settings(BaseSettings):
    """Application settings loaded from environment variables and `.env`.

    Built once at startup and handed to each component; instances are frozen.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    gaia_api_endpoint: AnyHttpUrl = Field(alias="GAIA_API_ENDPOINT")
    gaia_api_key: str = Field(alias="GAIA_API_KEY", repr=False)
    gaia_model_name: str = Field(alias="GAIA_MODEL_NAME")
    llm_timeout_seconds: float | None = Field(default=None, alias="LLM_TIMEOUT_SECONDS")

    intent_temperature: float = Field(default=0.2, alias="INTENT_TEMPERATURE")
    intent_max_tokens: int = Field(default=150, alias="INTENT_MAX_TOKENS")
    advice_temperature: float = Field(default=0.7, alias="ADVICE_TEMPERATURE")
    advice_max_tokens: int = Field(default=400, alias="ADVICE_MAX_TOKENS")

    nubila_api_key: str = Field(alias="NUBILA_API_KEY", repr=False)
    nubila_base_url: AnyHttpUrl = Field(
        default="https://api.nubila.ai/api/v1",
        alias="NUBILA_BASE_URL",
        validate_default=True,
    )
    nubila_timeout_seconds: float | None = Field(default=None, alias="NUBILA_TIMEOUT_SECONDS")

    host: str = Field(default="127.0.0.1", alias="HOST")
    port: int = Field(default=3000, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    display_timezone: str | None = Field(default=None, alias="DISPLAY_TIMEZONE")

    @field_validator(
        "llm_timeout_seconds",
        "nubila_timeout_seconds",
        "display_timezone",
        mode="before",
    )
    @classmethod
    def empty_string_to_none(cls, value: Any) -> Any:
        """Treat empty env-string values as unset optional settings."""
        if isinstance(value, str) and value.strip() == "":
            return None
        return value

    @model_validator(mode="after")
    def validate_values(self) -> Settings:
        """Reject blank credentials and out-of-range tuning values."""
        if not self.gaia_api_key.strip():
            raise ValueError("GAIA_API_KEY must not be empty.")
        if not self.gaia_model_name.strip():
            raise ValueError("GAIA_MODEL_NAME must not be empty.")
        if not self.nubila_api_key.strip():
            raise ValueError("NUBILA_API_KEY must not be empty.")
        if self.llm_timeout_seconds is not None and self.llm_timeout_seconds <= 0:
            raise ValueError("LLM_TIMEOUT_SECONDS must be > 0 when set.")
        if self.nubila_timeout_seconds is not None and self.nubila_timeout_seconds <= 0:
            raise ValueError("NUBILA_TIMEOUT_SECONDS must be > 0 when set.")
        if not (0 <= self.intent_temperature <= 2):
            raise ValueError("INTENT_TEMPERATURE must be between 0 and 2.")
        if not (0 <= self.advice_temperature <= 2):
            raise ValueError("ADVICE_TEMPERATURE must be between 0 and 2.")
        if self.intent_max_tokens <= 0:
            raise ValueError("INTENT_MAX_TOKENS must be > 0.")
        if self.advice_max_tokens <= 0:
            raise ValueError("ADVICE_MAX_TOKENS must be > 0.")
        if not (0 < self.port < 65536):
            raise ValueError("PORT must be between 1 and 65535.")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"LOG_LEVEL {self.log_level!r} is not a known logging level.")
        if self.display_timezone is not None:
            try:
                ZoneInfo(self.display_timezone)
            except (ZoneInfoNotFoundError, ValueError) as exc:
                raise ValueError(
                    f"DISPLAY_TIMEZONE {self.display_timezone!r} is not a known time zone."
                ) from exc
        return self

    def safe_summary(self) -> dict[str, Any]:
        """Return config summary safe for logging (no credentials)."""
        return {
            "llm_endpoint": str(self.gaia_api_endpoint),
            "llm_model": self.gaia_model_name,
            "llm_timeout_seconds": self.llm_timeout_seconds,
            "intent_temperature": self.intent_temperature,
            "intent_max_tokens": self.intent_max_tokens,
            "advice_temperature": self.advice_temperature,
            "advice_max_tokens": self.advice_max_tokens,
            "weather_base_url": str(self.nubila_base_url),
            "weather_timeout_seconds": self.nubila_timeout_seconds,
            "host": self.host,
            "port": self.port,
            "display_timezone": self.display_timezone,
        }


def load_settings() -> Settings:
    """Load and validate settings, raising ConfigError on failure."""
    try:
        return Settings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed reading environment/.env: {exc}") from exc
