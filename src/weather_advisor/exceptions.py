"""Application exception classes."""


class ConfigError(Exception):
    """Raised when configuration is invalid or incomplete."""


class WeatherAdvisorError(Exception):
    """Base class for failures surfaced by the weather-info pipeline."""


class ValidationError(WeatherAdvisorError):
    """Raised for a bad query or an intent that cannot be used for retrieval."""


class InterpretationError(WeatherAdvisorError):
    """Raised when the query could not be turned into a structured intent."""


class ExtractionError(InterpretationError):
    """Raised when no usable intent object could be pulled from a model reply."""

    def __init__(self, reason: str, *, raw_slice: str | None = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.raw_slice = raw_slice


class RetrievalError(WeatherAdvisorError):
    """Raised when weather provider requests fail or return unusable data."""


class LLMRequestError(Exception):
    """Raised for chat-completion failures with status metadata."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
