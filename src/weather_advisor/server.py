"""HTTP surface: FastAPI app exposing the weather-info pipeline."""

from __future__ import annotations

import logging
import sys
from typing import Any

import uvicorn
from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse

from .config import Settings, load_settings
from .exceptions import ConfigError, ValidationError, WeatherAdvisorError
from .log_setup import route_uvicorn_logs, setup_logger
from .models import FailureEnvelope
from .pipeline import MISSING_QUERY_MESSAGE, WeatherInfoPipeline

INTERNAL_ERROR_MESSAGE = "An internal server error occurred."

router = APIRouter()


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=FailureEnvelope(message=message).to_json_dict(),
    )


@router.post("/api/weather-info")
async def weather_info(request: Request) -> JSONResponse:
    """
    Request Body:
    {
      "query": "What's the weather like in Paris tomorrow?"
    }
    """
    pipeline: WeatherInfoPipeline = request.app.state.pipeline
    logger: logging.Logger = request.app.state.logger

    try:
        body: Any = await request.json()
    except ValueError:
        return _failure(400, MISSING_QUERY_MESSAGE)
    query = body.get("query") if isinstance(body, dict) else None

    try:
        envelope = await pipeline.run(query)
    except ValidationError as exc:
        return _failure(400, str(exc))
    except WeatherAdvisorError as exc:
        logger.error("Error processing weather request: %s", exc)
        return _failure(500, str(exc) or INTERNAL_ERROR_MESSAGE)
    except Exception as exc:
        logger.exception("Unexpected failure processing weather request: %s", exc)
        return _failure(500, INTERNAL_ERROR_MESSAGE)

    return JSONResponse(content=envelope.to_json_dict())


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


def create_app(
    settings: Settings | None = None,
    pipeline: WeatherInfoPipeline | None = None,
    logger: logging.Logger | None = None,
) -> FastAPI:
    """Build the app; settings are loaded from the environment when not given."""
    if pipeline is None:
        settings = settings or load_settings()
        logger = logger or setup_logger(level=settings.log_level.upper())
        pipeline = WeatherInfoPipeline.from_settings(settings, logger)
    logger = logger or pipeline.logger

    app = FastAPI(title="Weather Advisor API")
    app.state.pipeline = pipeline
    app.state.logger = logger
    app.include_router(router)
    return app


def main() -> int:
    """Serve the API with uvicorn on HOST/PORT."""
    logger = setup_logger()
    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        return 2

    level = settings.log_level.upper()
    logger.setLevel(level)
    route_uvicorn_logs(level)
    logger.info("Starting weather advisor: %s", settings.safe_summary())
    app = create_app(settings=settings, logger=logger)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
