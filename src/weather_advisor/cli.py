"""Terminal surface: ask a weather question and render the answer."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from collections.abc import Mapping
from datetime import tzinfo
from typing import Any
from zoneinfo import ZoneInfo

from rich.console import Console
from rich.table import Table

from .config import load_settings
from .exceptions import ConfigError, ValidationError, WeatherAdvisorError
from .log_setup import setup_logger
from .models import SuccessEnvelope
from .pipeline import WeatherInfoPipeline
from .weather.grouping import entry_datetime, group_forecasts_by_day


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Ask for current weather or a forecast in plain language."
    )
    parser.add_argument("query", nargs="+", help='e.g. "Will it rain in Paris tomorrow?"')
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the response envelope as JSON instead of tables.",
    )
    parser.add_argument(
        "--max-print",
        type=int,
        default=None,
        help="Maximum forecast entries shown per day.",
    )
    return parser.parse_args(argv)


def _fmt(value: Any, suffix: str = "", precision: int = 1) -> str:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return "-" if value is None else f"{value}{suffix}"
    return f"{value:.{precision}f}{suffix}"


def _print_interpretation(console: Console, envelope: SuccessEnvelope, query: str) -> None:
    intent = envelope.request_details
    table = Table(title="Interpreted Request", show_header=False)
    table.add_column("Field")
    table.add_column("Value", overflow="fold")
    table.add_row("Query", query)
    table.add_row("Location", intent.location_name)
    table.add_row(
        "Coordinates",
        f"Lat: {_fmt(intent.latitude, precision=4)}, Lon: {_fmt(intent.longitude, precision=4)}",
    )
    table.add_row("Request Type", str(intent.request_type))
    console.print(table)
    console.print(
        f"Tool call: {intent.tool_name}(latitude={_fmt(intent.latitude, precision=4)}, "
        f"longitude={_fmt(intent.longitude, precision=4)})"
    )


def _print_current(
    console: Console, current: Mapping[str, Any], location: str, tz: tzinfo | None
) -> None:
    table = Table(title=f"Current Weather in {current.get('location_name') or location}")
    table.add_column("Metric")
    table.add_column("Value", overflow="fold")
    condition = " ".join(
        part for part in [current.get("condition"), current.get("condition_desc")] if part
    )
    moment = entry_datetime(current, tz)
    table.add_row("Temperature", _fmt(current.get("temperature"), "°C"))
    table.add_row("Condition", condition or "-")
    table.add_row("Feels Like", _fmt(current.get("feels_like"), "°C"))
    table.add_row(
        "Min/Max",
        f"{_fmt(current.get('temperature_min'), '°C')} / {_fmt(current.get('temperature_max'), '°C')}",
    )
    table.add_row("Humidity", _fmt(current.get("humidity"), "%", precision=0))
    table.add_row("Pressure", _fmt(current.get("pressure"), " hPa", precision=0))
    table.add_row(
        "Wind",
        f"{_fmt(current.get('wind_speed'), ' m/s')} from {_fmt(current.get('wind_direction'), '°', 0)}",
    )
    table.add_row("UV Index", _fmt(current.get("uv")))
    table.add_row("Rain (1h)", _fmt(current.get("rain", 0), " mm"))
    table.add_row("Timestamp", moment.isoformat() if moment else _fmt(current.get("timestamp")))
    console.print(table)


def _print_forecast(
    console: Console,
    entries: list[Any],
    location: str,
    tz: tzinfo | None,
    max_print: int | None,
) -> None:
    records = [entry for entry in entries if isinstance(entry, Mapping)]
    first = records[0] if records else {}
    console.print(f"Forecast for {first.get('location_name') or location}")
    if not records:
        console.print("No forecast data available.")
        return

    for day, day_entries in group_forecasts_by_day(records, tz=tz).items():
        table = Table(title=day)
        table.add_column("Time")
        table.add_column("Temp")
        table.add_column("Condition", overflow="fold")
        table.add_column("Humidity")
        table.add_column("Wind")
        table.add_column("Feels Like")
        shown = day_entries[:max_print] if max_print else day_entries
        for entry in shown:
            moment = entry_datetime(entry, tz)
            table.add_row(
                moment.strftime("%I:%M %p") if moment else "-",
                _fmt(entry.get("temperature"), "°C"),
                entry.get("condition") or "-",
                _fmt(entry.get("humidity"), "%", precision=0),
                _fmt(entry.get("wind_speed"), " m/s"),
                _fmt(entry.get("feels_like"), "°C"),
            )
        console.print(table)


def render_envelope(
    console: Console,
    envelope: SuccessEnvelope,
    query: str,
    *,
    tz: tzinfo | None = None,
    max_print: int | None = None,
) -> None:
    """Print advice, interpretation and weather tables for a successful run."""
    for line in envelope.friendly_advice.splitlines():
        console.print(line)
    _print_interpretation(console, envelope, query)

    intent = envelope.request_details
    data = envelope.weather_data.get("data")
    if intent.kind == "current" and isinstance(data, dict):
        _print_current(console, data, intent.location_name, tz)
    elif intent.kind == "forecast" and isinstance(data, list):
        _print_forecast(console, data, intent.location_name, tz, max_print)
    else:
        console.print("Received unexpected data format from the weather provider.")


def main(argv: list[str] | None = None) -> int:
    """Run one query through the pipeline and print the result."""
    args = parse_args(argv)
    logger = setup_logger()
    console = Console()
    query = " ".join(args.query)

    if args.max_print is not None and args.max_print <= 0:
        logger.error("--max-print must be > 0 when provided.")
        return 3

    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        return 2
    logger.setLevel(settings.log_level.upper())

    pipeline = WeatherInfoPipeline.from_settings(settings, logger)
    try:
        envelope = asyncio.run(pipeline.run(query))
    except ValidationError as exc:
        logger.error("Invalid request: %s", exc)
        return 3
    except WeatherAdvisorError as exc:
        logger.error("Weather request failure: %s", exc)
        return 4
    except Exception as exc:
        logger.exception("Unexpected CLI failure: %s", exc)
        return 99

    if args.json:
        console.print_json(json.dumps(envelope.to_json_dict()))
        return 0

    tz = ZoneInfo(settings.display_timezone) if settings.display_timezone else None
    render_envelope(console, envelope, query, tz=tz, max_print=args.max_print)
    return 0


if __name__ == "__main__":
    sys.exit(main())
