"""Best-effort extraction of an intent object from free-text model replies."""

from __future__ import annotations

import json
import logging
import math
from typing import Any

from pydantic import ValidationError

from .models import Intent, Parsed, ParseFailure, ParseResult

NO_JSON_OBJECT = "no JSON object found"
MALFORMED_JSON = "malformed JSON"
MISSING_FIELDS = "missing required fields (locationName, requestType)"

COORDINATES_DROPPED = "model did not provide valid coordinates; latitude/longitude set to null"


def slice_json_object(text: str) -> str | None:
    """Return the text from the first ``{`` to the last ``}`` inclusive.

    This is a plain scan, not brace matching: prose containing stray braces
    after the object will be swept into the slice.
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end < start:
        return None
    return text[start : end + 1]


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


class IntentReplyParser:
    """Turn a model's reply into ``Parsed`` or ``ParseFailure``; never raises."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger("weather_advisor.intent")

    def parse(self, text: str) -> ParseResult:
        raw_slice = slice_json_object(text)
        if raw_slice is None:
            return ParseFailure(reason=NO_JSON_OBJECT, raw_slice=text)

        try:
            candidate = json.loads(raw_slice)
        except ValueError:
            return ParseFailure(reason=MALFORMED_JSON, raw_slice=raw_slice)

        location_name = candidate.get("locationName")
        request_type = candidate.get("requestType")
        if (
            not isinstance(location_name, str)
            or not location_name.strip()
            or "requestType" not in candidate
        ):
            return ParseFailure(reason=MISSING_FIELDS, raw_slice=raw_slice)

        warnings: list[str] = []
        latitude = candidate.get("latitude")
        longitude = candidate.get("longitude")
        if not (_is_number(latitude) and _is_number(longitude)):
            # Dropped as a pair.
            self.logger.warning(
                "Model gave no usable coordinates for %r (lat=%r lon=%r)",
                location_name,
                latitude,
                longitude,
            )
            warnings.append(COORDINATES_DROPPED)
            latitude = None
            longitude = None

        try:
            intent = Intent(
                location_name=location_name,
                latitude=latitude,
                longitude=longitude,
                request_type=request_type,
            )
        except ValidationError as exc:
            self.logger.warning("Intent object failed validation: %s", exc)
            return ParseFailure(reason=MISSING_FIELDS, raw_slice=raw_slice)

        return Parsed(intent=intent, warnings=tuple(warnings))
