"""Bucket forecast entries into calendar-day groups with human labels."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date, datetime, timedelta, tzinfo
from typing import Any

TODAY_LABEL = "Today"
TOMORROW_LABEL = "Tomorrow"
UNKNOWN_DAY_LABEL = "Unknown date"


def format_day_label(day: date) -> str:
    """Weekday label for days beyond tomorrow, e.g. ``Wednesday, Oct 21``."""
    return f"{day:%A}, {day:%b} {day.day}"


def entry_datetime(entry: Mapping[str, Any], tz: tzinfo | None = None) -> datetime | None:
    """Aware datetime for an entry's epoch-seconds ``timestamp``, if usable.

    With no ``tz`` the system local zone is applied per timestamp, so each
    entry gets the UTC offset in force at that instant.
    """
    timestamp = entry.get("timestamp")
    if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
        return None
    try:
        if tz is None:
            return datetime.fromtimestamp(timestamp).astimezone()
        return datetime.fromtimestamp(timestamp, tz)
    except (OverflowError, OSError, ValueError):
        return None


def group_forecasts_by_day(
    entries: Iterable[Mapping[str, Any]],
    *,
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> dict[str, list[Mapping[str, Any]]]:
    """Group entries under "Today", "Tomorrow" or a weekday label.

    Groups come out in the order their label is first seen, which is only
    chronological when ``entries`` is sorted by timestamp.
    """
    if now is None:
        now = datetime.now(tz)
    reference = now.astimezone(tz)
    today = reference.date()
    tomorrow = today + timedelta(days=1)

    groups: dict[str, list[Mapping[str, Any]]] = {}
    for entry in entries:
        moment = entry_datetime(entry, tz) if isinstance(entry, Mapping) else None
        if moment is None:
            label = UNKNOWN_DAY_LABEL
        elif moment.date() == today:
            label = TODAY_LABEL
        elif moment.date() == tomorrow:
            label = TOMORROW_LABEL
        else:
            label = format_day_label(moment.date())
        groups.setdefault(label, []).append(entry)
    return groups
