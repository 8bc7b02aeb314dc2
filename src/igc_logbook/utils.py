"""Display formatting helpers shared by the logbook and the scripts."""

from __future__ import annotations

import datetime
import logging
import re

from igc_logbook.units import TimeFormat, time_format

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"

_DURATION_RE = re.compile(r"^\s*(-?\d+)h(-?\d+)m\s*$")


def format_duration(duration: datetime.timedelta) -> str:
    """Format *duration* as ``"XhYm"``, truncating seconds.

    Examples: ``"0h0m"``, ``"1h45m"``, ``"12h3m"``.
    """
    total_minutes = int(duration.total_seconds() / 60)
    hours = int(total_minutes / 60)
    minutes = total_minutes - hours * 60
    return f"{hours}h{minutes}m"


def parse_duration(text: str) -> datetime.timedelta:
    """Inverse of :func:`format_duration`.

    Raises
    ------
    ValueError
        If *text* is not of the form ``"XhYm"``.
    """
    match = _DURATION_RE.match(text or "")
    if match is None:
        raise ValueError(f"Invalid duration format: {text!r}")
    hours, minutes = int(match.group(1)), int(match.group(2))
    return datetime.timedelta(hours=hours, minutes=minutes)


def format_coordinates(lat: float, lon: float) -> str:
    """``"45.814,6.246"``: three decimals, comma-separated, no space."""
    return f"{lat:.3f},{lon:.3f}"


def format_time(value: datetime.datetime, fmt: str) -> str:
    """Clock time of a fix, ``"13:04:05"`` or ``"1:04:05 PM"``."""
    if time_format(fmt) is TimeFormat.AMPM:
        hour = value.hour % 12 or 12
        return f"{hour}:{value:%M:%S %p}"
    return f"{value:%H:%M:%S}"


def format_date(value: datetime.date | None) -> str:
    return value.strftime(DATE_FORMAT) if value is not None else ""


def parse_date(text: str) -> datetime.date:
    """Parse a ``YYYY-MM-DD`` display date; raises ``ValueError`` otherwise."""
    return datetime.datetime.strptime(text, DATE_FORMAT).date()
