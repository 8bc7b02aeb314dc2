"""Unit selection and conversion for logbook output.

Statistics are computed in metres, km/h and m/s. Everything shown to the
user goes through the helpers below, which accept the short unit codes used
on the command line and in the config file. Unknown codes fall back to the
metric option of each family.
"""

from __future__ import annotations

import typing
from enum import StrEnum

METERS_TO_FEET = 3.28084
KMH_TO_MPH = 0.621371
KMH_TO_KNOTS = 0.539957
MS_TO_KMH = 3.6


class AltitudeUnit(StrEnum):
    METERS = "m"
    FEET = "ft"


class SpeedUnit(StrEnum):
    KMH = "kmh"
    MPH = "mph"
    KNOTS = "kts"
    MS = "ms"


class ClimbUnit(StrEnum):
    MS = "ms"
    FPM = "fpm"


class TimeFormat(StrEnum):
    H24 = "24h"
    AMPM = "ampm"


_ALTITUDE_SYMBOLS: dict[AltitudeUnit, str] = {
    AltitudeUnit.METERS: "m",
    AltitudeUnit.FEET: "ft",
}

_SPEED_SYMBOLS: dict[SpeedUnit, str] = {
    SpeedUnit.KMH: "km/h",
    SpeedUnit.MPH: "mph",
    SpeedUnit.KNOTS: "kts",
    SpeedUnit.MS: "m/s",
}

_CLIMB_SYMBOLS: dict[ClimbUnit, str] = {
    ClimbUnit.MS: "m/s",
    ClimbUnit.FPM: "ft/min",
}


def _lenient(enum_cls: type[StrEnum], value: str | None) -> typing.Any:
    """Return the member matching *value*, or the first member of *enum_cls*."""
    try:
        return enum_cls(value)
    except ValueError:
        return next(iter(enum_cls))


def altitude_unit(value: str | None) -> AltitudeUnit:
    return _lenient(AltitudeUnit, value)


def speed_unit(value: str | None) -> SpeedUnit:
    return _lenient(SpeedUnit, value)


def climb_unit(value: str | None) -> ClimbUnit:
    return _lenient(ClimbUnit, value)


def time_format(value: str | None) -> TimeFormat:
    return _lenient(TimeFormat, value)


# ── conversions ─────────────────────────────────────────────────────────────


def convert_altitude(meters: float, unit: str) -> float:
    """Convert an altitude given in metres."""
    if altitude_unit(unit) is AltitudeUnit.FEET:
        return meters * METERS_TO_FEET
    return meters


def convert_speed(kmh: float, unit: str) -> float:
    """Convert a ground speed given in km/h."""
    selected = speed_unit(unit)
    if selected is SpeedUnit.MPH:
        return kmh * KMH_TO_MPH
    if selected is SpeedUnit.KNOTS:
        return kmh * KMH_TO_KNOTS
    if selected is SpeedUnit.MS:
        return kmh / MS_TO_KMH
    return kmh


def convert_climb(ms: float, unit: str) -> float:
    """Convert a vertical speed given in m/s."""
    if climb_unit(unit) is ClimbUnit.FPM:
        return ms * METERS_TO_FEET * 60
    return ms


# ── symbols ─────────────────────────────────────────────────────────────────


def altitude_symbol(unit: str) -> str:
    return _ALTITUDE_SYMBOLS[altitude_unit(unit)]


def speed_symbol(unit: str) -> str:
    return _SPEED_SYMBOLS[speed_unit(unit)]


def climb_symbol(unit: str) -> str:
    return _CLIMB_SYMBOLS[climb_unit(unit)]
