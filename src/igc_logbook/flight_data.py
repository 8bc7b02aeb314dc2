"""Flight data models.

A :class:`Flight` is what the IGC reader produces: the ordered B-record fixes
plus the H-record header values. All models are frozen; statistics and
summaries are derived from them, never written back.
"""

from __future__ import annotations

import datetime

import pydantic

# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class IGCLogbookError(Exception):
    """Base class for errors raised by igc_logbook."""


class IGCParseError(IGCLogbookError):
    """An IGC file could not be read or holds no IGC data."""


class SitesFileError(IGCLogbookError):
    """A landing-site definition file could not be read."""


class TemplateError(IGCLogbookError):
    """A logbook output template references an unknown field or is malformed."""


# ---------------------------------------------------------------------------
# Track models
# ---------------------------------------------------------------------------


class Fix(pydantic.BaseModel):
    """One GPS/barometric sample (IGC B record)."""

    model_config = pydantic.ConfigDict(frozen=True)

    time: datetime.datetime
    lat: float
    lon: float
    alt_gps_m: int = 0
    alt_baro_m: int = 0
    valid: bool = True


class Flight(pydantic.BaseModel):
    """Parsed IGC flight: header metadata and the ordered fixes."""

    model_config = pydantic.ConfigDict(frozen=True)

    date: datetime.date | None = None

    # Pilot and Aircraft Info
    pilot: str = ""
    crew: str = ""
    glider_type: str = ""
    glider_id: str = ""
    competition_id: str = ""

    # Hardware and Sensors
    flight_recorder_type: str = ""
    firmware_version: str = ""
    hardware_version: str = ""
    gps_receiver: str = ""
    pressure_alt_sensor: str = ""

    # Datums and References
    gps_datum: str = ""
    time_zone: str = ""
    alt_gps_ref: str = ""
    alt_pressure_ref: str = ""

    fixes: tuple[Fix, ...] = ()

    @property
    def takeoff(self) -> Fix | None:
        return self.fixes[0] if self.fixes else None

    @property
    def landing(self) -> Fix | None:
        return self.fixes[-1] if self.fixes else None


class Statistics(pydantic.BaseModel):
    """Derived flight statistics in base units (m, km/h, m/s)."""

    model_config = pydantic.ConfigDict(frozen=True)

    max_altitude: int = 0
    min_altitude: int = 0
    max_ground_speed: float = 0.0
    """km/h"""
    max_climb_rate: float = 0.0
    """m/s"""
    max_descent_rate: float = 0.0
    """m/s, positive magnitude"""
    flight_duration: datetime.timedelta = datetime.timedelta(0)


# ---------------------------------------------------------------------------
# Landing sites
# ---------------------------------------------------------------------------


class LandingSite(pydantic.BaseModel):
    """A named circular region: center (lon, lat) and radius in metres."""

    model_config = pydantic.ConfigDict(frozen=True)

    name: str
    lon: float
    lat: float
    radius_m: float
