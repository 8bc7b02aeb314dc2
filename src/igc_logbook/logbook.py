"""Per-flight logbook entries and their aggregation over a batch of flights.

:func:`create_flight_summary` turns a parsed :class:`Flight` into a
:class:`FlightSummary` in the caller's units. :func:`aggregate` rolls a batch of
summaries up into a :class:`CollectionSummary`. Both are rendered with
:func:`render` against ``str.format`` templates such as
``"{date} {takeoff_site} {flight_duration}"``.

Summaries carry the raw duration and date next to their display strings and
the aggregator works on the raw values. The display strings are only parsed
back for summaries built without them.
"""

from __future__ import annotations

import datetime
import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence

import pydantic

from igc_logbook import units
from igc_logbook.flight_data import Flight, TemplateError
from igc_logbook.flight_track import get_statistics
from igc_logbook.sites import SiteCollection
from igc_logbook.utils import (
    format_coordinates,
    format_date,
    format_duration,
    format_time,
    parse_date,
    parse_duration,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LogbookOptions:
    landing_sites: Optional[SiteCollection] = None
    filename: str = ""
    speed_window: float = 5.0
    altitude_unit: str = units.AltitudeUnit.METERS
    speed_unit: str = units.SpeedUnit.KMH
    climb_unit: str = units.ClimbUnit.MS
    time_format: str = units.TimeFormat.H24

    @property
    def altitude_symbol(self) -> str:
        return units.altitude_symbol(self.altitude_unit)

    @property
    def speed_symbol(self) -> str:
        return units.speed_symbol(self.speed_unit)

    @property
    def climb_symbol(self) -> str:
        return units.climb_symbol(self.climb_unit)


# ---------------------------------------------------------------------------
# Per-flight summary
# ---------------------------------------------------------------------------


class FlightSummary(pydantic.BaseModel):
    """One logbook line: converted statistics and display strings for a flight."""

    model_config = pydantic.ConfigDict(frozen=True)

    date: str = ""
    takeoff_lat: float = 0.0
    takeoff_lon: float = 0.0
    takeoff_position: str = ""
    takeoff_site: str = ""
    landing_lat: float = 0.0
    landing_lon: float = 0.0
    landing_position: str = ""
    landing_site: str = ""
    takeoff_alt: int = 0
    landing_alt: int = 0
    altitude_diff: int = 0
    max_altitude: int = 0
    min_altitude: int = 0
    max_ground_speed: int = 0
    max_climb_rate: float = 0.0
    max_descent_rate: float = 0.0
    flight_duration: str = ""
    takeoff_time: str = ""
    landing_time: str = ""
    pilot: str = ""
    crew: str = ""
    glider_type: str = ""
    glider_id: str = ""
    competition_id: str = ""
    flight_recorder_type: str = ""
    filename: str = ""

    altitude_unit: str = "m"
    speed_unit: str = "km/h"
    vertical_speed_unit: str = "m/s"

    # Raw values behind flight_duration and date
    duration: Optional[datetime.timedelta] = None
    flight_date: Optional[datetime.date] = None


SUMMARY_FIELDS: tuple[str, ...] = (
    "date",
    "takeoff_lat",
    "takeoff_lon",
    "takeoff_position",
    "takeoff_site",
    "landing_lat",
    "landing_lon",
    "landing_position",
    "landing_site",
    "takeoff_alt",
    "landing_alt",
    "altitude_diff",
    "max_altitude",
    "min_altitude",
    "max_ground_speed",
    "max_climb_rate",
    "max_descent_rate",
    "flight_duration",
    "takeoff_time",
    "landing_time",
    "pilot",
    "crew",
    "glider_type",
    "glider_id",
    "competition_id",
    "flight_recorder_type",
    "filename",
    "altitude_unit",
    "speed_unit",
    "vertical_speed_unit",
)


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def create_flight_summary(
    flight: Flight, options: LogbookOptions
) -> Optional[FlightSummary]:
    """Build the logbook entry for *flight*, or ``None`` if it has no fixes."""
    takeoff, landing = flight.takeoff, flight.landing
    if takeoff is None or landing is None:
        return None

    duration = landing.time - takeoff.time
    stats = get_statistics(flight, options.speed_window)

    if options.landing_sites is not None:
        takeoff_site = options.landing_sites.find_label(takeoff.lat, takeoff.lon)
        landing_site = options.landing_sites.find_label(landing.lat, landing.lon)
    else:
        takeoff_site = format_coordinates(takeoff.lat, takeoff.lon)
        landing_site = format_coordinates(landing.lat, landing.lon)

    def altitude(meters: int) -> int:
        return int(units.convert_altitude(float(meters), options.altitude_unit))

    def climb(ms: float) -> float:
        return _round_half_away(units.convert_climb(ms, options.climb_unit))

    return FlightSummary(
        date=format_date(flight.date),
        takeoff_lat=takeoff.lat,
        takeoff_lon=takeoff.lon,
        takeoff_position=format_coordinates(takeoff.lat, takeoff.lon),
        takeoff_site=takeoff_site,
        landing_lat=landing.lat,
        landing_lon=landing.lon,
        landing_position=format_coordinates(landing.lat, landing.lon),
        landing_site=landing_site,
        takeoff_alt=altitude(takeoff.alt_gps_m),
        landing_alt=altitude(landing.alt_gps_m),
        altitude_diff=altitude(landing.alt_gps_m - takeoff.alt_gps_m),
        max_altitude=altitude(stats.max_altitude),
        min_altitude=altitude(stats.min_altitude),
        max_ground_speed=int(
            _round_half_away(
                units.convert_speed(stats.max_ground_speed, options.speed_unit)
            )
        ),
        max_climb_rate=climb(stats.max_climb_rate),
        max_descent_rate=climb(stats.max_descent_rate),
        flight_duration=format_duration(duration),
        takeoff_time=format_time(takeoff.time, options.time_format),
        landing_time=format_time(landing.time, options.time_format),
        pilot=flight.pilot,
        crew=flight.crew,
        glider_type=flight.glider_type,
        glider_id=flight.glider_id,
        competition_id=flight.competition_id,
        flight_recorder_type=flight.flight_recorder_type,
        filename=options.filename,
        altitude_unit=options.altitude_symbol,
        speed_unit=options.speed_symbol,
        vertical_speed_unit=options.climb_symbol,
        duration=duration,
        flight_date=flight.date,
    )


# ---------------------------------------------------------------------------
# Collection summary
# ---------------------------------------------------------------------------


class CollectionSummary(pydantic.BaseModel):
    """Aggregated statistics over a batch of flight summaries."""

    model_config = pydantic.ConfigDict(frozen=True)

    flights: tuple[FlightSummary, ...] = ()
    total_time: str = ""
    total_flights: int = 0
    first_date: str = ""
    last_date: str = ""
    avg_flight_time: str = ""
    max_flight_time: str = ""
    min_flight_time: str = ""
    max_altitude: int = 0
    avg_max_altitude: int = 0
    unique_pilots: tuple[str, ...] = ()
    unique_gliders: tuple[str, ...] = ()
    unique_sites: tuple[str, ...] = ()

    altitude_unit: str = "m"
    speed_unit: str = "km/h"
    vertical_speed_unit: str = "m/s"


COLLECTION_FIELDS: tuple[str, ...] = (
    "flights",
    "total_time",
    "total_flights",
    "first_date",
    "last_date",
    "avg_flight_time",
    "max_flight_time",
    "min_flight_time",
    "max_altitude",
    "avg_max_altitude",
    "unique_pilots",
    "unique_gliders",
    "unique_sites",
    "altitude_unit",
    "speed_unit",
    "vertical_speed_unit",
)


def _summary_duration(summary: FlightSummary) -> Optional[datetime.timedelta]:
    if summary.duration is not None:
        return summary.duration
    try:
        return parse_duration(summary.flight_duration)
    except ValueError as exc:
        name = summary.filename or "flight"
        logger.warning(f"Excluding {name} from flight time: {exc}")
        return None


def _summary_date(summary: FlightSummary) -> Optional[datetime.date]:
    if summary.flight_date is not None:
        return summary.flight_date
    if not summary.date:
        logger.debug(f"No date for {summary.filename or 'flight'}")
        return None
    try:
        return parse_date(summary.date)
    except ValueError as exc:
        name = summary.filename or "flight"
        logger.warning(f"Excluding {name} from date range: {exc}")
        return None


def _truncating_div(total: int, count: int) -> int:
    quotient = abs(total) // count
    return quotient if total >= 0 else -quotient


def aggregate(
    summaries: Sequence[FlightSummary], options: Optional[LogbookOptions] = None
) -> CollectionSummary:
    """Roll *summaries* (all in one unit system) up into a CollectionSummary.

    Flights whose duration or date cannot be determined are left out of the
    flight-time and date-range figures, but still count towards the totals.
    """
    options = options or LogbookOptions()
    symbols = dict(
        altitude_unit=options.altitude_symbol,
        speed_unit=options.speed_symbol,
        vertical_speed_unit=options.climb_symbol,
    )

    if not summaries:
        return CollectionSummary(total_flights=0, **symbols)

    total_duration = datetime.timedelta(0)
    max_duration: Optional[datetime.timedelta] = None
    min_duration: Optional[datetime.timedelta] = None
    total_altitude = 0
    max_altitude: Optional[int] = None
    first_date: Optional[datetime.date] = None
    last_date: Optional[datetime.date] = None
    pilots: set[str] = set()
    gliders: set[str] = set()
    sites: set[str] = set()

    for summary in summaries:
        duration = _summary_duration(summary)
        if duration is not None:
            total_duration += duration
            if max_duration is None or duration > max_duration:
                max_duration = duration
            if min_duration is None or duration < min_duration:
                min_duration = duration

        total_altitude += summary.max_altitude
        if max_altitude is None or summary.max_altitude > max_altitude:
            max_altitude = summary.max_altitude

        if summary.pilot:
            pilots.add(summary.pilot)
        if summary.glider_type:
            gliders.add(summary.glider_type)
        if summary.takeoff_site:
            sites.add(summary.takeoff_site)

        date = _summary_date(summary)
        if date is not None:
            if first_date is None or date < first_date:
                first_date = date
            if last_date is None or date > last_date:
                last_date = date

    count = len(summaries)
    zero = datetime.timedelta(0)

    return CollectionSummary(
        flights=tuple(summaries),
        total_time=format_duration(total_duration),
        total_flights=count,
        first_date=format_date(first_date),
        last_date=format_date(last_date),
        avg_flight_time=format_duration(total_duration / count),
        max_flight_time=format_duration(max_duration or zero),
        min_flight_time=format_duration(min_duration or zero),
        max_altitude=max_altitude or 0,
        avg_max_altitude=_truncating_div(total_altitude, count),
        unique_pilots=tuple(sorted(pilots)),
        unique_gliders=tuple(sorted(gliders)),
        unique_sites=tuple(sorted(sites)),
        **symbols,
    )


# ---------------------------------------------------------------------------
# Template rendering
# ---------------------------------------------------------------------------


def render(template: str, data: FlightSummary | CollectionSummary) -> str:
    """Render *data* into a ``str.format`` template (``"{pilot} {date}"``).

    Raises
    ------
    TemplateError
        If the template names an unknown field or has a bad format spec.
    """
    values = {name: getattr(data, name) for name in type(data).model_fields}
    try:
        return template.format_map(values)
    except KeyError as exc:
        raise TemplateError(f"Unknown template field {exc}") from exc
    except (ValueError, IndexError, AttributeError) as exc:
        raise TemplateError(f"Failed to render template: {exc}") from exc
