"""
Flight statistics derived from the ordered fixes of a single flight.

All calculations are linear scans over ``Flight.fixes``:

1. Altitude extremes use the GPS altitude of every fix.

2. Ground speed is computed between consecutive fixes. Pairs closer than
   MIN_TIME_DIFF_S are skipped, GPS jitter dominates at sub-second intervals.
   When the pair interval is shorter than the caller's smoothing window the
   speed is recomputed against an earlier fix at least one window away, and the
   lower of the two values is kept. Widening only ever dampens a spike.

3. Vertical speed is the altitude delta over elapsed time for the same pairs.

Degenerate flights (zero or one fix) produce zeroed results rather than errors.
"""

from __future__ import annotations

import datetime
import logging
import math

from igc_logbook.flight_data import Flight, Statistics

logger = logging.getLogger(__name__)

EARTH_RADIUS_M = 6_371_000
MIN_TIME_DIFF_S = 1.0
MS_TO_KMH = 3.6

# Windowing only kicks in once this many fixes have been seen.
MIN_FIXES_FOR_WINDOW = 5


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in metres between two WGS 84 points (spherical Earth)."""
    lat1_r, lon1_r = math.radians(lat1), math.radians(lon1)
    lat2_r, lon2_r = math.radians(lat2), math.radians(lon2)

    dlat = lat2_r - lat1_r
    dlon = lon2_r - lon1_r

    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1_r) * math.cos(lat2_r) * math.sin(dlon / 2) ** 2
    )
    # a can round to slightly above 1 near antipodal points
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_M * c


def _elapsed_s(start: datetime.datetime, end: datetime.datetime) -> float:
    return (end - start).total_seconds()


# ---------------------------------------------------------------------------
# Altitude
# ---------------------------------------------------------------------------


def calculate_max_altitude(flight: Flight) -> int:
    """Highest GPS altitude in the flight, 0 when there are no fixes."""
    if not flight.fixes:
        return 0
    return max(int(fix.alt_gps_m) for fix in flight.fixes)


def calculate_min_altitude(flight: Flight) -> int:
    """Lowest GPS altitude in the flight, 0 when there are no fixes."""
    if not flight.fixes:
        return 0
    return min(int(fix.alt_gps_m) for fix in flight.fixes)


# ---------------------------------------------------------------------------
# Speeds
# ---------------------------------------------------------------------------


def calculate_max_ground_speed(flight: Flight, min_window_s: float) -> float:
    """Maximum ground speed in km/h, smoothed over *min_window_s* seconds.

    Parameters
    ----------
    flight:
        Flight whose fixes are scanned in order.
    min_window_s:
        Smoothing window. Pairs shorter than the window are cross-checked
        against the most recent earlier fix at least this far back in time.

    Returns
    -------
    float
        The largest speed seen, or 0.0 for fewer than two fixes.
    """
    fixes = flight.fixes
    if len(fixes) < 2:
        return 0.0

    max_speed = 0.0
    for i in range(1, len(fixes)):
        prev, curr = fixes[i - 1], fixes[i]

        time_diff = _elapsed_s(prev.time, curr.time)
        if time_diff < MIN_TIME_DIFF_S:
            continue

        distance = haversine_distance(prev.lat, prev.lon, curr.lat, curr.lon)
        speed_kmh = distance / time_diff * MS_TO_KMH

        if time_diff < min_window_s and i >= MIN_FIXES_FOR_WINDOW:
            for j in range(i - 1, -1, -1):
                anchor = fixes[j]
                window_diff = _elapsed_s(anchor.time, curr.time)
                if window_diff >= min_window_s:
                    window_distance = haversine_distance(
                        anchor.lat, anchor.lon, curr.lat, curr.lon
                    )
                    window_speed_kmh = window_distance / window_diff * MS_TO_KMH
                    if window_speed_kmh < speed_kmh:
                        speed_kmh = window_speed_kmh
                    break

        if speed_kmh > max_speed:
            max_speed = speed_kmh

    return max_speed


def calculate_vertical_speeds(flight: Flight) -> tuple[float, float]:
    """Return ``(max_climb, min_vertical_speed)`` in m/s.

    The climb baseline is 0 and the descent baseline is 0, so a flight that
    only climbs reports a minimum of 0.0.
    """
    fixes = flight.fixes
    if len(fixes) < 2:
        return 0.0, 0.0

    max_vz = 0.0
    min_vz = 0.0
    for prev, curr in zip(fixes, fixes[1:]):
        time_diff = _elapsed_s(prev.time, curr.time)
        if time_diff < MIN_TIME_DIFF_S:
            continue

        vz = (curr.alt_gps_m - prev.alt_gps_m) / time_diff
        max_vz = max(max_vz, vz)
        min_vz = min(min_vz, vz)

    return max_vz, min_vz


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def get_statistics(flight: Flight, speed_window: float) -> Statistics:
    """Compute all statistics for *flight*."""
    max_climb, min_vz = calculate_vertical_speeds(flight)

    duration = datetime.timedelta(0)
    if len(flight.fixes) >= 2:
        duration = flight.fixes[-1].time - flight.fixes[0].time

    stats = Statistics(
        max_altitude=calculate_max_altitude(flight),
        min_altitude=calculate_min_altitude(flight),
        max_ground_speed=calculate_max_ground_speed(flight, speed_window),
        max_climb_rate=max_climb,
        max_descent_rate=abs(min_vz),
        flight_duration=duration,
    )
    logger.debug(
        f"Statistics over {len(flight.fixes)} fixes: "
        f"alt {stats.min_altitude}..{stats.max_altitude} m, "
        f"speed {stats.max_ground_speed:.1f} km/h, "
        f"vz +{stats.max_climb_rate:.1f}/-{stats.max_descent_rate:.1f} m/s"
    )
    return stats
