#!/usr/bin/env python3
"""
IGC Parse Script

Prints the header information and the fixes of a single IGC file.

Usage:
    igc-parse <input_igc_file> [--summary] [--altitude-unit ft] [--time-format ampm]

Example:
    igc-parse 07_niskie_ladowanie.igc --summary
"""

import argparse
import logging
import sys

from igc_logbook import units
from igc_logbook.config import config
from igc_logbook.flight_data import Fix, Flight, IGCParseError
from igc_logbook.igc_file import parse_igc_file
from igc_logbook.scripts import add_common_arguments, setup_logging
from igc_logbook.utils import format_date, format_time

logger = logging.getLogger(__name__)

# Header values recorders write when the field is unknown
_PLACEHOLDERS = ("", "NIL", "NKN")


def format_headers(flight: Flight) -> list[str]:
    lines = [
        f"Date: {format_date(flight.date)}",
        f"Pilot: {flight.pilot}",
    ]
    if flight.crew not in _PLACEHOLDERS:
        lines.append(f"Crew: {flight.crew}")
    lines.append(f"Glider Type: {flight.glider_type}")
    if flight.glider_id not in _PLACEHOLDERS:
        lines.append(f"Glider ID: {flight.glider_id}")
    if flight.competition_id not in _PLACEHOLDERS:
        lines.append(f"Competition ID: {flight.competition_id}")

    optional = [
        ("GPS Datum", flight.gps_datum),
        ("Firmware Version", flight.firmware_version),
        ("Hardware Version", flight.hardware_version),
        ("Flight Recorder Type", flight.flight_recorder_type),
        ("GPS Receiver", flight.gps_receiver),
        ("Time Zone", flight.time_zone),
        ("Pressure Altitude Sensor", flight.pressure_alt_sensor),
        ("GPS Altitude Reference", flight.alt_gps_ref),
        ("Pressure Altitude Reference", flight.alt_pressure_ref),
    ]
    lines.extend(f"{label}: {value}" for label, value in optional if value)
    return lines


def format_fix(fix: Fix, prefix: str, altitude_unit: str, time_fmt: str) -> str:
    symbol = units.altitude_symbol(altitude_unit)
    alt_gps = int(units.convert_altitude(float(fix.alt_gps_m), altitude_unit))
    alt_baro = int(units.convert_altitude(float(fix.alt_baro_m), altitude_unit))
    return (
        f"  {prefix}{format_time(fix.time, time_fmt)}: "
        f"({fix.lat:.5f}, {fix.lon:.5f}), "
        f"Alt(GPS): {alt_gps}{symbol}, Alt(Baro): {alt_baro}{symbol}"
    )


def format_flight(
    flight: Flight, summary: bool, altitude_unit: str, time_fmt: str
) -> list[str]:
    lines = format_headers(flight)
    lines.append("")
    lines.append(f"Fixes ({len(flight.fixes)} total):")

    if summary:
        # First and last fix only
        if flight.fixes:
            lines.append(
                format_fix(flight.fixes[0], "First: ", altitude_unit, time_fmt)
            )
        if len(flight.fixes) > 1:
            lines.append(
                format_fix(flight.fixes[-1], "Last:  ", altitude_unit, time_fmt)
            )
    else:
        lines.extend(
            format_fix(fix, "", altitude_unit, time_fmt) for fix in flight.fixes
        )
    return lines


def main(argv=None) -> int:
    """Main function."""
    parser = argparse.ArgumentParser(
        description="Parse and display detailed IGC flight data"
    )
    parser.add_argument("input", help="Path to the IGC file")
    parser.add_argument(
        "--summary", action="store_true", help="Show only the first and last fix"
    )
    add_common_arguments(parser, config)
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    try:
        flight = parse_igc_file(args.input)
    except IGCParseError as e:
        logger.error(f"Error: {e}")
        return 1

    lines = format_flight(flight, args.summary, args.altitude_unit, args.time_format)
    print("\n".join(lines))
    return 0


if __name__ == "__main__":
    sys.exit(main())
