"""
IGC Logbook Scripts Package

Command-line entry points around the igc_logbook library.

Available scripts:
- igc-logbook: Print one logbook line per IGC flight, plus batch totals
- igc-parse: Dump the headers and fixes of a single IGC file
- igc-config: Show the effective configuration and the config file it came from
"""

import argparse
import logging

import rich.console
import rich.logging

from igc_logbook import units
from igc_logbook.config import IGCLogbookConfig

__all__ = [
    "add_common_arguments",
    "add_logbook_arguments",
    "logbook",
    "parse_igc",
    "setup_logging",
    "show_config",
]


def setup_logging(verbose: bool = False) -> None:
    log_format = "\\[[bold]%(name)s[/bold]] %(message)s"
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=log_format,
        datefmt="[%X]",
        handlers=[
            rich.logging.RichHandler(
                console=rich.console.Console(color_system="auto", stderr=True),
                show_level=True,
                show_path=False,
                enable_link_path=False,
                rich_tracebacks=True,
                tracebacks_show_locals=False,
                markup=True,
            )
        ],
    )


def add_common_arguments(
    parser: argparse.ArgumentParser, settings: IGCLogbookConfig
) -> None:
    """Altitude unit and time format flags, defaulting to *settings*."""
    parser.add_argument(
        "--altitude-unit",
        default=units.altitude_unit(settings.ALTITUDE_UNIT).value,
        choices=[u.value for u in units.AltitudeUnit],
        help="Unit for altitude display (default: %(default)s)",
    )
    parser.add_argument(
        "--time-format",
        default=units.time_format(settings.TIME_FORMAT).value,
        choices=[u.value for u in units.TimeFormat],
        help="Clock format for takeoff and landing times (default: %(default)s)",
    )


def add_logbook_arguments(
    parser: argparse.ArgumentParser, settings: IGCLogbookConfig
) -> None:
    """Logbook output flags, defaulting to *settings*."""
    parser.add_argument(
        "--sites",
        default=settings.SITES_DATABASE_LOCATION,
        help="Landing sites CSV (name,lat,lon,radius)",
    )
    parser.add_argument(
        "--format",
        default=settings.LOGBOOK_FORMAT,
        help="Per-flight output template; "
        "flights it cannot render are reported and skipped",
    )
    parser.add_argument(
        "--summary-format",
        default=settings.SUMMARY_FORMAT,
        help="Collection summary output template",
    )
    parser.add_argument(
        "--speed-unit",
        default=units.speed_unit(settings.SPEED_UNIT).value,
        choices=[u.value for u in units.SpeedUnit],
        help="Unit for ground speed display (default: %(default)s)",
    )
    parser.add_argument(
        "--climb-unit",
        default=units.climb_unit(settings.CLIMB_UNIT).value,
        choices=[u.value for u in units.ClimbUnit],
        help="Unit for climb and descent rates (default: %(default)s)",
    )
    parser.add_argument(
        "--speed-window",
        type=float,
        default=settings.SPEED_WINDOW,
        help="Ground speed smoothing window in seconds (default: %(default)s)",
    )
