#!/usr/bin/env python3
"""
IGC Config Script

Shows where the configuration was loaded from and the settings the other
scripts would use. Accepts the same flags as igc-logbook, so the effect of an
override can be checked before running it.

Usage:
    igc-config [--altitude-unit ft] [--speed-unit kts] [...]
"""

import argparse
import sys

from igc_logbook.config import IGCLogbookConfig
from igc_logbook.scripts import add_common_arguments, add_logbook_arguments


def format_config(args: argparse.Namespace, settings: IGCLogbookConfig) -> list[str]:
    config_file = settings.config_file
    if config_file is None:
        source = "No config file found (using defaults)"
    else:
        source = str(config_file.resolve())
    return [
        "Current configuration:",
        f"Config file used: {source}",
        "",
        f"altitude-unit: {args.altitude_unit}",
        f"time-format: {args.time_format}",
        f"speed-unit: {args.speed_unit}",
        f"climb-unit: {args.climb_unit}",
        f"logbook-format: {args.format}",
        f"summary-format: {args.summary_format}",
        f"sites-database-location: {args.sites or ''}",
        f"speed-window: {args.speed_window:g}",
    ]


def main(argv=None) -> int:
    """Main function."""
    # Read fresh so the report reflects the current directory and environment
    settings = IGCLogbookConfig()

    parser = argparse.ArgumentParser(description="Show the current configuration")
    add_common_arguments(parser, settings)
    add_logbook_arguments(parser, settings)
    args = parser.parse_args(argv)

    print("\n".join(format_config(args, settings)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
