#!/usr/bin/env python3
"""
IGC Logbook Script

Prints one logbook line per flight for the given IGC files and directories,
using a ``str.format`` template over the flight summary fields. When more than
one flight is processed, the total flight time is printed after the entries;
``--summary`` adds a collection line (date range, averages, extremes).

Usage:
    igc-logbook <IGC files or directories...> [options]

Examples:
    igc-logbook flights/2025/ -r --sites sites.csv
    igc-logbook a.igc b.igc --format "{date} {pilot} {flight_duration}"
    igc-logbook flights/ --summary --altitude-unit ft --speed-unit kts
"""

import argparse
import dataclasses
import logging
import sys

from igc_logbook.config import config
from igc_logbook.flight_data import IGCLogbookError, IGCParseError, TemplateError
from igc_logbook.igc_file import find_igc_files, parse_igc_file
from igc_logbook.logbook import (
    COLLECTION_FIELDS,
    SUMMARY_FIELDS,
    LogbookOptions,
    aggregate,
    create_flight_summary,
    render,
)
from igc_logbook.scripts import (
    add_common_arguments,
    add_logbook_arguments,
    setup_logging,
)
from igc_logbook.sites import load_landing_sites_if_specified

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    flight_fields = ", ".join(SUMMARY_FIELDS)
    collection_fields = ", ".join(f for f in COLLECTION_FIELDS if f != "flights")
    parser = argparse.ArgumentParser(
        description="Generate logbook entries for IGC flights",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Flight template fields:
  {flight_fields}

Summary template fields:
  {collection_fields}
        """,
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="IGC files and/or directories containing IGC files",
    )
    parser.add_argument(
        "-r", "--recursive", action="store_true", help="Search directories recursively"
    )
    parser.add_argument(
        "--summary", action="store_true", help="Print a collection summary line"
    )
    add_common_arguments(parser, config)
    add_logbook_arguments(parser, config)
    parser.add_argument(
        "--list-fields", action="store_true", help="List template fields and exit"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    return parser


def main(argv=None) -> int:
    """Main function."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.list_fields:
        print("# Flight template fields (--format)")
        print("\n".join(SUMMARY_FIELDS))
        print("")
        print("# Summary template fields (--summary-format)")
        print("\n".join(f for f in COLLECTION_FIELDS if f != "flights"))
        return 0

    if not args.paths:
        parser.error("at least one IGC file or directory is required")

    options = LogbookOptions(
        landing_sites=load_landing_sites_if_specified(args.sites),
        speed_window=args.speed_window,
        altitude_unit=args.altitude_unit,
        speed_unit=args.speed_unit,
        climb_unit=args.climb_unit,
        time_format=args.time_format,
    )

    try:
        igc_files = find_igc_files(args.paths, args.recursive)
    except IGCLogbookError as e:
        logger.error(f"Error finding IGC files: {e}")
        return 1

    if not igc_files:
        logger.error("No IGC files found")
        return 1

    logger.debug(f"Found {len(igc_files)} IGC files")

    summaries = []
    render_failed = False
    for igc_path in igc_files:
        try:
            flight = parse_igc_file(igc_path)
        except IGCParseError as e:
            logger.error(f"Error parsing {igc_path}: {e}")
            continue

        summary = create_flight_summary(
            flight, dataclasses.replace(options, filename=str(igc_path))
        )
        if summary is None:
            logger.warning(f"Skipping {igc_path}: no fixes")
            continue

        try:
            print(render(args.format, summary))
        except TemplateError as e:
            logger.error(f"Error processing {igc_path}: {e}")
            render_failed = True
            continue

        summaries.append(summary)

    collection = aggregate(summaries, options)

    if collection.total_flights > 1:
        print(f"# total flight time: {collection.total_time}")

    if args.summary:
        try:
            print(render(args.summary_format, collection))
        except TemplateError as e:
            logger.error(f"Error rendering summary: {e}")
            return 1

    return 1 if render_failed else 0


if __name__ == "__main__":
    sys.exit(main())
