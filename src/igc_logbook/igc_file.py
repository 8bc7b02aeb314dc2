"""
IGC File Module

Reads IGC flight recorder files into :class:`Flight` models and finds IGC
files among the paths given on the command line.

Only the records the logbook needs are decoded:

- H records (header): date, pilot, crew, glider, recorder and sensor info
- B records (fixes): time, position, validity, pressure and GNSS altitude

Example B record::

    B1101355206343N00006198WA0058700558
     |     |       |        ||    |
     time  lat     lon      |baro gps
                            validity
"""

import datetime
import logging
import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from igc_logbook.flight_data import Fix, Flight, IGCLogbookError, IGCParseError

logger = logging.getLogger(__name__)

IGC_EXTENSION = ".igc"
MIN_B_RECORD_LENGTH = 35

# H record three-letter codes → Flight field
_HEADER_FIELDS: Dict[str, str] = {
    "PLT": "pilot",
    "CM2": "crew",
    "GTY": "glider_type",
    "GID": "glider_id",
    "CID": "competition_id",
    "DTM": "gps_datum",
    "RFW": "firmware_version",
    "RHW": "hardware_version",
    "FTY": "flight_recorder_type",
    "GPS": "gps_receiver",
    "TZN": "time_zone",
    "PRS": "pressure_alt_sensor",
    "ALG": "alt_gps_ref",
    "ALP": "alt_pressure_ref",
}

_DATE_RE = re.compile(r"(\d{2})(\d{2})(\d{2})")

# Placeholder date for fixes of files without an HFDTE record
_NO_DATE = datetime.date(1970, 1, 1)


def parse_igc_coordinate(coord_str: str, is_longitude: bool = False) -> float:
    """
    Parse IGC coordinate format to decimal degrees.

    IGC format examples:
    - Latitude: 5216203N (52°16.203'N)
    - Longitude: 02054885E (020°54.885'E)

    Args:
        coord_str: IGC coordinate string
        is_longitude: True if parsing longitude, False for latitude

    Returns:
        float: Decimal degrees
    """
    if is_longitude:
        # Longitude format: DDDMMmmm[EW]
        if len(coord_str) < 9:
            raise ValueError(f"Invalid longitude format: {coord_str}")
        degrees = int(coord_str[:3])
        minutes = int(coord_str[3:8]) / 1000.0
        direction = coord_str[8]
    else:
        # Latitude format: DDMMmmm[NS]
        if len(coord_str) < 8:
            raise ValueError(f"Invalid latitude format: {coord_str}")
        degrees = int(coord_str[:2])
        minutes = int(coord_str[2:7]) / 1000.0
        direction = coord_str[7]

    if direction not in "NSEW":
        raise ValueError(f"Invalid hemisphere in coordinate: {coord_str}")

    decimal = degrees + minutes / 60.0
    if direction in ("S", "W"):
        decimal = -decimal
    return decimal


def parse_igc_time(time_str: str) -> int:
    """
    Parse IGC time format (HHMMSS) to seconds since midnight.

    Args:
        time_str: IGC time string (HHMMSS)

    Returns:
        int: Seconds since midnight
    """
    if len(time_str) != 6 or not time_str.isdigit():
        raise ValueError(f"Invalid time format: {time_str}")

    hours = int(time_str[:2])
    minutes = int(time_str[2:4])
    seconds = int(time_str[4:6])
    return hours * 3600 + minutes * 60 + seconds


def parse_igc_date(value: str) -> Optional[datetime.date]:
    """Parse an HFDTE value, ``"080725"`` or ``"DATE:080725,01"`` (DDMMYY)."""
    match = _DATE_RE.search(value)
    if match is None:
        return None
    day, month, year = (int(g) for g in match.groups())
    # Two-digit years: 69-99 → 19xx, otherwise 20xx
    year += 1900 if year >= 69 else 2000
    try:
        return datetime.date(year, month, day)
    except ValueError:
        return None


def _parse_altitude(value: str) -> int:
    value = value.strip()
    try:
        return int(value)
    except ValueError:
        return 0


def _header_value(line: str) -> str:
    # HFPLTPILOTINCHARGE:John Doe → "John Doe"; HFDTE080725 → "080725"
    rest = line[5:]
    if ":" in rest:
        rest = rest.split(":", 1)[1]
    return rest.strip()


def parse_igc_lines(lines: Iterable[str]) -> Flight:
    """
    Build a Flight from the lines of an IGC file.

    Fix timestamps are anchored on the HFDTE date (UTC) and roll over to the
    next day whenever the clock goes backwards, as it does for flights that
    cross midnight UTC.

    Raises:
        IGCParseError: If the lines contain neither H nor B records
    """
    headers: Dict[str, str] = {}
    flight_date: Optional[datetime.date] = None
    raw_fixes = []
    header_count = 0

    for line_num, line in enumerate(lines, 1):
        line = line.strip()
        if not line:
            continue

        try:
            if line.startswith("H"):
                header_count += 1
                tlc = line[2:5]
                if tlc == "DTE":
                    flight_date = parse_igc_date(line[5:])
                elif tlc in _HEADER_FIELDS:
                    headers[_HEADER_FIELDS[tlc]] = _header_value(line)

            elif line.startswith("B"):
                if len(line) < MIN_B_RECORD_LENGTH:
                    logger.debug(f"Skipping short B record on line {line_num}")
                    continue

                # B record format: BHHMMSSDDMMmmmNDDDMMmmmEVPPPPPGGGGG
                validity = line[24]
                if validity not in ("A", "V"):
                    logger.debug(f"Skipping B record with validity {validity!r}")
                    continue

                raw_fixes.append(
                    (
                        parse_igc_time(line[1:7]),
                        parse_igc_coordinate(line[7:15], is_longitude=False),
                        parse_igc_coordinate(line[15:24], is_longitude=True),
                        validity == "A",
                        _parse_altitude(line[25:30]),
                        _parse_altitude(line[30:35]),
                    )
                )
        except ValueError as e:
            logger.debug(f"Error parsing line {line_num}: {line[:50]}... - {e}")
            continue

    if header_count == 0 and not raw_fixes:
        raise IGCParseError("file does not contain valid IGC data")

    base = datetime.datetime.combine(
        flight_date or _NO_DATE, datetime.time(), tzinfo=datetime.timezone.utc
    )
    fixes = []
    day_offset = 0
    prev_seconds = None
    for seconds, lat, lon, valid, alt_baro, alt_gps in raw_fixes:
        if prev_seconds is not None and seconds < prev_seconds:
            day_offset += 1
        prev_seconds = seconds
        fixes.append(
            Fix(
                time=base + datetime.timedelta(days=day_offset, seconds=seconds),
                lat=lat,
                lon=lon,
                alt_gps_m=alt_gps,
                alt_baro_m=alt_baro,
                valid=valid,
            )
        )

    return Flight(date=flight_date, fixes=tuple(fixes), **headers)


def parse_igc_file(igc_file_path: Union[str, Path]) -> Flight:
    """
    Parse an IGC file and return its Flight.

    Args:
        igc_file_path: Path to the IGC file

    Raises:
        IGCParseError: If the file cannot be read or holds no IGC data
    """
    path = Path(igc_file_path)
    try:
        with open(path, "r", encoding="latin-1") as f:
            flight = parse_igc_lines(f)
    except OSError as exc:
        raise IGCParseError(f"failed to open file {path}: {exc}") from exc
    except IGCParseError as exc:
        raise IGCParseError(f"{path}: {exc}") from exc

    logger.debug(f"Parsed {len(flight.fixes)} fixes from {path.name}")
    return flight


def is_igc_file(path: Path) -> bool:
    return path.suffix.lower() == IGC_EXTENSION


def find_igc_files(
    paths: Iterable[Union[str, Path]], recursive: bool = False
) -> List[Path]:
    """
    Collect IGC files from a mix of file and directory paths.

    Directories contribute the IGC files they contain (sorted by name), and
    with *recursive* those of their subdirectories too. Files are taken as
    given but must carry the ``.igc`` extension (case-insensitive).

    Raises:
        IGCLogbookError: If a path does not exist or a file is not an IGC file
    """
    igc_files: List[Path] = []

    for raw_path in paths:
        path = Path(raw_path)
        if not path.exists():
            raise IGCLogbookError(f"error accessing {path}: no such file or directory")

        if path.is_dir():
            candidates = path.rglob("*") if recursive else path.iterdir()
            igc_files.extend(
                sorted(p for p in candidates if p.is_file() and is_igc_file(p))
            )
        elif is_igc_file(path):
            igc_files.append(path)
        else:
            raise IGCLogbookError(f"file {path} is not an IGC file")

    return igc_files
