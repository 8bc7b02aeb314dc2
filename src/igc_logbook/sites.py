"""
Landing Sites Module

Resolves takeoff and landing positions to human-readable site names using a
small gazetteer of circular regions read from a CSV file:

    name,lat,lon,radius
    Annecy Forclaz,45.814,6.246,500
    Doussard,45.780,6.220,300

Resolution is first match in file order, not nearest match: where radii
overlap, whichever site is listed first wins. Positions outside every site
resolve to their coordinates (``"45.814,6.246"``).
"""

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Sequence, Union

from igc_logbook.flight_data import LandingSite, SitesFileError
from igc_logbook.flight_track import haversine_distance
from igc_logbook.utils import format_coordinates

logger = logging.getLogger(__name__)

SITES_CSV_HEADER = "name"


def find_label(lat: float, lon: float, sites: Sequence[LandingSite]) -> str:
    """
    Return the name of the first site whose radius contains the point.

    Args:
        lat: Query latitude in degrees
        lon: Query longitude in degrees
        sites: Sites in definition order

    Returns:
        str: Site name, or the formatted coordinates if no site matches
    """
    for site in sites:
        if haversine_distance(lat, lon, site.lat, site.lon) <= site.radius_m:
            return site.name
    return format_coordinates(lat, lon)


@dataclass(frozen=True)
class SiteCollection:
    """Ordered, immutable set of landing sites."""

    sites: tuple[LandingSite, ...] = ()

    def __len__(self) -> int:
        return len(self.sites)

    def __iter__(self) -> Iterator[LandingSite]:
        return iter(self.sites)

    def find_label(self, lat: float, lon: float) -> str:
        return find_label(lat, lon, self.sites)


def _parse_site_row(row: list[str]) -> Optional[LandingSite]:
    if len(row) != 4:
        return None

    name = row[0].strip()
    if not name:
        return None

    try:
        lat, lon, radius = (float(value) for value in row[1:])
    except ValueError:
        return None

    return LandingSite(name=name, lat=lat, lon=lon, radius_m=radius)


def load_landing_sites(filename: Union[str, Path]) -> SiteCollection:
    """
    Load landing sites from a CSV file with columns name, lat, lon, radius.

    A first row starting with ``name`` is treated as a header. Rows with the
    wrong number of columns, an empty name or unparseable numbers are skipped.

    Args:
        filename: Path to the CSV file

    Returns:
        SiteCollection: Sites in file order (possibly empty)

    Raises:
        SitesFileError: If the file cannot be opened or parsed as CSV
    """
    path = Path(filename)
    try:
        with open(path, newline="", encoding="utf-8") as f:
            records = list(csv.reader(f))
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise SitesFileError(
            f"Failed to read landing sites file {path}: {exc}"
        ) from exc

    if records and records[0] and records[0][0].strip() == SITES_CSV_HEADER:
        records = records[1:]

    sites = []
    for row_num, row in enumerate(records, 1):
        site = _parse_site_row(row)
        if site is None:
            logger.debug(f"Skipping invalid landing site row {row_num}: {row}")
            continue
        sites.append(site)

    logger.debug(f"Loaded {len(sites)} landing sites from {path}")
    return SiteCollection(sites=tuple(sites))


def load_landing_sites_if_specified(
    filename: Union[str, Path, None],
) -> Optional[SiteCollection]:
    """
    Load landing sites when a file is configured.

    Unlike :func:`load_landing_sites` this never raises: a missing, unreadable
    or empty sites file is reported as a warning and ``None`` is returned, so a
    logbook run falls back to coordinate labels.
    """
    if not filename:
        return None

    try:
        collection = load_landing_sites(filename)
    except SitesFileError as exc:
        logger.warning(f"Could not load landing sites: {exc}")
        return None

    if not len(collection):
        logger.warning(f"No valid landing sites found in {filename}")
        return None

    return collection
