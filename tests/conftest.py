"""
Shared pytest fixtures for igc_logbook tests.
"""

import datetime
import os

import pytest

from igc_logbook.flight_data import Fix, Flight

BASE_TIME = datetime.datetime(2025, 7, 18, 12, 0, 0, tzinfo=datetime.timezone.utc)


def make_fix(seconds, lat=45.0, lon=6.0, alt=1000, alt_baro=None):
    """Fix *seconds* after BASE_TIME."""
    return Fix(
        time=BASE_TIME + datetime.timedelta(seconds=seconds),
        lat=lat,
        lon=lon,
        alt_gps_m=alt,
        alt_baro_m=alt if alt_baro is None else alt_baro,
    )


def make_flight(*fixes, **metadata):
    metadata.setdefault("date", BASE_TIME.date())
    return Flight(fixes=tuple(fixes), **metadata)


@pytest.fixture
def sample_flight():
    """Three fixes over one hour near Annecy, climbing then sinking."""
    return make_flight(
        make_fix(0, lat=45.814, lon=6.246, alt=1500),
        make_fix(1800, lat=45.815, lon=6.247, alt=1800),
        make_fix(3600, lat=45.816, lon=6.248, alt=1600),
        pilot="TestPilot",
        crew="TestCrew",
        glider_type="TestGlider",
        glider_id="ABC123",
        competition_id="COMP456",
        flight_recorder_type="TestFR",
    )


SAMPLE_IGC = """\
AXCT1234567890
HFDTE180725
HFPLTPILOTINCHARGE:Jane Doe
HFCM2CREW2:NIL
HFGTYGLIDERTYPE:Ozone Rush 6
HFGIDGLIDERID:NKN
HFDTMGPSDATUM:WGS-1984
HFFTYFRTYPE:XCTrack,0.9
HFTZNTIMEZONE:2
B1200004548840N00614760EA0149001500
B1230004548900N00614820EA0179001800
B1300004548960N00614880EA0159001600
"""


@pytest.fixture
def sample_igc_file(tmp_path):
    path = tmp_path / "2025-07-18-annecy.igc"
    path.write_text(SAMPLE_IGC, encoding="latin-1")
    return path


@pytest.fixture
def sites_csv(tmp_path):
    path = tmp_path / "sites.csv"
    path.write_text(
        "name,lat,lon,radius\n"
        "Forclaz,45.814,6.246,500\n"
        "Doussard,45.780,6.220,300\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def config_dirs(tmp_path, monkeypatch):
    """Empty working and home directories, with no IGC_* variables set."""
    work = tmp_path / "work"
    home = tmp_path / "home"
    work.mkdir()
    home.mkdir()
    monkeypatch.chdir(work)
    monkeypatch.setenv("HOME", str(home))
    for name in list(os.environ):
        if name.upper().startswith("IGC_"):
            monkeypatch.delenv(name)
    return work, home
