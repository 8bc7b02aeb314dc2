"""
Tests for the IGC reader and IGC file discovery.
"""

import datetime

import pytest

from conftest import SAMPLE_IGC
from igc_logbook.flight_data import IGCLogbookError, IGCParseError
from igc_logbook.igc_file import (
    find_igc_files,
    parse_igc_coordinate,
    parse_igc_date,
    parse_igc_file,
    parse_igc_lines,
    parse_igc_time,
)

UTC = datetime.timezone.utc


class TestRecordFields:
    @pytest.mark.unit
    def test_latitude(self):
        assert parse_igc_coordinate("5216203N") == pytest.approx(52.27005)
        assert parse_igc_coordinate("3351240S") == pytest.approx(-33.854)

    @pytest.mark.unit
    def test_longitude(self):
        assert parse_igc_coordinate("02054885E", is_longitude=True) == pytest.approx(
            20.914750
        )
        assert parse_igc_coordinate("00006198W", is_longitude=True) == pytest.approx(
            -0.1033
        )

    @pytest.mark.unit
    def test_bad_coordinate(self):
        with pytest.raises(ValueError):
            parse_igc_coordinate("52162")
        with pytest.raises(ValueError):
            parse_igc_coordinate("5216203X")

    @pytest.mark.unit
    def test_time(self):
        assert parse_igc_time("000000") == 0
        assert parse_igc_time("123456") == 12 * 3600 + 34 * 60 + 56
        with pytest.raises(ValueError):
            parse_igc_time("12345")

    @pytest.mark.unit
    def test_date(self):
        assert parse_igc_date("180725") == datetime.date(2025, 7, 18)
        assert parse_igc_date("DATE:180725,01") == datetime.date(2025, 7, 18)
        assert parse_igc_date("010199") == datetime.date(1999, 1, 1)
        assert parse_igc_date("320125") is None
        assert parse_igc_date("DATE:") is None

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value, year",
        [("010168", 2068), ("010169", 1969), ("010179", 1979), ("010100", 2000)],
    )
    def test_two_digit_year_pivot(self, value, year):
        assert parse_igc_date(value).year == year


class TestParseIGC:
    @pytest.mark.unit
    def test_headers(self, sample_igc_file):
        flight = parse_igc_file(sample_igc_file)
        assert flight.date == datetime.date(2025, 7, 18)
        assert flight.pilot == "Jane Doe"
        assert flight.crew == "NIL"
        assert flight.glider_type == "Ozone Rush 6"
        assert flight.glider_id == "NKN"
        assert flight.gps_datum == "WGS-1984"
        assert flight.flight_recorder_type == "XCTrack,0.9"
        assert flight.time_zone == "2"
        assert flight.competition_id == ""

    @pytest.mark.unit
    def test_fixes(self, sample_igc_file):
        flight = parse_igc_file(sample_igc_file)
        assert len(flight.fixes) == 3

        takeoff = flight.takeoff
        assert takeoff.time == datetime.datetime(2025, 7, 18, 12, 0, tzinfo=UTC)
        assert takeoff.lat == pytest.approx(45.814)
        assert takeoff.lon == pytest.approx(6.246)
        assert takeoff.alt_baro_m == 1490
        assert takeoff.alt_gps_m == 1500
        assert takeoff.valid

        assert flight.landing.time == datetime.datetime(2025, 7, 18, 13, 0, tzinfo=UTC)
        assert flight.landing.alt_gps_m == 1600

    @pytest.mark.unit
    def test_invalid_fixes_are_kept(self):
        flight = parse_igc_lines(
            ["HFDTE180725", "B1200004548840N00614760EV0000000000"]
        )
        assert len(flight.fixes) == 1
        assert not flight.fixes[0].valid

    @pytest.mark.unit
    def test_malformed_b_records_are_skipped(self):
        flight = parse_igc_lines(
            [
                "HFDTE180725",
                "B1200004548840N00614760EA01500",  # too short
                "B1200004548840N00614760EX0150001500",  # bad validity
                "B12XX004548840N00614760EA0150001500",  # bad time
                "B1200104548840N00614760EA0150001510",
            ]
        )
        assert len(flight.fixes) == 1
        assert flight.fixes[0].alt_gps_m == 1510

    @pytest.mark.unit
    def test_midnight_rollover(self):
        flight = parse_igc_lines(
            [
                "HFDTEDATE:180725,01",
                "B2359584548840N00614760EA0150001500",
                "B0000024548840N00614760EA0150001500",
            ]
        )
        after_midnight = datetime.datetime(2025, 7, 19, 0, 0, 2, tzinfo=UTC)
        assert flight.fixes[1].time == after_midnight
        elapsed = flight.fixes[1].time - flight.fixes[0].time
        assert elapsed == datetime.timedelta(seconds=4)

    @pytest.mark.unit
    def test_missing_date(self):
        flight = parse_igc_lines(["B1200004548840N00614760EA0150001500"])
        assert flight.date is None
        assert flight.fixes[0].time.time() == datetime.time(12, 0)

    @pytest.mark.unit
    def test_no_igc_data(self, tmp_path):
        path = tmp_path / "empty.igc"
        path.write_text("just some text\n")
        with pytest.raises(IGCParseError):
            parse_igc_file(path)

    @pytest.mark.unit
    def test_missing_file(self, tmp_path):
        with pytest.raises(IGCParseError):
            parse_igc_file(tmp_path / "missing.igc")

    @pytest.mark.unit
    def test_header_only_file(self):
        flight = parse_igc_lines(SAMPLE_IGC.splitlines()[:3])
        assert flight.pilot == "Jane Doe"
        assert flight.fixes == ()


class TestFindIGCFiles:
    @pytest.fixture
    def igc_tree(self, tmp_path):
        for name in ("a.igc", "b.IGC", "notes.txt", "sub/c.igc"):
            path = tmp_path / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("")
        return tmp_path

    @pytest.mark.unit
    def test_directory(self, igc_tree):
        found = find_igc_files([igc_tree])
        assert [p.name for p in found] == ["a.igc", "b.IGC"]

    @pytest.mark.unit
    def test_directory_recursive(self, igc_tree):
        found = find_igc_files([igc_tree], recursive=True)
        assert [p.name for p in found] == ["a.igc", "b.IGC", "c.igc"]

    @pytest.mark.unit
    def test_files_and_directories(self, igc_tree):
        found = find_igc_files([igc_tree / "sub" / "c.igc", str(igc_tree / "sub")])
        assert [p.name for p in found] == ["c.igc", "c.igc"]

    @pytest.mark.unit
    def test_not_an_igc_file(self, igc_tree):
        with pytest.raises(IGCLogbookError):
            find_igc_files([igc_tree / "notes.txt"])

    @pytest.mark.unit
    def test_missing_path(self, tmp_path):
        with pytest.raises(IGCLogbookError):
            find_igc_files([tmp_path / "nowhere"])

    @pytest.mark.unit
    def test_empty_directory(self, tmp_path):
        assert find_igc_files([tmp_path]) == []
