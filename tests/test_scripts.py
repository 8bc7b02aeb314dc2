"""
End-to-end tests of the command-line scripts on IGC files in tmp_path.
"""

import pytest

from conftest import SAMPLE_IGC
from igc_logbook.scripts import logbook, parse_igc, show_config

SECOND_IGC = """\
HFDTE190725
HFPLTPILOTINCHARGE:John Roe
HFGTYGLIDERTYPE:Advance Sigma 11
B1000004600000N00700000EA0080000800
B1230004600000N00700000EA0080000800
"""


@pytest.fixture
def flights_dir(tmp_path):
    directory = tmp_path / "flights"
    directory.mkdir()
    (directory / "a.igc").write_text(SAMPLE_IGC, encoding="latin-1")
    (directory / "b.igc").write_text(SECOND_IGC, encoding="latin-1")
    return directory


class TestLogbookScript:
    def test_one_line_per_flight_and_total(self, flights_dir, capsys):
        exit_code = logbook.main(
            [str(flights_dir), "--format", "{date} {pilot} {flight_duration}"]
        )
        assert exit_code == 0

        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            "2025-07-18 Jane Doe 1h0m",
            "2025-07-19 John Roe 2h30m",
            "# total flight time: 3h30m",
        ]

    def test_sites_and_summary(self, flights_dir, sites_csv, capsys):
        exit_code = logbook.main(
            [
                str(flights_dir),
                "--sites",
                str(sites_csv),
                "--format",
                "{takeoff_site}",
                "--summary",
                "--summary-format",
                "{total_flights} {first_date} {last_date} "
                "{avg_flight_time} {max_altitude}",
            ]
        )
        assert exit_code == 0

        lines = capsys.readouterr().out.splitlines()
        assert lines[:2] == ["Forclaz", "46.000,7.000"]
        assert lines[-1] == "2 2025-07-18 2025-07-19 1h45m 1800"

    def test_single_flight_has_no_total(self, flights_dir, capsys):
        exit_code = logbook.main(
            [str(flights_dir / "a.igc"), "--format", "{pilot}", "--altitude-unit", "ft"]
        )
        assert exit_code == 0
        assert capsys.readouterr().out.splitlines() == ["Jane Doe"]

    def test_unparseable_file_is_skipped(self, flights_dir, capsys):
        (flights_dir / "c.igc").write_text("garbage\n")
        exit_code = logbook.main([str(flights_dir), "--format", "{pilot}"])
        assert exit_code == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines == ["Jane Doe", "John Roe", "# total flight time: 3h30m"]

    def test_no_igc_files(self, tmp_path):
        assert logbook.main([str(tmp_path)]) == 1

    def test_missing_path(self, tmp_path):
        assert logbook.main([str(tmp_path / "nowhere")]) == 1

    def test_bad_template(self, flights_dir, capsys):
        assert logbook.main([str(flights_dir), "--format", "{wingspan}"]) == 1
        assert capsys.readouterr().out == ""

    def test_template_failure_skips_only_that_flight(self, flights_dir, capsys):
        # "Ozone Rush 6" has no character 12, "Advance Sigma 11" does
        exit_code = logbook.main([str(flights_dir), "--format", "{glider_type[12]}"])
        assert exit_code == 1
        assert capsys.readouterr().out.splitlines() == ["a"]

    def test_list_fields(self, capsys):
        assert logbook.main(["--list-fields"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert "takeoff_site" in out
        assert "max_climb_rate" in out
        heading = "# Summary template fields (--summary-format)"
        assert heading in out
        summary_fields = out[out.index(heading) :]
        assert "total_flights" in summary_fields
        assert "unique_pilots" in summary_fields
        assert "flights" not in summary_fields

    def test_invalid_unit_rejected(self, flights_dir):
        with pytest.raises(SystemExit):
            logbook.main([str(flights_dir), "--speed-unit", "warp"])


class TestParseScript:
    def test_full_dump(self, sample_igc_file, capsys):
        assert parse_igc.main([str(sample_igc_file)]) == 0
        out = capsys.readouterr().out
        assert "Pilot: Jane Doe" in out
        assert "Crew:" not in out
        assert "Glider ID:" not in out
        assert "GPS Datum: WGS-1984" in out
        assert "Fixes (3 total):" in out
        first_fix = "  12:00:00: (45.81400, 6.24600), Alt(GPS): 1500m, Alt(Baro): 1490m"
        assert first_fix in out

    def test_summary_in_feet(self, sample_igc_file, capsys):
        exit_code = parse_igc.main(
            [str(sample_igc_file), "--summary", "--altitude-unit", "ft"]
        )
        assert exit_code == 0
        lines = capsys.readouterr().out.splitlines()
        fix_lines = [line for line in lines if line.startswith("  ")]
        assert len(fix_lines) == 2
        assert fix_lines[0].startswith("  First: 12:00:00")
        assert fix_lines[1].startswith("  Last:  13:00:00")
        assert "Alt(GPS): 4921ft" in fix_lines[0]

    def test_unreadable_file(self, tmp_path):
        assert parse_igc.main([str(tmp_path / "missing.igc")]) == 1


class TestShowConfigScript:
    def test_defaults_without_config_file(self, config_dirs, capsys):
        assert show_config.main([]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[:3] == [
            "Current configuration:",
            "Config file used: No config file found (using defaults)",
            "",
        ]
        assert "altitude-unit: m" in lines
        assert "speed-unit: kmh" in lines
        assert "sites-database-location: " in lines
        assert "speed-window: 5" in lines

    def test_file_environment_and_flags(self, config_dirs, monkeypatch, capsys):
        work, _ = config_dirs
        config_path = work / "igc-tool.toml"
        config_path.write_text(
            'altitude-unit = "ft"\n'
            'speed-unit = "kts"\n'
            "speed-window = 9.0\n"
            'sites-database-location = "/data/sites.csv"\n'
        )
        monkeypatch.setenv("IGC_SPEED_UNIT", "mph")

        assert show_config.main(["--climb-unit", "fpm"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[1] == f"Config file used: {config_path.resolve()}"
        assert "altitude-unit: ft" in lines
        assert "speed-unit: mph" in lines
        assert "climb-unit: fpm" in lines
        assert "time-format: 24h" in lines
        assert "speed-window: 9" in lines
        assert "sites-database-location: /data/sites.csv" in lines
