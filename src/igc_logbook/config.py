import logging
import pathlib
import tomllib
import typing

import pydantic
import pydantic_settings

from igc_logbook.units import AltitudeUnit, ClimbUnit, SpeedUnit, TimeFormat

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "igc-tool.toml"

DEFAULT_LOGBOOK_FORMAT = (
    "{date} {takeoff_site} {takeoff_alt}{altitude_unit} "
    "{altitude_diff}{altitude_unit} {flight_duration} "
    "{max_altitude}{altitude_unit} {max_ground_speed}{speed_unit} "
    "+{max_climb_rate:g}{vertical_speed_unit} "
    "-{max_descent_rate:g}{vertical_speed_unit}"
)

DEFAULT_SUMMARY_FORMAT = (
    "# {total_flights} flights, {first_date} .. {last_date}, "
    "total {total_time}, avg {avg_flight_time}, "
    "max alt {max_altitude}{altitude_unit}"
)


def config_search_dirs() -> list[pathlib.Path]:
    """Directories searched for igc-tool.toml, highest priority first."""
    home = pathlib.Path.home()
    return [
        pathlib.Path("."),
        home / ".config" / "igc-tool",
        home,
        pathlib.Path("/etc/igc-tool"),
    ]


def find_config_file(
    search_dirs: typing.Optional[typing.Iterable[pathlib.Path]] = None,
) -> typing.Optional[pathlib.Path]:
    """Return the first igc-tool.toml found in *search_dirs*, or None."""
    if search_dirs is None:
        search_dirs = config_search_dirs()
    for directory in search_dirs:
        candidate = directory / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
    return None


class IGCToolTomlSource(pydantic_settings.TomlConfigSettingsSource):
    """igc-tool.toml reader accepting hyphenated keys (``altitude-unit``)."""

    def _read_file(self, file_path: pathlib.Path) -> dict[str, typing.Any]:
        try:
            data = super()._read_file(file_path)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning(f"Error reading config file {file_path}: {e}")
            return {}
        return {key.replace("-", "_").upper(): value for key, value in data.items()}


class IGCLogbookConfig(pydantic_settings.BaseSettings):
    """
    Settings from defaults, igc-tool.toml, ``.env`` and ``IGC_*`` variables.

    Later sources in that list override earlier ones; command-line flags
    override all of them.
    """

    model_config = pydantic_settings.SettingsConfigDict(
        env_prefix="IGC_", env_file=".env", extra="ignore"
    )

    # --- Units ---
    ALTITUDE_UNIT: str = AltitudeUnit.METERS
    SPEED_UNIT: str = SpeedUnit.KMH
    CLIMB_UNIT: str = ClimbUnit.MS
    TIME_FORMAT: str = TimeFormat.H24

    # --- Logbook ---
    LOGBOOK_FORMAT: str = DEFAULT_LOGBOOK_FORMAT
    SUMMARY_FORMAT: str = DEFAULT_SUMMARY_FORMAT

    # CSV with columns name,lat,lon,radius
    SITES_DATABASE_LOCATION: typing.Optional[str] = None

    # Units: Seconds
    SPEED_WINDOW: float = 5.0

    _config_file: typing.Optional[pathlib.Path] = pydantic.PrivateAttr(default=None)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[pydantic_settings.BaseSettings],
        init_settings: pydantic_settings.PydanticBaseSettingsSource,
        env_settings: pydantic_settings.PydanticBaseSettingsSource,
        dotenv_settings: pydantic_settings.PydanticBaseSettingsSource,
        file_secret_settings: pydantic_settings.PydanticBaseSettingsSource,
    ) -> tuple[pydantic_settings.PydanticBaseSettingsSource, ...]:
        sources = [init_settings, env_settings, dotenv_settings]
        config_file = find_config_file()
        if config_file is not None:
            sources.append(IGCToolTomlSource(settings_cls, toml_file=config_file))
        sources.append(file_secret_settings)
        return tuple(sources)

    def model_post_init(self, __context: typing.Any) -> None:
        self._config_file = find_config_file()

    @property
    def config_file(self) -> typing.Optional[pathlib.Path]:
        """The igc-tool.toml these settings were read from, if any."""
        return self._config_file


config = IGCLogbookConfig()
