import datetime
from pathlib import Path
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from skyclock.errors import ConfigError

if TYPE_CHECKING:
    import tomli as tomllib
else:
    try:
        import tomllib
    except ModuleNotFoundError:  # Python < 3.11
        import tomli as tomllib

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "skyclock" / "config.toml"

# DUT1 = UT1 - UTC, fixed at the 2020-06-25 bulletin value.
DEFAULT_DUT1_S = -0.243


class Config:
    def __init__(self, data: dict):
        self._data = data

    @property
    def site_latitude_deg(self):
        return self._data.get("site", {}).get("latitude_deg", None)

    @property
    def site_longitude_deg(self):
        return self._data.get("site", {}).get("longitude_deg", None)

    @property
    def site_utc_offset_hours(self):
        return self._data.get("site", {}).get("utc_offset_hours", None)

    @property
    def site_timezone_name(self):
        return self._data.get("site", {}).get("timezone", None)

    @property
    def site_timezone(self) -> datetime.tzinfo | None:
        name = self.site_timezone_name
        if name is not None:
            try:
                return ZoneInfo(name)
            except (ZoneInfoNotFoundError, TypeError, ValueError) as e:
                raise ConfigError(f"Unknown site.timezone: {name!r}") from e
        hours = self.site_utc_offset_hours
        if hours is None:
            return None
        try:
            return datetime.timezone(datetime.timedelta(hours=float(hours)))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid site.utc_offset_hours: {hours!r}") from e

    @property
    def clock_dut1_s(self) -> float:
        return float(self._data.get("clock", {}).get("dut1_s", DEFAULT_DUT1_S))

    @property
    def sky_hemisphere(self):
        return self._data.get("sky", {}).get("hemisphere", "north")

    @property
    def catalog_backend(self):
        return self._data.get("catalog", {}).get("backend", "local")

    @property
    def catalog_data_dir(self):
        path = self._data.get("catalog", {}).get("data_dir", None)
        if not path:
            return None
        return Path(path).expanduser()


def load_config(path: Path | None = None) -> Config:
    explicit_path = path
    path = path or DEFAULT_CONFIG_PATH

    if not path.exists():
        if explicit_path is not None:
            raise FileNotFoundError(f"Config file not found: {path}")
        # Return default config if default file missing
        return Config({})

    with open(path, "rb") as f:
        data = tomllib.load(f)

    return Config(data)
