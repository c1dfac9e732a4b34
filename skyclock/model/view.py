import datetime
import logging
from typing import Callable

from .bodies import SunAndMoonModel, phase_difference
from .clock import ObserverClock
from .horizon import HorizonModel
from .projection import Hemisphere, Projection
from .sky import SkyModel
from .types import BodyPosition, GeoPosition

logger = logging.getLogger(__name__)


class SkyViewModel:
    """Everything a dial renderer reads, for one hemisphere configuration.

    Latitude-dependent geometry (sky, analemma, horizon) is rebuilt only when
    ``change_location`` is given a different latitude; time updates only touch
    the clock.
    """

    def __init__(
        self,
        hemisphere: Hemisphere,
        latitude_deg: float,
        longitude_deg: float,
        catalog=None,
        dut1_s: float = 0.0,
        tz: datetime.tzinfo | None = None,
        now: Callable[[], datetime.datetime] | None = None,
    ):
        self.hemisphere = hemisphere
        projection = Projection(hemisphere, latitude_deg)
        if catalog is not None:
            self._sky = SkyModel(
                projection,
                stars=catalog.list_stars(),
                constellation_lines=catalog.list_constellation_lines(),
                milky_way=catalog.list_milky_way(hemisphere.name),
            )
        else:
            self._sky = SkyModel(projection)
        self._bodies = SunAndMoonModel(projection)
        self._horizon = HorizonModel(projection)
        self._clock = ObserverClock(longitude_deg=longitude_deg, dut1_s=dut1_s, tz=tz, now=now)
        self._position = GeoPosition(latitude_deg, longitude_deg)

    @property
    def clock(self) -> ObserverClock:
        return self._clock

    @property
    def position(self) -> GeoPosition:
        return self._position

    @property
    def latitude_deg(self) -> float:
        return self._position.latitude_deg

    @property
    def longitude_deg(self) -> float:
        return self._position.longitude_deg

    def change_location(self, latitude_deg: float, longitude_deg: float) -> None:
        if latitude_deg != self._position.latitude_deg:
            logger.debug("Latitude changed to %s", latitude_deg)
            projection = Projection(self.hemisphere, latitude_deg)
            self._sky.projection = projection
            self._bodies.projection = projection
            self._horizon.projection = projection
        self._clock.longitude_deg = longitude_deg
        self._position = GeoPosition(latitude_deg, longitude_deg)

    # -- time ------------------------------------------------------------------

    def set_current_time(self) -> bool:
        return self._clock.set_current_time()

    def set_instant(self, dt: datetime.datetime) -> bool:
        return self._clock.set_instant(dt)

    def change_date_with_fixed_sidereal_time(self, rotate_deg: float) -> bool:
        return self._clock.change_date_with_fixed_sidereal_time(rotate_deg)

    def change_date_with_fixed_solar_time(self, rotate_deg: float) -> bool:
        return self._clock.change_date_with_fixed_solar_time(rotate_deg)

    def change_sidereal_time_with_fixed_date(self, rotate_deg: float) -> bool:
        return self._clock.change_sidereal_time_with_fixed_date(rotate_deg)

    @property
    def local_datetime(self) -> datetime.datetime:
        return self._clock.instant.local

    @property
    def hour(self) -> int:
        return self._clock.hour

    @property
    def minute(self) -> int:
        return self._clock.minute

    @property
    def second(self) -> int:
        return self._clock.second

    @property
    def sidereal_angle(self) -> float:
        return self._clock.sidereal_angle

    @property
    def solar_angle(self) -> float:
        return self._clock.solar_angle

    @property
    def offset(self) -> float:
        return self._clock.offset

    @property
    def date_ring(self):
        return self._clock.date_ring

    @property
    def julian_centuries(self) -> float:
        return self._clock.julian_centuries

    # -- geometry ----------------------------------------------------------------

    @property
    def horizon(self):
        return self._horizon.horizon

    @property
    def alt_azimuth_grid(self):
        return self._horizon.alt_azimuth_grid

    @property
    def direction_labels(self):
        return self._horizon.direction_labels

    @property
    def star_geometry(self):
        return self._sky.star_geometry

    @property
    def constellation_line_geometry(self):
        return self._sky.constellation_line_geometry

    @property
    def milky_way_dots(self):
        return self._sky.milky_way_dots

    @property
    def milky_way_dot_size(self) -> float:
        return self._sky.milky_way_dot_size

    @property
    def declination_rings(self):
        return self._sky.declination_rings

    @property
    def ecliptic(self):
        return self._sky.ecliptic

    @property
    def analemma(self):
        return self._bodies.analemma

    @property
    def month_ticks(self):
        return self._bodies.month_ticks

    @property
    def sun_position(self) -> BodyPosition:
        return self._bodies.sun_position(self._clock.julian_centuries)

    @property
    def moon_position(self) -> BodyPosition:
        return self._bodies.moon_position(self._clock.julian_centuries)

    @property
    def phase_difference(self) -> float:
        jc = self._clock.julian_centuries
        return phase_difference(
            self._bodies.moon_position(jc).ecliptic_longitude_deg,
            self._bodies.sun_position(jc).ecliptic_longitude_deg,
        )

    @property
    def ten_minute_grid_step(self) -> float:
        return self._sky.ten_minute_grid_step

    @property
    def direction(self) -> bool:
        """True when the dial turns counter-clockwise (southern configuration)."""
        return self.ten_minute_grid_step < 0.0
