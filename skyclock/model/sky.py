import logging
import math
from typing import Sequence

from .projection import Projection
from .types import (
    ConstellationLineGeometry,
    ConstellationLineRecord,
    DeclinationRing,
    MilkyWayDot,
    MilkyWayDotRecord,
    PlanePoint,
    StarGeometry,
    StarRecord,
)

logger = logging.getLogger(__name__)

ECLIPTIC_OBLIQUITY_DEG = 23.44
DECLINATION_RING_STEP_DEG = 30


def ecliptic_longitude_to_equatorial(ecliptic_longitude_deg: float) -> tuple[float, float]:
    """Return (declination deg, right ascension deg) of a point on the ecliptic."""
    longitude = math.radians(ecliptic_longitude_deg)
    dec = math.asin(math.sin(math.radians(ECLIPTIC_OBLIQUITY_DEG)) * math.sin(longitude))
    ra = math.acos(max(-1.0, min(1.0, math.cos(longitude) / math.cos(dec))))
    if longitude > math.pi:
        ra = 2.0 * math.pi - ra
    return math.degrees(dec), math.degrees(ra)


class SkyModel:
    """Stars, constellation lines, Milky Way and reference circles on the dial.

    Catalog records are handed over once; the projected lists are rebuilt
    lazily whenever a different projection (latitude) is assigned.
    """

    def __init__(
        self,
        projection: Projection,
        stars: Sequence[StarRecord] = (),
        constellation_lines: Sequence[ConstellationLineRecord] = (),
        milky_way: Sequence[MilkyWayDotRecord] = (),
    ):
        self.projection = projection
        self._stars = list(stars)
        self._constellation_lines = list(constellation_lines)
        self._milky_way = list(milky_way)
        self._cache: dict | None = None
        self._cache_latitude: float | None = None

    @property
    def ten_minute_grid_step(self) -> float:
        return self.projection.hemisphere.ten_minute_grid_step

    @property
    def milky_way_dot_size(self) -> float:
        return 1.0 / self.projection.max_angle

    @property
    def declination_rings(self) -> list[DeclinationRing]:
        return self._computed()["declination_rings"]

    @property
    def ecliptic(self) -> list[PlanePoint]:
        return self._computed()["ecliptic"]

    @property
    def star_geometry(self) -> list[StarGeometry]:
        return self._computed()["stars"]

    @property
    def constellation_line_geometry(self) -> list[ConstellationLineGeometry]:
        return self._computed()["constellation_lines"]

    @property
    def milky_way_dots(self) -> list[MilkyWayDot]:
        return self._computed()["milky_way"]

    def _computed(self) -> dict:
        if self._cache is None or self._cache_latitude != self.projection.latitude_deg:
            logger.debug(
                "Projecting %d stars, %d lines, %d Milky Way dots for latitude %s",
                len(self._stars),
                len(self._constellation_lines),
                len(self._milky_way),
                self.projection.latitude_deg,
            )
            self._cache = {
                "declination_rings": self._create_declination_rings(),
                "ecliptic": self._create_ecliptic(),
                "stars": self._project_stars(),
                "constellation_lines": self._project_constellation_lines(),
                "milky_way": self._rescale_milky_way(),
            }
            self._cache_latitude = self.projection.latitude_deg
        return self._cache

    def _create_declination_rings(self) -> list[DeclinationRing]:
        projection = self.projection
        horizon_angle = projection.hemisphere.to_angle(projection.latitude_deg)
        rings = []
        for k in range(1, 6):
            angle = k * DECLINATION_RING_STEP_DEG
            if angle < horizon_angle:
                rings.append(
                    DeclinationRing(
                        projection.hemisphere.declination_from_pole(angle),
                        angle / projection.max_angle,
                    )
                )
        return rings

    def _create_ecliptic(self) -> list[PlanePoint]:
        projection = self.projection
        points = []
        for longitude in range(360):
            dec, ra = ecliptic_longitude_to_equatorial(float(longitude))
            radius = projection.to_polar_radius(dec)
            # right ascension turns into an hour angle
            angle = projection.hemisphere.degrees_to_radians(-ra)
            points.append(PlanePoint(-radius * math.sin(angle), -radius * math.cos(angle)))
        return points

    def _project_stars(self) -> list[StarGeometry]:
        geometry = []
        for star in self._stars:
            point = self.projection.project(star.dec_deg, -star.ra_deg / 15.0)
            if point is not None:
                geometry.append(StarGeometry(point.x, point.y, star.radius))
        return geometry

    def _project_constellation_lines(self) -> list[ConstellationLineGeometry]:
        geometry = []
        for line in self._constellation_lines:
            p1 = self.projection.project(line.dec1_deg, -line.ra1_deg / 15.0)
            p2 = self.projection.project(line.dec2_deg, -line.ra2_deg / 15.0)
            if p1 is not None and p2 is not None:
                geometry.append(ConstellationLineGeometry(p1.x, p1.y, p2.x, p2.y))
        return geometry

    def _rescale_milky_way(self) -> list[MilkyWayDot]:
        dots = []
        for record in self._milky_way:
            point = self.projection.rescale_plane_point(record.x, record.y)
            if point is not None:
                dots.append(MilkyWayDot(point.x, point.y, record.argb))
        return dots
