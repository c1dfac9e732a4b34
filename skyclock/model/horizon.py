"""Horizon, altitude/azimuth grid and compass labels for a latitude.

Curves in ``alt_azimuth_grid`` may contain ``None`` where a sample falls
outside the dial; a ``None`` breaks the path.
"""
import logging
import math

from .projection import Projection
from .types import DirectionLabel, EquatorialCoord, PlanePoint

logger = logging.getLogger(__name__)

TWILIGHT_ALTITUDE_DEG = -18.0
ALTITUDE_CIRCLES_DEG = (TWILIGHT_ALTITUDE_DEG, 30.0, 60.0)
AZIMUTH_LINES_DEG = (45.0, 90.0, 135.0, 225.0, 270.0, 315.0)
DIRECTION_LETTERS = ("N", "E", "S", "W")
LABEL_ALTITUDE_DEG = -5.0

Curve = list[PlanePoint | None]


def horizontal_to_equatorial(
    azimuth_deg: float, altitude_deg: float, latitude_deg: float
) -> EquatorialCoord:
    """Declination (deg) and hour angle (hours) of an alt/az direction."""
    lat = math.radians(latitude_deg)
    cos_lat, sin_lat = math.cos(lat), math.sin(lat)
    alt = math.radians(altitude_deg)
    cos_alt, sin_alt = math.cos(alt), math.sin(alt)
    az = math.radians(azimuth_deg)
    sin_az = math.sin(az)
    sin_dec = sin_lat * sin_alt + cos_lat * cos_alt * math.cos(az)
    dec = math.asin(max(-1.0, min(1.0, sin_dec)))
    cos_dec, sin_dec = math.cos(dec), math.sin(dec)

    if dec != 0.0:
        ha = -math.asin(max(-1.0, min(1.0, cos_alt * sin_az / cos_dec)))
        if not (sin_alt - sin_dec * sin_lat) / cos_dec / cos_lat > 0.0:
            ha = math.pi - ha
    else:
        ha = 0.0

    return EquatorialCoord(math.degrees(dec), ha / math.pi * 12.0)


def horizon_declination(hour_angle_h: float, latitude_deg: float) -> float:
    return math.degrees(
        math.atan(-math.cos(hour_angle_h / 12.0 * math.pi) / math.tan(math.radians(latitude_deg)))
    )


class HorizonModel:
    def __init__(self, projection: Projection):
        self.projection = projection
        self._cache: dict | None = None
        self._cache_latitude: float | None = None

    @property
    def latitude_deg(self) -> float:
        return self.projection.latitude_deg

    @property
    def horizon(self) -> list[PlanePoint]:
        return self._computed()["horizon"]

    @property
    def alt_azimuth_grid(self) -> list[Curve]:
        return self._computed()["alt_azimuth_grid"]

    @property
    def direction_labels(self) -> list[DirectionLabel]:
        return self._computed()["direction_labels"]

    def _computed(self) -> dict:
        if self._cache is None or self._cache_latitude != self.latitude_deg:
            logger.debug("Rebuilding horizon geometry for latitude %s", self.latitude_deg)
            self._cache = {
                "horizon": self._create_horizon(),
                "alt_azimuth_grid": self._create_alt_azimuth_grid(),
                "direction_labels": self._create_direction_labels(),
            }
            self._cache_latitude = self.latitude_deg
        return self._cache

    def _create_horizon(self) -> list[PlanePoint]:
        projection = self.projection
        if self.latitude_deg == 0.0:
            half_circle = []
            for degree in range(181):
                altitude = math.radians(degree - 90.0)
                half_circle.append(PlanePoint(math.sin(altitude), math.cos(altitude)))
            half_circle.append(PlanePoint(-1.0, 0.0))
            return half_circle

        curve = [
            projection.project_clamped(horizon_declination(k / 15.0, self.latitude_deg), k / 15.0)
            for k in range(361)
        ]
        if projection.hemisphere.to_angle(self.latitude_deg) < 180.0:
            curve.extend(projection.outer_rim_point(float(k)) for k in range(361))
        return curve

    def _create_alt_azimuth_grid(self) -> list[Curve]:
        grid = [self._create_horizon_line()]
        grid.extend(self._create_altitude_line(altitude) for altitude in ALTITUDE_CIRCLES_DEG)
        grid.append(self._create_meridian(is_upper=True))
        grid.append(self._create_meridian(is_upper=False))
        grid.extend(self._create_azimuth_line(azimuth) for azimuth in AZIMUTH_LINES_DEG)
        return grid

    def _create_horizon_line(self) -> Curve:
        if self.latitude_deg == 0.0:
            return [PlanePoint(1.0, 0.0), PlanePoint(-1.0, 0.0)]
        return [
            self.projection.project(horizon_declination(k / 15.0, self.latitude_deg), k / 15.0)
            for k in range(361)
        ]

    def _create_altitude_line(self, altitude_deg: float) -> Curve:
        return [self._project_horizontal(float(azimuth), altitude_deg) for azimuth in range(361)]

    def _create_azimuth_line(self, azimuth_deg: float) -> Curve:
        return [self._project_horizontal(azimuth_deg, float(altitude)) for altitude in range(91)]

    def _create_meridian(self, is_upper: bool) -> list[PlanePoint]:
        projection = self.projection
        latitude = self.latitude_deg
        hour_angle = 0.0 if is_upper else 12.0
        pole_near_zenith = float(projection.hemisphere.declination_from_pole(0))

        if latitude > 0.0:
            if pole_near_zenith > 0.0:
                pole_near_horizon = pole_near_zenith
            else:
                pole_near_horizon = -90.0 + projection.max_angle
            horizon_at_meridian = -90.0 + latitude if is_upper else 90.0 - latitude
        else:
            if pole_near_zenith < 0.0:
                pole_near_horizon = pole_near_zenith
            else:
                pole_near_horizon = 90.0 - projection.max_angle
            horizon_at_meridian = 90.0 + latitude if is_upper else -90.0 - latitude

        return [
            projection.project_clamped(pole_near_horizon, hour_angle),
            projection.project_clamped(horizon_at_meridian, hour_angle),
        ]

    def _create_direction_labels(self) -> list[DirectionLabel]:
        labels = []
        for index, text in enumerate(DIRECTION_LETTERS):
            azimuth = index * 90.0
            if self._project_horizontal(azimuth, 0.0) is None:
                continue
            dec, ha = horizontal_to_equatorial(azimuth, LABEL_ALTITUDE_DEG, self.latitude_deg)
            point = self.projection.project_clamped(dec, ha)
            labels.append(DirectionLabel(text, point.x, point.y))
        return labels

    def _project_horizontal(self, azimuth_deg: float, altitude_deg: float) -> PlanePoint | None:
        dec, ha = horizontal_to_equatorial(azimuth_deg, altitude_deg, self.latitude_deg)
        return self.projection.project(dec, ha)
