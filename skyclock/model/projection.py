"""Polar projection of equatorial coordinates onto the unit disk.

The projected celestial pole sits at the centre, and radius 1 is the rim of
the dial: the horizon's farthest reach plus a 10 degree margin, limited to
``ANGLE_LIMIT`` degrees from the pole.
"""
from dataclasses import dataclass
import math
from typing import Callable

from .types import PlanePoint

ANGLE_LIMIT = 155.0
HORIZON_MARGIN_DEG = 10.0


@dataclass(frozen=True)
class Hemisphere:
    name: str
    to_angle: Callable[[float], float]
    declination_from_pole: Callable[[int], int]
    hours_to_radians: Callable[[float], float]
    degrees_to_radians: Callable[[float], float]
    ten_minute_grid_step: float

    def polar_angle(self, declination_deg: float) -> float:
        """Angular distance of a declination from the projected pole."""
        return self.to_angle(declination_deg) - 90.0


NORTH = Hemisphere(
    name="north",
    to_angle=lambda declination: 180.0 - declination,
    declination_from_pole=lambda angle: 90 - angle,
    hours_to_radians=lambda hour: hour / 12.0 * math.pi,
    degrees_to_radians=lambda degree: math.radians(degree),
    ten_minute_grid_step=180.0 / 72.0,
)

SOUTH = Hemisphere(
    name="south",
    to_angle=lambda declination: 180.0 + declination,
    declination_from_pole=lambda angle: -90 + angle,
    hours_to_radians=lambda hour: -hour / 12.0 * math.pi,
    degrees_to_radians=lambda degree: -math.radians(degree),
    ten_minute_grid_step=-180.0 / 72.0,
)

HEMISPHERES = {h.name: h for h in (NORTH, SOUTH)}


def get_hemisphere(name: str) -> Hemisphere:
    try:
        return HEMISPHERES[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown hemisphere: {name}") from None


def max_visible_angle(hemisphere: Hemisphere, latitude_deg: float) -> float:
    return min(hemisphere.to_angle(latitude_deg) + HORIZON_MARGIN_DEG, ANGLE_LIMIT)


class Projection:
    def __init__(self, hemisphere: Hemisphere, latitude_deg: float):
        self.hemisphere = hemisphere
        self.latitude_deg = latitude_deg
        self.max_angle = max_visible_angle(hemisphere, latitude_deg)

    def to_polar_radius(self, declination_deg: float) -> float:
        return self.hemisphere.polar_angle(declination_deg) / self.max_angle

    def _point(self, radius: float, hour_angle_h: float) -> PlanePoint:
        angle = self.hemisphere.hours_to_radians(hour_angle_h)
        return PlanePoint(-radius * math.sin(angle), -radius * math.cos(angle))

    def project(self, declination_deg: float, hour_angle_h: float) -> PlanePoint | None:
        radius = self.to_polar_radius(declination_deg)
        if radius >= 1.0:
            return None
        return self._point(radius, hour_angle_h)

    def project_clamped(self, declination_deg: float, hour_angle_h: float) -> PlanePoint:
        radius = min(self.to_polar_radius(declination_deg), 1.0)
        return self._point(radius, hour_angle_h)

    def outer_rim_point(self, bearing_deg: float) -> PlanePoint:
        radian = self.hemisphere.degrees_to_radians(bearing_deg)
        return PlanePoint(math.cos(radian), math.sin(radian))

    def rescale_plane_point(self, x: float, y: float) -> PlanePoint | None:
        """Rescale a point precomputed at the ``ANGLE_LIMIT`` scale; None outside the disk."""
        scale = ANGLE_LIMIT / self.max_angle
        scaled_x = x * scale
        scaled_y = y * scale
        if scaled_x * scaled_x + scaled_y * scaled_y < 1.0:
            return PlanePoint(scaled_x, scaled_y)
        return None
