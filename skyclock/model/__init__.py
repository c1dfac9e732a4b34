from .angles import circular_diff, normalize_degree, signed_circular_diff
from .bodies import SunAndMoonModel, phase_difference
from .clock import ObserverClock
from .horizon import HorizonModel, horizontal_to_equatorial
from .projection import ANGLE_LIMIT, NORTH, SOUTH, Hemisphere, Projection, get_hemisphere
from .sky import SkyModel
from .timescales import gmst, julian_centuries, julian_centuries_at_0, julian_day_at_0
from .types import (
    BodyPosition,
    DateRingEntry,
    EquatorialCoord,
    GeoPosition,
    Instant,
    PlanePoint,
)
from .view import SkyViewModel

__all__ = [
    "ANGLE_LIMIT",
    "NORTH",
    "SOUTH",
    "BodyPosition",
    "DateRingEntry",
    "EquatorialCoord",
    "GeoPosition",
    "Hemisphere",
    "HorizonModel",
    "Instant",
    "ObserverClock",
    "PlanePoint",
    "Projection",
    "SkyModel",
    "SkyViewModel",
    "SunAndMoonModel",
    "circular_diff",
    "get_hemisphere",
    "gmst",
    "horizontal_to_equatorial",
    "julian_centuries",
    "julian_centuries_at_0",
    "julian_day_at_0",
    "normalize_degree",
    "phase_difference",
    "signed_circular_diff",
]
