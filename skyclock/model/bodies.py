"""Positions of the Sun and the Moon on the dial, and the analemma.

Sun: two-body Kepler orbit with fixed orbital elements. Moon: truncated
trigonometric series for ecliptic longitude and latitude,
http://astronomy.webcrow.jp/astrometry/moon_ecliptic_coordinate.html
"""
import logging
import math

from .angles import normalize_degree
from .projection import Projection
from .timescales import DAYS_PER_CENTURY, J2000_EPOCH_JC, julian_centuries
from .types import BodyPosition, PlanePoint

logger = logging.getLogger(__name__)

# Orbital elements of the Earth
ECCENTRICITY = 0.0167086
AXIAL_TILT_DEG = 23.43658
LONGITUDE_OF_PERIHELION_DEG = 102.9 + 180.0
MEAN_LONGITUDE_AT_EPOCH_DEG = 280.46645683
ORBITAL_PERIOD_DAYS = 365.256363004

KEPLER_ITERATIONS = 3

ANALEMMA_SAMPLES = 25
ANALEMMA_STEP_DAYS = 15
MONTH_START_DAY_OFFSETS = (0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334)
ANALEMMA_REFERENCE_JC = julian_centuries(2020, 1, 1, 0)

# (amplitude deg, phase deg, rate deg per Julian year)
MOON_LONGITUDE_TERMS = (
    (1.2740, 100.738, 4133.3536),
    (0.6583, 235.700, 8905.3422),
    (0.2136, 269.926, 9543.9773),
    (0.1856, 177.525, 359.9905),
    (0.1143, 6.546, 9664.0404),
    (0.0588, 214.22, 638.635),
    (0.0572, 103.21, 3773.363),
    (0.0533, 10.66, 13677.331),
    (0.0459, 238.18, 8545.352),
    (0.0410, 137.43, 4411.998),
    (0.0348, 117.84, 4452.671),
    (0.0305, 312.49, 5131.979),
    (0.0153, 130.84, 758.698),
    (0.0125, 141.51, 14436.029),
    (0.0110, 231.59, 4892.052),
    (0.0107, 336.44, 13038.696),
    (0.0100, 44.89, 14315.966),
    (0.0085, 201.5, 8266.71),
    (0.0079, 278.2, 4493.34),
    (0.0068, 53.2, 9265.33),
    (0.0052, 197.2, 319.32),
    (0.0050, 295.4, 4812.66),
    (0.0048, 235.0, 19.34),
    (0.0040, 13.2, 13317.34),
    (0.0040, 145.6, 18449.32),
    (0.0040, 119.5, 1.33),
    (0.0039, 111.3, 17810.68),
    (0.0037, 349.1, 5410.62),
    (0.0027, 272.5, 9183.99),
    (0.0026, 107.2, 13797.39),
    (0.0024, 211.9, 998.63),
    (0.0024, 252.8, 9224.66),
    (0.0022, 240.6, 8185.36),
    (0.0021, 87.5, 9903.97),
    (0.0021, 175.1, 719.98),
    (0.0021, 105.6, 3413.37),
    (0.0020, 55.0, 19.34),
    (0.0018, 4.1, 4013.29),
    (0.0016, 242.2, 18569.38),
    (0.0012, 339.0, 12678.71),
    (0.0011, 276.5, 19208.02),
    (0.0009, 218.0, 8586.0),
    (0.0008, 188.0, 14037.3),
    (0.0008, 204.0, 7906.7),
    (0.0007, 140.0, 4052.0),
    (0.0007, 275.0, 4853.3),
    (0.0007, 216.0, 278.6),
    (0.0006, 128.0, 1118.7),
    (0.0005, 247.0, 22582.7),
    (0.0005, 181.0, 19088.0),
    (0.0005, 114.0, 17450.7),
    (0.0005, 332.0, 5091.3),
    (0.0004, 313.0, 398.7),
    (0.0004, 278.0, 120.1),
    (0.0004, 71.0, 9584.7),
    (0.0004, 20.0, 720.0),
    (0.0003, 83.0, 3814.0),
    (0.0003, 66.0, 3494.7),
    (0.0003, 147.0, 18089.3),
    (0.0003, 311.0, 5492.0),
    (0.0003, 161.0, 40.7),
    (0.0003, 280.0, 23221.3),
)

MOON_LONGITUDE_AUX_TERMS = (
    (0.0040, 119.5, 1.33),
    (0.0020, 55.0, 19.34),
    (0.0006, 71.0, 0.2),
    (0.0006, 54.0, 19.3),
)

MOON_LATITUDE_TERMS = (
    (0.2806, 228.235, 9604.0088),
    (0.2777, 138.311, 60.0316),
    (0.1732, 142.427, 4073.3220),
    (0.0554, 194.01, 8965.374),
    (0.0463, 172.55, 698.667),
    (0.0326, 328.96, 13737.362),
    (0.0172, 3.18, 14375.997),
    (0.0093, 277.4, 8845.31),
    (0.0088, 176.7, 4711.96),
    (0.0082, 144.9, 3713.33),
    (0.0043, 307.6, 5470.66),
    (0.0042, 103.9, 18509.35),
    (0.0034, 319.9, 4433.31),
    (0.0025, 196.5, 8605.38),
    (0.0022, 331.4, 13377.37),
    (0.0021, 170.1, 1058.66),
    (0.0019, 230.7, 9244.02),
    (0.0018, 243.3, 8206.68),
    (0.0018, 270.8, 5192.01),
    (0.0017, 99.8, 14496.06),
    (0.0016, 135.7, 420.02),
    (0.0015, 211.1, 9284.69),
    (0.0015, 45.8, 9964.00),
    (0.0014, 219.2, 299.96),
    (0.0013, 95.8, 4472.03),
    (0.0013, 155.4, 379.35),
    (0.0012, 38.4, 4812.68),
    (0.0012, 148.2, 4851.36),
    (0.0011, 138.3, 19147.99),
    (0.0010, 18.0, 12978.66),
    (0.0008, 70.0, 17870.7),
    (0.0008, 326.0, 9724.1),
    (0.0007, 294.0, 13098.7),
    (0.0006, 224.0, 5590.7),
    (0.0006, 52.0, 13617.3),
    (0.0005, 280.0, 8485.3),
    (0.0005, 239.0, 4193.4),
    (0.0004, 311.0, 9483.9),
    (0.0004, 238.0, 23281.3),
    (0.0004, 81.0, 10242.6),
    (0.0004, 13.0, 9325.4),
    (0.0004, 147.0, 14097.4),
    (0.0003, 205.0, 22642.7),
    (0.0003, 107.0, 18149.4),
    (0.0003, 146.0, 3353.3),
    (0.0003, 234.0, 19268.0),
)

MOON_LATITUDE_AUX_TERMS = (
    (0.0267, 234.95, 19.341),
    (0.0043, 322.1, 19.36),
    (0.0040, 119.5, 1.33),
    (0.0020, 55.0, 19.34),
    (0.0005, 307.0, 19.4),
)


def _sum_terms(terms, t: float) -> float:
    return sum(p * math.sin(math.radians(q + r * t)) for p, q, r in terms)


def reduced_to_geocentric_latitude(ratio: float, theta: float) -> float:
    """Map an angle through the axis ratio ``ratio`` (tan result = ratio * tan theta)."""
    if ratio > 0:
        abs_ratio, abs_theta = ratio, theta
    else:
        abs_ratio, abs_theta = -ratio, -theta
    cos_theta = math.cos(abs_theta)
    sin_theta = math.sin(abs_theta)
    return abs_theta + math.atan2(
        (abs_ratio - 1.0) * sin_theta * cos_theta,
        cos_theta * cos_theta + abs_ratio * sin_theta * sin_theta,
    )


def kepler_fixed_point(
    eccentricity: float, mean_anomaly: float, iterations: int = KEPLER_ITERATIONS
) -> float:
    """Eccentric anomaly by fixed-point iteration of E = M + e sin E (e << 1)."""
    eccentric_anomaly = mean_anomaly
    for _ in range(iterations):
        eccentric_anomaly = mean_anomaly + eccentricity * math.sin(eccentric_anomaly)
    return eccentric_anomaly


def eccentric_to_true_anomaly(eccentricity: float, eccentric_anomaly: float) -> float:
    ratio = math.sqrt((1.0 + eccentricity) / (1.0 - eccentricity))
    return reduced_to_geocentric_latitude(ratio, eccentric_anomaly / 2.0) * 2.0


def ecliptic_to_equatorial(
    latitude_rad: float, longitude_rad: float, obliquity_rad: float
) -> tuple[float, float]:
    """Return (declination deg, right ascension hours)."""
    right_ascension = (
        math.degrees(
            math.atan2(
                -math.sin(latitude_rad) * math.sin(obliquity_rad)
                + math.cos(latitude_rad) * math.sin(longitude_rad) * math.cos(obliquity_rad),
                math.cos(latitude_rad) * math.cos(longitude_rad),
            )
        )
        / 15.0
    )
    declination = math.degrees(
        math.asin(
            math.sin(latitude_rad) * math.cos(obliquity_rad)
            + math.cos(latitude_rad) * math.sin(longitude_rad) * math.sin(obliquity_rad)
        )
    )
    return declination, right_ascension


def phase_difference(moon_longitude_deg: float, sun_longitude_deg: float) -> float:
    return normalize_degree(moon_longitude_deg - sun_longitude_deg)


class SunAndMoonModel:
    """Sun and Moon positions projected onto the dial.

    The analemma and the month ticks depend on latitude only and are rebuilt
    when the projection's latitude differs from the one they were built for.
    """

    def __init__(self, projection: Projection):
        self.projection = projection
        self._analemma: list[PlanePoint] | None = None
        self._month_ticks: list[PlanePoint] | None = None
        self._cache_latitude: float | None = None

    def _check_latitude(self) -> None:
        if self._cache_latitude != self.projection.latitude_deg:
            self._analemma = None
            self._month_ticks = None
            self._cache_latitude = self.projection.latitude_deg

    def sun_position(self, jc: float) -> BodyPosition:
        inclination = math.radians(AXIAL_TILT_DEG)
        longitude_of_perihelion = math.radians(LONGITUDE_OF_PERIHELION_DEG)
        longitude_at_epoch = math.radians(MEAN_LONGITUDE_AT_EPOCH_DEG)

        # prograde or retrograde
        direction = -1.0 if math.cos(inclination) < 0.0 else 1.0

        orbits = (jc - J2000_EPOCH_JC) * DAYS_PER_CENTURY / ORBITAL_PERIOD_DAYS
        mean_longitude = math.fmod(orbits, 1.0) * 2.0 * math.pi + longitude_at_epoch
        mean_anomaly = mean_longitude - longitude_of_perihelion
        eccentric_anomaly = kepler_fixed_point(ECCENTRICITY, mean_anomaly)
        true_anomaly = eccentric_to_true_anomaly(ECCENTRICITY, eccentric_anomaly)
        argument_of_latitude = true_anomaly + longitude_of_perihelion
        right_ascension = reduced_to_geocentric_latitude(math.cos(inclination), argument_of_latitude)
        declination = math.asin(math.sin(inclination) * math.sin(argument_of_latitude))
        equation_of_time = mean_longitude * direction - right_ascension

        point = self.projection.project_clamped(
            math.degrees(declination), math.degrees(equation_of_time) / 15.0
        )
        return BodyPosition(point, math.fmod(math.degrees(argument_of_latitude), 360.0))

    def moon_position(self, jc: float) -> BodyPosition:
        t = jc * 100.0
        obliquity = math.radians(AXIAL_TILT_DEG)
        a = _sum_terms(MOON_LONGITUDE_AUX_TERMS, t)
        b = _sum_terms(MOON_LATITUDE_AUX_TERMS, t)
        longitude = math.radians(
            218.3161
            + 4812.67881 * t
            + 6.2887 * math.sin(math.radians(134.961 + 4771.9886 * t + a))
            + _sum_terms(MOON_LONGITUDE_TERMS, t)
        )
        latitude = math.radians(
            5.1282 * math.sin(math.radians(93.273 + 4832.0202 * t + b))
            + _sum_terms(MOON_LATITUDE_TERMS, t)
        )
        declination, right_ascension = ecliptic_to_equatorial(latitude, longitude, obliquity)
        point = self.projection.project_clamped(declination, -right_ascension)
        return BodyPosition(point, math.fmod(math.degrees(longitude), 360.0))

    @property
    def analemma(self) -> list[PlanePoint]:
        self._check_latitude()
        if self._analemma is None:
            logger.debug("Rebuilding analemma for latitude %s", self.projection.latitude_deg)
            self._analemma = [
                self._sun_point_at(ANALEMMA_STEP_DAYS * k) for k in range(ANALEMMA_SAMPLES)
            ]
        return self._analemma

    @property
    def month_ticks(self) -> list[PlanePoint]:
        self._check_latitude()
        if self._month_ticks is None:
            self._month_ticks = [self._sun_point_at(day) for day in MONTH_START_DAY_OFFSETS]
        return self._month_ticks

    def _sun_point_at(self, day_offset: int) -> PlanePoint:
        return self.sun_position(ANALEMMA_REFERENCE_JC + day_offset / DAYS_PER_CENTURY).point
