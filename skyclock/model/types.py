from dataclasses import dataclass
import datetime
from typing import NamedTuple

from .timescales import SECONDS_PER_DAY


@dataclass(frozen=True)
class GeoPosition:
    latitude_deg: float
    longitude_deg: float


class EquatorialCoord(NamedTuple):
    declination_deg: float
    hour_angle_h: float


@dataclass(frozen=True)
class PlanePoint:
    x: float
    y: float

    @property
    def radius(self) -> float:
        return (self.x * self.x + self.y * self.y) ** 0.5


@dataclass(frozen=True)
class Instant:
    """A moment resolvable in both the local civil calendar and UT1.

    ``local`` must be timezone-aware. ``dut1`` is UT1 - UTC.
    """

    local: datetime.datetime
    dut1: datetime.timedelta = datetime.timedelta(0)

    @property
    def utc(self) -> datetime.datetime:
        return self.local.astimezone(datetime.timezone.utc).replace(tzinfo=None)

    @property
    def ut1(self) -> datetime.datetime:
        return self.utc + self.dut1

    @property
    def ut1_elapsed_seconds(self) -> int:
        ut1 = self.ut1
        return ut1.hour * 3600 + ut1.minute * 60 + ut1.second

    @property
    def ut1_day_of_year(self) -> int:
        return self.ut1.timetuple().tm_yday

    @property
    def local_day_of_year(self) -> int:
        return self.local.timetuple().tm_yday

    @property
    def utc_offset_seconds(self) -> float:
        offset = self.local.utcoffset()
        return offset.total_seconds() if offset is not None else 0.0

    @classmethod
    def from_ut1(
        cls,
        year: int,
        day_of_year: int,
        elapsed_seconds: int,
        tz: datetime.tzinfo | None,
        dut1: datetime.timedelta,
    ) -> "Instant":
        """Build an instant from a UT1 calendar position.

        With ``tz`` None the local time follows the host's zone rules for
        that instant, so a daylight saving change between now and the
        target is honoured.
        """
        if not 0 <= elapsed_seconds < SECONDS_PER_DAY:
            raise ValueError(f"elapsed_seconds out of range: {elapsed_seconds}")
        ut1 = datetime.datetime(year, 1, 1) + datetime.timedelta(
            days=day_of_year - 1, seconds=elapsed_seconds
        )
        utc = (ut1 - dut1).replace(tzinfo=datetime.timezone.utc)
        return cls(local=utc.astimezone(tz), dut1=dut1)


@dataclass(frozen=True)
class DateRingEntry:
    day_of_year: int
    day_of_month: int
    month_name: str
    is_today: bool
    is_current_month: bool


@dataclass(frozen=True)
class BodyPosition:
    point: PlanePoint
    ecliptic_longitude_deg: float


@dataclass(frozen=True)
class DirectionLabel:
    text: str
    x: float
    y: float


@dataclass(frozen=True)
class DeclinationRing:
    declination_deg: int
    radius: float


@dataclass(frozen=True)
class StarRecord:
    id: int
    ra_deg: float
    dec_deg: float
    radius: float


@dataclass(frozen=True)
class ConstellationLineRecord:
    id: int
    ra1_deg: float
    dec1_deg: float
    ra2_deg: float
    dec2_deg: float


@dataclass(frozen=True)
class MilkyWayDotRecord:
    id: int
    x: float
    y: float
    argb: int


@dataclass(frozen=True)
class StarGeometry:
    x: float
    y: float
    r: float


@dataclass(frozen=True)
class ConstellationLineGeometry:
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class MilkyWayDot:
    x: float
    y: float
    argb: int
