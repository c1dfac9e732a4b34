"""Local mean solar time and local mean sidereal time as dial angles.

The three ``change_*`` methods implement the dial-drag semantics: each one
holds one observable fixed and solves for a new instant. Calculations run in
UT1 so the local time zone and daylight saving never enter the arithmetic;
the resulting instant is converted back to the host time zone at the end.
"""
import calendar
import datetime
import logging
import math
from typing import Callable

from .angles import normalize_degree, signed_circular_diff
from .timescales import SECONDS_PER_DAY, gmst, julian_centuries
from .types import DateRingEntry, Instant

logger = logging.getLogger(__name__)

MONTH_NAMES = (
    "JANUARY",
    "FEBRUARY",
    "MARCH",
    "APRIL",
    "MAY",
    "JUNE",
    "JULY",
    "AUGUST",
    "SEPTEMBER",
    "OCTOBER",
    "NOVEMBER",
    "DECEMBER",
)

_SECONDS_PER_DAY = int(SECONDS_PER_DAY)


def _system_now() -> datetime.datetime:
    return datetime.datetime.now().astimezone()


def length_of_year(year: int) -> int:
    return 366 if calendar.isleap(year) else 365


def build_date_ring(today: datetime.date) -> list[DateRingEntry]:
    entries = []
    start = datetime.date(today.year, 1, 1)
    for index in range(length_of_year(today.year)):
        date = start + datetime.timedelta(days=index)
        entries.append(
            DateRingEntry(
                day_of_year=index + 1,
                day_of_month=date.day,
                month_name=MONTH_NAMES[date.month - 1],
                is_today=date == today,
                is_current_month=date.month == today.month,
            )
        )
    return entries


def _wrap_day_of_year(day_of_year: int, length: int) -> int:
    if day_of_year < 1:
        return day_of_year + length
    if day_of_year > length:
        return day_of_year - length
    return day_of_year


class ObserverClock:
    """Sidereal angle, solar angle and date ring for an observer longitude.

    ``now`` returns the host's present time as an aware datetime and
    ``tz`` is the zone used when reconstructing dragged instants. Both
    default to the system clock and the host zone, whose daylight saving
    rules are applied to each instant separately.
    """

    def __init__(
        self,
        longitude_deg: float = 0.0,
        dut1_s: float = 0.0,
        tz: datetime.tzinfo | None = None,
        now: Callable[[], datetime.datetime] | None = None,
    ):
        self._now = now or _system_now
        self._tz = tz
        self.dut1 = datetime.timedelta(seconds=dut1_s)
        self.longitude_deg = longitude_deg
        self._date_ring: list[DateRingEntry] = []
        self._date_ring_key: tuple[int, int] | None = None
        self.day_of_year_changed = False
        self._anchor_utc_offset_s = 0.0
        self.instant = Instant(self._localize(self._now()), self.dut1)
        self.set_current_time()

    def _localize(self, dt: datetime.datetime) -> datetime.datetime:
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=datetime.timezone.utc)
        return dt.astimezone(self._tz)

    @property
    def tz(self) -> datetime.tzinfo | None:
        """Zone for dragged instants; None follows the host zone rules per instant."""
        return self._tz

    # -- derived angles ---------------------------------------------------

    @property
    def offset(self) -> float:
        """Rotation of the date ring against the local clock, in degrees."""
        ut1_year = self.instant.ut1.year
        return (
            self._anchor_utc_offset_s / 3600.0 / 24.0 - gmst(ut1_year, 1, 1, 0)
        ) * 360.0 - self.longitude_deg

    @property
    def sidereal_angle(self) -> float:
        """Local mean sidereal time in degrees, 0 at 0h hour angle; not normalized."""
        ut1 = self.instant.ut1
        fraction = gmst(ut1.year, ut1.month, ut1.day, self.instant.ut1_elapsed_seconds)
        return fraction * 360.0 + self.longitude_deg

    @property
    def solar_angle(self) -> float:
        """Local mean solar time in degrees, 0 at 0h hour angle; not normalized."""
        elapsed = self.instant.ut1_elapsed_seconds
        return (elapsed / 3600.0 + 12.0) / 24.0 * 360.0 + self.longitude_deg

    @property
    def julian_centuries(self) -> float:
        ut1 = self.instant.ut1
        return julian_centuries(ut1.year, ut1.month, ut1.day, self.instant.ut1_elapsed_seconds)

    @property
    def date_ring(self) -> list[DateRingEntry]:
        return self._date_ring

    @property
    def hour(self) -> int:
        return self.instant.local.hour

    @property
    def minute(self) -> int:
        return self.instant.local.minute

    @property
    def second(self) -> int:
        return self.instant.local.second

    @property
    def day_of_year(self) -> int:
        return self.instant.local_day_of_year

    # -- updates ------------------------------------------------------------

    def set_current_time(self) -> bool:
        """Move to the host's present time. Returns True if the local day changed."""
        now = self._localize(self._now())
        self._anchor_utc_offset_s = Instant(now).utc_offset_seconds
        return self._update(Instant(now, self.dut1))

    def set_instant(self, dt: datetime.datetime) -> bool:
        return self._update(Instant(self._localize(dt), self.dut1))

    def change_date_with_fixed_sidereal_time(self, rotate_deg: float) -> bool:
        """Date changes, sidereal time stays put.

        ``rotate_deg`` is the new angle of the solar (date) ring.
        """
        # The date ring is drawn with the anchored timezone offset, so the
        # target is measured against it rather than the dragged instant's.
        target_solar_angle = (
            -rotate_deg + self._anchor_utc_offset_s / SECONDS_PER_DAY * 360.0 - self.longitude_deg
        )
        difference = signed_circular_diff(target_solar_angle, self.solar_angle)

        ut1 = self.instant.ut1
        year = ut1.year
        current_day_of_year = self.instant.ut1_day_of_year
        elapsed = self.instant.ut1_elapsed_seconds

        # One turn of the dial is one calendar year (365 or 366 days), not
        # the 365.256 day orbital period.
        length = length_of_year(year)
        target_day_of_year = _wrap_day_of_year(
            current_day_of_year - math.trunc(difference / 360.0 * length), length
        )

        # Each calendar day moves the solar ring by 360/length degrees, so
        # the clock is shifted back by the fraction of a day that cancels it.
        solar_time_intervals = (length + 1.0) / length
        solar_time_seconds = (target_day_of_year - current_day_of_year) * SECONDS_PER_DAY
        difference_of_solar_time = math.trunc(
            solar_time_seconds - solar_time_seconds / solar_time_intervals
        )
        target_elapsed = elapsed - difference_of_solar_time
        if target_elapsed < 0:
            target_day_of_year -= 1
            target_elapsed += _SECONDS_PER_DAY
        elif target_elapsed >= _SECONDS_PER_DAY:
            target_day_of_year += 1
            target_elapsed -= _SECONDS_PER_DAY
        target_day_of_year = _wrap_day_of_year(target_day_of_year, length)

        return self._update_from_ut1(year, target_day_of_year, target_elapsed)

    def change_date_with_fixed_solar_time(self, rotate_deg: float) -> bool:
        """Date changes, solar time stays put.

        ``rotate_deg`` is the new angle of the sidereal (star) disk.
        """
        year = self.instant.ut1.year
        length = length_of_year(year)
        target_day_of_year = min(int(normalize_degree(-rotate_deg) / 360.0 * length) + 1, length)
        return self._update_from_ut1(year, target_day_of_year, self.instant.ut1_elapsed_seconds)

    def change_sidereal_time_with_fixed_date(self, rotate_deg: float) -> bool:
        """Sidereal and solar time change, the date stays put.

        ``rotate_deg`` is the rotation of the clock hands in degrees.
        """
        year = self.instant.ut1.year
        day_of_year = self.instant.ut1_day_of_year
        difference_of_seconds = rotate_deg / 360.0 * SECONDS_PER_DAY
        target_elapsed = int(self.instant.ut1_elapsed_seconds - difference_of_seconds) % _SECONDS_PER_DAY
        return self._update_from_ut1(year, day_of_year, target_elapsed)

    def _update_from_ut1(self, year: int, day_of_year: int, elapsed_seconds: int) -> bool:
        instant = Instant.from_ut1(year, day_of_year, elapsed_seconds, self.tz, self.dut1)
        return self._update(instant)

    def _update(self, instant: Instant) -> bool:
        self.instant = instant
        key = (instant.local.year, instant.local_day_of_year)
        self.day_of_year_changed = key != self._date_ring_key
        if self.day_of_year_changed:
            logger.debug("Rebuilding date ring for %s", instant.local.date())
            self._date_ring = build_date_ring(instant.local.date())
            self._date_ring_key = key
        return self.day_of_year_changed
