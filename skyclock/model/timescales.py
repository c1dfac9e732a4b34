"""Julian day, Julian century and Greenwich Mean Sidereal Time.

All inputs are UT1 calendar dates (proleptic Gregorian) and whole seconds
elapsed since 0h UT1 of that date.
"""
import math

J2000_JD = 2451545.0
DAYS_PER_CENTURY = 36525.0
SECONDS_PER_DAY = 86400.0

# GMST polynomial coefficients in seconds, https://www.cfa.harvard.edu/~jzhao/times.html
_GMST_C0 = 24110.54841
_GMST_C1 = 8640184.812866
_GMST_C2 = 0.093104
_GMST_C3 = 0.0000062

# Ratio of a mean solar day to a mean sidereal day.
SIDEREAL_RATE = 1.0 + _GMST_C1 / DAYS_PER_CENTURY / SECONDS_PER_DAY


def julian_day_at_0(year: int, month: int, day: int) -> float:
    shift = math.floor((12 - month) / 10.0)
    y = year - shift
    m = month + shift * 12
    return (
        math.floor(365.25 * y)
        + math.floor(y / 400)
        - math.floor(y / 100)
        + math.floor(30.59 * (m - 2))
        + day
        + 1721088.5
    )


def julian_centuries_at_0(year: int, month: int, day: int) -> float:
    return (julian_day_at_0(year, month, day) - J2000_JD) / DAYS_PER_CENTURY


def gmst(year: int, month: int, day: int, elapsed_seconds: int) -> float:
    """Greenwich Mean Sidereal Time as a fraction of a day, in [0, 1)."""
    t = julian_centuries_at_0(year, month, day)
    at_0 = (_GMST_C0 + _GMST_C1 * t + _GMST_C2 * t * t - _GMST_C3 * t * t * t) % SECONDS_PER_DAY
    seconds = (at_0 + SIDEREAL_RATE * elapsed_seconds) % SECONDS_PER_DAY
    return seconds / SECONDS_PER_DAY


def julian_day(year: int, month: int, day: int, elapsed_seconds: int) -> float:
    return julian_day_at_0(year, month, day) + elapsed_seconds / SECONDS_PER_DAY


def julian_centuries(year: int, month: int, day: int, elapsed_seconds: int) -> float:
    return (julian_day(year, month, day, elapsed_seconds) - J2000_JD) / DAYS_PER_CENTURY


J2000_EPOCH_JC = julian_centuries(2000, 1, 1, 12 * 60 * 60)
