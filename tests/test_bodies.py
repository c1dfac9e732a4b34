import math

import pytest

from skyclock.model.bodies import (
    AXIAL_TILT_DEG,
    ECCENTRICITY,
    MOON_LATITUDE_AUX_TERMS,
    MOON_LATITUDE_TERMS,
    MOON_LONGITUDE_AUX_TERMS,
    MOON_LONGITUDE_TERMS,
    SunAndMoonModel,
    eccentric_to_true_anomaly,
    ecliptic_to_equatorial,
    kepler_fixed_point,
    phase_difference,
)
from skyclock.model.projection import NORTH, SOUTH, Projection
from skyclock.model.timescales import julian_centuries


def newton_eccentric_anomaly(eccentricity, mean_anomaly):
    e_anomaly = mean_anomaly
    for _ in range(50):
        step = (e_anomaly - eccentricity * math.sin(e_anomaly) - mean_anomaly) / (
            1.0 - eccentricity * math.cos(e_anomaly)
        )
        e_anomaly -= step
        if abs(step) < 1e-15:
            break
    return e_anomaly


def test_moon_series_sizes():
    assert len(MOON_LONGITUDE_TERMS) == 62
    assert len(MOON_LONGITUDE_AUX_TERMS) == 4
    assert len(MOON_LATITUDE_TERMS) == 46
    assert len(MOON_LATITUDE_AUX_TERMS) == 5


def test_kepler_three_iterations_converge():
    for k in range(-360, 721, 7):
        mean_anomaly = math.radians(k)
        approx = kepler_fixed_point(ECCENTRICITY, mean_anomaly)
        exact = newton_eccentric_anomaly(ECCENTRICITY, mean_anomaly)
        assert abs(approx - exact) < 1e-6


def test_true_anomaly_at_apsides():
    assert eccentric_to_true_anomaly(ECCENTRICITY, 0.0) == pytest.approx(0.0)
    assert eccentric_to_true_anomaly(ECCENTRICITY, math.pi / 2.0) > math.pi / 2.0


def test_ecliptic_to_equatorial():
    obliquity = math.radians(AXIAL_TILT_DEG)
    dec, ra = ecliptic_to_equatorial(0.0, 0.0, obliquity)
    assert dec == pytest.approx(0.0)
    assert ra == pytest.approx(0.0)

    dec, ra = ecliptic_to_equatorial(0.0, math.pi / 2.0, obliquity)
    assert dec == pytest.approx(AXIAL_TILT_DEG)
    assert ra == pytest.approx(6.0)


def test_phase_difference():
    assert phase_difference(10.0, 350.0) == pytest.approx(20.0)
    assert phase_difference(350.0, 10.0) == pytest.approx(340.0)
    assert phase_difference(-20.0, 10.0) == pytest.approx(330.0)


def test_sun_near_solstice():
    model = SunAndMoonModel(Projection(NORTH, 35.0))
    sun = model.sun_position(julian_centuries(2020, 6, 25, 43200))
    assert sun.ecliptic_longitude_deg == pytest.approx(94.1055, abs=0.01)
    # declination about 23.37 degrees, equation of time about -2.7 minutes
    assert sun.point.radius == pytest.approx((90.0 - 23.3729) / 155.0, abs=1e-4)
    assert sun.point.x == pytest.approx(0.0049890, abs=2e-4)
    assert sun.point.y == pytest.approx(-0.4298235, abs=2e-4)


def test_sun_near_equinox_is_on_equator():
    model = SunAndMoonModel(Projection(NORTH, 35.0))
    sun = model.sun_position(julian_centuries(2021, 3, 20, 35460))
    assert sun.point.radius == pytest.approx(90.0 / 155.0, abs=2e-3)


def test_moon_position_is_on_dial():
    model = SunAndMoonModel(Projection(SOUTH, -35.0))
    for day in range(0, 30, 3):
        moon = model.moon_position(julian_centuries(2020, 6, 1 + day, 0))
        assert moon.point.radius <= 1.0 + 1e-12
        assert -360.0 < moon.ecliptic_longitude_deg < 360.0


def test_moon_moves_about_thirteen_degrees_a_day():
    model = SunAndMoonModel(Projection(NORTH, 35.0))
    first = model.moon_position(julian_centuries(2020, 6, 25, 0)).ecliptic_longitude_deg
    second = model.moon_position(julian_centuries(2020, 6, 26, 0)).ecliptic_longitude_deg
    assert 11.0 < (second - first) % 360.0 < 16.0


def test_analemma_and_month_ticks():
    model = SunAndMoonModel(Projection(NORTH, 35.0))
    analemma = model.analemma
    assert len(analemma) == 25
    assert len(model.month_ticks) == 12
    assert all(point.radius <= 1.0 + 1e-12 for point in analemma)
    # figure eight spans the tropics
    radii = [point.radius for point in analemma]
    assert max(radii) - min(radii) == pytest.approx(2 * 23.44 / 155.0, abs=0.01)
    assert model.analemma is analemma


def test_analemma_rebuilt_on_latitude_change():
    model = SunAndMoonModel(Projection(NORTH, 35.0))
    analemma = model.analemma
    model.projection = Projection(NORTH, 35.0)
    assert model.analemma is analemma
    model.projection = Projection(NORTH, 80.0)
    rebuilt = model.analemma
    assert rebuilt is not analemma
    # midsummer sample stays inside both dials
    assert rebuilt[12].radius == pytest.approx(analemma[12].radius * 155.0 / 110.0)
