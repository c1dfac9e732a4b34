import pytest

from skyclock.model.projection import NORTH, SOUTH, Projection
from skyclock.model.sky import SkyModel, ecliptic_longitude_to_equatorial
from skyclock.model.types import ConstellationLineRecord, MilkyWayDotRecord, StarRecord

POLARIS = StarRecord(id=11767, ra_deg=37.955, dec_deg=89.264, radius=2.57)
SIRIUS = StarRecord(id=32349, ra_deg=101.287, dec_deg=-16.716, radius=4.5)
ACRUX = StarRecord(id=60718, ra_deg=186.650, dec_deg=-63.099, radius=4.31)
SIGMA_OCT = StarRecord(id=104382, ra_deg=317.195, dec_deg=-88.956, radius=0.5)


def test_ecliptic_longitude_to_equatorial():
    dec, ra = ecliptic_longitude_to_equatorial(0.0)
    assert (dec, ra) == pytest.approx((0.0, 0.0), abs=1e-9)
    dec, ra = ecliptic_longitude_to_equatorial(90.0)
    assert dec == pytest.approx(23.44)
    assert ra == pytest.approx(90.0)
    dec, ra = ecliptic_longitude_to_equatorial(270.0)
    assert dec == pytest.approx(-23.44)
    assert ra == pytest.approx(270.0)


def test_declination_rings_stop_at_horizon():
    rings = SkyModel(Projection(NORTH, 35.0)).declination_rings
    assert [ring.declination_deg for ring in rings] == [60, 30, 0, -30]
    assert [ring.radius for ring in rings] == pytest.approx([30 / 155, 60 / 155, 90 / 155, 120 / 155])

    south_rings = SkyModel(Projection(SOUTH, -35.0)).declination_rings
    assert [ring.declination_deg for ring in south_rings] == [-60, -30, 0, 30]


def test_ecliptic_curve():
    ecliptic = SkyModel(Projection(NORTH, 35.0)).ecliptic
    assert len(ecliptic) == 360
    assert ecliptic[0].x == pytest.approx(0.0, abs=1e-12)
    assert ecliptic[0].y == pytest.approx(-90.0 / 155.0)
    radii = [point.radius for point in ecliptic]
    assert min(radii) == pytest.approx((90.0 - 23.44) / 155.0, abs=1e-6)
    assert max(radii) == pytest.approx((90.0 + 23.44) / 155.0, abs=1e-6)


def test_star_geometry_culls_stars_below_the_rim():
    model = SkyModel(Projection(NORTH, 35.0), stars=[POLARIS, SIRIUS, SIGMA_OCT])
    geometry = model.star_geometry
    assert len(geometry) == 2
    assert [star.r for star in geometry] == [2.57, 4.5]
    assert geometry[0].x ** 2 + geometry[0].y ** 2 < 0.01 ** 2


def test_star_geometry_south():
    model = SkyModel(Projection(SOUTH, -35.0), stars=[POLARIS, ACRUX, SIGMA_OCT])
    assert [star.r for star in model.star_geometry] == [4.31, 0.5]


def test_constellation_lines_need_both_ends():
    lines = [
        ConstellationLineRecord(1, POLARIS.ra_deg, POLARIS.dec_deg, SIRIUS.ra_deg, SIRIUS.dec_deg),
        ConstellationLineRecord(2, SIRIUS.ra_deg, SIRIUS.dec_deg, SIGMA_OCT.ra_deg, SIGMA_OCT.dec_deg),
    ]
    model = SkyModel(Projection(NORTH, 35.0), constellation_lines=lines)
    geometry = model.constellation_line_geometry
    assert len(geometry) == 1
    assert geometry[0].x1 ** 2 + geometry[0].y1 ** 2 < 0.01 ** 2


def test_milky_way_dots_are_rescaled():
    dots = [MilkyWayDotRecord(1, 0.5, 0.0, 0x40C8D2FF), MilkyWayDotRecord(2, 0.0, 0.9, 0x40C8D2FF)]
    model = SkyModel(Projection(NORTH, 80.0), milky_way=dots)
    assert model.milky_way_dot_size == pytest.approx(1.0 / 110.0)
    rescaled = model.milky_way_dots
    assert len(rescaled) == 1
    assert rescaled[0].x == pytest.approx(0.5 * 155.0 / 110.0)
    assert rescaled[0].argb == 0x40C8D2FF


def test_grid_step_sign():
    assert SkyModel(Projection(NORTH, 35.0)).ten_minute_grid_step == pytest.approx(2.5)
    assert SkyModel(Projection(SOUTH, -35.0)).ten_minute_grid_step == pytest.approx(-2.5)


def test_projected_lists_follow_latitude():
    model = SkyModel(Projection(NORTH, 35.0), stars=[POLARIS, SIRIUS, ACRUX])
    first = model.star_geometry
    assert model.star_geometry is first
    assert len(first) == 3

    model.projection = Projection(NORTH, 80.0)
    assert [star.r for star in model.star_geometry] == [2.57, 4.5]

    model.projection = Projection(NORTH, 89.0)
    assert [star.r for star in model.star_geometry] == [2.57]
