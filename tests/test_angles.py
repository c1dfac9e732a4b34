import pytest

from skyclock.model.angles import circular_diff, is_same_angle, normalize_degree, signed_circular_diff


@pytest.mark.parametrize("angle", [-725.25, -360.0, -0.5, 0.0, 12.75, 359.5, 360.0, 1000.125])
def test_normalize_degree_range(angle):
    assert 0.0 <= normalize_degree(angle) < 360.0


@pytest.mark.parametrize("angle", [-725.25, -0.5, 0.0, 12.75, 359.5, 1000.125])
@pytest.mark.parametrize("turns", [-3, -1, 1, 2])
def test_normalize_degree_is_periodic(angle, turns):
    assert normalize_degree(angle + 360.0 * turns) == pytest.approx(normalize_degree(angle), abs=1e-9)


def test_normalize_degree_tiny_negative_is_zero():
    assert normalize_degree(-1e-17) == 0.0


def test_circular_diff():
    assert circular_diff(350.0, 10.0) == 20.0
    assert circular_diff(10.0, 350.0) == 20.0
    assert circular_diff(0.0, 180.0) == 180.0
    assert circular_diff(720.0, 0.0) == 0.0


def test_signed_circular_diff():
    assert signed_circular_diff(10.0, 350.0) == pytest.approx(20.0)
    assert signed_circular_diff(350.0, 10.0) == pytest.approx(-20.0)
    assert -180.0 <= signed_circular_diff(0.0, 180.0) < 180.0


def test_is_same_angle():
    assert is_same_angle(359.9, 0.05, 0.2)
    assert not is_same_angle(10.0, 11.0, 0.5)
