import datetime
import time

import pytest

from skyclock.model import NORTH, SOUTH


def pytest_addoption(parser):
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run tests marked as integration",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--integration"):
        return

    for item in items:
        if "integration" in item.keywords:
            item.add_marker(
                pytest.mark.skip(
                    reason="need --integration option to run integration tests"
                )
            )


def fixed_now(*args):
    """Return a ``now`` callable pinned to a UTC instant."""
    instant = datetime.datetime(*args, tzinfo=datetime.timezone.utc)
    return lambda: instant


@pytest.fixture
def utc():
    return datetime.timezone.utc


@pytest.fixture(params=[NORTH, SOUTH], ids=["north", "south"])
def hemisphere(request):
    return request.param


@pytest.fixture
def new_york():
    zoneinfo = pytest.importorskip("zoneinfo")
    try:
        return zoneinfo.ZoneInfo("America/New_York")
    except zoneinfo.ZoneInfoNotFoundError:
        pytest.skip("system time zone database not available")


@pytest.fixture
def host_new_york(new_york, monkeypatch):
    """Run with the process local zone set to America/New_York."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset not available on this platform")
    monkeypatch.setenv("TZ", "America/New_York")
    time.tzset()
    yield new_york
    monkeypatch.undo()
    time.tzset()
