from typing import Tuple

from skyclock.model.angles import normalize_degree

# One degree of dial rotation is four minutes of time.
TIME_SECONDS_PER_DEGREE = 240.0


def _sexagesimal(total_seconds: float) -> Tuple[int, int, float]:
    return int(total_seconds // 3600), int(total_seconds % 3600 // 60), total_seconds % 60


def _join(lead: int, minutes: int, seconds: float, precision: int) -> str:
    width = 3 + precision if precision else 2
    return f"{lead:02d}:{minutes:02d}:{seconds:0{width}.{precision}f}"


def deg_to_hms(deg: float, precision: int = 0) -> str:
    """Dial angle (360° = 24h) as wrapped hh:mm:ss."""
    # round first so 23:59:59.96 carries to 00:00:00
    total = round(deg * TIME_SECONDS_PER_DEGREE, precision) % 86400.0
    return _join(*_sexagesimal(total), precision)


def hours_to_hms(hours: float, precision: int = 0) -> str:
    return deg_to_hms(hours * 15.0, precision=precision)


def deg_to_dms(deg: float, precision: int = 0) -> str:
    sign = "-" if deg < 0 else "+"
    total = round(abs(deg) * 3600.0, precision)
    return sign + _join(*_sexagesimal(total), precision)


def format_angle(deg: float, style: str = "deg", precision: int = 2) -> str:
    if style == "deg":
        return f"{normalize_degree(deg):.{precision}f}°"
    if style == "hms":
        return deg_to_hms(deg, precision=precision)
    if style == "dms":
        return deg_to_dms(deg, precision=precision)
    raise ValueError(f"Unknown angle style: {style}")
