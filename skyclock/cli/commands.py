import datetime
import json
import logging
import math
import sys
from dataclasses import asdict
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from skyclock.catalog import get_catalog_provider
from skyclock.config import load_config
from skyclock.errors import SkyClockError
from skyclock.model import SkyViewModel, get_hemisphere, normalize_degree
from skyclock.util.format import deg_to_hms, format_angle

logger = logging.getLogger(__name__)

DRAG_MODES = ("fixed-sidereal", "fixed-solar", "fixed-date")


def _json_envelope(command: str, ok: bool, data=None, error=None) -> dict:
    return {
        "ok": ok,
        "command": command,
        "timestamp_utc": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        "data": data,
        "error": error,
    }


def _init_logging(level: str | None) -> None:
    if not level:
        return
    level_map = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warn": logging.WARNING,
        "error": logging.ERROR,
    }
    logging.basicConfig(level=level_map.get(level, logging.INFO))


def _config_path_from_args(args) -> Path | None:
    if args is None:
        return None
    path = getattr(args, "config", None)
    return Path(path) if path else None


def _parse_datetime_arg(value: str | None, tz: datetime.tzinfo | None) -> datetime.datetime | None:
    if not value:
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    dt = datetime.datetime.fromisoformat(value)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=tz) if tz is not None else dt.astimezone()
    return dt


def _parse_timezone(args, config) -> datetime.tzinfo | None:
    name = getattr(args, "timezone", None)
    if name:
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown time zone: {name}") from e
    hours = getattr(args, "utc_offset", None)
    if hours is not None:
        if not -14.0 <= hours <= 14.0:
            raise ValueError("UTC offset must be between -14 and 14 hours")
        return datetime.timezone(datetime.timedelta(hours=hours))
    return config.site_timezone


def _parse_location(args, config) -> tuple[float, float]:
    lat = getattr(args, "latitude_deg", None)
    lon = getattr(args, "longitude_deg", None)
    if lat is None:
        lat = config.site_latitude_deg
    if lon is None:
        lon = config.site_longitude_deg
    if lat is None or lon is None:
        raise ValueError(
            "Observer location is required (use --lat/--lon or set site.latitude_deg/longitude_deg)"
        )
    lat = float(lat)
    lon = float(lon)
    if not -90.0 <= lat <= 90.0:
        raise ValueError(f"Latitude out of range [-90, 90]: {lat}")
    if not -180.0 <= lon <= 180.0:
        raise ValueError(f"Longitude out of range [-180, 180]: {lon}")
    return lat, lon


def _build_view_model(args, config, with_catalog: bool = False) -> SkyViewModel:
    latitude, longitude = _parse_location(args, config)
    hemisphere = get_hemisphere(getattr(args, "hemisphere", None) or config.sky_hemisphere)
    tz = _parse_timezone(args, config)
    at = _parse_datetime_arg(getattr(args, "at", None), tz)
    catalog = get_catalog_provider(config) if with_catalog else None
    return SkyViewModel(
        hemisphere,
        latitude,
        longitude,
        catalog=catalog,
        dut1_s=config.clock_dut1_s,
        tz=tz,
        now=(lambda: at) if at is not None else None,
    )


def _point_dict(point) -> dict | None:
    if point is None:
        return None
    return {"x": point.x, "y": point.y}


def _time_summary(view: SkyViewModel) -> dict:
    sun = view.sun_position
    moon = view.moon_position
    instant = view.clock.instant
    return {
        "local_time": instant.local.isoformat(),
        "utc": instant.utc.isoformat(),
        "day_of_year": view.clock.day_of_year,
        "latitude_deg": view.latitude_deg,
        "longitude_deg": view.longitude_deg,
        "hemisphere": view.hemisphere.name,
        "sidereal_angle_deg": normalize_degree(view.sidereal_angle),
        "solar_angle_deg": normalize_degree(view.solar_angle),
        "offset_deg": view.offset,
        "julian_centuries": view.julian_centuries,
        "sun": {**_point_dict(sun.point), "ecliptic_longitude_deg": sun.ecliptic_longitude_deg},
        "moon": {**_point_dict(moon.point), "ecliptic_longitude_deg": moon.ecliptic_longitude_deg},
        "phase_difference_deg": view.phase_difference,
    }


def _print_time_summary(summary: dict) -> None:
    print(f"Local time: {summary['local_time']}")
    print(f"UTC: {summary['utc']}")
    print(
        f"Location: lat {summary['latitude_deg']:.3f}°, lon {summary['longitude_deg']:.3f}° "
        f"({summary['hemisphere']} sky)"
    )
    print(
        f"Sidereal angle: {format_angle(summary['sidereal_angle_deg'])} "
        f"(LMST {deg_to_hms(summary['sidereal_angle_deg'])})"
    )
    print(
        f"Solar angle: {format_angle(summary['solar_angle_deg'])} "
        f"(LMT {deg_to_hms(summary['solar_angle_deg'] - 180.0)})"
    )
    print(f"Date ring offset: {summary['offset_deg']:.3f}°")
    sun = summary["sun"]
    moon = summary["moon"]
    print(
        f"Sun: ({sun['x']:+.4f}, {sun['y']:+.4f}), "
        f"ecliptic longitude {format_angle(sun['ecliptic_longitude_deg'])}"
    )
    print(
        f"Moon: ({moon['x']:+.4f}, {moon['y']:+.4f}), "
        f"ecliptic longitude {format_angle(moon['ecliptic_longitude_deg'])}"
    )
    print(f"Moon-Sun phase difference: {format_angle(summary['phase_difference_deg'])}")


def _handle_error(command: str, args, exc: Exception, code: str) -> int:
    if args is not None and getattr(args, "json", False):
        payload = _json_envelope(
            command=command,
            ok=False,
            data=None,
            error={"code": code, "message": str(exc), "details": None},
        )
        print(json.dumps(payload, indent=2))
    else:
        print(str(exc), file=sys.stderr)
    return 2 if code == "invalid_argument" else 1


def _prepare(command: str, args, with_catalog: bool = False):
    """Load config and build the view model; returns ``(view, None)`` or ``(None, exit_code)``."""
    _init_logging(getattr(args, "log_level", None))
    try:
        config = load_config(_config_path_from_args(args))
        return _build_view_model(args, config, with_catalog=with_catalog), None
    except ValueError as e:
        return None, _handle_error(command, args, e, "invalid_argument")
    except (SkyClockError, FileNotFoundError) as e:
        return None, _handle_error(command, args, e, "config_error")


def run_now(args) -> int:
    view, code = _prepare("now", args)
    if view is None:
        return code

    summary = _time_summary(view)
    if getattr(args, "json", False):
        print(json.dumps(_json_envelope("now", True, data=summary), indent=2))
    else:
        _print_time_summary(summary)
    return 0


def run_drag(args) -> int:
    view, code = _prepare("drag", args)
    if view is None:
        return code

    before = _time_summary(view)
    if args.mode == "fixed-sidereal":
        changed = view.change_date_with_fixed_sidereal_time(args.rotate)
    elif args.mode == "fixed-solar":
        changed = view.change_date_with_fixed_solar_time(args.rotate)
    elif args.mode == "fixed-date":
        changed = view.change_sidereal_time_with_fixed_date(args.rotate)
    else:
        return _handle_error(
            "drag", args, ValueError(f"Unknown drag mode: {args.mode}"), "invalid_argument"
        )
    after = _time_summary(view)
    logger.info("Drag %s by %s° moved %s -> %s", args.mode, args.rotate, before["local_time"], after["local_time"])

    if getattr(args, "json", False):
        data = {
            "mode": args.mode,
            "rotate_deg": args.rotate,
            "day_of_year_changed": changed,
            "before": before,
            "after": after,
        }
        print(json.dumps(_json_envelope(f"drag.{args.mode}", True, data=data), indent=2))
    else:
        print(f"Drag: {args.mode} by {args.rotate:.3f}°")
        print(f"Day of year changed: {changed}")
        print("")
        print("Before")
        print("------")
        _print_time_summary(before)
        print("")
        print("After")
        print("-----")
        _print_time_summary(after)
    return 0


def run_horizon(args) -> int:
    view, code = _prepare("horizon", args)
    if view is None:
        return code

    if getattr(args, "json", False):
        data = {
            "latitude_deg": view.latitude_deg,
            "hemisphere": view.hemisphere.name,
            "horizon": [_point_dict(p) for p in view.horizon],
            "alt_azimuth_grid": [[_point_dict(p) for p in curve] for curve in view.alt_azimuth_grid],
            "direction_labels": [asdict(label) for label in view.direction_labels],
        }
        print(json.dumps(_json_envelope("horizon", True, data=data), indent=2))
    else:
        print(f"Horizon for lat {view.latitude_deg:.3f}° ({view.hemisphere.name} sky)")
        print(f"Horizon points: {len(view.horizon)}")
        for index, curve in enumerate(view.alt_azimuth_grid):
            visible = sum(1 for p in curve if p is not None)
            print(f"Grid curve {index:2d}: {visible}/{len(curve)} points visible")
        for label in view.direction_labels:
            print(f"{label.text}: ({label.x:+.4f}, {label.y:+.4f})")
    return 0


def run_analemma(args) -> int:
    view, code = _prepare("analemma", args)
    if view is None:
        return code

    if getattr(args, "json", False):
        data = {
            "latitude_deg": view.latitude_deg,
            "analemma": [_point_dict(p) for p in view.analemma],
            "month_ticks": [_point_dict(p) for p in view.month_ticks],
        }
        print(json.dumps(_json_envelope("analemma", True, data=data), indent=2))
    else:
        print(f"Analemma for lat {view.latitude_deg:.3f}°")
        for index, point in enumerate(view.analemma):
            print(f"day {index * 15:3d}: ({point.x:+.4f}, {point.y:+.4f})")
        print("")
        print("Month ticks")
        for month, point in enumerate(view.month_ticks, start=1):
            print(f"{month:2d}: ({point.x:+.4f}, {point.y:+.4f})")
    return 0


def _rotate(x: float, y: float, angle_deg: float) -> tuple[float, float]:
    angle = math.radians(angle_deg)
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    return x * cos_a - y * sin_a, x * sin_a + y * cos_a


def _to_axes(x: float, y: float, angle_deg: float = 0.0) -> tuple[float, float]:
    rx, ry = _rotate(x, y, angle_deg)
    # dial y grows downwards
    return rx, -ry


def _plot_curve(ax, curve, angle_deg: float = 0.0, **kwargs) -> None:
    xs: list[float] = []
    ys: list[float] = []
    for point in list(curve) + [None]:
        if point is None:
            if len(xs) > 1:
                ax.plot(xs, ys, **kwargs)
            xs, ys = [], []
            continue
        px, py = _to_axes(point.x, point.y, angle_deg)
        xs.append(px)
        ys.append(py)


def run_render(args) -> int:
    view, code = _prepare("render", args, with_catalog=True)
    if view is None:
        return code

    try:
        import matplotlib

        if not args.show:
            matplotlib.use("Agg")
        import matplotlib.pyplot as plt
    except ImportError:
        print("matplotlib is required for render (pip install -e .[plot])", file=sys.stderr)
        return 1

    sign = math.copysign(1.0, view.ten_minute_grid_step)
    sky_angle = -view.sidereal_angle * sign
    sun_angle = -view.solar_angle * sign

    fig, ax = plt.subplots(figsize=(8, 8))
    ax.set_facecolor("#0d1b35")
    ax.set_aspect("equal")
    ax.set_xlim(-1.05, 1.05)
    ax.set_ylim(-1.05, 1.05)
    ax.axis("off")

    for dot in view.milky_way_dots:
        px, py = _to_axes(dot.x, dot.y, sky_angle)
        ax.add_patch(plt.Circle((px, py), view.milky_way_dot_size, color="#3a4a6b", alpha=0.4, lw=0))
    for line in view.constellation_line_geometry:
        x1, y1 = _to_axes(line.x1, line.y1, sky_angle)
        x2, y2 = _to_axes(line.x2, line.y2, sky_angle)
        ax.plot([x1, x2], [y1, y2], color="#c9a96e", lw=0.5, alpha=0.6)
    for star in view.star_geometry:
        px, py = _to_axes(star.x, star.y, sky_angle)
        ax.plot(px, py, "o", color="#f0e0b0", markersize=star.r)
    _plot_curve(ax, view.ecliptic, sky_angle, color="#d08040", lw=0.6)
    for ring in view.declination_rings:
        ax.add_patch(plt.Circle((0, 0), ring.radius, fill=False, color="#50607f", lw=0.4))

    _plot_curve(ax, view.analemma, sun_angle, color="#e0c040", lw=0.8)
    sx, sy = _to_axes(view.sun_position.point.x, view.sun_position.point.y, sun_angle)
    ax.plot(sx, sy, "o", color="#ffb000", markersize=10)
    moon = view.moon_position.point
    mx, my = _to_axes(moon.x, moon.y, sky_angle)
    ax.plot(mx, my, "o", color="#e0e0e0", markersize=8)

    _plot_curve(ax, view.horizon, color="#c9a96e", lw=1.0)
    for curve in view.alt_azimuth_grid:
        _plot_curve(ax, curve, color="#6070a0", lw=0.4)
    for label in view.direction_labels:
        lx, ly = _to_axes(label.x, label.y)
        ax.text(lx, ly, label.text, color="white", ha="center", va="center")
    ax.add_patch(plt.Circle((0, 0), 1.0, fill=False, color="white", lw=1.0))
    ax.set_title(view.local_datetime.strftime("%Y-%m-%d %H:%M:%S %z"), color="black")

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(out_path, dpi=150)
        print(f"Wrote {out_path}")
    if args.show:
        plt.show()
    plt.close(fig)
    return 0


def run_doctor(args=None) -> int:
    _init_logging(getattr(args, "log_level", None))

    def check_config():
        try:
            load_config(_config_path_from_args(args))
            return {"ok": True, "detail": "loaded (defaults applied if missing)"}
        except Exception as e:
            return {"ok": False, "detail": f"invalid config: {e}"}

    def check_site(config):
        if config is None:
            return {"ok": False, "detail": "config not loaded"}
        try:
            lat, lon = _parse_location(args, config)
        except ValueError as e:
            return {"ok": False, "detail": str(e)}
        return {"ok": True, "detail": f"lat {lat:.3f}, lon {lon:.3f}"}

    def check_catalog(config):
        if config is None:
            return {"ok": False, "detail": "config not loaded"}
        try:
            provider = get_catalog_provider(config)
        except ValueError as e:
            return {"ok": False, "detail": f"invalid catalog config: {e}"}
        return provider.is_available()

    def check_matplotlib():
        try:
            import matplotlib  # noqa: F401
        except ImportError:
            return {"ok": False, "detail": "not installed (needed for render)"}
        return {"ok": True, "detail": "installed"}

    config_check = check_config()
    config = load_config(_config_path_from_args(args)) if config_check["ok"] else None
    checks = {
        "config": config_check,
        "site": check_site(config),
        f"catalog ({config.catalog_backend if config else '?'})": check_catalog(config),
        "matplotlib": check_matplotlib(),
    }
    # render is optional
    ok = all(c["ok"] for name, c in checks.items() if name != "matplotlib")

    if args is not None and getattr(args, "json", False):
        payload = _json_envelope(
            command="doctor",
            ok=ok,
            data={"checks": checks},
            error=None
            if ok
            else {
                "code": "doctor_failed",
                "message": "one or more checks failed",
                "details": None,
            },
        )
        print(json.dumps(payload, indent=2))
    else:
        print("SkyClock Doctor Report")
        print("======================")

        for name, result in checks.items():
            status = "OK" if result["ok"] else "MISSING"
            print(f"{name:20} : {status} ({result['detail']})")

        if ok:
            print("\nSystem ready.")
        else:
            print("\nSome components are missing or not configured.")

    return 0 if ok else 1
