import argparse
import sys

from skyclock import __version__
from skyclock.cli.commands import (
    DRAG_MODES,
    run_analemma,
    run_doctor,
    run_drag,
    run_horizon,
    run_now,
    run_render,
)


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", help="Path to config TOML (default: ~/.config/skyclock/config.toml)")
    parser.add_argument("--lat", dest="latitude_deg", type=float, help="Observer latitude in degrees")
    parser.add_argument("--lon", dest="longitude_deg", type=float, help="Observer longitude in degrees (east positive)")
    parser.add_argument("--hemisphere", choices=["north", "south"], help="Dial configuration")
    parser.add_argument("--at", help="Instant as ISO 8601 (default: now)")
    parser.add_argument("--utc-offset", dest="utc_offset", type=float, help="Local UTC offset in hours")
    parser.add_argument("--timezone", help="IANA time zone name, e.g. Asia/Tokyo")
    parser.add_argument("--json", action="store_true", help="Output result as JSON")
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warn", "error"],
        help="Enable logging at this level",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="skyclock")
    parser.add_argument("--version", action="store_true", help="Show version and exit")

    subparsers = parser.add_subparsers(dest="command")

    doctor_parser = subparsers.add_parser("doctor", help="Check config and catalog availability")
    _add_common_args(doctor_parser)

    now_parser = subparsers.add_parser("now", help="Show dial angles and Sun/Moon positions")
    _add_common_args(now_parser)

    drag_parser = subparsers.add_parser("drag", help="Apply a dial drag and show the resulting instant")
    drag_parser.add_argument("mode", choices=DRAG_MODES, help="Which observable stays fixed")
    drag_parser.add_argument("--rotate", type=float, required=True, help="Rotation in degrees")
    _add_common_args(drag_parser)

    horizon_parser = subparsers.add_parser("horizon", help="Show horizon and alt/az grid geometry")
    _add_common_args(horizon_parser)

    analemma_parser = subparsers.add_parser("analemma", help="Show analemma and month tick points")
    _add_common_args(analemma_parser)

    render_parser = subparsers.add_parser("render", help="Plot the dial (requires matplotlib)")
    render_parser.add_argument("--out", help="Output image path (PNG, SVG, ...)")
    render_parser.add_argument("--show", action="store_true", help="Display plot window")
    _add_common_args(render_parser)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"SkyClock {__version__}")
        return 0

    if args.command == "doctor":
        return run_doctor(args)

    if args.command == "now":
        return run_now(args)

    if args.command == "drag":
        return run_drag(args)

    if args.command == "horizon":
        return run_horizon(args)

    if args.command == "analemma":
        return run_analemma(args)

    if args.command == "render":
        if not args.out and not args.show:
            parser.error("render needs --out and/or --show")
        return run_render(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
