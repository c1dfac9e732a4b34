#!/usr/bin/env python3
"""
Generate data/stars.csv from the HYG database for the dial's star layer.
- Keeps stars brighter than magnitude 6 (naked eye), Sun excluded
- Display radius = min(4.5, 6 * 0.65 ** mag)

Requires the optional tools dependencies (install with `pip install -e .[tools]`).
"""
import csv
import sys
from pathlib import Path

import numpy as np

DEFAULT_SOURCE = Path("hyg4.2/hygdata_v42.csv")
OUT_PATH = Path("data/stars.csv")
MAG_LIMIT = 6.0
MAX_RADIUS = 4.5


def display_radius(mag: np.ndarray) -> np.ndarray:
    return np.minimum(MAX_RADIUS, 6.0 * np.power(0.65, mag))


def main() -> int:
    source = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_SOURCE
    if not source.exists():
        print(f"HYG catalog not found: {source}", file=sys.stderr)
        return 1

    ids: list[int] = []
    ra_list: list[float] = []
    dec_list: list[float] = []
    mag_list: list[float] = []
    with source.open(newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            try:
                mag = float(row["mag"])
                if mag >= MAG_LIMIT or row.get("proper") == "Sol":
                    continue
                # Prefer radians if present to avoid RA unit ambiguity.
                if row.get("rarad") and row.get("decrad"):
                    ra = np.rad2deg(float(row["rarad"]))
                    dec = np.rad2deg(float(row["decrad"]))
                else:
                    ra = float(row["ra"]) * 15.0
                    dec = float(row["dec"])
                star_id = int(row.get("hip") or row["id"])
            except (KeyError, ValueError):
                continue
            ids.append(star_id)
            ra_list.append(ra)
            dec_list.append(dec)
            mag_list.append(mag)

    ra_arr = np.mod(np.array(ra_list, dtype=float), 360.0)
    dec_arr = np.array(dec_list, dtype=float)
    radius_arr = display_radius(np.array(mag_list, dtype=float))
    # brightest first so faint stars never paint over bright ones
    order = np.argsort(-radius_arr, kind="stable")
    print(f"HYG returned {len(order)} stars with mag < {MAG_LIMIT}.")

    OUT_PATH.parent.mkdir(parents=True, exist_ok=True)
    with open(OUT_PATH, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["id", "ra_deg", "dec_deg", "radius"])
        for i in order:
            writer.writerow(
                [ids[i], f"{ra_arr[i]:.4f}", f"{dec_arr[i]:.4f}", f"{radius_arr[i]:.3f}"]
            )
    print(f"Wrote {len(order)} rows to {OUT_PATH}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
