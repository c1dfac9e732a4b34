#!/usr/bin/env python3
"""
Generate data/milkyway_north.csv and data/milkyway_south.csv.
- Dots are scattered around the galactic plane, denser and brighter toward the centre
- Galactic -> ICRS with astropy, then projected at the widest dial scale (155 deg)
- The app rescales the stored points for the observer's latitude

Requires the optional tools dependencies (install with `pip install -e .[tools]`).
"""
import csv
from pathlib import Path

import astropy.units as u
import numpy as np
from astropy.coordinates import SkyCoord

from skyclock.model.projection import ANGLE_LIMIT, NORTH, SOUTH

OUT_DIR = Path("data")
NUM_DOTS = 6000
LATITUDE_SIGMA_DEG = 6.0
BASE_COLOR_RGB = 0xC8D2FF
MAX_ALPHA = 0x60
SEED = 20200625


def sample_galactic(rng: np.random.Generator) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    l_deg = rng.uniform(0.0, 360.0, NUM_DOTS)
    b_deg = rng.normal(0.0, LATITUDE_SIGMA_DEG, NUM_DOTS)
    # Bulge toward l = 0, fading toward the anticentre.
    weight = np.exp(-((b_deg / LATITUDE_SIGMA_DEG) ** 2)) * (0.6 + 0.4 * np.cos(np.deg2rad(l_deg)))
    return l_deg, b_deg, np.clip(weight, 0.0, 1.0)


def project(hemisphere, ra_deg: np.ndarray, dec_deg: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    radius = (hemisphere.to_angle(dec_deg) - 90.0) / ANGLE_LIMIT
    angle = hemisphere.hours_to_radians(-ra_deg / 15.0)
    x = -radius * np.sin(angle)
    y = -radius * np.cos(angle)
    return x, y, radius < 1.0


def write_dots(path: Path, x: np.ndarray, y: np.ndarray, weight: np.ndarray) -> int:
    alpha = np.round(weight * MAX_ALPHA).astype(int)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["id", "x", "y", "argb"])
        for i in range(len(x)):
            argb = (int(alpha[i]) << 24) | BASE_COLOR_RGB
            writer.writerow([i + 1, f"{x[i]:.5f}", f"{y[i]:.5f}", f"0x{argb:08x}"])
    return len(x)


def main() -> int:
    rng = np.random.default_rng(SEED)
    l_deg, b_deg, weight = sample_galactic(rng)
    coords = SkyCoord(l=l_deg * u.deg, b=b_deg * u.deg, frame="galactic").icrs
    ra_deg = coords.ra.deg
    dec_deg = coords.dec.deg

    for hemisphere in (NORTH, SOUTH):
        x, y, visible = project(hemisphere, ra_deg, dec_deg)
        keep = visible & (weight > 0.05)
        out_path = OUT_DIR / f"milkyway_{hemisphere.name}.csv"
        count = write_dots(out_path, x[keep], y[keep], weight[keep])
        print(f"Wrote {count} dots to {out_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
