from dataclasses import dataclass
import csv
import logging
from pathlib import Path
from typing import Callable, TypeVar

from .base import CatalogProvider
from skyclock.errors import CatalogError
from skyclock.model.types import ConstellationLineRecord, MilkyWayDotRecord, StarRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")

STARS_FILE = "stars.csv"
CONSTELLATION_LINES_FILE = "constellation_lines.csv"
MILKY_WAY_FILES = {
    "north": "milkyway_north.csv",
    "south": "milkyway_south.csv",
}


@dataclass
class LocalCsvCatalogProvider(CatalogProvider):
    name: str = "local"
    data_dir: Path | None = None

    def _resolve_dir(self) -> Path:
        if self.data_dir is not None:
            return self.data_dir
        repo_root = Path(__file__).resolve().parents[2]
        return repo_root / "data"

    def list_stars(self):
        return self._load(STARS_FILE, _star_from_row)

    def list_constellation_lines(self):
        return self._load(CONSTELLATION_LINES_FILE, _line_from_row)

    def list_milky_way(self, hemisphere: str):
        try:
            filename = MILKY_WAY_FILES[hemisphere]
        except KeyError:
            raise ValueError(f"Unknown hemisphere: {hemisphere}") from None
        return self._load(filename, _milky_way_dot_from_row)

    def is_available(self) -> dict:
        data_dir = self._resolve_dir()
        missing = [
            name
            for name in (STARS_FILE, CONSTELLATION_LINES_FILE, *MILKY_WAY_FILES.values())
            if not (data_dir / name).exists()
        ]
        if missing:
            return {"ok": False, "detail": f"missing in {data_dir}: {', '.join(missing)}"}
        return {"ok": True, "detail": str(data_dir)}

    def _load(self, filename: str, parse: Callable[[dict], T]) -> list[T]:
        path = self._resolve_dir() / filename
        if not path.exists():
            raise CatalogError(f"Catalog file not found: {path}")
        records: list[T] = []
        with open(path, "r", encoding="utf-8", newline="") as f:
            reader = csv.DictReader(f)
            for line_no, row in enumerate(reader, start=2):
                if not any((value or "").strip() for value in row.values() if isinstance(value, str)):
                    continue
                try:
                    records.append(parse(row))
                except (KeyError, TypeError, ValueError) as e:
                    raise CatalogError(f"{path}:{line_no}: invalid row ({e})") from e
        logger.debug("Loaded %d records from %s", len(records), path)
        return records


def _star_from_row(row: dict) -> StarRecord:
    return StarRecord(
        id=int(row["id"]),
        ra_deg=float(row["ra_deg"]),
        dec_deg=float(row["dec_deg"]),
        radius=float(row["radius"]),
    )


def _line_from_row(row: dict) -> ConstellationLineRecord:
    return ConstellationLineRecord(
        id=int(row["id"]),
        ra1_deg=float(row["ra1_deg"]),
        dec1_deg=float(row["dec1_deg"]),
        ra2_deg=float(row["ra2_deg"]),
        dec2_deg=float(row["dec2_deg"]),
    )


def _milky_way_dot_from_row(row: dict) -> MilkyWayDotRecord:
    return MilkyWayDotRecord(
        id=int(row["id"]),
        x=float(row["x"]),
        y=float(row["y"]),
        argb=_parse_argb(row["argb"]),
    )


def _parse_argb(value: str) -> int:
    value = value.strip()
    if value.startswith("#"):
        return int(value[1:], 16)
    if value.lower().startswith("0x"):
        return int(value, 16)
    return int(value)
