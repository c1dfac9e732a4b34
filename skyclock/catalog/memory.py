from dataclasses import dataclass, field

from .base import CatalogProvider
from skyclock.model.types import ConstellationLineRecord, MilkyWayDotRecord, StarRecord


@dataclass
class InMemoryCatalogProvider(CatalogProvider):
    name: str = "memory"
    stars: list[StarRecord] = field(default_factory=list)
    constellation_lines: list[ConstellationLineRecord] = field(default_factory=list)
    milky_way: dict[str, list[MilkyWayDotRecord]] = field(default_factory=dict)

    def list_stars(self):
        return list(self.stars)

    def list_constellation_lines(self):
        return list(self.constellation_lines)

    def list_milky_way(self, hemisphere: str):
        return list(self.milky_way.get(hemisphere, []))
