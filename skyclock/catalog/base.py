from abc import ABC, abstractmethod
from typing import Sequence

from skyclock.model.types import ConstellationLineRecord, MilkyWayDotRecord, StarRecord


class CatalogProvider(ABC):
    name: str

    @abstractmethod
    def list_stars(self) -> Sequence[StarRecord]:
        raise NotImplementedError

    @abstractmethod
    def list_constellation_lines(self) -> Sequence[ConstellationLineRecord]:
        raise NotImplementedError

    @abstractmethod
    def list_milky_way(self, hemisphere: str) -> Sequence[MilkyWayDotRecord]:
        raise NotImplementedError

    def is_available(self) -> dict:
        """Return a dict with 'ok' (bool) and 'detail' (str) for doctor checks."""
        return {"ok": True, "detail": "in memory"}
