"""
Station directory: the only process-wide state, loaded once and read-only afterwards
"""
import logging
from typing import Dict, List, Optional

from airwatch.catalog import DEFAULT_CATALOG, SimulationCatalog
from airwatch.models.schemas import Station

logger = logging.getLogger(__name__)


class StationDirectory:
    """Read-only lookup over the catalog's stations"""

    def __init__(self, catalog: SimulationCatalog = DEFAULT_CATALOG):
        self.catalog = catalog
        self._by_id: Dict[str, Station] = {station.id: station for station in catalog.stations}

    @property
    def stations(self) -> List[Station]:
        return list(self.catalog.stations)

    @property
    def station_ids(self) -> List[str]:
        return [station.id for station in self.catalog.stations]

    def get(self, station_id: str) -> Optional[Station]:
        """Get a station by id, or None if it is not in the directory"""
        return self._by_id.get(station_id)

    def __contains__(self, station_id: str) -> bool:
        return station_id in self._by_id

    def __len__(self) -> int:
        return len(self._by_id)

    def district_of(self, station_id: str) -> str:
        """District name for a station, "Unknown" for ids outside the directory"""
        station = self.get(station_id)
        if station is None:
            return "Unknown"
        return station.location.district


# Global directory instance
_directory: Optional[StationDirectory] = None


def load_directory(catalog: SimulationCatalog = DEFAULT_CATALOG) -> StationDirectory:
    """Build the station directory (idempotent)"""
    global _directory
    if _directory is None:
        _directory = StationDirectory(catalog)
        logger.info(f"Loaded station directory: {len(_directory)} stations")
    return _directory


def get_directory() -> StationDirectory:
    """Get directory instance, loading the default catalog on first use"""
    return load_directory()
