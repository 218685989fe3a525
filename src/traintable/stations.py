"""Station catalog derived from GTFS stops."""

import logging
import math
from typing import Dict, Iterable, List, Optional, Tuple

from . import config
from .models import Direction, Station, StopRecord

logger = logging.getLogger(__name__)

# First keyword found in the stop name wins
DIRECTION_KEYWORDS = (Direction.NORTHBOUND, Direction.SOUTHBOUND)


def infer_direction(stop_name: str) -> Optional[Direction]:
    """Return the direction named in a stop name, if any."""
    for direction in DIRECTION_KEYWORDS:
        if direction.value in stop_name:
            return direction
    return None


def display_name(stop_name: str) -> str:
    """Strip the direction and agency suffixes from a stop name."""
    name = stop_name
    for suffix in (" Northbound", " Southbound", config.AGENCY_SUFFIX):
        name = name.replace(suffix, "")
    return name.strip()


def station_from_stop(stop: StopRecord) -> Station:
    return Station(
        stop_id=stop.stop_id,
        name=stop.stop_name,
        display_name=display_name(stop.stop_name),
        code=stop.stop_code or stop.stop_id,
        latitude=stop.stop_lat,
        longitude=stop.stop_lon,
        direction=infer_direction(stop.stop_name),
    )


def _northwest_key(station: Station) -> Tuple[bool, float]:
    # Higher latitude and lower longitude come first; unknown coordinates last
    score = station.latitude - station.longitude
    if math.isnan(score):
        return (True, 0.0)
    return (False, -score)


class StationIndex:
    """
    Indexes stations by id and by (display name, direction).

    Stations whose name carries no direction keyword are kept, with
    direction None; they never appear in a direction-filtered list.
    """

    def __init__(self, stops: Iterable[StopRecord] = ()):
        stations = [station_from_stop(stop) for stop in stops]
        self._stations: List[Station] = sorted(stations, key=_northwest_key)
        self._by_id: Dict[str, Station] = {}
        self._by_name: Dict[Tuple[str, Optional[Direction]], Station] = {}

        for station in self._stations:
            self._by_id[station.stop_id] = station
            self._by_name.setdefault((station.display_name, station.direction), station)

        undirected = sum(1 for station in self._stations if station.direction is None)
        if undirected:
            logger.warning(f"{undirected} stations have no direction in their name")
        logger.debug(f"Indexed {len(self._stations)} stations")

    def __len__(self) -> int:
        return len(self._stations)

    def stations(self) -> List[Station]:
        """All stations, ordered from north-west to south-east."""
        return list(self._stations)

    def by_direction(self, direction: Direction) -> List[Station]:
        """Stations serving one direction, ordered from north-west to south-east."""
        return [station for station in self._stations if station.direction == direction]

    def get(self, stop_id: str) -> Optional[Station]:
        return self._by_id.get(stop_id)

    def find(self, name: str, direction: Optional[Direction]) -> Optional[Station]:
        """Look up a station by exact display name and direction."""
        return self._by_name.get((name, direction))

    def display_names(self) -> List[str]:
        """Distinct display names, sorted, regardless of direction."""
        return sorted({station.display_name for station in self._stations})

    def counterpart(self, station: Station) -> Optional[Station]:
        """
        The same-named station in the opposite direction.

        Returns None if the station has no direction or no counterpart exists.
        """
        if station.direction is None:
            return None
        return self.find(station.display_name, station.direction.opposite)
