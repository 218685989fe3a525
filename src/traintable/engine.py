"""Main timetable engine class."""

import logging
from datetime import date
from enum import Enum
from typing import List, Optional

from . import config
from .exceptions import EngineNotLoadedError, FeedLoadError
from .gtfs_loader import FeedSource, GTFSLoader
from .models import Direction, Station, TimetableEntry
from .stations import StationIndex
from .timetable import Timetable
from .trips import assemble_trains

logger = logging.getLogger(__name__)


class LoadState(str, Enum):
    EMPTY = "empty"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class TimetableEngine:
    """
    Answers station-to-station timetable queries for one GTFS feed.

    This class provides methods to:
    - Load a feed once, from a URL, a local zip or raw bytes
    - List and look up stations, by name and direction
    - Get the trains running between two stations, optionally on a given date
    """

    def __init__(self, loader: Optional[GTFSLoader] = None):
        """
        Initialize the engine.

        Args:
            loader: Loader used to fetch and decode the feed. A default
                    GTFSLoader is created if not given.
        """
        self.loader = loader or GTFSLoader()
        self.state = LoadState.EMPTY
        self._stations = StationIndex()
        self._timetable = Timetable()

    @property
    def is_loaded(self) -> bool:
        return self.state is LoadState.LOADED

    def load_feed(self, source: Optional[FeedSource] = None) -> None:
        """
        Load a GTFS feed. Does nothing if a feed is already loaded.

        Args:
            source: Zip bytes, an http(s) URL or a local zip path. Defaults to
                    the configured feed URL.

        Raises:
            FeedLoadError: If the feed cannot be loaded, or another load is
                           in progress. The engine is left empty and a
                           later call may retry.
        """
        if self.state is LoadState.LOADED:
            logger.debug("Feed already loaded, ignoring load request")
            return
        if self.state is LoadState.LOADING:
            raise FeedLoadError("A feed load is already in progress")

        self.state = LoadState.LOADING
        try:
            feed = self.loader.load(source if source is not None else config.get_feed_url())
            stations = StationIndex(feed.stops)
            trains = assemble_trains(feed.trips, feed.routes, feed.calendar)
            timetable = Timetable(feed.stop_times, trains)
        except Exception:
            self.state = LoadState.FAILED
            raise

        self._stations = stations
        self._timetable = timetable
        self.state = LoadState.LOADED
        logger.info(f"Timetable ready with {len(stations)} stations and {len(trains)} trains")

    def _require_loaded(self) -> None:
        if not self.is_loaded:
            raise EngineNotLoadedError(f"No feed loaded (state: {self.state.value})")

    def list_stations(self) -> List[Station]:
        """All stations, ordered from north-west to south-east."""
        self._require_loaded()
        return self._stations.stations()

    def list_station_display_names(self) -> List[str]:
        """Distinct station names without direction, sorted."""
        self._require_loaded()
        return self._stations.display_names()

    def list_stations_by_direction(self, direction: Direction) -> List[Station]:
        self._require_loaded()
        return self._stations.by_direction(direction)

    def find_station(self, display_name: str, direction: Optional[Direction]) -> Optional[Station]:
        """
        Find a station by its display name and direction.

        Args:
            display_name: Name without direction or agency suffix (e.g., "Palo Alto").
            direction: Direction of travel.

        Returns:
            The station, or None if there is no such pair.

        Raises:
            EngineNotLoadedError: If no feed has been loaded yet.
        """
        self._require_loaded()
        return self._stations.find(display_name, direction)

    def counterpart(self, station: Station) -> Optional[Station]:
        """
        The same station for the opposite direction of travel.

        Used when the rider flips direction: a selection without a
        counterpart should be cleared.
        """
        self._require_loaded()
        return self._stations.counterpart(station)

    def query_timetable(self, from_station: Station, to_station: Station) -> List[TimetableEntry]:
        """
        Get every train from one station to another, sorted by departure.

        Args:
            from_station: Boarding station.
            to_station: Alighting station, in the same direction.

        Returns:
            List of TimetableEntry objects; empty if the directions differ.

        Raises:
            EngineNotLoadedError: If no feed has been loaded yet. Every query
                                  method raises this before a successful load.
        """
        self._require_loaded()
        return self._timetable.query(from_station, to_station)

    def query_timetable_for_date(self, from_station: Station, to_station: Station, day: date) -> List[TimetableEntry]:
        """Like query_timetable(), keeping only trains that run on the given date."""
        self._require_loaded()
        return self._timetable.query_for_date(from_station, to_station, day)
