"""GTFS static feed loader."""

import csv
import io
import logging
import zipfile
from pathlib import Path
from typing import Callable, List, Optional, TypeVar, Union

import requests

from . import config
from .csv_decoder import Row, decode_table
from .exceptions import FeedLoadError
from .models import (
    CalendarRecord,
    FeedData,
    RouteRecord,
    StopRecord,
    StopTimeRecord,
    TripRecord,
)

logger = logging.getLogger(__name__)

FeedSource = Union[bytes, str, Path]
Record = TypeVar("Record")


class GTFSLoader:
    """Fetches a zipped GTFS feed and decodes it into typed records."""

    def __init__(self, timeout: Optional[float] = None):
        """
        Initialize the GTFS loader.

        Args:
            timeout: Seconds to wait on a feed download. Defaults to the
                     configured value, which is no timeout.
        """
        self.timeout = timeout if timeout is not None else config.get_http_timeout()

    def load(self, source: FeedSource) -> FeedData:
        """
        Load a feed from raw zip bytes, an http(s) URL or a local zip path.

        Returns:
            A fully decoded FeedData. Nothing is returned unless every table
            decoded, so a failure never leaves partial data behind.

        Raises:
            FeedLoadError: If the feed cannot be fetched or read, or has no stops table.
        """
        if isinstance(source, bytes):
            return self.load_from_bytes(source)
        if isinstance(source, str) and source.startswith(("http://", "https://")):
            return self.load_from_url(source)
        return self.load_from_file(source)

    def load_from_url(self, url: str) -> FeedData:
        """Download and load a GTFS zip."""
        logger.info(f"Downloading GTFS data from {url}")
        try:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Failed to fetch GTFS data: {e}")
            raise FeedLoadError(f"Failed to fetch GTFS data from {url}") from e
        return self.load_from_bytes(response.content)

    def load_from_file(self, path: Union[str, Path]) -> FeedData:
        """Load a GTFS zip from the local filesystem."""
        logger.info(f"Loading GTFS data from {path}")
        try:
            payload = Path(path).read_bytes()
        except OSError as e:
            logger.error(f"Failed to read GTFS data: {e}")
            raise FeedLoadError(f"Failed to read GTFS data from {path}") from e
        return self.load_from_bytes(payload)

    def load_from_bytes(self, payload: bytes) -> FeedData:
        """Decode a GTFS zip held in memory."""
        try:
            with zipfile.ZipFile(io.BytesIO(payload)) as zip_file:
                feed = self._decode_feed(zip_file)
        except (
            zipfile.BadZipFile,
            UnicodeDecodeError,
            OSError,
            # unsupported compression and encrypted members
            NotImplementedError,
            RuntimeError,
            csv.Error,
        ) as e:
            logger.error(f"Failed to load GTFS data: {e}")
            raise FeedLoadError(f"Unreadable GTFS archive: {e}") from e

        logger.info(
            f"Loaded {len(feed.stops)} stops, {len(feed.routes)} routes, "
            f"{len(feed.trips)} trips and {len(feed.stop_times)} stop times"
        )
        return feed

    def _decode_feed(self, zip_file: zipfile.ZipFile) -> FeedData:
        # routes and calendar must be in place before trips are assembled
        routes = self._load_routes(zip_file)
        stops = self._load_stops(zip_file)
        if stops is None:
            logger.error(f"GTFS archive has no {config.STOPS_TABLE}")
            raise FeedLoadError(f"GTFS archive has no {config.STOPS_TABLE}")
        stop_times = self._load_stop_times(zip_file)
        calendar = self._load_calendar(zip_file)
        trips = self._load_trips(zip_file)

        return FeedData(
            stops=stops,
            routes={route.route_id: route for route in routes or []},
            calendar=calendar or [],
            trips=trips or [],
            stop_times=stop_times or [],
        )

    @staticmethod
    def read_table(zip_file: zipfile.ZipFile, name: str) -> Optional[List[Row]]:
        """
        Decode one table from the archive.

        Returns:
            None if the archive has no such table, otherwise its rows (which
            may be empty).
        """
        try:
            raw = zip_file.read(name)
        except KeyError:
            logger.warning(f"GTFS archive has no {name}")
            return None
        return decode_table(raw.decode("utf-8"))

    def _load_records(
        self,
        zip_file: zipfile.ZipFile,
        name: str,
        key: str,
        build: Callable[[Row], Record],
    ) -> Optional[List[Record]]:
        """Decode a table into typed records, skipping rows without their key field."""
        rows = self.read_table(zip_file, name)
        if rows is None:
            return None

        records = []
        skipped = 0
        for row in rows:
            if not row.get(key):
                skipped += 1
                continue
            try:
                records.append(build(row))
            except ValueError as e:
                logger.debug(f"Bad row in {name}: {e}")
                skipped += 1

        if skipped:
            logger.warning(f"Skipped {skipped} malformed rows in {name}")
        return records

    def _load_routes(self, zip_file: zipfile.ZipFile) -> Optional[List[RouteRecord]]:
        return self._load_records(zip_file, config.ROUTES_TABLE, "route_id", RouteRecord.from_row)

    def _load_stops(self, zip_file: zipfile.ZipFile) -> Optional[List[StopRecord]]:
        return self._load_records(zip_file, config.STOPS_TABLE, "stop_id", StopRecord.from_row)

    def _load_stop_times(self, zip_file: zipfile.ZipFile) -> Optional[List[StopTimeRecord]]:
        """Parse stop_times.txt. Rows with a non-integer stop_sequence are skipped."""
        return self._load_records(zip_file, config.STOP_TIMES_TABLE, "trip_id", StopTimeRecord.from_row)

    def _load_calendar(self, zip_file: zipfile.ZipFile) -> Optional[List[CalendarRecord]]:
        return self._load_records(zip_file, config.CALENDAR_TABLE, "service_id", CalendarRecord.from_row)

    def _load_trips(self, zip_file: zipfile.ZipFile) -> Optional[List[TripRecord]]:
        return self._load_records(zip_file, config.TRIPS_TABLE, "trip_id", TripRecord.from_row)
