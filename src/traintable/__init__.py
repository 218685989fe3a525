"""TrainTable - Station-to-station timetables from GTFS static feeds."""

__version__ = "0.1.0"

from .models import Direction, Station, Train, ServiceDays, TimetableEntry
from .engine import TimetableEngine, LoadState
from .gtfs_loader import GTFSLoader
from .exceptions import TrainTableError, FeedLoadError, EngineNotLoadedError

__all__ = [
    "TimetableEngine",
    "LoadState",
    "GTFSLoader",
    "Direction",
    "Station",
    "Train",
    "ServiceDays",
    "TimetableEntry",
    "TrainTableError",
    "FeedLoadError",
    "EngineNotLoadedError",
]
