"""Example usage of TimetableEngine."""

import logging
import sys
from datetime import date
from pathlib import Path

# Add src to path so we can import traintable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from traintable import Direction, FeedLoadError, TimetableEngine
from traintable.times import format_duration, format_time_12h

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


def print_timetable(engine: TimetableEngine, origin_name: str, destination_name: str, direction: Direction):
    """
    Display today's trains between two stations.

    Args:
        engine: A loaded TimetableEngine.
        origin_name: Station name without direction (e.g., "San Jose Diridon")
        destination_name: Station name without direction (e.g., "San Francisco")
        direction: Direction of travel.
    """
    origin = engine.find_station(origin_name, direction)
    destination = engine.find_station(destination_name, direction)
    if origin is None or destination is None:
        print(f"Unknown station for {direction.value}. Known stations:")
        for name in engine.list_station_display_names():
            print(f"  - {name}")
        return

    today = date.today()
    entries = engine.query_timetable_for_date(origin, destination, today)

    print(f"\n{'='*70}")
    print(f"{origin.display_name} → {destination.display_name} ({direction.value})")
    print(today.strftime("%A, %B %d, %Y"))
    print(f"{'='*70}\n")

    if not entries:
        print("No trains running on this route today")
        return

    for entry in entries:
        print(
            f"  {entry.train.trip_id:>6}  {entry.train.route_type:<16}"
            f"{format_time_12h(entry.departure_time):>16} → {format_time_12h(entry.arrival_time):<16}"
            f"{format_duration(entry.duration_minutes):>8}  {entry.num_stops} stops"
        )


if __name__ == "__main__":
    if len(sys.argv) < 3:
        print("Usage: example.py ORIGIN DESTINATION [Northbound|Southbound]")
        sys.exit(1)

    direction = Direction(sys.argv[3]) if len(sys.argv) > 3 else Direction.NORTHBOUND

    engine = TimetableEngine()
    try:
        print("Loading GTFS data...")
        engine.load_feed()
    except FeedLoadError as e:
        logger.error(f"Failed to load GTFS data: {e}")
        sys.exit(1)

    print_timetable(engine, sys.argv[1], sys.argv[2], direction)
