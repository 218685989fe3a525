"""Point-to-point timetable queries over a loaded feed."""

import logging
from datetime import date
from typing import Dict, List, Mapping, Optional, Sequence

from .models import Station, StopTimeRecord, TimetableEntry, Train

logger = logging.getLogger(__name__)

SATURDAY = 5
SUNDAY = 6


def runs_on(train: Train, day: date) -> bool:
    """
    Whether a train runs on the given date.

    Only the day of the week is considered; calendar exceptions and holidays
    are not.
    """
    weekday = day.weekday()
    if weekday == SUNDAY:
        return train.service.sunday
    if weekday == SATURDAY:
        return train.service.saturday
    return train.service.weekday


def count_stops(trip_stop_times: Sequence[StopTimeRecord], from_stop_id: str, to_stop_id: str) -> int:
    """
    Count the stops made after leaving the origin, up to and including the destination.

    Args:
        trip_stop_times: Every stop time of a single trip, in any order.
        from_stop_id: Origin stop.
        to_stop_id: Destination stop.

    Returns:
        The number of stop times with origin sequence < sequence <= destination
        sequence, or 0 if either stop is not on the trip.
    """
    ordered = sorted(trip_stop_times, key=lambda st: st.stop_sequence)
    origin = next((st for st in ordered if st.stop_id == from_stop_id), None)
    if origin is None:
        return 0
    destination = next(
        (st for st in ordered if st.stop_id == to_stop_id and st.stop_sequence > origin.stop_sequence),
        None,
    )
    if destination is None:
        return 0
    return stops_between(ordered, origin.stop_sequence, destination.stop_sequence)


def stops_between(trip_stop_times: Sequence[StopTimeRecord], origin_sequence: int, destination_sequence: int) -> int:
    """Count stop times with origin_sequence < stop_sequence <= destination_sequence."""
    return sum(
        1 for st in trip_stop_times
        if origin_sequence < st.stop_sequence <= destination_sequence
    )


class Timetable:
    """Answers timetable queries from stop times and assembled trains."""

    def __init__(self, stop_times: Sequence[StopTimeRecord] = (), trains: Optional[Mapping[str, Train]] = None):
        self.stop_times = list(stop_times)
        self.trains: Mapping[str, Train] = trains or {}
        self.stop_times_by_trip: Dict[str, List[StopTimeRecord]] = {}
        for stop_time in self.stop_times:
            self.stop_times_by_trip.setdefault(stop_time.trip_id, []).append(stop_time)
        for trip_stop_times in self.stop_times_by_trip.values():
            trip_stop_times.sort(key=lambda st: st.stop_sequence)

    def query(self, from_station: Station, to_station: Station) -> List[TimetableEntry]:
        """
        Find every train running from one station to the other.

        Args:
            from_station: Where the rider boards.
            to_station: Where the rider alights.

        Returns:
            Entries sorted by departure time. Times are compared as raw text,
            which is chronological for zero-padded feed times, next-day
            times ("25:10") included. Trains departing at the same time keep
            feed order. Stations in different directions give no entries.
        """
        if from_station.direction != to_station.direction:
            return []

        relevant = [
            st for st in self.stop_times
            if st.stop_id == from_station.stop_id or st.stop_id == to_station.stop_id
        ]

        entries: List[TimetableEntry] = []
        processed = set()
        for origin in relevant:
            if origin.stop_id != from_station.stop_id or origin.trip_id in processed:
                continue

            trip_stop_times = self.stop_times_by_trip.get(origin.trip_id, [])
            destination = next(
                (
                    st for st in trip_stop_times
                    if st.stop_id == to_station.stop_id and st.stop_sequence > origin.stop_sequence
                ),
                None,
            )
            if destination is None:
                continue

            train = self.trains.get(origin.trip_id)
            if train is None:
                continue

            entries.append(TimetableEntry(
                train=train.stamped(origin.departure_time, destination.arrival_time),
                from_station=from_station,
                to_station=to_station,
                departure_time=origin.departure_time,
                arrival_time=destination.arrival_time,
                num_stops=stops_between(trip_stop_times, origin.stop_sequence, destination.stop_sequence),
            ))
            processed.add(origin.trip_id)

        entries.sort(key=lambda entry: entry.departure_time)
        logger.debug(
            f"{len(entries)} trains from {from_station.stop_id} to {to_station.stop_id} "
            f"out of {len(relevant)} stop times"
        )
        return entries

    def query_for_date(self, from_station: Station, to_station: Station, day: date) -> List[TimetableEntry]:
        """Like query(), keeping only trains that run on the given date."""
        return [entry for entry in self.query(from_station, to_station) if runs_on(entry.train, day)]
