"""Data models for the GTFS timetable engine."""

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Optional

from .csv_decoder import Row
from .times import duration_minutes


def _text(row: Row, key: str) -> str:
    return row.get(key) or ""


def _optional(row: Row, key: str) -> Optional[str]:
    return row.get(key) or None


def _float(value: Optional[str]) -> float:
    """Parse a coordinate, yielding nan for anything unparseable."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


class Direction(str, Enum):
    """Travel direction, encoded in the stop name by the agency."""
    NORTHBOUND = "Northbound"
    SOUTHBOUND = "Southbound"

    @property
    def opposite(self) -> "Direction":
        if self is Direction.NORTHBOUND:
            return Direction.SOUTHBOUND
        return Direction.NORTHBOUND


@dataclass(frozen=True)
class StopRecord:
    """A row of stops.txt."""
    stop_id: str
    stop_name: str
    stop_lat: float
    stop_lon: float
    stop_code: Optional[str] = None

    @classmethod
    def from_row(cls, row: Row) -> "StopRecord":
        return cls(
            stop_id=_text(row, "stop_id"),
            stop_name=_text(row, "stop_name"),
            stop_lat=_float(row.get("stop_lat")),
            stop_lon=_float(row.get("stop_lon")),
            stop_code=_optional(row, "stop_code"),
        )


@dataclass(frozen=True)
class RouteRecord:
    """A row of routes.txt."""
    route_id: str
    route_short_name: str
    route_long_name: str
    route_type: str
    route_desc: Optional[str] = None

    @classmethod
    def from_row(cls, row: Row) -> "RouteRecord":
        return cls(
            route_id=_text(row, "route_id"),
            route_short_name=_text(row, "route_short_name"),
            route_long_name=_text(row, "route_long_name"),
            route_type=_text(row, "route_type"),
            route_desc=_optional(row, "route_desc"),
        )


@dataclass(frozen=True)
class CalendarRecord:
    """A row of calendar.txt, day flags already converted to booleans."""
    service_id: str
    monday: bool
    tuesday: bool
    wednesday: bool
    thursday: bool
    friday: bool
    saturday: bool
    sunday: bool

    @classmethod
    def from_row(cls, row: Row) -> "CalendarRecord":
        def flag(day: str) -> bool:
            return row.get(day) == "1"

        return cls(
            service_id=_text(row, "service_id"),
            monday=flag("monday"),
            tuesday=flag("tuesday"),
            wednesday=flag("wednesday"),
            thursday=flag("thursday"),
            friday=flag("friday"),
            saturday=flag("saturday"),
            sunday=flag("sunday"),
        )

    @property
    def runs_weekdays(self) -> bool:
        return self.monday or self.tuesday or self.wednesday or self.thursday or self.friday


@dataclass(frozen=True)
class TripRecord:
    """A row of trips.txt."""
    trip_id: str
    route_id: str
    service_id: str
    trip_headsign: Optional[str] = None
    trip_short_name: Optional[str] = None

    @classmethod
    def from_row(cls, row: Row) -> "TripRecord":
        return cls(
            trip_id=_text(row, "trip_id"),
            route_id=_text(row, "route_id"),
            service_id=_text(row, "service_id"),
            trip_headsign=_optional(row, "trip_headsign"),
            trip_short_name=_optional(row, "trip_short_name"),
        )


@dataclass(frozen=True)
class StopTimeRecord:
    """
    A row of stop_times.txt.

    Times are kept as the raw feed text; hours past 23 mean the trip runs on
    past midnight and must not be normalised.
    """
    trip_id: str
    stop_id: str
    arrival_time: str
    departure_time: str
    stop_sequence: int

    @classmethod
    def from_row(cls, row: Row) -> "StopTimeRecord":
        """Build a record. Raises ValueError if stop_sequence is not an integer."""
        return cls(
            trip_id=_text(row, "trip_id"),
            stop_id=_text(row, "stop_id"),
            arrival_time=_text(row, "arrival_time"),
            departure_time=_text(row, "departure_time"),
            stop_sequence=int(_text(row, "stop_sequence")),
        )


@dataclass(frozen=True)
class Station:
    """A stop as presented to riders, with its inferred direction."""
    stop_id: str
    name: str
    display_name: str
    code: str
    latitude: float
    longitude: float
    direction: Optional[Direction] = None


@dataclass(frozen=True)
class ServiceDays:
    """Day-of-week pattern a train runs on."""
    weekday: bool = False
    saturday: bool = False
    sunday: bool = False


@dataclass(frozen=True)
class Train:
    """
    One scheduled trip.

    departure_time and arrival_time are empty until the train appears in a
    timetable query, where they are stamped for that station pair.
    """
    trip_id: str
    route_id: str
    route_type: str
    headsign: str
    service: ServiceDays = field(default_factory=ServiceDays)
    departure_time: str = ""
    arrival_time: str = ""

    @property
    def id(self) -> str:
        return self.trip_id

    @property
    def route_class(self) -> str:
        """Service class shown to riders: express, limited, local or other."""
        route_type = self.route_type.lower()
        if "bullet" in route_type or "express" in route_type:
            return "express"
        if "limited" in route_type:
            return "limited"
        if "local" in route_type:
            return "local"
        return "other"

    def stamped(self, departure_time: str, arrival_time: str) -> "Train":
        """Return a copy carrying the times for one station pair."""
        return replace(self, departure_time=departure_time, arrival_time=arrival_time)


@dataclass(frozen=True)
class TimetableEntry:
    """A train serving a station pair, as returned by a timetable query."""
    train: Train
    from_station: Station
    to_station: Station
    departure_time: str
    arrival_time: str
    num_stops: int

    @property
    def duration_minutes(self) -> Optional[int]:
        """Journey time in minutes, or None if either time is blank."""
        return duration_minutes(self.departure_time, self.arrival_time)


@dataclass
class FeedData:
    """Everything decoded from one feed. Built once and never mutated after."""
    stops: List[StopRecord] = field(default_factory=list)
    routes: Dict[str, RouteRecord] = field(default_factory=dict)
    calendar: List[CalendarRecord] = field(default_factory=list)
    trips: List[TripRecord] = field(default_factory=list)
    stop_times: List[StopTimeRecord] = field(default_factory=list)
