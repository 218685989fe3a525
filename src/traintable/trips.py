"""Assembles trips, routes and calendar entries into trains."""

import logging
from typing import Dict, Iterable, Mapping, Optional

from .models import CalendarRecord, RouteRecord, ServiceDays, Train, TripRecord

logger = logging.getLogger(__name__)

UNKNOWN_ROUTE_TYPE = "Unknown"


def service_days(calendar: Optional[CalendarRecord]) -> ServiceDays:
    """Collapse a calendar entry into weekday/Saturday/Sunday flags."""
    if calendar is None:
        return ServiceDays()
    return ServiceDays(
        weekday=calendar.runs_weekdays,
        saturday=calendar.saturday,
        sunday=calendar.sunday,
    )


def route_type_label(route: Optional[RouteRecord]) -> str:
    """Route long name, else short name, else "Unknown"."""
    if route is None:
        return UNKNOWN_ROUTE_TYPE
    return route.route_long_name or route.route_short_name or UNKNOWN_ROUTE_TYPE


def assemble_trains(
    trips: Iterable[TripRecord],
    routes: Mapping[str, RouteRecord],
    calendar: Iterable[CalendarRecord],
) -> Dict[str, Train]:
    """
    Join trips to their route and service pattern.

    Args:
        trips: Trip records, in feed order.
        routes: Route records keyed by route_id.
        calendar: Calendar records; the first entry for a service_id wins.

    Returns:
        Trains keyed by trip_id, without departure or arrival times.
    """
    services: Dict[str, CalendarRecord] = {}
    for entry in calendar:
        services.setdefault(entry.service_id, entry)

    trains: Dict[str, Train] = {}
    missing_service = 0
    for trip in trips:
        if trip.trip_id in trains:
            continue
        service = services.get(trip.service_id)
        if service is None:
            missing_service += 1
        trains[trip.trip_id] = Train(
            trip_id=trip.trip_id,
            route_id=trip.route_id,
            route_type=route_type_label(routes.get(trip.route_id)),
            headsign=trip.trip_headsign or "",
            service=service_days(service),
        )

    if missing_service:
        logger.warning(f"{missing_service} trips have no calendar entry and never run")
    return trains

