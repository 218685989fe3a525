"""Arithmetic and formatting for GTFS schedule times.

GTFS times are "HH:MM" or "HH:MM:SS" measured from the start of the service
day, so a trip that runs past midnight has hours of 24 and above ("25:10" is
1:10 AM the next day). These helpers keep that convention intact.
"""

from typing import Optional

MINUTES_PER_DAY = 24 * 60


def time_to_minutes(value: str) -> int:
    """
    Convert a schedule time to minutes since the start of the service day.

    Args:
        value: "HH:MM" or "HH:MM:SS"; seconds are ignored.

    Returns:
        Minutes, which may exceed one day for rollover times.

    Raises:
        ValueError: If the value is not a schedule time.
    """
    parts = value.strip().split(":")
    if len(parts) not in (2, 3):
        raise ValueError(f"Invalid schedule time: {value!r}")
    hours, minutes = int(parts[0]), int(parts[1])
    return hours * 60 + minutes


def duration_minutes(departure: str, arrival: str) -> Optional[int]:
    """
    Minutes between departure and arrival, wrapping across midnight.

    Returns None if either time is blank, as on stops that are not timepoints.
    """
    if not departure.strip() or not arrival.strip():
        return None
    duration = time_to_minutes(arrival) - time_to_minutes(departure)
    if duration < 0:
        duration += MINUTES_PER_DAY
    return duration


def format_duration(minutes: Optional[int]) -> str:
    """Format a duration as e.g. "1h 5m"; an unknown duration is an empty string."""
    if minutes is None:
        return ""
    return f"{minutes // 60}h {minutes % 60}m"


def format_time_12h(value: str) -> str:
    """
    Format a schedule time on a 12-hour clock.

    Rollover times are shown with a "(+1)" marker, e.g. "25:10" -> "1:10 AM (+1)".
    A blank time formats as an empty string.
    """
    if not value.strip():
        return ""
    hours_text, minutes_text = value.strip().split(":")[:2]
    hour = int(hours_text)
    next_day = hour >= 24
    if next_day:
        hour -= 24

    suffix = "PM" if hour >= 12 else "AM"
    display_hour = hour % 12 or 12
    text = f"{display_hour}:{minutes_text} {suffix}"
    return f"{text} (+1)" if next_day else text
