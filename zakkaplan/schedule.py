"""
Timeline calculation utilities for ZakkaPlan.

This module turns a day's ordered stops into a time-based plan. It
chains arrival and departure times from the day's start time, the
visit duration of each stop, and the estimated travel time between
consecutive stops. Legs with an unknown end use a fixed fallback.

Clock arithmetic wraps within 24 hours. A plan running past midnight
keeps showing wrapped ``HH:MM`` values without a day marker.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import List, Sequence

from zakkaplan.geometry import DEFAULT_TRAVEL_MODEL, TravelModel, leg_minutes
from zakkaplan.models import DEFAULT_DURATION_MINUTES, Day, TimelineEntry

# Arbitrary anchor date; only the clock part is ever read back.
_ANCHOR_DATE = date(2000, 1, 1)


def parse_time_string(t: str) -> time:
    """Parse a HH:MM formatted time string into a datetime.time object."""
    try:
        h, m = map(int, t.strip().split(":"))
        return time(hour=h, minute=m)
    except (AttributeError, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid time {t!r}, expected HH:MM") from exc


def add_minutes(time_str: str, minutes: int) -> str:
    """Advance a HH:MM clock reading by ``minutes``, wrapping at midnight."""
    start = datetime.combine(_ANCHOR_DATE, parse_time_string(time_str))
    return (start + timedelta(minutes=minutes)).strftime("%H:%M")


def build_timeline(
    day: Day,
    model: TravelModel = DEFAULT_TRAVEL_MODEL,
    default_duration: int = DEFAULT_DURATION_MINUTES,
) -> List[TimelineEntry]:
    """Generate the timeline for a day.

    Args:
        day: The day whose stops are scheduled, in visiting order.
        model: Travel-time model used between consecutive stops.
        default_duration: Visit length used for stops without a duration.

    Returns:
        One ``TimelineEntry`` per stop, in the same order. The first
        entry arrives at ``day.start_time`` with no travel time.
    """
    timeline: List[TimelineEntry] = []
    current_time = day.start_time
    for idx, stop in enumerate(day.stops):
        travel_minutes = 0
        if idx > 0:
            prev = day.stops[idx - 1]
            travel_minutes = leg_minutes(prev.coords, stop.coords, model)
            current_time = add_minutes(current_time, travel_minutes)
        arrival_time = current_time
        departure_time = add_minutes(arrival_time, stop.duration or default_duration)
        timeline.append(
            TimelineEntry(
                stop=stop,
                arrival_time=arrival_time,
                departure_time=departure_time,
                travel_time_from_prev=travel_minutes,
            )
        )
        current_time = departure_time
    return timeline


def total_travel_minutes(timeline: Sequence[TimelineEntry]) -> int:
    return sum(entry.travel_time_from_prev for entry in timeline)


def format_timeline_text(day: Day, timeline: Sequence[TimelineEntry]) -> str:
    """Format a day's timeline as plain text for copying or download."""
    lines = [f"Day {day.number} (start {day.start_time})\n"]
    for i, entry in enumerate(timeline, start=1):
        if i > 1:
            lines.append(f"   ~ {entry.travel_time_from_prev} min travel")
        note = f" - {entry.note}" if entry.note else ""
        lines.append(f"{i}. {entry.arrival_time}-{entry.departure_time} {entry.name}{note}")
    total = total_travel_minutes(timeline)
    lines.append(f"\nTotal travel time: {total // 60}h {total % 60}m")
    return "\n".join(lines)
