"""
Itinerary editing helpers for ZakkaPlan.

An itinerary is a list of ``Day`` records. Every function here returns
new values and leaves its arguments untouched, so the Streamlit app can
keep the authoritative copy in session state and swap it wholesale
after each edit.
"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Mapping, Optional, Sequence

from zakkaplan.models import DEFAULT_DURATION_MINUTES, DEFAULT_START_TIME, Day, Stop
from zakkaplan.optimisation import optimise_route
from zakkaplan.places import PREDEFINED_PLACES, Place, lookup_place
from zakkaplan.schedule import parse_time_string

DEFAULT_NOTE = "Free time"


def create_stop(
    name: str,
    note: str = "",
    catalogue: Mapping[str, Place] = PREDEFINED_PLACES,
    default_duration: int = DEFAULT_DURATION_MINUTES,
) -> Stop:
    """Create a new stop, taking coordinates and duration from the catalogue.

    Names not found in the catalogue become custom stops without
    coordinates and with ``default_duration`` minutes.

    Raises:
        ValueError: if ``name`` is blank.
    """
    name = (name or "").strip()
    if not name:
        raise ValueError("A stop needs a name")
    note = (note or "").strip() or DEFAULT_NOTE
    place = lookup_place(name, catalogue)
    if place is None:
        return Stop(name=name, note=note, coords=None, duration=default_duration)
    return Stop(name=name, note=note, coords=place.coords, duration=place.default_duration)


def default_itinerary() -> List[Day]:
    """The starter plan: land at Kansai Airport and check in at Namba."""
    first_day = Day(
        number=1,
        start_time="10:00",
        stops=(
            replace(create_stop("Kansai Airport", "Flight arrives"), duration=60),
            replace(create_stop("Namba", "Hotel check-in"), duration=60),
        ),
    )
    return [first_day]


def add_day(itinerary: Sequence[Day], start_time: str = DEFAULT_START_TIME) -> List[Day]:
    start = parse_time_string(start_time).strftime("%H:%M")
    return list(itinerary) + [Day(number=len(itinerary) + 1, start_time=start)]


def find_day(itinerary: Sequence[Day], number: int) -> Optional[Day]:
    for day in itinerary:
        if day.number == number:
            return day
    return None


def replace_day(itinerary: Sequence[Day], day: Day) -> List[Day]:
    """Swap in ``day`` for the day with the same number."""
    return [day if d.number == day.number else d for d in itinerary]


def add_stop(day: Day, stop: Stop) -> Day:
    return replace(day, stops=day.stops + (stop,))


def remove_stop(day: Day, stop_id: str) -> Day:
    return replace(day, stops=tuple(s for s in day.stops if s.id != stop_id))


def move_stop(day: Day, index: int, direction: str) -> Day:
    """Swap the stop at ``index`` with its neighbour.

    ``direction`` is ``"up"`` or ``"down"``. Moves past either end of
    the day leave it unchanged.
    """
    if direction not in ("up", "down"):
        raise ValueError(f"Unknown direction {direction!r}")
    target = index - 1 if direction == "up" else index + 1
    if not (0 <= index < len(day.stops) and 0 <= target < len(day.stops)):
        return day
    stops = list(day.stops)
    stops[index], stops[target] = stops[target], stops[index]
    return replace(day, stops=tuple(stops))


def set_start_time(day: Day, value: str) -> Day:
    """Return the day with a new start time.

    Raises:
        ValueError: if ``value`` is not a valid HH:MM time.
    """
    start = parse_time_string(value)
    return replace(day, start_time=start.strftime("%H:%M"))


def apply_route(day: Day, stops: Sequence[Stop]) -> Day:
    """Write a reordered stop sequence back into the day."""
    if sorted(s.id for s in stops) != sorted(s.id for s in day.stops):
        raise ValueError("The new route must contain exactly the day's stops")
    return replace(day, stops=tuple(stops))


def optimise_day(day: Day) -> Day:
    """Reorder a day's stops with the nearest neighbour heuristic.

    Raises:
        TooFewStopsError: if the day has fewer than three stops.
    """
    return apply_route(day, optimise_route(day.stops))
