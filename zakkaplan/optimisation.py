"""
Route optimisation heuristics for ZakkaPlan.

This module reorders a day's stops with the nearest neighbour
heuristic: starting from the first stop, it repeatedly visits the
closest stop that has not been visited yet. The first stop always
stays first.

Stops without map coordinates cannot be compared by distance. They
are moved to the end of the route in their original order, unless the
current stop itself has no coordinates, in which case the first
remaining stop with coordinates is taken next.

The result is a greedy approximation and is not guaranteed to be the
shortest possible route.
"""

from __future__ import annotations

from typing import List, Sequence

from zakkaplan.errors import TooFewStopsError
from zakkaplan.geometry import DEFAULT_TRAVEL_MODEL, TravelModel, distance, leg_minutes
from zakkaplan.models import Stop

MIN_STOPS_TO_OPTIMISE = 3


def nearest_neighbor_order(stops: Sequence[Stop]) -> List[int]:
    """Construct a visiting order using the nearest neighbour heuristic.

    Args:
        stops: Stops in their current order. Index 0 is the fixed start.

    Returns:
        A list of indices into ``stops``, starting with 0 and including
        every other index exactly once.
    """
    n = len(stops)
    if n == 0:
        return []
    remaining = list(range(1, n))
    route = [0]
    current = 0
    while remaining:
        with_coords = [j for j in remaining if stops[j].coords is not None]
        if not with_coords:
            route.extend(remaining)
            break
        current_coords = stops[current].coords
        if current_coords is None:
            next_stop = with_coords[0]
        else:
            next_stop = with_coords[0]
            best = distance(current_coords, stops[next_stop].coords)
            for j in with_coords[1:]:
                d = distance(current_coords, stops[j].coords)
                # strict comparison keeps the earliest stop on ties
                if d < best:
                    best = d
                    next_stop = j
        route.append(next_stop)
        remaining.remove(next_stop)
        current = next_stop
    return route


def optimise_route(stops: Sequence[Stop]) -> List[Stop]:
    """Return the stops reordered by the nearest neighbour heuristic.

    Raises:
        TooFewStopsError: if there are fewer than three stops. The
            input is left as it is and is available on the exception.
    """
    if len(stops) < MIN_STOPS_TO_OPTIMISE:
        raise TooFewStopsError(stops, minimum=MIN_STOPS_TO_OPTIMISE)
    return [stops[i] for i in nearest_neighbor_order(stops)]


def route_travel_minutes(stops: Sequence[Stop], model: TravelModel = DEFAULT_TRAVEL_MODEL) -> int:
    """Total travel minutes along the route, counting fallback legs."""
    return sum(
        leg_minutes(stops[i].coords, stops[i + 1].coords, model)
        for i in range(len(stops) - 1)
    )
