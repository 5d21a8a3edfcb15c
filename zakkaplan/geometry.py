"""
Distance and travel-time estimation for ZakkaPlan.

Locations live on a stylised city map where both axes run from 0 to
100. Distances are plain Euclidean distances on that plane and travel
time follows a fixed linear model:

    minutes = round(base_minutes + distance * minutes_per_unit)

Example usage:

    a, b = Coordinate(20, 95), Coordinate(50, 60)
    distance(a, b)      # 46.09...
    travel_time(a, b)   # 65

The model is deliberately simple and deterministic. It is not a real
routing estimate and should not be read as geographically accurate.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from zakkaplan.models import Coordinate

BASE_MINUTES = 10.0
MINUTES_PER_UNIT = 1.2
FALLBACK_MINUTES = 30


@dataclass(frozen=True)
class TravelModel:
    """Constants of the linear travel-time model.

    Attributes:
        base_minutes: Fixed overhead added to every leg.
        minutes_per_unit: Minutes per unit of map distance.
        fallback_minutes: Travel time assumed for a leg where at least
            one end has no known position.
    """

    base_minutes: float = BASE_MINUTES
    minutes_per_unit: float = MINUTES_PER_UNIT
    fallback_minutes: int = FALLBACK_MINUTES


DEFAULT_TRAVEL_MODEL = TravelModel()


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def distance(a: Optional[Coordinate], b: Optional[Coordinate]) -> float:
    """Euclidean distance between two map positions, 0 if either is missing."""
    if a is None or b is None:
        return 0.0
    return math.hypot(a.x - b.x, a.y - b.y)


def travel_time(
    a: Optional[Coordinate],
    b: Optional[Coordinate],
    model: TravelModel = DEFAULT_TRAVEL_MODEL,
) -> int:
    """Estimated travel time in whole minutes between two map positions.

    Returns 0 if either position is missing. Callers that need a
    non-zero estimate for such legs use ``model.fallback_minutes``.
    """
    if a is None or b is None:
        return 0
    return round_half_up(model.base_minutes + distance(a, b) * model.minutes_per_unit)


def leg_minutes(
    a: Optional[Coordinate],
    b: Optional[Coordinate],
    model: TravelModel = DEFAULT_TRAVEL_MODEL,
) -> int:
    """Travel minutes for a leg of the day, using the fallback for unknown ends."""
    if a is None or b is None:
        return model.fallback_minutes
    return travel_time(a, b, model)
