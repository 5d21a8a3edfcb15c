"""
Plain data records for ZakkaPlan itineraries.

All records are frozen dataclasses. Updating a day or a stop means
building a new value (``dataclasses.replace``), which keeps the
engine functions free of aliasing with the caller's state.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Optional, Tuple

DEFAULT_DURATION_MINUTES = 90
DEFAULT_START_TIME = "09:00"


def new_stop_id() -> str:
    """Return a fresh, never reused stop identifier."""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Coordinate:
    """A position on the stylised 0-100 city map."""

    x: float
    y: float


@dataclass(frozen=True)
class Stop:
    name: str
    note: str = ""
    coords: Optional[Coordinate] = None
    duration: int = DEFAULT_DURATION_MINUTES  # minutes spent at the stop
    id: str = field(default_factory=new_stop_id)


@dataclass(frozen=True)
class Day:
    number: int
    start_time: str = DEFAULT_START_TIME  # HH:MM, local wall clock
    stops: Tuple[Stop, ...] = ()


@dataclass(frozen=True)
class TimelineEntry:
    """A stop together with its computed times for the day."""

    stop: Stop
    arrival_time: str
    departure_time: str
    travel_time_from_prev: int

    @property
    def id(self) -> str:
        return self.stop.id

    @property
    def name(self) -> str:
        return self.stop.name

    @property
    def note(self) -> str:
        return self.stop.note

    @property
    def coords(self) -> Optional[Coordinate]:
        return self.stop.coords

    @property
    def duration(self) -> int:
        return self.stop.duration
