"""
Built-in catalogue of Osaka sightseeing spots.

Each place carries its position on the stylised city map, the area it
belongs to and a suggested visit length. Names typed by the user are
matched against this catalogue; anything not found is added as a
custom stop without coordinates.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

from zakkaplan.models import Coordinate


@dataclass(frozen=True)
class Place:
    name: str
    coords: Coordinate
    area: str
    default_duration: int  # minutes


def _place(name: str, x: float, y: float, area: str, default_duration: int) -> Place:
    return Place(name=name, coords=Coordinate(x, y), area=area, default_duration=default_duration)


PREDEFINED_PLACES: Dict[str, Place] = {
    place.name: place
    for place in (
        _place("Kansai Airport", 20, 95, "Gateway", 60),
        _place("Namba", 50, 60, "Minami", 120),
        _place("Dotonbori", 50, 58, "Minami", 90),
        _place("Shinsaibashi", 50, 55, "Minami", 120),
        _place("Kuromon Market", 52, 62, "Minami", 60),
        _place("Tsutenkaku", 52, 70, "Tennoji", 60),
        _place("Shinsekai", 51, 71, "Tennoji", 90),
        _place("Abeno Harukas", 52, 75, "Tennoji", 90),
        _place("Umeda (Osaka Station)", 50, 30, "Kita", 120),
        _place("Umeda Sky Building", 45, 28, "Kita", 60),
        _place("Osaka Castle", 70, 45, "Castle", 150),
        _place("Universal Studios Japan", 10, 40, "Bay", 480),
        _place("Kaiyukan Aquarium", 10, 55, "Bay", 180),
        _place("Tempozan Ferris Wheel", 10, 56, "Bay", 30),
        _place("Amerikamura", 48, 56, "Minami", 90),
        _place("Shitennoji", 55, 72, "Tennoji", 60),
    )
}


def search_places(query: str, catalogue: Mapping[str, Place] = PREDEFINED_PLACES) -> List[str]:
    """Return catalogue names containing ``query``, in catalogue order.

    Matching is case-insensitive. A blank query matches nothing.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return []
    return [name for name in catalogue if needle in name.lower()]


def lookup_place(name: str, catalogue: Mapping[str, Place] = PREDEFINED_PLACES) -> Optional[Place]:
    return catalogue.get(name.strip())
