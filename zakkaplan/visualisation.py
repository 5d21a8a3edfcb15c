"""
Map visualisation utilities for ZakkaPlan.

This module builds an interactive map of a day plan with Folium. The
city map is a stylised 0-100 square rather than real geography, so the
map uses Leaflet's ``Simple`` CRS without background tiles. Map ``y``
grows towards the south while Leaflet latitude grows north, hence the
``100 - y`` flip. The map can be embedded in Streamlit via
``streamlit_folium``.
"""

from __future__ import annotations

from typing import List, Sequence

import folium

from zakkaplan.models import Coordinate, TimelineEntry

MAP_SIZE = 100


def to_map_location(coords: Coordinate) -> List[float]:
    return [MAP_SIZE - coords.y, coords.x]


def create_plan_map(timeline: Sequence[TimelineEntry]) -> folium.Map:
    """Create a Folium map with numbered markers and the day's route.

    Args:
        timeline: Timeline entries in visiting order. Entries without
            coordinates keep their number but are not drawn.

    Returns:
        A Folium Map object ready for display.
    """
    m = folium.Map(
        location=[MAP_SIZE / 2, MAP_SIZE / 2],
        zoom_start=2,
        crs="Simple",
        tiles=None,
    )
    bounds = [[0, 0], [MAP_SIZE, MAP_SIZE]]
    folium.Rectangle(bounds, color="#d4a373", weight=2, fill=True, fill_color="#fcf9f2", fill_opacity=0.6).add_to(m)
    poly_coords = []
    for order, entry in enumerate(timeline, start=1):
        if entry.coords is None:
            continue
        location = to_map_location(entry.coords)
        poly_coords.append(location)
        folium.Marker(
            location=location,
            popup=folium.Popup(f"{order}. {entry.name} ({entry.arrival_time}-{entry.departure_time})", parse_html=True),
            tooltip=entry.name,
            icon=folium.DivIcon(html=f"<div style='font-size: 12px; color: white; background-color: #e76f51; border-radius: 50%; width: 24px; height: 24px; text-align: center; line-height: 24px;'>{order}</div>"),
        ).add_to(m)
    if len(poly_coords) > 1:
        folium.PolyLine(poly_coords, color="#8b5e3c", weight=3, opacity=0.7, dash_array="6").add_to(m)
    m.fit_bounds(bounds)
    return m
