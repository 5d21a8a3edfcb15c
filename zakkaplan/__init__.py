"""
ZakkaPlan package initialization.

This package provides the core functionality for the ZakkaPlan day
planner. Components include travel estimation, timeline calculation,
route optimisation, itinerary editing, AI suggestions, and map
visualisation.

Modules:
    geometry      – Map distances and the linear travel-time model.
    schedule      – Arrival/departure timeline for a day.
    optimisation  – Nearest neighbour reordering of a day's stops.
    itinerary     – Pure editing helpers for days and stops.
    places        – Built-in catalogue of Osaka spots.
    suggestions   – Gemini based next-stop, spot and food suggestions.
    visualisation – Folium based map of the day plan.
    config        – Settings from Streamlit secrets and the environment.

Travel times come from a deliberately simple model on a stylised map
and should not be read as real routing estimates.
"""

__version__ = "0.1.0"

__all__ = [
    "geometry",
    "schedule",
    "optimisation",
    "itinerary",
    "places",
    "suggestions",
    "visualisation",
    "config",
]
