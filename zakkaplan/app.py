"""
Streamlit application for ZakkaPlan, a cosy Osaka day planner.

This script defines the user interface and orchestrates the underlying
modules: it keeps the itinerary in session state, recomputes each
day's timeline on every rerun, reorders stops on request, draws the
plan on the stylised city map, and asks the Gemini API for next-stop
ideas, spot descriptions and food nearby.

To run this app locally for development, install the project with
``pip install -e .`` and execute:

    streamlit run zakkaplan/app.py

The Gemini API key can be set as ``GEMINI_API_KEY`` in
``.streamlit/secrets.toml`` or entered in the sidebar.
"""

from __future__ import annotations

import logging
from typing import Optional

import streamlit as st
from streamlit_folium import folium_static

import os
import sys
# Allow ``streamlit run zakkaplan/app.py`` from a source checkout, where
# the project root is not on ``sys.path`` yet.
current_dir = os.path.dirname(__file__)
parent_dir = os.path.dirname(current_dir)
if parent_dir not in sys.path:
    sys.path.append(parent_dir)

from zakkaplan.config import PlannerSettings, configure_logging, load_settings
from zakkaplan.errors import AIResponseFormatError, AIServiceError, MissingAPIKeyError, TooFewStopsError
from zakkaplan.itinerary import (
    add_day,
    add_stop,
    create_stop,
    default_itinerary,
    find_day,
    move_stop,
    optimise_day,
    remove_stop,
    replace_day,
    set_start_time,
)
from zakkaplan.models import Day
from zakkaplan.optimisation import route_travel_minutes
from zakkaplan.places import search_places
from zakkaplan.schedule import build_timeline, format_timeline_text, parse_time_string, total_travel_minutes
from zakkaplan.suggestions import GeminiClient, describe_spot, recommend_food, suggest_next_stops
from zakkaplan.visualisation import create_plan_map

logger = logging.getLogger(__name__)

KIND_ICONS = {"cafe": "☕", "shop": "🛍️", "spot": "📷"}


def get_settings() -> PlannerSettings:
    """Load settings from Streamlit secrets, tolerating a missing secrets file."""
    try:
        secrets = {key: st.secrets[key] for key in st.secrets}
    except FileNotFoundError:
        secrets = {}
    return load_settings(secrets)


def init_state(settings: PlannerSettings) -> None:
    defaults = {
        "itinerary": default_itinerary(),
        "active_day": 1,
        "api_key": settings.gemini_api_key,
        "ai_suggestions": [],
        "panel": None,
        "flash": None,
        "place_query": "",
        "place_note": "",
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def current_day() -> Day:
    day = find_day(st.session_state["itinerary"], st.session_state["active_day"])
    if day is None:
        day = st.session_state["itinerary"][0]
        st.session_state["active_day"] = day.number
    return day


def save_day(day: Day) -> None:
    st.session_state["itinerary"] = replace_day(st.session_state["itinerary"], day)


def flash(kind: str, message: str) -> None:
    """Queue a message to show on the next rerun."""
    st.session_state["flash"] = (kind, message)


def gemini_client(settings: PlannerSettings) -> GeminiClient:
    return GeminiClient(
        api_key=st.session_state.get("api_key", ""),
        model=settings.gemini_model,
        timeout=settings.request_timeout,
    )


# --- callbacks -------------------------------------------------------------
# Callbacks run before the script reruns, so they may reset widget values.

def _pick_place(name: str) -> None:
    st.session_state["place_query"] = name


def _add_place(name: str, note: str, settings: PlannerSettings, from_input: bool) -> None:
    try:
        stop = create_stop(name, note, default_duration=settings.default_duration)
    except ValueError:
        flash("warning", "Please enter a place name first!")
        return
    save_day(add_stop(current_day(), stop))
    logger.info("Added stop %s to day %d", stop.name, st.session_state["active_day"])
    if from_input:
        st.session_state["place_query"] = ""
        st.session_state["place_note"] = ""


def _select_day(number: int) -> None:
    st.session_state["active_day"] = number
    st.session_state["ai_suggestions"] = []
    st.session_state["panel"] = None


def _new_day(settings: PlannerSettings) -> None:
    st.session_state["itinerary"] = add_day(st.session_state["itinerary"], settings.default_start_time)


def _optimise(settings: PlannerSettings) -> None:
    day = current_day()
    before = route_travel_minutes(day.stops, settings.travel_model)
    try:
        optimised = optimise_day(day)
    except TooFewStopsError as exc:
        flash("warning", f"Too few stops to sort, at least {exc.minimum} are needed!")
        return
    save_day(optimised)
    after = route_travel_minutes(optimised.stops, settings.travel_model)
    flash("success", f"Route tidied up: travel time {before} min → {after} min")


def _move(index: int, direction: str) -> None:
    save_day(move_stop(current_day(), index, direction))


def _delete(stop_id: str) -> None:
    save_day(remove_stop(current_day(), stop_id))


def _change_start_time(widget_key: str) -> None:
    value = st.session_state[widget_key]
    try:
        save_day(set_start_time(current_day(), value.strftime("%H:%M")))
    except ValueError as exc:
        flash("error", str(exc))


# --- AI actions ------------------------------------------------------------

def _report_ai_error(exc: AIServiceError) -> None:
    if isinstance(exc, MissingAPIKeyError):
        st.warning("Please add your Gemini API key in the sidebar first.")
    elif isinstance(exc, AIResponseFormatError):
        logger.warning("Unparsable AI reply: %r", exc.raw_text[:500])
        st.error("The AI reply came back in an odd format, please try again.")
    else:
        st.error(f"Something went wrong: {exc}")


def fetch_suggestions(settings: PlannerSettings) -> None:
    with st.spinner("Asking the AI guide…"):
        try:
            st.session_state["ai_suggestions"] = suggest_next_stops(gemini_client(settings), current_day())
        except AIServiceError as exc:
            logger.warning("Next stop suggestions failed: %s", exc)
            _report_ai_error(exc)


def open_spot_panel(settings: PlannerSettings, spot_name: str, kind: str) -> None:
    client = gemini_client(settings)
    with st.spinner("Asking the AI guide…"):
        try:
            if kind == "info":
                st.session_state["panel"] = {"type": "info", "title": spot_name, "content": describe_spot(client, spot_name)}
            else:
                st.session_state["panel"] = {
                    "type": "food",
                    "title": f"Food near {spot_name}",
                    "data": recommend_food(client, spot_name),
                }
        except AIServiceError as exc:
            logger.warning("Spot %s lookup for %s failed: %s", kind, spot_name, exc)
            st.session_state["panel"] = None
            _report_ai_error(exc)


# --- rendering -------------------------------------------------------------

def render_sidebar() -> None:
    with st.sidebar:
        st.header("⚙️ Settings")
        st.text_input(
            "Gemini API key",
            type="password",
            key="api_key",
            placeholder="AIza...",
            help="Kept only for this browser session.",
        )
        st.markdown("No key yet? [Get one for free](https://aistudio.google.com/app/apikey)")


def render_day_tabs(settings: PlannerSettings) -> None:
    itinerary = st.session_state["itinerary"]
    cols = st.columns(len(itinerary) + 1)
    for col, day in zip(cols, itinerary):
        with col:
            st.button(
                f"Day {day.number}",
                key=f"day_tab_{day.number}",
                type="primary" if day.number == st.session_state["active_day"] else "secondary",
                on_click=_select_day,
                args=(day.number,),
            )
    with cols[-1]:
        st.button("➕", key="add_day", help="Add a day", on_click=_new_day, args=(settings,))


def render_controls(day: Day, settings: PlannerSettings) -> None:
    col_time, col_opt = st.columns([2, 1])
    with col_time:
        st.time_input(
            "Start",
            value=parse_time_string(day.start_time),
            key=f"start_time_{day.number}",
            step=300,
            on_change=_change_start_time,
            args=(f"start_time_{day.number}",),
        )
    with col_opt:
        st.button("🧭 Tidy up route", on_click=_optimise, args=(settings,))


def render_add_form(settings: PlannerSettings) -> None:
    col_name, col_note, col_add = st.columns([3, 2, 1])
    with col_name:
        st.text_input("Where to?", key="place_query", placeholder="e.g. Dotonbori")
    with col_note:
        st.text_input("Note", key="place_note", placeholder="Free time")
    with col_add:
        st.button(
            "Add",
            on_click=lambda: _add_place(
                st.session_state["place_query"], st.session_state["place_note"], settings, True
            ),
        )
    matches = search_places(st.session_state["place_query"])
    if matches and st.session_state["place_query"] not in matches:
        st.caption("Known places:")
        cols = st.columns(min(len(matches), 4))
        for i, name in enumerate(matches):
            with cols[i % len(cols)]:
                st.button(name, key=f"pick_{name}", on_click=_pick_place, args=(name,))


def render_timeline(day: Day, settings: PlannerSettings) -> None:
    timeline = build_timeline(day, settings.travel_model, settings.default_duration)
    if not timeline:
        st.info("Still a blank page... add your first stop!")
        return
    for index, entry in enumerate(timeline):
        if index > 0:
            st.caption(f"⌛ {entry.travel_time_from_prev} min")
        col_time, col_body, col_actions = st.columns([1, 4, 3])
        with col_time:
            st.markdown(f"**{entry.arrival_time}**  \n{entry.departure_time}")
        with col_body:
            badge = " ✅" if entry.coords else ""
            st.markdown(f"**{entry.name}**{badge}  \n{entry.note} · {entry.duration} min")
        with col_actions:
            up, down, info, food, delete = st.columns(5)
            up.button("↑", key=f"up_{entry.id}", on_click=_move, args=(index, "up"), disabled=index == 0)
            down.button("↓", key=f"down_{entry.id}", on_click=_move, args=(index, "down"), disabled=index == len(timeline) - 1)
            if info.button("ℹ️", key=f"info_{entry.id}", help="About this spot"):
                open_spot_panel(settings, entry.name, "info")
            if food.button("🍴", key=f"food_{entry.id}", help="Food nearby"):
                open_spot_panel(settings, entry.name, "food")
            delete.button("🗑️", key=f"del_{entry.id}", on_click=_delete, args=(entry.id,))

    total = total_travel_minutes(timeline)
    st.caption(f"Total travel time: {total // 60}h {total % 60}m · ends at {timeline[-1].departure_time}")

    with st.expander("🗺️ Map", expanded=True):
        folium_static(create_plan_map(timeline), width=500, height=500)
    with st.expander("📋 Export"):
        text = format_timeline_text(day, timeline)
        st.text_area("Plan", text, height=200)
        st.download_button("Download", text, file_name=f"day{day.number}.txt")


def render_panel(settings: PlannerSettings) -> None:
    panel: Optional[dict] = st.session_state.get("panel")
    if not panel:
        return
    with st.container(border=True):
        st.subheader(panel["title"])
        if panel["type"] == "info":
            st.write(panel["content"])
        else:
            for i, food in enumerate(panel["data"]):
                st.markdown(f"**{food.name}** · {food.kind} · ⭐ {food.rating}  \n{food.comment}")
                st.button(
                    "Add to plan",
                    key=f"add_food_{i}",
                    on_click=_add_place,
                    args=(food.name, f"Food: {food.kind}", settings, False),
                )
        if st.button("Close", key="close_panel"):
            st.session_state["panel"] = None
            st.rerun()


def render_ai_suggestions(settings: PlannerSettings) -> None:
    st.subheader("✨ AI next stop")
    if st.button("Suggest where to go next"):
        fetch_suggestions(settings)
    for i, suggestion in enumerate(st.session_state["ai_suggestions"]):
        icon = KIND_ICONS.get(suggestion.kind, "📍")
        col_text, col_add = st.columns([4, 1])
        with col_text:
            st.markdown(f"{icon} **{suggestion.name}**  \n{suggestion.reason}")
        with col_add:
            st.button(
                "Add",
                key=f"add_suggestion_{i}",
                on_click=_add_place,
                args=(suggestion.name, suggestion.reason, settings, False),
            )


def main():
    st.set_page_config(page_title="ZakkaPlan", page_icon="🐙", layout="wide")
    settings = get_settings()
    configure_logging(settings.log_level)
    init_state(settings)

    st.title("🐙 Osaka Stroll Notebook")
    render_sidebar()

    message = st.session_state.pop("flash", None)
    if message:
        kind, text = message
        getattr(st, kind)(text)

    render_day_tabs(settings)
    day = current_day()
    left, right = st.columns(2)
    with left:
        render_controls(day, settings)
        render_add_form(settings)
        render_timeline(day, settings)
    with right:
        render_panel(settings)
        render_ai_suggestions(settings)


if __name__ == "__main__":
    main()
