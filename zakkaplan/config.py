"""
Configuration for ZakkaPlan.

Settings are read from Streamlit secrets (``.streamlit/secrets.toml``
locally, the Secrets panel on Streamlit Cloud) with environment
variables as the fallback. Recognised keys:

    GEMINI_API_KEY            API key for the Generative Language API
    GEMINI_MODEL              model name used for suggestions
    GEMINI_TIMEOUT_SEC        HTTP timeout in seconds
    TRAVEL_BASE_MINUTES       fixed overhead of every leg
    TRAVEL_MINUTES_PER_UNIT   minutes per unit of map distance
    TRAVEL_FALLBACK_MINUTES   leg time when a position is unknown
    DEFAULT_STOP_DURATION     visit length for custom stops (minutes)
    DEFAULT_START_TIME        start time of newly added days (HH:MM)
    LOG_LEVEL                 logging level name
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from zakkaplan.geometry import BASE_MINUTES, FALLBACK_MINUTES, MINUTES_PER_UNIT, TravelModel
from zakkaplan.models import DEFAULT_DURATION_MINUTES, DEFAULT_START_TIME
from zakkaplan.schedule import parse_time_string

logger = logging.getLogger(__name__)

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash-preview-09-2025"
DEFAULT_TIMEOUT_SEC = 30.0
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class PlannerSettings:
    gemini_api_key: str = ""
    gemini_model: str = DEFAULT_GEMINI_MODEL
    request_timeout: float = DEFAULT_TIMEOUT_SEC
    travel_model: TravelModel = field(default_factory=TravelModel)
    default_duration: int = DEFAULT_DURATION_MINUTES
    default_start_time: str = DEFAULT_START_TIME
    log_level: str = "INFO"


def _safe_float(val: Any, default: float, minimum: float = 0.0, inclusive: bool = True) -> float:
    """Parse a finite float at or above ``minimum`` (strictly above if not ``inclusive``)."""
    try:
        float_val = float(val)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(float_val):
        return default
    if float_val < minimum or (not inclusive and float_val == minimum):
        return default
    return float_val


def _safe_int(val: Any, default: int) -> int:
    try:
        int_val = int(val)
        return int_val if int_val > 0 else default
    except (TypeError, ValueError):
        return default


def load_settings(
    secrets: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> PlannerSettings:
    """Build settings from secrets, falling back to the environment.

    Values that cannot be parsed are replaced by their defaults rather
    than stopping the app.
    """
    secrets = secrets if secrets is not None else {}
    environ = environ if environ is not None else os.environ

    def get(key: str, default: Any = None) -> Any:
        if key in secrets and secrets[key] not in (None, ""):
            return secrets[key]
        return environ.get(key, default)

    start_time = str(get("DEFAULT_START_TIME", DEFAULT_START_TIME))
    try:
        start_time = parse_time_string(start_time).strftime("%H:%M")
    except ValueError:
        logger.warning("Ignoring invalid DEFAULT_START_TIME %r", start_time)
        start_time = DEFAULT_START_TIME

    travel_model = TravelModel(
        base_minutes=_safe_float(get("TRAVEL_BASE_MINUTES", BASE_MINUTES), BASE_MINUTES),
        minutes_per_unit=_safe_float(
            get("TRAVEL_MINUTES_PER_UNIT", MINUTES_PER_UNIT), MINUTES_PER_UNIT, inclusive=False
        ),
        fallback_minutes=_safe_int(get("TRAVEL_FALLBACK_MINUTES", FALLBACK_MINUTES), FALLBACK_MINUTES),
    )
    return PlannerSettings(
        gemini_api_key=str(get("GEMINI_API_KEY", "") or "").strip(),
        gemini_model=str(get("GEMINI_MODEL", DEFAULT_GEMINI_MODEL)),
        request_timeout=_safe_float(
            get("GEMINI_TIMEOUT_SEC", DEFAULT_TIMEOUT_SEC), DEFAULT_TIMEOUT_SEC, inclusive=False
        ),
        travel_model=travel_model,
        default_duration=_safe_int(get("DEFAULT_STOP_DURATION", DEFAULT_DURATION_MINUTES), DEFAULT_DURATION_MINUTES),
        default_start_time=start_time,
        log_level=str(get("LOG_LEVEL", "INFO")).upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    """Set up root logging once; later calls only adjust the level."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
