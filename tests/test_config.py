import logging
import unittest

from zakkaplan.config import DEFAULT_GEMINI_MODEL, DEFAULT_TIMEOUT_SEC, configure_logging, load_settings
from zakkaplan.models import Coordinate, Day, Stop
from zakkaplan.schedule import build_timeline


class TestConfig(unittest.TestCase):
    def test_defaults(self):
        settings = load_settings({}, environ={})
        self.assertEqual(settings.gemini_api_key, "")
        self.assertEqual(settings.gemini_model, DEFAULT_GEMINI_MODEL)
        self.assertEqual(settings.travel_model.base_minutes, 10)
        self.assertEqual(settings.travel_model.minutes_per_unit, 1.2)
        self.assertEqual(settings.travel_model.fallback_minutes, 30)
        self.assertEqual(settings.default_duration, 90)
        self.assertEqual(settings.default_start_time, "09:00")

    def test_secrets_win_over_environment(self):
        settings = load_settings(
            {"GEMINI_API_KEY": " from-secrets ", "TRAVEL_FALLBACK_MINUTES": 20},
            environ={"GEMINI_API_KEY": "from-env", "GEMINI_MODEL": "gemini-test"},
        )
        self.assertEqual(settings.gemini_api_key, "from-secrets")
        self.assertEqual(settings.gemini_model, "gemini-test")
        self.assertEqual(settings.travel_model.fallback_minutes, 20)

    def test_environment_values_are_parsed(self):
        settings = load_settings(environ={
            "TRAVEL_BASE_MINUTES": "5",
            "TRAVEL_MINUTES_PER_UNIT": "0.8",
            "DEFAULT_STOP_DURATION": "45",
            "DEFAULT_START_TIME": "8:30",
            "GEMINI_TIMEOUT_SEC": "12.5",
            "LOG_LEVEL": "debug",
        })
        self.assertEqual(settings.travel_model.base_minutes, 5.0)
        self.assertEqual(settings.travel_model.minutes_per_unit, 0.8)
        self.assertEqual(settings.default_duration, 45)
        self.assertEqual(settings.default_start_time, "08:30")
        self.assertEqual(settings.request_timeout, 12.5)
        self.assertEqual(settings.log_level, "DEBUG")

    def test_invalid_values_fall_back(self):
        settings = load_settings(environ={
            "TRAVEL_BASE_MINUTES": "lots",
            "TRAVEL_FALLBACK_MINUTES": "-3",
            "DEFAULT_START_TIME": "breakfast",
        })
        self.assertEqual(settings.travel_model.base_minutes, 10)
        self.assertEqual(settings.travel_model.fallback_minutes, 30)
        self.assertEqual(settings.default_start_time, "09:00")

    def test_non_finite_and_non_positive_values_fall_back(self):
        for bad in ("nan", "inf", "-inf"):
            settings = load_settings(environ={
                "TRAVEL_BASE_MINUTES": bad,
                "TRAVEL_MINUTES_PER_UNIT": bad,
                "GEMINI_TIMEOUT_SEC": bad,
            })
            self.assertEqual(settings.travel_model.base_minutes, 10)
            self.assertEqual(settings.travel_model.minutes_per_unit, 1.2)
            self.assertEqual(settings.request_timeout, DEFAULT_TIMEOUT_SEC)
        settings = load_settings(environ={
            "TRAVEL_BASE_MINUTES": "-1",
            "TRAVEL_MINUTES_PER_UNIT": "0",
            "GEMINI_TIMEOUT_SEC": "0",
        })
        self.assertEqual(settings.travel_model.base_minutes, 10)
        self.assertEqual(settings.travel_model.minutes_per_unit, 1.2)
        self.assertEqual(settings.request_timeout, DEFAULT_TIMEOUT_SEC)

    def test_zero_base_minutes_is_allowed(self):
        settings = load_settings(environ={"TRAVEL_BASE_MINUTES": "0"})
        self.assertEqual(settings.travel_model.base_minutes, 0)

    def test_timeline_survives_bad_travel_settings(self):
        day = Day(number=1, start_time="10:00", stops=(
            Stop(name="A", coords=Coordinate(20, 95), duration=60),
            Stop(name="B", coords=Coordinate(50, 60), duration=60),
        ))
        for bad in ("nan", "inf"):
            settings = load_settings(environ={"TRAVEL_BASE_MINUTES": bad, "TRAVEL_MINUTES_PER_UNIT": bad})
            timeline = build_timeline(day, settings.travel_model)
            self.assertEqual(timeline[1].arrival_time, "12:05")

    def test_configure_logging(self):
        root = logging.getLogger()
        previous = root.level
        try:
            configure_logging("warning")
            self.assertEqual(root.level, logging.WARNING)
        finally:
            root.setLevel(previous)


if __name__ == "__main__":
    unittest.main()
