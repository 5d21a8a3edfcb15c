import unittest

from zakkaplan.geometry import TravelModel
from zakkaplan.models import Coordinate, Day, Stop
from zakkaplan.schedule import (
    add_minutes,
    build_timeline,
    format_timeline_text,
    parse_time_string,
    total_travel_minutes,
)


def make_day(*stops, start="10:00"):
    return Day(number=1, start_time=start, stops=tuple(stops))


class TestTimeHelpers(unittest.TestCase):
    def test_parse_time_string(self):
        t = parse_time_string(" 09:05 ")
        self.assertEqual((t.hour, t.minute), (9, 5))

    def test_parse_time_string_rejects_garbage(self):
        for bad in ("", "9", "25:00", "ab:cd", "10:61"):
            with self.assertRaises(ValueError):
                parse_time_string(bad)

    def test_add_minutes(self):
        self.assertEqual(add_minutes("10:00", 66), "11:06")
        self.assertEqual(add_minutes("09:30", 0), "09:30")

    def test_add_minutes_wraps_at_midnight(self):
        self.assertEqual(add_minutes("23:30", 45), "00:15")
        self.assertEqual(add_minutes("22:00", 24 * 60 + 30), "22:30")


class TestBuildTimeline(unittest.TestCase):
    def setUp(self):
        self.a = Stop(name="Kansai Airport", coords=Coordinate(20, 95), duration=60)
        self.b = Stop(name="Namba", coords=Coordinate(50, 60), duration=60)
        self.c = Stop(name="Friend's place", coords=None, duration=90)

    def test_empty_day(self):
        self.assertEqual(build_timeline(make_day()), [])

    def test_two_stops(self):
        timeline = build_timeline(make_day(self.a, self.b))
        self.assertEqual(timeline[0].arrival_time, "10:00")
        self.assertEqual(timeline[0].departure_time, "11:00")
        self.assertEqual(timeline[0].travel_time_from_prev, 0)
        self.assertEqual(timeline[1].travel_time_from_prev, 65)
        self.assertEqual(timeline[1].arrival_time, "12:05")
        self.assertEqual(timeline[1].departure_time, "13:05")

    def test_missing_coordinates_use_fallback(self):
        timeline = build_timeline(make_day(self.a, self.b, self.c))
        self.assertEqual(timeline[2].travel_time_from_prev, 30)
        self.assertEqual(timeline[2].arrival_time, "13:35")
        self.assertEqual(timeline[2].departure_time, "15:05")

    def test_first_stop_without_coordinates(self):
        timeline = build_timeline(make_day(self.c, self.a))
        self.assertEqual(timeline[0].arrival_time, "10:00")
        self.assertEqual(timeline[1].travel_time_from_prev, 30)

    def test_configured_fallback(self):
        model = TravelModel(fallback_minutes=45)
        timeline = build_timeline(make_day(self.b, self.c), model=model)
        self.assertEqual(timeline[1].travel_time_from_prev, 45)

    def test_zero_duration_uses_default(self):
        stop = Stop(name="Quick look", duration=0)
        timeline = build_timeline(make_day(stop), default_duration=90)
        self.assertEqual(timeline[0].departure_time, "11:30")

    def test_invariants(self):
        stops = [
            Stop(name="s0", coords=Coordinate(10, 10), duration=45),
            Stop(name="s1", coords=Coordinate(80, 20), duration=120),
            Stop(name="s2", coords=None, duration=30),
            Stop(name="s3", coords=Coordinate(40, 90), duration=200),
            Stop(name="s4", coords=Coordinate(41, 91), duration=600),
        ]
        day = make_day(*stops, start="08:15")
        timeline = build_timeline(day)
        self.assertEqual(len(timeline), len(stops))
        self.assertEqual(timeline[0].arrival_time, day.start_time)
        self.assertEqual(timeline[0].travel_time_from_prev, 0)
        for i in range(1, len(timeline)):
            self.assertEqual(
                timeline[i].arrival_time,
                add_minutes(timeline[i - 1].departure_time, timeline[i].travel_time_from_prev),
            )
        for entry, stop in zip(timeline, stops):
            self.assertIs(entry.stop, stop)
            self.assertEqual(entry.departure_time, add_minutes(entry.arrival_time, stop.duration))

    def test_idempotent(self):
        day = make_day(self.a, self.b, self.c)
        self.assertEqual(build_timeline(day), build_timeline(day))

    def test_late_plan_wraps(self):
        day = make_day(Stop(name="Night view", duration=120), start="23:00")
        self.assertEqual(build_timeline(day)[0].departure_time, "01:00")

    def test_total_and_text(self):
        day = make_day(self.a, self.b, self.c)
        timeline = build_timeline(day)
        self.assertEqual(total_travel_minutes(timeline), 95)
        text = format_timeline_text(day, timeline)
        self.assertIn("Day 1 (start 10:00)", text)
        self.assertIn("2. 12:05-13:05 Namba", text)
        self.assertIn("Total travel time: 1h 35m", text)


if __name__ == "__main__":
    unittest.main()
