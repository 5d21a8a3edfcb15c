import unittest

import folium

from zakkaplan.models import Coordinate, Day, Stop
from zakkaplan.schedule import build_timeline
from zakkaplan.visualisation import create_plan_map, to_map_location


class TestVisualisation(unittest.TestCase):
    def test_to_map_location_flips_y(self):
        self.assertEqual(to_map_location(Coordinate(20, 95)), [5, 20])

    def test_create_plan_map(self):
        day = Day(number=1, stops=(
            Stop(name="Kansai Airport", coords=Coordinate(20, 95)),
            Stop(name="Secret bar"),
            Stop(name="Namba", coords=Coordinate(50, 60)),
        ))
        m = create_plan_map(build_timeline(day))
        self.assertIsInstance(m, folium.Map)
        children = list(m._children.values())
        markers = [c for c in children if isinstance(c, folium.Marker)]
        lines = [c for c in children if isinstance(c, folium.PolyLine)]
        self.assertEqual(len(markers), 2)
        self.assertEqual(len(lines), 1)
        html = m.get_root().render()
        self.assertIn("3. Namba", html)
        self.assertNotIn("Secret bar", html)

    def test_empty_plan(self):
        m = create_plan_map([])
        self.assertFalse(any(isinstance(c, folium.Marker) for c in m._children.values()))


if __name__ == "__main__":
    unittest.main()
