import os
import sys
import unittest

# make the project root importable
proj_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if proj_root not in sys.path:
    sys.path.insert(0, proj_root)

from zoneguard.config import EngineSettings
from zoneguard.core.point_collision import check_point_collision, check_point_collision_unoptimized
from zoneguard.core.spatial_index import ZoneIndex
from zoneguard.errors import ZoneIndexNotReadyError
from zoneguard.model.zone_types import SAFE_COLOR, ZONE_COLORS, Severity, ZoneType
from zoneguard.service.load_zones import load_zone_features
from zone_fixtures import collection, square_feature, unit_airport


def build_index(coll):
    return ZoneIndex.build(load_zone_features(coll))


class TestPointCollision(unittest.TestCase):

    def setUp(self):
        self.index = build_index(unit_airport())

    def test_point_inside_airport(self):
        """A point inside an airport is DANGER."""
        result = check_point_collision([0.5, 0.5], self.index)
        self.assertTrue(result.is_colliding)
        self.assertEqual(result.zone_type, ZoneType.AIRPORT)
        self.assertEqual(result.zone_name, "Test Airport")
        self.assertEqual(result.severity, Severity.DANGER)
        self.assertEqual(result.color, ZONE_COLORS[ZoneType.AIRPORT])

    def test_point_outside_is_safe(self):
        """A point outside every zone is SAFE."""
        result = check_point_collision([5, 5], self.index)
        self.assertFalse(result.is_colliding)
        self.assertIsNone(result.zone_type)
        self.assertEqual(result.severity, Severity.SAFE)
        self.assertEqual(result.color, SAFE_COLOR)

    def test_point_inside_bbox_but_outside_polygon(self):
        """Bounding box hits are checked against the polygon."""
        # L-shaped zone: the bbox covers (0.75, 0.75) but the polygon does not
        feature = {
            "type": "Feature",
            "geometry": {"type": "Polygon", "coordinates": [[
                [0, 0], [1, 0], [1, 0.5], [0.5, 0.5], [0.5, 1], [0, 1], [0, 0]]]},
            "properties": {"zoneType": "DID", "name": "L"},
        }
        index = build_index(collection(feature))
        self.assertFalse(check_point_collision([0.75, 0.75], index).is_colliding)
        self.assertTrue(check_point_collision([0.25, 0.75], index).is_colliding)

    def test_boundary_counts_as_inside(self):
        """A point on the boundary is inside."""
        self.assertTrue(check_point_collision([1.0, 0.5], self.index).is_colliding)

    def test_lowest_priority_wins_regardless_of_order(self):
        """The lowest priority wins in any order."""
        red = square_feature(0, 0, 1, 1, "RED_ZONE", "Red")
        did = square_feature(0.2, 0.2, 2, 2, "DID", "District")
        for coll in (collection(red, did), collection(did, red)):
            result = check_point_collision([0.5, 0.5], build_index(coll))
            self.assertEqual(result.zone_type, ZoneType.RED_ZONE)
            self.assertEqual(result.severity, Severity.DANGER)

    def test_single_did_zone_is_warning(self):
        """A DID zone alone is WARNING."""
        index = build_index(collection(square_feature(0, 0, 1, 1, "DID")))
        result = check_point_collision([0.5, 0.5], index)
        self.assertEqual(result.zone_type, ZoneType.DID)
        self.assertEqual(result.severity, Severity.WARNING)

    def test_equal_priority_first_registered_wins(self):
        """Equal priorities go to the first registered zone."""
        airport = square_feature(0, 0, 1, 1, "AIRPORT", "A")
        military = square_feature(0, 0, 1, 1, "MILITARY", "M")
        self.assertEqual(check_point_collision([0.5, 0.5], build_index(collection(airport, military))).zone_name, "A")
        self.assertEqual(check_point_collision([0.5, 0.5], build_index(collection(military, airport))).zone_name, "M")

    def test_unknown_type_ranks_last_but_is_danger(self):
        """UNKNOWN loses to known types but is DANGER."""
        park = square_feature(0, 0, 1, 1, "PARK", "Park")
        did = square_feature(0, 0, 1, 1, "DID", "District")
        index = build_index(collection(park, did))
        self.assertEqual(check_point_collision([0.5, 0.5], index).zone_type, ZoneType.DID)

        only_park = build_index(collection(park))
        result = check_point_collision([0.5, 0.5], only_park)
        self.assertEqual(result.zone_type, ZoneType.UNKNOWN)
        self.assertEqual(result.severity, Severity.DANGER)

    def test_multipolygon_is_union_of_parts(self):
        """Every part of a multipolygon counts."""
        feature = {
            "type": "Feature",
            "geometry": {"type": "MultiPolygon", "coordinates": [
                [[[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]]],
                [[[3, 3], [4, 3], [4, 4], [3, 4], [3, 3]]],
            ]},
            "properties": {"zoneType": "MILITARY", "name": "Base"},
        }
        index = build_index(collection(feature))
        self.assertTrue(check_point_collision([3.5, 3.5], index).is_colliding)
        self.assertTrue(check_point_collision([0.5, 0.5], index).is_colliding)
        self.assertFalse(check_point_collision([2, 2], index).is_colliding)

    def test_repeated_queries_are_identical(self):
        """Repeated queries give the same result."""
        red = square_feature(0, 0, 1, 1, "RED_ZONE", "Red")
        did = square_feature(0, 0, 1, 1, "DID", "District")
        index = build_index(collection(did, red))
        first = check_point_collision([0.5, 0.5], index)
        for _ in range(5):
            self.assertEqual(check_point_collision([0.5, 0.5], index), first)

    def test_empty_index_reports_safe(self):
        """An empty index reports SAFE."""
        result = check_point_collision([0.5, 0.5], ZoneIndex.build([]))
        self.assertFalse(result.is_colliding)
        self.assertEqual(result.severity, Severity.SAFE)

    def test_missing_index_raises(self):
        """A missing index raises."""
        with self.assertRaises(ZoneIndexNotReadyError):
            check_point_collision([0.5, 0.5], None)

    def test_invalid_coordinates_do_not_raise(self):
        """Malformed coordinates give an invalid-coordinates result."""
        for bad in ([1], "xy", [float("nan"), 0], ["a", "b"], None):
            result = check_point_collision(bad, self.index)
            self.assertFalse(result.is_colliding)
            self.assertEqual(result.message, "Invalid coordinates")

    def test_mapping_coordinates_are_invalid_not_errors(self):
        """A dict instead of a [lng, lat] pair gives an invalid-coordinates result."""
        result = check_point_collision({"lng": 0.5, "lat": 0.5}, self.index)
        self.assertFalse(result.is_colliding)
        self.assertEqual(result.message, "Invalid coordinates")

    def test_unoptimized_uses_given_settings(self):
        """Untyped zones in a raw collection take the configured missing type."""
        untyped = collection(square_feature(0, 0, 1, 1, zone_type=None))
        settings = EngineSettings(missing_zone_type=ZoneType.EMERGENCY)
        result = check_point_collision_unoptimized([0.5, 0.5], untyped, settings)
        self.assertEqual(result.zone_type, ZoneType.EMERGENCY)

    def test_altitude_is_ignored(self):
        """A third coordinate is ignored."""
        self.assertTrue(check_point_collision([0.5, 0.5, 120.0], self.index).is_colliding)

    def test_unoptimized_matches_indexed(self):
        """The linear scan agrees with the index."""
        coll = collection(
            square_feature(0, 0, 1, 1, "DID", "District"),
            square_feature(0.5, 0.5, 1.5, 1.5, "EMERGENCY", "Emergency"),
            square_feature(1.2, 0, 2, 0.8, "YELLOW_ZONE", "Yellow"),
        )
        zones = load_zone_features(coll)
        index = ZoneIndex.build(zones)
        for x in (0.1, 0.6, 1.0, 1.3, 1.7, 2.5):
            for y in (0.1, 0.6, 0.9, 1.4):
                self.assertEqual(
                    check_point_collision([x, y], index),
                    check_point_collision_unoptimized([x, y], zones),
                )

    def test_unoptimized_accepts_raw_collection(self):
        """The linear scan takes a raw collection."""
        result = check_point_collision_unoptimized([0.5, 0.5], unit_airport())
        self.assertEqual(result.zone_type, ZoneType.AIRPORT)


if __name__ == "__main__":
    unittest.main()
