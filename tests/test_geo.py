# tests/test_geo.py
"""
Test spherical helpers and region lookups.
"""

import pytest

from statusbot.geo.regions import (
    CONTIGUOUS_US,
    Landmark,
    get_closest_landmark_to_point,
    get_us_state_that_point_is_in,
    us_landmarks,
)
from statusbot.geo.spherical import (
    bearing_to_string,
    centroid,
    circle_polygon,
    haversine_miles,
    initial_bearing,
    point_in_geometry,
)

DENVER = (-104.6728, 39.86169814)


class TestSphericalMath:
    """Tests for distance, bearing and circles."""

    def test_zero_distance(self):
        assert haversine_miles(DENVER, DENVER) == 0

    def test_one_degree_latitude(self):
        assert haversine_miles((0, 0), (0, 1)) == pytest.approx(69.09, abs=0.01)

    def test_bearings(self):
        assert initial_bearing((0, 0), (0, 1)) == pytest.approx(0)
        assert initial_bearing((0, 0), (1, 0)) == pytest.approx(90)
        assert initial_bearing((0, 0), (-1, 0)) == pytest.approx(-90)

    def test_circle_polygon(self):
        """64 vertices at the radius, ring closed."""
        polygon = circle_polygon(DENVER, 4)
        ring = polygon["coordinates"][0]
        assert polygon["type"] == "Polygon"
        assert len(ring) == 65
        assert ring[0] == ring[-1]
        for vertex in ring:
            assert haversine_miles(DENVER, vertex) == pytest.approx(4, rel=1e-6)

    def test_circle_centroid_is_center(self):
        center = centroid(circle_polygon(DENVER, 4))
        assert haversine_miles(center, DENVER) < 0.1

    def test_line_centroid(self):
        line = {"type": "LineString", "coordinates": [[-64.77, 52.12], [-61.57, 42.18], [-55.77, 43.57]]}
        longitude, latitude = centroid(line)
        assert longitude == pytest.approx(-60.7033, abs=1e-3)
        assert latitude == pytest.approx(45.9567, abs=1e-3)

    def test_empty_centroid(self):
        assert centroid({"type": "LineString", "coordinates": []}) is None


class TestBearingToString:
    """Tests for compass directions."""

    @pytest.mark.parametrize("bearing,expected", [
        (0, "north"),
        (22.4, "north"),
        (22.5, "northeast"),
        (45, "northeast"),
        (50, "northeast"),
        (90, "east"),
        (135, "southeast"),
        (180, "south"),
        (225, "southwest"),
        (270, "west"),
        (315, "northwest"),
        (337.5, "north"),
        (-90, "west"),
        (720, "north"),
    ])
    def test_eight_points(self, bearing, expected):
        assert bearing_to_string(bearing) == expected

    @pytest.mark.parametrize("bearing,expected", [
        (44, "north"),
        (46, "east"),
        (50, "east"),
        (180, "south"),
        (260, "west"),
        (315, "north"),
    ])
    def test_simple(self, bearing, expected):
        assert bearing_to_string(bearing, simple=True) == expected


class TestPointInGeometry:
    """Tests for polygon containment."""

    SQUARE = [[0, 0], [10, 0], [10, 10], [0, 10], [0, 0]]
    HOLE = [[4, 4], [6, 4], [6, 6], [4, 6], [4, 4]]

    def test_polygon(self):
        geometry = {"type": "Polygon", "coordinates": [self.SQUARE]}
        assert point_in_geometry((5, 5), geometry)
        assert not point_in_geometry((15, 5), geometry)

    def test_hole_excluded(self):
        geometry = {"type": "Polygon", "coordinates": [self.SQUARE, self.HOLE]}
        assert not point_in_geometry((5, 5), geometry)
        assert point_in_geometry((2, 2), geometry)

    def test_multipolygon(self):
        far = [[[20, 20], [30, 20], [30, 30], [20, 30], [20, 20]]]
        geometry = {"type": "MultiPolygon", "coordinates": [[self.SQUARE], far]}
        assert point_in_geometry((25, 25), geometry)

    def test_non_area_geometry(self):
        assert not point_in_geometry((0, 0), {"type": "LineString", "coordinates": [[0, 0], [1, 1]]})
        assert not point_in_geometry((0, 0), None)


class TestRegions:
    """Tests for state and landmark lookups."""

    def test_state_lookup(self, regions):
        state = get_us_state_that_point_is_in((-82.06, 29.22), regions)
        assert state["properties"]["name"] == "Florida"

    def test_non_us_features_ignored(self, regions):
        assert get_us_state_that_point_is_in((-80.0, 50.0), regions) is None

    def test_outside_every_state(self, regions):
        assert get_us_state_that_point_is_in((-60.7, 45.96), regions) is None

    def test_landmarks(self, regions):
        landmarks = {landmark.name: landmark for landmark in us_landmarks(regions)}
        assert set(landmarks) == {CONTIGUOUS_US, "Alaska", "Hawaii"}
        longitude, latitude = landmarks[CONTIGUOUS_US].position
        assert longitude == pytest.approx(-89.15)
        assert latitude == pytest.approx(37.625)

    def test_closest_landmark(self, regions):
        match = get_closest_landmark_to_point((-60.7, 45.96), us_landmarks(regions))
        assert match.landmark.name == CONTIGUOUS_US
        assert match.direction == "northeast"

    def test_closest_landmark_hawaii(self, regions):
        match = get_closest_landmark_to_point((-150.0, 21.0), us_landmarks(regions))
        assert match.landmark.name == "Hawaii"
        assert match.direction == "east"

    def test_no_landmarks(self):
        assert get_closest_landmark_to_point((0, 0), []) is None

    def test_tie_keeps_first(self):
        first = Landmark("first", (1.0, 0.0))
        second = Landmark("second", (-1.0, 0.0))
        assert get_closest_landmark_to_point((0, 0), [first, second]).landmark is first
