# statusbot/geo/regions.py
"""
Region lookups used to describe where an en route delay is.

- Which US state a point falls in
- Which of a set of landmarks is closest to a point, and in what direction
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from .spherical import (
    Position,
    geometry_vertices,
    bearing_to_string,
    haversine_miles,
    initial_bearing,
    point_in_geometry,
)

STATES_DATASET = "ne_110m_admin_1_states_provinces"
COUNTRIES_DATASET = "ne_110m_admin_0_countries"

CONTIGUOUS_US = "the contiguous United States"
NON_CONTIGUOUS_STATES = ("Alaska", "Hawaii")


@dataclass(frozen=True)
class Landmark:
    """A named reference point."""
    name: str
    position: Position  # (longitude, latitude)


@dataclass(frozen=True)
class LandmarkMatch:
    """Closest landmark to a point."""
    landmark: Landmark
    bearing: float  # from the landmark towards the point
    direction: str
    distance_miles: float


def _is_us_feature(feature: Dict[str, Any]) -> bool:
    properties = feature.get("properties") or {}
    country = properties.get("iso_a2") or properties.get("adm0_a3")
    if country is None:
        return True
    return country in ("US", "USA")


def _polygon_features(collection: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    if not collection:
        return []
    return [
        feature
        for feature in collection.get("features") or []
        if (feature.get("geometry") or {}).get("type") in ("Polygon", "MultiPolygon")
    ]


def get_us_state_that_point_is_in(point: Sequence[float], regions) -> Optional[Dict[str, Any]]:
    """
    Find the US state feature containing a point.

    Args:
        point: [longitude, latitude]
        regions: Region provider exposing get_polygon_set(name)

    Returns:
        GeoJSON feature of the state, or None
    """
    states = regions.get_polygon_set(STATES_DATASET)
    for feature in _polygon_features(states):
        if not _is_us_feature(feature):
            continue
        if point_in_geometry(point, feature["geometry"]):
            return feature
    return None


def us_landmarks(regions) -> List[Landmark]:
    """
    Centroids of the contiguous US, Alaska and Hawaii.

    Computed from the states dataset; empty if it is unavailable.
    """
    states = regions.get_polygon_set(STATES_DATASET)
    contiguous: List[Sequence[float]] = []
    separate: Dict[str, List[Sequence[float]]] = {name: [] for name in NON_CONTIGUOUS_STATES}

    for feature in _polygon_features(states):
        if not _is_us_feature(feature):
            continue
        name = (feature.get("properties") or {}).get("name")
        vertices = geometry_vertices(feature["geometry"])
        if name in separate:
            separate[name].extend(vertices)
        else:
            contiguous.extend(vertices)

    landmarks = []
    for name, vertices in [(CONTIGUOUS_US, contiguous)] + list(separate.items()):
        if not vertices:
            continue
        longitude = sum(v[0] for v in vertices) / len(vertices)
        latitude = sum(v[1] for v in vertices) / len(vertices)
        landmarks.append(Landmark(name=name, position=(longitude, latitude)))
    return landmarks


def get_closest_landmark_to_point(point: Sequence[float], landmarks: Sequence[Landmark]) -> Optional[LandmarkMatch]:
    """
    Closest landmark to a point and the direction of the point from it.

    Ties keep the earlier landmark.
    """
    closest: Optional[Landmark] = None
    closest_distance = 0.0
    for landmark in landmarks:
        distance = haversine_miles(point, landmark.position)
        if closest is None or distance < closest_distance:
            closest = landmark
            closest_distance = distance

    if closest is None:
        return None

    bearing = initial_bearing(closest.position, point)
    return LandmarkMatch(
        landmark=closest,
        bearing=bearing,
        direction=bearing_to_string(bearing),
        distance_miles=closest_distance,
    )
