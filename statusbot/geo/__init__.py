# Geo module - spherical math and region lookups for en route delays
from .spherical import (
    haversine_miles,
    initial_bearing,
    destination_point,
    circle_polygon,
    centroid,
    bearing_to_string,
    point_in_geometry,
)
from .regions import (
    Landmark,
    LandmarkMatch,
    STATES_DATASET,
    COUNTRIES_DATASET,
    get_us_state_that_point_is_in,
    get_closest_landmark_to_point,
    us_landmarks,
)

__all__ = [
    "haversine_miles",
    "initial_bearing",
    "destination_point",
    "circle_polygon",
    "centroid",
    "bearing_to_string",
    "point_in_geometry",
    "Landmark",
    "LandmarkMatch",
    "STATES_DATASET",
    "COUNTRIES_DATASET",
    "get_us_state_that_point_is_in",
    "get_closest_landmark_to_point",
    "us_landmarks",
]
