# statusbot/geo/spherical.py
"""
Spherical geometry on GeoJSON-style data.

Positions follow GeoJSON order: [longitude, latitude]. Distances are in
statute miles, bearings in degrees clockwise from north.
"""

import math
from typing import Any, Dict, List, Optional, Sequence, Tuple

EARTH_RADIUS_MILES = 3958.7613

Position = Tuple[float, float]  # (longitude, latitude)

COMPASS_POINTS = [
    "north",
    "northeast",
    "east",
    "southeast",
    "south",
    "southwest",
    "west",
    "northwest",
]
SIMPLE_COMPASS_POINTS = ["north", "east", "south", "west"]


def haversine_miles(a: Sequence[float], b: Sequence[float]) -> float:
    """Great circle distance in miles between two [long, lat] positions."""
    lon1, lat1 = a[0], a[1]
    lon2, lat2 = b[0], b[1]

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)

    h = (
        math.sin(delta_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2
    )
    return EARTH_RADIUS_MILES * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def initial_bearing(start: Sequence[float], end: Sequence[float]) -> float:
    """Initial great circle bearing from start to end, in (-180, 180]."""
    lon1, lat1 = math.radians(start[0]), math.radians(start[1])
    lon2, lat2 = math.radians(end[0]), math.radians(end[1])

    x = math.sin(lon2 - lon1) * math.cos(lat2)
    y = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(lon2 - lon1)
    return math.degrees(math.atan2(x, y))


def destination_point(origin: Sequence[float], distance_miles: float, bearing: float) -> Position:
    """Position reached travelling distance_miles from origin along bearing."""
    lon1, lat1 = math.radians(origin[0]), math.radians(origin[1])
    angular = distance_miles / EARTH_RADIUS_MILES
    theta = math.radians(bearing)

    lat2 = math.asin(
        math.sin(lat1) * math.cos(angular)
        + math.cos(lat1) * math.sin(angular) * math.cos(theta)
    )
    lon2 = lon1 + math.atan2(
        math.sin(theta) * math.sin(angular) * math.cos(lat1),
        math.cos(angular) - math.sin(lat1) * math.sin(lat2),
    )
    return (math.degrees(lon2), math.degrees(lat2))


def circle_polygon(center: Sequence[float], radius_miles: float, steps: int = 64) -> Dict[str, Any]:
    """Closed Polygon approximating a circle of radius_miles around center."""
    ring = [
        list(destination_point(center, radius_miles, i * -360.0 / steps))
        for i in range(steps)
    ]
    ring.append(list(ring[0]))
    return {"type": "Polygon", "coordinates": [ring]}


def geometry_vertices(geometry: Dict[str, Any]) -> List[Sequence[float]]:
    """All vertices of a geometry, without the repeated closing vertex of rings."""
    geometry_type = geometry.get("type")
    coordinates = geometry.get("coordinates") or []

    if geometry_type == "Point":
        return [coordinates]
    if geometry_type in ("LineString", "MultiPoint"):
        return list(coordinates)

    if geometry_type == "Polygon":
        rings = coordinates
    elif geometry_type == "MultiPolygon":
        rings = [ring for polygon in coordinates for ring in polygon]
    elif geometry_type == "MultiLineString":
        return [position for line in coordinates for position in line]
    else:
        return []

    vertices: List[Sequence[float]] = []
    for ring in rings:
        if len(ring) > 1 and list(ring[0]) == list(ring[-1]):
            ring = ring[:-1]
        vertices.extend(ring)
    return vertices


def centroid(geometry: Dict[str, Any]) -> Optional[Position]:
    """Mean of a geometry's vertices, or None for an empty geometry."""
    vertices = geometry_vertices(geometry)
    if not vertices:
        return None
    longitude = sum(v[0] for v in vertices) / len(vertices)
    latitude = sum(v[1] for v in vertices) / len(vertices)
    return (longitude, latitude)


def bearing_to_string(bearing: float, simple: bool = False) -> str:
    """
    Compass direction for a bearing.

    Args:
        bearing: Degrees, any real value (normalized into [0, 360))
        simple: Use four directions instead of eight

    Returns:
        "north", "northeast", ... ("north", "east", "south", "west" if simple)
    """
    normalized = bearing % 360
    if simple:
        return SIMPLE_COMPASS_POINTS[int(((normalized + 45) % 360) // 90)]
    return COMPASS_POINTS[int(((normalized + 22.5) % 360) // 45)]


def _point_in_ring(point: Sequence[float], ring: Sequence[Sequence[float]]) -> bool:
    x, y = point[0], point[1]
    inside = False
    count = len(ring)
    j = count - 1
    for i in range(count):
        xi, yi = ring[i][0], ring[i][1]
        xj, yj = ring[j][0], ring[j][1]
        if (yi > y) != (yj > y):
            crossing = (xj - xi) * (y - yi) / (yj - yi) + xi
            if x < crossing:
                inside = not inside
        j = i
    return inside


def _point_in_polygon(point: Sequence[float], rings: Sequence[Sequence[Sequence[float]]]) -> bool:
    if not rings or not _point_in_ring(point, rings[0]):
        return False
    return not any(_point_in_ring(point, hole) for hole in rings[1:])


def point_in_geometry(point: Sequence[float], geometry: Optional[Dict[str, Any]]) -> bool:
    """True if point lies inside a Polygon or MultiPolygon (holes excluded)."""
    if not geometry:
        return False
    geometry_type = geometry.get("type")
    coordinates = geometry.get("coordinates") or []
    if geometry_type == "Polygon":
        return _point_in_polygon(point, coordinates)
    if geometry_type == "MultiPolygon":
        return any(_point_in_polygon(point, polygon) for polygon in coordinates)
    return False
