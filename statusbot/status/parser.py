# statusbot/status/parser.py
"""
Delay_type entry -> EventRecord conversion.

Each Delay_type entry of the FAA feed names its category and carries
its details object (or a list of them) at a category-specific path.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from .models import (
    AltitudeBand,
    DelayLength,
    Direction,
    EventRecord,
    EventType,
    Timing,
    Trend,
)
from .reasons import classify
from ..geo.spherical import circle_polygon
from ..logging import get_status_logger
from ..text.durations import parse_duration_string
from ..text.timefmt import parse_end_time, parse_feed_timestamp

logger = get_status_logger("parser")

DETAILS_OBJECT_PATHS: Dict[EventType, str] = {
    EventType.GROUND_STOP: "Ground_Stop_List.Program",
    EventType.GROUND_DELAY: "Ground_Delay_List.Ground_Delay",
    EventType.CLOSURE: "Airport_Closure_List.Airport",
    EventType.ARRIVAL_DEPARTURE_DELAY: "Arrival_Departure_Delay_List.Delay",
    EventType.AIRSPACE_FLOW: "Airspace_Flow_List.Airspace_Flow",
}

# Floor/Ceiling are reported in hundreds of feet (flight levels).
ALTITUDE_UNIT_FEET = 100


class DetailsObjectMissingError(ValueError):
    """A known Delay_type entry has nothing at its details path."""

    def __init__(self, event_type: EventType, path: str):
        self.event_type = event_type
        self.path = path
        super().__init__(f"{event_type.value} entry has no details object at {path}")


def _get_path(obj: Any, path: str) -> Any:
    for key in path.split("."):
        if not isinstance(obj, dict):
            return None
        obj = obj.get(key)
    return obj


def _to_float(value: Any) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _altitude(value: Any) -> Optional[int]:
    number = _to_float(value)
    if number is None:
        return None
    return int(number * ALTITUDE_UNIT_FEET)


def _position(point: Any) -> Optional[List[float]]:
    """{"@_Lat": ..., "@_Long": ...} -> [longitude, latitude]"""
    if not isinstance(point, dict):
        return None
    latitude = _to_float(point.get("@_Lat"))
    longitude = _to_float(point.get("@_Long"))
    if latitude is None or longitude is None:
        return None
    return [longitude, latitude]


def _parse_geometry(details: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    line = details.get("Line")
    if isinstance(line, dict):
        points = line.get("Point")
        if isinstance(points, dict):
            points = [points]
        coordinates = [p for p in (_position(point) for point in points or []) if p]
        if coordinates:
            return {"type": "LineString", "coordinates": coordinates}

    circle = details.get("Circle")
    if isinstance(circle, dict):
        center = _position(circle.get("Center"))
        radius = _to_float(circle.get("@_Radius"))
        if center and radius:
            return circle_polygon(center, radius)

    return None


def _parse_timing(details: Dict[str, Any], now: Optional[datetime]) -> Timing:
    start = parse_feed_timestamp(details.get("Start"), now)
    if details.get("Reopen"):
        end = parse_feed_timestamp(details.get("Reopen"), now)
    else:
        end = parse_end_time(details.get("End_Time"), now)
    return Timing(start=start, end=end)


def _parse_length(details: Dict[str, Any]) -> DelayLength:
    minimum = maximum = average = None
    trend = None

    arrival_departure = details.get("Arrival_Departure")
    if isinstance(arrival_departure, dict):
        minimum = parse_duration_string(arrival_departure.get("Min"))
        maximum = parse_duration_string(arrival_departure.get("Max"))
        trend = Trend.from_feed(arrival_departure.get("Trend"))

    if details.get("Avg"):
        average = parse_duration_string(details.get("Avg"))
    if details.get("Max"):
        maximum = parse_duration_string(details.get("Max"))

    return DelayLength(min=minimum, max=maximum, average=average, trend=trend)


def _parse_details(event_type: EventType, details: Dict[str, Any], now: Optional[datetime]) -> EventRecord:
    direction = None
    arrival_departure = details.get("Arrival_Departure")
    if event_type is EventType.ARRIVAL_DEPARTURE_DELAY and isinstance(arrival_departure, dict):
        direction = Direction.from_feed(arrival_departure.get("@_Type"))

    record = EventRecord(
        location_key=details.get("ARPT") or None,
        event_type=event_type,
        reason=classify(details.get("Reason")),
        direction=direction,
        timing=_parse_timing(details, now),
        length=_parse_length(details),
    )

    if event_type is EventType.AIRSPACE_FLOW:
        record.altitudes = AltitudeBand(
            floor=_altitude(details.get("Floor")),
            ceiling=_altitude(details.get("Ceiling")),
        )
        record.geometry = _parse_geometry(details)
        if details.get("CTL_Element"):
            record.auxiliary["controlElement"] = details["CTL_Element"]

    return record


def parse_event(
    raw: Dict[str, Any],
    now: Optional[datetime] = None,
) -> Union[EventRecord, List[EventRecord], None]:
    """
    Parse one Delay_type entry.

    Args:
        raw: Delay_type entry as produced by xml_to_tree
        now: Reference time for timestamps that omit the year or date

    Returns:
        EventRecord, a list of them when the entry holds several details
        objects, or None for unrecognized categories

    Raises:
        DetailsObjectMissingError: Known category with no details object
    """
    event_type = EventType.from_name(raw.get("Name") if isinstance(raw, dict) else None)
    if event_type is None:
        if isinstance(raw, dict) and raw.get("Name"):
            logger.info("unknown_delay_type", type_name=raw.get("Name"))
        return None

    path = DETAILS_OBJECT_PATHS[event_type]
    details = _get_path(raw, path)

    if isinstance(details, list):
        return [
            _parse_details(event_type, item, now)
            for item in details
            if isinstance(item, dict)
        ]
    if not isinstance(details, dict):
        raise DetailsObjectMissingError(event_type, path)

    return _parse_details(event_type, details, now)


def parse_events(entries: List[Dict[str, Any]], now: Optional[datetime] = None) -> List[EventRecord]:
    """
    Parse every Delay_type entry into a flat list.

    Entries that fail to parse are logged and skipped.
    """
    records: List[EventRecord] = []
    for entry in entries:
        try:
            parsed = parse_event(entry, now)
        except DetailsObjectMissingError as e:
            logger.warning("details_object_missing", type_name=e.event_type.value, path=e.path)
            continue

        if parsed is None:
            continue
        if isinstance(parsed, list):
            records.extend(parsed)
        else:
            records.append(parsed)

    logger.debug("events_parsed", entries=len(entries), records=len(records))
    return records
