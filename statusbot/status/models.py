# statusbot/status/models.py
"""
Status event model.

One EventRecord per airport/program entry in the FAA feed. Records are
rebuilt from the feed every poll; identity across polls is the
comparison key (location, type, direction), never the reason or the size
of the delay.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .reasons import ReasonCode, classify


class EventType(str, Enum):
    """Kind of status entry. Values are the feed's Delay_type names."""
    GROUND_STOP = "Ground Stop Programs"
    GROUND_DELAY = "Ground Delay Programs"
    CLOSURE = "Airport Closures"
    ARRIVAL_DEPARTURE_DELAY = "General Arrival/Departure Delay Info"
    AIRSPACE_FLOW = "Airspace Flow Programs"

    @classmethod
    def from_name(cls, name: Any) -> Optional["EventType"]:
        for event_type in cls:
            if event_type.value == name:
                return event_type
        return None


class Direction(str, Enum):
    ARRIVAL = "arrival"
    DEPARTURE = "departure"

    @classmethod
    def from_feed(cls, value: Any) -> Optional["Direction"]:
        """'Arrival' / 'Departure' attribute values; anything else is None."""
        if value == "Arrival":
            return cls.ARRIVAL
        if value == "Departure":
            return cls.DEPARTURE
        return None


class Trend(str, Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"

    @classmethod
    def from_feed(cls, value: Any) -> Optional["Trend"]:
        if not isinstance(value, str):
            return None
        lowered = value.strip().lower()
        for trend in cls:
            if trend.value == lowered:
                return trend
        return None


@dataclass(frozen=True)
class Timing:
    start: Optional[datetime] = None
    end: Optional[datetime] = None


@dataclass(frozen=True)
class DelayLength:
    """Delay magnitudes in minutes."""
    min: Optional[int] = None
    max: Optional[int] = None
    average: Optional[int] = None
    trend: Optional[Trend] = None


@dataclass(frozen=True)
class AltitudeBand:
    """Altitudes in feet."""
    floor: Optional[int] = None
    ceiling: Optional[int] = None


# "!LAS 12/345 LAS AD AP CLSD 2412131800-2412132359"
CLOSURE_NOTICE_PATTERN = re.compile(
    r"^!(?P<zone>[A-Z0-9]{3,4}) (?P<number>[0-9]{2}/[0-9]{3,4}) (?P<ident>[A-Z0-9]{3,4}) "
    r"AD AP CLSD (?P<start>[0-9]{10})-(?P<end>[0-9]{10})$"
)

ComparisonKey = Tuple[Optional[str], EventType, Optional[Direction]]


@dataclass
class EventRecord:
    """A single status entry."""
    location_key: Optional[str]
    event_type: EventType
    reason: ReasonCode = field(default_factory=lambda: classify(""))
    direction: Optional[Direction] = None
    timing: Timing = field(default_factory=Timing)
    length: DelayLength = field(default_factory=DelayLength)
    altitudes: AltitudeBand = field(default_factory=AltitudeBand)
    geometry: Optional[Dict[str, Any]] = None
    auxiliary: Dict[str, Any] = field(default_factory=dict)

    @property
    def control_element(self) -> Optional[str]:
        return self.auxiliary.get("controlElement")

    @property
    def comparison_key(self) -> ComparisonKey:
        return (self.location_key or self.control_element, self.event_type, self.direction)

    @property
    def comparison_hash(self) -> str:
        """comparison_key as a stable string, e.g. "AAA|GROUND_STOP|"."""
        location, event_type, direction = self.comparison_key
        return "|".join([location or "", event_type.name, direction.value if direction else ""])

    @property
    def is_valid(self) -> bool:
        """Closures must carry a well-formed closure notice."""
        if self.event_type is EventType.CLOSURE:
            return CLOSURE_NOTICE_PATTERN.match(self.reason.original.strip()) is not None
        return True

    @property
    def is_beta(self) -> bool:
        return (
            not self.location_key
            or self.event_type in (EventType.AIRSPACE_FLOW, EventType.CLOSURE)
        )
