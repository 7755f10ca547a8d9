# statusbot/status/posts.py
"""
Post text for new, ended and updated status events.

Sentences are joined with ". " and every message ends with a single
period. Times are rendered in the airport's local zone; when no zone is
known they are rendered in UTC with a " UTC" suffix.
"""

from datetime import datetime
from typing import Any, Dict, FrozenSet, List, Optional

from .models import EventRecord, EventType
from .reasons import ImageHint
from ..geo.regions import (
    get_closest_landmark_to_point,
    get_us_state_that_point_is_in,
    us_landmarks,
)
from ..geo.spherical import centroid
from ..logging import get_status_logger
from ..reference.airports import Airport
from ..text.durations import minutes_to_duration_string
from ..text.grammar import format_number, hashtag, indefinite_article
from ..text.timefmt import render_moment

logger = get_status_logger("posts")

# An en route delay is described relative to an airport when its centroid
# is this close to one.
NEARBY_AIRPORT_MILES = 3

TYPE_PHRASES = {
    EventType.GROUND_STOP: "ground stop",
    EventType.GROUND_DELAY: "ground delay",
    EventType.CLOSURE: "airport closure",
    EventType.AIRSPACE_FLOW: "en route delay",
}


def type_phrase(record: EventRecord) -> str:
    """'ground stop', 'departure delay', 'en route delay', ..."""
    if record.event_type is EventType.ARRIVAL_DEPARTURE_DELAY:
        if record.direction:
            return f"{record.direction.value} delay"
        return "delay"
    return TYPE_PHRASES[record.event_type]


def image_hints(record: EventRecord) -> FrozenSet[ImageHint]:
    """Images that should accompany a post about the record."""
    hints = set(record.reason.image_hints)
    if record.event_type is EventType.AIRSPACE_FLOW and record.geometry:
        hints.add(ImageHint.GEOGRAPHIC_OVERLAY)
    return frozenset(hints)


def _message(sentences: List[str]) -> str:
    return ". ".join(sentences) + "."


def _due_to(record: EventRecord) -> str:
    phrase = record.reason.display_phrase
    return f" due to {phrase}" if phrase else ""


def _range(minimum: int, maximum: int) -> str:
    if minimum == maximum:
        return f"{minimum} minutes"
    return f"{minimum}-{maximum} minutes"


def _change_word(old: int, new: int) -> str:
    return "increased" if new > old else "decreased"


class PostGenerator:
    """
    Renders post text for EventRecords.

    Args:
        airports: AirportDirectory used to resolve airport names, zones
            and en route delay locations
        regions: Region provider exposing get_polygon_set(name)
        now: Fixed reference time; the current time when None
    """

    def __init__(self, airports, regions, now: Optional[datetime] = None):
        self.airports = airports
        self.regions = regions
        self._now = now
        # Derived region data, shared with generators made by with_now()
        self._cache: Dict[str, Any] = {}

    @property
    def now(self) -> Optional[datetime]:
        return self._now

    def with_now(self, now: Optional[datetime]) -> "PostGenerator":
        """Generator sharing this one's collaborators and caches with a different reference time."""
        generator = PostGenerator(self.airports, self.regions, now)
        generator._cache = self._cache
        return generator

    def clear_cache(self) -> None:
        """Forget derived region data, e.g. after the region datasets were refreshed."""
        self._cache.clear()

    # ------------------------------------------------------------------
    # Shared lookups
    # ------------------------------------------------------------------

    def _airport(self, record: EventRecord) -> Optional[Airport]:
        if not record.location_key:
            return None
        return self.airports.lookup_by_local_code(record.location_key)

    @staticmethod
    def _airport_string(airport: Airport, record: EventRecord) -> str:
        return f"{airport.name} (#{record.location_key})"

    def _moment(self, ts: datetime, airport: Optional[Airport], lead: str = "at") -> str:
        zone = airport.timezone() if airport else None
        return render_moment(ts, zone, self._now, lead=lead)

    def _landmark_list(self):
        landmarks = self._cache.get("landmarks")
        if landmarks is None:
            landmarks = us_landmarks(self.regions)
            self._cache["landmarks"] = landmarks
        return landmarks

    def location_phrase(self, record: EventRecord) -> Optional[str]:
        """
        Where an en route delay is.

        Checked in order: an airport near the centroid of the area, the US
        state containing the centroid, the direction from the nearest
        landmark. None when nothing resolves.
        """
        if not record.geometry:
            return None
        center = centroid(record.geometry)
        if center is None:
            return None

        airport = self.airports.find_nearest(center[1], center[0], NEARBY_AIRPORT_MILES)
        if airport:
            preposition = "near" if record.geometry.get("type") == "LineString" else "around"
            return f"{preposition} {airport.name} (#{airport.code})"

        state = get_us_state_that_point_is_in(center, self.regions)
        if state:
            name = (state.get("properties") or {}).get("name")
            if name:
                return f"in the {hashtag(name)} region"

        match = get_closest_landmark_to_point(center, self._landmark_list())
        if match:
            return f"to the {match.direction} of {match.landmark.name}"

        logger.debug("location_unresolved", control_element=record.control_element)
        return None

    # ------------------------------------------------------------------
    # New posts
    # ------------------------------------------------------------------

    def to_new_post(self, record: EventRecord) -> Optional[str]:
        """Announcement text for a newly observed record, or None."""
        if not record.is_valid:
            return None
        if record.event_type is EventType.AIRSPACE_FLOW:
            return self._new_airspace_flow_post(record)

        airport = self._airport(record)
        if not airport:
            return None
        airport_string = self._airport_string(airport, record)
        sentences: List[str] = []

        if record.event_type is EventType.GROUND_STOP:
            sentences.append(
                f"Inbound aircraft to {airport_string} are currently being held at their origin airport{_due_to(record)}"
            )
            if record.timing.end:
                sentences.append(f"Operations are expected to resume {self._moment(record.timing.end, airport)}")
            else:
                sentences.append("It is currently unknown when operations will resume")

        elif record.event_type is EventType.GROUND_DELAY:
            sentences.append(
                f"Inbound aircraft to {airport_string} are currently being delayed at their origin airport{_due_to(record)}"
            )
            sentences.append(self._average_max_sentence(record))

        elif record.event_type is EventType.CLOSURE:
            phrase = type_phrase(record)
            sentences.append(f"{indefinite_article(phrase).capitalize()} {phrase} has been issued for {airport_string}{_due_to(record)}")
            if record.timing.start:
                sentences.append(f"This closure is effective as of {self._moment(record.timing.start, airport, lead='')}")
            if record.timing.end:
                sentences.append(f"The airport is expected to reopen {self._moment(record.timing.end, airport)}")
            else:
                sentences.append("It is currently unknown when the airport will reopen")

        else:
            phrase = type_phrase(record)
            sentences.append(f"{indefinite_article(phrase).capitalize()} {phrase} has been issued for {airport_string}{_due_to(record)}")
            length = record.length
            if length.min is not None and length.max is not None:
                current = f"Current delays are {_range(length.min, length.max)}"
                if length.trend:
                    current += f" and {length.trend.value}"
                sentences.append(current)
            else:
                sentences.append("It is currently unknown how long the delays are")

        return _message(sentences)

    @staticmethod
    def _average_max_sentence(record: EventRecord) -> str:
        average, maximum = record.length.average, record.length.max
        if average and maximum:
            return (
                f"Delays are currently averaging {minutes_to_duration_string(average)} "
                f"and are up to {minutes_to_duration_string(maximum)}"
            )
        if average:
            return f"Delays are currently averaging {minutes_to_duration_string(average)}"
        if maximum:
            return f"Delays are currently up to {minutes_to_duration_string(maximum)}"
        return "It is currently unknown how long the delays are"

    @staticmethod
    def _altitude_sentence(record: EventRecord) -> Optional[str]:
        floor, ceiling = record.altitudes.floor, record.altitudes.ceiling
        if floor and ceiling:
            band = f"between {format_number(floor)} and {format_number(ceiling)} feet"
        elif ceiling:
            band = f"below {format_number(ceiling)} feet"
        elif floor:
            band = f"above {format_number(floor)} feet"
        else:
            return None
        return f"This delay applies to aircraft flying {band}"

    def _new_airspace_flow_post(self, record: EventRecord) -> Optional[str]:
        location = self.location_phrase(record)
        if not location:
            return None

        sentences = [f"An en route delay is currently in effect {location}{_due_to(record)}"]
        altitude = self._altitude_sentence(record)
        if altitude:
            sentences.append(altitude)
        sentences.append(self._average_max_sentence(record))
        return _message(sentences)

    # ------------------------------------------------------------------
    # Ended posts
    # ------------------------------------------------------------------

    def to_ended_post(self, record: EventRecord) -> Optional[str]:
        """Text announcing that a record is no longer in the feed, or None."""
        if not record.is_valid:
            return None

        if record.event_type is EventType.AIRSPACE_FLOW:
            location = self.location_phrase(record)
            if not location:
                return None
            return _message([f"The en route delay {location} is no longer in effect"])

        airport = self._airport(record)
        if not airport:
            return None
        airport_string = self._airport_string(airport, record)

        if record.event_type is EventType.GROUND_STOP:
            return _message([f"Inbound operations to {airport_string} have resumed"])
        if record.event_type is EventType.GROUND_DELAY:
            return _message([f"Inbound aircraft to {airport_string} are no longer being delayed"])
        if record.event_type is EventType.CLOSURE:
            return _message([f"{airport_string} has reopened"])
        return _message([f"The {type_phrase(record)} for {airport_string} is no longer in effect"])

    # ------------------------------------------------------------------
    # Update posts
    # ------------------------------------------------------------------

    def to_update_post(self, previous: EventRecord, current: EventRecord) -> Optional[str]:
        """
        Text describing how an ongoing event changed, or None when there is
        no describable change.

        Checked in order: end time, min/max (with trend), trend alone,
        average/max.
        """
        if previous.comparison_key != current.comparison_key:
            return None
        if not current.is_valid:
            return None

        airport = self._airport(current)
        if not airport:
            return None
        subject = f"The {type_phrase(current)} at {self._airport_string(airport, current)}"

        for check in (self._end_time_update, self._range_update, self._trend_update, self._average_max_update):
            text = check(previous, current, airport, subject)
            if text:
                return text
        return None

    def _end_time_update(self, previous, current, airport, subject) -> Optional[str]:
        old_end, new_end = previous.timing.end, current.timing.end
        if not old_end or not new_end or old_end == new_end:
            return None

        minutes = round(abs((new_end - old_end).total_seconds()) / 60)
        verb = "extended" if new_end > old_end else "reduced"
        moment = self._moment(new_end, airport, lead="")
        return _message([f"{subject} has been {verb} by {minutes_to_duration_string(minutes)} to {moment}"])

    @staticmethod
    def _trend_clause(previous: EventRecord, current: EventRecord) -> str:
        trend = current.length.trend
        if not trend:
            return ""
        adverb = "now" if trend != previous.length.trend else "still"
        return f" and is {adverb} {trend.value}"

    def _range_update(self, previous, current, airport, subject) -> Optional[str]:
        old, new = previous.length, current.length
        if None in (old.min, old.max, new.min, new.max):
            return None
        min_changed = old.min != new.min
        max_changed = old.max != new.max
        if not min_changed and not max_changed:
            return None

        if min_changed and max_changed:
            if new.min > old.min and new.max > old.max:
                verb = "increased"
            elif new.min < old.min and new.max < old.max:
                verb = "decreased"
            else:
                verb = "changed"
            return _message([f"{subject} has {verb} to {_range(new.min, new.max)}{self._trend_clause(previous, current)}"])

        if min_changed:
            sentences = [
                f"{subject} now has a minimum delay of {new.min} minutes",
                f"The maximum delay remains at {new.max} minutes",
            ]
            if new.trend:
                adverb = "now" if new.trend != old.trend else "still"
                sentences.append(f"The predicted trend is {adverb} {new.trend.value}")
            return _message(sentences)

        return _message([f"{subject} has changed to {_range(new.min, new.max)}{self._trend_clause(previous, current)}"])

    def _trend_update(self, previous, current, airport, subject) -> Optional[str]:
        old, new = previous.length, current.length
        if not new.trend or old.trend == new.trend:
            return None
        text = f"{subject} is now {new.trend.value}"
        if new.min is not None and new.max is not None:
            text += f" with delays remaining at {_range(new.min, new.max)}"
        return _message([text])

    def _average_max_update(self, previous, current, airport, subject) -> Optional[str]:
        old, new = previous.length, current.length
        average_changed = bool(old.average and new.average and old.average != new.average)
        max_changed = bool(old.max and new.max and old.max != new.max)
        phrase = type_phrase(current)
        airport_string = self._airport_string(airport, current)

        if average_changed and max_changed:
            average = minutes_to_duration_string(new.average)
            maximum = minutes_to_duration_string(new.max)
            average_verb = _change_word(old.average, new.average)
            if average_verb == _change_word(old.max, new.max):
                return _message([
                    f"{subject} has {average_verb} and now has an average delay of {average} and a maximum delay of {maximum}"
                ])
            return _message([f"{subject} now has an average delay of {average} and a maximum delay of {maximum}"])

        if max_changed:
            return _message([
                f"The maximum {phrase} at {airport_string} has {_change_word(old.max, new.max)} "
                f"to {minutes_to_duration_string(new.max)}"
            ])

        if average_changed:
            return _message([
                f"The average {phrase} at {airport_string} has {_change_word(old.average, new.average)} "
                f"to {minutes_to_duration_string(new.average)}"
            ])

        return None

