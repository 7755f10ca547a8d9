# Status module - event records, reason classification, post text and change detection
from .reasons import ReasonCategory, ReasonCode, ImageHint, classify
from .models import (
    EventRecord,
    EventType,
    Direction,
    Trend,
    Timing,
    DelayLength,
    AltitudeBand,
)
from .parser import DetailsObjectMissingError, parse_event, parse_events
from .posts import PostGenerator, image_hints, type_phrase
from .changes import ChangeSet, diff

__all__ = [
    "ReasonCategory",
    "ReasonCode",
    "ImageHint",
    "classify",
    "EventRecord",
    "EventType",
    "Direction",
    "Trend",
    "Timing",
    "DelayLength",
    "AltitudeBand",
    "DetailsObjectMissingError",
    "parse_event",
    "parse_events",
    "PostGenerator",
    "image_hints",
    "type_phrase",
    "ChangeSet",
    "diff",
]
