# Text module - duration phrases, time rendering and grammar helpers
from .durations import parse_duration_string, minutes_to_duration_string
from .timefmt import (
    parse_end_time,
    parse_feed_timestamp,
    render_clock,
    render_moment,
    relative_day_qualifier,
    zone_for_abbreviation,
)
from .grammar import starts_with_vowel, indefinite_article, format_number, hashtag

__all__ = [
    "parse_duration_string",
    "minutes_to_duration_string",
    "parse_end_time",
    "parse_feed_timestamp",
    "render_clock",
    "render_moment",
    "relative_day_qualifier",
    "zone_for_abbreviation",
    "starts_with_vowel",
    "indefinite_article",
    "format_number",
    "hashtag",
]
